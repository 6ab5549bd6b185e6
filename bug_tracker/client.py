"""HTTP client for the bug tracker API.

Mirrors the calls the browser front end makes: list, fetch, create, update
and delete bugs, plus the health check.
"""

import logging
from typing import Any

import httpx

from bug_tracker.core.config import get_settings

logger = logging.getLogger(__name__)


class BugTrackerApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class BugTrackerResponseError(BugTrackerApiError):
    """The server answered, but not in a shape the client understands."""

    def __init__(self, message: str) -> None:
        super().__init__(status_code=200, message=message)


class BugTrackerClient:
    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=base_url or get_settings().api_base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )

    def __enter__(self) -> "BugTrackerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def list_bugs(self, **filters: Any) -> dict[str, Any]:
        params = {key: value for key, value in filters.items() if value is not None}
        return self._request("GET", "/bugs", params=params)

    def get_bugs(self, **filters: Any) -> list[dict[str, Any]]:
        """Return the bugs of one page, accepting either a bare array or a page object."""
        payload = self.list_bugs(**filters)
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("bugs"), list):
            return payload["bugs"]
        raise BugTrackerResponseError("API response format for getBugs is invalid")

    def get_bug(self, bug_id: str) -> dict[str, Any]:
        return self._request("GET", f"/bugs/{bug_id}")

    def create_bug(self, bug_data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/bugs", json=bug_data)

    def update_bug(self, bug_id: str, bug_data: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/bugs/{bug_id}", json=bug_data)

    def delete_bug(self, bug_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/bugs/{bug_id}")

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        # Paths stay relative so they resolve under the base URL's /api prefix.
        try:
            response = self._client.request(method, path.lstrip("/"), **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise BugTrackerApiError(status_code=0, message=str(exc)) from exc

        if response.is_error:
            raise BugTrackerApiError(
                status_code=response.status_code,
                message=_error_message(response),
            )
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "error"):
            if isinstance(body.get(key), str):
                return body[key]
    return response.reason_phrase
