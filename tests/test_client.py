from collections.abc import Callable

import httpx
import pytest
from bug_tracker.api.routes.bugs import get_bug_service
from bug_tracker.client import BugTrackerApiError, BugTrackerClient, BugTrackerResponseError
from bug_tracker.main import app
from fastapi.testclient import TestClient
from tests.test_bug_api import KNOWN_ID, _FakeBugService


def _client_for(handler: Callable[[httpx.Request], httpx.Response]) -> BugTrackerClient:
    transport = httpx.MockTransport(handler)
    http_client = httpx.Client(transport=transport, base_url="http://bugs.test/api")
    return BugTrackerClient(http_client=http_client)


def test_get_bugs_accepts_page_object() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/bugs"
        assert request.url.params["status"] == "Open"
        return httpx.Response(200, json={"bugs": [{"title": "a"}], "total": 1})

    bugs = _client_for(handler).get_bugs(status="Open", severity=None)
    assert bugs == [{"title": "a"}]


def test_get_bugs_accepts_bare_array() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"title": "a"}, {"title": "b"}])

    assert len(_client_for(handler).get_bugs()) == 2


def test_get_bugs_rejects_unknown_shape() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"items": []})

    with pytest.raises(BugTrackerResponseError, match="getBugs is invalid"):
        _client_for(handler).get_bugs()


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"message": "Bug not found"}, "Bug not found"),
        ({"success": False, "error": "Server Error"}, "Server Error"),
        ({"unexpected": True}, "Not Found"),
    ],
)
def test_error_message_extraction(body: dict[str, object], expected: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json=body)

    with pytest.raises(BugTrackerApiError) as exc:
        _client_for(handler).get_bug("abc")
    assert exc.value.status_code == 404
    assert exc.value.message == expected


def test_transport_failure_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BugTrackerApiError) as exc:
        _client_for(handler).health()
    assert exc.value.status_code == 0


def test_client_round_trip_against_app() -> None:
    service = _FakeBugService()
    app.dependency_overrides[get_bug_service] = lambda: service

    with TestClient(app, base_url="http://testserver/api") as http_client:
        with BugTrackerClient(http_client=http_client) as bug_client:
            created = bug_client.create_bug(
                {"title": "From client", "description": "d", "reportedBy": "qa"}
            )
            assert created["title"] == "From client"

            page = bug_client.list_bugs(page=1, limit=10)
            assert page["total"] == 1
            assert bug_client.get_bugs()[0]["title"] == "From client"

            updated = bug_client.update_bug(
                KNOWN_ID,
                {"title": "Renamed", "description": "d", "reportedBy": "qa"},
            )
            assert updated["title"] == "Renamed"

            deleted = bug_client.delete_bug(KNOWN_ID)
            assert deleted == {"message": "Bug deleted successfully"}

            with pytest.raises(BugTrackerApiError) as exc:
                bug_client.get_bug("0b6f8a52-0000-4d5e-a0f4-2f0b7e1c9a11")
            assert exc.value.status_code == 404
            assert exc.value.message == "Bug not found"

    app.dependency_overrides.clear()
