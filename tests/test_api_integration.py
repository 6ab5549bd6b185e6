import os
from collections.abc import Iterator

import pytest
from bug_tracker.main import app
from fastapi.testclient import TestClient
from tests.helpers.db_env import isolated_database


@pytest.fixture(scope="module")
def integration_client() -> Iterator[TestClient]:
    base_url = os.getenv("TEST_DATABASE_URL")
    if not base_url:
        pytest.skip("Set TEST_DATABASE_URL to run integration tests.")

    with isolated_database(base_url, schema_prefix="bug_tracker_api_test"):
        with TestClient(app) as client:
            yield client


def test_bug_end_to_end_flow(integration_client: TestClient) -> None:
    created = integration_client.post(
        "/api/bugs",
        json={
            "title": "Search returns stale results",
            "description": "Results do not refresh after editing",
            "reportedBy": "hank",
            "tags": ["search"],
        },
    )
    assert created.status_code == 201
    bug = created.json()
    bug_id = bug["id"]
    assert bug["severity"] == "Medium"
    assert bug["status"] == "Open"
    assert bug["priority"] == "Medium"
    assert bug["assignedTo"] == "Unassigned"

    for index in range(11):
        response = integration_client.post(
            "/api/bugs",
            json={
                "title": f"Filler {index}",
                "description": "filler",
                "reportedBy": "bot",
                "status": "Closed" if index % 2 else "Open",
            },
        )
        assert response.status_code == 201

    first_page = integration_client.get("/api/bugs?page=1&limit=10")
    assert first_page.status_code == 200
    page = first_page.json()
    assert page["total"] == 12
    assert page["totalPages"] == 2
    assert page["currentPage"] == 1
    assert len(page["bugs"]) == 10
    assert page["bugs"][0]["title"] == "Filler 10"

    second_page = integration_client.get("/api/bugs?page=2&limit=10")
    assert len(second_page.json()["bugs"]) == 2

    closed = integration_client.get("/api/bugs?status=Closed&limit=50")
    assert closed.json()["total"] == 5
    assert {item["status"] for item in closed.json()["bugs"]} == {"Closed"}

    loaded = integration_client.get(f"/api/bugs/{bug_id}")
    assert loaded.status_code == 200
    assert loaded.json()["tags"] == ["search"]

    updated = integration_client.put(
        f"/api/bugs/{bug_id}",
        json={
            "title": "Search returns stale results after edit",
            "description": "Results do not refresh after editing",
            "reportedBy": "hank",
            "status": "Resolved",
            "assignedTo": "ivy",
        },
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "Resolved"
    assert updated.json()["tags"] == ["search"]

    reloaded = integration_client.get(f"/api/bugs/{bug_id}").json()
    assert reloaded["title"] == "Search returns stale results after edit"
    assert reloaded["assignedTo"] == "ivy"

    invalid_priority = integration_client.put(
        f"/api/bugs/{bug_id}",
        json={"title": "t", "description": "d", "reportedBy": "r", "priority": "Someday"},
    )
    assert invalid_priority.status_code == 400

    malformed = integration_client.get("/api/bugs/not-an-id")
    assert malformed.status_code == 400
    assert malformed.json()["message"] == "Invalid bug ID"

    removed = integration_client.delete(f"/api/bugs/{bug_id}")
    assert removed.status_code == 200
    assert removed.json() == {"message": "Bug deleted successfully"}

    not_found = integration_client.get(f"/api/bugs/{bug_id}")
    assert not_found.status_code == 404
    assert not_found.json()["code"] == "BUG_NOT_FOUND"

    health = integration_client.get("/api/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"
