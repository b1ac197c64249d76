"""Project, task and stats API tests.

Learn: A FakeConnection is attached to the app's broadcaster so every test
can see exactly which broadcasts its requests triggered. Each attached
connection starts with ["info", "stats"] from the greeting.
"""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from fakes import FakeConnection

GREETING = ["info", "stats"]


@pytest.fixture
async def watcher(broadcaster):
    conn = FakeConnection("watcher")
    await broadcaster.attach(conn)
    return conn


@pytest.fixture
async def project(client):
    r = await client.post(
        "/api/v1/projects", json={"title": "Website", "description": "Relaunch"}
    )
    return r.json()


# ═══════════════════════════════════════════════════════════
# Projects
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_project(client, watcher):
    r = await client.post(
        "/api/v1/projects", json={"title": "Website", "description": "Relaunch"}
    )
    assert r.status_code == 201
    body = r.json()
    assert body["title"] == "Website"
    assert body["description"] == "Relaunch"
    assert body["progress"] == 0
    uuid.UUID(body["id"])

    assert watcher.kinds == GREETING + ["stats"]
    assert watcher.snapshots[-1]["projects"][0]["name"] == "Website"


@pytest.mark.asyncio
async def test_create_project_accepts_name_alias(client):
    r = await client.post("/api/v1/projects", json={"name": "Legacy form"})
    assert r.status_code == 201
    assert r.json()["title"] == "Legacy form"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}, {"description": "x"}])
async def test_create_project_requires_title(client, watcher, body):
    r = await client.post("/api/v1/projects", json=body)
    assert r.status_code == 422
    assert watcher.kinds == GREETING


@pytest.mark.asyncio
async def test_list_projects(client, project):
    r = await client.get("/api/v1/projects")
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == [project["id"]]


@pytest.mark.asyncio
async def test_get_project_with_tasks(client, project):
    await client.post(f"/api/v1/projects/{project['id']}/tasks", json={"title": "t1"})
    await client.post(f"/api/v1/projects/{project['id']}/tasks", json={"title": "t2"})

    r = await client.get(f"/api/v1/projects/{project['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["title"] == "Website"
    assert sorted(t["title"] for t in body["tasks"]) == ["t1", "t2"]


@pytest.mark.asyncio
async def test_get_missing_project(client):
    r = await client.get(f"/api/v1/projects/{uuid.uuid4()}")
    assert r.status_code == 404


# ═══════════════════════════════════════════════════════════
# Tasks
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_task(client, project, watcher):
    r = await client.post(
        f"/api/v1/projects/{project['id']}/tasks", json={"title": "Write copy"}
    )
    assert r.status_code == 201
    task = r.json()
    assert task["title"] == "Write copy"
    assert task["completed"] is False
    assert task["project_id"] == project["id"]

    assert watcher.kinds == GREETING + ["stats"]
    assert watcher.snapshots[-1]["totalTasks"] == 1


@pytest.mark.asyncio
async def test_create_task_for_missing_project(client, watcher):
    r = await client.post(
        f"/api/v1/projects/{uuid.uuid4()}/tasks", json={"title": "Orphan"}
    )
    assert r.status_code == 404
    assert watcher.kinds == GREETING


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}])
async def test_create_task_requires_title(client, project, watcher, body):
    r = await client.post(f"/api/v1/projects/{project['id']}/tasks", json=body)
    assert r.status_code == 422
    assert watcher.kinds == GREETING


@pytest.mark.asyncio
async def test_toggle_task(client, project, watcher):
    r = await client.post(f"/api/v1/projects/{project['id']}/tasks", json={"title": "t1"})
    task_id = r.json()["id"]

    r = await client.post(f"/api/v1/tasks/{task_id}/toggle")
    assert r.status_code == 200
    assert r.json()["completed"] is True

    r = await client.post(f"/api/v1/tasks/{task_id}/toggle")
    assert r.json()["completed"] is False

    assert [s["overallCompletion"] for s in watcher.snapshots[1:]] == [0, 100, 0]


@pytest.mark.asyncio
async def test_toggle_missing_task(client, watcher):
    r = await client.post(f"/api/v1/tasks/{uuid.uuid4()}/toggle")
    assert r.status_code == 404
    assert watcher.kinds == GREETING


@pytest.mark.asyncio
async def test_list_tasks(client, project):
    await client.post(f"/api/v1/projects/{project['id']}/tasks", json={"title": "t1"})
    r = await client.get("/api/v1/tasks")
    assert r.status_code == 200
    assert [t["title"] for t in r.json()] == ["t1"]


# ═══════════════════════════════════════════════════════════
# Stats
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_stats_empty(client):
    r = await client.get("/api/v1/stats")
    assert r.status_code == 200
    assert r.json() == {
        "totalProjects": 0,
        "totalTasks": 0,
        "overallCompletion": 0,
        "projects": [],
    }


@pytest.mark.asyncio
async def test_stats_scenario(client, watcher):
    """Create A → add t1 → complete t1; the watcher sees all three states in order."""
    r = await client.post("/api/v1/projects", json={"title": "A"})
    project_id = r.json()["id"]
    r = await client.post(f"/api/v1/projects/{project_id}/tasks", json={"title": "t1"})
    task_id = r.json()["id"]
    await client.post(f"/api/v1/tasks/{task_id}/toggle")

    r = await client.get("/api/v1/stats")
    assert r.json() == {
        "totalProjects": 1,
        "totalTasks": 1,
        "overallCompletion": 100,
        "projects": [
            {"id": project_id, "name": "A", "description": None, "progress": 0}
        ],
    }

    states = [
        (s["totalProjects"], s["totalTasks"], s["overallCompletion"])
        for s in watcher.snapshots[1:]
    ]
    assert states == [(1, 0, 0), (1, 1, 0), (1, 1, 100)]


@pytest.mark.asyncio
async def test_broken_connection_does_not_fail_the_write(client, broadcaster, watcher):
    broken = FakeConnection("broken")
    await broadcaster.attach(broken)
    broken.fail = True

    r = await client.post("/api/v1/projects", json={"title": "A"})
    assert r.status_code == 201
    assert broken not in broadcaster.registry
    assert watcher.kinds == GREETING + ["stats"]


# ═══════════════════════════════════════════════════════════
# Repository failures
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_repository_failure_returns_500_without_broadcast(
    app, client, watcher, monkeypatch
):
    async def fail(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("database is down"))

    monkeypatch.setattr(app.state.repository, "create_project", fail)

    r = await client.post("/api/v1/projects", json={"title": "A"})
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert watcher.kinds == GREETING

    # The app keeps serving
    r = await client.get("/api/v1/projects")
    assert r.status_code == 200
