"""
Task tests. Every check is made against the task's project.
"""

import uuid

from sqlalchemy import func, select

from conftest import activity_for, add_member, create_comment, create_project, create_task, register
from taskboard.core.config import settings
from taskboard.models.comment import Comment


async def project_with_member(client):
    owner = await register(client, "owner")
    member = await register(client, "member")
    project = await create_project(client, owner)
    await add_member(client, owner, project["id"], member)
    return owner, member, project


# ---------------------------------------------------------------------------
# Create / Read
# ---------------------------------------------------------------------------

async def test_member_creates_task_with_defaults(client):
    owner, member, project = await project_with_member(client)
    task = await create_task(client, member, project["id"], "Ship it", tags=["release"])

    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["tags"] == ["release"]
    assert task["createdBy"]["id"] == member["id"]
    assert task["project"]["id"] == project["id"]
    assert task["assignedTo"] is None


async def test_outsider_cannot_create_task(client):
    owner = await register(client, "owner")
    outsider = await register(client, "outsider")
    project = await create_project(client, owner)

    resp = await client.post(
        "/api/tasks",
        json={"title": "Sneaky", "project": project["id"]},
        headers=outsider["headers"],
    )
    assert resp.status_code == 403


async def test_create_in_unknown_project_is_not_found(client):
    owner = await register(client, "owner")
    resp = await client.post(
        "/api/tasks",
        json={"title": "Orphan", "project": str(uuid.uuid4())},
        headers=owner["headers"],
    )
    assert resp.status_code == 404


async def test_create_with_unknown_assignee_is_not_found(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    resp = await client.post(
        "/api/tasks",
        json={"title": "Ghost", "project": project["id"], "assignedTo": str(uuid.uuid4())},
        headers=owner["headers"],
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found"


async def test_create_rejects_negative_estimate(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    resp = await client.post(
        "/api/tasks",
        json={"title": "Neg", "project": project["id"], "estimatedHours": -1},
        headers=owner["headers"],
    )
    assert resp.status_code == 400


async def test_outsider_cannot_read_task(client):
    owner = await register(client, "owner")
    outsider = await register(client, "outsider")
    project = await create_project(client, owner)
    task = await create_task(client, owner, project["id"])

    resp = await client.get(f"/api/tasks/{task['id']}", headers=outsider["headers"])
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------

async def test_list_by_project_requires_scope(client):
    owner = await register(client, "owner")
    outsider = await register(client, "outsider")
    project = await create_project(client, owner)

    resp = await client.get("/api/tasks", params={"project": project["id"]}, headers=outsider["headers"])
    assert resp.status_code == 403


async def test_list_filters_and_paginates(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    for n in range(3):
        await create_task(client, owner, project["id"], f"Todo {n}")
    await create_task(client, owner, project["id"], "Busy", status="in-progress")

    resp = await client.get(
        "/api/tasks",
        params={"project": project["id"], "status": "todo", "limit": 2, "sort": "title"},
        headers=owner["headers"],
    )
    body = resp.json()
    assert [t["title"] for t in body["data"]] == ["Todo 0", "Todo 1"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}


async def test_list_rejects_unknown_sort_field(client):
    owner = await register(client, "owner")
    resp = await client.get("/api/tasks", params={"sort": "-secret"}, headers=owner["headers"])
    assert resp.status_code == 400


async def test_unfiltered_list_is_scoped_to_callers_projects(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    await create_task(client, alice, (await create_project(client, alice))["id"], "Alice task")
    await create_task(client, bob, (await create_project(client, bob))["id"], "Bob task")

    resp = await client.get("/api/tasks", headers=alice["headers"])
    assert [t["title"] for t in resp.json()["data"]] == ["Alice task"]


async def test_unfiltered_list_spans_all_projects_when_scoping_is_off(client, monkeypatch):
    monkeypatch.setattr(settings, "SCOPE_UNFILTERED_LISTS", False)
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    await create_task(client, alice, (await create_project(client, alice))["id"], "Alice task")
    await create_task(client, bob, (await create_project(client, bob))["id"], "Bob task")

    resp = await client.get("/api/tasks", params={"sort": "title"}, headers=alice["headers"])
    assert [t["title"] for t in resp.json()["data"]] == ["Alice task", "Bob task"]


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

async def test_member_can_update_task_created_by_manager(client):
    owner, member, project = await project_with_member(client)
    task = await create_task(client, owner, project["id"])

    resp = await client.put(
        f"/api/tasks/{task['id']}",
        json={"status": "in-progress", "assignedTo": member["id"], "actualHours": 1.5},
        headers=member["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "in-progress"
    assert data["assignedTo"]["id"] == member["id"]
    assert data["actualHours"] == 1.5
    assert data["title"] == task["title"]


async def test_update_cannot_move_task_between_projects(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    other = await create_project(client, owner, "Other")
    task = await create_task(client, owner, project["id"])

    resp = await client.put(
        f"/api/tasks/{task['id']}", json={"project": other["id"]}, headers=owner["headers"]
    )
    assert resp.status_code == 400


async def test_update_logs_full_prior_snapshot(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    task = await create_task(client, owner, project["id"], "Snapshot", priority="low")

    await client.put(f"/api/tasks/{task['id']}", json={"priority": "high"}, headers=owner["headers"])

    latest = (await activity_for(client, owner, project["id"]))[0]
    assert latest["action"] == "update"
    assert latest["entityId"] == task["id"]
    assert latest["oldValues"]["priority"] == "low"
    assert latest["oldValues"]["title"] == "Snapshot"
    assert latest["newValues"]["priority"] == "high"


async def test_outsider_cannot_update_task(client):
    owner = await register(client, "owner")
    outsider = await register(client, "outsider")
    project = await create_project(client, owner)
    task = await create_task(client, owner, project["id"])

    resp = await client.put(
        f"/api/tasks/{task['id']}", json={"title": "Mine now"}, headers=outsider["headers"]
    )
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

async def test_member_cannot_delete_even_own_task(client):
    owner, member, project = await project_with_member(client)
    task = await create_task(client, member, project["id"])

    resp = await client.delete(f"/api/tasks/{task['id']}", headers=member["headers"])
    assert resp.status_code == 403
    assert resp.json()["message"] == "Not authorized to delete this task"


async def test_manager_deletes_task(client):
    owner, member, project = await project_with_member(client)
    task = await create_task(client, member, project["id"])

    resp = await client.delete(f"/api/tasks/{task['id']}", headers=owner["headers"])
    assert resp.status_code == 200

    gone = await client.get(f"/api/tasks/{task['id']}", headers=owner["headers"])
    assert gone.status_code == 404


async def test_deleting_task_removes_its_comments(client, session_factory):
    owner, member, project = await project_with_member(client)
    task = await create_task(client, owner, project["id"], "Retire")
    await create_comment(client, member, task["id"], "one")
    await create_comment(client, owner, task["id"], "two")

    resp = await client.delete(f"/api/tasks/{task['id']}", headers=owner["headers"])
    assert resp.status_code == 200

    async with session_factory() as session:
        left = await session.scalar(
            select(func.count()).select_from(Comment).where(Comment.task_id == uuid.UUID(task["id"]))
        )
    assert left == 0

    latest = (await activity_for(client, owner, project["id"]))[0]
    assert (latest["action"], latest["entityType"], latest["entityId"]) == ("delete", "task", task["id"])
    assert latest["description"] == 'Deleted task "Retire" (removed 2 comments)'


async def test_admin_deletes_task_outside_their_projects(client):
    owner = await register(client, "owner")
    admin = await register(client, "admin", role="admin")
    project = await create_project(client, owner)
    task = await create_task(client, owner, project["id"])

    resp = await client.delete(f"/api/tasks/{task['id']}", headers=admin["headers"])
    assert resp.status_code == 200
