"""
Activity log tests: one entry per mutation, ordering, scoping and
failure isolation.
"""

import uuid

from sqlalchemy.exc import SQLAlchemyError

from conftest import activity_for, add_member, create_project, create_task, register


async def test_end_to_end_trail_newest_first(client):
    owner = await register(client, "owner", name="Olive")
    member = await register(client, "member", name="Milo")
    project = await create_project(client, owner, "Apollo")
    task = await create_task(client, owner, project["id"], "Launch")
    await add_member(client, owner, project["id"], member)
    await client.put(
        f"/api/tasks/{task['id']}", json={"status": "review"}, headers=member["headers"]
    )

    trail = await activity_for(client, member, project["id"])
    assert [(e["action"], e["entityType"]) for e in trail] == [
        ("update", "task"),
        ("assign", "project"),
        ("create", "task"),
        ("create", "project"),
    ]
    assert trail[0]["user"]["id"] == member["id"]
    assert trail[1]["description"] == 'Added Milo to project "Apollo"'
    assert trail[1]["oldValues"] is None
    assert trail[2]["entityId"] == task["id"]
    assert all(e["projectId"] == project["id"] for e in trail)

    denied = await client.delete(f"/api/tasks/{task['id']}", headers=member["headers"])
    assert denied.status_code == 403

    deleted = await client.delete(f"/api/tasks/{task['id']}", headers=owner["headers"])
    assert deleted.status_code == 200

    latest = (await activity_for(client, owner, project["id"]))[0]
    assert (latest["action"], latest["entityType"], latest["entityId"]) == ("delete", "task", task["id"])
    assert latest["description"] == 'Deleted task "Launch"'
    assert len(await activity_for(client, owner, project["id"])) == 5


async def test_reads_do_not_write_activity(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    await client.get(f"/api/projects/{project['id']}", headers=owner["headers"])
    await client.get("/api/tasks", headers=owner["headers"])

    assert len(await activity_for(client, owner, project["id"])) == 1


async def test_logging_failure_does_not_fail_the_mutation(client, monkeypatch):
    def broken(**kwargs):
        raise SQLAlchemyError("activity table unavailable")

    owner = await register(client, "owner")
    monkeypatch.setattr("taskboard.services.activity_service.ActivityLog", broken)

    resp = await client.post("/api/projects", json={"name": "Resilient"}, headers=owner["headers"])
    assert resp.status_code == 201
    project = resp.json()["data"]
    assert project["name"] == "Resilient"

    monkeypatch.undo()
    fetched = await client.get(f"/api/projects/{project['id']}", headers=owner["headers"])
    assert fetched.status_code == 200
    assert await activity_for(client, owner, project["id"]) == []


async def test_outsider_cannot_view_project_activity(client):
    owner = await register(client, "owner")
    outsider = await register(client, "outsider")
    project = await create_project(client, owner)

    resp = await client.get(f"/api/activity/project/{project['id']}", headers=outsider["headers"])
    assert resp.status_code == 403

    resp = await client.get("/api/activity", params={"projectId": project["id"]}, headers=outsider["headers"])
    assert resp.status_code == 403


async def test_activity_for_unknown_project_is_not_found(client):
    owner = await register(client, "owner")
    resp = await client.get(f"/api/activity/project/{uuid.uuid4()}", headers=owner["headers"])
    assert resp.status_code == 404


async def test_list_filters_by_actor(client):
    owner = await register(client, "owner")
    member = await register(client, "member")
    project = await create_project(client, owner)
    await add_member(client, owner, project["id"], member)
    await create_task(client, member, project["id"], "By member")

    resp = await client.get(
        "/api/activity",
        params={"projectId": project["id"], "userId": member["id"]},
        headers=owner["headers"],
    )
    body = resp.json()
    assert [(e["action"], e["entityType"]) for e in body["data"]] == [("create", "task")]
    assert body["pagination"]["limit"] == 20


async def test_unfiltered_list_only_covers_callers_projects(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    mine = await create_project(client, alice, "Mine")
    await create_project(client, bob, "Theirs")

    resp = await client.get("/api/activity", headers=alice["headers"])
    assert [e["entityId"] for e in resp.json()["data"]] == [mine["id"]]


async def test_page_past_the_end_is_empty(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    await create_task(client, owner, project["id"])

    resp = await client.get(
        f"/api/activity/project/{project['id']}",
        params={"page": 5, "limit": 1},
        headers=owner["headers"],
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["data"] == []
    assert body["pagination"] == {"page": 5, "limit": 1, "total": 2, "pages": 2}


async def test_huge_page_number_is_empty_not_an_error(client):
    owner = await register(client, "owner")
    project = await create_project(client, owner)
    await create_task(client, owner, project["id"])

    resp = await client.get("/api/tasks", params={"page": 10**19}, headers=owner["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"] == []
    assert body["pagination"] == {"page": 10**19, "limit": 10, "total": 1, "pages": 1}


async def test_page_zero_is_rejected(client):
    owner = await register(client, "owner")
    resp = await client.get("/api/activity", params={"page": 0}, headers=owner["headers"])
    assert resp.status_code == 400
