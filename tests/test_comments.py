"""
Comment tests. Reads and creates follow project scope; edits and deletes
follow authorship.
"""

from conftest import activity_for, add_member, create_comment, create_project, create_task, register


async def setup_task(client):
    owner = await register(client, "owner")
    member = await register(client, "member")
    project = await create_project(client, owner)
    await add_member(client, owner, project["id"], member)
    task = await create_task(client, owner, project["id"])
    return owner, member, project, task


async def test_member_comments_on_task(client):
    owner, member, project, task = await setup_task(client)
    resp = await client.post(
        "/api/comments",
        json={
            "content": "On it",
            "task": task["id"],
            "attachments": [{"filename": "plan.pdf", "url": "https://files.example.com/plan.pdf"}],
        },
        headers=member["headers"],
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["user"]["id"] == member["id"]
    assert data["taskId"] == task["id"]
    assert data["attachments"][0]["filename"] == "plan.pdf"

    latest = (await activity_for(client, owner, project["id"]))[0]
    assert latest["action"] == "comment"
    assert latest["entityType"] == "comment"
    assert latest["entityId"] == data["id"]


async def test_outsider_cannot_comment(client):
    owner, member, project, task = await setup_task(client)
    outsider = await register(client, "outsider")
    resp = await client.post(
        "/api/comments", json={"content": "Hi", "task": task["id"]}, headers=outsider["headers"]
    )
    assert resp.status_code == 403


async def test_empty_comment_is_rejected(client):
    owner, member, project, task = await setup_task(client)
    resp = await client.post(
        "/api/comments", json={"content": "", "task": task["id"]}, headers=owner["headers"]
    )
    assert resp.status_code == 400


async def test_list_comments_newest_first(client):
    owner, member, project, task = await setup_task(client)
    await create_comment(client, owner, task["id"], "first")
    await create_comment(client, member, task["id"], "second")

    resp = await client.get(f"/api/comments/task/{task['id']}", headers=member["headers"])
    assert resp.status_code == 200
    assert [c["content"] for c in resp.json()["data"]] == ["second", "first"]
    assert resp.json()["pagination"]["total"] == 2


async def test_outsider_cannot_list_comments(client):
    owner, member, project, task = await setup_task(client)
    outsider = await register(client, "outsider")
    resp = await client.get(f"/api/comments/task/{task['id']}", headers=outsider["headers"])
    assert resp.status_code == 403


async def test_author_edits_own_comment(client):
    owner, member, project, task = await setup_task(client)
    comment = await create_comment(client, member, task["id"], "tpyo")

    resp = await client.put(
        f"/api/comments/{comment['id']}", json={"content": "typo"}, headers=member["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["content"] == "typo"

    latest = (await activity_for(client, owner, project["id"]))[0]
    assert latest["oldValues"]["content"] == "tpyo"
    assert latest["newValues"]["content"] == "typo"


async def test_project_manager_cannot_edit_members_comment(client):
    owner, member, project, task = await setup_task(client)
    comment = await create_comment(client, member, task["id"])

    resp = await client.put(
        f"/api/comments/{comment['id']}", json={"content": "Edited"}, headers=owner["headers"]
    )
    assert resp.status_code == 403

    resp = await client.delete(f"/api/comments/{comment['id']}", headers=owner["headers"])
    assert resp.status_code == 403


async def test_admin_deletes_any_comment(client):
    owner, member, project, task = await setup_task(client)
    admin = await register(client, "admin", role="admin")
    comment = await create_comment(client, member, task["id"])

    resp = await client.delete(f"/api/comments/{comment['id']}", headers=admin["headers"])
    assert resp.status_code == 200

    remaining = await client.get(f"/api/comments/task/{task['id']}", headers=owner["headers"])
    assert remaining.json()["data"] == []

    latest = (await activity_for(client, owner, project["id"]))[0]
    assert (latest["action"], latest["entityType"], latest["entityId"]) == ("delete", "comment", comment["id"])
    assert latest["user"]["id"] == admin["id"]
