from __future__ import annotations
import uuid
import pytest
from commissiestrijd.auth_deps import get_principal
from commissiestrijd.deps import get_clock
from commissiestrijd.main import app
from fakes import ADMIN, MEMBER, FixedClock, png_bytes, utc


async def _committee(client, name="Borrelcommissie"):
    r = await client.post("/committees", json={"name": name})
    assert r.status_code == 201, r.text
    return r.json()


async def _task(client, points=10, max_per_period=None, description=None):
    r = await client.post("/possible-tasks", json={
        "description": description or f"Eat a whole pizza together {uuid.uuid4().hex[:6]}",
        "short_description": "Pizza",
        "points": points,
        "max_per_period": max_per_period,
    })
    assert r.status_code == 201, r.text
    return r.json()


async def _submit(client, task_id, committee="Borrelcommissie", filename="proof.png", data=None):
    return await client.post(
        "/submitted-tasks",
        data={"task_id": task_id, "committee": committee},
        files={"image": (filename, data if data is not None else png_bytes(), "image/png")},
    )


@pytest.mark.asyncio
async def test_submit_review_and_fetch_image(client, principal):
    await _committee(client)
    task = await _task(client, points=15)

    principal["current"] = MEMBER
    r = await _submit(client, task["id"])
    assert r.status_code == 201, r.text
    sub = r.json()
    assert sub["status"] == "pending" and sub["points"] == 15 and sub["rejection_reason"] is None

    # members cannot review or view images
    assert (await client.put(f"/submitted-tasks/{sub['id']}/approve", params={"points": 20})).status_code == 401
    assert (await client.get(f"/images/{sub['image_path']}")).status_code == 401

    principal["current"] = ADMIN

    r = await client.put(f"/submitted-tasks/{sub['id']}/approve", params={"points": 20, "max_per_period": 2})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "approved" and r.json()["points"] == 20

    r = await client.put(f"/submitted-tasks/{sub['id']}/approve", params={"points": 20})
    assert r.status_code == 409

    r = await client.put(f"/submitted-tasks/{sub['id']}/reject", params={"reason": "Only two members visible"})
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"
    assert r.json()["rejection_reason"] == "Only two members visible"

    r = await client.put(f"/submitted-tasks/{sub['id']}/reject", params={"reason": ""})
    assert r.status_code == 400

    r = await client.get(f"/images/{sub['image_path']}")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content == png_bytes()

    assert (await client.get("/images/nothing-here.png")).status_code == 404


@pytest.mark.asyncio
async def test_submit_errors_map_to_status_codes(client):
    await _committee(client)
    task = await _task(client)

    r = await _submit(client, "not-a-uuid")
    assert r.status_code == 400
    assert "detail" in r.json()

    assert (await _submit(client, task["id"], committee="Ghosts")).status_code == 404
    assert (await _submit(client, str(uuid.uuid4()))).status_code == 404
    assert (await _submit(client, task["id"], filename="proof.pdf")).status_code == 400
    assert (await _submit(client, task["id"], data=png_bytes(6 * 1024 * 1024))).status_code == 400

    r = await client.put(f"/possible-tasks/{task['id']}/state", params={"active": False})
    assert r.status_code == 204
    assert (await _submit(client, task["id"])).status_code == 400


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(client):
    app.dependency_overrides.pop(get_principal)
    r = await client.get("/committees")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_listing_and_paging(client):
    await _committee(client)
    task = await _task(client)
    for _ in range(6):
        assert (await _submit(client, task["id"])).status_code == 201

    r = await client.get("/submitted-tasks", params={"status": "pending", "page": 2, "page_size": 5})
    assert r.status_code == 200
    body = r.json()
    assert body["page_amount"] == 2 and len(body["items"]) == 1

    assert (await client.get("/submitted-tasks", params={"page": 3, "page_size": 5})).status_code == 400
    assert (await client.get("/submitted-tasks", params={"page": 0})).status_code == 400

    r = await client.get("/submitted-tasks", params={"status": "approved"})
    assert r.json() == {"items": [], "page_amount": 1}

    one = body["items"][0]
    r = await client.get(f"/submitted-tasks/{one['id']}")
    assert r.status_code == 200 and r.json()["id"] == one["id"]
    assert (await client.get(f"/submitted-tasks/{uuid.uuid4()}")).status_code == 404


@pytest.mark.asyncio
async def test_leaderboard_applies_cap(client, clock):
    await _committee(client, "Alpha")
    await _committee(client, "Bravo")
    task = await _task(client, points=10, max_per_period=2)

    for _ in range(3):
        sub = (await _submit(client, task["id"], committee="Alpha")).json()
        r = await client.put(f"/submitted-tasks/{sub['id']}/approve", params={"points": 10, "max_per_period": 2})
        assert r.status_code == 200

    today = clock.local_today().isoformat()
    r = await client.get("/leaderboard", params={"start_date": today, "end_date": today})
    assert r.status_code == 200
    assert r.json() == [{"committee": "Alpha", "points": 20}, {"committee": "Bravo", "points": 0}]

    r = await client.get("/leaderboard", params={"start_date": "2025-02-01", "end_date": "2025-01-01"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_committee_rename_moves_submissions(client):
    await _committee(client, "Old name")
    task = await _task(client)
    sub = (await _submit(client, task["id"], committee="Old name")).json()

    assert (await client.post("/committees", json={"name": "Old name"})).status_code == 409
    await _committee(client, "Taken")
    assert (await client.put("/committees/Old name/rename", json={"new_name": "Taken"})).status_code == 409

    r = await client.put("/committees/Old name/rename", json={"new_name": "New name"})
    assert r.status_code == 200 and r.json() == {"name": "New name"}

    names = [c["name"] for c in (await client.get("/committees")).json()]
    assert names == ["New name", "Taken"]
    assert (await client.get(f"/submitted-tasks/{sub['id']}")).json()["committee"] == "New name"

    assert (await client.delete("/committees/New name")).status_code == 409
    assert (await client.delete("/committees/Taken")).status_code == 204
    assert (await client.delete("/committees/Taken")).status_code == 404


@pytest.mark.asyncio
async def test_periods_crud_and_ordering(client):
    app.dependency_overrides[get_clock] = lambda: FixedClock(utc(2025, 5, 15, 10))

    async def create(name, start, end):
        r = await client.post("/periods", json={"name": name, "start_date": start, "end_date": end})
        assert r.status_code == 201, r.text
        return r.json()

    past = await create("Winter", "2025-01-01", "2025-02-28")
    current = await create("Spring", "2025-04-01", "2025-06-30")
    future = await create("Summer", "2025-07-01", "2025-08-31")

    r = await client.get("/periods")
    assert [p["id"] for p in r.json()] == [future["id"], current["id"], past["id"]]

    assert (await client.post("/periods", json={"name": "Winter", "start_date": "2026-01-01", "end_date": "2026-02-01"})).status_code == 409
    assert (await client.post("/periods", json={"name": "Bad", "start_date": "2026-02-01", "end_date": "2026-01-01"})).status_code == 400

    r = await client.put(f"/periods/{past['id']}", json={"name": "Winter", "start_date": "2025-01-01", "end_date": "2025-03-01"})
    assert r.status_code == 200 and r.json()["end_date"] == "2025-03-01"

    assert (await client.delete(f"/periods/{past['id']}")).status_code == 204
    assert (await client.get(f"/periods/{past['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_possible_task_catalog(client, principal):
    active = await _task(client, points=5, description="Sing the club song on the market square")
    hidden = await _task(client, points=8, description="Paint the board room")

    r = await client.put(f"/possible-tasks/{hidden['id']}", json={
        "description": "Paint the board room",
        "short_description": "Paint",
        "points": 9,
        "is_active": False,
        "max_per_period": 1,
    })
    assert r.status_code == 200
    assert r.json()["points"] == 9 and r.json()["is_active"] is False

    all_ids = {t["id"] for t in (await client.get("/possible-tasks")).json()}
    active_ids = [t["id"] for t in (await client.get("/possible-tasks/active")).json()]
    assert all_ids == {active["id"], hidden["id"]}
    assert active_ids == [active["id"]]

    dup = {"description": "Paint the board room", "short_description": "Again", "points": 3}
    assert (await client.post("/possible-tasks", json=dup)).status_code == 409
    bad = {"description": "Climb the tower", "short_description": "Climb", "points": 0}
    assert (await client.post("/possible-tasks", json=bad)).status_code == 400
    assert (await client.get(f"/possible-tasks/{uuid.uuid4()}")).status_code == 404

    principal["current"] = MEMBER
    assert (await client.post("/possible-tasks", json={**bad, "points": 5})).status_code == 401
    assert (await client.get(f"/possible-tasks/{active['id']}")).status_code == 200


@pytest.mark.asyncio
async def test_leaderboard_open_ended_range(client):
    await _committee(client, "Alpha")
    r = await client.get("/leaderboard", params={"start_date": "2025-01-01", "end_date": "9999-12-31"})
    assert r.status_code == 200
    assert r.json() == [{"committee": "Alpha", "points": 0}]


@pytest.mark.asyncio
async def test_query_validation_errors_are_bad_requests(client):
    await _committee(client)
    task = await _task(client)
    sub = (await _submit(client, task["id"])).json()

    r = await client.put(f"/submitted-tasks/{sub['id']}/reject", params={"reason": "x" * 600})
    assert r.status_code == 400
    r = await client.put(f"/submitted-tasks/{sub['id']}/reject", params={"reason": "x" * 2001})
    assert r.status_code == 400

    r = await client.get("/submitted-tasks", params={"status": "archived"})
    assert r.status_code == 400
    assert "detail" in r.json()
