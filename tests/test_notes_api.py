import pytest


@pytest.fixture
async def alice(auth_headers):
    return await auth_headers("alice@example.com", "alice")


@pytest.fixture
async def bob(auth_headers):
    return await auth_headers("bob@example.com", "bob")


async def make_note(client, headers, **fields):
    body = {"title": "Note", "content": "<p>body</p>", **fields}
    response = await client.post("/api/notes", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def make_category(client, headers, name):
    response = await client.post("/api/categories", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def list_ids(client, headers, **params):
    response = await client.get("/api/notes", params=params, headers=headers)
    assert response.status_code == 200, response.text
    return [note["id"] for note in response.json()["items"]]


# ----------------------------------------------------------------------
# Notes
# ----------------------------------------------------------------------


async def test_create_note_uses_camel_case(client, alice):
    work = await make_category(client, alice, "Work")

    note = await make_note(client, alice, title="Plan", categoryIds=[work["id"]])

    assert note["title"] == "Plan"
    assert note["color"] == "transparent"
    assert note["isArchived"] is False
    assert note["isPinned"] is False
    assert note["categories"] == [{"id": work["id"], "name": "Work"}]
    assert "createdAt" in note and "updatedAt" in note


async def test_create_note_ignores_foreign_categories(client, alice, bob):
    bobs = await make_category(client, bob, "Private")

    note = await make_note(client, alice, categoryIds=[bobs["id"]])

    assert note["categories"] == []


async def test_create_note_requires_content(client, alice):
    response = await client.post("/api/notes", json={"title": "x", "content": ""}, headers=alice)

    assert response.status_code == 422


async def test_notes_require_authentication(client):
    assert (await client.get("/api/notes")).status_code == 401


async def test_list_views_split_active_archived_and_trash(client, alice):
    active = await make_note(client, alice, title="active")
    archived = await make_note(client, alice, title="archived")
    trashed = await make_note(client, alice, title="trashed")
    await client.put(f"/api/notes/{archived['id']}", json={"isArchived": True}, headers=alice)
    await client.delete(f"/api/notes/{trashed['id']}", headers=alice)

    assert await list_ids(client, alice) == [active["id"]]
    assert await list_ids(client, alice, isArchived="true") == [archived["id"]]
    assert await list_ids(client, alice, isDeleted="true") == [trashed["id"]]


async def test_trash_view_includes_archived_notes(client, alice):
    note = await make_note(client, alice)
    await client.put(f"/api/notes/{note['id']}", json={"isArchived": True}, headers=alice)
    await client.delete(f"/api/notes/{note['id']}", headers=alice)

    assert await list_ids(client, alice, isDeleted="true") == [note["id"]]
    assert await list_ids(client, alice, isArchived="true") == []


async def test_list_orders_pinned_then_position_then_newest(client, alice):
    first = await make_note(client, alice, title="first")
    second = await make_note(client, alice, title="second")
    third = await make_note(client, alice, title="third")
    await client.put(f"/api/notes/{first['id']}", json={"isPinned": True}, headers=alice)

    assert await list_ids(client, alice) == [first["id"], third["id"], second["id"]]

    await client.put(
        "/api/notes/reorder",
        json={"notes": [{"id": second["id"], "position": 0}, {"id": third["id"], "position": 1}]},
        headers=alice,
    )
    assert await list_ids(client, alice) == [first["id"], second["id"], third["id"]]


async def test_cursor_pagination_walks_every_note_once(client, alice):
    created = [await make_note(client, alice, title=f"n{i}") for i in range(5)]
    await client.put(f"/api/notes/{created[2]['id']}", json={"isPinned": True}, headers=alice)

    expected = await list_ids(client, alice, limit=100)
    seen = []
    cursor = None
    pages = 0
    while True:
        params = {"limit": 2}
        if cursor is not None:
            params["cursor"] = cursor
        response = await client.get("/api/notes", params=params, headers=alice)
        body = response.json()
        seen.extend(note["id"] for note in body["items"])
        pages += 1
        cursor = body["nextCursor"]
        if cursor is None:
            break

    assert seen == expected
    assert len(seen) == 5
    assert pages == 3


async def test_list_limit_is_capped(client, alice):
    response = await client.get("/api/notes", params={"limit": 500}, headers=alice)

    assert response.status_code == 422


async def test_search_matches_title_or_content(client, alice):
    by_title = await make_note(client, alice, title="Coffee beans")
    by_content = await make_note(client, alice, title="Errands", content="<p>buy COFFEE filters</p>")
    await make_note(client, alice, title="Other", content="<p>tea</p>")

    assert set(await list_ids(client, alice, search="coffee")) == {by_title["id"], by_content["id"]}
    assert await list_ids(client, alice, search="100%") == []


async def test_filter_by_categories_and_reminder(client, alice):
    work = await make_category(client, alice, "Work")
    home = await make_category(client, alice, "Home")
    work_note = await make_note(client, alice, categoryIds=[work["id"]])
    home_note = await make_note(client, alice, categoryIds=[home["id"]])
    reminded = await make_note(client, alice, reminder="2030-01-01T09:00:00")

    assert await list_ids(client, alice, categoryId=work["id"]) == [work_note["id"]]
    assert set(
        await list_ids(client, alice, categoryIds=f"{work['id']},abc,{home['id']}")
    ) == {work_note["id"], home_note["id"]}
    assert await list_ids(client, alice, hasReminder="true") == [reminded["id"]]


async def test_partial_update_and_category_replacement(client, alice):
    work = await make_category(client, alice, "Work")
    home = await make_category(client, alice, "Home")
    note = await make_note(
        client, alice, title="Old", color="red", categoryIds=[work["id"]], reminder="2030-01-01T09:00:00"
    )

    response = await client.put(
        f"/api/notes/{note['id']}",
        json={"title": "New", "categoryIds": [home["id"]], "reminder": None},
        headers=alice,
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "New"
    assert updated["content"] == note["content"]
    assert updated["color"] == "red"
    assert updated["reminder"] is None
    assert [c["id"] for c in updated["categories"]] == [home["id"]]


async def test_other_users_notes_are_not_found(client, alice, bob):
    note = await make_note(client, alice)

    assert (await client.get(f"/api/notes/{note['id']}", headers=bob)).status_code == 404
    assert (
        await client.put(f"/api/notes/{note['id']}", json={"title": "x"}, headers=bob)
    ).status_code == 404
    assert (await client.delete(f"/api/notes/{note['id']}", headers=bob)).status_code == 404
    assert await list_ids(client, bob) == []


async def test_trash_restore_and_permanent_delete(client, alice):
    note = await make_note(client, alice)

    trashed = await client.delete(f"/api/notes/{note['id']}", headers=alice)
    assert trashed.json()["isDeleted"] is True

    restored = await client.post(f"/api/notes/{note['id']}/restore", headers=alice)
    assert restored.json()["isDeleted"] is False

    gone = await client.delete(f"/api/notes/{note['id']}/permanent", headers=alice)
    assert gone.status_code == 200
    assert (await client.get(f"/api/notes/{note['id']}", headers=alice)).status_code == 404


async def test_reorder_only_touches_own_notes(client, alice, bob):
    mine = await make_note(client, alice)
    theirs = await make_note(client, bob)

    response = await client.put(
        "/api/notes/reorder",
        json={"notes": [{"id": mine["id"], "position": 7}, {"id": theirs["id"], "position": 9}]},
        headers=alice,
    )

    assert response.json() == {"updated": 1}
    assert (await client.get(f"/api/notes/{mine['id']}", headers=alice)).json()["position"] == 7
    assert (await client.get(f"/api/notes/{theirs['id']}", headers=bob)).json()["position"] == 0


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------


async def test_categories_crud(client, alice):
    work = await make_category(client, alice, "Work")
    home = await make_category(client, alice, "Home")

    listed = (await client.get("/api/categories", headers=alice)).json()
    assert [c["name"] for c in listed] == ["Work", "Home"]

    renamed = await client.put(
        f"/api/categories/{work['id']}", json={"name": "Office"}, headers=alice
    )
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Office"

    clash = await client.put(f"/api/categories/{home['id']}", json={"name": "Office"}, headers=alice)
    assert clash.status_code == 409


async def test_duplicate_category_name_conflicts_per_user(client, alice, bob):
    await make_category(client, alice, "Work")

    duplicate = await client.post("/api/categories", json={"name": "Work"}, headers=alice)
    assert duplicate.status_code == 409

    # Names are only unique per user
    await make_category(client, bob, "Work")


async def test_other_users_categories_are_not_found(client, alice, bob):
    work = await make_category(client, alice, "Work")

    assert (
        await client.put(f"/api/categories/{work['id']}", json={"name": "x"}, headers=bob)
    ).status_code == 404
    assert (await client.delete(f"/api/categories/{work['id']}", headers=bob)).status_code == 404


async def test_deleting_category_keeps_its_notes(client, alice):
    work = await make_category(client, alice, "Work")
    note = await make_note(client, alice, categoryIds=[work["id"]])

    response = await client.delete(f"/api/categories/{work['id']}", headers=alice)
    assert response.status_code == 200

    fetched = (await client.get(f"/api/notes/{note['id']}", headers=alice)).json()
    assert fetched["categories"] == []
