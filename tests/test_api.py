"""HTTP surface: submission, moderation, public reads, uploads, auth."""

import pytest

from conftest import make_token
from core import storage
from core.errors import StoreError
from entries import repository as entries_repository
from entries.schemas import EntryStatus

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16

SCENARIO_A = {
    "title": "Foo",
    "description": "Bar",
    "website_url": "foo.com",
    "redbook_url": "xhs.com/1",
    "creator_name": "Alice",
    "creator_redbook_id": "a1",
    "category": "web",
    "tags": ["ai", "tool"],
    "screenshot_urls": ["https://x/1.png"],
}


async def test_submission_lifecycle(client, store, admin_headers):
    """Submit -> hidden -> approve -> listed -> cannot reject."""
    res = await client.post("/entries", json={**SCENARIO_A, "status": "approved"})
    assert res.status_code == 201
    entry_id = res.json()["id"]

    stored = store.entries[entry_id]
    assert stored["status"] == "pending"
    assert stored["website_url"] == "https://foo.com"

    listing = await client.get("/entries", params={"page": 1, "pageSize": 12})
    assert listing.json()["total"] == 0
    assert (await client.get("/entries/by-title/Foo")).status_code == 404

    res = await client.patch(f"/entries/{entry_id}/status", json={"status": "approved"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["status"] == "approved"

    listing = (await client.get("/entries", params={"page": 1, "pageSize": 12})).json()
    assert [item["id"] for item in listing["items"]] == [entry_id]
    assert listing["items"][0]["thumbnail_url"] == "https://x/1.png"

    detail = await client.get("/entries/by-title/Foo")
    assert detail.status_code == 200
    assert detail.json()["id"] == entry_id

    res = await client.patch(f"/entries/{entry_id}/status", json={"status": "rejected"}, headers=admin_headers)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "INVALID_TRANSITION"


async def test_invalid_submission_returns_field_errors(client, store):
    res = await client.post("/entries", json={**SCENARIO_A, "title": "", "tags": "", "screenshot_urls": []})

    assert res.status_code == 400
    field_errors = res.json()["fieldErrors"]
    assert set(field_errors) == {"title", "tags", "screenshot_urls"}
    assert store.entries == {}


async def test_anonymous_transition_is_forbidden(client, store):
    row = store.add_entry()
    entry_id = str(row["id"])

    res = await client.patch(f"/entries/{entry_id}/status", json={"status": "approved"})

    assert res.status_code == 403
    assert store.status_of(entry_id) == "pending"


async def test_non_admin_transition_is_forbidden(client, store, user_headers):
    row = store.add_entry()
    res = await client.patch(f"/entries/{row['id']}/status", json={"status": "approved"}, headers=user_headers)
    assert res.status_code == 403
    assert store.status_of(str(row["id"])) == "pending"


async def test_transition_unknown_entry_is_404(client, store, admin_headers):
    res = await client.patch(
        "/entries/8d2f0a36-5a43-4bb7-9f8a-0c1cfe9f4b11/status",
        json={"status": "approved"},
        headers=admin_headers,
    )
    assert res.status_code == 404


async def test_transition_to_unknown_status_is_400(client, store, admin_headers):
    row = store.add_entry()
    res = await client.patch(f"/entries/{row['id']}/status", json={"status": "archived"}, headers=admin_headers)
    assert res.status_code == 400
    assert store.status_of(str(row["id"])) == "pending"


@pytest.mark.parametrize("authorization", ["Bearer not-a-jwt", "Token abc", "garbage"])
async def test_broken_credentials_on_transition_are_forbidden(client, store, authorization):
    row = store.add_entry()

    res = await client.patch(
        f"/entries/{row['id']}/status",
        json={"status": "approved"},
        headers={"Authorization": authorization},
    )

    assert res.status_code == 403
    assert store.status_of(str(row["id"])) == "pending"


async def test_expired_token_on_review_queue_is_forbidden(client, store, admin):
    token = make_token(admin.user_id, expires_in=-60)
    res = await client.get("/admin/entries", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 403


async def test_invalid_token_on_me_is_401(client, store):
    res = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


async def test_page_two_with_five_entries(client, store):
    for _ in range(5):
        store.add_entry(status=EntryStatus.APPROVED)

    body = (await client.get("/entries", params={"page": 2, "pageSize": 12})).json()

    assert body["items"] == []
    assert body["total"] == 5


async def test_public_listing_rejects_other_statuses(client, store):
    res = await client.get("/entries", params={"status": "pending"})
    assert res.status_code == 400


async def test_title_with_slash_and_unicode(client, store):
    store.add_entry(status=EntryStatus.APPROVED, title="AI/工具")
    res = await client.get("/entries/by-title/AI%2F%E5%B7%A5%E5%85%B7")
    assert res.status_code == 200
    assert res.json()["title"] == "AI/工具"


async def test_title_with_space_is_decoded_once(client, store):
    store.add_entry(status=EntryStatus.APPROVED, title="小红书 工具")
    res = await client.get("/entries/by-title/%E5%B0%8F%E7%BA%A2%E4%B9%A6%20%E5%B7%A5%E5%85%B7")
    assert res.status_code == 200
    assert res.json()["title"] == "小红书 工具"


@pytest.mark.parametrize(
    "title, path",
    [("A%20B", "A%2520B"), ("100%41 off", "100%2541%20off")],
)
async def test_title_with_literal_percent_sequence(client, store, title, path):
    store.add_entry(status=EntryStatus.APPROVED, title=title)

    res = await client.get(f"/entries/by-title/{path}")

    assert res.status_code == 200
    assert res.json()["title"] == title


async def test_categories_endpoints(client, store):
    store.add_category("web", "Web", 1)
    store.add_category("app", "App", 2)

    categories = (await client.get("/categories")).json()
    assert [c["name"] for c in categories] == ["web", "app"]

    assert (await client.get("/categories/web")).status_code == 200
    assert (await client.get("/categories/nope")).status_code == 404


async def test_admin_review_queue(client, store, admin_headers, user_headers):
    store.add_entry(status=EntryStatus.PENDING)
    store.add_entry(status=EntryStatus.APPROVED)

    res = await client.get("/admin/entries", params={"status": "pending"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["total"] == 1

    assert (await client.get("/admin/entries", headers=user_headers)).status_code == 403
    assert (await client.get("/admin/entries")).status_code == 403


async def test_store_failure_is_generic_503(client, store, monkeypatch):
    async def broken(**kwargs):
        raise StoreError("OSError: could not connect to server at 10.0.0.5")

    monkeypatch.setattr(entries_repository, "list_entries", broken)

    res = await client.get("/entries")

    assert res.status_code == 503
    assert "10.0.0.5" not in res.text


async def test_asset_upload_partial_success(client, store, monkeypatch):
    async def fake_upload(key, data, *, content_type, bucket=None, timeout_s=None):
        return None

    monkeypatch.setattr(storage, "upload", fake_upload)

    files = [("files", (f"s{i}.png", PNG, "image/png")) for i in range(6)]
    files.append(("files", ("notes.txt", b"hello", "text/plain")))

    res = await client.post("/assets", files=files)

    assert res.status_code == 200
    body = res.json()
    assert len(body["urls"]) == 5
    assert [e["reason"] for e in body["errors"]] == ["count_exceeded", "count_exceeded"]


async def test_me_reports_role(client, store, admin_headers):
    assert (await client.get("/auth/me", headers=admin_headers)).json()["is_admin"] is True

    anon = (await client.get("/auth/me")).json()
    assert anon["user_id"] is None and anon["is_admin"] is False


@pytest.mark.parametrize("user_id", ["00000000-0000-0000-0000-00000000c001"])
async def test_user_without_profile_is_plain_user(client, store, user_id):
    res = await client.get("/auth/me", headers={"Authorization": f"Bearer {make_token(user_id)}"})
    assert res.json() == {"user_id": user_id, "role": "user", "is_admin": False}


async def test_health(client):
    assert (await client.get("/health")).json() == {"status": "ok"}
