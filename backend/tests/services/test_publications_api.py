"""Publications API — CRUD, ownership, likes and the feed.

Tests:
    - Create uses the authenticated user as author; response carries handle and 0 likes
    - Feed: own + followed publications, newest first, unrelated users excluded
    - Multiple likes never duplicate a feed entry
    - Non-author update/delete is 403 and leaves the publication unchanged
    - Unknown publication is 404 for read, update, delete and like
    - Like toggle reports the new state and count
"""

import pytest


@pytest.fixture
def publish(client):
    async def _publish(headers, title="title", content="content"):
        response = await client.post(
            "/api/v1/publications", headers=headers,
            json={"title": title, "content": content},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _publish


async def test_create_publication(client, signup, publish):
    alice, headers = await signup("alice")
    pub = await publish(headers, title="  Hello ", content="World")
    assert pub["author_id"] == alice["id"]
    assert pub["author_handle"] == "alice"
    assert pub["likes"] == 0
    assert pub["title"] == "Hello"


async def test_create_requires_token(client):
    response = await client.post(
        "/api/v1/publications", json={"title": "t", "content": "c"},
    )
    assert response.status_code == 401


@pytest.mark.parametrize("body", [
    {"title": "", "content": "c"},
    {"title": "t", "content": "   "},
    {"title": "t" * 51, "content": "c"},
    {"title": "t", "content": "c" * 301},
    {"title": "t"},
])
async def test_invalid_publication_is_400(client, signup, body):
    _, headers = await signup("alice")
    response = await client.post("/api/v1/publications", headers=headers, json=body)
    assert response.status_code == 400


async def test_author_in_body_is_ignored(client, signup, publish):
    alice, headers = await signup("alice")
    bob, _ = await signup("bob")
    response = await client.post(
        "/api/v1/publications", headers=headers,
        json={"title": "t", "content": "c", "author_id": bob["id"]},
    )
    assert response.json()["author_id"] == alice["id"]


async def test_feed_own_and_followed_newest_first(client, signup, publish):
    alice, alice_headers = await signup("alice")
    bob, bob_headers = await signup("bob")
    _, carol_headers = await signup("carol")

    await client.post(f"/api/v1/users/{bob['id']}/follow", headers=alice_headers)
    p1 = await publish(alice_headers, title="first")
    p2 = await publish(bob_headers, title="second")
    await publish(carol_headers, title="unrelated")

    feed = (await client.get("/api/v1/publications", headers=alice_headers)).json()
    assert [p["id"] for p in feed] == [p2["id"], p1["id"]]
    assert {p["author_handle"] for p in feed} == {"alice", "bob"}


async def test_feed_of_new_user_is_empty(client, signup):
    _, headers = await signup("alice")
    response = await client.get("/api/v1/publications", headers=headers)
    assert response.status_code == 200
    assert response.json() == []


async def test_follow_is_one_directional(client, signup, publish):
    _, alice_headers = await signup("alice")
    bob, bob_headers = await signup("bob")
    await client.post(f"/api/v1/users/{bob['id']}/follow", headers=alice_headers)
    await publish(alice_headers)
    assert (await client.get("/api/v1/publications", headers=bob_headers)).json() == []


async def test_many_likes_do_not_duplicate_feed_entries(client, signup, publish):
    alice, alice_headers = await signup("alice")
    pub = await publish(alice_headers)
    for handle in ("bob", "carol", "dave"):
        _, headers = await signup(handle)
        await client.post(f"/api/v1/users/{alice['id']}/follow", headers=headers)
        await client.post(f"/api/v1/publications/{pub['id']}/like", headers=headers)

    feed = (await client.get("/api/v1/publications", headers=alice_headers)).json()
    assert len(feed) == 1
    assert feed[0]["likes"] == 3


async def test_like_toggle(client, signup, publish):
    _, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    pub = await publish(alice_headers)

    liked = await client.post(f"/api/v1/publications/{pub['id']}/like", headers=bob_headers)
    assert liked.status_code == 200
    assert liked.json() == {"publication_id": pub["id"], "liked": True, "likes": 1}

    self_like = await client.post(
        f"/api/v1/publications/{pub['id']}/like", headers=alice_headers,
    )
    assert self_like.json()["likes"] == 2

    unliked = await client.post(f"/api/v1/publications/{pub['id']}/like", headers=bob_headers)
    assert unliked.json() == {"publication_id": pub["id"], "liked": False, "likes": 1}

    fetched = await client.get(f"/api/v1/publications/{pub['id']}", headers=bob_headers)
    assert fetched.json()["likes"] == 1


async def test_non_author_update_is_403_and_unchanged(client, signup, publish):
    _, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    pub = await publish(alice_headers, title="original", content="original body")

    response = await client.put(
        f"/api/v1/publications/{pub['id']}", headers=bob_headers,
        json={"title": "hacked", "content": "hacked"},
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"

    fetched = await client.get(f"/api/v1/publications/{pub['id']}", headers=bob_headers)
    assert fetched.json()["title"] == "original"
    assert fetched.json()["content"] == "original body"


async def test_non_author_delete_is_403(client, signup, publish):
    _, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    pub = await publish(alice_headers)
    response = await client.delete(f"/api/v1/publications/{pub['id']}", headers=bob_headers)
    assert response.status_code == 403
    still = await client.get(f"/api/v1/publications/{pub['id']}", headers=alice_headers)
    assert still.status_code == 200


async def test_author_updates_and_deletes(client, signup, publish):
    _, headers = await signup("alice")
    pub = await publish(headers)

    updated = await client.put(
        f"/api/v1/publications/{pub['id']}", headers=headers,
        json={"title": "new title", "content": "new content"},
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "new title"

    deleted = await client.delete(f"/api/v1/publications/{pub['id']}", headers=headers)
    assert deleted.status_code == 204
    gone = await client.get(f"/api/v1/publications/{pub['id']}", headers=headers)
    assert gone.status_code == 404


@pytest.mark.parametrize("method, suffix", [
    ("get", ""), ("put", ""), ("delete", ""), ("post", "/like"),
])
async def test_unknown_publication_is_404(client, signup, method, suffix):
    _, headers = await signup("alice")
    kwargs = {"headers": headers}
    if method == "put":
        kwargs["json"] = {"title": "t", "content": "c"}
    response = await client.request(method.upper(), f"/api/v1/publications/999{suffix}", **kwargs)
    assert response.status_code == 404


@pytest.mark.parametrize("publication_id", ["0", "2147483648", "99999999999999999999999"])
async def test_out_of_range_publication_id_is_400(client, signup, publication_id):
    _, headers = await signup("alice")
    for method, suffix in (("GET", ""), ("DELETE", ""), ("POST", "/like")):
        response = await client.request(
            method, f"/api/v1/publications/{publication_id}{suffix}", headers=headers,
        )
        assert response.status_code == 400, (method, suffix)
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_user_publications_listing(client, signup, publish):
    alice, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    first = await publish(alice_headers, title="one")
    second = await publish(alice_headers, title="two")
    await publish(bob_headers, title="bobs")

    response = await client.get(
        f"/api/v1/users/{alice['id']}/publications", headers=bob_headers,
    )
    assert [p["id"] for p in response.json()] == [second["id"], first["id"]]


async def test_unfollow_removes_posts_from_feed(client, signup, publish):
    _, alice_headers = await signup("alice")
    bob, bob_headers = await signup("bob")
    await client.post(f"/api/v1/users/{bob['id']}/follow", headers=alice_headers)
    post = await publish(bob_headers)
    feed = (await client.get("/api/v1/publications", headers=alice_headers)).json()
    assert [p["id"] for p in feed] == [post["id"]]

    await client.post(f"/api/v1/users/{bob['id']}/follow", headers=alice_headers)
    assert (await client.get("/api/v1/publications", headers=alice_headers)).json() == []
