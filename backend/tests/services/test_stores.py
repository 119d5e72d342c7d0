"""SQL stores — verifies queries, uniqueness mapping and the edge toggle against SQLite.

Tests:
    - User search is case-insensitive over name and handle; LIKE wildcards are literal
    - Duplicate handle/email raise ConflictError
    - find_feed_for returns own + followed publications only, newest first, once each
    - count_for aggregates likes per publication, omitting unliked ones
    - toggle_pair: two calls restore absence; a lost insert race reports PRESENT;
      an insert that fails for another reason raises ConflictError
    - Deleting a user cascades to publications, follow edges and likes
"""

import pytest
from sqlalchemy import false, func, select

from socialgraph.core.domain_types import EdgeState
from socialgraph.core.errors import ConflictError, ResourceNotFoundError
from socialgraph.models import FollowEdge, LikeEdge, Publication
from socialgraph.stores import edge_toggle
from socialgraph.stores.edge_toggle import toggle_pair
from socialgraph.stores.follows import SqlFollowStore
from socialgraph.stores.likes import SqlLikeStore
from socialgraph.stores.publications import SqlPublicationStore
from socialgraph.stores.users import SqlUserStore

FAKE_HASH = "$2b$04$" + "x" * 53


@pytest.fixture
def users(test_db):
    return SqlUserStore(test_db)


@pytest.fixture
def publications(test_db):
    return SqlPublicationStore(test_db)


@pytest.fixture
def follows(test_db):
    return SqlFollowStore(test_db)


@pytest.fixture
def likes(test_db):
    return SqlLikeStore(test_db)


async def _user(users, handle, name=None):
    return await users.create(
        name or handle.capitalize(), handle, f"{handle}@example.com", FAKE_HASH,
    )


# --- Users --------------------------------------------------------------------

async def test_search_is_case_insensitive(users):
    await _user(users, "alice", "Alice Liddell")
    await _user(users, "bob", "Bob Builder")
    found = await users.search("LIDD")
    assert [u.handle for u in found] == ["alice"]
    found = await users.search("BO")
    assert [u.handle for u in found] == ["bob"]


async def test_search_empty_term_lists_everyone(users):
    await _user(users, "alice")
    await _user(users, "bob")
    assert len(await users.search("")) == 2


async def test_search_treats_wildcards_literally(users):
    await _user(users, "alice")
    await _user(users, "under_score")
    found = await users.search("_")
    assert [u.handle for u in found] == ["under_score"]


async def test_duplicate_handle_conflicts(users):
    await _user(users, "alice")
    with pytest.raises(ConflictError):
        await users.create("Other", "alice", "other@example.com", FAKE_HASH)


async def test_duplicate_email_conflicts(users):
    await _user(users, "alice")
    with pytest.raises(ConflictError):
        await users.create("Other", "other", "alice@example.com", FAKE_HASH)


async def test_find_by_email_returns_credentials(users):
    alice = await _user(users, "alice")
    found = await users.find_by_email("alice@example.com")
    assert found.user_id == alice.id
    assert found.password_hash == FAKE_HASH
    assert await users.find_by_email("nobody@example.com") is None


async def test_missing_user_is_not_found(users):
    with pytest.raises(ResourceNotFoundError):
        await users.find_by_id(999)
    with pytest.raises(ResourceNotFoundError):
        await users.delete(999)


# --- Feed query ---------------------------------------------------------------

async def test_feed_contains_own_and_followed_only(users, publications, follows):
    alice = await _user(users, "alice")
    bob = await _user(users, "bob")
    carol = await _user(users, "carol")
    await follows.toggle_edge(bob.id, alice.id)

    own = await publications.create(alice.id, "mine", "a")
    followed = await publications.create(bob.id, "bobs", "b")
    await publications.create(carol.id, "carols", "c")

    feed = await publications.find_feed_for(alice.id)
    assert [p.id for p in feed] == [followed.id, own.id]


async def test_feed_of_isolated_user_is_own_posts(users, publications):
    alice = await _user(users, "alice")
    assert await publications.find_feed_for(alice.id) == []
    pub = await publications.create(alice.id, "solo", "s")
    assert [p.id for p in await publications.find_feed_for(alice.id)] == [pub.id]


async def test_publication_for_missing_author_is_not_found(publications):
    with pytest.raises(ResourceNotFoundError):
        await publications.create(999, "t", "c")


async def test_owner_of(users, publications):
    alice = await _user(users, "alice")
    pub = await publications.create(alice.id, "t", "c")
    assert await publications.owner_of(pub.id) == alice.id
    with pytest.raises(ResourceNotFoundError):
        await publications.owner_of(999)


# --- Likes --------------------------------------------------------------------

async def test_count_for_groups_by_publication(users, publications, likes):
    alice = await _user(users, "alice")
    bob = await _user(users, "bob")
    p1 = await publications.create(alice.id, "one", "1")
    p2 = await publications.create(alice.id, "two", "2")
    await likes.toggle_edge(alice.id, p1.id)
    await likes.toggle_edge(bob.id, p1.id)

    assert await likes.count_for({p1.id, p2.id}) == {p1.id: 2}
    assert await likes.count_for(set()) == {}


async def test_like_missing_publication_is_not_found(users, likes):
    alice = await _user(users, "alice")
    with pytest.raises(ResourceNotFoundError):
        await likes.toggle_edge(alice.id, 999)


# --- Edge toggle --------------------------------------------------------------

async def test_follow_toggle_twice_restores_absence(test_db, users, follows):
    alice = await _user(users, "alice")
    bob = await _user(users, "bob")
    assert await follows.toggle_edge(bob.id, alice.id) is EdgeState.PRESENT
    assert [u.id for u in await follows.list_followers(bob.id)] == [alice.id]
    assert [u.id for u in await follows.list_following(alice.id)] == [bob.id]
    assert await follows.toggle_edge(bob.id, alice.id) is EdgeState.ABSENT
    assert await test_db.scalar(select(func.count()).select_from(FollowEdge)) == 0


async def test_follow_missing_user_is_not_found(users, follows):
    alice = await _user(users, "alice")
    with pytest.raises(ResourceNotFoundError):
        await follows.toggle_edge(999, alice.id)


async def test_lost_insert_race_reports_present(test_db, users, monkeypatch):
    alice = await _user(users, "alice")
    bob = await _user(users, "bob")
    test_db.add(FollowEdge(followed_id=bob.id, follower_id=alice.id))
    await test_db.commit()

    # The concurrent winner's row is invisible to our delete
    real_delete = edge_toggle.delete
    monkeypatch.setattr(
        edge_toggle, "delete", lambda model: real_delete(model).where(false()),
    )
    state = await toggle_pair(
        test_db, FollowEdge, {"followed_id": bob.id, "follower_id": alice.id},
    )
    assert state is EdgeState.PRESENT


async def test_failed_insert_without_edge_conflicts(test_db, users):
    alice = await _user(users, "alice")
    with pytest.raises(ConflictError):
        await toggle_pair(
            test_db, FollowEdge, {"followed_id": 999, "follower_id": alice.id},
        )


# --- Cascades -----------------------------------------------------------------

async def test_user_delete_cascades(
    test_session_factory, users, publications, follows, likes,
):
    alice = await _user(users, "alice")
    bob = await _user(users, "bob")
    pub = await publications.create(alice.id, "t", "c")
    await follows.toggle_edge(alice.id, bob.id)
    await follows.toggle_edge(bob.id, alice.id)
    await likes.toggle_edge(bob.id, pub.id)
    bobs_pub = await publications.create(bob.id, "b", "b")
    await likes.toggle_edge(alice.id, bobs_pub.id)

    await users.delete(alice.id)

    async with test_session_factory() as fresh:
        assert await fresh.scalar(
            select(func.count()).select_from(Publication)
            .where(Publication.author_id == alice.id),
        ) == 0
        assert await fresh.scalar(select(func.count()).select_from(FollowEdge)) == 0
        remaining_likes = (await fresh.execute(select(LikeEdge))).scalars().all()
        assert remaining_likes == []
        assert await fresh.scalar(select(func.count()).select_from(Publication)) == 1


async def test_publication_delete_cascades_likes(test_db, users, publications, likes):
    alice = await _user(users, "alice")
    pub = await publications.create(alice.id, "t", "c")
    await likes.toggle_edge(alice.id, pub.id)
    await publications.delete(pub.id)
    assert await test_db.scalar(select(func.count()).select_from(LikeEdge)) == 0
