"""
Writes that lose a race against another client inserting the same unique row.

A before_flush hook commits the competing row through a separate connection,
so it lands between the lookup and the insert.
"""
import sqlite3
from contextlib import closing

from sqlalchemy import event, func, select

from conftest import add_post, add_profile
from medlink.crud import follow as follow_crud
from medlink.crud import post as post_crud
from medlink.crud import profile as profile_crud
from medlink.db.models import Follow, Post, PostLike, ProfileView
from medlink.schemas.common import ProfileType
from medlink.store.guard import Outcome

EARLIER = "2024-01-01 00:00:00.000000"


def insert_before_next_flush(session, sql, params):
    """Commit ``sql`` from another connection right before the session's next flush."""
    done = []

    def before_flush(sync_session, flush_context, instances):
        if done:
            return
        done.append(True)
        with closing(sqlite3.connect(session.info["path"])) as other:
            other.execute(sql, params)
            other.commit()

    event.listen(session.sync_session, "before_flush", before_flush)


async def _count(db, model):
    count = await db.scalar(select(func.count()).select_from(model))
    await db.rollback()
    return count


async def test_concurrent_profile_view_refreshes_existing_row(file_db):
    await add_profile(file_db, "alice")
    await add_profile(file_db, "bob")
    insert_before_next_flush(
        file_db,
        "INSERT INTO profile_views (id, viewer_id, profile_id, viewed_at, created_at) VALUES (?, ?, ?, ?, ?)",
        ("view-other", "bob", "alice", EARLIER, EARLIER),
    )

    result = await profile_crud.record_profile_view(file_db, "bob", "alice")

    assert result.outcome is Outcome.SUCCESS
    assert result.value is True
    assert await _count(file_db, ProfileView) == 1
    viewed_at = await file_db.scalar(select(ProfileView.viewed_at).where(ProfileView.id == "view-other"))
    assert viewed_at.year > 2024


async def test_concurrent_follow_returns_winning_row(file_db):
    await add_profile(file_db, "alice")
    await add_profile(file_db, "clinic", profile_type="institution")
    insert_before_next_flush(
        file_db,
        "INSERT INTO follows (id, follower_id, following_id, follower_type, following_type, created_at) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        ("follow-other", "alice", "clinic", "individual", "institution", EARLIER),
    )

    result = await follow_crud.follow_user(
        file_db, "alice", "clinic", following_type=ProfileType.INSTITUTION,
    )

    assert result.outcome is Outcome.SUCCESS
    assert result.value.id == "follow-other"
    assert result.value.following_type is ProfileType.INSTITUTION
    assert await _count(file_db, Follow) == 1


async def test_concurrent_like_is_a_duplicate(file_db):
    await add_profile(file_db, "alice")
    await add_profile(file_db, "bob")
    post_id = await add_post(file_db, "alice", "popular")
    insert_before_next_flush(
        file_db,
        "INSERT INTO post_likes (id, post_id, user_id, created_at) VALUES (?, ?, ?, ?)",
        ("like-other", post_id, "bob", EARLIER),
    )

    result = await post_crud.like_post(file_db, post_id, "bob")

    assert result.outcome is Outcome.SUCCESS
    assert result.value is False
    assert await _count(file_db, PostLike) == 1
    likes = await file_db.scalar(select(Post.likes_count).where(Post.id == post_id))
    assert likes == 0
