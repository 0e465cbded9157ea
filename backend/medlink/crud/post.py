"""
CRUD operations for posts, comments and likes.
"""
import logging
from typing import List, Optional

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.config import settings
from medlink.db.models import Post, PostComment, PostLike, Profile
from medlink.schemas.common import ProfileType
from medlink.schemas.post import (
    CommentCreate,
    CommentRead,
    CommentWithAuthor,
    PostCreate,
    PostRead,
    PostWithAuthor,
)
from medlink.schemas.profile import AuthorSummary, unknown_author
from medlink.store.guard import RecordNotFound, StoreResult, guard
from medlink.store.relations import attach_related

logger = logging.getLogger(__name__)


def _page_size(limit: Optional[int]) -> int:
    if limit is None:
        return settings.DEFAULT_PAGE_SIZE
    return max(1, min(limit, settings.MAX_PAGE_SIZE))


async def _with_authors(db: AsyncSession, posts: List[PostRead]) -> List[PostWithAuthor]:
    return await attach_related(
        db,
        posts,
        PostWithAuthor,
        key="author_id",
        field="author",
        model=Profile,
        schema=AuthorSummary,
        placeholder=unknown_author,
    )


async def increment_likes_count(db: AsyncSession, post_id: str) -> int:
    """
    Atomically add one to a post's likes_count.

    Returns:
        int: Number of posts updated (0 when the post does not exist)
    """
    result = await db.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(likes_count=Post.likes_count + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def decrement_likes_count(db: AsyncSession, post_id: str) -> int:
    """
    Atomically subtract one from a post's likes_count, never going below zero.
    """
    result = await db.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(likes_count=case((Post.likes_count > 0, Post.likes_count - 1), else_=0))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def get_posts(db: AsyncSession, page: int = 0, limit: Optional[int] = None) -> StoreResult[List[PostWithAuthor]]:
    """
    Get a page of the feed, newest first, with authors attached.

    The total row count is read first; a page starting at or past the end
    returns an empty list without querying for rows.

    Args:
        db: Database session
        page: Zero-based page number
        limit: Page size, capped at MAX_PAGE_SIZE

    Returns:
        StoreResult[List[PostWithAuthor]]: Posts on the page
    """
    page = max(page, 0)
    limit = _page_size(limit)

    async def operation(session: AsyncSession) -> List[PostWithAuthor]:
        total = await session.scalar(select(func.count()).select_from(Post))
        offset = page * limit
        if not total or offset >= total:
            logger.debug(f"No posts at offset {offset} (total {total})")
            return []

        result = await session.execute(
            select(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
        )
        posts = [PostRead.model_validate(row) for row in result.scalars().all()]
        return await _with_authors(session, posts)

    return await guard.run(db, "get_posts", operation, default=list)


async def get_posts_by_author(db: AsyncSession, author_id: str) -> StoreResult[List[PostWithAuthor]]:
    """
    Get all posts by one author, newest first, with the author attached.
    """
    async def operation(session: AsyncSession) -> List[PostWithAuthor]:
        result = await session.execute(
            select(Post)
            .where(Post.author_id == author_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        posts = [PostRead.model_validate(row) for row in result.scalars().all()]
        return await _with_authors(session, posts)

    return await guard.run(db, "get_posts_by_author", operation, default=list)


async def create_post(db: AsyncSession, post_in: PostCreate) -> StoreResult[Optional[PostRead]]:
    """
    Create a new post with zeroed counters.
    """
    async def operation(session: AsyncSession) -> PostRead:
        db_post = Post(
            **post_in.model_dump(mode="json"),
            author_type=ProfileType.INDIVIDUAL.value,
            likes_count=0,
            comments_count=0,
            shares_count=0,
        )
        session.add(db_post)
        await session.flush()
        await session.refresh(db_post)
        return PostRead.model_validate(db_post)

    return await guard.run(db, "create_post", operation, default=None, write=True)


async def create_comment(db: AsyncSession, comment_in: CommentCreate) -> StoreResult[Optional[CommentRead]]:
    """
    Add a comment and bump the post's comments_count in the same transaction.
    """
    async def operation(session: AsyncSession) -> CommentRead:
        bumped = await session.execute(
            update(Post)
            .where(Post.id == comment_in.post_id)
            .values(comments_count=Post.comments_count + 1)
            .execution_options(synchronize_session=False)
        )
        if bumped.rowcount == 0:
            raise RecordNotFound(f"post {comment_in.post_id}")

        db_comment = PostComment(**comment_in.model_dump())
        session.add(db_comment)
        await session.flush()

        await session.refresh(db_comment)
        return CommentRead.model_validate(db_comment)

    return await guard.run(db, "create_comment", operation, default=None, write=True)


async def get_post_comments(db: AsyncSession, post_id: str) -> StoreResult[List[CommentWithAuthor]]:
    """
    Get a post's comments, oldest first, with authors attached.
    """
    async def operation(session: AsyncSession) -> List[CommentWithAuthor]:
        result = await session.execute(
            select(PostComment)
            .where(PostComment.post_id == post_id)
            .order_by(PostComment.created_at.asc())
        )
        comments = [CommentRead.model_validate(row) for row in result.scalars().all()]
        return await attach_related(
            session,
            comments,
            CommentWithAuthor,
            key="author_id",
            field="author",
            model=Profile,
            schema=AuthorSummary,
            placeholder=unknown_author,
        )

    return await guard.run(db, "get_post_comments", operation, default=list)


async def like_post(db: AsyncSession, post_id: str, user_id: str) -> StoreResult[bool]:
    """
    Like a post: insert the like row and increment likes_count atomically.

    Liking twice is a no-op returning False, also when the second like races
    the first. A missing post writes nothing.
    """
    async def find(session: AsyncSession) -> Optional[str]:
        return await session.scalar(
            select(PostLike.id).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        )

    async def operation(session: AsyncSession) -> bool:
        if await find(session) is not None:
            logger.debug(f"Post {post_id} already liked by {user_id}")
            return False

        # Insert before counting; a duplicate must not bump likes_count
        session.add(PostLike(post_id=post_id, user_id=user_id))
        try:
            await session.flush()
        except IntegrityError:
            await session.rollback()
            if await find(session) is not None:
                logger.debug(f"Post {post_id} was liked concurrently by {user_id}")
                return False
            # No duplicate, so the post (or user) reference was rejected
            raise RecordNotFound(f"post {post_id}")

        if await increment_likes_count(session, post_id) == 0:
            raise RecordNotFound(f"post {post_id}")
        return True

    return await guard.run(db, "like_post", operation, default=False, write=True)


async def unlike_post(db: AsyncSession, post_id: str, user_id: str) -> StoreResult[bool]:
    """
    Remove a like and decrement likes_count atomically.

    Returns False when there was no like to remove; the counter is untouched then.
    """
    async def operation(session: AsyncSession) -> bool:
        removed = await session.execute(
            delete(PostLike)
            .where(PostLike.post_id == post_id, PostLike.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        if removed.rowcount == 0:
            return False
        await decrement_likes_count(session, post_id)
        return True

    return await guard.run(db, "unlike_post", operation, default=False, write=True)


async def is_post_liked(db: AsyncSession, post_id: str, user_id: str) -> StoreResult[bool]:
    async def operation(session: AsyncSession) -> bool:
        like_id = await session.scalar(
            select(PostLike.id).where(PostLike.post_id == post_id, PostLike.user_id == user_id).limit(1)
        )
        return like_id is not None

    return await guard.run(db, "is_post_liked", operation, default=False)
