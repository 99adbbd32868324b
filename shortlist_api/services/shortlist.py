"""
Shortlist Service

Storage logic behind the /v1/users/shortlist routes.

Adding is idempotent: shortlisting a post twice leaves one row. Concurrent
adds for the same (user, post) pair race on the database's unique
constraint; the loser's IntegrityError is taken to mean "already there".
"""

import logging

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shortlist_api.errors import NotFoundError
from shortlist_api.models import Post, Shortlist, User

logger = logging.getLogger(__name__)


async def list_shortlist(db: AsyncSession, user: User) -> list[Post]:
    """Return the user's shortlisted posts, most recently added first."""
    result = await db.execute(
        select(Post)
        .join(Shortlist, Shortlist.post_id == Post.id)
        .filter(Shortlist.user_id == user.id)
        .order_by(desc(Shortlist.id))
    )
    return list(result.scalars().all())


async def is_shortlisted(db: AsyncSession, user_id: int, post_id: int) -> bool:
    result = await db.execute(
        select(Shortlist.id).filter(Shortlist.user_id == user_id, Shortlist.post_id == post_id)
    )
    return result.first() is not None


async def add_to_shortlist(db: AsyncSession, user: User, post_id: int) -> bool:
    """
    Shortlist a post for the user.

    Args:
        db: Database session
        user: Authenticated user
        post_id: Post to add

    Returns:
        True if a new entry was stored, False if it already existed

    Raises:
        NotFoundError: If the post does not exist
    """
    user_id = user.id

    post = await db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")

    if await is_shortlisted(db, user_id, post_id):
        return False

    db.add(Shortlist(user_id=user_id, post_id=post_id))
    try:
        await db.commit()
    except IntegrityError:
        # Another request stored the same pair between our check and commit.
        # Rollback expires loaded instances, so only user_id is used below
        await db.rollback()
        logger.debug("Concurrent shortlist insert for user=%s post=%s", user_id, post_id)
        return False

    logger.info("User %s shortlisted post %s", user_id, post_id)
    return True


async def remove_from_shortlist(db: AsyncSession, user: User, post_id: int) -> None:
    """
    Remove a post from the user's shortlist.

    Raises:
        NotFoundError: If the post is not on the user's shortlist
    """
    user_id = user.id

    result = await db.execute(
        delete(Shortlist).where(Shortlist.user_id == user_id, Shortlist.post_id == post_id)
    )
    if result.rowcount == 0:
        raise NotFoundError("Post is not in your shortlist")

    await db.commit()
    logger.info("User %s removed post %s from shortlist", user_id, post_id)
