"""
Post Routes

Listing and creation of posts. Neither route requires authentication.
Listing is paginated and newest first; the page size is bounded by
POSTS_MAX_PAGE_SIZE so a single response can't grow without limit.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from shortlist_api.config import settings
from shortlist_api.database import get_db
from shortlist_api.models import Post
from shortlist_api.schemas import MAX_ID, PostCreate, PostOut, PostPage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PostPage)
@router.get("/", response_model=PostPage, include_in_schema=False)
async def index(
    page: int = Query(1, ge=1, le=MAX_ID),
    per_page: int = Query(settings.POSTS_PAGE_SIZE, ge=1, le=settings.POSTS_MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db)
):
    """
    List posts, newest first.

    Args:
        page: 1-based page number
        per_page: Items per page (1..POSTS_MAX_PAGE_SIZE)
        db: Database session

    Returns:
        The requested page plus the total number of posts
    """
    total = await db.scalar(select(func.count(Post.id)))

    result = await db.execute(
        select(Post)
        .order_by(desc(Post.id))
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    posts = result.scalars().all()

    return PostPage(
        data=[PostOut.model_validate(p) for p in posts],
        page=page,
        per_page=per_page,
        total=total or 0,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostOut)
@router.post("/", status_code=status.HTTP_201_CREATED, response_model=PostOut, include_in_schema=False)
async def create(
    body: PostCreate,
    db: AsyncSession = Depends(get_db)
):
    # TODO: confirm whether post creation should sit behind the bearer gate
    # like /v1/users; it is open to anonymous callers today.
    post = Post(title=body.title, body=body.body)
    db.add(post)
    await db.commit()
    await db.refresh(post)  # Refresh to get auto-generated fields

    logger.info("Created post %s", post.id)
    return PostOut.model_validate(post)
