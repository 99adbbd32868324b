"""
User Shortlist Routes

Every route in this group requires a bearer token. The gate is declared
once on the router, so adding a route here can't forget it.

Adding a post that is already shortlisted succeeds without creating a
second entry; removing a post that is not shortlisted is a 404.
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from shortlist_api.database import get_db
from shortlist_api.dependencies import get_current_user
from shortlist_api.models import User
from shortlist_api.schemas import MAX_ID, PostOut, ShortlistOut, ShortlistStatus
from shortlist_api.services.shortlist import (
    add_to_shortlist,
    list_shortlist,
    remove_from_shortlist,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/shortlist", response_model=ShortlistOut)
async def shortlist_index(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the caller's shortlisted posts, most recently added first."""
    posts = await list_shortlist(db, user)
    return ShortlistOut(data=[PostOut.model_validate(p) for p in posts])


@router.post("/shortlist/{post_id}", response_model=ShortlistStatus)
async def shortlist(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await add_to_shortlist(db, user, post_id)
    return ShortlistStatus(post_id=post_id, shortlisted=True)


@router.delete("/shortlist/{post_id}", response_model=ShortlistStatus)
async def unshortlist(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await remove_from_shortlist(db, user, post_id)
    return ShortlistStatus(post_id=post_id, shortlisted=False)
