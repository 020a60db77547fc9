from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query, Request

from edupath.services.admin.review_service import ReviewService, get_review_service
from edupath.utils.responses import ResponseBuilder

users_router = APIRouter()


@users_router.get("")
async def list_users(
    request: Request,
    role: Annotated[
        Optional[str], Query(description="Filter by student or admin")
    ] = None,
    review_service: ReviewService = Depends(get_review_service),
):
    """Registered users, newest first; password hashes are never included"""
    users = await review_service.list_users(role=role)
    return ResponseBuilder.success(
        request=request,
        data=[u.model_dump(by_alias=True) for u in users],
        message=f"Retrieved {len(users)} users",
    )
