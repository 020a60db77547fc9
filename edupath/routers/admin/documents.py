from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Path, Query, Request

from edupath.schemas.application_schemas import UpdateStatusRequest
from edupath.services.admin.review_service import ReviewService, get_review_service
from edupath.services.admin.status_change_service import (
    StatusChangeService,
    get_status_change_service,
    to_status_change_response,
)
from edupath.utils.responses import ResponseBuilder

documents_router = APIRouter()


@documents_router.get("")
async def list_documents(
    request: Request,
    status: Annotated[
        Optional[str], Query(description="Filter by pending, approved or rejected")
    ] = None,
    review_service: ReviewService = Depends(get_review_service),
):
    documents = await review_service.list_all_documents(status=status)
    return ResponseBuilder.success(
        request=request,
        data=[d.model_dump(by_alias=True) for d in documents],
        message=f"Retrieved {len(documents)} documents",
    )


@documents_router.put("/{document_id}/status")
async def update_document_status(
    body: UpdateStatusRequest,
    request: Request,
    document_id: Annotated[int, Path(description="Document ID")],
    status_service: StatusChangeService = Depends(get_status_change_service),
):
    """Approve or reject a pending document and notify its owner"""
    result = await status_service.update_document_status(document_id, body.status)
    return ResponseBuilder.success(
        request=request,
        data=to_status_change_response(result),
        message=f"Document {result.status.value}",
    )
