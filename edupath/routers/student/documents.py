from typing import Annotated
from fastapi import APIRouter, Depends, Request, status

from edupath.middlewares.auth_middleware import AuthState, require_student
from edupath.schemas.document_schemas import CreateDocumentRequest
from edupath.services.student.document_service import (
    DocumentService,
    get_document_service,
)
from edupath.utils.responses import ResponseBuilder

documents_router = APIRouter()

_OWNER_FIELDS = {"student_name"}


@documents_router.post("", status_code=status.HTTP_201_CREATED)
async def submit_document(
    body: CreateDocumentRequest,
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    document_service: DocumentService = Depends(get_document_service),
):
    """Record a document's metadata for admin review"""
    document = await document_service.create_document(current_user.user_id, body)
    return ResponseBuilder.success(
        request=request,
        data=document.model_dump(by_alias=True, exclude=_OWNER_FIELDS),
        message="Document submitted",
        status_code=status.HTTP_201_CREATED,
    )


@documents_router.get("")
async def get_my_documents(
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    document_service: DocumentService = Depends(get_document_service),
):
    documents = await document_service.list_user_documents(current_user.user_id)
    return ResponseBuilder.success(
        request=request,
        data=[d.model_dump(by_alias=True, exclude=_OWNER_FIELDS) for d in documents],
        message=f"Retrieved {len(documents)} documents",
    )
