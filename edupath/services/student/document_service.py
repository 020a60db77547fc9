from typing import List

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from edupath.db.models import ApplicationStatus, Document
from edupath.db.session import get_sync_session
from edupath.schemas.document_schemas import CreateDocumentRequest, DocumentItem
from edupath.utils.logging import get_logger

logger = get_logger()


def to_document_item(document: Document, student_name=None) -> DocumentItem:
    return DocumentItem(
        id=document.id,
        user_id=document.user_id,
        name=document.name,
        type=document.type,
        status=document.status.value,
        created_at=document.created_at,
        student_name=student_name,
    )


class DocumentService:
    """Document metadata records; file contents are handled elsewhere"""

    def __init__(self, db_session: Session):
        self.db = db_session

    async def create_document(
        self, user_id: int, data: CreateDocumentRequest
    ) -> DocumentItem:
        document = Document(
            user_id=user_id,
            name=data.name,
            type=data.type,
            status=ApplicationStatus.PENDING,
        )
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)

        logger.info(f"User {user_id} submitted document {document.id} ({document.type})")
        return to_document_item(document)

    async def list_user_documents(self, user_id: int) -> List[DocumentItem]:
        result = self.db.execute(
            select(Document)
            .where(Document.user_id == user_id)
            .order_by(Document.created_at.desc(), Document.id.desc())
        )
        return [to_document_item(doc) for doc in result.scalars().all()]


def get_document_service(
    db_session: Session = Depends(get_sync_session),
) -> DocumentService:
    """Dependency function to get DocumentService instance"""
    return DocumentService(db_session)
