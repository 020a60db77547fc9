from typing import List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from edupath.db.models import (
    ApplicationStatus,
    Document,
    Scholarship,
    ScholarshipApplication,
    University,
    UniversityApplication,
    User,
    UserRole,
)
from edupath.db.session import get_sync_session
from edupath.schemas.application_schemas import (
    ApplicationsOverview,
    ScholarshipApplicationItem,
    UniversityApplicationItem,
)
from edupath.schemas.auth_schemas import UserResponse
from edupath.schemas.document_schemas import DocumentItem
from edupath.services.auth_service import to_user_response
from edupath.services.student.document_service import to_document_item
from edupath.utils.errors import BusinessLogicError


class ReviewService:
    """
    Read side of the admin dashboard: every student, every application and
    every document, each joined with the owner's name. Joins are outer so
    records whose university or scholarship was deleted still show up with a
    null name.
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    async def list_users(self, role: Optional[str] = None) -> List[UserResponse]:
        query = select(User).order_by(User.created_at.desc(), User.id.desc())
        if role is not None:
            try:
                query = query.where(User.role == UserRole(role))
            except ValueError:
                raise BusinessLogicError(f"Unknown role '{role}'", "INVALID_ROLE")
        result = self.db.execute(query)
        return [to_user_response(user) for user in result.scalars().all()]

    async def list_all_applications(
        self, status: Optional[str] = None
    ) -> ApplicationsOverview:
        status_filter = self._parse_status(status)

        uni_query = (
            select(UniversityApplication, University.name, User.name, User.email)
            .outerjoin(University, UniversityApplication.university_id == University.id)
            .join(User, UniversityApplication.user_id == User.id)
            .order_by(
                UniversityApplication.applied_at.desc(), UniversityApplication.id.desc()
            )
        )
        sch_query = (
            select(
                ScholarshipApplication,
                Scholarship.name,
                University.name,
                User.name,
                User.email,
            )
            .outerjoin(
                Scholarship, ScholarshipApplication.scholarship_id == Scholarship.id
            )
            .outerjoin(University, Scholarship.university_id == University.id)
            .join(User, ScholarshipApplication.user_id == User.id)
            .order_by(
                ScholarshipApplication.applied_at.desc(),
                ScholarshipApplication.id.desc(),
            )
        )
        if status_filter is not None:
            uni_query = uni_query.where(UniversityApplication.status == status_filter)
            sch_query = sch_query.where(ScholarshipApplication.status == status_filter)

        university_apps = [
            UniversityApplicationItem(
                id=app.id,
                user_id=app.user_id,
                university_id=app.university_id,
                university_name=university_name,
                status=app.status.value,
                applied_at=app.applied_at,
                student_name=student_name,
                student_email=student_email,
            )
            for app, university_name, student_name, student_email in self.db.execute(
                uni_query
            ).all()
        ]
        scholarship_apps = [
            ScholarshipApplicationItem(
                id=app.id,
                user_id=app.user_id,
                scholarship_id=app.scholarship_id,
                scholarship_name=scholarship_name,
                university_name=university_name,
                status=app.status.value,
                applied_at=app.applied_at,
                student_name=student_name,
                student_email=student_email,
            )
            for (
                app,
                scholarship_name,
                university_name,
                student_name,
                student_email,
            ) in self.db.execute(sch_query).all()
        ]
        return ApplicationsOverview(
            university_apps=university_apps, scholarship_apps=scholarship_apps
        )

    async def list_all_documents(self, status: Optional[str] = None) -> List[DocumentItem]:
        status_filter = self._parse_status(status)

        query = (
            select(Document, User.name)
            .join(User, Document.user_id == User.id)
            .order_by(Document.created_at.desc(), Document.id.desc())
        )
        if status_filter is not None:
            query = query.where(Document.status == status_filter)

        return [
            to_document_item(document, student_name)
            for document, student_name in self.db.execute(query).all()
        ]

    @staticmethod
    def _parse_status(status: Optional[str]) -> Optional[ApplicationStatus]:
        if status is None:
            return None
        try:
            return ApplicationStatus(status)
        except ValueError:
            raise BusinessLogicError(f"Unknown status '{status}'", "INVALID_STATUS")


def get_review_service(
    db_session: Session = Depends(get_sync_session),
) -> ReviewService:
    """Dependency function to get ReviewService instance"""
    return ReviewService(db_session)
