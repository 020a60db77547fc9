from typing import List

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from edupath.db.models import (
    ApplicationStatus,
    Scholarship,
    ScholarshipApplication,
    University,
    UniversityApplication,
)
from edupath.db.session import get_sync_session
from edupath.schemas.application_schemas import (
    ApplicationsOverview,
    ScholarshipApplicationItem,
    UniversityApplicationItem,
)
from edupath.utils.errors import BusinessLogicError, NotFoundError
from edupath.utils.logging import get_logger

logger = get_logger()

# A rejected application may be resubmitted; anything else blocks a duplicate
_OPEN_STATUSES = (ApplicationStatus.PENDING, ApplicationStatus.APPROVED)


class ApplicationService:
    """Student-side application submission and listing"""

    def __init__(self, db_session: Session):
        self.db = db_session

    async def apply_to_university(
        self, user_id: int, university_id: int
    ) -> UniversityApplicationItem:
        university = self.db.get(University, university_id)
        if not university:
            raise NotFoundError(
                f"University {university_id} not found", "UNIVERSITY_NOT_FOUND"
            )

        existing = self.db.execute(
            select(UniversityApplication.id).where(
                UniversityApplication.user_id == user_id,
                UniversityApplication.university_id == university_id,
                UniversityApplication.status.in_(_OPEN_STATUSES),
            )
        ).first()
        if existing:
            raise BusinessLogicError(
                f"Already applied to {university.name}", "APPLICATION_ALREADY_EXISTS"
            )

        application = UniversityApplication(
            user_id=user_id,
            university_id=university_id,
            status=ApplicationStatus.PENDING,
        )
        self.db.add(application)
        self.db.commit()
        self.db.refresh(application)

        logger.info(
            f"User {user_id} applied to university {university_id} (application {application.id})"
        )
        return UniversityApplicationItem(
            id=application.id,
            user_id=application.user_id,
            university_id=application.university_id,
            university_name=university.name,
            status=application.status.value,
            applied_at=application.applied_at,
        )

    async def apply_to_scholarship(
        self, user_id: int, scholarship_id: int
    ) -> ScholarshipApplicationItem:
        scholarship = self.db.get(Scholarship, scholarship_id)
        if not scholarship:
            raise NotFoundError(
                f"Scholarship {scholarship_id} not found", "SCHOLARSHIP_NOT_FOUND"
            )

        existing = self.db.execute(
            select(ScholarshipApplication.id).where(
                ScholarshipApplication.user_id == user_id,
                ScholarshipApplication.scholarship_id == scholarship_id,
                ScholarshipApplication.status.in_(_OPEN_STATUSES),
            )
        ).first()
        if existing:
            raise BusinessLogicError(
                f"Already applied to {scholarship.name}", "APPLICATION_ALREADY_EXISTS"
            )

        application = ScholarshipApplication(
            user_id=user_id,
            scholarship_id=scholarship_id,
            status=ApplicationStatus.PENDING,
        )
        self.db.add(application)
        self.db.commit()
        self.db.refresh(application)

        university = (
            self.db.get(University, scholarship.university_id)
            if scholarship.university_id is not None
            else None
        )

        logger.info(
            f"User {user_id} applied to scholarship {scholarship_id} (application {application.id})"
        )
        return ScholarshipApplicationItem(
            id=application.id,
            user_id=application.user_id,
            scholarship_id=application.scholarship_id,
            scholarship_name=scholarship.name,
            university_name=university.name if university else None,
            status=application.status.value,
            applied_at=application.applied_at,
        )

    async def get_user_applications(self, user_id: int) -> ApplicationsOverview:
        """Both kinds of applications for one student, newest first"""
        return ApplicationsOverview(
            university_apps=await self.list_university_applications(user_id),
            scholarship_apps=await self.list_scholarship_applications(user_id),
        )

    async def list_university_applications(
        self, user_id: int
    ) -> List[UniversityApplicationItem]:
        result = self.db.execute(
            select(UniversityApplication, University.name)
            .outerjoin(University, UniversityApplication.university_id == University.id)
            .where(UniversityApplication.user_id == user_id)
            .order_by(
                UniversityApplication.applied_at.desc(), UniversityApplication.id.desc()
            )
        )
        return [
            UniversityApplicationItem(
                id=app.id,
                user_id=app.user_id,
                university_id=app.university_id,
                university_name=university_name,
                status=app.status.value,
                applied_at=app.applied_at,
            )
            for app, university_name in result.all()
        ]

    async def list_scholarship_applications(
        self, user_id: int
    ) -> List[ScholarshipApplicationItem]:
        result = self.db.execute(
            select(ScholarshipApplication, Scholarship.name, University.name)
            .outerjoin(
                Scholarship, ScholarshipApplication.scholarship_id == Scholarship.id
            )
            .outerjoin(University, Scholarship.university_id == University.id)
            .where(ScholarshipApplication.user_id == user_id)
            .order_by(
                ScholarshipApplication.applied_at.desc(),
                ScholarshipApplication.id.desc(),
            )
        )
        return [
            ScholarshipApplicationItem(
                id=app.id,
                user_id=app.user_id,
                scholarship_id=app.scholarship_id,
                scholarship_name=scholarship_name,
                university_name=university_name,
                status=app.status.value,
                applied_at=app.applied_at,
            )
            for app, scholarship_name, university_name in result.all()
        ]


def get_application_service(
    db_session: Session = Depends(get_sync_session),
) -> ApplicationService:
    """Dependency function to get ApplicationService instance"""
    return ApplicationService(db_session)
