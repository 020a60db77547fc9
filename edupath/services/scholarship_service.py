from typing import List

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from edupath.db.models import Scholarship, University
from edupath.db.session import get_sync_session
from edupath.schemas.university_schemas import ScholarshipBody, ScholarshipResponse
from edupath.utils.errors import NotFoundError
from edupath.utils.logging import get_logger

logger = get_logger()


class ScholarshipService:
    def __init__(self, db_session: Session):
        self.db = db_session

    async def list_scholarships(self) -> List[ScholarshipResponse]:
        """All scholarships with their university name (null when it was deleted)"""
        result = self.db.execute(
            select(Scholarship, University.name)
            .outerjoin(University, Scholarship.university_id == University.id)
            .order_by(Scholarship.id)
        )
        return [
            self._to_response(scholarship, university_name)
            for scholarship, university_name in result.all()
        ]

    async def get_scholarship(self, scholarship_id: int) -> ScholarshipResponse:
        scholarship = await self._get_or_raise(scholarship_id)
        return self._to_response(scholarship, self._university_name(scholarship))

    async def create_scholarship(self, data: ScholarshipBody) -> ScholarshipResponse:
        university = await self._require_university(data.university_id)

        scholarship = Scholarship(**dict(data))
        self.db.add(scholarship)
        self.db.commit()
        self.db.refresh(scholarship)

        logger.info(f"Created scholarship {scholarship.id} ({scholarship.name})")
        return self._to_response(scholarship, university.name)

    async def update_scholarship(
        self, scholarship_id: int, data: ScholarshipBody
    ) -> ScholarshipResponse:
        scholarship = await self._get_or_raise(scholarship_id)
        university = await self._require_university(data.university_id)

        for field, value in dict(data).items():
            setattr(scholarship, field, value)
        self.db.commit()
        self.db.refresh(scholarship)

        logger.info(f"Updated scholarship {scholarship_id}")
        return self._to_response(scholarship, university.name)

    async def delete_scholarship(self, scholarship_id: int) -> None:
        scholarship = await self._get_or_raise(scholarship_id)
        self.db.delete(scholarship)
        self.db.commit()
        logger.info(f"Deleted scholarship {scholarship_id}")

    async def _get_or_raise(self, scholarship_id: int) -> Scholarship:
        scholarship = self.db.get(Scholarship, scholarship_id)
        if not scholarship:
            raise NotFoundError(
                f"Scholarship {scholarship_id} not found", "SCHOLARSHIP_NOT_FOUND"
            )
        return scholarship

    async def _require_university(self, university_id: int) -> University:
        # Existence is checked on write; later deletes may still orphan the row
        university = self.db.get(University, university_id)
        if not university:
            raise NotFoundError(
                f"University {university_id} not found", "UNIVERSITY_NOT_FOUND"
            )
        return university

    def _university_name(self, scholarship: Scholarship):
        if scholarship.university_id is None:
            return None
        university = self.db.get(University, scholarship.university_id)
        return university.name if university else None

    @staticmethod
    def _to_response(scholarship: Scholarship, university_name) -> ScholarshipResponse:
        return ScholarshipResponse(
            id=scholarship.id,
            name=scholarship.name,
            university_id=scholarship.university_id,
            university_name=university_name,
            amount=scholarship.amount,
            deadline=scholarship.deadline,
            description=scholarship.description,
        )


def get_scholarship_service(
    db_session: Session = Depends(get_sync_session),
) -> ScholarshipService:
    """Dependency function to get ScholarshipService instance"""
    return ScholarshipService(db_session)
