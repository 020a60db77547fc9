from typing import List

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from edupath.db.models import University
from edupath.db.session import get_sync_session
from edupath.schemas.university_schemas import UniversityBody, UniversityResponse
from edupath.utils.errors import NotFoundError
from edupath.utils.logging import get_logger

logger = get_logger()


class UniversityService:
    """Reads for everyone, writes for admins; routers enforce who calls what"""

    def __init__(self, db_session: Session):
        self.db = db_session

    async def list_universities(self) -> List[UniversityResponse]:
        result = self.db.execute(select(University).order_by(University.id))
        return [UniversityResponse.model_validate(u) for u in result.scalars().all()]

    async def get_university(self, university_id: int) -> UniversityResponse:
        return UniversityResponse.model_validate(
            await self._get_or_raise(university_id)
        )

    async def create_university(self, data: UniversityBody) -> UniversityResponse:
        university = University(**dict(data))
        self.db.add(university)
        self.db.commit()
        self.db.refresh(university)

        logger.info(f"Created university {university.id} ({university.name})")
        return UniversityResponse.model_validate(university)

    async def update_university(
        self, university_id: int, data: UniversityBody
    ) -> UniversityResponse:
        university = await self._get_or_raise(university_id)
        for field, value in dict(data).items():
            setattr(university, field, value)
        self.db.commit()
        self.db.refresh(university)

        logger.info(f"Updated university {university_id}")
        return UniversityResponse.model_validate(university)

    async def delete_university(self, university_id: int) -> None:
        """
        Delete a university. Scholarships and applications pointing at it are
        left in place; readers treat the missing university as unknown.
        """
        university = await self._get_or_raise(university_id)
        self.db.delete(university)
        self.db.commit()
        logger.info(f"Deleted university {university_id}")

    async def _get_or_raise(self, university_id: int) -> University:
        university = self.db.get(University, university_id)
        if not university:
            raise NotFoundError(
                f"University {university_id} not found", "UNIVERSITY_NOT_FOUND"
            )
        return university


def get_university_service(
    db_session: Session = Depends(get_sync_session),
) -> UniversityService:
    """Dependency function to get UniversityService instance"""
    return UniversityService(db_session)
