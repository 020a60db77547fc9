import math
from typing import Iterable, List, Optional, Sequence

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from edupath.db.models import University, User
from edupath.db.session import get_sync_session
from edupath.schemas.university_schemas import UniversityEligibilityItem
from edupath.utils.errors import NotFoundError
from edupath.utils.logging import get_logger

logger = get_logger()


def _has_grade(value: Optional[float]) -> bool:
    return value is not None and not math.isnan(value)


def _meets(grade: float, minimum: Optional[float]) -> bool:
    # A university without a minimum on this axis admits any grade
    if minimum is None:
        return True
    return grade >= minimum


def is_eligible(
    ssc_gpa: Optional[float],
    hsc_gpa: Optional[float],
    min_ssc_gpa: Optional[float],
    min_hsc_gpa: Optional[float],
) -> bool:
    """
    Eligible iff both student grades reach the matching university minimums.

    A missing (or NaN) student grade never passes, whatever the thresholds.
    Comparison is plain float `>=`, no rounding or weighting.
    """
    if not (_has_grade(ssc_gpa) and _has_grade(hsc_gpa)):
        return False
    return _meets(ssc_gpa, min_ssc_gpa) and _meets(hsc_gpa, min_hsc_gpa)


def evaluate(user: User, university: University) -> bool:
    return is_eligible(
        user.ssc_gpa, user.hsc_gpa, university.min_ssc_gpa, university.min_hsc_gpa
    )


def filter_eligible(user: User, universities: Iterable[University]) -> List[University]:
    """Return the universities `user` is eligible for, in input order"""
    return [university for university in universities if evaluate(user, university)]


class EligibilityService:
    """Runs the eligibility rule for a student over the stored universities"""

    def __init__(self, db_session: Session):
        self.db = db_session

    async def get_eligibility_overview(self, user_id: int) -> List[UniversityEligibilityItem]:
        """Every university with an eligibility badge for the student"""
        user = await self._get_user(user_id)
        universities = await self._fetch_universities()

        return [
            UniversityEligibilityItem(
                **self._university_fields(university),
                eligible=evaluate(user, university),
            )
            for university in universities
        ]

    async def get_eligible_universities(self, user_id: int) -> List[University]:
        user = await self._get_user(user_id)
        universities = await self._fetch_universities()
        eligible = filter_eligible(user, universities)

        logger.info(
            f"User {user_id} is eligible for {len(eligible)} of {len(universities)} universities"
        )
        return eligible

    async def check_university(
        self, user_id: int, university_id: int
    ) -> UniversityEligibilityItem:
        user = await self._get_user(user_id)
        university = self.db.get(University, university_id)
        if not university:
            raise NotFoundError(
                f"University {university_id} not found", "UNIVERSITY_NOT_FOUND"
            )

        return UniversityEligibilityItem(
            **self._university_fields(university),
            eligible=evaluate(user, university),
        )

    async def _get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found", "USER_NOT_FOUND")
        return user

    async def _fetch_universities(self) -> Sequence[University]:
        result = self.db.execute(select(University).order_by(University.id))
        return result.scalars().all()

    @staticmethod
    def _university_fields(university: University) -> dict:
        return {
            "id": university.id,
            "name": university.name,
            "type": university.type,
            "location": university.location,
            "description": university.description,
            "min_ssc_gpa": university.min_ssc_gpa,
            "min_hsc_gpa": university.min_hsc_gpa,
            "website": university.website,
            "image_url": university.image_url,
        }


def get_eligibility_service(
    db_session: Session = Depends(get_sync_session),
) -> EligibilityService:
    """Dependency function to get EligibilityService instance"""
    return EligibilityService(db_session)
