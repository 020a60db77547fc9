import math

import pytest
from sqlalchemy.orm import Session

from edupath.db.models import University, User
from edupath.services.eligibility_service import (
    EligibilityService,
    evaluate,
    filter_eligible,
    is_eligible,
)
from edupath.utils.errors import NotFoundError


@pytest.mark.unit
class TestEligibilityRule:
    """Test the plain grade comparison."""

    def test_grades_equal_to_minimums_are_eligible(self):
        assert is_eligible(4.5, 4.5, 4.5, 4.5) is True

    def test_grade_just_below_minimum_is_not_eligible(self):
        assert is_eligible(4.49, 4.5, 4.5, 4.5) is False
        assert is_eligible(4.5, 4.49, 4.5, 4.5) is False

    def test_both_grades_must_pass(self):
        assert is_eligible(5.0, 3.0, 4.0, 4.0) is False
        assert is_eligible(3.0, 5.0, 4.0, 4.0) is False
        assert is_eligible(5.0, 5.0, 4.0, 4.0) is True

    def test_missing_student_grade_is_never_eligible(self):
        assert is_eligible(None, 5.0, 0.0, 0.0) is False
        assert is_eligible(5.0, None, 0.0, 0.0) is False
        assert is_eligible(None, None, None, None) is False

    def test_nan_student_grade_is_never_eligible(self):
        assert is_eligible(math.nan, 5.0, 2.0, 2.0) is False
        assert is_eligible(5.0, float("nan"), 2.0, 2.0) is False

    def test_missing_university_minimum_admits_any_grade(self):
        assert is_eligible(1.0, 1.0, None, None) is True
        assert is_eligible(1.0, 4.0, None, 4.5) is False

    def test_no_rounding_is_applied(self):
        assert is_eligible(4.499999, 5.0, 4.5, 4.5) is False


@pytest.mark.unit
class TestEvaluateAndFilter:
    """Test evaluation over model instances."""

    def test_evaluate_reads_model_fields(self):
        user = User(ssc_gpa=4.5, hsc_gpa=4.5)
        university = University(min_ssc_gpa=4.5, min_hsc_gpa=4.5)
        assert evaluate(user, university) is True

        user.ssc_gpa = 4.49
        assert evaluate(user, university) is False

    def test_filter_keeps_input_order(self):
        user = User(ssc_gpa=4.0, hsc_gpa=4.0)
        universities = [
            University(name="A", min_ssc_gpa=3.5, min_hsc_gpa=3.5),
            University(name="B", min_ssc_gpa=4.5, min_hsc_gpa=4.5),
            University(name="C", min_ssc_gpa=None, min_hsc_gpa=None),
            University(name="D", min_ssc_gpa=4.0, min_hsc_gpa=4.0),
        ]
        assert [u.name for u in filter_eligible(user, universities)] == ["A", "C", "D"]

    def test_filter_with_missing_grades_returns_nothing(self):
        user = User(ssc_gpa=None, hsc_gpa=4.0)
        universities = [University(name="Open", min_ssc_gpa=None, min_hsc_gpa=None)]
        assert filter_eligible(user, universities) == []


class TestEligibilityService:
    """Test eligibility against stored universities."""

    @pytest.mark.asyncio
    async def test_overview_flags_every_university(
        self, db_session: Session, make_user, make_university
    ):
        user = make_user(ssc_gpa=4.5, hsc_gpa=4.5)
        buet = make_university(name="BUET", min_ssc_gpa=5.0, min_hsc_gpa=5.0)
        du = make_university(name="University of Dhaka", min_ssc_gpa=4.5, min_hsc_gpa=4.5)

        service = EligibilityService(db_session)
        overview = await service.get_eligibility_overview(user.id)

        flags = {item.id: item.eligible for item in overview}
        assert flags == {buet.id: False, du.id: True}

    @pytest.mark.asyncio
    async def test_eligible_universities(
        self, db_session: Session, make_user, make_university
    ):
        user = make_user(ssc_gpa=4.0, hsc_gpa=4.0)
        make_university(name="BUET", min_ssc_gpa=5.0, min_hsc_gpa=5.0)
        open_uni = make_university(name="Open Uni", min_ssc_gpa=None, min_hsc_gpa=None)

        eligible = await EligibilityService(db_session).get_eligible_universities(user.id)
        assert [u.id for u in eligible] == [open_uni.id]

    @pytest.mark.asyncio
    async def test_check_unknown_university_raises(
        self, db_session: Session, student
    ):
        with pytest.raises(NotFoundError) as exc_info:
            await EligibilityService(db_session).check_university(student.id, 999)
        assert exc_info.value.error_code == "UNIVERSITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_user_raises(self, db_session: Session, make_university):
        make_university()
        with pytest.raises(NotFoundError):
            await EligibilityService(db_session).get_eligibility_overview(12345)
