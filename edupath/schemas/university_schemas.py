from datetime import date
from typing import Optional
from pydantic import Field

from edupath.db.models import UniversityType
from edupath.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class UniversityBody(BaseModel):
    """Create/replace body for a university; updates are full replacements"""

    name: str = Field(..., min_length=1, max_length=200, description="Name")
    type: UniversityType = Field(..., description="Public or Private")
    location: str = Field(..., min_length=1, max_length=100, description="City")
    description: Optional[str] = Field(None, description="Free-text description")
    min_ssc_gpa: Optional[float] = Field(
        None, ge=0.0, le=5.0, description="Minimum SSC GPA"
    )
    min_hsc_gpa: Optional[float] = Field(
        None, ge=0.0, le=5.0, description="Minimum HSC GPA"
    )
    website: Optional[str] = Field(None, max_length=500, description="External link")
    image_url: Optional[str] = Field(None, max_length=500, description="Image link")


class UniversityResponse(UniversityBody):
    id: int = Field(..., description="University ID")


class UniversityEligibilityItem(UniversityResponse):
    eligible: bool = Field(..., description="Whether the student meets both minimums")


class ScholarshipBody(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Name")
    university_id: int = Field(..., description="Owning university ID")
    amount: Optional[str] = Field(None, max_length=100, description="Award")
    deadline: Optional[date] = Field(None, description="Application deadline")
    description: Optional[str] = Field(None, description="Free-text description")


class ScholarshipResponse(BaseModel):
    id: int = Field(..., description="Scholarship ID")
    name: str
    university_id: Optional[int] = None
    university_name: Optional[str] = Field(
        None, description="Owning university name, null if the university is gone"
    )
    amount: Optional[str] = None
    deadline: Optional[date] = None
    description: Optional[str] = None
