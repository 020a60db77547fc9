from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field

from edupath.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class CreateUniversityApplicationRequest(BaseModel):
    university_id: int = Field(..., description="University to apply to")


class CreateScholarshipApplicationRequest(BaseModel):
    scholarship_id: int = Field(..., description="Scholarship to apply to")


class UpdateStatusRequest(BaseModel):
    """Admin decision; a decided record can never go back to pending"""

    status: Literal["approved", "rejected"] = Field(..., description="Decision")


class UniversityApplicationItem(BaseModel):
    id: int
    user_id: int
    university_id: int
    university_name: Optional[str] = None
    status: str
    applied_at: datetime
    student_name: Optional[str] = None
    student_email: Optional[str] = None


class ScholarshipApplicationItem(BaseModel):
    id: int
    user_id: int
    scholarship_id: int
    scholarship_name: Optional[str] = None
    university_name: Optional[str] = None
    status: str
    applied_at: datetime
    student_name: Optional[str] = None
    student_email: Optional[str] = None


class ApplicationsOverview(BaseModel):
    university_apps: List[UniversityApplicationItem] = Field(default_factory=list)
    scholarship_apps: List[ScholarshipApplicationItem] = Field(default_factory=list)


class DispatchResult(BaseModel):
    notification_id: int
    delivered: bool
    delivery_error: Optional[str] = None


class StatusChangeResponse(BaseModel):
    id: int = Field(..., description="Updated record ID")
    user_id: int = Field(..., description="Owner of the record")
    status: str = Field(..., description="New status")
    message: str = Field(..., description="Notification text sent to the owner")
    notification: DispatchResult
