from datetime import datetime
from typing import Optional
from pydantic import Field

from edupath.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class CreateDocumentRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Document name")
    type: str = Field(..., min_length=1, max_length=100, description="Type tag")


class DocumentItem(BaseModel):
    id: int
    user_id: int
    name: str
    type: str
    status: str
    created_at: datetime
    student_name: Optional[str] = None
