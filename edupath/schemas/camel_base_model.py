from datetime import datetime, date
from enum import Enum
from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class CamelCaseBaseModel(BaseModel):
    """
    Base for every EduPath request and response schema.

    Clients send and receive camelCase (`sscGpa`, `universityId`); services
    build models with the snake_case names. Enum values such as application
    status, and dates such as scholarship deadlines, serialize to strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_serializer("*")
    def serialize_any(self, value):
        if isinstance(value, Enum):
            return value.value

        # datetime must come before the date check
        if isinstance(value, datetime):
            return value.isoformat()

        if isinstance(value, date):
            return value.isoformat()

        if isinstance(value, (list, tuple, set)):
            return [self.serialize_any(item) for item in value]

        if isinstance(value, dict):
            return {key: self.serialize_any(val) for key, val in value.items()}

        return value
