from dataclasses import dataclass
from typing import Callable, Optional, Type, Union

from fastapi import Depends
from sqlalchemy.orm import Session

from edupath.db.models import (
    ApplicationStatus,
    Document,
    Scholarship,
    ScholarshipApplication,
    University,
    UniversityApplication,
)
from edupath.db.session import get_sync_session
from edupath.schemas.application_schemas import DispatchResult, StatusChangeResponse
from edupath.services.notifications import DispatchOutcome, NotificationDispatcher
from edupath.services.realtime import ConnectionRegistry, get_connection_registry
from edupath.utils.errors import BusinessLogicError, NotFoundError
from edupath.utils.logging import get_logger

logger = get_logger()

StatusBearing = Union[UniversityApplication, ScholarshipApplication, Document]

APPLICATION_MESSAGE = "Your application for {name} has been {status}."
SCHOLARSHIP_APPLICATION_MESSAGE = (
    "Your scholarship application for {name} has been {status}."
)
DOCUMENT_MESSAGE = 'Your document "{name}" has been {status}.'


@dataclass(frozen=True)
class StatusChangeResult:
    record_id: int
    user_id: int
    status: ApplicationStatus
    message: str
    outcome: DispatchOutcome


class StatusChangeService:
    """
    Admin decisions on applications and documents.

    Every transition goes pending -> approved|rejected and follows the same
    steps: fetch the record, resolve the subject name for the message, stage
    the new status, then hand over to the dispatcher, whose commit persists
    status and notification together before the live push is attempted. A
    missing record or subject aborts before anything is written.
    """

    def __init__(self, db_session: Session, registry: ConnectionRegistry):
        self.db = db_session
        self.dispatcher = NotificationDispatcher(db_session, registry)

    async def update_application_status(
        self, application_id: int, status: Union[str, ApplicationStatus]
    ) -> StatusChangeResult:
        return await self._transition(
            model=UniversityApplication,
            record_id=application_id,
            status=status,
            not_found_code="APPLICATION_NOT_FOUND",
            resolve_subject=self._university_name,
            template=APPLICATION_MESSAGE,
        )

    async def update_scholarship_application_status(
        self, application_id: int, status: Union[str, ApplicationStatus]
    ) -> StatusChangeResult:
        return await self._transition(
            model=ScholarshipApplication,
            record_id=application_id,
            status=status,
            not_found_code="SCHOLARSHIP_APPLICATION_NOT_FOUND",
            resolve_subject=self._scholarship_name,
            template=SCHOLARSHIP_APPLICATION_MESSAGE,
        )

    async def update_document_status(
        self, document_id: int, status: Union[str, ApplicationStatus]
    ) -> StatusChangeResult:
        return await self._transition(
            model=Document,
            record_id=document_id,
            status=status,
            not_found_code="DOCUMENT_NOT_FOUND",
            resolve_subject=lambda document: document.name,
            template=DOCUMENT_MESSAGE,
        )

    async def _transition(
        self,
        model: Type[StatusBearing],
        record_id: int,
        status: Union[str, ApplicationStatus],
        not_found_code: str,
        resolve_subject: Callable[[StatusBearing], str],
        template: str,
    ) -> StatusChangeResult:
        new_status = self._parse_decision(status)

        record = self.db.get(model, record_id)
        if record is None:
            raise NotFoundError(
                f"{model.__name__} {record_id} not found", not_found_code
            )

        subject_name = resolve_subject(record)

        if record.status != ApplicationStatus.PENDING:
            raise BusinessLogicError(
                f"{model.__name__} {record_id} is already {record.status.value}",
                "STATUS_ALREADY_DECIDED",
            )

        record.status = new_status
        message = template.format(name=subject_name, status=new_status.value)

        outcome = await self.dispatcher.notify(record.user_id, message)

        logger.info(
            f"{model.__name__} {record_id} set to {new_status.value} for user {record.user_id}"
        )
        return StatusChangeResult(
            record_id=record.id,
            user_id=record.user_id,
            status=new_status,
            message=message,
            outcome=outcome,
        )

    @staticmethod
    def _parse_decision(status: Union[str, ApplicationStatus]) -> ApplicationStatus:
        try:
            parsed = ApplicationStatus(status)
        except ValueError:
            raise BusinessLogicError(f"Unknown status '{status}'", "INVALID_STATUS")

        if parsed == ApplicationStatus.PENDING:
            raise BusinessLogicError(
                "A decided record cannot be moved back to pending", "INVALID_STATUS"
            )
        return parsed

    def _university_name(self, application: UniversityApplication) -> str:
        university: Optional[University] = self.db.get(
            University, application.university_id
        )
        if university is None:
            raise NotFoundError(
                f"University {application.university_id} not found",
                "UNIVERSITY_NOT_FOUND",
            )
        return university.name

    def _scholarship_name(self, application: ScholarshipApplication) -> str:
        scholarship: Optional[Scholarship] = self.db.get(
            Scholarship, application.scholarship_id
        )
        if scholarship is None:
            raise NotFoundError(
                f"Scholarship {application.scholarship_id} not found",
                "SCHOLARSHIP_NOT_FOUND",
            )
        return scholarship.name


def get_status_change_service(
    db_session: Session = Depends(get_sync_session),
    registry: ConnectionRegistry = Depends(get_connection_registry),
) -> StatusChangeService:
    """Dependency function to get StatusChangeService instance"""
    return StatusChangeService(db_session, registry)


def to_status_change_response(result: StatusChangeResult) -> dict:
    """Camel-cased payload for a status change, including how the push went"""
    outcome = result.outcome
    response = StatusChangeResponse(
        id=result.record_id,
        user_id=result.user_id,
        status=result.status.value,
        message=result.message,
        notification=DispatchResult(
            notification_id=outcome.notification_id,
            delivered=outcome.delivered,
            delivery_error=outcome.delivery_error,
        ),
    )
    data = response.model_dump(by_alias=True, exclude={"notification"})
    data["notification"] = response.notification.model_dump(by_alias=True)
    return data
