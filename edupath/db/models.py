from typing import List, Optional
from datetime import datetime, date
from sqlalchemy import (
    String,
    Boolean,
    Integer,
    Float,
    Text,
    ForeignKey,
    Enum,
    Index,
    Date,
    DateTime,
    CheckConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
import enum

from edupath.utils.datetime_utils import naive_utc_now


class Base(DeclarativeBase):
    pass


# Enums
class UserRole(enum.Enum):
    STUDENT = "student"
    ADMIN = "admin"


class UniversityType(enum.Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"


class ApplicationStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# Models
class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False
    )  # RFC 5321 max length
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, values_callable=_enum_values),
        default=UserRole.STUDENT,
        nullable=False,
    )
    ssc_gpa: Mapped[Optional[float]] = mapped_column(Float)
    hsc_gpa: Mapped[Optional[float]] = mapped_column(Float)
    group_name: Mapped[Optional[str]] = mapped_column(String(50))
    last_active: Mapped[Optional[datetime]] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=naive_utc_now, nullable=False
    )

    # Relationships
    applications: Mapped[List["UniversityApplication"]] = relationship(
        back_populates="user"
    )
    scholarship_applications: Mapped[List["ScholarshipApplication"]] = relationship(
        back_populates="user"
    )
    documents: Mapped[List["Document"]] = relationship(back_populates="user")
    notifications: Mapped[List["Notification"]] = relationship(back_populates="user")

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "ssc_gpa IS NULL OR (ssc_gpa >= 0 AND ssc_gpa <= 5)",
            name="ck_users_ssc_gpa_range",
        ),
        CheckConstraint(
            "hsc_gpa IS NULL OR (hsc_gpa >= 0 AND hsc_gpa <= 5)",
            name="ck_users_hsc_gpa_range",
        ),
        Index("idx_users_role", "role"),
        Index("idx_users_last_active", "last_active"),
    )


class University(Base):
    __tablename__ = "universities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[UniversityType] = mapped_column(
        Enum(UniversityType, values_callable=_enum_values), nullable=False
    )
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    min_ssc_gpa: Mapped[Optional[float]] = mapped_column(Float)
    min_hsc_gpa: Mapped[Optional[float]] = mapped_column(Float)
    website: Mapped[Optional[str]] = mapped_column(String(500))
    image_url: Mapped[Optional[str]] = mapped_column(String(500))

    # Scholarships keep a weak reference; deleting a university leaves them dangling
    scholarships: Mapped[List["Scholarship"]] = relationship(
        back_populates="university", passive_deletes="all"
    )

    __table_args__ = (
        Index("idx_universities_name", "name"),
        Index("idx_universities_type", "type"),
    )


class Scholarship(Base):
    __tablename__ = "scholarships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    university_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("universities.id", ondelete="NO ACTION")
    )
    amount: Mapped[Optional[str]] = mapped_column(String(100))
    deadline: Mapped[Optional[date]] = mapped_column(Date)
    description: Mapped[Optional[str]] = mapped_column(Text)

    university: Mapped[Optional["University"]] = relationship(
        back_populates="scholarships"
    )

    __table_args__ = (
        Index("idx_scholarships_university_id", "university_id"),
        Index("idx_scholarships_deadline", "deadline"),
    )


class UniversityApplication(Base):
    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=False
    )
    university_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("universities.id", ondelete="NO ACTION"), nullable=False
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, values_callable=_enum_values),
        default=ApplicationStatus.PENDING,
        nullable=False,
    )
    applied_at: Mapped[datetime] = mapped_column(
        DateTime, default=naive_utc_now, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="applications")
    university: Mapped[Optional["University"]] = relationship()

    __table_args__ = (
        Index("idx_applications_user_id", "user_id"),
        Index("idx_applications_university_id", "university_id"),
        Index("idx_applications_status", "status"),
    )


class ScholarshipApplication(Base):
    __tablename__ = "scholarship_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=False
    )
    scholarship_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("scholarships.id", ondelete="NO ACTION"), nullable=False
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, values_callable=_enum_values),
        default=ApplicationStatus.PENDING,
        nullable=False,
    )
    applied_at: Mapped[datetime] = mapped_column(
        DateTime, default=naive_utc_now, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="scholarship_applications")
    scholarship: Mapped[Optional["Scholarship"]] = relationship()

    __table_args__ = (
        Index("idx_sch_applications_user_id", "user_id"),
        Index("idx_sch_applications_scholarship_id", "scholarship_id"),
        Index("idx_sch_applications_status", "status"),
    )


class Document(Base):
    """Document metadata only; file contents are never stored."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, values_callable=_enum_values),
        default=ApplicationStatus.PENDING,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=naive_utc_now, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="documents")

    __table_args__ = (
        Index("idx_documents_user_id", "user_id"),
        Index("idx_documents_status", "status"),
    )


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=naive_utc_now, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="notifications")

    __table_args__ = (
        Index("idx_notifications_user_id", "user_id"),
        Index("idx_notifications_user_read", "user_id", "is_read"),
        Index("idx_notifications_created_at", "created_at"),
    )
