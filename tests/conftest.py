import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("INIT_DB_ON_STARTUP", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Any, Dict, Generator, List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from edupath.db.models import (
    ApplicationStatus,
    Base,
    Document,
    Scholarship,
    ScholarshipApplication,
    University,
    UniversityApplication,
    UniversityType,
    User,
    UserRole,
)
from edupath.db.session import get_sync_session
from edupath.main import create_application
from edupath.services.realtime import ConnectionRegistry, PushChannel
from edupath.utils.auth import AuthUtils


# Test database setup
TEST_DATABASE_URL = "sqlite://"


class FakeChannel(PushChannel):
    """In-memory push channel that records what it was sent"""

    def __init__(self, open_: bool = True, fail: bool = False):
        super().__init__()
        self.sent: List[Dict[str, Any]] = []
        self._open = open_
        self.fail = fail

    async def send(self, message: Dict[str, Any]) -> None:
        if self.fail:
            raise RuntimeError("socket write failed")
        self.sent.append(message)

    def is_open(self) -> bool:
        return self._open and not self.closed


@pytest.fixture
def test_engine():
    """Fresh in-memory database per test; one shared connection across sessions."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, class_=Session, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Create a database session for each test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest.fixture
def app(session_factory) -> FastAPI:
    application = create_application()

    def override_get_sync_session():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    application.dependency_overrides[get_sync_session] = override_get_sync_session
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """HTTP and WebSocket calls made through one client share its event loop."""
    with TestClient(app) as test_client:
        yield test_client


# Test data factories
@pytest.fixture
def make_user(db_session: Session):
    def _make_user(
        name: str = "Rahim Uddin",
        email: str = "rahim@example.com",
        password: str = "secret123",
        role: UserRole = UserRole.STUDENT,
        ssc_gpa=5.0,
        hsc_gpa=5.0,
        **kwargs,
    ) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=AuthUtils.hash_password(password),
            role=role,
            ssc_gpa=ssc_gpa,
            hsc_gpa=hsc_gpa,
            group_name=kwargs.pop("group_name", "Science"),
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_university(db_session: Session):
    def _make_university(
        name: str = "BUET",
        min_ssc_gpa=4.5,
        min_hsc_gpa=4.5,
        type: UniversityType = UniversityType.PUBLIC,
        **kwargs,
    ) -> University:
        university = University(
            name=name,
            type=type,
            location=kwargs.pop("location", "Dhaka"),
            min_ssc_gpa=min_ssc_gpa,
            min_hsc_gpa=min_hsc_gpa,
            **kwargs,
        )
        db_session.add(university)
        db_session.commit()
        db_session.refresh(university)
        return university

    return _make_university


@pytest.fixture
def make_scholarship(db_session: Session):
    def _make_scholarship(university_id, name: str = "Merit Scholarship", **kwargs):
        scholarship = Scholarship(
            name=name,
            university_id=university_id,
            amount=kwargs.pop("amount", "BDT 10,000/month"),
            **kwargs,
        )
        db_session.add(scholarship)
        db_session.commit()
        db_session.refresh(scholarship)
        return scholarship

    return _make_scholarship


@pytest.fixture
def make_application(db_session: Session):
    def _make_application(
        user_id: int,
        university_id: int,
        status: ApplicationStatus = ApplicationStatus.PENDING,
        **kwargs,
    ) -> UniversityApplication:
        application = UniversityApplication(
            user_id=user_id, university_id=university_id, status=status, **kwargs
        )
        db_session.add(application)
        db_session.commit()
        db_session.refresh(application)
        return application

    return _make_application


@pytest.fixture
def make_scholarship_application(db_session: Session):
    def _make_scholarship_application(
        user_id: int,
        scholarship_id: int,
        status: ApplicationStatus = ApplicationStatus.PENDING,
    ) -> ScholarshipApplication:
        application = ScholarshipApplication(
            user_id=user_id, scholarship_id=scholarship_id, status=status
        )
        db_session.add(application)
        db_session.commit()
        db_session.refresh(application)
        return application

    return _make_scholarship_application


@pytest.fixture
def make_document(db_session: Session):
    def _make_document(
        user_id: int,
        name: str = "SSC Transcript",
        type: str = "transcript",
        status: ApplicationStatus = ApplicationStatus.PENDING,
    ) -> Document:
        document = Document(user_id=user_id, name=name, type=type, status=status)
        db_session.add(document)
        db_session.commit()
        db_session.refresh(document)
        return document

    return _make_document


@pytest.fixture
def student(make_user) -> User:
    return make_user()


@pytest.fixture
def admin(make_user) -> User:
    return make_user(
        name="Portal Admin",
        email="admin@example.com",
        role=UserRole.ADMIN,
        ssc_gpa=None,
        hsc_gpa=None,
    )


def auth_headers(user: User) -> Dict[str, str]:
    token = AuthUtils.generate_access_token(
        user_id=user.id, email=user.email, role=user.role.value
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student: User) -> Dict[str, str]:
    return auth_headers(student)


@pytest.fixture
def admin_headers(admin: User) -> Dict[str, str]:
    return auth_headers(admin)
