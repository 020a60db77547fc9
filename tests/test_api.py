import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session
from starlette.websockets import WebSocketDisconnect

from edupath.config.settings import settings
from edupath.db.models import ApplicationStatus, Notification, User

from .conftest import auth_headers

API = settings.API_PREFIX

pytestmark = pytest.mark.integration


def _error_code(response) -> str:
    return response.json()["meta"]["error_code"]


class TestAuthEndpoints:
    """Test registration, login and the identity endpoints."""

    def test_register_and_login(self, client: TestClient, db_session: Session):
        response = client.post(
            f"{API}/shared/auth/register",
            json={
                "name": "Nusrat Jahan",
                "email": "Nusrat@Example.com",
                "password": "secret123",
                "sscGpa": 5.0,
                "hscGpa": 4.83,
                "groupName": "Science",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "nusrat@example.com"
        assert body["data"]["user"]["role"] == "student"
        assert body["data"]["user"]["hscGpa"] == 4.83
        assert "passwordHash" not in body["data"]["user"]
        assert body["data"]["accessToken"]

        stored = db_session.execute(
            select(User).where(User.email == "nusrat@example.com")
        ).scalar_one()
        assert stored.password_hash != "secret123"

        login = client.post(
            f"{API}/shared/auth/login",
            json={"email": "nusrat@example.com", "password": "secret123"},
        )
        assert login.status_code == 200
        token = login.json()["data"]["accessToken"]

        me = client.get(
            f"{API}/shared/auth/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert me.status_code == 200
        assert me.json()["data"]["name"] == "Nusrat Jahan"
        assert me.json()["data"]["lastActive"] is not None

    def test_duplicate_email_is_rejected(self, client: TestClient, student: User):
        response = client.post(
            f"{API}/shared/auth/register",
            json={"name": "Copy", "email": student.email, "password": "secret123"},
        )
        assert response.status_code == 400
        assert _error_code(response) == "EMAIL_ALREADY_REGISTERED"

    def test_wrong_password(self, client: TestClient, student: User):
        response = client.post(
            f"{API}/shared/auth/login",
            json={"email": student.email, "password": "not-it"},
        )
        assert response.status_code == 401
        assert _error_code(response) == "INVALID_CREDENTIALS"

    def test_invalid_body_is_422(self, client: TestClient):
        response = client.post(
            f"{API}/shared/auth/register",
            json={"name": "", "email": "not-an-email", "password": "x"},
        )
        assert response.status_code == 422
        assert response.json()["errors"]

    def test_register_password_over_72_bytes_is_422(self, client: TestClient):
        # 40 characters, 80 bytes in UTF-8
        response = client.post(
            f"{API}/shared/auth/register",
            json={"name": "Eva", "email": "eva@example.com", "password": "é" * 40},
        )
        assert response.status_code == 422
        assert _error_code(response) == "VALIDATION_ERROR"
        fields = [error["field"] for error in response.json()["errors"]]
        assert "body -> password" in fields

    def test_multibyte_password_within_72_bytes(self, client: TestClient):
        password = "é" * 36
        register = client.post(
            f"{API}/shared/auth/register",
            json={"name": "Eva", "email": "eva@example.com", "password": password},
        )
        assert register.status_code == 201

        login = client.post(
            f"{API}/shared/auth/login",
            json={"email": "eva@example.com", "password": password},
        )
        assert login.status_code == 200

    def test_login_password_over_72_bytes_is_422(
        self, client: TestClient, student: User
    ):
        response = client.post(
            f"{API}/shared/auth/login",
            json={"email": student.email, "password": "é" * 40},
        )
        assert response.status_code == 422
        assert _error_code(response) == "VALIDATION_ERROR"

    def test_ping_refreshes_last_active(
        self, client: TestClient, db_session: Session, student: User, student_headers
    ):
        assert student.last_active is None

        response = client.post(f"{API}/shared/auth/ping", headers=student_headers)

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(User, student.id).last_active is not None

    def test_missing_token(self, client: TestClient):
        response = client.get(f"{API}/shared/auth/me")
        assert response.status_code == 401
        assert _error_code(response) == "TOKEN_MISSING"

    def test_garbage_token(self, client: TestClient):
        response = client.get(
            f"{API}/shared/auth/me", headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 401
        assert _error_code(response) == "TOKEN_INVALID"

    def test_health_echoes_request_id(self, client: TestClient):
        response = client.get(f"{API}/shared/health")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "healthy"
        assert response.headers["X-Request-ID"] == response.json()["request_id"]


class TestCatalogEndpoints:
    """Test public university and scholarship listings."""

    def test_scholarship_with_deleted_university_keeps_row(
        self,
        client: TestClient,
        admin_headers,
        make_university,
        make_scholarship,
    ):
        university = make_university(name="SUST")
        make_scholarship(university.id, name="SUST Merit")

        deleted = client.delete(
            f"{API}/admin/universities/{university.id}", headers=admin_headers
        )
        assert deleted.status_code == 200

        response = client.get(f"{API}/shared/scholarships")
        assert response.status_code == 200
        scholarships = response.json()["data"]
        assert len(scholarships) == 1
        assert scholarships[0]["name"] == "SUST Merit"
        assert scholarships[0].get("universityName") is None

    def test_university_lookup(self, client: TestClient, make_university):
        university = make_university(name="BUET")

        found = client.get(f"{API}/shared/universities/{university.id}")
        missing = client.get(f"{API}/shared/universities/999")

        assert found.json()["data"]["name"] == "BUET"
        assert found.json()["data"]["type"] == "Public"
        assert missing.status_code == 404
        assert _error_code(missing) == "UNIVERSITY_NOT_FOUND"

    def test_admin_creates_scholarship_for_unknown_university(
        self, client: TestClient, admin_headers
    ):
        response = client.post(
            f"{API}/admin/scholarships",
            json={"name": "Ghost Grant", "universityId": 77},
            headers=admin_headers,
        )
        assert response.status_code == 404
        assert _error_code(response) == "UNIVERSITY_NOT_FOUND"

    def test_admin_university_crud(self, client: TestClient, admin_headers):
        created = client.post(
            f"{API}/admin/universities",
            json={
                "name": "KUET",
                "type": "Public",
                "location": "Khulna",
                "minSscGpa": 4.0,
                "minHscGpa": 4.0,
            },
            headers=admin_headers,
        )
        assert created.status_code == 201
        university_id = created.json()["data"]["id"]

        updated = client.put(
            f"{API}/admin/universities/{university_id}",
            json={
                "name": "KUET",
                "type": "Public",
                "location": "Khulna",
                "minSscGpa": 4.5,
                "minHscGpa": 4.5,
            },
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["minSscGpa"] == 4.5


class TestRoleChecks:
    """Test that admin routes need an admin token."""

    def test_admin_route_without_token(self, client: TestClient):
        response = client.get(f"{API}/admin/users")
        assert response.status_code == 401

    def test_admin_route_with_student_token(self, client: TestClient, student_headers):
        response = client.get(f"{API}/admin/users", headers=student_headers)
        assert response.status_code == 403
        assert _error_code(response) == "ADMIN_REQUIRED"

    def test_admin_lists_users(self, client: TestClient, admin_headers, student: User):
        response = client.get(
            f"{API}/admin/users", params={"role": "student"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert [u["email"] for u in response.json()["data"]] == [student.email]


class TestStudentFlow:
    """Test eligibility, applications and documents as a student."""

    def test_eligibility(
        self, client: TestClient, make_user, make_university
    ):
        user = make_user(ssc_gpa=4.5, hsc_gpa=4.49)
        make_university(name="BUET", min_ssc_gpa=4.5, min_hsc_gpa=4.5)
        make_university(name="Open", min_ssc_gpa=None, min_hsc_gpa=None)

        response = client.get(f"{API}/student/eligibility", headers=auth_headers(user))

        data = response.json()["data"]
        assert response.status_code == 200
        assert [u["eligible"] for u in data["universities"]] == [False, True]
        assert [u["name"] for u in data["eligibleUniversities"]] == ["Open"]
        assert data["eligibleCount"] == 1

    def test_update_profile_changes_eligibility(
        self, client: TestClient, student_headers, make_university
    ):
        university = make_university(min_ssc_gpa=4.5, min_hsc_gpa=4.5)

        client.put(
            f"{API}/student/profile",
            json={"name": "Rahim Uddin", "sscGpa": 4.0, "hscGpa": 4.0},
            headers=student_headers,
        )
        response = client.get(
            f"{API}/student/eligibility/{university.id}", headers=student_headers
        )

        assert response.json()["data"]["eligible"] is False

    def test_apply_twice_is_rejected(
        self, client: TestClient, student_headers, make_university
    ):
        university = make_university()

        first = client.post(
            f"{API}/student/applications",
            json={"universityId": university.id},
            headers=student_headers,
        )
        second = client.post(
            f"{API}/student/applications",
            json={"universityId": university.id},
            headers=student_headers,
        )

        assert first.status_code == 201
        assert first.json()["data"]["status"] == "pending"
        assert first.json()["data"]["universityName"] == "BUET"
        assert second.status_code == 400
        assert _error_code(second) == "APPLICATION_ALREADY_EXISTS"

    def test_reapply_after_rejection(
        self,
        client: TestClient,
        student: User,
        student_headers,
        make_university,
        make_application,
    ):
        university = make_university()
        make_application(student.id, university.id, status=ApplicationStatus.REJECTED)

        response = client.post(
            f"{API}/student/applications",
            json={"universityId": university.id},
            headers=student_headers,
        )
        assert response.status_code == 201

    def test_apply_to_unknown_targets(self, client: TestClient, student_headers):
        university = client.post(
            f"{API}/student/applications",
            json={"universityId": 404},
            headers=student_headers,
        )
        scholarship = client.post(
            f"{API}/student/scholarship-applications",
            json={"scholarshipId": 404},
            headers=student_headers,
        )
        assert university.status_code == 404
        assert scholarship.status_code == 404
        assert _error_code(scholarship) == "SCHOLARSHIP_NOT_FOUND"

    def test_list_my_applications(
        self,
        client: TestClient,
        student_headers,
        make_university,
        make_scholarship,
    ):
        university = make_university()
        scholarship = make_scholarship(university.id, name="BUET Merit")
        client.post(
            f"{API}/student/applications",
            json={"universityId": university.id},
            headers=student_headers,
        )
        client.post(
            f"{API}/student/scholarship-applications",
            json={"scholarshipId": scholarship.id},
            headers=student_headers,
        )

        response = client.get(f"{API}/student/applications", headers=student_headers)

        data = response.json()["data"]
        assert [a["universityName"] for a in data["universityApps"]] == ["BUET"]
        assert [a["scholarshipName"] for a in data["scholarshipApps"]] == ["BUET Merit"]
        assert data["scholarshipApps"][0]["universityName"] == "BUET"

    def test_documents(self, client: TestClient, student_headers):
        for name in ("SSC Transcript", "HSC Transcript"):
            response = client.post(
                f"{API}/student/documents",
                json={"name": name, "type": "transcript"},
                headers=student_headers,
            )
            assert response.status_code == 201

        response = client.get(f"{API}/student/documents", headers=student_headers)

        documents = response.json()["data"]
        assert [d["name"] for d in documents] == ["HSC Transcript", "SSC Transcript"]
        assert all(d["status"] == "pending" for d in documents)


class TestStatusChangeAndNotifications:
    """Test admin decisions end to end, including the live push."""

    def test_status_change_pushes_over_websocket(
        self,
        client: TestClient,
        admin_headers,
        student: User,
        student_headers,
        make_university,
        make_application,
    ):
        university = make_university(name="BUET")
        application = make_application(student.id, university.id)

        with client.websocket_connect(f"{API}/ws?userId={student.id}") as websocket:
            response = client.put(
                f"{API}/admin/applications/{application.id}/status",
                json={"status": "approved"},
                headers=admin_headers,
            )
            pushed = websocket.receive_json()

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "approved"
        assert data["message"] == "Your application for BUET has been approved."
        assert data["notification"]["delivered"] is True
        assert pushed == {
            "kind": "NOTIFICATION",
            "message": "Your application for BUET has been approved.",
        }

        notifications = client.get(
            f"{API}/shared/notifications", headers=student_headers
        ).json()["data"]
        assert notifications["unreadCount"] == 1
        assert notifications["notifications"][0]["message"] == data["message"]
        assert notifications["notifications"][0]["isRead"] is False

    def test_offline_student_sees_notification_later(
        self,
        client: TestClient,
        admin_headers,
        student: User,
        student_headers,
        make_document,
    ):
        document = make_document(student.id, name="Birth Certificate")

        response = client.put(
            f"{API}/admin/documents/{document.id}/status",
            json={"status": "rejected"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["notification"]["delivered"] is False
        assert (
            response.json()["data"]["notification"]["deliveryError"] == "NO_CHANNEL"
        )

        listing = client.get(f"{API}/shared/notifications", headers=student_headers)
        assert listing.json()["data"]["notifications"][0]["message"] == (
            'Your document "Birth Certificate" has been rejected.'
        )

        read = client.post(f"{API}/shared/notifications/read", headers=student_headers)
        assert read.json()["data"]["allAsReadCount"] == 1

        listing = client.get(f"{API}/shared/notifications", headers=student_headers)
        assert listing.json()["data"]["unreadCount"] == 0

    def test_unknown_application_is_404_without_notification(
        self, client: TestClient, db_session: Session, admin_headers
    ):
        response = client.put(
            f"{API}/admin/applications/999/status",
            json={"status": "approved"},
            headers=admin_headers,
        )
        assert response.status_code == 404
        assert _error_code(response) == "APPLICATION_NOT_FOUND"
        assert db_session.execute(select(Notification)).scalars().all() == []

    def test_pending_is_not_a_valid_decision(
        self, client: TestClient, admin_headers, student: User, make_document
    ):
        document = make_document(student.id)
        response = client.put(
            f"{API}/admin/documents/{document.id}/status",
            json={"status": "pending"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_notifications_are_capped_and_newest_first(
        self,
        client: TestClient,
        db_session: Session,
        student: User,
        student_headers,
    ):
        for i in range(25):
            db_session.add(Notification(user_id=student.id, message=f"Message {i}"))
        db_session.commit()

        data = client.get(
            f"{API}/shared/notifications", headers=student_headers
        ).json()["data"]

        assert len(data["notifications"]) == settings.NOTIFICATION_PAGE_SIZE
        assert data["notifications"][0]["message"] == "Message 24"
        assert data["unreadCount"] == 25

    def test_admin_lists_applications_with_student_details(
        self,
        client: TestClient,
        admin_headers,
        student: User,
        make_university,
        make_application,
    ):
        university = make_university()
        make_application(student.id, university.id)

        response = client.get(f"{API}/admin/applications", headers=admin_headers)

        apps = response.json()["data"]["universityApps"]
        assert apps[0]["studentName"] == student.name
        assert apps[0]["studentEmail"] == student.email
        assert apps[0]["universityName"] == "BUET"


class TestWebSocketEndpoint:
    """Test the push channel handshake."""

    def test_missing_user_id_is_refused(self, client: TestClient):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect(f"{API}/ws"):
                pass
        assert exc_info.value.code == 1008

    def test_disconnect_unregisters(self, client: TestClient, app):
        registry = app.state.connection_registry

        with client.websocket_connect(f"{API}/ws?userId=5"):
            assert 5 in registry

        assert 5 not in registry
