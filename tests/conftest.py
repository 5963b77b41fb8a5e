import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from hospital_api.core.email_service.email_instance import get_email_service
from hospital_api.core.exceptions import ConflictError, DependencyError
from hospital_api.main import app
from hospital_api.modules.admissions.repository import AdmissionRepository
from hospital_api.modules.auth.models import User
from hospital_api.modules.auth.repository import AuthRepository
from hospital_api.modules.auth.utility import create_token, hash_password
from hospital_api.modules.password_reset.dependencies import get_otp_store
from hospital_api.modules.password_reset.otp_store import OtpStore


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 7, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeAuthRepository:
    def __init__(self):
        self.users = {}

    async def user_exists(self, email):
        return email in self.users

    async def create_user(self, user):
        if user.email in self.users:
            raise ConflictError("User with this email already exists")
        self.users[user.email] = user.model_dump()
        return dict(self.users[user.email])

    async def find_user(self, email):
        user = self.users.get(email)
        return dict(user) if user else None

    async def find_user_by_id(self, id):
        for user in self.users.values():
            if user["id"] == id:
                return dict(user)
        return None

    async def update_password(self, email, hashed_password):
        await asyncio.sleep(0)
        if email not in self.users:
            return False
        self.users[email]["hashed_password"] = hashed_password
        return True


class FakeAdmissionRepository:
    def __init__(self):
        self.rows = []

    async def list_admissions(self, limit=500):
        return [dict(row) for row in self.rows[:limit]]

    async def find_matching(self, query):
        for row in self.rows:
            if all(row.get(key) == value for key, value in query.items()):
                return dict(row)
        return None

    async def create_admission(self, admission):
        self.rows.append(admission.to_document())
        return admission.id

    async def update_by_patient_id(self, patient_id, data):
        matched = [row for row in self.rows if row["patient_id"] == patient_id]
        for row in matched:
            row.update(data)
        return len(matched)

    async def delete_by_patient_id(self, patient_id):
        before = len(self.rows)
        self.rows = [row for row in self.rows if row["patient_id"] != patient_id]
        return before - len(self.rows)


class FakeEmailService:
    def __init__(self):
        self.client = None
        self.sent = []
        self.fail = False

    def send_otp_email(self, user_email, otp, validity_minutes):
        if self.fail:
            raise DependencyError("Failed to send OTP email")
        self.sent.append((user_email, otp, validity_minutes))

    def last_code(self, email):
        codes = [otp for to, otp, _ in self.sent if to == email]
        return codes[-1] if codes else None


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_repo():
    return FakeAuthRepository()


@pytest.fixture
def admission_repo():
    return FakeAdmissionRepository()


@pytest.fixture
def otp_store(clock):
    return OtpStore(clock=clock)


@pytest.fixture
def mailer():
    return FakeEmailService()


def add_user(repo, username, email, password="secret123"):
    user = User(username=username, email=email, hashed_password=hash_password(password))
    repo.users[email] = user.model_dump()
    return user


@pytest.fixture
def alice(auth_repo):
    return add_user(auth_repo, "alice", "user@example.com")


@pytest.fixture
def bob(auth_repo):
    return add_user(auth_repo, "bob", "bob@example.com")


@pytest.fixture
def alice_token(alice):
    return create_token(alice.id)


@pytest.fixture
def client(auth_repo, admission_repo, otp_store, mailer):
    app.dependency_overrides[AuthRepository] = lambda: auth_repo
    app.dependency_overrides[AdmissionRepository] = lambda: admission_repo
    app.dependency_overrides[get_otp_store] = lambda: otp_store
    app.dependency_overrides[get_email_service] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()
