"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.contrib.auth.hashers import make_password
from django.utils import timezone

from accounts.domain.admin import Admin
from accounts.infrastructure.models import Admin as AdminModel
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from accounts.infrastructure.sessions import SignedTokenSessionIssuer
from accounts.ports.session_issuer import SessionIdentity
from core.infrastructure.event_handlers import ALL_EVENTS
from core.infrastructure.events import event_bus
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from tests.fakes import (
    ADMIN_PASSWORD,
    ADMIN_SECRET_KEY,
    SAMPLE_KEY,
    InMemoryAdminRepository,
    InMemoryLicenseRepository,
    PlainPasswordHasher,
    RecordingEmailSender,
    RecordingEventHandler,
)


@pytest.fixture
def admin_repository():
    """Fixture for the Django AdminRepository."""
    return DjangoAdminRepository()


@pytest.fixture
def license_repository():
    """Fixture for the Django LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def password_hasher():
    return PlainPasswordHasher()


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def sample_admin(password_hasher):
    """Fixture for a sample Admin entity with a known password."""
    return Admin.create(
        username="alice",
        name="Alice Admin",
        email="alice@example.com",
        password_hash=password_hasher.hash(ADMIN_PASSWORD),
        secret_key=ADMIN_SECRET_KEY,
        mobile_number="+15550100",
    )


@pytest.fixture
def memory_admin_repository(sample_admin):
    """In-memory AdminRepository holding sample_admin."""
    return InMemoryAdminRepository([sample_admin])


@pytest.fixture
def sample_license():
    """Fixture for a sample License entity expiring in a year."""
    return License.create(
        key=SAMPLE_KEY,
        email="customer@example.com",
        expires_at=timezone.now() + timedelta(days=365),
    )


@pytest.fixture
def memory_license_repository():
    return InMemoryLicenseRepository()


@pytest.fixture
def recorded_events():
    """Capture every domain event published during the test."""
    recorder = RecordingEventHandler()
    for event_type in ALL_EVENTS:
        event_bus.subscribe(event_type, recorder)
    yield recorder
    for event_type in ALL_EVENTS:
        event_bus.unsubscribe(event_type, recorder)


@pytest.fixture
def db_admin(db):
    """Fixture for an Admin row with a known password and secret key."""
    return AdminModel.objects.create(
        username=f"admin{uuid.uuid4().hex[:8]}",
        name="Alice Admin",
        email="alice@example.com",
        password_hash=make_password(ADMIN_PASSWORD),
        secret_key=ADMIN_SECRET_KEY,
        mobile_number="+15550100",
    )


@pytest.fixture
def db_license(db, db_admin, license_repository):
    """Fixture for a License saved in database."""
    license = License.create(
        key=SAMPLE_KEY,
        email="customer@example.com",
        expires_at=timezone.now() + timedelta(days=365),
        created_by_id=db_admin.id,
    )
    return async_to_sync(license_repository.save)(license)


@pytest.fixture
def session_token(db_admin):
    """A valid session token for db_admin."""
    issued = SignedTokenSessionIssuer().issue(
        SessionIdentity(admin_id=db_admin.id, email=db_admin.email, name=db_admin.name)
    )
    return issued.token


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def authenticated_client(api_client, session_token):
    """API client sending db_admin's session as a bearer token."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {session_token}")
    return api_client
