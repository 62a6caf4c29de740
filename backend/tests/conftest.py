# backend/tests/conftest.py
"""
Pytest configuration.

Every test gets a fresh in-memory SQLite database (one shared connection
through StaticPool, foreign keys on) built from the ORM metadata. The app
under test is created with that database injected, so each request opens
its own session exactly as in production.
"""

import os

# Set before any luz import so Settings picks them up.
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-luz"
os.environ["GOOGLE_CLIENT_IDS"] = "client-1.apps.googleusercontent.com"

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from itertools import count
from typing import Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from luz.api.dependencies import get_google_verifier
from luz.auth import create_access_token
from luz.core.google_verify import GoogleProfile, GoogleTokenError
from luz.database import Database
from luz.main import create_app
from luz.models.booking import Booking, BookingStatus
from luz.models.customer import Child, Customer
from luz.models.invite import Invite
from luz.models.slot import Slot
from luz.models.studio import Studio
from luz.models.user import StudioOwner, StudioRole, User



class FakeGoogleVerifier:
    """Stands in for GoogleIdTokenVerifier; no network."""

    def __init__(self, profile: Optional[GoogleProfile] = None, error: Optional[str] = None):
        self.profile = profile or GoogleProfile(
            sub="sub-123",
            email="owner@example.com",
            email_verified=True,
            name="Owner",
            picture="https://img.example.com/owner.png",
        )
        self.error = error
        self.tokens: list[str] = []

    async def verify(self, id_token: str) -> GoogleProfile:
        self.tokens.append(id_token)
        if self.error:
            raise GoogleTokenError(self.error)
        return self.profile


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database = Database(engine=engine)
    database.create_all()
    yield database
    database.drop_all()
    engine.dispose()


@pytest.fixture
def db(database: Database):
    """Session for arranging and inspecting data; commit before calling the API."""
    session = database.session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def google_verifier() -> FakeGoogleVerifier:
    return FakeGoogleVerifier()


@pytest.fixture
def app(database: Database, google_verifier: FakeGoogleVerifier):
    application = create_app(database=database)
    application.dependency_overrides[get_google_verifier] = lambda: google_verifier
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client; not entered as a context manager so the lifespan keeps the engine."""
    test_client = TestClient(app)
    yield test_client
    test_client.close()


class Factory:
    """Creates committed rows for tests."""

    def __init__(self, db: Session):
        self.db = db
        self._seq = count(1)

    def _save(self, entity):
        self.db.add(entity)
        self.db.commit()
        return entity

    def user(self, *, is_admin: bool = False, email: Optional[str] = None) -> User:
        n = next(self._seq)
        return self._save(
            User(
                google_sub=f"google-sub-{n}",
                email=email or f"user{n}@example.com",
                name=f"User {n}",
                is_admin=is_admin,
            )
        )

    def studio(self, owner: Optional[User] = None, *, slug: Optional[str] = None) -> Studio:
        n = next(self._seq)
        studio = self._save(Studio(slug=slug or f"studio-{n}", name=f"Studio {n}"))
        if owner is not None:
            self._save(
                StudioOwner(studio_id=studio.id, user_id=owner.id, role=StudioRole.OWNER.value)
            )
        return studio

    def slot(
        self,
        studio: Studio,
        *,
        max_participants: int = 2,
        min_participants: int = 1,
        for_children: bool = False,
        active: bool = True,
        starts_at: Optional[datetime] = None,
        title: str = "Morning Yoga",
    ) -> Slot:
        return self._save(
            Slot(
                studio_id=studio.id,
                title=title,
                starts_at=starts_at or datetime.now(timezone.utc) + timedelta(days=3),
                duration_min=60,
                price=Decimal("50.00"),
                min_participants=min_participants,
                max_participants=max_participants,
                for_children=for_children,
                active=active,
            )
        )

    def customer(
        self,
        studio: Studio,
        *,
        first_name: str = "Dana",
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Customer:
        n = next(self._seq)
        if email is None and phone is None:
            email = f"customer{n}@example.com"
        return self._save(
            Customer(
                studio_id=studio.id,
                first_name=first_name,
                contact_email=email,
                contact_phone=phone,
            )
        )

    def child(self, customer: Customer, *, first_name: str = "Noa") -> Child:
        return self._save(Child(customer_id=customer.id, first_name=first_name, avatar_key="fox"))

    def booking(
        self,
        slot: Slot,
        *,
        customer: Optional[Customer] = None,
        child: Optional[Child] = None,
        status: BookingStatus = BookingStatus.CONFIRMED,
    ) -> Booking:
        return self._save(
            Booking(
                slot_id=slot.id,
                customer_id=customer.id if customer else None,
                child_id=child.id if child else None,
                status=status.value,
                paid=False,
            )
        )

    def invite(
        self,
        studio: Studio,
        customer: Customer,
        *,
        short_hash: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> Invite:
        n = next(self._seq)
        return self._save(
            Invite(
                studio_id=studio.id,
                customer_id=customer.id,
                short_hash=short_hash or f"{n:016x}",
                expires_at=expires_at or datetime.now(timezone.utc) + timedelta(days=30),
            )
        )


@pytest.fixture
def factory(db: Session) -> Factory:
    return Factory(db)


def auth_headers_for(user: User) -> dict:
    token = create_access_token(user.id, is_admin=bool(user.is_admin))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner(factory: Factory) -> User:
    return factory.user(email="owner@example.com")


@pytest.fixture
def owner_headers(owner: User) -> dict:
    return auth_headers_for(owner)


@pytest.fixture
def admin(factory: Factory) -> User:
    return factory.user(is_admin=True)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return auth_headers_for(admin)


@pytest.fixture
def studio(factory: Factory, owner: User) -> Studio:
    return factory.studio(owner, slug="sunrise-yoga")


@pytest.fixture
def stranger_headers(factory: Factory) -> dict:
    """A signed-in operator who owns nothing."""
    return auth_headers_for(factory.user())


@pytest.fixture
def headers_for():
    return auth_headers_for
