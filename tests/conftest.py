import os
import re

os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth_service.app.main import app
from shared.core.auth import TokenIssuer, get_token_issuer
from shared.core.config import Settings
from shared.core.database import AuthBase, get_auth_session_factory
from shared.helpers.email_helper import EmailHelper, get_email_helper
from shared.models.companies import Companies
from shared.models.users import Users
from shared.utils.enums import UserStatus


class FakeEmailClient:
    """Stands in for the SMTP client and records what would have been sent."""

    def __init__(self):
        self.sent = []
        self.succeed = True

    def send_email(self, sender, recipients, subject, text_body, html_body=None):
        if not self.succeed:
            return False
        self.sent.append({
            "sender": sender,
            "recipients": recipients,
            "subject": subject,
            "text_body": text_body,
            "html_body": html_body,
        })
        return True

    def last_otp(self):
        return re.search(r"OTP: (\d+)", self.sent[-1]["html_body"]).group(1)


@pytest.fixture
def test_settings():
    return Settings(
        JWT_SECRET="test-secret",
        JWT_ALGORITHM="HS256",
        JWT_EXPIRE_MINUTES=30,
        EMAIL_SENDER="confirm@test.local",
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    AuthBase.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    AuthBase.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def email_client():
    return FakeEmailClient()


@pytest.fixture
def mailer(test_settings, email_client):
    return EmailHelper(test_settings, mailer=email_client)


@pytest.fixture
def token_issuer(test_settings):
    return TokenIssuer(test_settings)


@pytest.fixture
def client(session_factory, mailer, token_issuer):
    app.dependency_overrides[get_auth_session_factory] = lambda: session_factory
    app.dependency_overrides[get_email_helper] = lambda: mailer
    app.dependency_overrides[get_token_issuer] = lambda: token_issuer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def company(db):
    company = Companies(name="Acme", unique_id="ACME-001")
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def active_user(db, company):
    user = Users(phone="+15550100",
                 status=UserStatus.ACTIVE.value, company_id=company.id)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def fetch_users(session_factory, **filters):
    """Read users through a fresh session so request-side writes are visible."""
    session = session_factory()
    try:
        return session.query(Users).filter_by(**filters).all()
    finally:
        session.close()
