import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from conftest import fetch_users
from auth_service.app.services import userservices

REGISTER_URL = "/api/auth/register"
VERIFY_URL = "/api/auth/verify-confirm"
RESEND_URL = "/api/auth/resend-confirm-otp"

JANE = {
    "firstName": "Jane",
    "lastName": "Doe",
    "email": "jane@x.com",
    "password": "secret1",
}


def register_jane(client, email_client):
    client.post(REGISTER_URL, json=JANE)
    return email_client.last_otp()


def test_register_then_confirm_scenario(client, session_factory, email_client):
    otp = register_jane(client, email_client)

    response = client.post(VERIFY_URL, json={"email": "jane@x.com", "otp": otp})
    assert response.status_code == 200
    assert response.json() == {
        "status": True,
        "status_code": response.json()["status_code"],
        "message": "Account confirmed success.",
    }

    [user] = fetch_users(session_factory, email="jane@x.com")
    assert user.is_confirmed is True
    assert user.confirm_otp is None

    again = client.post(VERIFY_URL, json={"email": "jane@x.com", "otp": otp})
    assert again.status_code == 401
    assert again.json()["message"] == "Account already confirmed."


def test_verify_accepts_numeric_otp(client, session_factory, email_client):
    otp = register_jane(client, email_client)

    response = client.post(
        VERIFY_URL, json={"email": "jane@x.com", "otp": int(otp)})

    assert response.status_code == 200


def test_verify_wrong_otp_is_unauthorized(client, session_factory, email_client):
    otp = register_jane(client, email_client)
    wrong = "0000" if otp != "0000" else "1111"

    response = client.post(VERIFY_URL, json={"email": "jane@x.com", "otp": wrong})

    assert response.status_code == 401
    assert response.json()["message"] == "Otp does not match"
    [user] = fetch_users(session_factory, email="jane@x.com")
    assert user.is_confirmed is False
    assert user.confirm_otp == otp


def test_verify_unknown_email_is_unauthorized(client):
    response = client.post(
        VERIFY_URL, json={"email": "ghost@x.com", "otp": "1234"})

    assert response.status_code == 401
    assert response.json()["message"] == "Specified email not found."


def test_verify_requires_email_and_otp(client):
    response = client.post(VERIFY_URL, json={"email": "nope"})

    assert response.status_code == 400
    errors = {e["field"]: e["message"] for e in response.json()["errors"]}
    assert errors == {
        "email": "Email must be a valid email address.",
        "otp": "OTP must be specified.",
    }


def test_confirm_write_failure_is_logged_not_raised(session_factory, monkeypatch, caplog):
    def broken_confirm(self, user_id):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(userservices.CredentialStore,
                        "confirm_user", broken_confirm)

    with caplog.at_level(logging.ERROR):
        userservices.confirm_account(session_factory, uuid.uuid4())

    assert "Failed to persist confirmation" in caplog.text


def test_resend_rotates_otp(client, session_factory, email_client):
    first = register_jane(client, email_client)

    response = client.post(RESEND_URL, json={"email": "jane@x.com"})

    assert response.status_code == 200
    assert response.json()["message"] == "Confirm otp sent."
    assert len(email_client.sent) == 2
    second = email_client.last_otp()

    [user] = fetch_users(session_factory, email="jane@x.com")
    assert user.confirm_otp == second
    assert user.is_confirmed is False

    if first != second:
        stale = client.post(
            VERIFY_URL, json={"email": "jane@x.com", "otp": first})
        assert stale.status_code == 401

    ok = client.post(VERIFY_URL, json={"email": "jane@x.com", "otp": second})
    assert ok.status_code == 200


def test_resend_for_confirmed_account_is_unauthorized(client, email_client):
    otp = register_jane(client, email_client)
    client.post(VERIFY_URL, json={"email": "jane@x.com", "otp": otp})
    sent_before = len(email_client.sent)

    response = client.post(RESEND_URL, json={"email": "jane@x.com"})

    assert response.status_code == 401
    assert response.json()["message"] == "Account already confirmed."
    assert len(email_client.sent) == sent_before


def test_resend_unknown_email_is_unauthorized(client, email_client):
    response = client.post(RESEND_URL, json={"email": "ghost@x.com"})

    assert response.status_code == 401
    assert response.json()["message"] == "Specified email not found."
    assert email_client.sent == []


def test_resend_mail_failure_keeps_current_otp(client, session_factory, email_client):
    otp = register_jane(client, email_client)
    email_client.succeed = False

    response = client.post(RESEND_URL, json={"email": "jane@x.com"})

    assert response.status_code == 500
    [user] = fetch_users(session_factory, email="jane@x.com")
    assert user.confirm_otp == otp

