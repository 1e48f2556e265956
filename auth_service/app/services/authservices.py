import logging
from fastapi import BackgroundTasks, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError

from shared.core.auth import TokenIssuer
from shared.core.schemas import UserToken
from shared.helpers.email_helper import EmailHelper
from shared.helpers.json_response_helper import error_response, field_errors, success_response, validation_error_response
from shared.helpers.otp_generator import generate_otp
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserStatus
from shared.wrappers.request_model_wrapper import clean_text
from ..schemas import authchemas
from .userservices import CredentialStore, confirm_account

logger = logging.getLogger(__name__)

OTP_LENGTH = 4


def _email_not_found():
    return error_response(
        message="Specified email not found.",
        status_code=str(AppStatusCode.AUTHENTICATION_USER_INVALID),
        http_status=status.HTTP_401_UNAUTHORIZED
    )


def _already_confirmed():
    return error_response(
        message="Account already confirmed.",
        status_code=str(AppStatusCode.AUTHENTICATION_USER_ALREADY_CONFIRMED),
        http_status=status.HTTP_401_UNAUTHORIZED
    )


def _email_dispatch_failed():
    return error_response(
        message="Unable to send confirmation email. Please try again later.",
        status_code=str(AppStatusCode.EMAIL_DISPATCH_FAILED),
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _store_failed(message: str):
    return error_response(
        message=message,
        status_code=str(AppStatusCode.OPERATION_ERROR),
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


#### REGISTRATION ###

def _validate_registration(store: CredentialStore, payload: dict) -> authchemas.RegisterRequest:
    """Run field rules and the e-mail uniqueness rule into one error list."""
    request = None
    errors = []
    try:
        request = authchemas.RegisterRequest.model_validate(payload)
    except ValidationError as e:
        errors = field_errors(e.errors())

    status_code = AppStatusCode.INVALID_INPUT
    email = clean_text(payload.get("email"))
    if isinstance(email, str) and email and store.find_user_by_email(email):
        errors.append({"field": "email", "message": "E-mail already in use"})
        status_code = AppStatusCode.DUPLICATE_ADD_ERROR

    if errors:
        return validation_error_response(errors, status_code=str(status_code))
    return request


def register(
        db: Session,
        mailer: EmailHelper,
        payload: dict):
    store = CredentialStore(db)
    request = _validate_registration(store, payload)

    user = Users(
        first_name=request.firstName,
        last_name=request.lastName,
        email=request.email,
    )
    user.set_password(request.password)

    otp = generate_otp(OTP_LENGTH)
    user.issue_confirm_otp(otp)

    # Nothing is persisted unless the confirmation email went out
    if not mailer.send_confirm_otp(request.email, otp):
        logger.error(f"Registration aborted, OTP email to {request.email} failed")
        return _email_dispatch_failed()

    try:
        store.create_user(user)
    except SQLAlchemyError:
        logger.exception(f"Failed to save registered user {request.email}")
        return _store_failed("Registration failed.")

    return success_response(
        data=authchemas.RegisteredUser(
            id=user.id,
            firstName=user.first_name,
            lastName=user.last_name,
            email=user.email,
        ),
        message="Registration Success."
    )


#### PHONE / COMPANY LOGIN ###

def _login_payload(token_issuer: TokenIssuer, user: Users) -> authchemas.LoginResponse:
    claims = UserToken(
        id=str(user.id),
        company_id=str(user.company_id) if user.company_id else 0,
        phone=user.phone,
    )
    token = token_issuer.create_access_token(
        claims.model_dump(exclude_none=True))
    return authchemas.LoginResponse(
        id=claims.id,
        company_id=claims.company_id,
        phone=claims.phone,
        token=token,
    )


def login(
        db: Session,
        token_issuer: TokenIssuer,
        request: authchemas.LoginRequest):
    store = CredentialStore(db)

    try:
        user = store.find_user_by_phone(request.phone)

        if user:
            if not user.is_active:
                return error_response(
                    message="Account is not active. Please contact admin.",
                    status_code=str(AppStatusCode.AUTHENTICATION_USER_INACTIVE),
                    http_status=status.HTTP_401_UNAUTHORIZED
                )
            return success_response(
                data=_login_payload(token_issuer, user),
                message="Login Success."
            )

        company = store.find_company_by_unique_id(request.unique_id)
        if not company:
            return error_response(
                message="Company is not active. Please contact admin.",
                status_code=str(AppStatusCode.AUTHENTICATION_COMPANY_INVALID),
                http_status=status.HTTP_404_NOT_FOUND
            )

        # Unserialized find-then-create: two concurrent first logins may both insert
        user = store.create_user(Users(
            phone=request.phone,
            status=UserStatus.ACTIVE.value,
            company_id=company.id,
        ))
    except SQLAlchemyError:
        logger.exception(f"Login failed for phone {request.phone}")
        return _store_failed("Login failed.")

    return success_response(
        data=_login_payload(token_issuer, user),
        message="Registration Success."
    )


#### EMAIL CONFIRMATION ###

def verify_confirm(
        background_tasks: BackgroundTasks,
        db: Session,
        session_factory,
        request: authchemas.VerifyConfirmRequest):
    user = CredentialStore(db).find_user_by_email(request.email)

    if not user:
        return _email_not_found()

    if user.is_confirmed:
        return _already_confirmed()

    if not user.otp_matches(request.otp):
        return error_response(
            message="Otp does not match",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_OTP_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    # Responds before the write lands; failures are only logged
    background_tasks.add_task(confirm_account, session_factory, user.id)

    return success_response(message="Account confirmed success.")


def resend_confirm_otp(
        db: Session,
        mailer: EmailHelper,
        request: authchemas.ResendConfirmOtpRequest):
    store = CredentialStore(db)
    user = store.find_user_by_email(request.email)

    if not user:
        return _email_not_found()

    if user.is_confirmed:
        return _already_confirmed()

    otp = generate_otp(OTP_LENGTH)
    if not mailer.send_confirm_otp(request.email, otp):
        logger.error(f"Resend aborted, OTP email to {request.email} failed")
        return _email_dispatch_failed()

    user.issue_confirm_otp(otp)
    try:
        store.update_user(user)
    except SQLAlchemyError:
        logger.exception(f"Failed to store new OTP for {request.email}")
        return _store_failed("Unable to resend confirmation OTP.")

    return success_response(message="Confirm otp sent.")
