from fastapi import APIRouter, BackgroundTasks, Body, Depends
from sqlalchemy.orm import Session
from shared.core import auth
from shared.core.database import get_auth_db as get_db, get_auth_session_factory
from shared.core.schemas import JsonOutResult, UserToken
from shared.helpers.email_helper import EmailHelper, get_email_helper
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas import authchemas
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Company Auth"])


@router.post("/register", response_model=JsonOutResult[authchemas.RegisteredUser], response_model_exclude_none=True)
def register(
        payload: dict = Body(...),
        db: Session = Depends(get_db),
        mailer: EmailHelper = Depends(get_email_helper)):
    return authservices.register(db, mailer, payload)


@router.post("/login", response_model=JsonOutResult[authchemas.LoginResponse], response_model_exclude_none=True)
def login(
        request: authchemas.LoginRequest,
        db: Session = Depends(get_db),
        token_issuer: auth.TokenIssuer = Depends(auth.get_token_issuer)):
    return authservices.login(db, token_issuer, request)


@router.post("/verify-confirm", response_model=JsonOutResult, response_model_exclude_none=True)
def verify_confirm(
        request: authchemas.VerifyConfirmRequest,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
        session_factory=Depends(get_auth_session_factory)):
    return authservices.verify_confirm(background_tasks, db, session_factory, request)


@router.post("/resend-confirm-otp", response_model=JsonOutResult, response_model_exclude_none=True)
def resend_confirm_otp(
        request: authchemas.ResendConfirmOtpRequest,
        db: Session = Depends(get_db),
        mailer: EmailHelper = Depends(get_email_helper)):
    return authservices.resend_confirm_otp(db, mailer, request)


@router.get("/me", response_model=JsonOutResult[UserToken], response_model_exclude_none=True)
def me(current_user: UserToken = Depends(auth.validate_current_token)):
    return success_response(
        data=current_user,
        message="Token is valid.",
        status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY
    )


@router.get("/health")
def health():
    return {"status": "healthy"}
