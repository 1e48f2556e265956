from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
from fastapi import status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from shared.utils.app_status_code import AppStatusCode
from shared.core.config import Settings, settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken

# Credentials are optional; routes that need them depend on validate_current_token
security = HTTPBearer(auto_error=False)


class TokenIssuer:
    """Signs and verifies time-limited access tokens."""

    def __init__(self, config: Settings):
        self.secret = config.JWT_SECRET
        self.algorithm = config.JWT_ALGORITHM
        self.expire_minutes = config.JWT_EXPIRE_MINUTES

    def create_access_token(self, data: dict) -> str:
        payload = data.copy()
        expires = datetime.now(timezone.utc) + \
            timedelta(minutes=self.expire_minutes)
        payload['exp'] = expires
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[dict]:
        """Verify and decode a JWT token."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(settings)


def validate_token(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        token_issuer: TokenIssuer = Depends(get_token_issuer)) -> Optional[UserToken]:
    if credentials is None:
        return None

    payload = token_issuer.verify_token(credentials.credentials)
    if payload is None:
        return error_response(
            message="Invalid or expired token",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    try:
        return UserToken(**payload)
    except ValueError:
        return error_response(
            message="Invalid token structure",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )


def validate_current_token(current_user: Optional[UserToken] = Depends(validate_token)) -> UserToken:
    if current_user is None:
        return error_response(
            message="Authentication token is required",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return current_user
