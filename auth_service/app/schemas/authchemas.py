from pydantic import BaseModel, Field, field_validator
from typing import ClassVar, Tuple, Union
from uuid import UUID
from email_validator import EmailNotValidError, validate_email

from shared.models.companies import UNIQUE_ID_MAX_LENGTH
from shared.models.users import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, PHONE_MAX_LENGTH
from shared.wrappers.request_model_wrapper import TrimmedModel


def _required(value: str, message: str) -> str:
    if not value:
        raise ValueError(message)
    return value


def _max_length(value: str, limit: int, label: str) -> str:
    if len(value) > limit:
        raise ValueError(f"{label} must be at most {limit} characters.")
    return value


def _alphanumeric_name(value: str, label: str) -> str:
    _required(value, f"{label} must be specified.")
    if not (value.isascii() and value.isalnum()):
        raise ValueError(f"{label} has non-alphanumeric characters.")
    return _max_length(value, NAME_MAX_LENGTH, label)


def _valid_email(value: str) -> str:
    _required(value, "Email must be specified.")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Email must be a valid email address.")
    return _max_length(value, EMAIL_MAX_LENGTH, "Email")


# -------- Register --------

class RegisterRequest(TrimmedModel):
    untrimmed_fields: ClassVar[Tuple[str, ...]] = ("password",)

    firstName: str = Field(default="", validate_default=True)
    lastName: str = Field(default="", validate_default=True)
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("firstName")
    @classmethod
    def check_first_name(cls, v):
        return _alphanumeric_name(v, "First name")

    @field_validator("lastName")
    @classmethod
    def check_last_name(cls, v):
        return _alphanumeric_name(v, "Last name")

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return _valid_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be 6 characters or greater.")
        return v


class RegisteredUser(BaseModel):
    id: UUID
    firstName: str
    lastName: str
    email: str


# -------- Login (phone + company) --------

class LoginRequest(TrimmedModel):
    phone: str = Field(default="", validate_default=True)
    unique_id: str = Field(default="", validate_default=True)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        _required(v, "Phone number must be specified.")
        return _max_length(v, PHONE_MAX_LENGTH, "Phone number")

    @field_validator("unique_id")
    @classmethod
    def check_unique_id(cls, v):
        _required(v, "Company number must be specified.")
        return _max_length(v, UNIQUE_ID_MAX_LENGTH, "Company number")


class LoginResponse(BaseModel):
    id: str
    company_id: Union[str, int] = 0
    phone: str
    token: str


# -------- Email confirmation --------

class ResendConfirmOtpRequest(TrimmedModel):
    email: str = Field(default="", validate_default=True)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return _valid_email(v)


class VerifyConfirmRequest(ResendConfirmOtpRequest):
    otp: str = Field(default="", validate_default=True)

    @field_validator("otp")
    @classmethod
    def check_otp(cls, v):
        return _required(v, "OTP must be specified.")
