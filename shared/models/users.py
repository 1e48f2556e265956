import hmac
import uuid
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy import TIMESTAMP, Boolean, Column, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship
from passlib.context import CryptContext

from ..core.database import AuthBase
from ..utils.enums import UserStatus

PHONE_MAX_LENGTH = 20
EMAIL_MAX_LENGTH = 200
NAME_MAX_LENGTH = 100

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class Users(AuthBase):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    phone = Column(String(PHONE_MAX_LENGTH), nullable=True, index=True)
    email = Column(String(EMAIL_MAX_LENGTH), nullable=True, index=True)
    first_name = Column(String(NAME_MAX_LENGTH), nullable=True)
    last_name = Column(String(NAME_MAX_LENGTH), nullable=True)
    password = Column(String(255), nullable=True)

    confirm_otp = Column(String(10), nullable=True)
    is_confirmed = Column(Boolean, nullable=False, default=False)
    status = Column(String(16), nullable=True)

    company_id = Column(UUID(as_uuid=True), ForeignKey(
        "companies.id"), nullable=True)

    # Free-form profile
    city = Column(String(100), nullable=True)
    branch_id = Column(UUID(as_uuid=True), nullable=True)
    address_id = Column(UUID(as_uuid=True), nullable=True)
    profile_pic = Column(Text, nullable=True)
    business_name = Column(String(200), nullable=True)
    full_name = Column(String(200), nullable=True)
    firebase_token = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    company = relationship("Companies", back_populates="users")

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        if not self.password:
            return False
        return bcrypt_context.verify(password, self.password)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value

    # A pending account always holds an OTP, a confirmed one never does.
    def issue_confirm_otp(self, otp: str):
        self.is_confirmed = False
        self.confirm_otp = otp

    def mark_confirmed(self):
        self.is_confirmed = True
        self.confirm_otp = None

    def otp_matches(self, otp: str) -> bool:
        otp = str(otp)
        if self.confirm_otp is None or not otp.isascii():
            return False
        return hmac.compare_digest(str(self.confirm_otp), otp)
