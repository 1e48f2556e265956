import uuid
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy import TIMESTAMP, Column, String, func
from sqlalchemy.orm import relationship

from ..core.database import AuthBase
from ..utils.enums import CompanyStatus

UNIQUE_ID_MAX_LENGTH = 64


class Companies(AuthBase):
    __tablename__ = "companies"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=True)
    unique_id = Column(String(UNIQUE_ID_MAX_LENGTH), unique=True, index=True, nullable=False)  # join code
    status = Column(String(16), nullable=False,
                    default=CompanyStatus.ACTIVE.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    users = relationship("Users", back_populates="company")
