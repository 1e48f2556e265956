import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from shared.models.companies import Companies
from shared.models.users import Users

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes User/Company records for the auth flows.

    Writes commit immediately; on a database error the session is rolled
    back and the SQLAlchemyError re-raised for the caller to translate.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_user_by_id(self, user_id: UUID) -> Optional[Users]:
        return self.db.query(Users).filter(Users.id == user_id).first()

    def find_user_by_phone(self, phone: str) -> Optional[Users]:
        return self.db.query(Users).filter(Users.phone == phone).first()

    def find_user_by_email(self, email: str) -> Optional[Users]:
        return self.db.query(Users).filter(Users.email == email).first()

    def find_company_by_unique_id(self, unique_id: str) -> Optional[Companies]:
        return (
            self.db.query(Companies)
            .filter(Companies.unique_id == unique_id)
            .first()
        )

    def create_user(self, user: Users) -> Users:
        self.db.add(user)
        return self._commit(user)

    def update_user(self, user: Users) -> Users:
        return self._commit(user)

    def confirm_user(self, user_id: UUID) -> Optional[Users]:
        user = self.find_user_by_id(user_id)
        if user is None:
            return None
        user.mark_confirmed()
        return self._commit(user)

    def _commit(self, user: Users) -> Users:
        try:
            self.db.commit()
            self.db.refresh(user)
            return user
        except SQLAlchemyError:
            self.db.rollback()
            raise


def confirm_account(session_factory, user_id: UUID):
    """Background write for a verified OTP; runs after the response is sent."""
    db = session_factory()
    try:
        if CredentialStore(db).confirm_user(user_id) is None:
            logger.warning(f"Confirm skipped, user {user_id} no longer exists")
    except SQLAlchemyError:
        logger.exception(f"Failed to persist confirmation for user {user_id}")
    finally:
        db.close()
