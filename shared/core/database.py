from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import AUTH_DATABASE_URL

AuthBase = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2

# Auth DB
auth_engine = create_engine(
    AUTH_DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=300,
    pool_size=POOL_SIZE,          # max idle connections
    max_overflow=MAX_OVERFLOW,      # max temporary extra connections
    pool_timeout=30       # wait time before failing
)
AuthSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=auth_engine)


# Dependency

def get_auth_session_factory():
    """Session factory for work that outlives the request session."""
    return AuthSessionLocal


def get_auth_db(session_factory=Depends(get_auth_session_factory)):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
