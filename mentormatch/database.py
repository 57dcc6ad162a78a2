# mentormatch/database.py
import logging
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import StaticPool
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_exception_type, before_sleep_log

from .config import get_settings
from .exceptions import StoreError, TransientStoreError

logger = logging.getLogger(__name__)

def is_memory_sqlite(url: str) -> bool:
    database = make_url(url).database
    return not database or database == ":memory:" or database.startswith("file::memory:")

def get_engine():
    settings = get_settings()
    if settings.DATABASE_URL.startswith("sqlite"):
        if is_memory_sqlite(settings.DATABASE_URL):
            # One shared connection so an in-memory database survives across sessions
            return create_engine(
                settings.DATABASE_URL,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(settings.DATABASE_URL, connect_args={"check_same_thread": False})

    DATABASE_URL = settings.DATABASE_URL or URL.create(
        "postgresql+psycopg2",
        username=settings.POSTGRES_USER,
        password=settings.POSTGRES_PASSWORD,
        host=settings.POSTGRES_HOST,
        port=settings.POSTGRES_PORT,
        database=settings.POSTGRES_DB,
    )
    return create_engine(
        DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )

# Create the SQLAlchemy engine globally after defining get_engine
engine = get_engine()

# Create a SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

# Base class for declarative models
Base = declarative_base()

# Dependency to get a DB session
def get_db():
    """Provides a database session for a request and closes it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def translate_store_error(error: Exception, action: str) -> StoreError:
    """Lock timeouts, serialization failures and dropped connections are worth one more try."""
    if isinstance(error, OperationalError):
        return TransientStoreError(f"Transient store failure while {action}")
    return StoreError(f"Store failure while {action}")

def store_retry(func):
    """Retries a service write once on transient store contention.

    The wrapped method must roll back its session and raise TransientStoreError
    before the next attempt runs.
    """
    settings = get_settings()
    return retry(
        stop=stop_after_attempt(settings.STORE_RETRY_ATTEMPTS),
        wait=wait_fixed(settings.STORE_RETRY_WAIT_SECONDS),
        retry=retry_if_exception_type(TransientStoreError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )(func)
