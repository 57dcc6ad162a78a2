from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # Pydantic Settings will automatically look for these as environment variables
    # or in a .env file

    # Database Settings
    # When DATABASE_URL is set it wins over the POSTGRES_* parts (tests use sqlite://)
    DATABASE_URL: str = ""
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "mentormatch_db"

    # SQLAlchemy Connection Pooling Settings
    # Refer to https://docs.sqlalchemy.org/en/20/core/engines.html#connection-pooling-options
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30 # seconds
    DB_POOL_RECYCLE: int = 1800 # seconds (30 minutes) - recycle connections older than this

    # Store contention retry (attempts includes the first try)
    STORE_RETRY_ATTEMPTS: int = 2
    STORE_RETRY_WAIT_SECONDS: float = 0.05

    # Auth Settings
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_ISSUER: str = "mentormatch"
    JWT_AUDIENCE: str = "mentormatch-users"
    COOKIE_SECURE: bool = False
    BCRYPT_ROUNDS: int = 12

    # Profile Settings
    AVATAR_MAX_BYTES: int = 1024 * 1024
    PLACEHOLDER_IMAGE_URL: str = "https://placehold.co/500x500.jpg?text={role}"

    # Feedback Settings
    FEEDBACK_COMMENT_MAX_LENGTH: int = 1000

    # Application Settings
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore" # Ignore extra env variables not defined here
    )

@lru_cache() # Cache settings to avoid re-reading on every call
def get_settings():
    """Returns a cached instance of the Settings."""
    return Settings()
