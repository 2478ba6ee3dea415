import os
from functools import lru_cache

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    DB_DSN: str = 'sqlite:///./forum.db'
    ROOT_PATH: str = '/' + os.getenv("APP_NAME", "")
    LOG_LEVEL: str = 'INFO'
    CORS_ALLOW_ORIGINS: list[str] = ['*']
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ['*']
    CORS_ALLOW_HEADERS: list[str] = ['*']

    # Sessions
    SESSION_TTL_HOURS: int = 24
    SESSION_TOKEN_BYTES: int = 32
    SESSION_COOKIE_NAME: str = 'session_token'
    COOKIE_SECURE: bool = False
    SESSION_CLEANUP_INTERVAL_SEC: int = 3600  # 0 disables the background sweep
    PASSWORD_HASH_ROUNDS: int = 12
    ADMIN_USER_IDS: list[int] = []  # may manage categories

    # Field limits
    MAX_TITLE_LENGTH: int = 255
    MAX_POST_LENGTH: int = 10000
    MAX_COMMENT_LENGTH: int = 2000
    MAX_CATEGORY_NAME_LENGTH: int = 100
    MAX_SLUG_LENGTH: int = 100
    MAX_DESCRIPTION_LENGTH: int = 500
    MIN_USERNAME_LENGTH: int = 3
    MAX_USERNAME_LENGTH: int = 50
    MAX_EMAIL_LENGTH: int = 255
    MIN_PASSWORD_LENGTH: int = 6
    MAX_PASSWORD_LENGTH: int = 128

    PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    model_config = ConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
