from typing import List, Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings

from stream_attendance.core.env_config import env_manager


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    ENVIRONMENT: str = "development"
    FRONTEND_URL: str = "http://localhost:8080"
    BACKEND_URL: str = "http://localhost:8000"

    CORS_ORIGINS: List[str] = []

    # "verified" uses accounts and bearer tokens, "unverified" trusts the
    # profile blob the browser keeps in local storage.
    AUTH_MODE: Literal["verified", "unverified"] = "verified"

    # Zone used for every "calendar day" decision (today count, same-day check-in)
    TIMEZONE: str = "UTC"

    CHURCH_NAME: str = "Deeper Life Bible Church"
    DEFAULT_YOUTUBE_CHANNEL_ID: str = "UCR4c-NsIGhMqV8W-E-Q5N6A"
    DEFAULT_STREAM_TITLE: str = "Sunday Service"
    ATTENDANCE_LIST_LIMIT: int = 100

    DEFAULT_ADMIN_EMAIL: Optional[str] = None
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None
    DEFAULT_ADMIN_NAME: str = "Church Admin"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ValueError(f"Unknown time zone: {value!r}") from e
        return value

    def __init__(self, **kwargs):
        url_config = env_manager.get_url_config()

        for key, value in url_config.items():
            if key.upper() not in kwargs:
                kwargs[key.upper()] = value

        super().__init__(**kwargs)

        if not self.CORS_ORIGINS:
            self.CORS_ORIGINS = env_manager.get_cors_origins(self.FRONTEND_URL)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)

    def get_environment_config(self) -> dict:
        """Get environment-specific configuration as a dictionary"""
        return {
            "environment": self.ENVIRONMENT,
            "frontend_url": self.FRONTEND_URL,
            "backend_url": self.BACKEND_URL,
            "auth_mode": self.AUTH_MODE,
            "timezone": self.TIMEZONE,
            "cors_origins": self.CORS_ORIGINS,
            "loaded_config_files": env_manager.get_loaded_files(),
        }

    def get_frontend_config(self) -> dict:
        """Get configuration that can be safely exposed to frontend"""
        return {
            "environment": self.ENVIRONMENT,
            "backend_url": self.BACKEND_URL,
            "auth_mode": self.AUTH_MODE,
            "church_name": self.CHURCH_NAME,
            "local_profile_storage_key": "user",
        }


settings = Settings()
