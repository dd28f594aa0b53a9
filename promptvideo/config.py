from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    openai_api_key: Optional[str] = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_model: str = Field("gpt-3.5-turbo", validation_alias="OPENAI_MODEL")
    enhance_max_tokens: int = Field(200, validation_alias="ENHANCE_MAX_TOKENS")

    pixverse_api_key: Optional[str] = Field(default=None, validation_alias="PIXVERSE_API_KEY")
    pixverse_base_url: str = Field("https://app-api.pixverse.ai/openapi/v2", validation_alias="PIXVERSE_BASE_URL")
    pixverse_model: str = Field("v3.5", validation_alias="PIXVERSE_MODEL")

    poll_interval_seconds: float = Field(2.0, validation_alias="POLL_INTERVAL_SECONDS")
    poll_max_attempts: int = Field(30, validation_alias="POLL_MAX_ATTEMPTS")
    request_timeout_seconds: float = Field(30.0, validation_alias="REQUEST_TIMEOUT_SECONDS")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    app_host: str = Field("127.0.0.1", validation_alias="APP_HOST")
    app_port: int = Field(8000, validation_alias="APP_PORT")

    @field_validator("pixverse_base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        value = value or "https://app-api.pixverse.ai/openapi/v2"
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return (value or "INFO").upper()


@lru_cache()
def get_settings() -> Settings:
    try:
        return Settings()
    except Exception as exc:
        raise RuntimeError("Failed to load application settings. Ensure your .env file is configured.") from exc


settings = get_settings()
