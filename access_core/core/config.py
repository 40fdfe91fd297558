"""Application configuration using Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Service configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ACR_",
        extra="ignore",
    )

    environment: Literal["local", "test", "staging", "production"] = Field(default="local")
    service_name: str = Field(default="access-core")
    database_url: str = Field(default="sqlite:///./data/access.db")
    sql_echo: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)
    # Unset means enforced everywhere except local and test.
    enforce_authorization: bool | None = Field(default=None)
    default_resources: List[str] | str = Field(default_factory=lambda: ["role", "resource"])

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("default_resources", mode="before")
    @classmethod
    def parse_default_resources(cls, value: str | List[str] | None) -> List[str]:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [slug.strip() for slug in value.split(",") if slug.strip()]
        return value

    @field_validator("enforce_authorization", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: bool | str | None) -> bool | str | None:
        if value == "":
            return None
        return value

    @model_validator(mode="after")
    def default_enforcement(self) -> "AppSettings":
        if self.enforce_authorization is None:
            self.enforce_authorization = self.environment not in ("local", "test")
        return self


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings instance."""

    return AppSettings()
