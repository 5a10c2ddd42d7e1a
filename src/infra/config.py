from functools import lru_cache
from typing import List, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


class Settings(BaseSettings):
    # Environment
    environment: Literal["development", "production", "test"] = Field(default="development")

    # Persistence
    repository_backend: Literal["memory", "tortoise"] = Field(default="tortoise")
    database_url: str = Field(default="sqlite://data/users.db")
    generate_schemas: bool = Field(default=True)

    # Logging: 0=trace, 1=debug, 2=info, 3=warn, 4=error
    app_log_level: int = Field(default=2, ge=0, le=4)

    # Security（secret_key 未設定時はプレースホルダ認証）
    secret_key: str = Field(default="")
    algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=30, ge=1)

    # CORS
    cors_origins: List[str] = Field(default=["http://localhost:3000"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("repository_backend", mode="before")
    @classmethod
    def normalize_repository_backend(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        if v and len(v) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
