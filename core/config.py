"""
Configuration management using Pydantic Settings.
Follows Single Responsibility Principle - only handles configuration.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import List, Mapping, Optional

from pydantic import Field  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore

from core.constants import (
    DEFAULT_ALLOWED_ORIGINS,
    DEFAULT_MODEL_KEY,
    HF_MODELS,
    MODEL_DESCRIPTIONS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),  # Allow 'model_*' fields
    )

    # Application
    app_name: str = Field(default="Transcription Relay API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=True, alias="DEBUG")

    # API Service
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=3001, alias="API_PORT")
    api_reload: bool = Field(default=False, alias="API_RELOAD")
    max_upload_size_mb: int = Field(default=100, alias="MAX_UPLOAD_SIZE_MB")

    # Comma-separated list, e.g. "http://localhost:5173,https://app.example.com"
    allowed_origins: str = Field(
        default=",".join(DEFAULT_ALLOWED_ORIGINS), alias="ALLOWED_ORIGINS"
    )

    # Storage (uploads live here only for the duration of one request)
    temp_dir: str = Field(default="/tmp/transcription_relay", alias="TEMP_DIR")

    # HuggingFace Inference API
    hf_api_token: Optional[str] = Field(default=None, alias="HF_API_TOKEN")
    hf_api_base_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        alias="HF_API_BASE_URL",
    )
    upstream_timeout_seconds: float = Field(
        default=60.0, alias="UPSTREAM_TIMEOUT_SECONDS"
    )
    default_model_key: str = Field(default=DEFAULT_MODEL_KEY, alias="DEFAULT_MODEL_KEY")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Log format: "console" (colored, human-readable) or "json" (for log aggregation)
    log_format: str = Field(default="console", alias="LOG_FORMAT")
    # Enable/disable file logging (logs/app.log and logs/error.log)
    log_file_enabled: bool = Field(default=True, alias="LOG_FILE_ENABLED")

    @property
    def cors_origins(self) -> List[str]:
        """Allowed CORS origins parsed from ALLOWED_ORIGINS."""
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or list(DEFAULT_ALLOWED_ORIGINS)

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@dataclass(frozen=True)
class RelayConfig:
    """
    Read-only configuration injected into the relay components.

    Built once at startup from Settings. Tests construct their own instances
    to substitute credentials, model tables or the upstream base URL.
    """

    api_token: Optional[str]
    api_base_url: str = "https://api-inference.huggingface.co/models"
    timeout_seconds: float = 60.0
    models: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(HF_MODELS))
    )
    descriptions: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(MODEL_DESCRIPTIONS))
    )
    default_model_key: str = DEFAULT_MODEL_KEY

    def __post_init__(self):
        if self.default_model_key not in self.models:
            raise ValueError(
                f"default_model_key '{self.default_model_key}' is not one of "
                f"{list(self.models)}"
            )
        # Freeze caller-supplied dicts
        if not isinstance(self.models, MappingProxyType):
            object.__setattr__(self, "models", MappingProxyType(dict(self.models)))
        if not isinstance(self.descriptions, MappingProxyType):
            object.__setattr__(
                self, "descriptions", MappingProxyType(dict(self.descriptions))
            )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_token)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RelayConfig":
        return cls(
            api_token=settings.hf_api_token or None,
            api_base_url=settings.hf_api_base_url.rstrip("/"),
            timeout_seconds=settings.upstream_timeout_seconds,
            default_model_key=settings.default_model_key,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to ensure single instance (Singleton pattern).
    """
    return Settings()
