"""Application configuration using Pydantic Settings."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from core.models import LLMProviderType

_DEFAULT_PROMPTS_PATH = Path(__file__).resolve().parent.parent / "config" / "prompts" / "prompts.yaml"


def _read_secret_file(path: str, env_name: str) -> str:
    """Read a secret value from file and return stripped content."""
    try:
        value = Path(path).read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ValueError(f"{env_name} points to unreadable file: {path}") from exc

    if not value:
        raise ValueError(f"{env_name} points to empty file: {path}")

    return value


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = Field(default="development", description="Environment: development, stage, prod")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_host: str = Field(default="localhost", description="API host")
    api_port: int = Field(default=3001, description="API port")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000", "http://localhost:3001"],
        description="Allowed CORS origins",
    )

    # Formatter
    max_input_chars: int = Field(
        default=2_000_000, gt=0, description="Maximum accepted screenplay length in characters"
    )
    detect_dialogue: bool = Field(
        default=False,
        description="Classify plain text after a character cue as dialogue by default",
    )

    # LLM Provider
    llm_provider: LLMProviderType = Field(
        default=LLMProviderType.OPENAI,
        description="LLM provider: openai, anthropic, or localai",
    )
    llm_api_key: str = Field(default="", description="API key for the selected provider")
    llm_api_key_file: str | None = Field(
        default=None,
        description="Optional file path containing LLM_API_KEY (Docker secret pattern)",
    )
    llm_model: str = Field(default="gpt-4", description="Model name")
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    llm_max_tokens: int = Field(default=4000, gt=0, description="Maximum tokens to generate")
    llm_timeout: int = Field(default=120, gt=0, description="LLM request timeout in seconds")
    local_llm_endpoint: str = Field(
        default="http://localhost:8080/v1/completions",
        description="Completions endpoint when using localai",
    )

    # Prompts
    prompts_path: Path = Field(
        default=_DEFAULT_PROMPTS_PATH, description="Path to the prompt template YAML file"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            value = v.strip()
            if not value:
                return []
            if value.startswith("["):
                parsed = json.loads(value)
                if not isinstance(parsed, list):
                    raise ValueError("CORS_ORIGINS JSON value must be a list")
                return [str(origin).strip() for origin in parsed if str(origin).strip()]
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        if isinstance(v, list):
            return [str(origin).strip() for origin in v if str(origin).strip()]
        return v

    @field_validator("llm_provider", mode="before")
    @classmethod
    def normalize_llm_provider(cls, v: Any) -> Any:
        """Accept provider names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return level

    @model_validator(mode="before")
    @classmethod
    def load_secrets_from_files(cls, data: Any) -> Any:
        """Allow *_FILE settings to populate sensitive values from mounted secrets."""
        if not isinstance(data, dict):
            return data

        settings = dict(data)
        file_path = settings.get("llm_api_key_file")
        if file_path:
            settings["llm_api_key"] = _read_secret_file(file_path, "LLM_API_KEY_FILE")

        return settings

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env in {"prod", "production"}

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.env == "development"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Enforce safe settings when running in production."""
        if not self.is_production:
            return self

        if self.debug:
            raise ValueError("DEBUG must be false in production")

        if self.llm_provider != LLMProviderType.LOCALAI and not self.llm_api_key:
            raise ValueError(f"LLM_API_KEY is required for provider {self.llm_provider.value}")

        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
