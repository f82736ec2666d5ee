"""Server configuration via environment variables."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

VALID_THINKING_LEVELS = {"minimal", "low", "medium", "high"}

DEFAULT_MODEL = "gemini-3-pro-preview"
INLINE_MAX_BYTES = 20 * 1024 * 1024  # 20 MiB


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Tracing is on when a tracking URI exists, unless explicitly set to ``false``."""
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    default_model: str = Field(default=DEFAULT_MODEL)
    default_thinking_level: str = Field(default="")
    temperature: float = Field(default=0.2)
    inline_max_bytes: int = Field(default=INLINE_MAX_BYTES)
    upload_poll_interval: float = Field(default=5.0)
    upload_max_polls: int = Field(default=720)
    retry_max_attempts: int = Field(default=5)
    retry_base_delay: float = Field(default=3.0)
    retry_backoff_factor: float = Field(default=2.5)
    log_raw_responses: bool = Field(default=False)
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="interview-insight-mcp")

    @field_validator("default_thinking_level")
    @classmethod
    def validate_thinking_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level and level not in VALID_THINKING_LEVELS:
            allowed = ", ".join(sorted(VALID_THINKING_LEVELS))
            raise ValueError(f"Invalid thinking level '{value}'. Allowed: {allowed}")
        return level

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("temperature must be between 0.0 and 2.0")
        return value

    @field_validator("inline_max_bytes", "retry_max_attempts")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("upload_max_polls")
    @classmethod
    def validate_max_polls(cls, value: int) -> int:
        # 0 disables the bound
        if value < 0:
            raise ValueError("upload_max_polls must be >= 0")
        return value

    @field_validator("upload_poll_interval", "retry_base_delay")
    @classmethod
    def validate_delays(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Delay must be > 0")
        return value

    @field_validator("retry_backoff_factor")
    @classmethod
    def validate_backoff_factor(cls, value: float) -> float:
        if value < 1:
            raise ValueError("retry_backoff_factor must be >= 1")
        return value

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            default_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            default_thinking_level=os.getenv("GEMINI_THINKING_LEVEL", ""),
            temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.2")),
            inline_max_bytes=int(os.getenv("INTERVIEW_INLINE_MAX_BYTES", str(INLINE_MAX_BYTES))),
            upload_poll_interval=float(os.getenv("INTERVIEW_UPLOAD_POLL_INTERVAL", "5.0")),
            upload_max_polls=int(os.getenv("INTERVIEW_UPLOAD_MAX_POLLS", "720")),
            retry_max_attempts=int(os.getenv("GEMINI_RETRY_MAX_ATTEMPTS", "5")),
            retry_base_delay=float(os.getenv("GEMINI_RETRY_BASE_DELAY", "3.0")),
            retry_backoff_factor=float(os.getenv("GEMINI_RETRY_BACKOFF", "2.5")),
            log_raw_responses=_env_flag("INTERVIEW_LOG_RAW_RESPONSES"),
            tracing_enabled=_resolve_tracing_enabled(
                os.getenv("GEMINI_TRACING_ENABLED", ""),
                os.getenv("MLFLOW_TRACKING_URI", ""),
            ),
            mlflow_tracking_uri=os.getenv("MLFLOW_TRACKING_URI", ""),
            mlflow_experiment_name=os.getenv("MLFLOW_EXPERIMENT_NAME", "interview-insight-mcp"),
        )


_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        logger.debug("Loaded config (model=%s)", _config.default_model)
    return _config


def update_config(**overrides: object) -> ServerConfig:
    """Patch the live config, ignoring ``None`` overrides."""
    global _config
    cfg = get_config()
    data = cfg.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = ServerConfig(**data)
    return _config
