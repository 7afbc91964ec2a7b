"""Configuration management using pydantic-settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REVLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=7799, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")

    # Log Store Configuration
    logs_base_dir: str = Field(default="./data/logs", description="Directory holding the drainable log files")
    chunk_size: int = Field(default=8192, description="Bytes requested per backward read")
    default_tail_lines: int = Field(default=100, description="Lines returned by tail when not specified")
    max_tail_lines: int = Field(default=10000, description="Upper bound for lines per tail/pop request")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("chunk_size", "default_tail_lines", "max_tail_lines")
    @classmethod
    def validate_positive(cls, v, info):
        """Reject zero and negative sizes at load time."""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive, got {v}")
        return v


# Global settings instance
settings = Settings()
