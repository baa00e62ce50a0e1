"""Client configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API access
    api_key: str = Field(
        ..., alias="OPENAI_API_KEY",
        description="Secret key sent as a bearer token on every request.",
    )
    organization: str = Field(
        "", alias="OPENAI_ORGANIZATION",
        description="Organization ID sent as the OpenAI-Organization header. Empty = header omitted.",
    )
    base_url: str = Field(
        "https://api.openai.com/v1", alias="OPENAI_BASE_URL",
        description="Base URL of the API, including the version path. Any OpenAI-compatible server works.",
    )
    timeout: float = Field(
        60.0, alias="OPENAI_TIMEOUT",
        description="HTTP timeout in seconds, applied by the transport. Streams reset it per chunk.",
    )

    # Streaming
    stream_data_prefix: str = Field(
        "data:", alias="OPENAI_STREAM_DATA_PREFIX",
        description="SSE field prefix that marks payload lines in streamed responses.",
    )
    stream_done_token: str = Field(
        "[DONE]", alias="OPENAI_STREAM_DONE_TOKEN",
        description="Payload that terminates a streamed response.",
    )

    # Logging
    log_level: str = Field(
        "INFO", alias="LOG_LEVEL",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL.",
    )
    log_file: str = Field(
        "", alias="LOG_FILE",
        description="Path to log file for file-based logging with rotation. Empty = console only.",
    )
    log_file_max_bytes: int = Field(
        10_485_760, alias="LOG_FILE_MAX_BYTES",
        description="Max size in bytes per log file before rotation. Default: 10 MB.",
    )
    log_file_backup_count: int = Field(
        5, alias="LOG_FILE_BACKUP_COUNT",
        description="Number of rotated backup log files to keep.",
    )


def get_settings() -> Settings:
    """Get client settings."""
    return Settings()
