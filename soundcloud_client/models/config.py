"""
Pydantic model for client configuration.
Provides validation for transport settings; the API endpoint itself is fixed.
"""

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from soundcloud_client.exceptions import ConfigurationError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0"
)


class ClientConfig(BaseModel):
    """A validated configuration model for the API client."""

    # Timeouts (seconds)
    total_timeout: float = 60.0
    connect_timeout: float = 15.0
    sock_read_timeout: float = 30.0

    # Transport
    user_agent: str = DEFAULT_USER_AGENT
    chunk_size: int = 65536  # 64 KB
    max_connections: int = 16

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("total_timeout", "connect_timeout", "sock_read_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensures timeouts are positive."""
        if v <= 0:
            raise ValueError("Timeouts must be greater than zero.")
        return v

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        """Keeps the read chunk between 1 KB and 4 MB."""
        if v < 1024 or v > 4 * 1024 * 1024:
            raise ValueError("Chunk size must be between 1 KB and 4 MB.")
        return v

    @field_validator("max_connections")
    @classmethod
    def validate_connections(cls, v: int) -> int:
        """Ensures a reasonable connection pool size."""
        if v < 1 or v > 100:
            raise ValueError("Max connections must be between 1 and 100.")
        return v

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        if not v:
            raise ValueError("User agent cannot be empty.")
        return v

    @model_validator(mode="after")
    def validate_timeout_budget(self) -> "ClientConfig":
        """Checks that the per-phase timeouts fit inside the total timeout."""
        if self.connect_timeout > self.total_timeout:
            raise ValueError("Connect timeout cannot exceed the total timeout.")
        return self

    @classmethod
    def from_options(cls, **options: Any) -> "ClientConfig":
        """
        Builds a config from keyword options, converting validation failures
        into a ConfigurationError.
        """
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e
