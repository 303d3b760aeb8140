"""
Defines custom exceptions for the client to allow for more specific error handling.
"""


class SoundCloudClientError(Exception):
    """Base exception for all client-specific errors."""


class InvalidStreamResponseError(SoundCloudClientError):
    """
    Raised when a stream-resolution response does not carry a usable URL.

    Unlike ordinary transport failures, which degrade to ``None``, this is a
    contract violation that callers are expected to catch.
    """

    def __init__(self, url: str, message: str = "Invalid stream response"):
        super().__init__(f"{message}: {url}")
        self.url = url


class ConfigurationError(SoundCloudClientError):
    """Raised for issues related to client configuration validation."""
