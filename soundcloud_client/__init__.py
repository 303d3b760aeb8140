"""
A thin async client for the SoundCloud v2 API.
"""

from soundcloud_client.api.client import SoundCloudAPIClient
from soundcloud_client.exceptions import (
    ConfigurationError,
    InvalidStreamResponseError,
    SoundCloudClientError,
)
from soundcloud_client.models import ClientConfig, StreamDetails, Track, User
from soundcloud_client.result import FetchResult

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "FetchResult",
    "InvalidStreamResponseError",
    "SoundCloudAPIClient",
    "SoundCloudClientError",
    "StreamDetails",
    "Track",
    "User",
    "__version__",
]
