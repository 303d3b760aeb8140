"""
Data Models Layer.

This package contains Pydantic models that define the API payloads returned
by SoundCloud and the client configuration.
"""

from .config import ClientConfig
from .track import (
    Media,
    MediaTranscoding,
    MediaTranscodingFormat,
    OriginalDownload,
    Stream,
    StreamDetails,
    Track,
    User,
)

__all__ = [
    "ClientConfig",
    "Media",
    "MediaTranscoding",
    "MediaTranscodingFormat",
    "OriginalDownload",
    "Stream",
    "StreamDetails",
    "Track",
    "User",
]
