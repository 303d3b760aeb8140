"""
Pydantic models for SoundCloud API payloads.

Each model is a read-only projection of a single JSON response. Keys the
models don't declare are ignored, and everything except identifiers has a
neutral default so partially populated payloads still parse.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class _ApiModel(BaseModel):
    """Shared configuration for immutable API payload models."""

    class Config:
        """Pydantic model configuration."""

        frozen = True
        extra = "ignore"
        populate_by_name = True


class User(_ApiModel):
    id: int
    username: str = ""
    avatar_url: Optional[str] = None
    permalink: str = ""


class MediaTranscodingFormat(_ApiModel):
    protocol: Literal["progressive", "hls"]
    mime_type: str = ""


class MediaTranscoding(_ApiModel):
    """A single encoded rendition of a track."""

    snipped: bool = False
    quality: Literal["sq", "hq"] = "sq"
    url: str
    format: MediaTranscodingFormat


class Media(_ApiModel):
    transcodings: list[MediaTranscoding] = Field(default_factory=list)


class Track(_ApiModel):
    """
    Track metadata as returned by the ``/tracks`` and ``/resolve`` endpoints.

    Every track has an owning user, but ``user`` is left optional: some
    responses (blocked or partially hydrated tracks) omit the embedded
    object, and such tracks still carry usable ids and media.
    """

    id: int
    duration: int = 0  # milliseconds
    display_date: str = ""
    kind: str = ""
    state: str = ""
    title: str = ""
    artwork_url: Optional[str] = None
    streamable: bool = False
    downloadable: bool = False
    has_downloads_left: bool = False
    user: Optional[User] = None
    media: Media = Field(default_factory=Media)
    permalink_url: str = ""

    @property
    def duration_seconds(self) -> float:
        return self.duration / 1000


class Stream(_ApiModel):
    """Body of a stream-resolution response."""

    url: Optional[str] = None


class StreamDetails(_ApiModel):
    """A resolved, playable stream for a track."""

    url: str
    extension: Optional[str] = None
    hls: bool = False


class OriginalDownload(_ApiModel):
    redirect_uri: Optional[str] = Field(default=None, alias="redirectUri")
