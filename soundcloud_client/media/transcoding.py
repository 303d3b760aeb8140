"""
Transcoding selection and stream detail construction.
"""

from typing import Optional

from soundcloud_client.models.track import Media, MediaTranscoding, StreamDetails

from .mime import convert_mime_type_to_extension


def select_transcoding(
    media: Media, prefer_hq: bool = True
) -> Optional[MediaTranscoding]:
    """
    Picks the best transcoding for playback or download.

    Full-length renditions beat snipped previews, progressive beats HLS, and
    the preferred quality tier breaks ties. Returns None for empty media.
    """
    candidates = [t for t in media.transcodings if not t.snipped]
    if not candidates:
        candidates = list(media.transcodings)
    if not candidates:
        return None

    preferred_quality = "hq" if prefer_hq else "sq"

    def rank(transcoding: MediaTranscoding) -> tuple[int, int]:
        return (
            0 if transcoding.format.protocol == "progressive" else 1,
            0 if transcoding.quality == preferred_quality else 1,
        )

    # min() is stable, so API order decides among equal ranks
    return min(candidates, key=rank)


def build_stream_details(
    transcoding: MediaTranscoding, stream_url: str
) -> StreamDetails:
    """Combines a resolved stream URL with what the transcoding says about it."""
    return StreamDetails(
        url=stream_url,
        extension=convert_mime_type_to_extension(transcoding.format.mime_type),
        hls=transcoding.format.protocol == "hls",
    )
