"""
Maps audio MIME types reported by SoundCloud transcodings to file extensions.
"""

from typing import Any, Optional

# Closed mapping: anything not listed has no known extension.
MIME_EXTENSION_MAP: dict[str, str] = {
    "audio/aac": "aac",
    "audio/mp4": "m4a",
    "audio/mpeg": "mp3",
    "audio/ogg": "ogg",
    "audio/opus": "opus",
    "audio/webm": "webm",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/x-pn-wav": "wav",
    "audio/vnd.wave": "wav",
    "audio/flac": "flac",
    "audio/x-flac": "flac",
    "audio/amr": "amr",
    "audio/3gpp": "3gp",
    "audio/3gpp2": "3g2",
    "audio/x-ms-wma": "wma",
    "audio/vnd.rn-realaudio": "ra",
    "audio/basic": "au",
    "audio/mpegurl": "m3u8",
    "application/x-mpegurl": "m3u8",
    "application/vnd.apple.mpegurl": "m3u8",
}


def convert_mime_type_to_extension(mime_type: Any) -> Optional[str]:
    """
    Returns the file extension for a MIME type, or None if it is unknown.

    Parameters such as ``; codecs="opus"`` are ignored and matching is
    case-insensitive. Never raises.
    """
    if not isinstance(mime_type, str):
        return None
    base_mime_type = mime_type.split(";", 1)[0].strip().lower()
    return MIME_EXTENSION_MAP.get(base_mime_type)
