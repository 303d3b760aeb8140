"""
Media Layer.

This package is responsible for binary media downloads, MIME type mapping,
and choosing which transcoding of a track to stream.
"""

from .downloader import StreamDownloader
from .mime import convert_mime_type_to_extension
from .transcoding import build_stream_details, select_transcoding

__all__ = [
    "StreamDownloader",
    "build_stream_details",
    "convert_mime_type_to_extension",
    "select_transcoding",
]
