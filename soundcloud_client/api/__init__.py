"""
SoundCloud API Layer.

This package handles all communication with the SoundCloud v2 API.
"""

from .client import SoundCloudAPIClient

__all__ = ["SoundCloudAPIClient"]
