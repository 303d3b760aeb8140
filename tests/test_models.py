import pytest
from pydantic import ValidationError

from soundcloud_client.exceptions import ConfigurationError
from soundcloud_client.models import (
    ClientConfig,
    MediaTranscoding,
    OriginalDownload,
    StreamDetails,
    Track,
)


def test_track_parses_full_payload_and_ignores_extra_keys(track_factory):
    track = Track.model_validate(track_factory(11))

    assert track.id == 11
    assert track.duration_seconds == 215.0
    assert track.user.id == 77
    assert track.media.transcodings[0].format.protocol == "progressive"
    assert not hasattr(track, "genre")


def test_track_only_requires_id():
    track = Track.model_validate({"id": 1})

    assert track.media.transcodings == []
    assert track.user is None
    assert track.artwork_url is None


def test_track_is_immutable(track_factory):
    track = Track.model_validate(track_factory(1))

    with pytest.raises(ValidationError):
        track.title = "changed"


@pytest.mark.parametrize(
    "field, value",
    [("quality", "lossless"), ("format", {"protocol": "dash", "mime_type": "x"})],
)
def test_transcoding_enumerations_are_closed(field, value):
    payload = {
        "quality": "sq",
        "url": "https://api-v2.soundcloud.com/media/1",
        "format": {"protocol": "hls", "mime_type": "audio/mpeg"},
    }
    payload[field] = value

    with pytest.raises(ValidationError):
        MediaTranscoding.model_validate(payload)


def test_original_download_reads_camel_case_key():
    download = OriginalDownload.model_validate({"redirectUri": "https://x/y.wav"})

    assert download.redirect_uri == "https://x/y.wav"
    assert OriginalDownload.model_validate({}).redirect_uri is None


def test_stream_details_defaults():
    details = StreamDetails(url="https://x/y")

    assert details.extension is None
    assert details.hls is False


def test_client_config_defaults():
    config = ClientConfig()

    assert config.chunk_size == 65536
    assert config.max_connections == 16
    assert config.user_agent


@pytest.mark.parametrize(
    "options",
    [
        {"chunk_size": 10},
        {"max_connections": 0},
        {"total_timeout": 0},
        {"connect_timeout": 30, "total_timeout": 10},
        {"user_agent": "   "},
    ],
)
def test_client_config_rejects_invalid_options(options):
    with pytest.raises(ConfigurationError):
        ClientConfig.from_options(**options)


def test_client_config_validates_assignment():
    config = ClientConfig()

    with pytest.raises(ValidationError):
        config.max_connections = 1000
