"""
Async client for the SoundCloud v2 API.
"""

import asyncio
import time
from typing import Any, Iterable, Mapping, Optional

import aiohttp
from pydantic import TypeAdapter, ValidationError

from soundcloud_client.exceptions import InvalidStreamResponseError
from soundcloud_client.media.downloader import ProgressReport, StreamDownloader
from soundcloud_client.media.mime import convert_mime_type_to_extension
from soundcloud_client.media.transcoding import (
    build_stream_details,
    select_transcoding,
)
from soundcloud_client.models.config import ClientConfig
from soundcloud_client.models.track import (
    OriginalDownload,
    Stream,
    StreamDetails,
    Track,
    User,
)
from soundcloud_client.result import FetchResult
from soundcloud_client.utils.formatting import format_duration_ms
from soundcloud_client.utils.structured_logger import APILogger, StructuredLogger


class SoundCloudAPIClient:
    """
    Thin async client for the SoundCloud JSON API (v2).

    Every public method is a single request/response round trip. Ordinary
    transport failures (network errors, timeouts, non-success statuses,
    empty or malformed bodies) are logged and surface as ``None``; the only
    operation that raises for an unusable response is :meth:`get_stream_url`.
    """

    BASE_URL = "https://api-v2.soundcloud.com"

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initializes the API client.

        Args:
            config: Transport settings. Defaults are used when omitted.
            logger: Structured logger owned by this client. A new one is
                created when omitted.
        """
        self.config = config or ClientConfig()
        self.logger = logger or StructuredLogger("soundcloud_client.api")
        self._api_log = APILogger(self.logger)

        self._session: Optional[aiohttp.ClientSession] = None
        self._downloader = StreamDownloader(
            self._initialize_session,
            chunk_size=self.config.chunk_size,
            logger=self.logger.bind(component="downloader"),
        )

    async def __aenter__(self) -> "SoundCloudAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.config.max_connections,
                ttl_dns_cache=300,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": self.config.user_agent},
                timeout=aiohttp.ClientTimeout(
                    total=self.config.total_timeout,
                    connect=self.config.connect_timeout,
                    sock_read=self.config.sock_read_timeout,
                ),
            )
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _fetch_json(
        self, url: str, params: Optional[Mapping[str, str]] = None
    ) -> FetchResult[Any]:
        """
        GETs ``url`` and decodes the JSON body. Never raises for transport
        or decoding failures.
        """
        session = await self._initialize_session()
        self._api_log.request_started(url, dict(params) if params else None)
        start_time = time.monotonic()
        try:
            async with session.get(url, params=params) as r:
                if not 200 <= r.status < 300:
                    error = f"HTTP {r.status}"
                    self._api_log.request_failed(url, error, r.status)
                    return FetchResult.failure(error, r.status)

                data = await r.json(content_type=None)
                if data is None:
                    self._api_log.request_failed(url, "Empty body", r.status)
                    return FetchResult.failure("Empty body", r.status)
                self._api_log.request_completed(
                    url, r.status, (time.monotonic() - start_time) * 1000
                )
                return FetchResult.success(data, r.status)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            error = str(e) or type(e).__name__
            self._api_log.request_failed(url, error)
            return FetchResult.failure(error)

    def _validate(self, result_type: Any, data: Any, url: str) -> Any:
        """Validates a decoded body as ``result_type``; None if it doesn't fit."""
        try:
            return TypeAdapter(result_type).validate_python(data)
        except ValidationError as e:
            self.logger.error(
                "invalid_response_payload",
                url=url,
                errors=e.error_count(),
                detail=str(e).splitlines()[0],
            )
            return None

    # Public API Methods
    async def resolve_url(self, url: str, result_type: Any = Any) -> Any:
        """
        Resolves a public SoundCloud URL (track, user, playlist, ...) into
        its API object, validated as ``result_type``.
        """
        req_url = f"{self.BASE_URL}/resolve"
        result = await self._fetch_json(req_url, params={"url": url})
        if not result.ok:
            return None
        return self._validate(result_type, result.value, req_url)

    async def get_current_user(self) -> Optional[User]:
        url = f"{self.BASE_URL}/me"
        result = await self._fetch_json(url)
        if not result.ok:
            return None
        return self._validate(User, result.value, url)

    async def get_followed_artist_ids(self, user_id: int) -> Optional[list[int]]:
        url = f"{self.BASE_URL}/users/{user_id}/followings/ids"
        data = (await self._fetch_json(url)).unwrap_or()

        if not isinstance(data, dict) or data.get("collection") is None:
            self.logger.debug("followings_collection_missing", user_id=user_id)
            return None

        return data["collection"]

    async def get_tracks(self, track_ids: Iterable[int]) -> Optional[dict[int, Track]]:
        """
        Fetches metadata for several tracks in one request.

        Returns a mapping ordered like ``track_ids``. Response elements are
        matched to requested IDs by their own ``id`` first. An element
        without one is then matched by position, but only when the response
        is exactly as long as the request and no element claimed that ID by
        itself. Unmatched, unexpected, and invalid elements are logged and
        left out. Returns None if the request itself fails.
        """
        requested = list(dict.fromkeys(track_ids))
        if not requested:
            return {}

        self.logger.info("fetching_tracks", track_ids=requested)

        url = f"{self.BASE_URL}/tracks"
        result = await self._fetch_json(
            url, params={"ids": ",".join(str(i) for i in requested)}
        )
        if not result.ok:
            return None
        if not isinstance(result.value, list):
            self.logger.error(
                "invalid_tracks_response",
                url=url,
                body_type=type(result.value).__name__,
            )
            return None

        items = result.value
        wanted = set(requested)
        by_id: dict[int, Track] = {}
        anonymous: list[tuple[int, dict]] = []

        def parse(raw: dict, index: int) -> Optional[Track]:
            try:
                return Track.model_validate(raw)
            except ValidationError as e:
                self.logger.error(
                    "track_element_invalid", index=index, errors=e.error_count()
                )
                return None

        # Elements that carry their own id claim it first
        for index, raw in enumerate(items):
            if not isinstance(raw, dict):
                self.logger.warning("track_element_invalid", index=index)
                continue
            if raw.get("id") is None:
                anonymous.append((index, raw))
                continue

            track = parse(raw, index)
            if track is None:
                continue
            if track.id not in wanted:
                self.logger.warning("unexpected_track_in_response", track_id=track.id)
                continue
            if track.id in by_id:
                self.logger.warning("duplicate_track_in_response", track_id=track.id)
                continue
            by_id[track.id] = track

        # Positions are only trusted when the response lines up with the request
        positional_ok = len(items) == len(requested)
        for index, raw in anonymous:
            if not positional_ok:
                self.logger.warning(
                    "track_element_unmatched",
                    index=index,
                    requested=len(requested),
                    received=len(items),
                )
                continue
            track_id = requested[index]
            if track_id in by_id:
                self.logger.warning(
                    "track_position_already_claimed", index=index, track_id=track_id
                )
                continue

            track = parse({**raw, "id": track_id}, index)
            if track is None:
                continue
            self.logger.warning(
                "track_matched_by_position", index=index, track_id=track_id
            )
            by_id[track_id] = track

        missing = [track_id for track_id in requested if track_id not in by_id]
        if missing:
            self.logger.warning("tracks_missing_from_response", track_ids=missing)

        return {track_id: by_id[track_id] for track_id in requested if track_id in by_id}

    def convert_mime_type_to_extension(self, mime_type: str) -> Optional[str]:
        return convert_mime_type_to_extension(mime_type)

    async def get_stream_url(self, url: str) -> str:
        """
        Resolves a transcoding URL into a playable stream URL.

        Raises:
            InvalidStreamResponseError: if the request fails or the response
                carries no ``url``.
        """
        result = await self._fetch_json(url)

        stream = None
        if result.ok and isinstance(result.value, dict):
            stream = self._validate(Stream, result.value, url)

        if stream is None or not stream.url:
            self.logger.error(
                "invalid_stream_response",
                url=url,
                status_code=result.status,
                error=result.error,
            )
            raise InvalidStreamResponseError(url)

        return stream.url

    async def get_original_download_url(self, track_id: int) -> Optional[str]:
        url = f"{self.BASE_URL}/tracks/{track_id}/download"

        self.logger.info("fetching_original_download_url", track_id=track_id)

        result = await self._fetch_json(url)
        download = None
        if result.ok and isinstance(result.value, dict):
            download = self._validate(OriginalDownload, result.value, url)

        if download is None or not download.redirect_uri:
            self.logger.error(
                "invalid_original_download_response",
                track_id=track_id,
                status_code=result.status,
                error=result.error,
            )
            return None

        return download.redirect_uri

    async def get_stream_details(
        self, track: Track, prefer_hq: bool = True
    ) -> Optional[StreamDetails]:
        """
        Chooses a transcoding of ``track`` and resolves it to a stream.

        Returns None when the track has no transcodings. Propagates
        InvalidStreamResponseError from :meth:`get_stream_url`.
        """
        transcoding = select_transcoding(track.media, prefer_hq=prefer_hq)
        if transcoding is None:
            self.logger.warning("no_transcodings", track_id=track.id)
            return None

        stream_url = await self.get_stream_url(transcoding.url)
        details = build_stream_details(transcoding, stream_url)

        self.logger.info(
            "stream_resolved",
            track_id=track.id,
            title=track.title,
            duration=format_duration_ms(track.duration),
            protocol=transcoding.format.protocol,
            quality=transcoding.quality,
            extension=details.extension,
        )
        return details

    async def download_artwork(self, artwork_url: str) -> Optional[bytes]:
        result = await self._downloader.fetch(artwork_url)
        if not result.ok:
            return None
        body, _headers = result.value
        return body

    async def download_stream(
        self, stream_url: str, report_progress: Optional[ProgressReport] = None
    ) -> tuple[Optional[bytes], Optional[Mapping[str, str]]]:
        """
        Downloads a media stream, reporting integer percentages to
        ``report_progress`` when the response size is known.

        Returns the body and response headers, or ``(None, None)``.
        """
        result = await self._downloader.fetch(stream_url, report_progress)
        if not result.ok:
            return None, None
        return result.value
