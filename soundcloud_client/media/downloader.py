"""
Handles the low-level downloading of binary media over HTTP, with optional
progress reporting as the body arrives.
"""

import asyncio
import time
from typing import Awaitable, Callable, Mapping, Optional

import aiohttp

from soundcloud_client.result import FetchResult
from soundcloud_client.utils.formatting import format_size
from soundcloud_client.utils.structured_logger import APILogger, StructuredLogger

ProgressReport = Callable[[int], None]
SessionProvider = Callable[[], Awaitable[aiohttp.ClientSession]]
DownloadPayload = tuple[bytes, Mapping[str, str]]


class StreamDownloader:
    """
    A single streaming code path for artwork and audio downloads.

    Progress callbacks are plain callables invoked inline from the reading
    task; they must return quickly.
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        chunk_size: int = 65536,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            session_provider: Coroutine function returning the aiohttp session to use.
            chunk_size: Number of bytes to read per iteration.
            logger: Structured logger owned by the calling client.
        """
        self._session_provider = session_provider
        self.chunk_size = chunk_size
        self._log = APILogger(logger or StructuredLogger("soundcloud_client.media"))

    async def fetch(
        self, url: str, report_progress: Optional[ProgressReport] = None
    ) -> FetchResult[DownloadPayload]:
        """
        Downloads ``url`` fully into memory.

        When ``report_progress`` is given and the response declares its size,
        it receives non-decreasing integer percentages ending at 100. It is
        never called for responses of unknown size.
        """
        start_time = time.monotonic()
        try:
            session = await self._session_provider()
            # identity keeps Content-Length equal to the bytes we actually read
            async with session.get(
                url, headers={"Accept-Encoding": "identity"}, allow_redirects=True
            ) as response:
                if response.status != 200:
                    error = f"HTTP {response.status}"
                    self._log.download_failed(url, error, response.status)
                    return FetchResult.failure(error, response.status)

                total = response.content_length
                self._log.download_started(url, total)
                track_progress = report_progress is not None and bool(total)

                buffer = bytearray()
                last_reported = -1
                async for chunk in response.content.iter_chunked(self.chunk_size):
                    buffer.extend(chunk)
                    if track_progress:
                        progress = min(100, round(len(buffer) * 100 / total))
                        if progress > last_reported:
                            report_progress(progress)
                            last_reported = progress

                if not buffer:
                    self._log.download_failed(url, "Empty body", response.status)
                    return FetchResult.failure("Empty body", response.status)

                if track_progress and last_reported != 100:
                    report_progress(100)

                self._log.download_completed(
                    url, format_size(len(buffer)), time.monotonic() - start_time
                )
                return FetchResult.success(
                    (bytes(buffer), response.headers), response.status
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error = str(e) or type(e).__name__
            self._log.download_failed(url, error)
            return FetchResult.failure(error)
