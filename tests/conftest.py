import asyncio
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from soundcloud_client import SoundCloudAPIClient
from soundcloud_client.models import ClientConfig
from soundcloud_client.utils.structured_logger import StructuredLogger


def make_track(track_id: int, **overrides: Any) -> dict[str, Any]:
    """Builds a track payload shaped like the /tracks endpoint returns."""
    payload = {
        "id": track_id,
        "duration": 215000,
        "display_date": "2024-03-01T12:00:00Z",
        "kind": "track",
        "state": "finished",
        "title": f"Track {track_id}",
        "artwork_url": f"https://i1.sndcdn.com/artworks-{track_id}-large.jpg",
        "streamable": True,
        "downloadable": False,
        "has_downloads_left": True,
        "permalink_url": f"https://soundcloud.com/artist/track-{track_id}",
        "user": {
            "id": 77,
            "username": "artist",
            "avatar_url": "https://i1.sndcdn.com/avatars-77-large.jpg",
            "permalink": "artist",
        },
        "media": {
            "transcodings": [
                {
                    "snipped": False,
                    "quality": "sq",
                    "url": f"https://api-v2.soundcloud.com/media/{track_id}/progressive",
                    "format": {"protocol": "progressive", "mime_type": "audio/mpeg"},
                }
            ]
        },
        # keys the models don't declare
        "genre": "Electronic",
        "playback_count": 1234,
    }
    payload.update(overrides)
    return payload


class FakeSoundCloudApi:
    """An aiohttp application standing in for the SoundCloud API and CDN."""

    def __init__(self):
        self.base_url = ""
        self.calls: list[tuple[str, dict[str, str]]] = []
        self._handlers: dict[str, Any] = {}

    def url(self, path: str) -> str:
        return self.base_url + path

    def add_json(self, path: str, payload: Any, status: int = 200) -> None:
        async def handler(request: web.Request) -> web.StreamResponse:
            return web.json_response(payload, status=status)

        self._handlers[path] = handler

    def add_status(self, path: str, status: int) -> None:
        async def handler(request: web.Request) -> web.StreamResponse:
            return web.Response(status=status, text="error")

        self._handlers[path] = handler

    def add_text(
        self, path: str, text: str, content_type: str = "application/json"
    ) -> None:
        async def handler(request: web.Request) -> web.StreamResponse:
            return web.Response(text=text, content_type=content_type)

        self._handlers[path] = handler

    def add_delay(self, path: str, seconds: float) -> None:
        async def handler(request: web.Request) -> web.StreamResponse:
            await asyncio.sleep(seconds)
            return web.json_response({"url": "too-late"})

        self._handlers[path] = handler

    def add_body(
        self,
        path: str,
        body: bytes,
        content_type: str = "application/octet-stream",
        chunked: bool = False,
        piece_size: int = 4096,
    ) -> None:
        """Serves ``body`` with a Content-Length, or chunked without one."""

        async def handler(request: web.Request) -> web.StreamResponse:
            if not chunked:
                return web.Response(body=body, content_type=content_type)
            response = web.StreamResponse(headers={"Content-Type": content_type})
            response.enable_chunked_encoding()
            await response.prepare(request)
            for start in range(0, len(body), piece_size):
                await response.write(body[start : start + piece_size])
            await response.write_eof()
            return response

        self._handlers[path] = handler

    def build_app(self) -> web.Application:
        async def dispatch(request: web.Request) -> web.StreamResponse:
            self.calls.append((request.path, dict(request.query)))
            handler = self._handlers.get(request.path)
            if handler is None:
                return web.Response(status=404, text="not found")
            return await handler(request)

        app = web.Application()
        app.router.add_route("GET", "/{tail:.*}", dispatch)
        return app


@pytest_asyncio.fixture
async def fake_api():
    api = FakeSoundCloudApi()
    server = TestServer(api.build_app())
    await server.start_server()
    api.base_url = str(server.make_url("/")).rstrip("/")
    yield api
    await server.close()


@pytest_asyncio.fixture
async def client(fake_api, monkeypatch):
    monkeypatch.setattr(SoundCloudAPIClient, "BASE_URL", fake_api.base_url)
    config = ClientConfig(
        chunk_size=1024, connect_timeout=2, sock_read_timeout=2, total_timeout=5
    )
    async with SoundCloudAPIClient(
        config=config, logger=StructuredLogger("soundcloud_client.tests")
    ) as api_client:
        yield api_client


@pytest.fixture
def track_factory():
    return make_track
