"""Unit tests for FrameBrewClient and SSE parsing."""

import json

import httpx
import pytest

from framebrew.client.api import FrameBrewClient, parse_sse
from framebrew.client.cache import video_detail_key, video_list_key
from framebrew.client.synchronizer import CacheSynchronizer
from framebrew.core.exceptions import APIClientError
from framebrew.models.generation_job import JobStatus

VIDEO_LIST = {
    "items": [{"id": "v1", "title": "Beach Promo", "status": "running"}],
    "total": 1,
    "nextCursor": None,
}

SSE_BODY = (
    'event: connected\ndata: {"type":"connected","clientId":"org-1_1"}\n\n'
    ": comment\n"
    'event: status\ndata: {"type":"status","jobId":"j1","videoId":"v1","status":"scoring"}\n\n'
    'event: heartbeat\ndata: {"type":"heartbeat","timestamp":1}\n\n'
    "event: status\n"
    'data: {"type":"status","jobId":"j1","videoId":"v1","status":"ready",'
    '"video":{"id":"v1","orgId":"org-1","title":"Beach Promo","status":"ready",'
    '"sourceType":"generated","aspect":"16:9","urls":{"mp4":"/media/videos/v1/video.mp4"},'
    '"createdAt":"2026-10-17T09:00:00Z","updatedAt":"2026-10-17T09:00:05Z"}}\n\n'
)


async def _lines(*lines: str):
    for line in lines:
        yield line


def _client(handler) -> FrameBrewClient:
    return FrameBrewClient(
        "http://testserver", org_id="org-1", transport=httpx.MockTransport(handler)
    )


class TestParseSSE:
    """Tests for SSE line grouping."""

    @pytest.mark.asyncio
    async def test_frames(self):
        """Test event names, multi-line data and ids."""
        frames = [
            frame
            async for frame in parse_sse(
                _lines("id: 3", "event: status", "data: a", "data: b", "", ": ping", "data: c", "")
            )
        ]

        assert [(f.event, f.data, f.id) for f in frames] == [
            ("status", "a\nb", "3"),
            ("message", "c", None),
        ]

    @pytest.mark.asyncio
    async def test_trailing_frame_without_blank_line(self):
        """Test that a final frame is emitted at end of stream."""
        frames = [frame async for frame in parse_sse(_lines("event: x", "data: tail"))]

        assert frames[0].data == "tail"


class TestFrameBrewClient:
    """Tests for HTTP calls against a mock transport."""

    @pytest.mark.asyncio
    async def test_list_videos_sends_camel_params_and_caches(self):
        """Test query parameter names, the org header and caching."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            seen["org"] = request.headers.get("X-Org-Id")
            return httpx.Response(200, json=VIDEO_LIST)

        async with _client(handler) as client:
            result = await client.list_videos(min_score=80, sort_by="score-high", limit=10)

        assert result == VIDEO_LIST
        assert seen["path"] == "/api/v1/videos"
        assert seen["params"] == {"minScore": "80", "sortBy": "score-high", "limit": "10"}
        assert seen["org"] == "org-1"
        assert client.cache.get(
            video_list_key({"minScore": 80, "sortBy": "score-high", "limit": 10})
        ) == VIDEO_LIST

    @pytest.mark.asyncio
    async def test_create_generation_payload(self):
        """Test that generation options are sent as given."""
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={"video": {"id": "v1"}, "job": {"id": "j1"}})

        async with _client(handler) as client:
            created = await client.create_generation(
                "p1", "Create an engaging product demo", 15, aspectRatio="9:16"
            )

        assert created["job"]["id"] == "j1"
        assert bodies == [
            {
                "projectId": "p1",
                "prompt": "Create an engaging product demo",
                "durationSec": 15,
                "aspectRatio": "9:16",
            }
        ]

    @pytest.mark.asyncio
    async def test_create_video_payload(self):
        """Test that direct video creation posts camelCase fields."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(201, json={"id": "v9", "status": "ready"})

        async with _client(handler) as client:
            created = await client.create_video("Studio cut", "p1", "uploaded", 30)

        assert created["status"] == "ready"
        assert requests == [
            (
                "POST",
                "/api/v1/videos",
                {
                    "title": "Studio cut",
                    "projectId": "p1",
                    "sourceType": "uploaded",
                    "durationSec": 30,
                },
            )
        ]

    @pytest.mark.asyncio
    async def test_delete_returns_none(self):
        """Test that 204 responses return None."""
        async with _client(lambda request: httpx.Response(204)) as client:
            assert await client.delete_video("v1") is None

    @pytest.mark.asyncio
    async def test_error_body_raised(self):
        """Test that error bodies become APIClientError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                409,
                json={
                    "code": "ACTIVE_JOB_EXISTS",
                    "message": "Video v1 already has an active generation job",
                    "details": {"job_id": "j2"},
                },
            )

        async with _client(handler) as client:
            with pytest.raises(APIClientError) as exc_info:
                await client.retry_job("j1")

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "ACTIVE_JOB_EXISTS"
        assert exc_info.value.context == {"details": {"job_id": "j2"}}

    @pytest.mark.asyncio
    async def test_error_without_json_body(self):
        """Test the fallback for non-JSON errors."""
        async with _client(lambda request: httpx.Response(502, text="bad gateway")) as client:
            with pytest.raises(APIClientError) as exc_info:
                await client.list_projects()

        assert exc_info.value.status_code == 502
        assert exc_info.value.error_code == "HTTP_ERROR"

    @pytest.mark.asyncio
    async def test_stream_events_yields_status_only(self):
        """Test that connected and heartbeat frames are skipped."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/v1/events"
            return httpx.Response(
                200, content=SSE_BODY.encode(), headers={"Content-Type": "text/event-stream"}
            )

        async with _client(handler) as client:
            events = [event async for event in client.stream_events()]

        assert [e.status for e in events] == [JobStatus.SCORING, JobStatus.READY]
        assert events[1].video.title == "Beach Promo"

    @pytest.mark.asyncio
    async def test_listen_patches_cache(self):
        """Test that streamed events update cached reads."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/v1/videos":
                return httpx.Response(200, json=VIDEO_LIST)
            return httpx.Response(200, content=SSE_BODY.encode())

        async with _client(handler) as client:
            await client.list_videos()
            sync = CacheSynchronizer(client.cache)
            handled = await client.listen(sync)

        listing = client.cache.get(video_list_key({}))
        assert handled == 2
        assert listing["items"][0]["status"] == "ready"
        assert listing["items"][0]["urls"]["mp4"] == "/media/videos/v1/video.mp4"
        assert [n.title for n in sync.notifications] == ["Video ready"]
        assert video_detail_key("v1") not in client.cache

    @pytest.mark.asyncio
    async def test_listen_stops_after_max_events(self):
        """Test that listen stops after max_events status events."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=SSE_BODY.encode())

        async with _client(handler) as client:
            handled = await client.listen(CacheSynchronizer(client.cache), max_events=1)

        assert handled == 1
