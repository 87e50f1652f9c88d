"""Async HTTP client for the Frame Brew API.

Reads of video listings and details are stored in a QueryCache so a
CacheSynchronizer fed from ``stream_events()`` can keep them current
without refetching.
"""

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

import httpx

from framebrew.client.cache import QueryCache, video_detail_key, video_list_key
from framebrew.client.synchronizer import CacheSynchronizer
from framebrew.core.exceptions import APIClientError
from framebrew.core.logging import get_logger
from framebrew.schemas.events import StatusEvent

logger = get_logger(__name__)

API_PREFIX = "/api/v1"
ORG_HEADER = "X-Org-Id"


@dataclass
class SSEFrame:
    event: str
    data: str
    id: str | None = None


async def parse_sse(lines: AsyncIterator[str]) -> AsyncIterator[SSEFrame]:
    """Group an SSE line stream into frames.

    Comment lines (``:``) are skipped; a frame is emitted on each blank line
    that follows at least one ``data:`` line.
    """
    event = "message"
    data: list[str] = []
    event_id: str | None = None

    async for raw in lines:
        line = raw.rstrip("\r")
        if not line:
            if data:
                yield SSEFrame(event=event, data="\n".join(data), id=event_id)
            event, data, event_id = "message", [], None
            continue
        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        value = value[1:] if value.startswith(" ") else value
        if field == "event":
            event = value
        elif field == "data":
            data.append(value)
        elif field == "id":
            event_id = value

    if data:
        yield SSEFrame(event=event, data="\n".join(data), id=event_id)


def _camel_params(**params: Any) -> dict[str, Any]:
    names = {
        "min_score": "minScore",
        "project_id": "projectId",
        "source_type": "sourceType",
        "sort_by": "sortBy",
    }
    return {names.get(k, k): v for k, v in params.items() if v is not None and v != []}


class FrameBrewClient:
    """Typed access to every Frame Brew endpoint.

    Example:
        >>> async with FrameBrewClient("http://localhost:8000", org_id="org-1") as client:
        ...     created = await client.create_generation(project_id, "A calm sunrise timelapse", 15)
        ...     await client.listen(CacheSynchronizer(client.cache), max_events=5)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        org_id: str | None = None,
        cache: QueryCache | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Server root URL
            org_id: Organization sent in the X-Org-Id header
            cache: Cache filled by list and detail reads
            timeout: Request timeout in seconds (the event stream has no read timeout)
            transport: Custom transport (tests use httpx.MockTransport)
        """
        headers = {ORG_HEADER: org_id} if org_id else {}
        self.cache = cache or QueryCache()
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "FrameBrewClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ============================================
    # Videos
    # ============================================

    async def list_videos(
        self,
        query: str | None = None,
        status: list[str] | None = None,
        min_score: float | None = None,
        project_id: str | None = None,
        source_type: str | None = None,
        sort_by: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Fetch a video listing and cache it under its query key."""
        params = _camel_params(
            query=query,
            status=status,
            min_score=min_score,
            project_id=project_id,
            source_type=source_type,
            sort_by=sort_by,
            cursor=cursor,
            limit=limit,
        )
        result = await self._request("GET", "/videos", params=params)
        self.cache.set(video_list_key(params), result)
        return result

    async def get_video(self, video_id: str) -> dict[str, Any]:
        """Fetch a video detail and cache it."""
        result = await self._request("GET", f"/videos/{video_id}")
        self.cache.set(video_detail_key(video_id), result)
        return result

    async def create_video(
        self, title: str, project_id: str, source_type: str, duration_sec: int
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/videos",
            json={
                "title": title,
                "projectId": project_id,
                "sourceType": source_type,
                "durationSec": duration_sec,
            },
        )

    async def update_video(self, video_id: str, **fields: Any) -> dict[str, Any]:
        return await self._request("PUT", f"/videos/{video_id}", json=fields)

    async def delete_video(self, video_id: str) -> None:
        await self._request("DELETE", f"/videos/{video_id}")

    # ============================================
    # Projects & Templates
    # ============================================

    async def list_projects(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/projects")

    async def create_project(self, name: str, description: str | None = None) -> dict[str, Any]:
        return await self._request(
            "POST", "/projects", json={"name": name, "description": description}
        )

    async def update_project(self, project_id: str, **fields: Any) -> dict[str, Any]:
        return await self._request("PUT", f"/projects/{project_id}", json=fields)

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/projects/{project_id}")

    async def list_templates(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/templates")

    async def create_template(self, **fields: Any) -> dict[str, Any]:
        return await self._request("POST", "/templates", json=fields)

    async def update_template(self, template_id: str, **fields: Any) -> dict[str, Any]:
        return await self._request("PUT", f"/templates/{template_id}", json=fields)

    async def delete_template(self, template_id: str) -> None:
        await self._request("DELETE", f"/templates/{template_id}")

    # ============================================
    # Uploads & Generations
    # ============================================

    async def complete_upload(
        self,
        filename: str,
        project_id: str,
        duration_sec: float,
        content_type: str | None = None,
        size_bytes: int | None = None,
    ) -> dict[str, Any]:
        payload = {
            "filename": filename,
            "projectId": project_id,
            "durationSec": duration_sec,
            "contentType": content_type,
            "sizeBytes": size_bytes,
        }
        return await self._request(
            "POST", "/uploads/complete", json={k: v for k, v in payload.items() if v is not None}
        )

    async def create_generation(
        self, project_id: str, prompt: str, duration_sec: int, **options: Any
    ) -> dict[str, Any]:
        """Queue a generation.

        Args:
            project_id: Target project
            prompt: Generation prompt
            duration_sec: Requested duration in seconds
            **options: Optional camelCase request fields (aspectRatio, model, ...)
        """
        payload = {"projectId": project_id, "prompt": prompt, "durationSec": duration_sec}
        payload.update(options)
        return await self._request("POST", "/generations", json=payload)

    async def list_jobs(self, status: str | None = None, limit: int = 50) -> dict[str, Any]:
        params = _camel_params(status=status, limit=limit)
        return await self._request("GET", "/generations/jobs", params=params)

    async def get_job(self, job_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/generations/jobs/{job_id}")

    async def cancel_job(self, job_id: str) -> dict[str, Any]:
        return await self._request("POST", f"/generations/jobs/{job_id}/cancel")

    async def retry_job(self, job_id: str) -> dict[str, Any]:
        return await self._request("POST", f"/generations/jobs/{job_id}/retry")

    async def rescore_video(self, video_id: str) -> dict[str, Any]:
        return await self._request("POST", f"/generations/videos/{video_id}/rescore")

    async def rerender_video(self, video_id: str) -> dict[str, Any]:
        return await self._request("POST", f"/generations/videos/{video_id}/rerender")

    async def duplicate_as_template(self, video_id: str) -> dict[str, Any]:
        return await self._request("POST", f"/generations/videos/{video_id}/duplicate-template")

    # ============================================
    # Events
    # ============================================

    async def stream_events(self) -> AsyncIterator[StatusEvent]:
        """Yield status events from the server event stream.

        Connection and heartbeat frames are consumed silently.

        Raises:
            APIClientError: If the server refuses the stream
        """
        timeout = httpx.Timeout(self.timeout, read=None)
        async with self._client.stream("GET", f"{API_PREFIX}/events", timeout=timeout) as response:
            if response.is_error:
                await response.aread()
                raise self._error(response)

            logger.info("Event stream connected", url=str(response.url))
            async for frame in parse_sse(response.aiter_lines()):
                if frame.event != "status":
                    continue
                yield StatusEvent.model_validate(json.loads(frame.data))

    async def listen(self, synchronizer: CacheSynchronizer, max_events: int | None = None) -> int:
        """Feed streamed status events into a synchronizer.

        Args:
            synchronizer: Synchronizer patching the cache
            max_events: Stop after this many events (None: until the stream ends)

        Returns:
            Number of events applied
        """
        handled = 0
        async for event in self.stream_events():
            synchronizer.handle(event)
            handled += 1
            if max_events is not None and handled >= max_events:
                break
        return handled

    # ============================================
    # Internals
    # ============================================

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._client.request(method, f"{API_PREFIX}{path}", **kwargs)
        if response.is_error:
            raise self._error(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _error(response: httpx.Response) -> APIClientError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        details = body.get("details")
        error = APIClientError(
            body.get("message") or response.reason_phrase or "Request failed",
            status_code=response.status_code,
            error_code=body.get("code", "HTTP_ERROR"),
            context={"details": details} if details is not None else None,
        )
        logger.warning(
            "API request failed",
            url=str(response.request.url),
            status_code=response.status_code,
            error_code=error.error_code,
        )
        return error


__all__ = [
    "API_PREFIX",
    "FrameBrewClient",
    "SSEFrame",
    "parse_sse",
]
