"""Async client for the DSA sheet backend."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from . import config
from .errors import NetworkError, NotFound, ServerError
from .models import ProgressRecord, ProgressStats, Topic

logger = logging.getLogger(__name__)


class SheetAPI:
    """Handles communication with the sheet's REST API.

    Use as an async context manager so the underlying session is closed::

        async with SheetAPI() as api:
            topics = await api.fetch_all_topics()
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.token = token if token is not None else config.API_TOKEN
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.session = None

    async def __aenter__(self):
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers=headers
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch_topic(self, topic_id: str) -> Topic:
        """Fetch one topic with its problems."""
        data = await self._request("GET", f"/topics/{topic_id}")
        return self._parse(Topic.from_dict, data)

    async def fetch_all_topics(self) -> List[Topic]:
        """Fetch every topic on the sheet."""
        data = await self._request("GET", "/topics")
        return self._parse(lambda items: [Topic.from_dict(item) for item in items], data)

    async def fetch_progress(self) -> List[ProgressRecord]:
        """Fetch the current user's progress records."""
        data = await self._request("GET", "/progress")
        return self._parse(lambda items: [ProgressRecord.from_dict(item) for item in items], data)

    async def fetch_progress_stats(self) -> ProgressStats:
        """Fetch the backend's precomputed completion figures."""
        data = await self._request("GET", "/progress/stats")
        return self._parse(ProgressStats.from_dict, data)

    async def post_progress(self, problem_id: str, completed: bool) -> Dict[str, Any]:
        """Store the completion flag for one problem."""
        data = await self._request("POST", f"/progress/{problem_id}", json={"completed": completed})
        return data if isinstance(data, dict) else {}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        if self.session is None:
            raise RuntimeError("SheetAPI must be used as an async context manager")

        url = f"{self.base_url}{path}"
        try:
            async with self.session.request(method, url, **kwargs) as response:
                if response.status == 404:
                    raise NotFound(f"{method} {path} returned 404")
                if response.status >= 400:
                    body = await response.text(errors="replace")
                    raise ServerError(
                        f"{method} {path} returned {response.status}: {body[:200]}",
                        status=response.status
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ServerError(f"{method} {path} returned invalid JSON: {e}",
                                      status=response.status) from e
        except asyncio.TimeoutError as e:
            raise NetworkError(f"{method} {path} timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e

    @staticmethod
    def _parse(parser, data: Any):
        try:
            return parser(data)
        except (KeyError, ValueError, TypeError) as e:
            logger.debug("Malformed payload: %r", data)
            raise ServerError(f"Malformed response: {e!r}") from e
