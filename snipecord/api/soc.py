"""
Schedule of Classes API Client

Single responsibility: communicate with the Rutgers SOC REST API.
"""

import asyncio
import gzip
import json
import logging
import zlib
from typing import Any, Dict, List, Optional

import aiohttp

from ..exceptions import SOCAPIError
from ..models import Course
from ..settings import SOC_COURSES_URL, SOC_OPEN_SECTIONS_URL

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def decode_body(body: bytes) -> Any:
    """
    Decode a JSON response body.

    The .gz endpoints are normally served with Content-Encoding: gzip, which
    aiohttp already undoes. Some mirrors send the raw gzip payload instead,
    so a body that still starts with the gzip magic is decompressed here.

    Raises:
        ValueError: If the body isn't valid (optionally gzipped) JSON
    """
    if body[:2] == GZIP_MAGIC:
        try:
            body = gzip.decompress(body)
        except (OSError, EOFError, zlib.error) as e:
            raise ValueError(f"Corrupt gzip body: {e}") from e
    return json.loads(body.decode("utf-8"))


class SOCClient:
    """
    Async client for the Schedule of Classes API.

    Handles:
    - One-shot course metadata fetch (titles, sections, indexes)
    - Open sections snapshot fetch, polled every tick

    Every failure is raised as SOCAPIError. There are no retries here: the
    poll cycle simply tries again on its next tick.
    """

    def __init__(
        self,
        courses_url: str = None,
        open_sections_url: str = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.courses_url = courses_url or SOC_COURSES_URL
        self.open_sections_url = open_sections_url or SOC_OPEN_SECTIONS_URL
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self):
        """Create session if needed."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True

    async def close(self):
        """Close the HTTP session (only if we created it)."""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None

    async def _get_json(self, url: str, params: Dict[str, str]) -> Any:
        """
        GET a SOC endpoint and decode the JSON body.

        Args:
            url: Endpoint URL
            params: Query parameters (year, term, campus, level)

        Returns:
            Decoded JSON

        Raises:
            SOCAPIError: On transport error, non-200 status or undecodable body
        """
        await self._ensure_session()

        try:
            async with self._session.get(url, params=params) as response:
                if response.status != 200:
                    text = await response.text(errors="replace")
                    raise SOCAPIError(
                        f"SOC API error {response.status}: {text[:200]}",
                        url=url,
                        status=response.status,
                    )
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SOCAPIError(f"Request to {url} failed: {e!r}", url=url) from e

        try:
            return decode_body(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise SOCAPIError(f"Failed to parse response from {url}: {e}", url=url) from e

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------

    async def get_courses(self, params: Dict[str, str]) -> List[Course]:
        """
        Get course metadata for a term.

        Args:
            params: Query parameters (year, term, campus, level)

        Returns:
            List of Course objects

        Raises:
            SOCAPIError: On request failure or schema mismatch
        """
        response = await self._get_json(self.courses_url, params)
        if not isinstance(response, list):
            raise SOCAPIError(
                f"Expected a list of courses, got {type(response).__name__}",
                url=self.courses_url,
            )

        try:
            courses = [Course.from_dict(c) for c in response]
        except (KeyError, TypeError) as e:
            raise SOCAPIError(
                f"Malformed course record: {e!r}", url=self.courses_url
            ) from e

        logger.debug(f"Fetched {len(courses)} courses")
        return courses

    async def get_open_sections(self, params: Dict[str, str]) -> List[str]:
        """
        Get the indexes of all currently open sections.

        Args:
            params: Query parameters (year, term, campus, level)

        Returns:
            List of registration index strings

        Raises:
            SOCAPIError: On request failure or schema mismatch
        """
        response = await self._get_json(self.open_sections_url, params)
        if not isinstance(response, list) or not all(isinstance(i, str) for i in response):
            raise SOCAPIError(
                "Expected a list of index strings from open sections",
                url=self.open_sections_url,
            )
        return response
