"""Ingress boundary for obtaining KML bytes and handing them to the parser.

Two sources are supported:

- **load_kml_file**: a local file, read off the event loop.
- **load_kml_from_url**: an HTTP(S) location, fetched with ``httpx``.

Transport problems raise ``KmlLoadError``; malformed documents raise
``KmlParseError``. Neither source retries.

``KmlLoader`` wraps both for an application that displays one document
at a time: loads are serialised, and a failed load leaves the last
successful result in place.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from kml_tracks.core.config import TracksConfig
from kml_tracks.core.constants import DEFAULT_ICON_BASE_SIZE
from kml_tracks.core.exceptions import KmlLoadError, TracksError
from kml_tracks.models.track import ExtractionResult
from kml_tracks.parsing import parse_kml_bytes

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("kml_tracks.core.ingress")

DEFAULT_HTTP_TIMEOUT_S = 30.0
RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})


async def load_kml_file(
    kml_path: Path | str, *, base_size: float = DEFAULT_ICON_BASE_SIZE
) -> ExtractionResult:
    """Read a local KML file and extract its tracks and icons.

    Raises:
        KmlLoadError: If the file cannot be read.
        KmlParseError: If the file is not well-formed XML.
    """
    kml_path = Path(kml_path)
    logger.info("Loading KML file: %s", kml_path)
    try:
        content = await asyncio.to_thread(kml_path.read_bytes)
    except OSError as exc:
        logger.warning("Error loading KML file %s: %s", kml_path, exc)
        msg = f"Cannot read KML file: {exc}"
        raise KmlLoadError(msg, reason=str(exc), source=str(kml_path)) from exc

    return parse_kml_bytes(content, source=kml_path.name, base_size=base_size)


async def load_kml_from_url(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT_S,
    base_size: float = DEFAULT_ICON_BASE_SIZE,
) -> ExtractionResult:
    """Fetch a KML document over HTTP and extract its tracks and icons.

    Args:
        url: Location of the KML document.
        client: Client to reuse. A short-lived client is created when omitted.
        timeout: Request timeout in seconds (ignored when ``client`` is given).
        base_size: Unscaled icon size in pixels.

    Raises:
        KmlLoadError: On network errors or a non-success HTTP status.
        KmlParseError: If the response body is not well-formed XML.
    """
    logger.info("Loading KML from URL: %s", url)
    if client is None:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
            content = await _fetch(owned, url)
    else:
        content = await _fetch(client, url)

    return parse_kml_bytes(content, source=url, base_size=base_size)


async def _fetch(client: httpx.AsyncClient, url: str) -> bytes:
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("Error loading KML from URL %s: %s", url, exc)
        msg = f"Cannot fetch KML: {exc}"
        raise KmlLoadError(msg, reason=str(exc), source=url) from exc

    if not response.is_success:
        reason = response.reason_phrase
        logger.warning(
            "Error loading KML from URL %s: HTTP %d %s", url, response.status_code, reason
        )
        msg = f"HTTP {response.status_code}: {reason}"
        raise KmlLoadError(
            msg,
            status_code=response.status_code,
            reason=reason,
            source=url,
            retryable=_is_retryable_status(response.status_code),
        )

    return response.content


def _is_retryable_status(status_code: int) -> bool:
    """Server errors, timeouts and throttling may clear up; other 4xx will not."""
    return status_code >= 500 or status_code in RETRYABLE_CLIENT_STATUSES


class KmlLoader:
    """Single-flight KML loader holding the currently displayed result.

    Only one load runs at a time; a second caller waits for the first to
    finish. ``current`` changes only when a load succeeds.
    """

    def __init__(
        self,
        config: TracksConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or TracksConfig()
        self._client = client
        self._lock = asyncio.Lock()
        self._current = ExtractionResult()

    @property
    def config(self) -> TracksConfig:
        return self._config

    @property
    def current(self) -> ExtractionResult:
        """The last successfully loaded result (empty before the first load)."""
        return self._current

    async def load_file(self, kml_path: Path | str) -> ExtractionResult:
        return await self._load(
            lambda: load_kml_file(kml_path, base_size=self._config.icon_base_size)
        )

    async def load_url(self, url: str) -> ExtractionResult:
        return await self._load(
            lambda: load_kml_from_url(
                url,
                client=self._client,
                timeout=self._config.http_timeout_s,
                base_size=self._config.icon_base_size,
            )
        )

    async def load_default(self) -> ExtractionResult:
        """Load ``config.default_kml_url``.

        Raises:
            KmlLoadError: If no default URL is configured, or the load fails.
        """
        if not self._config.default_kml_url:
            msg = "No default KML URL configured (set KML_DEFAULT_URL)"
            raise KmlLoadError(msg, retryable=False)
        return await self.load_url(self._config.default_kml_url)

    def clear(self) -> None:
        self._current = ExtractionResult()

    async def _load(self, start: Callable[[], Awaitable[ExtractionResult]]) -> ExtractionResult:
        async with self._lock:
            try:
                result = await start()
            except TracksError as exc:
                logger.warning("KML load failed, keeping previous result: %s", exc)
                raise
            self._current = result
            return result
