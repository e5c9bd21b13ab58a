"""Async HTTP client backed by aiohttp."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any, Optional

import aiohttp

from ..errors import TransportError
from .protocols import FilePart, HttpResponse

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """
    Async HTTP client for JSON and multipart POST requests.

    Features:
    - One aiohttp session per context, reused across requests
    - Content size limits to prevent memory exhaustion
    - Timeout and proxy controls
    - aiohttp/timeout failures surfaced as TransportError

    No retries are attempted; a failed request fails once.

    Example:
        async with AsyncHttpClient() as client:
            response = await client.post("https://api.telegra.ph/getPage/Sample", json={})
            print(response.status_code)
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        proxy: Optional[str] = None,
        default_timeout: float = 30.0,
        max_content_size: int = 10 * 1024 * 1024,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http:// or https://)
            default_timeout: Default request timeout in seconds
            max_content_size: Maximum response size in bytes
        """
        self._user_agent = user_agent
        self._proxy = proxy
        self._default_timeout = default_timeout
        self._max_content_size = max_content_size

        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        headers = {"Accept": "application/json"}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        self._session = aiohttp.ClientSession(headers=headers)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    @staticmethod
    def _build_form(files: list[FilePart]) -> aiohttp.FormData:
        form = aiohttp.FormData()
        for part in files:
            form.add_field(
                part.name,
                part.content,
                filename=part.filename,
                content_type=part.content_type,
            )
        return form

    async def post(
        self,
        url: str,
        *,
        json: Optional[Any] = None,
        files: Optional[list[FilePart]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        Perform an HTTP POST request.

        Args:
            url: The endpoint URL
            json: JSON body
            files: Multipart file parts (sent instead of a JSON body)
            timeout: Request timeout in seconds (uses default if None)

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            TransportError: On network errors, timeouts or oversized responses
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        timeout_val = timeout or self._default_timeout
        body: dict[str, Any] = {}
        if files:
            body["data"] = self._build_form(files)
        else:
            body["json"] = json if json is not None else {}

        try:
            async with self._session.post(
                url,
                timeout=aiohttp.ClientTimeout(total=timeout_val),
                proxy=self._proxy,
                **body,
            ) as response:
                content_length = response.headers.get("Content-Length")
                if content_length and content_length.isdigit() and int(content_length) > self._max_content_size:
                    raise TransportError(
                        f"Content too large: {content_length} bytes",
                        url=url,
                        status_code=response.status,
                    )

                content = b""
                async for chunk in response.content.iter_chunked(8192):
                    content += chunk
                    if len(content) > self._max_content_size:
                        raise TransportError(
                            f"Content size limit exceeded: >{self._max_content_size} bytes",
                            url=url,
                            status_code=response.status,
                        )

                return HttpResponse(
                    status_code=response.status,
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    headers=dict(response.headers),
                    url=str(response.url),
                )

        except asyncio.TimeoutError as e:
            logger.warning(f"Request to {url} timed out after {timeout_val}s")
            raise TransportError(f"Request timed out after {timeout_val}s", url=url) from e
        except aiohttp.ClientError as e:
            logger.warning(f"HTTP error for {url}: {e}")
            raise TransportError(f"HTTP request failed: {e}", url=url) from e
