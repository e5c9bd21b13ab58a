"""Blocking HTTP client backed by requests."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Optional

import requests

from ..errors import TransportError
from .protocols import FilePart, HttpResponse

logger = logging.getLogger(__name__)


class BlockingHttpClient:
    """
    Blocking HTTP client for JSON and multipart POST requests.

    Same contract as AsyncHttpClient, for code that can't use async/await.

    Example:
        with BlockingHttpClient() as client:
            response = client.post("https://api.telegra.ph/getPage/Sample", json={})
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        proxy: Optional[str] = None,
        default_timeout: float = 30.0,
        max_content_size: int = 10 * 1024 * 1024,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._default_timeout = default_timeout
        self._max_content_size = max_content_size
        self._owns_session = session is None
        self._session = session or requests.Session()
        # Sent per request so a caller-supplied session is never modified
        self._headers = {"Accept": "application/json"}
        if user_agent:
            self._headers["User-Agent"] = user_agent
        self._proxies = {"http": proxy, "https": proxy} if proxy else None

    def __enter__(self) -> BlockingHttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self._session.close()

    def post(
        self,
        url: str,
        *,
        json: Optional[Any] = None,
        files: Optional[list[FilePart]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        Perform an HTTP POST request.

        Raises:
            TransportError: On network errors, timeouts or oversized responses
        """
        timeout_val = timeout or self._default_timeout
        body: dict[str, Any] = {}
        if files:
            body["files"] = [
                (part.name, (part.filename, part.content, part.content_type)) for part in files
            ]
        else:
            body["json"] = json if json is not None else {}

        try:
            with self._session.post(
                url,
                headers=self._headers,
                proxies=self._proxies,
                timeout=timeout_val,
                stream=True,
                **body,
            ) as response:
                content = b""
                for chunk in response.iter_content(chunk_size=8192):
                    content += chunk
                    if len(content) > self._max_content_size:
                        raise TransportError(
                            f"Content size limit exceeded: >{self._max_content_size} bytes",
                            url=url,
                            status_code=response.status_code,
                        )

                return HttpResponse(
                    status_code=response.status_code,
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    headers=dict(response.headers),
                    url=response.url,
                )

        except requests.Timeout as e:
            logger.warning(f"Request to {url} timed out after {timeout_val}s")
            raise TransportError(f"Request timed out after {timeout_val}s", url=url) from e
        except requests.RequestException as e:
            logger.warning(f"HTTP error for {url}: {e}")
            raise TransportError(f"HTTP request failed: {e}", url=url) from e
