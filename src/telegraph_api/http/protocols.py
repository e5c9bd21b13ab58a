"""Protocol definitions for HTTP transport abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response returned by an HTTP client.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response content as bytes
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes
    content_type: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class FilePart:
    """
    One file in a multipart/form-data body.

    Attributes:
        name: Form field name
        filename: Filename reported to the server
        content: File bytes
        content_type: MIME type of the file
    """

    name: str
    filename: str
    content: bytes
    content_type: str


class HttpClient(Protocol):
    """
    Protocol for async HTTP clients.

    This abstraction allows for:
    - Mock implementations in tests
    - Different backends (aiohttp, httpx, etc.)
    """

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
            json: JSON body (mutually exclusive with files)
            files: Multipart file parts
            timeout: Request timeout in seconds

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            TransportError: If the request could not be completed
        """
        ...


class SyncHttpClient(Protocol):
    """Blocking counterpart of HttpClient."""

    def post(
        self,
        url: str,
        *,
        json: Optional[Any] = None,
        files: Optional[list[FilePart]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        ...
