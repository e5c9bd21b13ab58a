"""File upload to the Telegraph upload endpoint.

The upload endpoint is not part of the JSON API: it takes multipart form data
and answers either with a list of ``{"src": "/file/..."}`` objects, one per
file in request order, or with ``{"error": "..."}``.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Sequence
from os import PathLike
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urljoin

from pydantic import TypeAdapter, ValidationError

from ..errors import ApiError, TransportError
from ..http.protocols import FilePart, HttpClient, HttpResponse, SyncHttpClient
from ..models.config import DEFAULT_UPLOAD_URL
from ..models.types import UploadedFile
from .methods import decode_json

logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "text/plain"

StrPath = Union[str, PathLike]

_uploaded_list_adapter: TypeAdapter[list[UploadedFile]] = TypeAdapter(list[UploadedFile])


def guess_mime(path: StrPath) -> str:
    """Guess a file's MIME type from its extension, defaulting to text/plain."""
    mime, _ = mimetypes.guess_type(str(path))
    return mime or FALLBACK_MIME_TYPE


def prepare_files(paths: Sequence[StrPath]) -> list[FilePart]:
    """
    Read every file into a multipart part.

    All files are read before anything is sent, so an unreadable file aborts
    the upload without a partial request.

    Args:
        paths: Local file paths

    Returns:
        One FilePart per path, named by its index

    Raises:
        ValueError: If no paths are given
        OSError: If any file cannot be read
    """
    if not paths:
        raise ValueError("No files to upload")
    parts = []
    for idx, path in enumerate(paths):
        content = Path(path).read_bytes()
        parts.append(
            FilePart(
                name=str(idx),
                filename=str(idx),
                content=content,
                content_type=guess_mime(path),
            )
        )
    return parts


def decode_upload_response(response: HttpResponse, upload_url: str = DEFAULT_UPLOAD_URL) -> list[str]:
    """
    Decode an upload response into absolute file URLs, in request order.

    Raises:
        ApiError: If the service returned an error object
        TransportError: If the body is not a recognised upload response
    """
    payload = decode_json(response)

    if isinstance(payload, dict) and "error" in payload:
        logger.warning(f"upload rejected: {payload['error']}")
        raise ApiError(str(payload["error"]), method="upload")

    try:
        files = _uploaded_list_adapter.validate_python(payload)
    except ValidationError as e:
        raise TransportError(
            f"Unexpected upload response (HTTP {response.status_code})",
            url=response.url or None,
            status_code=response.status_code,
        ) from e

    if not response.ok:
        raise TransportError(
            f"upload failed with HTTP {response.status_code}",
            url=response.url or None,
            status_code=response.status_code,
        )

    return [urljoin(upload_url, uploaded.src) for uploaded in files]


async def upload_files(
    http_client: HttpClient,
    paths: Sequence[StrPath],
    upload_url: str = DEFAULT_UPLOAD_URL,
    timeout: Optional[float] = None,
) -> list[str]:
    """
    Upload local files and return their URLs.

    Example:
        async with AsyncHttpClient() as client:
            urls = await upload_files(client, ["cover.jpg", "figure.png"])
    """
    parts = prepare_files(paths)
    logger.debug(f"Uploading {len(parts)} file(s) to {upload_url}")
    response = await http_client.post(upload_url, files=parts, timeout=timeout)
    return decode_upload_response(response, upload_url)


def upload_files_blocking(
    http_client: SyncHttpClient,
    paths: Sequence[StrPath],
    upload_url: str = DEFAULT_UPLOAD_URL,
    timeout: Optional[float] = None,
) -> list[str]:
    """Blocking variant of upload_files."""
    parts = prepare_files(paths)
    logger.debug(f"Uploading {len(parts)} file(s) to {upload_url}")
    response = http_client.post(upload_url, files=parts, timeout=timeout)
    return decode_upload_response(response, upload_url)
