"""Request construction and response decoding shared by both clients.

Each Telegraph method is described by an ApiRequest: the method name, an
optional page path appended to the URL, the JSON parameters and the pydantic
model the result decodes into. Building requests validates arguments before
any I/O; decoding turns an HttpResponse into a typed result, an ApiError or
a TransportError.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import ApiError, TransportError
from ..http.protocols import HttpResponse
from ..models.nodes import Node, nodes_to_python
from ..models.types import Account, Envelope, Page, PageList, PageViews

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

ACCOUNT_FIELDS = frozenset({"short_name", "author_name", "author_url", "auth_url", "page_count"})
MAX_PAGE_LIST_LIMIT = 200


@dataclass(frozen=True)
class ApiRequest(Generic[T]):
    """
    A single Telegraph API call.

    Attributes:
        method: API method name (e.g. "createPage")
        result_type: Model the envelope's result decodes into
        params: JSON parameters, absent optional fields already removed
        path: Page path appended to the method URL (getPage, editPage, getViews)
        authenticated: Whether the access token is added to the body
    """

    method: str
    result_type: type[T]
    params: dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None
    authenticated: bool = False

    def body(self, access_token: str) -> dict[str, Any]:
        """Return the JSON body, adding the access token when required."""
        if not self.authenticated:
            return dict(self.params)
        if not access_token:
            raise ValueError(f"{self.method} requires an access token")
        return {"access_token": access_token, **self.params}


def _compact(**params: Any) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


def _require_path(path: str) -> str:
    path = (path or "").strip().strip("/")
    if not path:
        raise ValueError("Page path cannot be empty")
    return path


def create_account(
    short_name: str,
    author_name: Optional[str] = None,
    author_url: Optional[str] = None,
) -> ApiRequest[Account]:
    if not short_name:
        raise ValueError("short_name cannot be empty")
    return ApiRequest(
        "createAccount",
        Account,
        _compact(short_name=short_name, author_name=author_name, author_url=author_url),
    )


def edit_account_info(
    short_name: Optional[str] = None,
    author_name: Optional[str] = None,
    author_url: Optional[str] = None,
) -> ApiRequest[Account]:
    return ApiRequest(
        "editAccountInfo",
        Account,
        _compact(short_name=short_name, author_name=author_name, author_url=author_url),
        authenticated=True,
    )


def get_account_info(fields: Optional[list[str]] = None) -> ApiRequest[Account]:
    params: dict[str, Any] = {}
    if fields is not None:
        unknown = sorted(set(fields) - ACCOUNT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown account fields: {', '.join(unknown)}")
        params["fields"] = list(fields)
    return ApiRequest("getAccountInfo", Account, params, authenticated=True)


def revoke_access_token() -> ApiRequest[Account]:
    return ApiRequest("revokeAccessToken", Account, authenticated=True)


def create_page(
    title: str,
    content: list[Node],
    author_name: Optional[str] = None,
    author_url: Optional[str] = None,
    return_content: bool = False,
) -> ApiRequest[Page]:
    if not title:
        raise ValueError("title cannot be empty")
    return ApiRequest(
        "createPage",
        Page,
        _compact(
            title=title,
            author_name=author_name,
            author_url=author_url,
            content=nodes_to_python(content),
            return_content=return_content,
        ),
        authenticated=True,
    )


def edit_page(
    path: str,
    title: str,
    content: list[Node],
    author_name: Optional[str] = None,
    author_url: Optional[str] = None,
    return_content: bool = False,
) -> ApiRequest[Page]:
    if not title:
        raise ValueError("title cannot be empty")
    return ApiRequest(
        "editPage",
        Page,
        _compact(
            title=title,
            author_name=author_name,
            author_url=author_url,
            content=nodes_to_python(content),
            return_content=return_content,
        ),
        path=_require_path(path),
        authenticated=True,
    )


def get_page(path: str, return_content: bool = False) -> ApiRequest[Page]:
    return ApiRequest("getPage", Page, {"return_content": return_content}, path=_require_path(path))


def get_page_list(offset: int = 0, limit: int = 50) -> ApiRequest[PageList]:
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    if not 0 <= limit <= MAX_PAGE_LIST_LIMIT:
        raise ValueError(f"limit must be between 0 and {MAX_PAGE_LIST_LIMIT}, got {limit}")
    return ApiRequest("getPageList", PageList, {"offset": offset, "limit": limit}, authenticated=True)


def get_views(
    path: str,
    year: Optional[int] = None,
    month: Optional[int] = None,
    day: Optional[int] = None,
    hour: Optional[int] = None,
) -> ApiRequest[PageViews]:
    """
    Build a getViews request.

    The date filter is hierarchical: hour needs day, day needs month and
    month needs year. Without any of them the total view count is returned.
    """
    if hour is not None and day is None:
        raise ValueError("hour requires day")
    if day is not None and month is None:
        raise ValueError("day requires month")
    if month is not None and year is None:
        raise ValueError("month requires year")
    if year is not None and not 2000 <= year <= 2100:
        raise ValueError(f"year must be between 2000 and 2100, got {year}")
    if month is not None and not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if day is not None and not 1 <= day <= 31:
        raise ValueError(f"day must be between 1 and 31, got {day}")
    if hour is not None and not 0 <= hour <= 24:
        raise ValueError(f"hour must be between 0 and 24, got {hour}")
    return ApiRequest(
        "getViews",
        PageViews,
        _compact(year=year, month=month, day=day, hour=hour),
        path=_require_path(path),
    )


def decode_json(response: HttpResponse) -> Any:
    """
    Decode a response body as JSON.

    Raises:
        TransportError: If the body is not valid JSON
    """
    try:
        return json.loads(response.content)
    except (ValueError, UnicodeDecodeError) as e:
        snippet = response.content[:200].decode("utf-8", errors="replace")
        raise TransportError(
            f"Malformed JSON response (HTTP {response.status_code}): {snippet}",
            url=response.url or None,
            status_code=response.status_code,
        ) from e


def decode_response(request: ApiRequest[T], response: HttpResponse) -> T:
    """
    Decode an API response envelope into the request's result type.

    Args:
        request: The request that produced the response
        response: Raw HTTP response

    Returns:
        Typed result payload

    Raises:
        ApiError: If the service answered ``ok: false``
        TransportError: If the body is not a valid envelope
    """
    try:
        payload = decode_json(response)
    except TransportError as e:
        if not response.ok:
            raise TransportError(
                f"{request.method} failed with HTTP {response.status_code}",
                url=response.url or None,
                status_code=response.status_code,
            ) from e
        raise

    try:
        envelope = Envelope[request.result_type].model_validate(payload)
    except ValidationError as e:
        raise TransportError(
            f"Unexpected {request.method} response (HTTP {response.status_code}): {e.error_count()} validation errors",
            url=response.url or None,
            status_code=response.status_code,
        ) from e

    try:
        return envelope.unwrap(request.method)
    except ApiError as e:
        logger.warning(f"{request.method} rejected: {e.error}")
        raise
