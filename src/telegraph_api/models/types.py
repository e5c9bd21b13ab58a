"""Pydantic models mirroring the Telegraph API object schema."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from ..errors import ApiError, TransportError
from .nodes import Node

T = TypeVar("T")


class Account(BaseModel):
    """A Telegraph account.

    The service fills in a different subset of fields per method, so every
    field is optional. ``access_token`` is only present after createAccount
    and revokeAccessToken.
    """

    short_name: Optional[str] = None
    author_name: Optional[str] = None
    author_url: Optional[str] = None
    access_token: Optional[str] = None
    auth_url: Optional[str] = None
    page_count: Optional[int] = None

    model_config = {"extra": "ignore"}


class Page(BaseModel):
    """A Telegraph page."""

    path: str
    url: str
    title: str
    description: str = ""
    author_name: Optional[str] = None
    author_url: Optional[str] = None
    image_url: Optional[str] = None
    content: Optional[list[Node]] = None
    views: int = 0
    can_edit: Optional[bool] = None

    model_config = {"extra": "ignore"}


class PageList(BaseModel):
    """A list of pages belonging to an account, most recent first."""

    total_count: int
    pages: list[Page] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class PageViews(BaseModel):
    """Number of views for a page."""

    views: int

    model_config = {"extra": "ignore"}


class UploadedFile(BaseModel):
    """One entry of the upload endpoint's response."""

    src: str


class Envelope(BaseModel, Generic[T]):
    """
    Uniform response wrapper: ``{"ok": true, "result": ...}`` or
    ``{"ok": false, "error": "..."}``.

    Example:
        envelope = Envelope[Page].model_validate(payload)
        page = envelope.unwrap("getPage")
    """

    ok: bool
    result: Optional[T] = None
    error: Optional[str] = None

    def unwrap(self, method: Optional[str] = None) -> T:
        """
        Return the result or raise the service error.

        Args:
            method: API method name, attached to the raised ApiError

        Returns:
            The typed result payload

        Raises:
            ApiError: If ok is false
            TransportError: If ok is true but the result is missing
        """
        if not self.ok:
            raise ApiError(self.error or "UNKNOWN_ERROR", method=method)
        if self.result is None:
            raise TransportError(f"{method or 'Response'} envelope has ok=true but no result")
        return self.result
