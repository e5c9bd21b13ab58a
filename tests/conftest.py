"""Shared fixtures for telegraph_api tests."""

import json
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from telegraph_api.http import HttpResponse

TOKEN = "b968da509bb76866c35425099bc0989a5ec3b32997d55286c657e6994bbb"

SAMPLE_ACCOUNT = {
    "short_name": "Sandbox",
    "author_name": "Anonymous",
    "author_url": "",
    "access_token": TOKEN,
    "auth_url": "https://edit.telegra.ph/auth/lu7jxTd1qmNkaMwAk0wXXDrUbWGLaBCa0EUDKAfrx0",
}

SAMPLE_PAGE = {
    "path": "Sample-Page-12-15",
    "url": "https://telegra.ph/Sample-Page-12-15",
    "title": "Sample Page",
    "description": "Hello, world",
    "author_name": "Anonymous",
    "content": ["Hello, world"],
    "views": 0,
    "can_edit": True,
}


def make_response(payload: Any, status_code: int = 200, raw: Optional[bytes] = None) -> HttpResponse:
    """Build an HttpResponse carrying a JSON payload (or raw bytes)."""
    content = raw if raw is not None else json.dumps(payload).encode()
    return HttpResponse(
        status_code=status_code,
        content=content,
        content_type="application/json",
        url="https://api.telegra.ph/test",
    )


@pytest.fixture
def token():
    """Sample access token from the API documentation."""
    return TOKEN


@pytest.fixture
def sample_account():
    """Account object as returned by createAccount."""
    return dict(SAMPLE_ACCOUNT)


@pytest.fixture
def sample_page():
    """Page object as returned by createPage with return_content."""
    return dict(SAMPLE_PAGE)


@pytest.fixture
def ok_response():
    """Factory for successful envelopes."""

    def _make(result: Any) -> HttpResponse:
        return make_response({"ok": True, "result": result})

    return _make


@pytest.fixture
def error_response():
    """Factory for ok=false envelopes."""

    def _make(error: str, status_code: int = 200) -> HttpResponse:
        return make_response({"ok": False, "error": error}, status_code=status_code)

    return _make


@pytest.fixture
def raw_response():
    """Factory for arbitrary raw bodies."""

    def _make(raw: bytes, status_code: int = 200) -> HttpResponse:
        return make_response(None, status_code=status_code, raw=raw)

    return _make


@pytest.fixture
def mock_http_client():
    """Create mock async HTTP client."""
    return AsyncMock()


@pytest.fixture
def mock_sync_http_client():
    """Create mock blocking HTTP client."""
    return MagicMock()
