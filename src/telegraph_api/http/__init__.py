"""HTTP transports for telegraph_api."""

from .blocking import BlockingHttpClient
from .client import AsyncHttpClient
from .protocols import FilePart, HttpClient, HttpResponse, SyncHttpClient

__all__ = [
    "AsyncHttpClient",
    "BlockingHttpClient",
    "FilePart",
    "HttpClient",
    "HttpResponse",
    "SyncHttpClient",
]
