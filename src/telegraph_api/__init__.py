"""
telegraph_api - typed binding for the Telegraph publishing API.

See https://telegra.ph/api for the service documentation.

Usage:
    from telegraph_api import Telegraph, html_to_nodes

    async with Telegraph() as anonymous:
        account = await anonymous.create_account("sandbox")
        telegraph = anonymous.with_access_token(account.access_token)

        page = await telegraph.create_page("Title", html_to_nodes("<p>Hello, world</p>"))
        print(page.url)
"""

__version__ = "0.1.0"

from .conversion import HtmlToNodes, html_to_node, html_to_nodes
from .core import BlockingTelegraph, Telegraph
from .errors import ApiError, HtmlParseError, TelegraphError, TransportError
from .logging_config import setup_logging
from .models import (
    Account,
    ClientConfig,
    Envelope,
    Node,
    NodeElement,
    Page,
    PageList,
    PageViews,
    UploadedFile,
    nodes_from_json,
    nodes_to_json,
)

__all__ = [
    "__version__",
    # Clients
    "Telegraph",
    "BlockingTelegraph",
    "ClientConfig",
    # Models
    "Account",
    "Envelope",
    "Node",
    "NodeElement",
    "Page",
    "PageList",
    "PageViews",
    "UploadedFile",
    "nodes_from_json",
    "nodes_to_json",
    # Conversion
    "HtmlToNodes",
    "html_to_node",
    "html_to_nodes",
    # Errors
    "TelegraphError",
    "TransportError",
    "ApiError",
    "HtmlParseError",
    # Logging
    "setup_logging",
]
