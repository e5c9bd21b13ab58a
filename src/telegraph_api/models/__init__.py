"""Telegraph data, envelope and configuration models."""

from .config import DEFAULT_API_URL, DEFAULT_UPLOAD_URL, ByteSize, ClientConfig
from .nodes import (
    Node,
    NodeElement,
    nodes_from_json,
    nodes_from_python,
    nodes_to_json,
    nodes_to_python,
)
from .types import Account, Envelope, Page, PageList, PageViews, UploadedFile

__all__ = [
    # Config
    "ByteSize",
    "ClientConfig",
    "DEFAULT_API_URL",
    "DEFAULT_UPLOAD_URL",
    # Nodes
    "Node",
    "NodeElement",
    "nodes_from_json",
    "nodes_from_python",
    "nodes_to_json",
    "nodes_to_python",
    # API objects
    "Account",
    "Envelope",
    "Page",
    "PageList",
    "PageViews",
    "UploadedFile",
]
