"""HTML to Telegraph node conversion."""

from .html import ALLOWED_ATTRIBUTES, ALLOWED_TAGS, HtmlToNodes, html_to_node, html_to_nodes

__all__ = [
    "ALLOWED_ATTRIBUTES",
    "ALLOWED_TAGS",
    "HtmlToNodes",
    "html_to_node",
    "html_to_nodes",
]
