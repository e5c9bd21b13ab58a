"""HTML to Telegraph node conversion."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import CData, Comment, Declaration, Doctype, PageElement, ProcessingInstruction

from ..errors import HtmlParseError
from ..models.nodes import Node, NodeElement, nodes_to_json

logger = logging.getLogger(__name__)

# Tags accepted in Telegraph page content
ALLOWED_TAGS = frozenset(
    {
        "a",
        "aside",
        "b",
        "blockquote",
        "br",
        "code",
        "em",
        "figcaption",
        "figure",
        "h3",
        "h4",
        "hr",
        "i",
        "iframe",
        "img",
        "li",
        "ol",
        "p",
        "pre",
        "s",
        "strong",
        "u",
        "ul",
        "video",
    }
)

# Attributes kept per tag; tags not listed keep none
ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset({"href"}),
    "img": frozenset({"src"}),
    "iframe": frozenset({"src"}),
    "video": frozenset({"src"}),
}

# NavigableString subclasses that are markup, not text
_NON_TEXT_STRINGS = (CData, Comment, Declaration, Doctype, ProcessingInstruction)


class HtmlToNodes:
    """
    Converts an HTML fragment into Telegraph nodes.

    Text is copied verbatim. Elements with an allowed tag keep their tag,
    their allowed attributes and their converted children. Any other element
    is dropped together with everything inside it.

    Example:
        converter = HtmlToNodes()
        nodes = converter.convert('<p>Hi <a href="/x" onclick="y">there</a></p>')
        # [NodeElement(tag="p", children=["Hi ", NodeElement(tag="a", attrs={"href": "/x"}, ...)])]
    """

    def __init__(
        self,
        parser: str = "html.parser",
        allowed_tags: Optional[Iterable[str]] = None,
        allowed_attributes: Optional[Mapping[str, Iterable[str]]] = None,
    ):
        """
        Initialize the converter.

        Args:
            parser: BeautifulSoup tree builder ("html.parser", "lxml", ...)
            allowed_tags: Tag whitelist (overrides ALLOWED_TAGS)
            allowed_attributes: Per-tag attribute whitelist (overrides ALLOWED_ATTRIBUTES)
        """
        self._parser = parser
        self._allowed_tags = frozenset(allowed_tags) if allowed_tags is not None else ALLOWED_TAGS
        if allowed_attributes is None:
            self._allowed_attributes = ALLOWED_ATTRIBUTES
        else:
            self._allowed_attributes = {tag: frozenset(attrs) for tag, attrs in allowed_attributes.items()}

    def convert(self, html: str) -> list[Node]:
        """
        Parse an HTML fragment and convert it.

        Args:
            html: HTML fragment

        Returns:
            Ordered list of nodes for the fragment's root-level content, or
            for the children of <body> when the markup is a full document

        Raises:
            HtmlParseError: If the markup cannot be parsed
        """
        if not isinstance(html, str):
            raise HtmlParseError(f"Expected HTML string, got {type(html).__name__}")
        try:
            soup = BeautifulSoup(html, self._parser)
        except ParserRejectedMarkup as e:
            raise HtmlParseError(f"Failed to parse HTML: {e}") from e
        # lxml and html5lib wrap fragments in <html><body>
        root = soup.body if soup.body is not None else soup
        return self.convert_tree(root)

    def convert_tree(self, root: Union[BeautifulSoup, Tag]) -> list[Node]:
        """Convert the children of an already-parsed tree."""
        nodes = []
        for child in root.children:
            node = self._convert_element(child)
            if node is not None:
                nodes.append(node)
        return nodes

    def _convert_element(self, element: PageElement) -> Optional[Node]:
        if isinstance(element, NavigableString):
            if isinstance(element, _NON_TEXT_STRINGS):
                return None
            return str(element)

        if not isinstance(element, Tag):
            return None

        tag = element.name.lower()
        if tag not in self._allowed_tags:
            logger.debug(f"Dropping disallowed <{tag}> element")
            return None

        children = self.convert_tree(element)
        return NodeElement(
            tag=tag,
            attrs=self._filter_attributes(tag, element.attrs) or None,
            children=children or None,
        )

    def _filter_attributes(self, tag: str, attrs: Mapping[str, object]) -> dict[str, str]:
        allowed = self._allowed_attributes.get(tag, frozenset())
        filtered = {}
        for name, value in attrs.items():
            if name not in allowed:
                continue
            # Multi-valued attributes come back as lists
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            filtered[name] = str(value)
        return filtered


_default_converter = HtmlToNodes()


def html_to_nodes(html: str) -> list[Node]:
    """Convert an HTML fragment into Telegraph nodes with the default whitelist."""
    return _default_converter.convert(html)


def html_to_node(html: str) -> str:
    """
    Convert an HTML fragment into a Telegraph content JSON string.

    Example:
        >>> html_to_node("<p>Hello, world</p>")
        '[{"tag":"p","children":["Hello, world"]}]'
    """
    return nodes_to_json(html_to_nodes(html))
