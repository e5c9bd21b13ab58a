"""Node model for Telegraph page content.

Telegraph stores page content as an array of nodes. A node is either a bare
string (text leaf) or an element object::

    [{"tag": "p", "children": ["Hello, ", {"tag": "b", "children": ["world"]}]}]
"""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from pydantic import BaseModel, TypeAdapter


class NodeElement(BaseModel):
    """
    Element node: a tag with attributes and ordered children.

    Attributes:
        tag: Tag name (e.g. "p", "a", "img")
        attrs: Attribute mapping; only "href" and "src" are accepted by the service
        children: Ordered child nodes
    """

    tag: str
    attrs: Optional[dict[str, str]] = None
    children: Optional[list[Node]] = None

    model_config = {"extra": "ignore"}

    def to_wire(self) -> dict[str, Any]:
        """Return the wire representation, omitting empty attrs/children."""
        data: dict[str, Any] = {"tag": self.tag}
        if self.attrs:
            data["attrs"] = dict(self.attrs)
        if self.children:
            data["children"] = nodes_to_python(self.children)
        return data


Node = Union[str, NodeElement]

NodeElement.model_rebuild()

_node_list_adapter: TypeAdapter[list[Node]] = TypeAdapter(list[Node])


def nodes_to_python(nodes: list[Node]) -> list[Any]:
    """Convert nodes to JSON-ready Python objects."""
    return [node if isinstance(node, str) else node.to_wire() for node in nodes]


def nodes_from_python(data: list[Any]) -> list[Node]:
    """Validate decoded JSON (strings and dicts) into nodes."""
    return _node_list_adapter.validate_python(data)


def nodes_to_json(nodes: list[Node]) -> str:
    """Serialize nodes to the compact wire JSON string."""
    return json.dumps(nodes_to_python(nodes), ensure_ascii=False, separators=(",", ":"))


def nodes_from_json(data: Union[str, bytes]) -> list[Node]:
    """Parse a wire JSON node array."""
    return _node_list_adapter.validate_json(data)
