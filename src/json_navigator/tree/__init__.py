"""Tree subpackage: node variants and the builder that creates them.

Re-exports the public API for the tree module:
- Node: base class implementing the navigation/coercion protocol
- NodeType: StrEnum of the six node variants
- MapNode, ArrayNode, NumberNode, BooleanNode, StringNode, ErrorNode: variants
- LazyMapNode, LazyArrayNode: containers that build children on first visit
- NodeBuilder: converts a decoded JSON value into a node tree
"""

from json_navigator.tree.builder import NodeBuilder
from json_navigator.tree.lazy import LazyArrayNode, LazyMapNode
from json_navigator.tree.nodes import (
    ArrayNode,
    BooleanNode,
    ErrorNode,
    MapNode,
    Node,
    NodeType,
    NumberNode,
    ScalarNode,
    StringNode,
)

__all__ = [
    "ArrayNode",
    "BooleanNode",
    "ErrorNode",
    "LazyArrayNode",
    "LazyMapNode",
    "MapNode",
    "Node",
    "NodeBuilder",
    "NodeType",
    "NumberNode",
    "ScalarNode",
    "StringNode",
]
