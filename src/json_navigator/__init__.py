"""JSON navigator - chained, type-checked navigation over JSON documents."""

from __future__ import annotations

from json_navigator.api import load, parse
from json_navigator.config import BuildStrategy, ParseConfig
from json_navigator.errors import (
    BuildError,
    CoercionError,
    DecodeError,
    FormatError,
    JsonNavigatorError,
    NavigationError,
)
from json_navigator.tree import Node, NodeBuilder, NodeType

__version__: str = "0.1.0"
__all__: list[str] = [
    "BuildError",
    "BuildStrategy",
    "CoercionError",
    "DecodeError",
    "FormatError",
    "JsonNavigatorError",
    "NavigationError",
    "Node",
    "NodeBuilder",
    "NodeType",
    "ParseConfig",
    "load",
    "parse",
]
