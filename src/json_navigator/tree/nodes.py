"""Node variants and the navigation/coercion protocol.

Every JSON value is wrapped in exactly one ``Node`` subclass:

- MapNode     -> JSON object {}
- ArrayNode   -> JSON array []
- NumberNode  -> JSON number (stored as float)
- BooleanNode -> true / false
- StringNode  -> JSON string
- ErrorNode   -> a captured failure that absorbs further navigation

``Node`` implements the whole protocol with the "wrong variant" behaviour;
each variant overrides only what it supports.  Navigation (``by_key``,
``by_index``, ``at``, ``resolve``) never raises: a failure is returned as an
``ErrorNode``, which returns itself from every further navigation call and
raises its captured error from every ``as_*`` call.  So a chain such as::

    root.by_key("b").by_index(1).as_int()

either yields the value or raises the first failure encountered.

Lazy container variants live in ``json_navigator.tree.lazy``.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any, ClassVar, NoReturn

import numpy as np

from json_navigator.errors import (
    CoercionError,
    JsonNavigatorError,
    NavigationError,
)
from json_navigator.tree.pointer import ARRAY_INDEX, split_pointer

__all__ = [
    "ArrayNode",
    "BooleanNode",
    "ErrorNode",
    "MapNode",
    "Node",
    "NodeType",
    "NumberNode",
    "ScalarNode",
    "StringNode",
]

_INT64 = np.iinfo(np.int64)


class NodeType(StrEnum):
    """Enumeration of the six node variants.

    StrEnum values are the lowercased member names:
    - MAP     -> "map"
    - ARRAY   -> "array"
    - NUMBER  -> "number"
    - BOOLEAN -> "boolean"
    - STRING  -> "string"
    - ERROR   -> "error"
    """

    MAP = auto()
    ARRAY = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    STRING = auto()
    ERROR = auto()


@dataclass(slots=True, eq=False)
class Node:
    """Base class of every node variant.

    Nodes compare and hash by identity.  They are never mutated after
    construction.

    Attributes:
        path: JSON Pointer (RFC 6901) of this node; "" for the document root.
    """

    node_type: ClassVar[NodeType]

    path: str

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def by_key(self, name: str) -> Node:
        """Return the child stored under ``name``, or an ErrorNode."""
        return self._fail(NavigationError("node is not a map", self.path))

    def by_index(self, index: int) -> Node:
        """Return the child at position ``index``, or an ErrorNode."""
        return self._fail(NavigationError("node is not an array", self.path))

    def at(self, *selectors: str | int) -> Node:
        """Apply ``by_key`` for each str and ``by_index`` for each int selector.

        Example::

            root.at("b", 1).as_int()   # same as root.by_key("b").by_index(1).as_int()
        """
        node = self
        for selector in selectors:
            if isinstance(selector, str):
                node = node.by_key(selector)
            elif isinstance(selector, int) and not isinstance(selector, bool):
                node = node.by_index(selector)
            else:
                msg = f"unsupported selector type: {type(selector).__name__}"
                return node._fail(NavigationError(msg, node.path))
        return node

    def resolve(self, pointer: str) -> Node:
        """Evaluate a JSON Pointer (RFC 6901) relative to this node.

        On an array node a token must be a non-negative decimal index without
        leading zeros; on any other node it is used as a key.

        Args:
            pointer: "" for this node, otherwise "/"-separated escaped tokens,
                e.g. "/b/1" or "/a~1b" for the key "a/b".

        Returns:
            The node at ``pointer``, or an ErrorNode describing the first miss.
        """
        try:
            tokens = split_pointer(pointer)
        except NavigationError as exc:
            exc.path = self.path
            return self._fail(exc)

        node = self
        for token in tokens:
            if node.is_array():
                if not ARRAY_INDEX.fullmatch(token):
                    msg = f"invalid array index `{token}`"
                    return node._fail(NavigationError(msg, node.path))
                node = node.by_index(int(token))
            else:
                node = node.by_key(token)
        return node

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_map(self) -> bool:
        return self.node_type is NodeType.MAP

    def is_array(self) -> bool:
        return self.node_type is NodeType.ARRAY

    def is_number(self) -> bool:
        return self.node_type is NodeType.NUMBER

    def is_boolean(self) -> bool:
        return self.node_type is NodeType.BOOLEAN

    def is_string(self) -> bool:
        return self.node_type is NodeType.STRING

    def is_error(self) -> bool:
        return self.node_type is NodeType.ERROR

    @property
    def error(self) -> JsonNavigatorError | None:
        """The captured failure for ErrorNode; None for every other variant."""
        return None

    # ------------------------------------------------------------------
    # Coercion
    # ------------------------------------------------------------------

    def as_map(self) -> dict[str, Node]:
        raise CoercionError("node is not a map", self.path)

    def as_array(self) -> list[Node]:
        raise CoercionError("node is not an array", self.path)

    def as_int(self) -> int:
        raise CoercionError("node is not a number", self.path)

    def as_int64(self) -> np.int64:
        raise CoercionError("node is not a number", self.path)

    def as_float64(self) -> float:
        raise CoercionError("node is not a number", self.path)

    def as_bool(self) -> bool:
        raise CoercionError("node is not a boolean", self.path)

    def as_string(self) -> str:
        raise CoercionError("node is not a string", self.path)

    # ------------------------------------------------------------------
    # Helpers shared by the container variants
    # ------------------------------------------------------------------

    def _fail(self, error: JsonNavigatorError) -> ErrorNode:
        return ErrorNode(path=error.path, captured=error)

    def _missing_key(self, name: str) -> ErrorNode:
        return self._fail(NavigationError(f"key `{name}` not exist", self.path))

    def _checked_index(self, index: int, length: int) -> int | ErrorNode:
        """Return ``index`` as a plain int if it addresses ``length`` items.

        Negative indices are out of range; there is no wrap-around.
        """
        if isinstance(index, bool):
            msg = f"index `{index}` is not an integer"
            return self._fail(NavigationError(msg, self.path))
        try:
            position = operator.index(index)
        except TypeError:
            msg = f"index `{index!r}` is not an integer"
            return self._fail(NavigationError(msg, self.path))
        if 0 <= position < length:
            return position
        msg = f"index `{position}` out of range"
        return self._fail(NavigationError(msg, self.path))


@dataclass(slots=True, eq=False)
class ErrorNode(Node):
    """Terminal node holding a captured failure.

    Navigation returns the node itself and every coercion raises the
    captured error, so the first failure in a chain survives to its end.
    """

    node_type: ClassVar[NodeType] = NodeType.ERROR

    captured: JsonNavigatorError

    @property
    def error(self) -> JsonNavigatorError:
        return self.captured

    def by_key(self, name: str) -> Node:
        return self

    def by_index(self, index: int) -> Node:
        return self

    def at(self, *selectors: str | int) -> Node:
        return self

    def resolve(self, pointer: str) -> Node:
        return self

    def raise_captured(self) -> NoReturn:
        """Raise the captured error, leaving the stored instance as it was.

        Raising inside an ``except`` block sets ``__context__`` on the error;
        it is restored on the way out so the caller's handler state does not
        stick to the node.
        """
        context = self.captured.__context__
        try:
            # drop the traceback of earlier raises so it does not grow per call
            raise self.captured.with_traceback(None)
        finally:
            self.captured.__context__ = context

    def as_map(self) -> dict[str, Node]:
        self.raise_captured()

    def as_array(self) -> list[Node]:
        self.raise_captured()

    def as_int(self) -> int:
        self.raise_captured()

    def as_int64(self) -> np.int64:
        self.raise_captured()

    def as_float64(self) -> float:
        self.raise_captured()

    def as_bool(self) -> bool:
        self.raise_captured()

    def as_string(self) -> str:
        self.raise_captured()


@dataclass(slots=True, eq=False)
class MapNode(Node):
    """JSON object whose children were all built up front."""

    node_type: ClassVar[NodeType] = NodeType.MAP

    children: dict[str, Node] = field(repr=False)

    def by_key(self, name: str) -> Node:
        child = self.children.get(name) if isinstance(name, str) else None
        if child is None:
            return self._missing_key(name)
        return child

    def as_map(self) -> dict[str, Node]:
        return dict(self.children)


@dataclass(slots=True, eq=False)
class ArrayNode(Node):
    """JSON array whose children were all built up front."""

    node_type: ClassVar[NodeType] = NodeType.ARRAY

    children: tuple[Node, ...] = field(repr=False)

    def by_index(self, index: int) -> Node:
        position = self._checked_index(index, len(self.children))
        if isinstance(position, ErrorNode):
            return position
        return self.children[position]

    def as_array(self) -> list[Node]:
        return list(self.children)


@dataclass(slots=True, eq=False)
class ScalarNode(Node):
    """Common base of the three leaf variants.

    Attributes:
        value: The JSON value; float for NumberNode, bool for BooleanNode,
            str for StringNode.
    """

    value: Any


@dataclass(slots=True, eq=False)
class NumberNode(ScalarNode):
    """JSON number.

    The value is kept as a float; integer accessors truncate toward zero.
    """

    node_type: ClassVar[NodeType] = NodeType.NUMBER

    def as_int(self) -> int:
        return math.trunc(self.value)

    def as_int64(self) -> np.int64:
        truncated = math.trunc(self.value)
        if not _INT64.min <= truncated <= _INT64.max:
            msg = f"number {self.value!r} out of int64 range"
            raise CoercionError(msg, self.path)
        return np.int64(truncated)

    def as_float64(self) -> float:
        return self.value


@dataclass(slots=True, eq=False)
class BooleanNode(ScalarNode):
    node_type: ClassVar[NodeType] = NodeType.BOOLEAN

    def as_bool(self) -> bool:
        return self.value


@dataclass(slots=True, eq=False)
class StringNode(ScalarNode):
    node_type: ClassVar[NodeType] = NodeType.STRING

    def as_string(self) -> str:
        return self.value
