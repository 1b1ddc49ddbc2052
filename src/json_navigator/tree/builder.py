"""NodeBuilder: converts a decoded JSON value into a navigable node tree.

Classifies dicts, lists and scalar values into the node variants of
``json_navigator.tree.nodes``.  Numbers of any width (Python ints and floats,
numpy integer and floating scalars) become a NumberNode holding a float.
``None`` has no variant and is rejected.

The configured BuildStrategy decides how much is built up front:
- EAGER: every child is built now; the first failure aborts the build.
- LAZY:  containers keep their raw children and build each on first visit.

The eager walk keeps its own stack of open containers instead of using the
Python call stack, so nesting depth is bounded only by memory.

JSON Pointer paths (RFC 6901) are built during traversal:
- Root is "" (empty string)
- Each level appends "/{key_or_index}"
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from json_navigator.config import BuildStrategy, ParseConfig
from json_navigator.errors import BuildError
from json_navigator.tree.lazy import LazyArrayNode, LazyMapNode
from json_navigator.tree.nodes import (
    ArrayNode,
    BooleanNode,
    MapNode,
    Node,
    NumberNode,
    StringNode,
)
from json_navigator.tree.pointer import child_path

__all__ = ["NodeBuilder"]

_BOOLEAN_TYPES = (bool, np.bool_)
_CONTAINER_TYPES = (dict, list, tuple)
_NUMBER_TYPES = (int, float, np.integer, np.floating)


@dataclass(slots=True)
class _OpenContainer:
    """An eager container whose children are still being built.

    Attributes:
        path:     JSON Pointer of the container.
        selector: Key or index of the container in its parent (None at the root).
        is_map:   True for a JSON object, False for an array.
        pending:  Remaining (selector, raw value) pairs, in document order.
        built:    (selector, node) pairs built so far, in document order.
    """

    path: str
    selector: str | int | None
    is_map: bool
    pending: Iterator[tuple[Any, Any]]
    built: list[tuple[Any, Node]] = field(default_factory=list)

    def close(self) -> Node:
        if self.is_map:
            return MapNode(path=self.path, children=dict(self.built))
        return ArrayNode(path=self.path, children=tuple(node for _, node in self.built))


@dataclass
class NodeBuilder:
    """Converts a decoded JSON value into a Node tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True).

    Example::
        builder = NodeBuilder()
        root = builder.build({"a": [1, 2]})
        root.by_key("a").by_index(1).as_int()   # 2
    """

    config: ParseConfig = field(default_factory=ParseConfig)

    @property
    def lazy(self) -> bool:
        return self.config.strategy is BuildStrategy.LAZY

    def build(self, value: Any, path: str = "") -> Node:
        """Convert a decoded JSON value to a Node.

        Args:
            value: A decoded JSON value (dict, list, str, int, float, bool).
            path:  JSON Pointer path to this node. Defaults to "" (root).

        Returns:
            The node variant matching the value's kind.

        Raises:
            BuildError: If the value, or (eager only) any value nested in it,
                has no node variant.  ``None`` is always rejected.
        """
        if isinstance(value, _BOOLEAN_TYPES):
            return BooleanNode(path=path, value=bool(value))

        if isinstance(value, dict):
            self._check_keys(value, path)
            if self.lazy:
                return LazyMapNode(path=path, raw=dict(value), builder=self)
            return self._build_tree(value, path)

        if isinstance(value, (list, tuple)):
            if self.lazy:
                return LazyArrayNode(path=path, raw=tuple(value), builder=self)
            return self._build_tree(value, path)

        if isinstance(value, _NUMBER_TYPES):
            return NumberNode(path=path, value=self._to_float(value, path))

        if isinstance(value, str):
            return StringNode(path=path, value=value)

        raise BuildError(f"unsupported data type: {type(value).__name__}", path)

    def _build_tree(self, value: dict[str, Any] | list[Any] | tuple[Any, ...], path: str) -> Node:
        """Build an eager container and everything below it, depth first."""
        stack = [self._open(value, path, None)]
        while True:
            top = stack[-1]
            for selector, item in top.pending:
                item_path = child_path(top.path, selector)
                if isinstance(item, _CONTAINER_TYPES):
                    if isinstance(item, dict):
                        self._check_keys(item, item_path)
                    stack.append(self._open(item, item_path, selector))
                    break
                top.built.append((selector, self.build(item, item_path)))
            else:
                stack.pop()
                node = top.close()
                if not stack:
                    return node
                stack[-1].built.append((top.selector, node))

    @staticmethod
    def _open(
        value: dict[str, Any] | list[Any] | tuple[Any, ...], path: str, selector: str | int | None
    ) -> _OpenContainer:
        if isinstance(value, dict):
            return _OpenContainer(path, selector, True, iter(value.items()))
        return _OpenContainer(path, selector, False, enumerate(value))

    @staticmethod
    def _check_keys(obj: dict[Any, Any], path: str) -> None:
        for key in obj:
            if not isinstance(key, str):
                msg = f"map key must be a string, got {type(key).__name__}"
                raise BuildError(msg, path)

    @staticmethod
    def _to_float(value: Any, path: str) -> float:
        try:
            number = float(value)
        except OverflowError:
            msg = f"number too large for a float: {value}"
            raise BuildError(msg, path) from None
        if not math.isfinite(number):
            raise BuildError(f"non-finite number: {number}", path)
        return number
