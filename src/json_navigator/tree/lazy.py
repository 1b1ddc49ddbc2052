"""Lazy container nodes: children are built on first visit and memoized.

A LazyMapNode / LazyArrayNode keeps the raw decoded children and a
``cachetools.Cache`` keyed by selector (key or index).  The first
``by_key``/``by_index`` for a selector builds the child through the owning
NodeBuilder; every later visit returns the identical instance.

The cache is bounded by the number of raw children, so it can never evict:
entries are only ever added.  Misses (unknown keys, out-of-range indices)
never reach the cache.

Concurrency: ``cachetools.cachedmethod`` looks up and inserts under the
node's lock, and inserts with ``setdefault``.  Two threads racing on the same
unvisited child may both build it, but both receive the one instance that
was stored first.  With ``ParseConfig(thread_safe=False)`` the lock is a
no-op ``contextlib.nullcontext``.
"""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from cachetools import Cache, cachedmethod

from json_navigator.errors import BuildError
from json_navigator.tree.nodes import ErrorNode, Node, NodeType
from json_navigator.tree.pointer import child_path

if TYPE_CHECKING:
    from json_navigator.tree.builder import NodeBuilder

__all__ = ["LazyArrayNode", "LazyMapNode"]


def _new_lock(builder: NodeBuilder) -> AbstractContextManager[Any]:
    if builder.config.thread_safe:
        return threading.Lock()
    return nullcontext()


@dataclass(slots=True, eq=False)
class _LazyContainer(Node):
    """Shared cache plumbing for the lazy map and array variants.

    Attributes:
        builder: The NodeBuilder that created this node; builds the children.
    """

    builder: NodeBuilder = field(repr=False)
    _children: Cache[Any, Node] = field(init=False, repr=False)
    _lock: AbstractContextManager[Any] = field(init=False, repr=False)

    @property
    def visited(self) -> int:
        """Number of children built so far."""
        return int(self._children.currsize)

    @cachedmethod(lambda self: self._children, lock=lambda self: self._lock)
    def _child(self, selector: Any) -> Node:
        """Build the child for ``selector``; called once per selector.

        A child that cannot be built becomes an ErrorNode carrying the
        BuildError, and that ErrorNode is what gets cached.
        """
        try:
            return self.builder.build(self._raw_child(selector), child_path(self.path, selector))
        except BuildError as exc:
            return ErrorNode(path=exc.path, captured=exc)

    def _raw_child(self, selector: Any) -> Any:
        raise NotImplementedError

    def _materialize(self, selectors: Any) -> list[Node]:
        """Build every child for ``selectors``, raising the first build failure."""
        children = [self._child(selector) for selector in selectors]
        for child in children:
            if isinstance(child, ErrorNode):
                child.raise_captured()
        return children


@dataclass(slots=True, eq=False)
class LazyMapNode(_LazyContainer):
    """JSON object whose children are built on first ``by_key``."""

    node_type: ClassVar[NodeType] = NodeType.MAP

    raw: dict[str, Any] = field(repr=False)

    def __post_init__(self) -> None:
        self._children = Cache(maxsize=len(self.raw))
        self._lock = _new_lock(self.builder)

    def _raw_child(self, selector: Any) -> Any:
        return self.raw[selector]

    def by_key(self, name: str) -> Node:
        if not isinstance(name, str) or name not in self.raw:
            return self._missing_key(name)
        return self._child(name)

    def as_map(self) -> dict[str, Node]:
        keys = list(self.raw)
        return dict(zip(keys, self._materialize(keys), strict=True))


@dataclass(slots=True, eq=False)
class LazyArrayNode(_LazyContainer):
    """JSON array whose children are built on first ``by_index``."""

    node_type: ClassVar[NodeType] = NodeType.ARRAY

    raw: tuple[Any, ...] = field(repr=False)

    def __post_init__(self) -> None:
        self._children = Cache(maxsize=len(self.raw))
        self._lock = _new_lock(self.builder)

    def _raw_child(self, selector: Any) -> Any:
        return self.raw[selector]

    def by_index(self, index: int) -> Node:
        position = self._checked_index(index, len(self.raw))
        if isinstance(position, ErrorNode):
            return position
        return self._child(position)

    def as_array(self) -> list[Node]:
        return self._materialize(range(len(self.raw)))
