"""Exception hierarchy for json-navigator.

Every error raised by the library derives from ``JsonNavigatorError`` and
carries the JSON Pointer ``path`` of the node where it happened.  Each class
also inherits the closest builtin exception, so callers that only know about
``ValueError``/``TypeError``/``LookupError`` still catch the right things:

- FormatError     -> ValueError   : top level is not an object or array
- DecodeError     -> ValueError   : the ``json`` decoder rejected the text
- BuildError      -> TypeError    : a decoded value has no node variant
- NavigationError -> LookupError  : by_key / by_index miss or wrong variant
- CoercionError   -> TypeError    : as_* on the wrong variant
"""

from __future__ import annotations

__all__ = [
    "BuildError",
    "CoercionError",
    "DecodeError",
    "FormatError",
    "JsonNavigatorError",
    "NavigationError",
]


class JsonNavigatorError(Exception):
    """Base class for all json-navigator errors.

    Attributes:
        message: Human-readable description without location.
        path:    JSON Pointer (RFC 6901) of the node involved; "" is the root.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (at {self.path})"
        return self.message


class FormatError(JsonNavigatorError, ValueError):
    """Input is empty or its top level is not a JSON object or array."""


class DecodeError(JsonNavigatorError, ValueError):
    """The JSON text decoder rejected the input.

    The decoder's own exception is chained as ``__cause__``.
    """


class BuildError(JsonNavigatorError, TypeError):
    """A decoded value has no corresponding node variant (e.g. ``null``)."""


class NavigationError(JsonNavigatorError, LookupError):
    """A key or index does not exist, or the node is the wrong container."""


class CoercionError(JsonNavigatorError, TypeError):
    """An ``as_*`` accessor was used on a node of a different variant."""
