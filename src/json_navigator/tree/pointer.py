"""JSON Pointer (RFC 6901) helpers used to label and resolve node locations.

The root is "" (empty string) and each level appends "/{token}", where a
token escapes "~" as "~0" and "/" as "~1".
"""

from __future__ import annotations

import re

from json_navigator.errors import NavigationError

__all__ = ["ARRAY_INDEX", "child_path", "escape_token", "split_pointer", "unescape_token"]

# RFC 6901 array index: no sign, no leading zeros
ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")


def escape_token(selector: str | int) -> str:
    """Escape one key or index for use as a JSON Pointer reference token."""
    return str(selector).replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    # order matters: "~01" must decode to "~1", not "/"
    return token.replace("~1", "/").replace("~0", "~")


def child_path(path: str, selector: str | int) -> str:
    """Return the pointer of the child reached from ``path`` via ``selector``."""
    return f"{path}/{escape_token(selector)}"


def split_pointer(pointer: str) -> list[str]:
    """Split a JSON Pointer into unescaped reference tokens.

    Args:
        pointer: "" for the whole document, otherwise a string starting with "/".

    Returns:
        The list of unescaped tokens, empty for the root pointer.

    Raises:
        NavigationError: If the pointer is non-empty and does not start with "/".
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        msg = f"invalid JSON pointer `{pointer}`"
        raise NavigationError(msg)
    return [unescape_token(token) for token in pointer[1:].split("/")]
