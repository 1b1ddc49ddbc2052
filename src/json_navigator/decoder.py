"""Decoder adapter: raw bytes to a decoded JSON object or array.

The JSON text itself is decoded by the standard library ``json`` module.
This module only decides whether the input may be decoded at all: after
stripping surrounding whitespace the first byte must be "{" or "[".
"""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

from json_navigator.errors import DecodeError, FormatError

__all__ = ["decode_document", "document_kind"]

logger = logging.getLogger(__name__)

_KINDS = {ord("{"): "object", ord("["): "array"}


def document_kind(data: bytes) -> str | None:
    """Return "object" or "array" from the first byte of stripped input."""
    if not data:
        return None
    return _KINDS.get(data[0])


def _reject_constant(name: str) -> NoReturn:
    # json accepts NaN/Infinity by default; they are not JSON
    raise ValueError(f"invalid JSON constant: {name}")


def decode_document(data: bytes | bytearray | str) -> dict[str, Any] | list[Any]:
    """Decode a JSON document whose top level is an object or array.

    Args:
        data: The document text.  ``str`` input is encoded as UTF-8 first.

    Returns:
        The decoded ``dict`` (for "{") or ``list`` (for "[").

    Raises:
        FormatError: If the stripped input is empty or does not start with
            "{" or "[".  Raised before any decoding is attempted.
        DecodeError: If ``json`` rejects the text, including nesting too deep
            for it to decode; the decoder's exception is chained as
            ``__cause__``.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data).strip()

    kind = document_kind(data)
    if kind is None:
        logger.debug("Rejected input starting with %r", data[:1])
        raise FormatError("not a JSON object or array")

    try:
        value = json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        logger.debug("JSON %s failed to decode: %s", kind, exc)
        raise DecodeError(str(exc)) from exc

    logger.debug("Decoded JSON %s (%d bytes)", kind, len(data))
    return value
