"""Public API functions for json-navigator.

``parse`` is the single entry point that turns a JSON document into a
navigable root node; ``load`` reads the document from a file object first.
Each call creates a fresh NodeBuilder, so no state is shared between calls.
"""

from __future__ import annotations

import logging
from typing import IO

from json_navigator.config import ParseConfig
from json_navigator.decoder import decode_document
from json_navigator.tree.builder import NodeBuilder
from json_navigator.tree.nodes import Node

__all__ = ["load", "parse"]

logger = logging.getLogger(__name__)


def parse(data: bytes | bytearray | str, config: ParseConfig | None = None) -> Node:
    """Parse a JSON object or array into a navigable root node.

    Args:
        data:   The JSON document.  The top level must be an object or array.
        config: Parse options.  Defaults to ``ParseConfig()`` (eager) when None.

    Returns:
        A MapNode or ArrayNode (or their lazy counterparts) at path "".

    Raises:
        FormatError: The input is empty or not an object/array.
        DecodeError: The JSON text is malformed.
        BuildError:  A value has no node variant (``null``).  Eager builds
            raise this for the whole document; lazy builds only for the root
            and defer nested failures to the first visit.
    """
    config = config if config is not None else ParseConfig()
    value = decode_document(data)
    root = NodeBuilder(config=config).build(value)
    logger.debug("Built %s root with %s strategy", root.node_type, config.strategy)
    return root


def load(fp: IO[bytes] | IO[str], config: ParseConfig | None = None) -> Node:
    """Read a JSON document from a binary or text file object and parse it.

    Args:
        fp:     An open file object; its whole content is read.
        config: Parse options, as for ``parse``.

    Returns:
        The root node of the document.
    """
    return parse(fp.read(), config=config)
