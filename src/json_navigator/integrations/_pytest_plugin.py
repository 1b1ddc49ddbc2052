"""pytest plugin for json-navigator.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_navigator import JsonNavigatorError, Node, parse


def _coerce(node: Node, expected: Any) -> Any:
    # bool before int: bool subclasses int
    if isinstance(expected, bool):
        return node.as_bool()
    if isinstance(expected, int):
        return node.as_int()
    if isinstance(expected, float):
        return node.as_float64()
    if isinstance(expected, str):
        return node.as_string()
    msg = f"expected value must be a bool, int, float or str, got {type(expected).__name__}"
    raise TypeError(msg)


@pytest.fixture(scope="session")
def assert_json_path() -> Any:
    """Fixture that returns a callable asserting the value at a JSON Pointer.

    The fixture is session-scoped because the returned callable is stateless
    (each call parses its own document).

    Usage in tests::

        def test_second_item(assert_json_path):
            assert_json_path(b'{"b": [1, 2]}', "/b/1", 2)

        def test_missing_key(assert_json_path):
            with pytest.raises(AssertionError, match=r"could not be read"):
                assert_json_path(b'{"b": [1, 2]}', "/f/1", 2)

    Returns:
        A callable ``_assert(document, pointer, expected) -> None``.  The
        accessor is picked from the type of ``expected``: bool -> as_bool,
        int -> as_int, float -> as_float64, str -> as_string.
    """

    def _assert(document: bytes | str | Node, pointer: str, expected: Any) -> None:
        """Assert that ``document`` holds ``expected`` at ``pointer``.

        Args:
            document: JSON text, or an already parsed Node.
            pointer:  JSON Pointer (RFC 6901) such as "/b/1".
            expected: The value the coerced node must equal.

        Raises:
            AssertionError: When navigation or coercion fails, or the value
                differs.  Parse errors propagate unchanged.
        """
        root = document if isinstance(document, Node) else parse(document)
        node = root.resolve(pointer)
        try:
            actual = _coerce(node, expected)
        except JsonNavigatorError as exc:
            raise AssertionError(
                f"JSON path {pointer!r} could not be read: {exc}"
            ) from exc
        if actual != expected:
            raise AssertionError(
                f"JSON path {pointer!r} does not hold the expected value\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert
