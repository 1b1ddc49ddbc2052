"""Tests for the node variants and the navigation/coercion protocol.

Verifies:
- NodeType has exactly 6 members with lowercase string values
- Predicates are true for exactly the matching variant (all false on ErrorNode)
- Navigation on the wrong variant returns an ErrorNode, never raises
- Coercion on the wrong variant raises CoercionError
- ErrorNode absorbs navigation and re-raises its captured error
- Numeric narrowing truncates toward zero; as_int64 range checks
"""

from __future__ import annotations

import numpy as np
import pytest

from json_navigator.errors import CoercionError, NavigationError
from json_navigator.tree.nodes import (
    ArrayNode,
    BooleanNode,
    ErrorNode,
    MapNode,
    Node,
    NodeType,
    NumberNode,
    StringNode,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def number() -> NumberNode:
    return NumberNode(path="/n", value=2.0)


@pytest.fixture
def array(number: NumberNode) -> ArrayNode:
    return ArrayNode(path="/b", children=(NumberNode(path="/b/0", value=1.0), number))


@pytest.fixture
def mapping(array: ArrayNode) -> MapNode:
    return MapNode(
        path="",
        children={
            "b": array,
            "c": BooleanNode(path="/c", value=True),
            "d": StringNode(path="/d", value="asdf"),
        },
    )


@pytest.fixture
def error_node() -> ErrorNode:
    return ErrorNode(path="/f", captured=NavigationError("key `f` not exist"))


def _all_variants(mapping: MapNode) -> list[Node]:
    return [
        mapping,
        mapping.children["b"],
        mapping.children["b"].by_index(0),
        mapping.children["c"],
        mapping.children["d"],
        ErrorNode(path="", captured=NavigationError("boom")),
    ]


# ---------------------------------------------------------------------------
# NodeType
# ---------------------------------------------------------------------------


class TestNodeType:
    def test_has_exactly_six_members(self) -> None:
        assert len(NodeType) == 6

    def test_values_are_lowercased(self) -> None:
        assert [member.value for member in NodeType] == [
            "map",
            "array",
            "number",
            "boolean",
            "string",
            "error",
        ]

    def test_variants_declare_their_type(self, mapping: MapNode) -> None:
        assert [node.node_type for node in _all_variants(mapping)] == list(NodeType)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class TestPredicates:
    def test_exactly_one_predicate_per_variant(self, mapping: MapNode) -> None:
        for node in _all_variants(mapping)[:-1]:
            flags = [
                node.is_map(),
                node.is_array(),
                node.is_number(),
                node.is_boolean(),
                node.is_string(),
            ]
            assert flags.count(True) == 1, node

    def test_error_node_all_false(self, error_node: ErrorNode) -> None:
        assert not error_node.is_map()
        assert not error_node.is_array()
        assert not error_node.is_number()
        assert not error_node.is_boolean()
        assert not error_node.is_string()
        assert error_node.is_error()

    def test_error_property(self, mapping: MapNode, error_node: ErrorNode) -> None:
        assert mapping.error is None
        assert error_node.error is error_node.captured


# ---------------------------------------------------------------------------
# Map and array navigation
# ---------------------------------------------------------------------------


class TestMapNode:
    def test_by_key_returns_stored_child(self, mapping: MapNode, array: ArrayNode) -> None:
        assert mapping.by_key("b") is array

    def test_by_key_is_idempotent(self, mapping: MapNode) -> None:
        assert mapping.by_key("c") is mapping.by_key("c")

    def test_missing_key(self, mapping: MapNode) -> None:
        node = mapping.by_key("f")
        assert isinstance(node, ErrorNode)
        with pytest.raises(NavigationError, match="key `f` not exist"):
            node.as_int()

    def test_non_string_key(self, mapping: MapNode) -> None:
        assert mapping.by_key(1).is_error()  # type: ignore[arg-type]

    def test_by_index_on_map(self, mapping: MapNode) -> None:
        with pytest.raises(NavigationError, match="node is not an array"):
            mapping.by_index(0).as_int()

    def test_as_map_returns_copy(self, mapping: MapNode) -> None:
        result = mapping.as_map()
        assert result == mapping.children
        result.clear()
        assert len(mapping.children) == 3


class TestArrayNode:
    def test_by_index(self, array: ArrayNode, number: NumberNode) -> None:
        assert array.by_index(1) is number

    @pytest.mark.parametrize("index", [2, 5, -1, -2])
    def test_out_of_range(self, array: ArrayNode, index: int) -> None:
        with pytest.raises(NavigationError, match=f"index `{index}` out of range"):
            array.by_index(index).as_int()

    def test_numpy_index(self, array: ArrayNode, number: NumberNode) -> None:
        assert array.by_index(np.int64(1)) is number  # type: ignore[arg-type]

    @pytest.mark.parametrize("index", ["1", 1.0, True, None])
    def test_non_integer_index(self, array: ArrayNode, index: object) -> None:
        node = array.by_index(index)  # type: ignore[arg-type]
        with pytest.raises(NavigationError, match="is not an integer"):
            node.as_int()

    def test_by_key_on_array(self, array: ArrayNode) -> None:
        with pytest.raises(NavigationError, match="node is not a map"):
            array.by_key("a").as_int()

    def test_as_array_returns_list_copy(self, array: ArrayNode) -> None:
        result = array.as_array()
        assert result == list(array.children)
        assert isinstance(result, list)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestNumberNode:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.0, 2), (2.9, 2), (-2.9, -2), (0.5, 0), (-0.5, 0), (1e15, 10**15)],
    )
    def test_as_int_truncates_toward_zero(self, value: float, expected: int) -> None:
        assert NumberNode(path="", value=value).as_int() == expected

    def test_as_int64(self) -> None:
        result = NumberNode(path="", value=-7.8).as_int64()
        assert result == -7
        assert isinstance(result, np.int64)

    @pytest.mark.parametrize("value", [1e19, -1e19, 1e300])
    def test_as_int64_out_of_range(self, value: float) -> None:
        with pytest.raises(CoercionError, match="out of int64 range"):
            NumberNode(path="/n", value=value).as_int64()

    def test_as_int_handles_large_values(self) -> None:
        assert NumberNode(path="", value=1e19).as_int() == 10**19

    def test_as_float64(self) -> None:
        assert NumberNode(path="", value=2.5).as_float64() == 2.5

    def test_wrong_accessors(self, number: NumberNode) -> None:
        with pytest.raises(CoercionError, match="node is not a boolean"):
            number.as_bool()
        with pytest.raises(CoercionError, match="node is not a string"):
            number.as_string()
        with pytest.raises(CoercionError, match="node is not a map"):
            number.as_map()
        with pytest.raises(CoercionError, match="node is not an array"):
            number.as_array()


class TestBooleanAndString:
    def test_as_bool(self) -> None:
        assert BooleanNode(path="", value=False).as_bool() is False

    def test_as_string(self) -> None:
        assert StringNode(path="", value="asdf").as_string() == "asdf"

    @pytest.mark.parametrize("accessor", ["as_int", "as_int64", "as_float64"])
    def test_string_is_not_a_number(self, accessor: str) -> None:
        node = StringNode(path="/x", value="12")
        with pytest.raises(CoercionError, match="node is not a number") as exc_info:
            getattr(node, accessor)()
        assert exc_info.value.path == "/x"

    def test_boolean_is_not_a_number(self) -> None:
        with pytest.raises(CoercionError, match="node is not a number"):
            BooleanNode(path="", value=True).as_int()

    def test_scalar_navigation_returns_error_nodes(self) -> None:
        node = StringNode(path="/d", value="asdf")
        assert node.by_key("a").is_error()
        assert node.by_index(0).is_error()


# ---------------------------------------------------------------------------
# ErrorNode absorption
# ---------------------------------------------------------------------------


class TestErrorNode:
    def test_navigation_returns_self(self, error_node: ErrorNode) -> None:
        assert error_node.by_key("anything") is error_node
        assert error_node.by_index(3) is error_node
        assert error_node.at("a", 0, "b") is error_node
        assert error_node.resolve("/a/0") is error_node

    @pytest.mark.parametrize(
        "accessor",
        ["as_map", "as_array", "as_int", "as_int64", "as_float64", "as_bool", "as_string"],
    )
    def test_every_accessor_raises_captured_error(
        self, error_node: ErrorNode, accessor: str
    ) -> None:
        with pytest.raises(NavigationError) as exc_info:
            getattr(error_node, accessor)()
        assert exc_info.value is error_node.captured

    def test_repeated_raises_do_not_grow_traceback(self, error_node: ErrorNode) -> None:
        depths = []
        for _ in range(3):
            with pytest.raises(NavigationError) as exc_info:
                error_node.as_int()
            tb = exc_info.value.__traceback__
            depth = 0
            while tb is not None:
                depth += 1
                tb = tb.tb_next
            depths.append(depth)
        assert depths[0] == depths[1] == depths[2]

    def test_raise_inside_handler_keeps_stored_context(self, error_node: ErrorNode) -> None:
        try:
            raise KeyError("other")
        except KeyError:
            with pytest.raises(NavigationError) as exc_info:
                error_node.as_int()
        assert exc_info.value is error_node.captured
        assert error_node.captured.__context__ is None

    def test_original_context_is_preserved(self) -> None:
        try:
            raise ValueError("origin")
        except ValueError:
            captured = NavigationError("key `f` not exist", "/f")
            try:
                raise captured
            except NavigationError:
                pass
        origin = captured.__context__
        assert isinstance(origin, ValueError)

        error_node = ErrorNode(path="/f", captured=captured)
        try:
            raise KeyError("other")
        except KeyError:
            with pytest.raises(NavigationError):
                error_node.as_string()
        assert error_node.captured.__context__ is origin

    def test_first_failure_survives_chain(self, mapping: MapNode) -> None:
        node = mapping.by_key("d").by_index(0).by_key("x")
        with pytest.raises(NavigationError, match="node is not an array") as exc_info:
            node.as_string()
        assert exc_info.value.path == "/d"


# ---------------------------------------------------------------------------
# at()
# ---------------------------------------------------------------------------


class TestAt:
    def test_mixed_selectors(self, mapping: MapNode, number: NumberNode) -> None:
        assert mapping.at("b", 1) is number

    def test_no_selectors_returns_self(self, mapping: MapNode) -> None:
        assert mapping.at() is mapping

    def test_unsupported_selector(self, mapping: MapNode) -> None:
        node = mapping.at("b", 1.5)  # type: ignore[arg-type]
        with pytest.raises(NavigationError, match="unsupported selector type: float"):
            node.as_int()

    def test_bool_selector_rejected(self, mapping: MapNode) -> None:
        assert mapping.at("b", True).is_error()  # type: ignore[arg-type]
