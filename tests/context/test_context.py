"""Tests for the SimpleContext key-value surface."""

from typing import Any, Callable

import pytest

from simplecontext import (
    ContextConfig,
    InvalidKeyError,
    SimpleContext,
    create_simple_context,
)


class TestCreateSimpleContext:
    """Tests for the factory."""

    def test_creates_empty_context(self) -> None:
        context = create_simple_context()

        assert isinstance(context, SimpleContext)
        assert context.size() == 0
        assert context.get_all() == {}

    def test_contexts_do_not_share_state(self) -> None:
        first = create_simple_context()
        second = create_simple_context()
        first.set("foo", "first")

        assert not second.has("foo")

    def test_accepts_config(self) -> None:
        context = create_simple_context(ContextConfig(name="requests"))

        assert context.config.name == "requests"
        assert repr(context) == "SimpleContext(name='requests', size=0)"


class TestGetSet:
    """Tests for get and set."""

    def test_set_and_get(self, context: SimpleContext) -> None:
        context.set("A", 10)

        assert context.get("A") == 10

    def test_get_missing_returns_none(self, context: SimpleContext) -> None:
        assert context.get("missing") is None

    def test_get_missing_returns_default(self, context: SimpleContext) -> None:
        assert context.get("missing", "fallback") == "fallback"

    def test_set_overwrites(self, context: SimpleContext) -> None:
        context.set("A", 1)
        context.set("A", 2)

        assert context.get("A") == 2
        assert context.size() == 1

    def test_none_value_counts_as_present(self, context: SimpleContext) -> None:
        context.set("k", None)

        assert context.has("k") is True
        assert context.get("k", "missing") is None
        assert context.keys() == ["k"]

    def test_accepts_any_value_type(self, context: SimpleContext) -> None:
        value = object()
        context.set("object", value)

        assert context.get("object") is value


class TestDeleteHas:
    """Tests for delete and has."""

    def test_delete_missing_returns_false(self, context: SimpleContext) -> None:
        assert context.delete("missing") is False

    def test_delete_existing_returns_true(self, context: SimpleContext) -> None:
        context.set("k", "v")

        assert context.delete("k") is True
        assert context.has("k") is False
        assert context.delete("k") is False

    def test_delete_none_value(self, context: SimpleContext) -> None:
        context.set("k", None)

        assert context.delete("k") is True

    @pytest.mark.parametrize("key", ["keys", "get", "__class__", "__dict__", "items"])
    def test_has_ignores_builtin_members(self, context: SimpleContext, key: str) -> None:
        assert context.has(key) is False


class TestProjections:
    """Tests for clear, get_all, keys and size."""

    def test_keys_and_size(self, context: SimpleContext) -> None:
        context.set("a", 1)
        context.set("b", 2)

        assert sorted(context.keys()) == ["a", "b"]
        assert context.size() == 2

    def test_clear_empties_store(self, context: SimpleContext) -> None:
        context.set("a", 1)
        context.set("b", 2)
        context.clear()

        assert context.size() == 0
        assert context.keys() == []

    def test_get_all_returns_independent_copy(self, context: SimpleContext) -> None:
        context.set("a", 1)
        snapshot = context.get_all()
        snapshot["a"] = 2
        snapshot["b"] = 3

        assert context.get("a") == 1
        assert context.has("b") is False

    def test_get_all_is_shallow(self, context: SimpleContext) -> None:
        nested = {"count": 1}
        context.set("nested", nested)

        context.get_all()["nested"]["count"] = 2

        assert context.get("nested") == {"count": 2}

    def test_keys_returns_independent_list(self, context: SimpleContext) -> None:
        context.set("a", 1)
        context.keys().append("b")

        assert context.keys() == ["a"]


INVALID_KEYS = ["", 1, None, b"key", ("key",)]

KEYED_OPERATIONS: dict[str, Callable[[SimpleContext, Any], Any]] = {
    "get": lambda context, key: context.get(key),
    "set": lambda context, key: context.set(key, "value"),
    "delete": lambda context, key: context.delete(key),
    "has": lambda context, key: context.has(key),
}


class TestKeyValidation:
    """Every key-accepting operation rejects invalid keys."""

    @pytest.mark.parametrize("operation", sorted(KEYED_OPERATIONS))
    @pytest.mark.parametrize("key", INVALID_KEYS)
    def test_rejects_invalid_key(self, context: SimpleContext, operation: str, key: Any) -> None:
        with pytest.raises(InvalidKeyError):
            KEYED_OPERATIONS[operation](context, key)

    def test_rejected_set_leaves_store_untouched(self, context: SimpleContext) -> None:
        with pytest.raises(InvalidKeyError):
            context.set("", "value")

        assert context.size() == 0
