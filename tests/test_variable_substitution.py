"""Tests for ${name} substitution and the variable store."""

import pytest

from msgbuild.exceptions import UnresolvedVariable
from msgbuild.variables import VariableStore, VariableSubstitutor


@pytest.fixture
def substitutor():
    return VariableSubstitutor()


def test_no_placeholders_is_identity(substitutor):
    assert substitutor.substitute("TestMessagePayload", {}) == "TestMessagePayload"


def test_single_placeholder(substitutor):
    store = VariableStore({"placeholder": "payload data"})
    result = substitutor.substitute("This ${placeholder} contains variables!", store)
    assert result == "This payload data contains variables!"


def test_multiple_and_repeated_placeholders(substitutor):
    result = substitutor.substitute("${a}/${b}/${a}", {"a": "x", "b": "y"})
    assert result == "x/y/x"


def test_single_pass_does_not_resubstitute(substitutor):
    """Values that look like placeholders are inserted verbatim."""
    result = substitutor.substitute("${outer}", {"outer": "${inner}", "inner": "nope"})
    assert result == "${inner}"


def test_identifier_may_contain_any_character_except_brace(substitutor):
    variables = {"order.id": "1", "with space": "2", "a-b:c": "3"}
    result = substitutor.substitute("${order.id} ${with space} ${a-b:c}", variables)
    assert result == "1 2 3"


def test_unresolved_variable_raises(substitutor):
    with pytest.raises(UnresolvedVariable) as exc_info:
        substitutor.substitute("Hello ${missing}", {})
    assert exc_info.value.names == ["missing"]
    assert "missing" in str(exc_info.value)


def test_all_unresolved_names_reported(substitutor):
    with pytest.raises(UnresolvedVariable) as exc_info:
        substitutor.substitute("${b} ${a} ${known} ${b}", {"known": "k"})
    assert exc_info.value.names == ["a", "b"]


def test_non_string_values_rendered(substitutor):
    variables = {"flag": True, "count": 3, "ratio": 0.5, "items": ["a", 1]}
    result = substitutor.substitute("${flag} ${count} ${ratio} ${items}", variables)
    assert result == 'true 3 0.5 ["a", 1]'


def test_substitute_nested_structures(substitutor):
    value = {"name": "${n}", "list": ["${n}", 5], "nested": {"k": "${n}"}}
    result = substitutor.substitute(value, {"n": "v"})
    assert result == {"name": "v", "list": ["v", 5], "nested": {"k": "v"}}


def test_non_text_passes_through(substitutor):
    assert substitutor.substitute(42, {}) == 42
    assert substitutor.substitute(None, {}) is None


def test_unclosed_placeholder_is_left_alone(substitutor):
    assert substitutor.substitute("${open", {}) == "${open"


class TestVariableStore:
    """Store semantics used by the pipeline."""

    def test_get_absent_returns_none(self):
        assert VariableStore().get("x") is None

    def test_set_overwrites(self):
        store = VariableStore()
        store.set("x", "1")
        store.set("x", "2")
        assert store.get("x") == "2"
        assert "x" in store
        assert len(store) == 1

    def test_snapshot_is_a_copy(self):
        store = VariableStore({"a": "1"})
        snapshot = store.snapshot()
        store.set("b", "2")
        assert snapshot == {"a": "1"}
        assert sorted(store) == ["a", "b"]

    def test_remove(self):
        store = VariableStore({"a": "1"})
        store.remove("a")
        store.remove("never-set")
        assert "a" not in store
