"""Unit tests for SET clause rendering."""

import pytest

from orient_connector.connector.marshaller import render_value, to_set_clause
from orient_connector.shared.exceptions import InvalidArgumentError


class TestRenderValue:

    def test_booleans_are_not_integers(self):
        assert render_value("flag", True) == "true"
        assert render_value("flag", False) == "false"

    def test_numbers(self):
        assert render_value("n", 42) == "42"
        assert render_value("x", 1.5) == "1.5"
        assert render_value("neg", -3) == "-3"

    def test_string(self):
        assert render_value("name", 'A "b"') == '"A \\"b\\""'

    def test_list_keeps_order(self):
        assert render_value("tags", ["b", "a", "b"]) == '["b", "a", "b"]'

    def test_tuple_renders_as_list(self):
        assert render_value("pair", (1, 2)) == "[1, 2]"

    def test_set_is_deduplicated_and_sorted(self):
        assert render_value("tags", {"b", "a"}) == '["a", "b"]'
        assert render_value("tags", frozenset({3, 1, 2})) == "[1, 2, 3]"

    @pytest.mark.parametrize("value", [None, {"a": 1}, object(), float("nan"), float("inf")])
    def test_rejects_unsupported_values(self, value):
        with pytest.raises(InvalidArgumentError):
            render_value("field", value)

    def test_rejects_nested_collections(self):
        with pytest.raises(InvalidArgumentError):
            render_value("matrix", [[1, 2], [3, 4]])


class TestToSetClause:

    def test_renders_in_insertion_order(self):
        clause = to_set_clause({"id": "abc", "name": "Ann", "age": 31})
        assert clause == 'SET id = "abc", name = "Ann", age = 31'

    def test_excludes_keys(self):
        clause = to_set_clause({"id": "abc", "name": "Ann"}, exclude={"id"})
        assert clause == 'SET name = "Ann"'
        assert "id" not in clause

    def test_empty_after_exclusion(self):
        assert to_set_clause({"id": "abc"}, exclude={"id"}) == ""

    def test_empty_mapping(self):
        assert to_set_clause({}) == ""

    def test_rejects_bad_field_names(self):
        with pytest.raises(InvalidArgumentError, match="field name"):
            to_set_clause({"name = 1, evil": "x"})

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidArgumentError):
            to_set_clause([("id", "abc")])
