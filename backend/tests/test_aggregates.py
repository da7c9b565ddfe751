"""
Tests for the corpus-wide statistics.
"""

from unittest.mock import MagicMock

import pytest

from analysis.aggregates import (
    build_stats_report,
    distinct_user_ids,
    editor_adoption,
    error_type_histogram,
    variable_no_value_ranking,
)
from analysis.patterns import default_table
from models.event import CommandEvent, ErrorEvent
from store import MemoryEventStore, StoreError


@pytest.fixture
def table():
    return default_table()


def errors(*descriptions):
    return [ErrorEvent(uid="u", timestamp=i, description=d) for i, d in enumerate(descriptions)]


class TestHistogram:

    def test_counts_per_category(self, table):
        hist = error_type_histogram(errors(
            "Too many arguments",
            "Variable a has no value",
            "Too many arguments",
        ), table)
        assert hist == {"VariableHasNoValue": 1, "TooManyArguments": 2}

    def test_unmatched_excluded(self, table):
        hist = error_type_histogram(errors(
            "a completely unrelated failure",
            "Callable name must be a symbol",
        ), table)
        assert hist == {"CallableMustBeSymbol": 1}
        assert sum(hist.values()) == 1

    def test_keys_follow_table_order(self, table):
        hist = error_type_histogram(errors("Too many arguments", "Unknown callable 'x'"), table)
        assert list(hist) == ["UnknownCallable", "TooManyArguments"]

    def test_empty(self, table):
        assert error_type_histogram([], table) == {}


class TestVariableRanking:

    def test_descending_by_count(self, table):
        ranking = variable_no_value_ranking(errors(
            "Variable b has no value",
            "Variable a has no value",
            "Variable b has no value",
        ), table)
        assert [(r.variable, r.count) for r in ranking] == [("b", 2), ("a", 1)]

    def test_ties_broken_alphabetically(self, table):
        errs = errors("Variable zeta has no value", "Variable alpha has no value")
        first = variable_no_value_ranking(errs, table)
        assert [r.variable for r in first] == ["alpha", "zeta"]
        assert variable_no_value_ranking(list(reversed(errs)), table) == first

    def test_full_match_key(self, table):
        ranking = variable_no_value_ranking(errors("oops Variable x has no value"), table, key="match")
        assert ranking[0].variable == "Variable x has no value"

    def test_only_variable_errors_counted(self, table):
        # classified UnknownCallable first, so it is not a VariableHasNoValue error
        ranking = variable_no_value_ranking(errors(
            "Unknown callable 'f': Variable y has no value",
            "Too many arguments",
        ), table)
        assert ranking == []

    def test_bad_key(self, table):
        with pytest.raises(ValueError):
            variable_no_value_ranking([], table, key="other")


class TestUsersAndAdoption:

    def test_user_ids_from_commands_only(self):
        commands = [CommandEvent(uid="a", command="x"), CommandEvent(uid="a"), CommandEvent(uid="b")]
        assert distinct_user_ids(commands) == {"a", "b"}

    def test_adoption(self):
        store = MemoryEventStore()
        store.insert("EditorContent", {"uid": "a", "timestamp": 1, "content": "x"})
        store.insert("EditorContent", {"uid": "a", "timestamp": 2, "content": "y"})
        adoption = editor_adoption(store, ["a", "b"])
        assert (adoption.used_editor, adoption.total) == (1, 2)
        assert adoption.rate == 0.5

    def test_adoption_no_users(self):
        adoption = editor_adoption(MemoryEventStore(), [])
        assert adoption.total == 0
        assert adoption.rate == 0.0


class TestStatsReport:

    def _store(self):
        store = MemoryEventStore()
        store.insert("REPLCommand", {"uid": "a", "timestamp": 1, "command": "(go)"})
        store.insert("REPLCommand", {"uid": "b", "timestamp": 1, "command": "(stop)"})
        store.insert("EditorContent", {"uid": "a", "timestamp": 2, "content": "x"})
        # error-only user and editor-only user stay out of the denominator
        store.insert("Error", {"uid": "c", "timestamp": 3, "description": "Variable v has no value"})
        store.insert("EditorContent", {"uid": "d", "timestamp": 4, "content": "y"})
        store.insert("Error", {"uid": "a", "timestamp": 5, "description": "nothing we know"})
        return store

    def test_report(self, table):
        report = build_stats_report(self._store(), table)
        assert report.error_count == 2
        assert report.error_types == {"VariableHasNoValue": 1}
        assert [(v.variable, v.count) for v in report.variables_with_no_value] == [("v", 1)]
        assert (report.editor_adoption.used_editor, report.editor_adoption.total) == (1, 2)
        assert report.editor_adoption_rate == 0.5

    def test_store_failure_propagates(self, table):
        store = MagicMock()
        store.query_by_kind.side_effect = StoreError("down")
        with pytest.raises(StoreError):
            build_stats_report(store, table)
