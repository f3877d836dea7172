"""
Tests for SortManager and FilterManager over a live store.
"""
from unittest.mock import MagicMock

import pytest

from collectionkit.collection.controllers import FilterManager, SortManager
from collectionkit.collection.models import SortDirection, SortRule, SortType
from collectionkit.collection.selection import SelectionMode, SelectionState
from collectionkit.collection.store import CollectionStore


@pytest.fixture
def people_store(people):
    store = CollectionStore(SelectionState(selection_mode=SelectionMode.MULTIPLE))
    store.set_items(people, key_extractor=lambda r: r["id"], text_value_extractor=lambda r: r["name"])
    return store


def visible(store):
    return list(store.collection.get_keys())


class TestSortManager:
    def test_sort_by_new_property_is_ascending(self, people_store):
        manager = SortManager(people_store)
        manager.sort_by("age", SortType.NUMBER)
        assert manager.get_direction_for("age") == SortDirection.ASCENDING
        assert visible(people_store) == ["b", "a", "e", "d", "c"]

    def test_sort_by_same_property_toggles(self, people_store):
        manager = SortManager(people_store)
        manager.sort_by("name")
        manager.sort_by("name")
        assert manager.sort_direction == SortDirection.DESCENDING
        assert visible(people_store) == ["e", "d", "c", "b", "a"]

    def test_sort_by_other_property_resets_direction(self, people_store):
        manager = SortManager(people_store)
        manager.sort_by("name", direction=SortDirection.DESCENDING)
        manager.sort_by("age", SortType.NUMBER)
        assert manager.sort_direction == SortDirection.ASCENDING
        assert not manager.is_sorted_by("name")
        assert manager.get_direction_for("name") is None

    def test_toggle_sort_direction(self, people_store):
        manager = SortManager(people_store)
        manager.set_sort_rules([SortRule(property="active", type=SortType.BOOLEAN), SortRule(property="name")])
        manager.toggle_sort_direction()
        assert manager.sort_rules[0].direction == SortDirection.DESCENDING
        assert manager.sort_rules[1].direction == SortDirection.ASCENDING
        assert visible(people_store) == ["a", "c", "e", "b", "d"]

    def test_toggle_without_sort_is_noop(self, people_store):
        manager = SortManager(people_store)
        listener = MagicMock()
        manager.sort_changed.connect(listener)
        manager.toggle_sort_direction()
        listener.assert_not_called()

    def test_clear_sort_restores_source_order(self, people_store):
        manager = SortManager(people_store)
        manager.sort_by("name", direction=SortDirection.DESCENDING)
        manager.clear_sort()
        assert not manager.is_sorted
        assert visible(people_store) == ["a", "b", "c", "d", "e"]

    def test_sort_changed_emits_state(self, people_store):
        manager = SortManager(people_store)
        listener = MagicMock()
        manager.sort_changed.connect(listener)
        manager.sort_by("name")
        state = listener.call_args[0][0]
        assert state.sort_property == "name"
        assert state.sort_rules == (SortRule(property="name"),)

    def test_sort_keeps_selection(self, people_store):
        people_store.update_selection_state(selected_keys=frozenset({"c"}))
        SortManager(people_store).sort_by("name", direction=SortDirection.DESCENDING)
        assert people_store.selection_state.selected_keys == {"c"}


class TestFilterManager:
    def test_initial_state(self, people_store):
        manager = FilterManager(people_store)
        assert manager.query == ""
        assert manager.matching_keys is None
        assert not manager.has_active_filter
        assert manager.is_match("a")

    def test_set_query_emits_without_filtering(self, people_store):
        manager = FilterManager(people_store)
        listener = MagicMock()
        manager.filter_changed.connect(listener)
        manager.set_query("ali")
        listener.assert_called_once_with("ali")
        assert visible(people_store) == ["a", "b", "c", "d", "e"]

    def test_apply_results_filters_and_orders(self, people_store):
        manager = FilterManager(people_store)
        listener = MagicMock()
        manager.filter_results_changed.connect(listener)
        manager.set_debounced_query("a")
        manager.set_filtering(True)

        manager.apply_results({"d", "a"}, 2, {"a": 0.3, "d": 0.1})

        assert visible(people_store) == ["d", "a"]
        assert manager.match_count == 2
        assert not manager.is_filtering
        assert manager.has_active_filter
        assert not manager.is_match("b")
        listener.assert_called_once_with({"a", "d"}, 2)

    def test_zero_matches_differs_from_cleared(self, people_store):
        manager = FilterManager(people_store)
        manager.set_debounced_query("zzz")
        manager.apply_results(set(), 0, {})
        assert manager.matching_keys == frozenset()
        assert visible(people_store) == []

        manager.clear_filter()
        assert manager.matching_keys is None
        assert manager.match_count is None
        assert visible(people_store) == ["a", "b", "c", "d", "e"]

    def test_clear_filter_emits(self, people_store):
        manager = FilterManager(people_store)
        changed, results = MagicMock(), MagicMock()
        manager.filter_changed.connect(changed)
        manager.filter_results_changed.connect(results)
        manager.clear_filter()
        changed.assert_called_once_with("")
        results.assert_called_once_with(None, None)

    def test_scores_are_read_only(self, people_store):
        manager = FilterManager(people_store)
        manager.apply_results({"a"}, 1, {"a": 0.0})
        with pytest.raises(TypeError):
            manager.scores["a"] = 1.0

    def test_clear_results_keeps_query(self, people_store):
        manager = FilterManager(people_store)
        manager.set_query("al")
        manager.apply_results({"a"}, 1, {"a": 0.0})
        manager.clear_results()
        assert manager.query == "al"
        assert manager.matching_keys is None

    def test_relevance_then_sort(self, people_store):
        filters = FilterManager(people_store)
        SortManager(people_store).sort_by("name", direction=SortDirection.DESCENDING)
        filters.apply_results({"a", "b", "c"}, 3, {"a": 0.2, "b": 0.2, "c": 0.0})
        assert visible(people_store) == ["c", "b", "a"]
