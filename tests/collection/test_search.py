"""
Tests for the fuzzy index and the background search coordinator.
"""
import asyncio
import time
from unittest.mock import MagicMock

import pytest

from collectionkit.collection.controllers import FilterManager
from collectionkit.collection.models import ListCollection
from collectionkit.collection.search import FuzzySearchIndex, SearchCoordinator, SearchResult
from collectionkit.collection.store import CollectionStore


class RecordingIndex:
    """Index double that records queries and answers by substring."""

    def __init__(self, delay=0.0, fail_on=()):
        self.delay = delay
        self.build_delay = 0.0
        self.fail_on = set(fail_on)
        self.queries = []
        self.texts = {}

    def build(self, nodes):
        if self.build_delay:
            time.sleep(self.build_delay)
        self.texts = {node.key: node.text_value or "" for node in nodes}

    def search(self, query):
        self.queries.append(query)
        if self.delay:
            time.sleep(self.delay)
        if query in self.fail_on:
            raise RuntimeError("index exploded")
        scores = {key: 0.0 for key, text in self.texts.items() if query.lower() in text.lower()}
        return SearchResult(frozenset(scores), scores)


@pytest.fixture
def setup(people):
    def _make(index=None, **options):
        store = CollectionStore()
        store.set_items(people, key_extractor=lambda r: r["id"], text_value_extractor=lambda r: r["name"])
        manager = FilterManager(store)
        index = index or RecordingIndex()
        index.build(store.source_nodes)
        results = MagicMock()
        manager.filter_results_changed.connect(results)
        coordinator = SearchCoordinator(manager, index, **options)
        return coordinator, manager, store, results
    return _make


def visible(store):
    return list(store.collection.get_keys())


class TestFuzzySearchIndex:
    @pytest.fixture
    def nodes(self, people):
        return ListCollection.from_records(
            people, key_extractor=lambda r: r["id"], text_value_extractor=lambda r: r["name"]
        ).nodes

    def test_exact_match_scores_zero(self, nodes):
        index = FuzzySearchIndex()
        index.build(nodes)
        result = index.search("alice")
        assert "a" in result.matching_keys
        assert result.scores["a"] == 0.0
        assert all(0.0 <= score <= 1.0 for score in result.scores.values())

    def test_no_match(self, nodes):
        index = FuzzySearchIndex()
        index.build(nodes)
        result = index.search("zzzz")
        assert result.match_count == 0
        assert result.scores == {}

    def test_empty_query_or_index(self, nodes):
        index = FuzzySearchIndex()
        assert index.search("alice").match_count == 0
        index.build(nodes)
        assert index.search("").match_count == 0

    def test_limit(self, nodes):
        index = FuzzySearchIndex(score_cutoff=0, limit=2)
        index.build(nodes)
        assert index.search("a").match_count <= 2

    def test_filter_keys_read_record_fields(self):
        records = [
            {"id": 1, "title": "Report", "tags": ["finance", "quarterly"]},
            {"id": 2, "title": "Holiday", "tags": ["photos"]},
        ]
        nodes = ListCollection.from_records(records, key_extractor=lambda r: r["id"]).nodes
        index = FuzzySearchIndex(filter_keys=["title", "tags"])
        index.build(nodes)
        assert index._text_for(nodes[0]) == "Report finance quarterly"
        assert 1 in index.search("quarterly").matching_keys


class TestSearchCoordinator:
    @pytest.mark.asyncio
    async def test_debounced_search_applies_results(self, setup):
        coordinator, manager, store, results = setup(debounce_ms=10)
        coordinator.submit("o")
        assert manager.is_filtering

        await coordinator.wait_idle()

        assert manager.debounced_query == "o"
        assert not manager.is_filtering
        assert visible(store) == ["b", "c"]
        results.assert_called_once_with({"b", "c"}, 2)

    @pytest.mark.asyncio
    async def test_debounce_collapses_bursts(self, setup):
        coordinator, manager, _, results = setup(debounce_ms=50)
        for query in ("e", "ev", "eve"):
            coordinator.submit(query)
        await coordinator.wait_idle()

        assert coordinator.index.queries == ["eve"]
        results.assert_called_once_with({"e"}, 1)

    @pytest.mark.asyncio
    async def test_newer_query_supersedes_in_flight_search(self, setup):
        coordinator, manager, store, results = setup(index=RecordingIndex(delay=0.1), debounce_ms=0)
        coordinator.submit("bob", debounce=False)
        await asyncio.sleep(0.02)
        coordinator.submit("dave", debounce=False)

        await coordinator.wait_idle()

        assert visible(store) == ["d"]
        results.assert_called_once_with({"d"}, 1)

    @pytest.mark.asyncio
    async def test_stale_apply_is_discarded(self, setup):
        coordinator, manager, _, results = setup()
        stale_token = coordinator.token
        coordinator.submit("")
        results.reset_mock()

        coordinator._apply(stale_token, "bob", SearchResult(frozenset({"b"}), {"b": 0.0}))

        results.assert_not_called()
        assert manager.matching_keys is None

    @pytest.mark.asyncio
    async def test_failure_degrades_to_no_results(self, setup):
        coordinator, manager, store, results = setup(index=RecordingIndex(fail_on={"boom"}), debounce_ms=0)
        coordinator.submit("boom")
        await coordinator.wait_idle()

        assert manager.matching_keys == frozenset()
        assert manager.match_count == 0
        assert not manager.is_filtering
        assert visible(store) == []

    @pytest.mark.asyncio
    async def test_short_query_clears_filter(self, setup):
        coordinator, manager, store, _ = setup(debounce_ms=0, min_query_length=2)
        coordinator.submit("al")
        await coordinator.wait_idle()
        assert manager.has_active_filter

        assert coordinator.submit("a") is None
        assert manager.debounced_query == ""
        assert manager.matching_keys is None
        assert visible(store) == ["a", "b", "c", "d", "e"]

    @pytest.mark.asyncio
    async def test_rebuild_refreshes_active_query(self, setup, people):
        coordinator, manager, store, _ = setup(debounce_ms=0)
        coordinator.submit("eve")
        await coordinator.wait_idle()
        assert visible(store) == ["e"]

        people.append({"id": "f", "name": "Evelyn"})
        store.set_items(people, key_extractor=lambda r: r["id"], text_value_extractor=lambda r: r["name"])
        coordinator.schedule_rebuild(store.source_nodes)
        await coordinator.wait_idle()

        assert not manager.is_indexing
        assert visible(store) == ["e", "f"]

    @pytest.mark.asyncio
    async def test_rebuild_keeps_newer_debouncing_query(self, setup):
        coordinator, manager, store, _ = setup(debounce_ms=50)
        coordinator.submit("al", debounce=False)
        await coordinator.wait_idle()
        assert visible(store) == ["a"]

        coordinator.submit("bo")
        await coordinator.rebuild_index(store.source_nodes)
        await coordinator.wait_idle()

        assert manager.debounced_query == "bo"
        assert visible(store) == ["b"]

    @pytest.mark.asyncio
    async def test_overlapping_rebuilds_keep_newest_records(self, setup):
        index = RecordingIndex()
        coordinator, manager, store, _ = setup(index=index, debounce_ms=0)
        index.build_delay = 0.1
        coordinator.schedule_rebuild(store.source_nodes)
        await asyncio.sleep(0.02)
        index.build_delay = 0.0
        coordinator.schedule_rebuild(store.source_nodes[:2])
        await coordinator.wait_idle()

        assert sorted(index.texts) == ["a", "b"]
        assert not manager.is_indexing

        coordinator.submit("dave", debounce=False)
        await coordinator.wait_idle()
        assert manager.match_count == 0

    @pytest.mark.asyncio
    async def test_search_waits_for_index_build(self, setup):
        coordinator, manager, store, _ = setup(index=FuzzySearchIndex(), debounce_ms=0)
        coordinator.index.build([])
        coordinator.schedule_rebuild(store.source_nodes)
        coordinator.submit("alice")
        await coordinator.wait_idle()

        assert "a" in manager.matching_keys

    @pytest.mark.asyncio
    async def test_cancel_abandons_query(self, setup):
        coordinator, manager, _, results = setup(debounce_ms=50)
        coordinator.submit("bob")
        coordinator.cancel()
        await asyncio.sleep(0.1)

        assert not manager.is_filtering
        results.assert_not_called()


class TestInlineSearch:
    """Without a running event loop the coordinator searches synchronously."""

    def test_submit_without_loop(self, setup):
        coordinator, manager, store, results = setup()
        assert coordinator.submit("carol") is None
        assert visible(store) == ["c"]
        results.assert_called_once_with({"c"}, 1)

    def test_rebuild_without_loop(self, setup, people):
        coordinator, manager, store, _ = setup()
        coordinator.submit("bo")
        assert visible(store) == ["b"]

        people.append({"id": "g", "name": "Bobby"})
        store.set_items(people, key_extractor=lambda r: r["id"], text_value_extractor=lambda r: r["name"])
        assert coordinator.schedule_rebuild(store.source_nodes) is None
        assert visible(store) == ["b", "g"]
