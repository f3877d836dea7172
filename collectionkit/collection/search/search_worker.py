"""
SearchCoordinator - background search with last-write-wins semantics.

Each submitted query gets a token. The query is debounced, waits for any
index build still in progress, runs in a worker thread and is applied
only if its token is still the latest one; superseded responses are
dropped. Index builds are numbered the same way and run one at a time,
so the newest record set is the one left in the index.
"""
import asyncio
from typing import Iterable, Optional

from loguru import logger

from collectionkit.collection.models import Node
from collectionkit.collection.controllers import FilterManager
from .fuzzy_index import FuzzySearchIndex, SearchResult


class SearchCoordinator:
    """
    Drives a FilterManager from an (async) search index.

    The index needs two synchronous methods, ``build(nodes)`` and
    ``search(query) -> SearchResult``; both run via ``asyncio.to_thread``.
    Failures are logged and degrade to "no results".

    Usage:
        coordinator = SearchCoordinator(filter_manager, FuzzySearchIndex())
        await coordinator.rebuild_index(collection.nodes)
        coordinator.submit("ali")
        await coordinator.wait_idle()
    """

    def __init__(
        self,
        filter_manager: FilterManager,
        index: Optional[FuzzySearchIndex] = None,
        debounce_ms: int = 300,
        min_query_length: int = 1,
    ):
        self.filter_manager = filter_manager
        self.index = index if index is not None else FuzzySearchIndex()
        self.debounce = debounce_ms / 1000.0
        self.min_query_length = min_query_length
        self._token = 0
        self._latest_query = ""
        self._generation = 0
        self._build_lock = asyncio.Lock()
        self._search_task: Optional[asyncio.Task] = None
        self._index_task: Optional[asyncio.Task] = None

    @property
    def token(self) -> int:
        return self._token

    # --- Index ---

    async def rebuild_index(self, nodes: Iterable[Node]):
        """Rebuild the index in a worker thread, then refresh an active query."""
        nodes = list(nodes)
        self._generation += 1
        generation = self._generation
        self.filter_manager.set_indexing(True)
        try:
            async with self._build_lock:
                if generation != self._generation:
                    logger.debug(f"SearchCoordinator: skipping superseded index build #{generation}")
                    return
                try:
                    await asyncio.to_thread(self.index.build, nodes)
                except Exception as e:
                    logger.error(f"SearchCoordinator: index build failed: {e}")
                    self.index.build([])
        finally:
            if generation == self._generation:
                self.filter_manager.set_indexing(False)

        if generation == self._generation:
            self._refresh_latest_query()

    def schedule_rebuild(self, nodes: Iterable[Node]) -> Optional[asyncio.Task]:
        """Start an index rebuild; builds inline when no event loop is running."""
        nodes = list(nodes)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._build_sync(nodes)
            return None
        self._index_task = loop.create_task(self.rebuild_index(nodes))
        return self._index_task

    def _build_sync(self, nodes):
        self._generation += 1
        try:
            self.index.build(nodes)
        except Exception as e:
            logger.error(f"SearchCoordinator: index build failed: {e}")
            self.index.build([])
        self._refresh_latest_query()

    def _refresh_latest_query(self):
        """Re-run the latest submitted query against the fresh index."""
        # A pending search reads the index after the build finishes
        if self._search_task is not None and not self._search_task.done():
            return
        query = self._latest_query
        if len(query.strip()) >= self.min_query_length:
            self.submit(query, debounce=False)

    # --- Query ---

    def submit(self, query: str, debounce: bool = True) -> Optional[asyncio.Task]:
        """
        Submit a query; supersedes any query still in flight.

        Returns:
            The search task, or None when the query cleared the filter or
            ran inline because no event loop is running
        """
        self._token += 1
        token = self._token
        self._latest_query = query
        if self._search_task is not None and not self._search_task.done():
            self._search_task.cancel()
        self._search_task = None

        if len(query.strip()) < self.min_query_length:
            self.filter_manager.set_debounced_query("")
            self.filter_manager.clear_results()
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("SearchCoordinator: no running event loop, searching inline")
            self.filter_manager.set_debounced_query(query)
            self._apply(token, query, self._search_safely(query))
            return None

        self.filter_manager.set_filtering(True)
        self._search_task = loop.create_task(self._run(token, query, debounce))
        return self._search_task

    async def _run(self, token: int, query: str, debounce: bool):
        if debounce and self.debounce > 0:
            await asyncio.sleep(self.debounce)
        if token != self._token:
            return

        self.filter_manager.set_debounced_query(query)

        while True:
            # Never search an index that is still being built
            if self._index_task is not None and not self._index_task.done():
                await asyncio.shield(self._index_task)
                if token != self._token:
                    return

            generation = self._generation
            try:
                result = await asyncio.to_thread(self.index.search, query)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"SearchCoordinator: search for '{query}' failed: {e}")
                result = SearchResult()

            if generation == self._generation:
                break
            logger.debug(f"SearchCoordinator: index rebuilt while searching '{query}', searching again")

        self._apply(token, query, result)

    def _search_safely(self, query: str) -> SearchResult:
        try:
            return self.index.search(query)
        except Exception as e:
            logger.error(f"SearchCoordinator: search for '{query}' failed: {e}")
            return SearchResult()

    def _apply(self, token: int, query: str, result: SearchResult):
        if token != self._token:
            logger.debug(f"SearchCoordinator: discarding stale results for '{query}'")
            return
        self.filter_manager.apply_results(result.matching_keys, result.match_count, result.scores)

    async def wait_idle(self):
        """Wait for the pending index build and search, if any."""
        pending = [t for t in (self._index_task, self._search_task) if t is not None]
        if pending:
            await asyncio.wait(pending)
        # A rebuild may have started a fresh search for the active query
        if self._search_task is not None and not self._search_task.done():
            await asyncio.wait([self._search_task])

    def cancel(self):
        """Abandon any query in flight."""
        self._token += 1
        self._latest_query = ""
        if self._search_task is not None and not self._search_task.done():
            self._search_task.cancel()
        self._search_task = None
        if self.filter_manager.is_filtering:
            self.filter_manager.set_filtering(False)
