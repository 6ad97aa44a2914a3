"""
Unit Tests for the Sync Module
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from news_admin.client.errors import BackendError, BackendUnavailable
from news_admin.schemas.news import NewsItem, NewsStatus, Pagination
from news_admin.schemas.search import tokenize
from news_admin.sync.debounce import Debouncer
from news_admin.sync.polling import PollState, StatusPoller
from news_admin.sync.results import PaginatedFetcher, ResultSet
from news_admin.sync.scroll import ScrollPosition, ScrollTrigger
from news_admin.sync.suggestions import SuggestionFetcher

from conftest import make_items, make_page


NEAR_BOTTOM = ScrollPosition(scroll_top=1450, scroll_height=2000, client_height=500)
FAR_FROM_BOTTOM = ScrollPosition(scroll_top=0, scroll_height=2000, client_height=500)


class TestResultSet:
    """Tests for ResultSet."""

    def test_extend_skips_known_ids(self):
        results = ResultSet(make_items(0, 3))

        added = results.extend(make_items(2, 3))

        assert added == 2
        assert results.ids == ["n0", "n1", "n2", "n3", "n4"]

    def test_replace_keeps_first_of_duplicate_ids(self):
        first = NewsItem(id="a", title="first")
        second = NewsItem(id="a", title="second")
        results = ResultSet(make_items(0, 2))

        results.replace([first, second])

        assert len(results) == 1
        assert results.get("a").title == "first"

    def test_prepend_moves_item_to_front(self):
        results = ResultSet(make_items(0, 3))

        results.prepend(NewsItem(id="n2", title="fresh"))

        assert results.ids == ["n2", "n0", "n1"]
        assert results.get("n2").title == "fresh"

    def test_update_and_remove(self):
        results = ResultSet(make_items(0, 2))

        assert results.update("n1", lambda item: item.model_copy(update={"title": "x"}))
        assert not results.update("missing", lambda item: item)
        assert results.get("n1").title == "x"

        assert results.remove("n0").id == "n0"
        assert results.remove("n0") is None
        assert results.ids == ["n1"]


class TestDebouncer:
    """Tests for Debouncer."""

    @pytest.mark.asyncio
    async def test_burst_fires_once_with_last_text(self):
        """Keystrokes inside the delay window collapse into one call."""
        callback = AsyncMock()
        debouncer = Debouncer(0.05, callback)

        for text in ["e", "el", "ele", "elec", "election"]:
            debouncer.notify(text)

        assert debouncer.pending
        await asyncio.sleep(0.15)
        await debouncer.drain()

        callback.assert_awaited_once_with("election")
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_separate_bursts_fire_separately(self):
        fired = []
        debouncer = Debouncer(0.02, fired.append)

        debouncer.notify("first")
        await asyncio.sleep(0.08)
        debouncer.notify("second")
        await asyncio.sleep(0.08)

        assert fired == ["first", "second"]

    @pytest.mark.asyncio
    async def test_blank_text_clears_without_scheduling(self):
        fired = []
        on_clear = MagicMock()
        debouncer = Debouncer(0.02, fired.append, on_clear=on_clear)

        debouncer.notify("news")
        debouncer.notify("   ")
        await asyncio.sleep(0.06)

        on_clear.assert_called_once()
        assert fired == []
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_callback(self):
        fired = []
        debouncer = Debouncer(0.02, fired.append)

        debouncer.notify("news")
        debouncer.cancel()
        await asyncio.sleep(0.06)

        assert fired == []


class TestSuggestionFetcher:
    """Tests for SuggestionFetcher."""

    @pytest.mark.asyncio
    async def test_sends_tokens_and_returns_data(self, backend):
        backend.suggest.return_value = ["election fraud", "election results"]
        fetcher = SuggestionFetcher(backend)

        result = await fetcher.fetch("  election   fr ")

        backend.suggest.assert_awaited_once_with(["election", "fr"])
        assert result == ["election fraud", "election results"]
        assert fetcher.suggestions == result
        assert fetcher.loading is False

    @pytest.mark.asyncio
    async def test_failure_resolves_to_empty(self, backend):
        backend.suggest.side_effect = BackendUnavailable()
        fetcher = SuggestionFetcher(backend)
        fetcher.suggestions = ["old"]

        result = await fetcher.fetch("election")

        assert result == []
        assert fetcher.suggestions == []
        assert fetcher.loading is False

    @pytest.mark.asyncio
    async def test_blank_text_makes_no_request(self, backend):
        fetcher = SuggestionFetcher(backend)

        assert await fetcher.fetch("   ") == []
        backend.suggest.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stale_response_is_dropped(self, backend):
        """An older lookup resolving last must not overwrite a newer one."""
        gates = {"old": asyncio.Event(), "new": asyncio.Event()}

        async def suggest(tokens):
            await gates[tokens[0]].wait()
            return [f"{tokens[0]} suggestion"]

        backend.suggest.side_effect = suggest
        fetcher = SuggestionFetcher(backend)

        old = asyncio.ensure_future(fetcher.fetch("old"))
        new = asyncio.ensure_future(fetcher.fetch("new"))
        await asyncio.sleep(0)

        gates["new"].set()
        assert await new == ["new suggestion"]
        gates["old"].set()
        assert await old == []

        assert fetcher.suggestions == ["new suggestion"]


class TestPaginatedFetcher:
    """Tests for PaginatedFetcher."""

    @pytest.mark.asyncio
    async def test_search_scenario_two_pages(self):
        """30 + 5 items over two pages, then an empty page ends the stream."""
        pages = {1: make_items(0, 30), 2: make_items(30, 5), 3: []}
        calls = []

        async def loader(tokens, page):
            calls.append((tokens, page.page, page.size))
            return make_page(pages[page.page])

        fetcher = PaginatedFetcher(loader, page_size=30)
        tokens = tokenize("election fraud")
        assert tokens == ["election", "fraud"]

        assert await fetcher.fetch(tokens, page=1)
        trigger = ScrollTrigger(fetcher, threshold=100)
        await trigger.on_scroll(NEAR_BOTTOM)

        assert len(fetcher.results) == 35
        assert len(set(fetcher.results.ids)) == 35
        assert fetcher.current_page == 2
        assert fetcher.has_more is True

        await trigger.on_scroll(NEAR_BOTTOM)

        assert len(fetcher.results) == 35
        assert fetcher.has_more is False
        assert calls == [
            (["election", "fraud"], 1, 30),
            (["election", "fraud"], 2, 30),
            (["election", "fraud"], 3, 30),
        ]

    @pytest.mark.asyncio
    async def test_fresh_fetch_resets_before_response(self):
        seen = {}

        async def loader(tokens, page):
            seen["results"] = len(fetcher.results)
            seen["has_more"] = fetcher.has_more
            seen["loading"] = fetcher.loading
            return make_page(make_items(100, 2))

        fetcher = PaginatedFetcher(loader, page_size=30)
        fetcher.results.extend(make_items(0, 5))
        fetcher.has_more = False
        fetcher.pagination = Pagination(page=1, size=30, total=5, total_pages=1)

        await fetcher.fetch(["x"], page=1)

        assert seen == {"results": 0, "has_more": True, "loading": True}
        assert fetcher.results.ids == ["n100", "n101"]
        assert fetcher.pagination is None
        assert fetcher.loading is False

    @pytest.mark.asyncio
    async def test_append_of_known_ids_keeps_length(self):
        loader = AsyncMock(return_value=make_page(make_items(0, 3)))
        fetcher = PaginatedFetcher(loader, page_size=3)
        await fetcher.fetch([], page=1)

        loader.return_value = make_page(make_items(1, 2))
        await fetcher.fetch([], page=2, append=True)

        assert fetcher.results.ids == ["n0", "n1", "n2"]
        assert fetcher.has_more is True

    @pytest.mark.asyncio
    async def test_has_more_false_only_on_empty_page(self):
        loader = AsyncMock(return_value=make_page(make_items(0, 1)))
        fetcher = PaginatedFetcher(loader, page_size=30)

        await fetcher.fetch([], page=1)
        assert fetcher.has_more is True

        loader.return_value = make_page([])
        await fetcher.fetch([], page=2, append=True)
        assert fetcher.has_more is False
        assert len(fetcher.results) == 1

    @pytest.mark.asyncio
    async def test_fresh_failure_clears_everything(self):
        loader = AsyncMock(return_value=make_page(make_items(0, 3)))
        fetcher = PaginatedFetcher(loader, page_size=30)
        await fetcher.fetch([], page=1)

        loader.side_effect = BackendError(500, "Internal Server Error")
        assert await fetcher.fetch([], page=1) is False

        assert len(fetcher.results) == 0
        assert fetcher.pagination is None
        assert fetcher.has_more is False
        assert fetcher.loading is False

    @pytest.mark.asyncio
    async def test_append_failure_keeps_loaded_pages(self):
        loader = AsyncMock(return_value=make_page(make_items(0, 3)))
        fetcher = PaginatedFetcher(loader, page_size=3)
        await fetcher.fetch([], page=1)

        loader.side_effect = BackendUnavailable()
        assert await fetcher.fetch_next() is False

        assert fetcher.results.ids == ["n0", "n1", "n2"]
        assert fetcher.has_more is True
        assert fetcher.loading_more is False
        assert fetcher.current_page == 1

        loader.side_effect = None
        loader.return_value = make_page(make_items(3, 3))
        await fetcher.fetch_next()

        assert loader.await_args.args[1].page == 2

    @pytest.mark.asyncio
    async def test_stale_page_is_discarded(self):
        """A slow response to an older query never replaces a newer one."""
        gates = {"old": asyncio.Event(), "new": asyncio.Event()}

        async def loader(tokens, page):
            await gates[tokens[0]].wait()
            start = 0 if tokens[0] == "old" else 50
            return make_page(make_items(start, 2))

        fetcher = PaginatedFetcher(loader, page_size=30)
        old = fetcher.schedule(["old"], page=1)
        new = fetcher.schedule(["new"], page=1)

        gates["new"].set()
        assert await new is True
        gates["old"].set()
        assert await old is False

        assert fetcher.results.ids == ["n50", "n51"]
        assert fetcher.tokens == ["new"]
        assert fetcher.loading is False

    @pytest.mark.asyncio
    async def test_fresh_query_supersedes_inflight_append(self):
        gate = asyncio.Event()

        async def loader(tokens, page):
            if page.page == 2:
                await gate.wait()
                return make_page(make_items(200, 3))
            return make_page(make_items(0 if tokens == ["a"] else 10, 3))

        fetcher = PaginatedFetcher(loader, page_size=3)
        await fetcher.fetch(["a"], page=1)
        stale_append = fetcher.schedule_next()
        assert fetcher.loading_more is True

        await fetcher.fetch(["b"], page=1)
        assert fetcher.loading_more is False

        gate.set()
        assert await stale_append is False
        assert fetcher.results.ids == ["n10", "n11", "n12"]

    @pytest.mark.asyncio
    async def test_blank_tokens_clear_without_request(self):
        loader = AsyncMock(return_value=make_page(make_items(0, 3)))
        fetcher = PaginatedFetcher(loader, page_size=30, blank_clears=True)
        await fetcher.fetch(["x"], page=1)

        assert await fetcher.fetch([], page=1) is False

        assert loader.await_count == 1
        assert len(fetcher.results) == 0
        assert fetcher.has_more is True

    @pytest.mark.asyncio
    async def test_removal_survives_inflight_append(self):
        gate = asyncio.Event()

        async def loader(tokens, page):
            if page.page == 2:
                await gate.wait()
                return make_page(make_items(2, 3))
            return make_page(make_items(0, 3))

        fetcher = PaginatedFetcher(loader, page_size=3)
        await fetcher.fetch([], page=1)
        append = fetcher.schedule_next()

        fetcher.remove("n3")
        gate.set()
        assert await append is True

        assert fetcher.results.ids == ["n0", "n1", "n2", "n4"]

    @pytest.mark.asyncio
    async def test_continuation_needs_a_completed_page(self):
        loader = AsyncMock(return_value=make_page(make_items(0, 3)))
        fetcher = PaginatedFetcher(loader, page_size=3)
        fetcher.prepend(NewsItem(id="local"))

        assert not fetcher.can_load_more

        await fetcher.fetch([], page=1)
        assert fetcher.can_load_more


class TestScrollTrigger:
    """Tests for ScrollTrigger."""

    async def _loaded_fetcher(self, count=30, pagination=None):
        loader = AsyncMock(return_value=make_page(make_items(0, count), pagination))
        fetcher = PaginatedFetcher(loader, page_size=30)
        await fetcher.fetch([], page=1)
        return fetcher, loader

    def test_distance_to_bottom(self):
        assert NEAR_BOTTOM.distance_to_bottom == 50
        assert FAR_FROM_BOTTOM.distance_to_bottom == 1500

    @pytest.mark.asyncio
    async def test_fires_only_within_threshold(self):
        fetcher, loader = await self._loaded_fetcher()
        trigger = ScrollTrigger(fetcher, threshold=100)

        assert trigger.on_scroll(FAR_FROM_BOTTOM) is None
        edge = ScrollPosition(scroll_top=1400, scroll_height=2000, client_height=500)
        task = trigger.on_scroll(edge)

        assert task is not None
        await task
        assert loader.await_args.args[1].page == 2

    @pytest.mark.asyncio
    async def test_one_fetch_per_burst_of_scroll_events(self):
        fetcher, loader = await self._loaded_fetcher()
        trigger = ScrollTrigger(fetcher, threshold=100)

        first = trigger.on_scroll(NEAR_BOTTOM)
        second = trigger.on_scroll(NEAR_BOTTOM)

        assert first is not None
        assert second is None
        await first
        assert loader.await_count == 2

    @pytest.mark.asyncio
    async def test_guards(self):
        fetcher, loader = await self._loaded_fetcher()
        trigger = ScrollTrigger(fetcher, threshold=100)

        fetcher.loading = True
        assert not trigger.should_fire(NEAR_BOTTOM)
        fetcher.loading = False

        fetcher.has_more = False
        assert not trigger.should_fire(NEAR_BOTTOM)
        fetcher.has_more = True

        fetcher.results.clear()
        assert not trigger.should_fire(NEAR_BOTTOM)

    @pytest.mark.asyncio
    async def test_listing_stops_at_last_page(self):
        pagination = Pagination(page=1, size=30, total=30, total_pages=1)
        fetcher, loader = await self._loaded_fetcher(pagination=pagination)

        assert ScrollTrigger(fetcher, threshold=300).should_fire(NEAR_BOTTOM)
        listing = ScrollTrigger(fetcher, threshold=300, respect_total_pages=True)
        assert not listing.should_fire(NEAR_BOTTOM)


def pending(item_id):
    return NewsItem(id=item_id, title="", status=NewsStatus.ADDED)


class TestStatusPoller:
    """Tests for StatusPoller and PollSession."""

    @pytest.mark.asyncio
    async def test_synced_on_last_tick(self):
        """Eleven pending answers, then synced on tick 12."""
        answers = [pending("n1")] * 11 + [
            NewsItem(id="n1", title="Done", status=NewsStatus.SYNCED)
        ]
        lookup = AsyncMock(side_effect=answers)
        on_update = MagicMock()
        poller = StatusPoller(lookup, on_update, interval=0.005, max_attempts=12)

        session = poller.start("n1")
        await asyncio.wait_for(session.wait(), timeout=2)

        assert session.state is PollState.TERMINATED
        assert session.attempt == 12
        assert session.final_status is NewsStatus.SYNCED
        assert lookup.await_count == 12
        on_update.assert_called_once()
        assert on_update.call_args.args[0].status is NewsStatus.SYNCED

    @pytest.mark.asyncio
    async def test_stops_on_first_terminal_status(self):
        lookup = AsyncMock(side_effect=[
            pending("n1"),
            NewsItem(id="n1", title="Broken", status=NewsStatus.FAILED),
        ])
        poller = StatusPoller(lookup, MagicMock(), interval=0.005, max_attempts=12)

        session = poller.start("n1")
        await asyncio.wait_for(session.wait(), timeout=2)
        await asyncio.sleep(0.03)

        assert session.attempt == 2
        assert lookup.await_count == 2
        assert session.final_status is NewsStatus.FAILED

    @pytest.mark.asyncio
    async def test_budget_exhausted_leaves_item_pending(self):
        lookup = AsyncMock(return_value=pending("n1"))
        on_update = MagicMock()
        poller = StatusPoller(lookup, on_update, interval=0.005, max_attempts=12)

        session = poller.start("n1")
        await asyncio.wait_for(session.wait(), timeout=2)
        await asyncio.sleep(0.03)

        assert session.exhausted
        assert lookup.await_count == 12
        on_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_lookups_are_inconclusive(self):
        lookup = AsyncMock(side_effect=[
            BackendUnavailable(),
            BackendError(500, "Internal Server Error"),
            None,
            NewsItem(id="n1", title="Done", status=NewsStatus.SYNCED),
        ])
        poller = StatusPoller(lookup, MagicMock(), interval=0.005, max_attempts=12)

        session = poller.start("n1")
        await asyncio.wait_for(session.wait(), timeout=2)

        assert session.attempt == 4
        assert session.final_status is NewsStatus.SYNCED

    @pytest.mark.asyncio
    async def test_first_tick_within_one_interval(self):
        lookup = AsyncMock(return_value=pending("n1"))
        poller = StatusPoller(lookup, MagicMock(), interval=0.05, max_attempts=12)

        session = poller.start("n1")
        assert session.state is PollState.POLLING
        assert lookup.await_count == 0

        await asyncio.sleep(0.08)
        assert lookup.await_count == 1
        poller.cancel()

    @pytest.mark.asyncio
    async def test_new_session_cancels_previous(self):
        lookup = AsyncMock(side_effect=lambda item_id: pending(item_id))
        poller = StatusPoller(lookup, MagicMock(), interval=0.01, max_attempts=12)

        first = poller.start("n1")
        second = poller.start("n2")

        assert first.state is PollState.TERMINATED
        assert poller.session is second
        await asyncio.sleep(0.05)

        polled = {call.args[0] for call in lookup.await_args_list}
        assert polled == {"n2"}
        poller.cancel()
        assert not poller.active
