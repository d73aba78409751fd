import asyncio

import pytest

from moviemax.services.models import MovieSummary
from moviemax.services.search import CancellableTimer, SearchSession, SearchState

DELAY = 0.05


class RecordingSearch:
    def __init__(self, latency: float = 0.0, fail: bool = False) -> None:
        self.calls: list[str] = []
        self.latency = latency
        self.fail = fail

    async def __call__(self, query: str) -> list[MovieSummary]:
        self.calls.append(query)
        await asyncio.sleep(self.latency)
        if self.fail:
            raise RuntimeError("search backend exploded")
        return [
            MovieSummary(id="tt1", title=f"{query} one", year="2001"),
            MovieSummary(id="tt2", title=f"{query} two", year="2002"),
            MovieSummary(id="tt1", title=f"{query} again", year="2001"),
        ]


def test_rapid_typing_issues_one_request_for_the_last_query():
    search = RecordingSearch()

    async def scenario():
        session = SearchSession(search, delay=DELAY)
        for query in ("a", "ab", "abc"):
            assert session.set_query(query) is SearchState.DEBOUNCING
        assert search.calls == []
        await asyncio.sleep(DELAY * 3)
        await session.drain()
        return session

    session = asyncio.run(scenario())
    assert search.calls == ["abc"]
    assert session.state is SearchState.SETTLED
    assert [movie.title for movie in session.results] == ["abc one", "abc two"]


def test_clearing_query_before_timer_fires_returns_to_idle():
    search = RecordingSearch()

    async def scenario():
        session = SearchSession(search, delay=DELAY)
        session.set_query("bat")
        assert session.set_query("   ") is SearchState.IDLE
        await asyncio.sleep(DELAY * 3)
        return session

    session = asyncio.run(scenario())
    assert search.calls == []
    assert session.state is SearchState.IDLE
    assert session.results == []


def test_loading_state_while_request_in_flight():
    search = RecordingSearch(latency=DELAY * 4)

    async def scenario():
        session = SearchSession(search, delay=DELAY)
        session.set_query("matrix")
        await asyncio.sleep(DELAY * 2)
        state = session.state
        await session.drain()
        return state, session.state

    during, after = asyncio.run(scenario())
    assert during is SearchState.LOADING
    assert after is SearchState.SETTLED


def test_stale_results_are_discarded_when_query_changes_mid_flight():
    search = RecordingSearch(latency=DELAY * 4)
    settled = []

    async def on_settled(query, results):
        settled.append(query)

    async def scenario():
        session = SearchSession(search, delay=DELAY, on_settled=on_settled)
        session.set_query("old")
        await asyncio.sleep(DELAY * 2)  # "old" is now in flight
        session.set_query("new")
        await asyncio.sleep(DELAY * 2)
        await session.drain()
        return session

    session = asyncio.run(scenario())
    assert search.calls == ["old", "new"]
    assert settled == ["new"]
    assert session.results[0].title == "new one"


def test_search_error_settles_with_empty_results(caplog):
    search = RecordingSearch(fail=True)

    async def scenario():
        session = SearchSession(search, delay=DELAY)
        session.set_query("boom")
        await asyncio.sleep(DELAY * 3)
        await session.drain()
        return session

    session = asyncio.run(scenario())
    assert session.state is SearchState.SETTLED
    assert session.results == []
    assert "Error searching movies" in caplog.text


def test_close_cancels_pending_timer_and_drops_in_flight_results():
    search = RecordingSearch(latency=DELAY * 2)
    settled = []

    async def on_settled(query, results):
        settled.append(query)

    async def scenario():
        pending = SearchSession(search, delay=DELAY, on_settled=on_settled)
        pending.set_query("never")
        pending.close()

        in_flight = SearchSession(search, delay=DELAY, on_settled=on_settled)
        in_flight.set_query("dropped")
        await asyncio.sleep(DELAY * 1.5)
        in_flight.close()
        await asyncio.sleep(DELAY * 3)
        await in_flight.drain()
        return pending

    pending = asyncio.run(scenario())
    assert search.calls == ["dropped"]
    assert settled == []
    with pytest.raises(RuntimeError):
        pending.set_query("again")


def test_timer_cancel_is_idempotent_and_noop_after_firing():
    fired = []

    async def scenario():
        cancelled = CancellableTimer(DELAY, lambda: fired.append("cancelled"))
        cancelled.cancel()
        cancelled.cancel()
        assert not cancelled.pending

        done = CancellableTimer(0, lambda: fired.append("done"))
        await asyncio.sleep(DELAY)
        assert not done.pending
        done.cancel()
        await asyncio.sleep(DELAY * 2)

    asyncio.run(scenario())
    assert fired == ["done"]


def test_default_delay_comes_from_settings():
    async def scenario():
        return SearchSession(RecordingSearch()).delay

    assert asyncio.run(scenario()) == 0.05


def test_failing_listener_is_logged_and_session_stays_settled(caplog):
    search = RecordingSearch()

    async def on_settled(query, results):
        raise RuntimeError("socket already closed")

    async def scenario():
        session = SearchSession(search, delay=DELAY, on_settled=on_settled)
        session.set_query("matrix")
        await asyncio.sleep(DELAY * 3)
        await session.drain()
        return session

    session = asyncio.run(scenario())
    assert session.state is SearchState.SETTLED
    assert [movie.id for movie in session.results] == ["tt1", "tt2"]
    assert "Search listener failed" in caplog.text
