"""Tests for the dashboard state container."""

from phonedrop.dashboard.state import DashboardState


def test_starts_loading_and_empty():
    state = DashboardState()
    assert state.loading is True
    assert state.snapshot == ()
    assert state.auto_refresh is True


def test_replace_never_merges(make_record):
    state = DashboardState()
    a, b, c = make_record("a.txt"), make_record("b.txt"), make_record("c.txt")

    state.replace_snapshot([a, b], issued_seq=1)
    state.replace_snapshot([c], issued_seq=2)

    assert state.snapshot == (c,)
    assert state.addresses() == {c.address}
    assert state.snapshot_seq == 2
    assert state.loading is False


def test_cache_insert_never_overwrites():
    state = DashboardState()
    assert state.cache_insert("addr", "first") is True
    assert state.cache_insert("addr", "second") is False
    assert state.content_for("addr") == "first"


def test_cache_survives_snapshot_replacement(make_record):
    state = DashboardState()
    rec = make_record("a.txt")
    state.cache_insert(rec.address, "body")
    state.replace_snapshot([], issued_seq=1)
    assert state.is_cached(rec.address)


def test_listeners_notified_and_unsubscribed(make_record):
    state = DashboardState()
    calls = []
    unsubscribe = state.subscribe(lambda: calls.append(1))

    state.replace_snapshot([make_record("a.txt")])
    state.set_auto_refresh(False)
    state.set_auto_refresh(False)  # no change, no event
    assert len(calls) == 2

    unsubscribe()
    state.cache_insert("x", "y")
    assert len(calls) == 2


def test_failing_listener_does_not_break_state(make_record):
    state = DashboardState()

    def _boom():
        raise RuntimeError("render crashed")

    state.subscribe(_boom)
    state.replace_snapshot([make_record("a.txt")])
    assert len(state.snapshot) == 1


def test_mark_loaded_keeps_snapshot(make_record):
    state = DashboardState()
    state.replace_snapshot([make_record("a.txt")])
    state.mark_loaded()
    assert len(state.snapshot) == 1
