import time
from threading import Event, RLock

from exam_app.core.services.tick_sources import ThreadTickSource


def test_thread_source_delivers_ticks_until_stopped():
    fired = Event()
    calls = []

    def on_tick():
        calls.append(1)
        if len(calls) >= 3:
            fired.set()

    source = ThreadTickSource(on_tick, interval_ms=5)
    source.start()
    try:
        assert fired.wait(timeout=5)
    finally:
        source.stop()
    assert not source.is_active()


def test_thread_source_start_twice_keeps_one_thread():
    source = ThreadTickSource(lambda: None, interval_ms=1000)
    source.start()
    first_thread = source._thread
    source.start()
    assert source._thread is first_thread
    assert source.is_active()
    source.stop()
    assert not source.is_active()
    first_thread.join(timeout=2)
    assert not first_thread.is_alive()


def test_tick_waiting_on_guard_is_dropped_after_stop_and_start():
    guard = RLock()
    calls = []
    source = ThreadTickSource(lambda: calls.append(1), interval_ms=200, guard=guard)

    with guard:
        source.start()
        stale_thread = source._thread
        # The first ticker wakes up meanwhile and blocks on the guard.
        time.sleep(0.3)
        source.stop()
        source.start()

    stale_thread.join(timeout=2)
    assert not stale_thread.is_alive()
    assert calls == []
    assert source.is_active()
    source.stop()

