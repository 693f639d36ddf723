import time
from functools import partial
from threading import Thread

import pytest

from conftest import make_record, wait_for
from exam_app.core.exam_config import ExamConfig
from exam_app.core.exam_manager import ExamManager
from exam_app.core.services.tick_sources import ThreadTickSource


def _run_in_worker(func) -> None:
    worker = Thread(target=func, name="ApiWorker")
    worker.start()
    worker.join(timeout=5)
    assert not worker.is_alive()


def _remaining(manager: ExamManager) -> int:
    return manager.time_snapshot().remaining


@pytest.fixture
def bank() -> list[dict]:
    return [make_record(1, ["A", "B", "C"], [2]), make_record(2, ["x", "y"], [0])]


@pytest.fixture
def make_manager():
    managers = []

    def factory(duration: int = 100, interval_ms: int = 20) -> ExamManager:
        manager = ExamManager(
            ExamConfig(duration_seconds=duration, sample_size=None),
            tick_source_factory=partial(ThreadTickSource, interval_ms=interval_ms),
        )
        managers.append(manager)
        return manager

    yield factory
    for manager in managers:
        if manager.has_exam() and not manager.is_submitted():
            manager.submit()


def test_countdown_runs_after_restart_from_worker_thread(make_manager, bank):
    manager = make_manager()
    manager.start_exam(bank)
    manager.submit()

    _run_in_worker(manager.restart_exam)

    assert manager.is_timer_running()
    assert wait_for(lambda: _remaining(manager) < 100)


def test_pause_and_resume_from_worker_threads(make_manager, bank):
    manager = make_manager()
    manager.start_exam(bank)
    assert wait_for(lambda: _remaining(manager) < 100)

    _run_in_worker(manager.pause_timer)
    paused_at = _remaining(manager)
    time.sleep(0.1)
    assert _remaining(manager) == paused_at
    assert not manager.is_timer_running()

    _run_in_worker(manager.resume_timer)
    assert manager.is_timer_running()
    assert wait_for(lambda: _remaining(manager) < paused_at)


def test_tick_racing_pause_and_resume_does_not_cost_a_second(make_manager, bank):
    manager = make_manager(interval_ms=200)
    manager.start_exam(bank)

    with manager._lock:
        before = _remaining(manager)
        # The ticker wakes up meanwhile and waits for the lock.
        time.sleep(0.3)
        manager.pause_timer()
        manager.resume_timer()

    time.sleep(0.05)
    assert _remaining(manager) == before


def test_submit_from_worker_thread_stops_countdown(make_manager, bank):
    manager = make_manager()
    manager.start_exam(bank)
    assert wait_for(lambda: _remaining(manager) < 100)

    _run_in_worker(manager.submit)
    frozen = _remaining(manager)
    time.sleep(0.1)

    assert _remaining(manager) == frozen
    assert not manager.is_timer_running()
    assert manager.get_report().time_remaining == frozen


def test_expiry_submits_from_ticker_thread(make_manager, bank):
    manager = make_manager(duration=3, interval_ms=10)
    manager.start_exam(bank)

    assert wait_for(manager.is_submitted)
    report = manager.get_report()
    assert report.time_remaining == 0
    assert report.score == 0
    assert manager.time_snapshot().expired
