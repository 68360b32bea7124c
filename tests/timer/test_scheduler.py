from __future__ import annotations

import threading

import pytest

from timetrack.timer.scheduler import ThreadScheduler


def test_thread_scheduler_repeats_until_cancelled():
    calls = []
    done = threading.Event()

    def callback():
        calls.append(1)
        if len(calls) >= 3:
            done.set()

    task = ThreadScheduler().schedule(0.01, callback)
    try:
        assert done.wait(timeout=5)
    finally:
        task.cancel()

    count = len(calls)
    threading.Event().wait(0.05)
    assert len(calls) <= count + 1


def test_thread_scheduler_survives_failing_callback():
    calls = []
    done = threading.Event()

    def callback():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        done.set()

    task = ThreadScheduler().schedule(0.01, callback)
    try:
        assert done.wait(timeout=5)
    finally:
        task.cancel()


def test_thread_scheduler_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        ThreadScheduler().schedule(0, lambda: None)


def test_thread_scheduler_names_tasks_uniquely_across_threads():
    scheduler = ThreadScheduler(name_prefix="tick")
    tasks = []
    lock = threading.Lock()

    def schedule_many():
        for _ in range(50):
            task = scheduler.schedule(60, lambda: None)
            with lock:
                tasks.append(task)

    workers = [threading.Thread(target=schedule_many) for _ in range(4)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    for task in tasks:
        task.cancel()

    assert len({task._name for task in tasks}) == 200
