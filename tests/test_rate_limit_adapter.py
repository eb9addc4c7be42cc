"""Unit tests for the in-memory request counter adapter."""

import threading
from unittest.mock import Mock

import pytest

from user_admin.adapters.rate_limit.in_memory import DAY_SECONDS, InMemoryRequestCounter


def test_starts_at_zero() -> None:
    counter = InMemoryRequestCounter(clock=Mock(return_value=1000.0))

    assert counter.get_count() == 0


def test_increment_adds_one() -> None:
    counter = InMemoryRequestCounter(clock=Mock(return_value=1000.0))

    counter.increment()
    counter.increment()

    assert counter.get_count() == 2


def test_try_acquire_counts_until_limit() -> None:
    counter = InMemoryRequestCounter(clock=Mock(return_value=1000.0))

    admitted = [counter.try_acquire(3) for _ in range(5)]

    assert admitted == [True, True, True, False, False]
    assert counter.get_count() == 3


def test_try_acquire_admits_again_in_next_window() -> None:
    clock = Mock(return_value=1000.0)
    counter = InMemoryRequestCounter(reset_interval_seconds=10, clock=clock)
    assert counter.try_acquire(1) is True
    assert counter.try_acquire(1) is False

    clock.return_value = 1010.0

    assert counter.try_acquire(1) is True
    assert counter.get_count() == 1


def test_resets_after_window_measured_from_start() -> None:
    clock = Mock(return_value=1000.0)
    counter = InMemoryRequestCounter(reset_interval_seconds=DAY_SECONDS, clock=clock)
    for _ in range(5):
        counter.increment()

    clock.return_value = 1000.0 + DAY_SECONDS - 1
    assert counter.get_count() == 5

    clock.return_value = 1000.0 + DAY_SECONDS
    assert counter.get_count() == 0
    assert counter.resets == 1


def test_resets_once_per_window_even_with_many_reads() -> None:
    clock = Mock(return_value=0.0)
    counter = InMemoryRequestCounter(reset_interval_seconds=10, clock=clock)
    counter.increment()

    clock.return_value = 12.0
    assert counter.get_count() == 0
    counter.increment()
    assert counter.rollover() is False
    assert counter.get_count() == 1
    assert counter.resets == 1


def test_skipped_windows_count_as_one_reset_aligned_to_start() -> None:
    clock = Mock(return_value=100.0)
    counter = InMemoryRequestCounter(reset_interval_seconds=10, clock=clock)
    counter.increment()

    clock.return_value = 135.0
    assert counter.rollover() is True
    assert counter.resets == 1
    # Window now runs 130..140
    assert counter.seconds_until_reset() == pytest.approx(5.0)
    assert counter.reset_at() == 140


def test_seconds_until_reset_counts_down() -> None:
    clock = Mock(return_value=1000.0)
    counter = InMemoryRequestCounter(reset_interval_seconds=60, clock=clock)

    assert counter.seconds_until_reset() == pytest.approx(60.0)
    clock.return_value = 1045.0
    assert counter.seconds_until_reset() == pytest.approx(15.0)


def test_concurrent_increments_are_not_lost() -> None:
    counter = InMemoryRequestCounter()
    threads = [
        threading.Thread(target=lambda: [counter.increment() for _ in range(500)])
        for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counter.get_count() == 4000


def test_invalid_interval() -> None:
    with pytest.raises(ValueError):
        InMemoryRequestCounter(reset_interval_seconds=0)


def test_concurrent_try_acquire_admits_exactly_limit() -> None:
    counter = InMemoryRequestCounter()
    admitted: list[bool] = []
    admitted_lock = threading.Lock()

    def worker() -> None:
        results = [counter.try_acquire(50) for _ in range(25)]
        with admitted_lock:
            admitted.extend(results)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert admitted.count(True) == 50
    assert counter.get_count() == 50
