import threading
import time

from kitutil.clock import (
    clocktype,
    time_cached_nsec,
    time_cached_sec,
    time_cached_update,
    time_nsec,
    time_sec,
)


def _in_thread(func):
    result = []
    thread = threading.Thread(target=lambda: result.append(func()))
    thread.start()
    thread.join(10)
    return result[0]


def test_clocktype():
    assert clocktype() == "monotonic"


def test_nsec_never_goes_backwards():
    readings = [time_nsec() for _ in range(100)]
    assert readings == sorted(readings)


def test_sec_agrees_with_nsec():
    before = time_sec()
    nanoseconds = time_nsec()
    after = time_sec()
    assert before <= nanoseconds // 1_000_000_000 <= after


def test_cache_starts_empty_in_new_thread():
    assert _in_thread(lambda: (time_cached_sec(), time_cached_nsec())) == (0, 0)


def test_cache_update_is_consistent():
    time_cached_update()
    assert time_cached_sec() == time_cached_nsec() // 1_000_000_000


def test_cache_holds_until_updated():
    time_cached_update()
    first = time_cached_nsec()
    time.sleep(0.01)
    assert time_cached_nsec() == first
    time_cached_update()
    assert time_cached_nsec() > first


def test_cache_is_per_thread():
    time_cached_update()
    assert time_cached_nsec() > 0
    assert _in_thread(time_cached_nsec) == 0


def test_cached_value_lies_between_live_readings():
    before = time_nsec()
    time_cached_update()
    after = time_nsec()
    assert before <= time_cached_nsec() <= after