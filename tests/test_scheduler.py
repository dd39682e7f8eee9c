import threading
import time

import pytest

from dvrouter.scheduler import PeriodicTask


def wait_for(cond, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if cond():
            return True
        time.sleep(0.005)
    return cond()


def test_fires_repeatedly_until_cancelled():
    calls = []
    task = PeriodicTask(lambda: calls.append(time.monotonic()), 20)
    task.start()
    assert wait_for(lambda: len(calls) >= 3)
    task.cancel()
    n = len(calls)
    time.sleep(0.1)
    assert len(calls) == n
    assert not task.running


def test_first_tick_waits_one_interval():
    calls = []
    task = PeriodicTask(lambda: calls.append(1), 300)
    task.start()
    time.sleep(0.05)
    task.cancel()
    assert calls == []


def test_cancel_waits_for_tick_in_progress():
    entered = threading.Event()
    finished = []

    def slow():
        entered.set()
        time.sleep(0.15)
        finished.append(True)

    task = PeriodicTask(slow, 10)
    task.start()
    assert entered.wait(2.0)
    task.cancel()
    assert finished == [True]


def test_error_stops_ticking_and_is_reported():
    errors = []
    calls = []

    def boom():
        calls.append(1)
        raise RuntimeError("send failed")

    task = PeriodicTask(boom, 10, on_error=errors.append)
    task.start()
    assert wait_for(lambda: errors)
    time.sleep(0.05)
    assert len(calls) == 1
    assert isinstance(errors[0], RuntimeError)
    assert not task.running


def test_cancel_before_start_is_harmless():
    task = PeriodicTask(lambda: None, 10)
    task.cancel()
    assert not task.running


def test_rejects_bad_interval_and_double_start():
    with pytest.raises(ValueError):
        PeriodicTask(lambda: None, 0)
    task = PeriodicTask(lambda: None, 1000)
    task.start()
    with pytest.raises(RuntimeError):
        task.start()
    task.cancel()
