import threading
from datetime import timedelta

import pytest

from conftest import START
from isstrack.core.errors import RateLimitExceeded
from isstrack.services.rate_governor import RateGovernor


def test_admits_up_to_budget():
    governor = RateGovernor("path", 3, timedelta(seconds=60))
    for i in range(3):
        governor.admit(START + timedelta(seconds=i))

    with pytest.raises(RateLimitExceeded) as excinfo:
        governor.admit(START + timedelta(seconds=3))
    assert excinfo.value.route == "path"
    assert excinfo.value.code == "rate_limited"


def test_window_rolls():
    governor = RateGovernor("position", 2, timedelta(seconds=60))
    governor.admit(START)
    governor.admit(START + timedelta(seconds=30))

    with pytest.raises(RateLimitExceeded):
        governor.admit(START + timedelta(seconds=59))

    # The first request has left the window
    governor.admit(START + timedelta(seconds=60))
    assert governor.remaining(START + timedelta(seconds=60)) == 0
    assert governor.remaining(START + timedelta(seconds=120)) == 2


def test_rejections_do_not_consume_budget():
    governor = RateGovernor("position", 1, timedelta(seconds=60))
    governor.admit(START)
    for i in range(5):
        with pytest.raises(RateLimitExceeded):
            governor.admit(START + timedelta(seconds=i + 1))

    governor.admit(START + timedelta(seconds=60))


def test_concurrent_admits_respect_budget():
    governor = RateGovernor("position", 3, timedelta(seconds=60))
    barrier = threading.Barrier(16)
    admitted = []
    rejected = []

    def worker(i):
        barrier.wait()
        try:
            governor.admit(START + timedelta(milliseconds=i))
        except RateLimitExceeded:
            rejected.append(i)
        else:
            admitted.append(i)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(admitted) == 3
    assert len(rejected) == 13
    assert governor.remaining(START + timedelta(seconds=1)) == 0
