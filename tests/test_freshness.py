from datetime import timedelta

from conftest import START
from isstrack.services.freshness import CacheState, FreshnessPolicy


def test_empty_without_timestamp():
    policy = FreshnessPolicy(timedelta(seconds=30))
    assert policy.state(None, START) is CacheState.EMPTY
    assert policy.needs_refresh(None, START)
    assert policy.fresh_until(None) is None


def test_strict_policy_is_fresh_at_exact_max_age():
    policy = FreshnessPolicy(timedelta(seconds=3600), inclusive=False)
    assert policy.state(START, START + timedelta(seconds=3600)) is CacheState.FRESH
    assert policy.state(START, START + timedelta(seconds=3601)) is CacheState.STALE


def test_inclusive_policy_is_stale_at_exact_max_age():
    policy = FreshnessPolicy(timedelta(seconds=30), inclusive=True)
    assert policy.state(START, START + timedelta(seconds=29)) is CacheState.FRESH
    assert policy.state(START, START + timedelta(seconds=30)) is CacheState.STALE


def test_fresh_until():
    policy = FreshnessPolicy(timedelta(seconds=30))
    assert policy.fresh_until(START) == START + timedelta(seconds=30)
