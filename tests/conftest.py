# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from rental_refunds.core import time_policy
from rental_refunds.policy.params import store

MST = timezone(timedelta(hours=-7))


def mst(y, M, d, h, m=0, s=0):
    return datetime(y, M, d, h, m, s, tzinfo=MST)


@pytest.fixture(autouse=True)
def _reset_policy_and_clock():
    # 테스트 간 전역 정책/now 오버라이드가 새지 않게
    store.reset_policy()
    time_policy.set_now_utc_for_testing(None)
    yield
    store.reset_policy()
    time_policy.set_now_utc_for_testing(None)


@pytest.fixture
def now_mst():
    return mst(2025, 3, 1, 10, 0)
