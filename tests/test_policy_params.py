# tests/test_policy_params.py
from datetime import timedelta
from decimal import Decimal

import pytest

from rental_refunds.core.cancellation_policy import CancellationTier, compute_refund
from rental_refunds.policy.params import store
from rental_refunds.policy.params.errors import PolicyConfigValidationError, PolicyValidationError
from rental_refunds.policy.params.loader import POLICY_YAML_ENV, load_policy_yaml
from rental_refunds.policy.params.schema import CancellationPolicyParams, PolicyBundle
from rental_refunds.routers.cancellations import get_engine

from conftest import mst

NOW = mst(2025, 3, 1, 10)


def _write(tmp_path, text):
    p = tmp_path / "policy.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_bundled_defaults_match_arizona_policy(monkeypatch):
    monkeypatch.delenv(POLICY_YAML_ENV, raising=False)
    c = load_policy_yaml().cancellation
    assert c.free_cancel_hours == 24
    assert c.long_trip_min_days == 3
    assert c.utc_offset_hours == -7
    assert c.timezone_label == "MST"
    # 코드 기본값과 yaml 기본값이 같아야 한다
    assert c == CancellationPolicyParams()


def test_env_path_override(tmp_path, monkeypatch):
    p = _write(tmp_path, "cancellation:\n  free_cancel_hours: 48\n  some_old_key: 1\n")
    monkeypatch.setenv(POLICY_YAML_ENV, str(p))
    c = load_policy_yaml().cancellation
    assert c.free_cancel_hours == 48
    # 나머지는 기본값
    assert c.long_trip_min_days == 3


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_policy_yaml(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize("text", [
    "cancellation:\n  long_trip_min_days: 1\n",       # schema ge=2
    "cancellation:\n  free_cancel_hours: soon\n",     # 타입 오류
    "cancellation: [1, 2]\n",                          # 섹션이 mapping 아님
    "- just\n- a list\n",                              # 루트가 mapping 아님
])
def test_malformed_yaml_raises_config_error(tmp_path, text):
    with pytest.raises(PolicyConfigValidationError):
        load_policy_yaml(str(_write(tmp_path, text)))


@pytest.mark.parametrize("text", [
    "cancellation:\n  free_cancel_hours: 1000\n",
    "cancellation:\n  utc_offset_hours: -20\n",
    "cancellation:\n  timezone_label: '  '\n",
])
def test_guardrails_reject_out_of_range(tmp_path, text):
    with pytest.raises(PolicyValidationError):
        load_policy_yaml(str(_write(tmp_path, text)))


# 패널티 일수는 yaml 로 못 바꾼다 (구버전 키는 무시)
def test_penalty_days_keys_in_yaml_are_ignored(tmp_path, monkeypatch):
    p = _write(tmp_path, "cancellation:\n  late_long_penalty_days: 2\n  late_short_penalty_days: 3\n")
    monkeypatch.setenv(POLICY_YAML_ENV, str(p))
    r = get_engine().compute_refund(NOW + timedelta(hours=10), "300", 3, now=NOW)
    assert r.penalty_days == 1
    assert r.penalty_amount == Decimal("100.00")


# 엔진(모듈 함수)은 파일/환경변수를 읽지 않는다
def test_compute_refund_ignores_policy_yaml_env(tmp_path, monkeypatch):
    monkeypatch.setenv(POLICY_YAML_ENV, str(tmp_path / "missing.yaml"))
    r = compute_refund(NOW + timedelta(hours=10), "300", 3, now=NOW)
    assert r.tier == CancellationTier.LATE_LONG
    assert r.penalty_amount == Decimal("100.00")


def test_compute_refund_ignores_global_policy_store():
    store.set_policy(PolicyBundle(cancellation=CancellationPolicyParams(free_cancel_hours=48)))
    r = compute_refund(NOW + timedelta(hours=30), "300", 3, now=NOW)
    assert r.tier == CancellationTier.FREE


def test_set_policy_changes_injected_engine():
    start = NOW + timedelta(hours=30)
    assert get_engine().compute_refund(start, "300", 3, now=NOW).tier == CancellationTier.FREE

    store.set_policy(PolicyBundle(cancellation=CancellationPolicyParams(free_cancel_hours=48)))
    assert get_engine().compute_refund(start, "300", 3, now=NOW).tier == CancellationTier.LATE_LONG

    store.reset_policy()
    assert get_engine().compute_refund(start, "300", 3, now=NOW).tier == CancellationTier.FREE


def test_set_policy_runs_guardrails():
    with pytest.raises(PolicyValidationError):
        store.set_policy(PolicyBundle(cancellation=CancellationPolicyParams(utc_offset_hours=30)))
