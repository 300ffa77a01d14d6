# 읽기 API (get_policy, set_policy)


from __future__ import annotations

from typing import Optional

from .guardrails import validate_policy
from .loader import load_policy_yaml
from .schema import CancellationPolicyParams, PolicyBundle

_bundle: Optional[PolicyBundle] = None


def get_bundle() -> PolicyBundle:
    global _bundle
    if _bundle is None:
        _bundle = load_policy_yaml()
    return _bundle


def get_policy() -> CancellationPolicyParams:
    return get_bundle().cancellation


def set_policy(bundle: PolicyBundle) -> None:
    global _bundle
    validate_policy(bundle)
    _bundle = bundle


def reset_policy() -> None:
    """다음 get_policy() 때 yaml 을 다시 읽게 한다."""
    global _bundle
    _bundle = None
