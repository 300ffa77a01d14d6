# rental_refunds/policy/params/loader.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rental_refunds.policy.params.errors import PolicyConfigValidationError
from rental_refunds.policy.params.guardrails import validate_policy
from rental_refunds.policy.params.schema import CancellationPolicyParams, PolicyBundle

logger = logging.getLogger(__name__)

POLICY_YAML_ENV = "CANCELLATION_POLICY_YAML_PATH"


def default_policy_path() -> Path:
    return Path(__file__).resolve().parent / "defaults.yaml"


def _section(raw: Any, key: str) -> dict:
    if not isinstance(raw, dict):
        raise PolicyConfigValidationError(f"policy yaml root must be a mapping, got={type(raw).__name__}")
    sec = raw.get(key) or {}
    if not isinstance(sec, dict):
        raise PolicyConfigValidationError(f"policy section '{key}' must be a mapping")
    return sec


def load_policy_yaml(path: str | None = None) -> PolicyBundle:
    """
    Loads the cancellation policy bundle from YAML.
    - default: rental_refunds/policy/params/defaults.yaml
    - override path by env CANCELLATION_POLICY_YAML_PATH or param
    """
    if path is None:
        path = os.environ.get(POLICY_YAML_ENV)

    p = Path(path) if path else default_policy_path()
    if not p.exists():
        raise FileNotFoundError(f"Policy YAML not found: {p}")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    cancel_raw = _section(raw, "cancellation")

    try:
        bundle = PolicyBundle(cancellation=CancellationPolicyParams(**cancel_raw))
    except ValidationError as e:
        raise PolicyConfigValidationError(f"invalid cancellation policy in {p}: {e}") from e

    validate_policy(bundle)
    logger.info("[policy] loaded cancellation policy from %s", p)
    return bundle
