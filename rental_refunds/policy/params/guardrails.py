# rental_refunds/policy/params/guardrails.py
from __future__ import annotations

from rental_refunds.policy.params.errors import PolicyValidationError
from rental_refunds.policy.params.schema import PolicyBundle


def validate_policy(bundle: PolicyBundle) -> None:
    c = bundle.cancellation

    # --- time ---
    # 30일(720h) 넘는 무료취소 기준은 운영상 말이 안 되므로 막는다.
    if not (0 < c.free_cancel_hours <= 720):
        raise PolicyValidationError(f"free_cancel_hours must be 0~720, got={c.free_cancel_hours}")

    if not (-12 <= c.utc_offset_hours <= 14):
        raise PolicyValidationError(f"utc_offset_hours must be -12~14, got={c.utc_offset_hours}")

    if not c.timezone_label.strip():
        raise PolicyValidationError("timezone_label must not be empty")

    # --- days ---
    if c.long_trip_min_days < 2:
        raise PolicyValidationError(f"long_trip_min_days must be >= 2, got={c.long_trip_min_days}")
