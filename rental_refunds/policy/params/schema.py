from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rental_refunds.core.time_policy import NO_DST_TIMEZONE_LABEL, NO_DST_UTC_OFFSET_HOURS


class PolicyBase(BaseModel):
    # ✅ 구버전 yaml에 알 수 없는 키가 남아 있어도 무시(=파싱 성공)
    model_config = ConfigDict(extra="ignore", frozen=True)


class CancellationPolicyParams(PolicyBase):
    """
    취소/환불 정책 SSOT.

    - free_cancel_hours  : 픽업까지 이 시간 이상 남으면 무료 취소 (경계 포함)
    - long_trip_min_days : 이 일수 이상이면 LATE_LONG (기본 3 => safe_days > 2)
    - utc_offset_hours   : 고정 오프셋 (애리조나 = -7, 서머타임 없음)

    패널티 일수(1일 / 0.5일)는 엔진 상수라서 여기서 바꿀 수 없다.
    """
    free_cancel_hours: float = Field(default=24, gt=0)
    long_trip_min_days: int = Field(default=3, ge=2)

    utc_offset_hours: float = NO_DST_UTC_OFFSET_HOURS
    timezone_label: str = NO_DST_TIMEZONE_LABEL


class PolicyBundle(PolicyBase):
    cancellation: CancellationPolicyParams = Field(default_factory=CancellationPolicyParams)
