# rental_refunds/core/cancellation_policy.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from rental_refunds.core.money import (
    Number,
    ZERO,
    clamp_non_negative,
    format_usd,
    round2,
    round_int,
    to_decimal,
)
from rental_refunds.core.time_policy import fixed_offset_tz, hours_between, utcnow
from rental_refunds.policy.params.schema import CancellationPolicyParams

logger = logging.getLogger(__name__)

# 패널티 일수는 정책 yaml 로 바꿀 수 없는 고정값 (0 / 0.5 / 1)
LATE_LONG_PENALTY_DAYS: float = 1.0
LATE_SHORT_PENALTY_DAYS: float = 0.5


class CancellationTier(str, Enum):
    FREE = "FREE"              # 픽업 24시간 이상 전: 전액 환불
    LATE_LONG = "LATE_LONG"    # 24시간 이내 + 3일 이상 여행: 1일치 패널티
    LATE_SHORT = "LATE_SHORT"  # 24시간 이내 + 1~2일 여행: 반나절(0.5일) 패널티


@dataclass(frozen=True)
class CancellationResult:
    tier: CancellationTier
    penalty_amount: Decimal
    penalty_days: float
    refund_amount: Decimal
    refund_percentage: int
    label: str
    hours_until_pickup: float
    average_daily_cost: Decimal

    # 보증금(deposit)은 별도 hold 이므로 티어와 무관하게 항상 해제
    deposit_refunded: bool = True


@dataclass(frozen=True)
class PenaltyDistribution:
    penalty_from_credits: Decimal
    penalty_from_bonus: Decimal
    penalty_from_card: Decimal

    credits_restored: Decimal
    bonus_restored: Decimal
    card_refund: Decimal

    @property
    def penalty_total(self) -> Decimal:
        return self.penalty_from_credits + self.penalty_from_bonus + self.penalty_from_card


class CancellationPolicyEngine:
    """
    렌탈 예약 취소 시 환불/패널티 계산기.

    - 상태 없음(stateless). 같은 입력이면 항상 같은 결과.
    - 입력 검증(음수 금액, 결제수단 합계 불일치 등)은 호출하는 쪽 책임.
      엔진은 clamp/guard 로 0-division, 음수 패널티만 흡수한다.

    policy 를 안 넘기면 코드 기본값(CancellationPolicyParams())을 쓴다.
    파일/환경변수는 읽지 않는다. yaml 정책은 앱 레이어(main/router)에서 주입.
    """

    def __init__(self, policy: Optional[CancellationPolicyParams] = None) -> None:
        self._policy = policy if policy is not None else CancellationPolicyParams()

    @property
    def policy(self) -> CancellationPolicyParams:
        return self._policy

    def classify(self, hours_until_pickup: float, safe_days: int) -> CancellationTier:
        p = self.policy
        if hours_until_pickup >= p.free_cancel_hours:
            return CancellationTier.FREE
        if safe_days >= p.long_trip_min_days:
            return CancellationTier.LATE_LONG
        return CancellationTier.LATE_SHORT

    def compute_refund(
        self,
        start_date: datetime,
        total_amount: Number,
        number_of_days: int,
        *,
        now: Optional[datetime] = None,
    ) -> CancellationResult:
        p = self.policy
        tz = fixed_offset_tz(p.utc_offset_hours, p.timezone_label)

        if now is None:
            now = utcnow()

        total = to_decimal(total_amount)
        if total < 0:
            # TODO: confirm with product whether negative totals should be rejected here
            logger.warning("[cancel] negative total_amount=%s (caller did not validate)", total)

        hours = max(0.0, hours_between(now, start_date, tz))
        safe_days = max(1, int(number_of_days or 0))
        average_daily_cost = total / safe_days

        tier = self.classify(hours, safe_days)

        if tier == CancellationTier.FREE:
            penalty = ZERO
            penalty_days = 0.0
            refund = round2(total)
            refund_percentage = 100 if total > 0 else 0
        else:
            if tier == CancellationTier.LATE_LONG:
                penalty_days = LATE_LONG_PENALTY_DAYS
            else:
                penalty_days = LATE_SHORT_PENALTY_DAYS

            # ✅ 패널티에서 한 번, 환불액에서 한 번 반올림 (마지막에 한 번만 하면 1센트 어긋남)
            penalty = round2(average_daily_cost * to_decimal(penalty_days))
            refund = clamp_non_negative(round2(total - penalty))
            refund_percentage = round_int(refund / total * 100) if total > 0 else 0

        label = self._label(tier, penalty, penalty_days, refund)

        logger.debug(
            "[cancel] tier=%s hours=%.2f days=%s total=%s penalty=%s refund=%s",
            tier.value, hours, safe_days, total, penalty, refund,
        )

        return CancellationResult(
            tier=tier,
            penalty_amount=penalty,
            penalty_days=penalty_days,
            refund_amount=refund,
            refund_percentage=refund_percentage,
            label=label,
            hours_until_pickup=hours,
            average_daily_cost=average_daily_cost,
        )

    def apply_percentage(self, total_amount: Number, percentage: Number) -> Decimal:
        """예전 호출부 호환용: total * percentage / 100 (센트 반올림)."""
        return round2(to_decimal(total_amount) * to_decimal(percentage) / 100)

    def distribute_penalty(
        self,
        penalty_amount: Number,
        trip_cost: Number,
        credits_applied: Number,
        bonus_applied: Number,
        charge_amount: Number,
    ) -> PenaltyDistribution:
        """
        패널티를 결제수단(크레딧 / 보너스 / 카드) 비율대로 나눈다.

        - credits + bonus + charge == trip_cost 는 호출하는 쪽이 보장
        - 크레딧/보너스는 각각 반올림, 카드는 나머지를 전부 흡수
          => 세 값의 합이 항상 penalty_amount 와 센트 단위로 일치
        """
        penalty = to_decimal(penalty_amount)
        cost = to_decimal(trip_cost)
        credits = to_decimal(credits_applied)
        bonus = to_decimal(bonus_applied)
        charge = to_decimal(charge_amount)

        if penalty <= 0 or cost <= 0:
            return PenaltyDistribution(
                penalty_from_credits=ZERO,
                penalty_from_bonus=ZERO,
                penalty_from_card=ZERO,
                credits_restored=credits,
                bonus_restored=bonus,
                card_refund=charge,
            )

        credit_ratio = credits / cost
        bonus_ratio = bonus / cost

        from_credits = round2(penalty * credit_ratio)
        from_bonus = round2(penalty * bonus_ratio)
        from_card = round2(penalty - from_credits - from_bonus)

        return PenaltyDistribution(
            penalty_from_credits=from_credits,
            penalty_from_bonus=from_bonus,
            penalty_from_card=from_card,
            credits_restored=round2(credits - from_credits),
            bonus_restored=round2(bonus - from_bonus),
            card_refund=round2(charge - from_card),
        )

    def _label(
        self,
        tier: CancellationTier,
        penalty: Decimal,
        penalty_days: float,
        refund: Decimal,
    ) -> str:
        if tier == CancellationTier.FREE:
            return f"Free cancellation: full refund of {format_usd(refund)}"

        short_max_days = self.policy.long_trip_min_days - 1
        if tier == CancellationTier.LATE_LONG:
            trip = f"trip over {short_max_days} days"
        else:
            trip = f"trip of {short_max_days} days or less"
        return (
            f"Late cancellation ({trip}): {penalty_days:g}-day penalty of "
            f"{format_usd(penalty)}, refund {format_usd(refund)}"
        )


CANCELLATION_POLICY_ENGINE = CancellationPolicyEngine()


def compute_refund(
    start_date: datetime,
    total_amount: Number,
    number_of_days: int,
    *,
    now: Optional[datetime] = None,
) -> CancellationResult:
    return CANCELLATION_POLICY_ENGINE.compute_refund(
        start_date, total_amount, number_of_days, now=now
    )


def apply_percentage(total_amount: Number, percentage: Number) -> Decimal:
    return CANCELLATION_POLICY_ENGINE.apply_percentage(total_amount, percentage)


def distribute_penalty(
    penalty_amount: Number,
    trip_cost: Number,
    credits_applied: Number,
    bonus_applied: Number,
    charge_amount: Number,
) -> PenaltyDistribution:
    return CANCELLATION_POLICY_ENGINE.distribute_penalty(
        penalty_amount, trip_cost, credits_applied, bonus_applied, charge_amount
    )
