# ===== Cancellation / Refund Schemas =====
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rental_refunds.core.cancellation_policy import (
    CancellationResult,
    CancellationTier,
    PenaltyDistribution,
)
from rental_refunds.core.money import round2
from rental_refunds.core.refund_breakdown import CancellationBreakdown

# 금액은 음수/NaN/Infinity 불가 (pydantic Decimal 기본값이 inf/nan 거부)
Money = Decimal


class RequestBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ---------------- Requests ----------------
class RefundQuoteIn(RequestBase):
    start_date: datetime
    total_amount: Money = Field(..., ge=0)
    number_of_days: int = Field(..., description="1 미만이면 1로 취급")
    now: Optional[datetime] = Field(None, description="테스트/시뮬레이션용 기준 시각 (기본: 서버 now)")


class ApplyPercentageIn(RequestBase):
    total_amount: Money = Field(..., ge=0)
    percentage: Decimal = Field(..., ge=0, le=100)


class DistributePenaltyIn(RequestBase):
    penalty_amount: Money = Field(..., ge=0)
    trip_cost: Money = Field(..., ge=0)
    credits_applied: Money = Field(Decimal(0), ge=0)
    bonus_applied: Money = Field(Decimal(0), ge=0)
    charge_amount: Money = Field(..., ge=0)


class BreakdownIn(RequestBase):
    start_date: datetime
    number_of_days: int
    total_amount: Money = Field(..., ge=0)

    credits_applied: Money = Field(Decimal(0), ge=0)
    bonus_applied: Money = Field(Decimal(0), ge=0)
    charge_amount: Optional[Money] = Field(None, ge=0)

    deposit_amount: Money = Field(Decimal(0), ge=0)
    deposit_from_wallet: Money = Field(Decimal(0), ge=0)
    deposit_from_card: Money = Field(Decimal(0), ge=0)

    now: Optional[datetime] = None


# ---------------- Responses ----------------
class CancellationResultOut(BaseModel):
    tier: CancellationTier
    penalty_amount: Decimal
    penalty_days: float
    refund_amount: Decimal
    refund_percentage: int
    deposit_refunded: bool
    label: str
    hours_until_pickup: float
    average_daily_cost: Decimal

    @classmethod
    def from_result(cls, r: CancellationResult) -> "CancellationResultOut":
        return cls(
            tier=r.tier,
            penalty_amount=round2(r.penalty_amount),
            penalty_days=r.penalty_days,
            refund_amount=round2(r.refund_amount),
            refund_percentage=r.refund_percentage,
            deposit_refunded=r.deposit_refunded,
            label=r.label,
            hours_until_pickup=round(r.hours_until_pickup, 4),
            average_daily_cost=round2(r.average_daily_cost),
        )


class AmountOut(BaseModel):
    amount: Decimal


class PenaltyDistributionOut(BaseModel):
    penalty_from_credits: Decimal
    penalty_from_bonus: Decimal
    penalty_from_card: Decimal
    credits_restored: Decimal
    bonus_restored: Decimal
    card_refund: Decimal

    @classmethod
    def from_distribution(cls, d: PenaltyDistribution) -> "PenaltyDistributionOut":
        return cls(
            penalty_from_credits=round2(d.penalty_from_credits),
            penalty_from_bonus=round2(d.penalty_from_bonus),
            penalty_from_card=round2(d.penalty_from_card),
            credits_restored=round2(d.credits_restored),
            bonus_restored=round2(d.bonus_restored),
            card_refund=round2(d.card_refund),
        )


class CancellationBreakdownOut(BaseModel):
    result: CancellationResultOut
    distribution: PenaltyDistributionOut
    deposit_wallet_restored: Decimal
    deposit_card_released: Decimal
    total_card_refund: Decimal
    total_back: Decimal
    has_multiple_sources: bool

    @classmethod
    def from_breakdown(cls, b: CancellationBreakdown) -> "CancellationBreakdownOut":
        return cls(
            result=CancellationResultOut.from_result(b.result),
            distribution=PenaltyDistributionOut.from_distribution(b.distribution),
            deposit_wallet_restored=b.deposit_wallet_restored,
            deposit_card_released=b.deposit_card_released,
            total_card_refund=b.total_card_refund,
            total_back=b.total_back,
            has_multiple_sources=b.has_multiple_sources,
        )
