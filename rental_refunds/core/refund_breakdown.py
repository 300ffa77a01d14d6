# rental_refunds/core/refund_breakdown.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from rental_refunds.core.cancellation_policy import (
    CANCELLATION_POLICY_ENGINE,
    CancellationPolicyEngine,
    CancellationResult,
    PenaltyDistribution,
)
from rental_refunds.core.errors import DepositSplitMismatchError
from rental_refunds.core.money import ZERO, Number, round2, to_decimal
from rental_refunds.core.validation import validate_amount, validate_payment_split

logger = logging.getLogger(__name__)


@dataclass
class BookingPaymentSnapshot:
    """
    취소 시점의 예약 결제 스냅샷 (DB 조회는 호출하는 쪽에서).

    total_amount = credits_applied + bonus_applied + charge_amount (여행 비용)
    보증금은 별도 hold: deposit_from_wallet + deposit_from_card
    """
    start_date: datetime
    number_of_days: int
    total_amount: Number

    credits_applied: Number = ZERO
    bonus_applied: Number = ZERO
    charge_amount: Optional[Number] = None  # None 이면 total - credits - bonus

    deposit_amount: Number = ZERO
    deposit_from_wallet: Number = ZERO
    deposit_from_card: Number = ZERO


@dataclass(frozen=True)
class CancellationBreakdown:
    result: CancellationResult
    distribution: PenaltyDistribution

    deposit_wallet_restored: Decimal
    deposit_card_released: Decimal

    total_card_refund: Decimal
    total_back: Decimal

    has_multiple_sources: bool


def build_cancellation_breakdown(
    payment: BookingPaymentSnapshot,
    *,
    now: Optional[datetime] = None,
    engine: Optional[CancellationPolicyEngine] = None,
) -> CancellationBreakdown:
    """
    환불 결과 + 결제수단별 패널티 분배 + 보증금 해제를 한 번에 계산.

    - 결제 스냅샷 검증은 여기서 (엔진은 검증하지 않음)
    - 보증금은 티어와 무관하게 항상 전액 해제
      wallet/card 구분이 없으면 deposit_amount 전체를 카드 hold 로 본다
      구분이 있으면 wallet + card == deposit_amount (센트 단위) 여야 한다
    """
    eng = engine or CANCELLATION_POLICY_ENGINE

    total = validate_amount("total_amount", payment.total_amount)
    credits = validate_amount("credits_applied", payment.credits_applied)
    bonus = validate_amount("bonus_applied", payment.bonus_applied)
    if payment.charge_amount is None:
        charge = round2(total - credits - bonus)
    else:
        charge = to_decimal(payment.charge_amount)
    validate_payment_split(total, credits, bonus, charge)

    deposit = validate_amount("deposit_amount", payment.deposit_amount)
    dep_wallet = validate_amount("deposit_from_wallet", payment.deposit_from_wallet)
    dep_card = validate_amount("deposit_from_card", payment.deposit_from_card)
    if dep_wallet == 0 and dep_card == 0:
        dep_card = deposit
    elif round2(dep_wallet + dep_card) != round2(deposit):
        raise DepositSplitMismatchError(deposit, dep_wallet + dep_card)

    result = eng.compute_refund(payment.start_date, total, payment.number_of_days, now=now)
    dist = eng.distribute_penalty(result.penalty_amount, total, credits, bonus, charge)

    deposit_wallet_restored = round2(dep_wallet)
    deposit_card_released = round2(dep_card)

    total_card_refund = round2(dist.card_refund + deposit_card_released)
    total_back = round2(
        dist.credits_restored + dist.bonus_restored + deposit_wallet_restored + total_card_refund
    )

    logger.debug(
        "[cancel] breakdown tier=%s penalty=%s total_back=%s card=%s",
        result.tier.value, result.penalty_amount, total_back, total_card_refund,
    )

    return CancellationBreakdown(
        result=result,
        distribution=dist,
        deposit_wallet_restored=deposit_wallet_restored,
        deposit_card_released=deposit_card_released,
        total_card_refund=total_card_refund,
        total_back=total_back,
        has_multiple_sources=(credits > 0 or bonus > 0 or dep_wallet > 0),
    )
