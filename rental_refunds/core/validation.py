# rental_refunds/core/validation.py
from __future__ import annotations

from decimal import Decimal

from rental_refunds.core.errors import (
    NegativeAmountError,
    NonFiniteAmountError,
    PaymentSplitMismatchError,
)
from rental_refunds.core.money import Number, round2, to_decimal


def validate_amount(field: str, value: Number) -> Decimal:
    """
    호출자 쪽 금액 검증.
    - NaN/Infinity 불가
    - 음수 불가
    """
    d = to_decimal(value)
    if not d.is_finite():
        raise NonFiniteAmountError(field, value)
    if d < 0:
        raise NegativeAmountError(field, value)
    return d


def validate_payment_split(
    trip_cost: Number,
    credits_applied: Number,
    bonus_applied: Number,
    charge_amount: Number,
) -> None:
    """
    credits + bonus + charge == trip_cost (센트 단위) 인지 확인.
    엔진의 distribute_penalty 는 이 전제를 믿고 비율을 계산한다.
    """
    cost = validate_amount("trip_cost", trip_cost)
    credits = validate_amount("credits_applied", credits_applied)
    bonus = validate_amount("bonus_applied", bonus_applied)
    charge = validate_amount("charge_amount", charge_amount)

    sources = credits + bonus + charge
    if round2(sources) != round2(cost):
        raise PaymentSplitMismatchError(cost, sources)
