# rental_refunds/core/money.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(v: Any) -> Decimal:
    """
    금액 입력을 Decimal로 통일.

    - float은 str()을 거쳐서 변환 (0.1 -> Decimal("0.1"), 이진 오차 방지)
    - None/빈 문자열은 0
    """
    if v is None or v == "":
        return Decimal(0)
    if isinstance(v, Decimal):
        return v
    if isinstance(v, float):
        return Decimal(repr(v))
    try:
        return Decimal(str(v))
    except InvalidOperation as e:
        raise ValueError(f"not a decimal amount: {v!r}") from e


def round2(v: Number) -> Decimal:
    """소수 둘째 자리(센트) 반올림. .5는 올림(HALF_UP)."""
    return to_decimal(v).quantize(CENT, rounding=ROUND_HALF_UP)


def round_int(v: Number) -> int:
    """정수 반올림 (퍼센트 계산용)."""
    return int(to_decimal(v).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def clamp_non_negative(v: Decimal) -> Decimal:
    return v if v > 0 else ZERO


def format_usd(v: Number) -> str:
    """label용 $1,234.50 포맷."""
    return f"${round2(v):,.2f}"
