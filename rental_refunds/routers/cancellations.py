# rental_refunds/routers/cancellations.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..core.cancellation_policy import CancellationPolicyEngine
from ..core.errors import CancellationInputError
from ..core.refund_breakdown import BookingPaymentSnapshot, build_cancellation_breakdown
from ..core.validation import validate_payment_split
from ..policy.params.schema import CancellationPolicyParams
from ..policy.params.store import get_policy
from ..schemas import (
    AmountOut,
    ApplyPercentageIn,
    BreakdownIn,
    CancellationBreakdownOut,
    CancellationResultOut,
    DistributePenaltyIn,
    PenaltyDistributionOut,
    RefundQuoteIn,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/cancellations",
    tags=["cancellations"],
)


def _xlate(e: Exception):
    """간단 에러 변환 (입력 오류 -> 400, 나머지 -> 500)"""
    if isinstance(e, HTTPException):
        raise e
    if isinstance(e, CancellationInputError):
        logger.info("[cancel] rejected input: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    logging.exception("cancellations router error", exc_info=e)
    raise HTTPException(status_code=500, detail="Internal error")


def get_engine() -> CancellationPolicyEngine:
    """yaml 로 읽은 현재 정책을 주입한 엔진 (엔진 자체는 파일/env 를 모름)"""
    return CancellationPolicyEngine(get_policy())


@router.post("/quote",response_model=CancellationResultOut, summary="취소 환불 견적")
def api_quote_refund(body: RefundQuoteIn, engine: CancellationPolicyEngine = Depends(get_engine)):
    """
    예시:

    POST /cancellations/quote
    {"start_date": "2025-03-01T10:00:00-07:00", "total_amount": "300.00", "number_of_days": 3}
    """
    try:
        r = engine.compute_refund(
            body.start_date,
            body.total_amount,
            body.number_of_days,
            now=body.now,
        )
        return CancellationResultOut.from_result(r)
    except Exception as e:
        _xlate(e)


@router.post("/apply-percentage", response_model=AmountOut, summary="정률 환불 (구버전 호환)")
def api_apply_percentage(body: ApplyPercentageIn, engine: CancellationPolicyEngine = Depends(get_engine)):
    try:
        amount = engine.apply_percentage(body.total_amount, body.percentage)
        return AmountOut(amount=amount)
    except Exception as e:
        _xlate(e)


@router.post("/distribute-penalty", response_model=PenaltyDistributionOut, summary="결제수단별 패널티 분배")
def api_distribute_penalty(body: DistributePenaltyIn, engine: CancellationPolicyEngine = Depends(get_engine)):
    try:
        validate_payment_split(
            body.trip_cost,
            body.credits_applied,
            body.bonus_applied,
            body.charge_amount,
        )
        d = engine.distribute_penalty(
            body.penalty_amount,
            body.trip_cost,
            body.credits_applied,
            body.bonus_applied,
            body.charge_amount,
        )
        return PenaltyDistributionOut.from_distribution(d)
    except Exception as e:
        _xlate(e)


@router.post("/breakdown", response_model=CancellationBreakdownOut, summary="취소 시 돌려받는 금액 상세")
def api_cancellation_breakdown(body: BreakdownIn, engine: CancellationPolicyEngine = Depends(get_engine)):
    try:
        snapshot = BookingPaymentSnapshot(
            start_date=body.start_date,
            number_of_days=body.number_of_days,
            total_amount=body.total_amount,
            credits_applied=body.credits_applied,
            bonus_applied=body.bonus_applied,
            charge_amount=body.charge_amount,
            deposit_amount=body.deposit_amount,
            deposit_from_wallet=body.deposit_from_wallet,
            deposit_from_card=body.deposit_from_card,
        )
        b = build_cancellation_breakdown(snapshot, now=body.now, engine=engine)
        return CancellationBreakdownOut.from_breakdown(b)
    except Exception as e:
        _xlate(e)


@router.get("/policy", response_model=CancellationPolicyParams, summary="현재 취소 정책")
def api_get_policy():
    return get_policy()
