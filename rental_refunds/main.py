# rental_refunds/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rental_refunds.policy.params.store import get_policy
from rental_refunds.routers import cancellations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 기동 시 정책 yaml 을 한 번 읽어 잘못된 설정이면 바로 실패하게 한다
    p = get_policy()
    logger.info(
        "[startup] cancellation policy: free>=%sh, long trip>=%s days, UTC%+g (%s)",
        p.free_cancel_hours, p.long_trip_min_days, p.utc_offset_hours, p.timezone_label,
    )
    yield


app = FastAPI(title="Rental Refunds API", version="1.0.0", lifespan=lifespan)

app.include_router(cancellations.router)


@app.get("/health")
def health():
    return {"ok": True}
