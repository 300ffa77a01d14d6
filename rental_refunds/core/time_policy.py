# rental_refunds/core/time_policy.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


# 애리조나(Phoenix)는 서머타임을 쓰지 않으므로 고정 UTC-7 이면 항상 정확하다.
# 다른 지역으로 확장할 때는 policy yaml(utc_offset_hours)로 바꾼다.
NO_DST_UTC_OFFSET_HOURS: float = -7
NO_DST_TIMEZONE_LABEL: str = "MST"


def fixed_offset_tz(offset_hours: float, name: Optional[str] = None) -> timezone:
    delta = timedelta(hours=float(offset_hours))
    if name:
        return timezone(delta, name)
    return timezone(delta)


NO_DST_TZ = fixed_offset_tz(NO_DST_UTC_OFFSET_HOURS, NO_DST_TIMEZONE_LABEL)


# 테스트/진단에서 현재시각을 고정하기 위한 오버라이드 저장소
_TEST_NOW_UTC: Optional[datetime] = None


def set_now_utc_for_testing(dt: Optional[datetime]) -> None:
    """
    dt가 None이면 오버라이드 해제. dt가 naive면 UTC로 간주.
    """
    global _TEST_NOW_UTC
    if dt is None:
        _TEST_NOW_UTC = None
    else:
        _TEST_NOW_UTC = as_utc(dt)


def utcnow() -> datetime:
    """
    시스템 공용 UTC now 헬퍼.

    - 모든 계산에서 같은 함수를 쓰도록 해서 테스트 일관성을 확보한다.
    """
    if _TEST_NOW_UTC is not None:
        return _TEST_NOW_UTC
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """
    DB/API 에서 온 datetime 을 UTC aware 로 바꾼다.

    - naive datetime 은 MST 벽시계가 아니라 UTC 로 간주한다
      (DB 저장값이 UTC naive 이기 때문). 픽업 현지시각을 넘길 때는
      반드시 tz 를 붙여서 넘긴다 (예: 2025-03-01T10:00:00-07:00).
    - 이미 tz 가 있으면 UTC 로 변환
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local(dt: datetime, tz: Optional[timezone] = None) -> datetime:
    """dt를 고정 오프셋(기본 MST) 표현으로 바꾼다."""
    return as_utc(dt).astimezone(tz or NO_DST_TZ)


def hours_between(start: datetime, end: datetime, tz: Optional[timezone] = None) -> float:
    """
    start -> end 사이 시간(h). 둘 다 같은 고정 오프셋으로 옮긴 뒤 뺀다.
    음수가 나올 수 있음 (호출하는 쪽에서 clamp).
    """
    a = to_local(start, tz)
    b = to_local(end, tz)
    return (b - a).total_seconds() / 3600.0


__all__ = [
    "NO_DST_UTC_OFFSET_HOURS",
    "NO_DST_TIMEZONE_LABEL",
    "NO_DST_TZ",
    "fixed_offset_tz",
    "set_now_utc_for_testing",
    "utcnow",
    "as_utc",
    "to_local",
    "hours_between",
]
