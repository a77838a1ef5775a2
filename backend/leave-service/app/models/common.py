from datetime import date, datetime, time
from typing import Optional

from bson import ObjectId


def utc_now() -> datetime:
    """
    MongoDB(BSON) datetime은 밀리초 정밀도이므로 저장 전 값과 조회 값이
    같도록 미리 밀리초 단위로 잘라 둔다.
    """
    now = datetime.utcnow()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def parse_object_id(value: str) -> Optional[ObjectId]:
    """
    ObjectId로 해석할 수 없는 id는 존재하지 않는 문서로 취급한다 (None).
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def date_to_datetime(value: date) -> datetime:
    # BSON에는 date 타입이 없어서 자정 datetime으로 저장
    return datetime.combine(value, time.min)


def datetime_to_date(value: datetime | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
