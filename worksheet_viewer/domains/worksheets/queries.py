"""Построение запросов к хранилищу из параметров HTTP-запроса.

Параметры приходят строками (или отсутствуют) и разбираются мягко:
ошибка разбора никогда не проваливает запрос, а дает значение по
умолчанию. Фильтры строятся по сырым полям документа, до нормализации.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from sqlalchemy import ColumnElement, and_, or_

from worksheet_viewer.db.models import (
    Worksheet as WorksheetModel, SUBJECT_FIELD, CONTENT_FIELD, CREATED_AT_FIELD
)
from worksheet_viewer.domains.worksheets.normalization import format_timestamp

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
DEFAULT_SUBJECT_LIMIT = 20
DEFAULT_RECENT_DAYS = 7
RECENT_LIMIT = 50
# Предел знакового 64-битного целого: больше драйвер хранилища не примет
MAX_INTEGER = 2 ** 63 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class WorksheetQuery:
    """Фильтр, сортировка и окно выборки для хранилища"""

    conditions: List[ColumnElement] = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    skip: int = 0

    @property
    def order_by(self) -> List[ColumnElement]:
        return worksheet_order()


def parse_int(value: Any, default: int) -> int:
    """Целое из начала строки ("12abc" -> 12); иначе значение по умолчанию"""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    digits = match.group(1)
    try:
        return int(digits)
    except ValueError:
        # int() отказывается разбирать слишком длинные строки цифр
        return -MAX_INTEGER if digits.startswith("-") else MAX_INTEGER


def clamp(value: int, lower: int, upper: int) -> int:
    return min(max(value, lower), upper)


def compute_skip(page: int, limit: int) -> int:
    return clamp((page - 1) * limit, 0, MAX_INTEGER)


def worksheet_order() -> List[ColumnElement]:
    """Новые документы первыми; документы без даты в конце"""
    return [
        WorksheetModel.field(CREATED_AT_FIELD).desc().nulls_last(),
        WorksheetModel.uuid.desc(),
    ]


def contains(field_name: str, term: str) -> ColumnElement:
    """Регистронезависимое вхождение подстроки в строковое поле документа"""
    return and_(
        WorksheetModel.is_string(field_name),
        WorksheetModel.field(field_name).icontains(term, autoescape=True),
    )


def _parse_window(page: Any, limit: Any, default_limit: int):
    page_number = clamp(parse_int(page, DEFAULT_PAGE), -MAX_INTEGER, MAX_INTEGER)
    page_size = min(parse_int(limit, default_limit), MAX_INTEGER)
    if page_size < 1:
        page_size = default_limit
    return page_number, page_size, compute_skip(page_number, page_size)


def build_list_query(
    page: Any = None,
    limit: Any = None,
    search: Optional[str] = None
) -> WorksheetQuery:
    """Запрос списка рабочих листов с необязательным поиском"""
    page_number, page_size, skip = _parse_window(page, limit, DEFAULT_LIMIT)

    conditions = []
    if search:
        conditions.append(
            or_(contains(SUBJECT_FIELD, search), contains(CONTENT_FIELD, search))
        )

    return WorksheetQuery(conditions=conditions, page=page_number, limit=page_size, skip=skip)


def build_subject_query(subject: str, page: Any = None, limit: Any = None) -> WorksheetQuery:
    """Запрос рабочих листов по теме (вхождение в поле темы)"""
    page_number, page_size, skip = _parse_window(page, limit, DEFAULT_SUBJECT_LIMIT)
    return WorksheetQuery(
        conditions=[contains(SUBJECT_FIELD, subject or "")],
        page=page_number,
        limit=page_size,
        skip=skip,
    )


def recent_threshold(days: Any, now: Optional[datetime] = None) -> datetime:
    # 0 трактуется как "не задано"
    period = parse_int(days, DEFAULT_RECENT_DAYS) or DEFAULT_RECENT_DAYS
    now = now or datetime.now(timezone.utc)
    try:
        return now - timedelta(days=period)
    except OverflowError:
        edge = datetime.min if period > 0 else datetime.max
        return edge.replace(tzinfo=timezone.utc)


def build_recent_query(days: Any = None, now: Optional[datetime] = None) -> WorksheetQuery:
    """Запрос рабочих листов за последние N дней, не больше RECENT_LIMIT"""
    threshold = format_timestamp(recent_threshold(days, now))
    return WorksheetQuery(
        conditions=[WorksheetModel.field(CREATED_AT_FIELD) >= threshold],
        limit=RECENT_LIMIT,
    )
