"""Нормализация документов хранилища в ``WorksheetRecord``.

Документы пишутся внешним процессом генерации и не имеют схемы: одни
записи используют ``chatInput``/``text``, другие ``subject``/``htmlOutput``,
у части нет даты создания. Здесь каждый документ, каким бы он ни был,
превращается в корректную запись; исключения наружу не выходят.
"""
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from worksheet_viewer.domains.worksheets.entities import WorksheetRecord

UNKNOWN_SUBJECT = "Unknown Subject"
EMPTY_CONTENT = "<p>No content available</p>"

SUBJECT_SOURCES = ("chatInput", "subject")
CONTENT_SOURCES = ("text", "htmlOutput")


def first_non_empty(raw: Mapping[str, Any], keys: Iterable[str]) -> Optional[str]:
    """Первое непустое строковое значение из цепочки полей"""
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Разбор ISO-8601 даты; None, если разобрать не удалось"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        candidate = value.strip()
        if candidate.endswith(("Z", "z")):
            candidate = candidate[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_created_at(value: Any) -> Tuple[datetime, bool]:
    parsed = parse_timestamp(value)
    if parsed is None:
        return datetime.now(timezone.utc), True
    return parsed, False


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 в UTC с миллисекундами и суффиксом Z, как пишет генератор"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_document(raw: Any, document_id: Optional[Any] = None) -> WorksheetRecord:
    """Преобразование сырого документа в WorksheetRecord"""
    if not isinstance(raw, Mapping):
        raw = {}

    if document_id is None:
        document_id = raw.get("_id")

    user_email = raw.get("userEmail")
    if not isinstance(user_email, str):
        user_email = None

    raw_created_at = raw.get("combined_at")
    created_at, defaulted = resolve_created_at(raw_created_at)

    return WorksheetRecord(
        id="" if document_id is None else str(document_id),
        subject=first_non_empty(raw, SUBJECT_SOURCES) or UNKNOWN_SUBJECT,
        content=first_non_empty(raw, CONTENT_SOURCES) or EMPTY_CONTENT,
        created_at=created_at,
        user_email=user_email,
        raw_created_at=raw_created_at,
        created_at_defaulted=defaulted,
        source=MappingProxyType(dict(raw)),
    )
