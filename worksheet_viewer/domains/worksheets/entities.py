import math
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class WorksheetRecord:
    """Нормализованный рабочий лист (неизменяемое представление документа)"""

    id: str
    subject: str
    content: str
    created_at: datetime
    user_email: Optional[str] = None
    raw_created_at: Any = None
    created_at_defaulted: bool = False
    source: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    def to_document(self) -> Dict[str, Any]:
        """Документ в исходной форме хранилища для ответа API"""
        document = {key: value for key, value in self.source.items() if key != "_id"}
        return {"_id": self.id, **document}


@dataclass(frozen=True)
class PaginationEnvelope:
    """Страница результатов с метаданными пагинации"""

    items: List[WorksheetRecord]
    current_page: int
    per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return count_pages(self.total_items, self.per_page)


def count_pages(total_items: int, per_page: int) -> int:
    if total_items <= 0 or per_page <= 0:
        return 0
    return math.ceil(total_items / per_page)
