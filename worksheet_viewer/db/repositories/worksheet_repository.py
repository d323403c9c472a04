from typing import Any, List, Mapping, Optional, TYPE_CHECKING
import uuid

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from worksheet_viewer.db.models import Worksheet as WorksheetModel

if TYPE_CHECKING:
    from worksheet_viewer.domains.worksheets.entities import WorksheetRecord
    from worksheet_viewer.domains.worksheets.queries import WorksheetQuery


class WorksheetRepository:
    """Репозиторий для работы с коллекцией рабочих листов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Mapping[str, Any]) -> "WorksheetRecord":
        """Сохранение сырого документа (используется процессом загрузки)"""
        db_worksheet = WorksheetModel(uuid=uuid.uuid4(), document=dict(document))
        self.session.add(db_worksheet)
        await self.session.commit()
        return self._to_domain(db_worksheet)

    async def find(self, query: "WorksheetQuery") -> List["WorksheetRecord"]:
        """Отсортированная страница документов по фильтру"""
        result = await self.session.execute(
            select(WorksheetModel)
            .where(*query.conditions)
            .order_by(*query.order_by)
            .offset(query.skip)
            .limit(query.limit)
        )
        return [self._to_domain(row) for row in result.scalars().all()]

    async def count(self, query: "WorksheetQuery") -> int:
        """Подсчет документов по фильтру без учета окна выборки"""
        result = await self.session.execute(
            select(func.count(WorksheetModel.uuid)).where(*query.conditions)
        )
        return result.scalar() or 0

    async def get_by_uuid(self, worksheet_uuid: uuid.UUID) -> Optional["WorksheetRecord"]:
        """Получение документа по UUID"""
        result = await self.session.execute(
            select(WorksheetModel).where(WorksheetModel.uuid == worksheet_uuid)
        )
        db_worksheet = result.scalar_one_or_none()
        return self._to_domain(db_worksheet) if db_worksheet else None

    async def distinct(self, field_name: str) -> List[Any]:
        """Различные строковые значения поля документа по всей коллекции"""
        result = await self.session.execute(
            select(WorksheetModel.field(field_name))
            .where(WorksheetModel.is_string(field_name))
            .distinct()
        )
        return list(result.scalars().all())

    async def delete(self, worksheet_uuid: uuid.UUID) -> bool:
        """Удаление документа; False, если удалять было нечего"""
        result = await self.session.execute(
            delete(WorksheetModel).where(WorksheetModel.uuid == worksheet_uuid)
        )
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_worksheet: WorksheetModel) -> "WorksheetRecord":
        """Преобразование модели БД в доменную запись"""
        from worksheet_viewer.domains.worksheets.normalization import normalize_document

        return normalize_document(db_worksheet.document, document_id=db_worksheet.uuid)
