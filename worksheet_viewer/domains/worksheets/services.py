import logging
from datetime import datetime
from typing import Any, List, Optional
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from worksheet_viewer.core.errors import InvalidIdentifier, NotFound, StoreUnavailable
from worksheet_viewer.db.models import SUBJECT_FIELD
from worksheet_viewer.db.repositories.worksheet_repository import WorksheetRepository
from worksheet_viewer.domains.worksheets.entities import PaginationEnvelope, WorksheetRecord
from worksheet_viewer.domains.worksheets.queries import (
    build_list_query, build_subject_query, build_recent_query
)

logger = logging.getLogger(__name__)


def parse_identifier(worksheet_id: Any) -> uuid.UUID:
    """Проверка идентификатора до обращения к хранилищу"""
    if isinstance(worksheet_id, uuid.UUID):
        return worksheet_id
    try:
        return uuid.UUID(str(worksheet_id))
    except (TypeError, ValueError):
        raise InvalidIdentifier()


class WorksheetService:
    """Сервис чтения рабочих листов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.worksheet_repository = WorksheetRepository(session)

    async def list_worksheets(
        self,
        page: Any = None,
        limit: Any = None,
        search: Optional[str] = None
    ) -> PaginationEnvelope:
        """Страница рабочих листов с поиском и метаданными пагинации"""
        query = build_list_query(page, limit, search)

        try:
            worksheets = await self.worksheet_repository.find(query)
            total = await self.worksheet_repository.count(query)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching worksheets: {e}")
            raise StoreUnavailable("Failed to fetch worksheets", details=str(e)) from e

        return PaginationEnvelope(
            items=worksheets,
            current_page=query.page,
            per_page=query.limit,
            total_items=total
        )

    async def get_worksheet_by_id(self, worksheet_id: Any) -> WorksheetRecord:
        """Получение рабочего листа по идентификатору"""
        worksheet_uuid = parse_identifier(worksheet_id)

        try:
            worksheet = await self.worksheet_repository.get_by_uuid(worksheet_uuid)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching worksheet {worksheet_uuid}: {e}")
            raise StoreUnavailable("Failed to fetch worksheet", details=str(e)) from e

        if not worksheet:
            raise NotFound()

        return worksheet

    async def list_worksheets_by_subject(
        self,
        subject: str,
        page: Any = None,
        limit: Any = None
    ) -> List[WorksheetRecord]:
        """Рабочие листы, в теме которых встречается подстрока subject"""
        query = build_subject_query(subject, page, limit)

        try:
            return await self.worksheet_repository.find(query)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching worksheets by subject: {e}")
            raise StoreUnavailable("Failed to fetch worksheets by subject", details=str(e)) from e

    async def list_recent_worksheets(
        self,
        days: Any = None,
        now: Optional[datetime] = None
    ) -> List[WorksheetRecord]:
        """Рабочие листы за последние days дней, новые первыми"""
        query = build_recent_query(days, now)

        try:
            return await self.worksheet_repository.find(query)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching recent worksheets: {e}")
            raise StoreUnavailable("Failed to fetch recent worksheets", details=str(e)) from e

    async def list_distinct_subjects(self) -> List[str]:
        """Отсортированный список различных непустых тем"""
        try:
            subjects = await self.worksheet_repository.distinct(SUBJECT_FIELD)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching subjects: {e}")
            raise StoreUnavailable("Failed to fetch subjects", details=str(e)) from e

        return sorted(
            subject for subject in subjects
            if isinstance(subject, str) and subject.strip()
        )

    async def delete_worksheet(self, worksheet_id: Any) -> None:
        """Удаление рабочего листа"""
        worksheet_uuid = parse_identifier(worksheet_id)

        try:
            deleted = await self.worksheet_repository.delete(worksheet_uuid)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting worksheet {worksheet_uuid}: {e}")
            raise StoreUnavailable("Failed to delete worksheet", details=str(e)) from e

        if not deleted:
            raise NotFound()

        logger.info(f"Worksheet {worksheet_uuid} deleted")
