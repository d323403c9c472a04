"""Состояние экрана списка рабочих листов.

Каждая загрузка получает монотонный токен; применяется только ответ на
последний выданный токен, поэтому результат устаревшего запроса
отбрасывается.
"""
import asyncio
import enum
import itertools
from typing import Awaitable, Callable, List, Optional

from worksheet_viewer.client.api import ApiError
from worksheet_viewer.domains.worksheets.entities import WorksheetRecord


class ListState(enum.Enum):
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class WorksheetListModel:
    """Модель экрана списка: Loading -> Loaded | Error"""

    def __init__(self):
        self.state = ListState.LOADING
        self.worksheets: List[WorksheetRecord] = []
        self.error_message: Optional[str] = None
        self._tokens = itertools.count(1)
        self._latest_token = 0

    @property
    def is_loading(self) -> bool:
        return self.state is ListState.LOADING

    @property
    def is_empty(self) -> bool:
        return self.state is ListState.LOADED and not self.worksheets

    def start(self) -> int:
        """Начало загрузки; возвращает токен запроса"""
        self._latest_token = next(self._tokens)
        self.state = ListState.LOADING
        self.error_message = None
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def resolve(self, token: int, worksheets: List[WorksheetRecord]) -> bool:
        if not self.is_current(token):
            return False
        self.worksheets = list(worksheets)
        self.state = ListState.LOADED
        return True

    def fail(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            return False
        self.worksheets = []
        self.error_message = message
        self.state = ListState.ERROR
        return True

    async def refresh(self, fetch: Callable[[], Awaitable[List[WorksheetRecord]]]) -> bool:
        """Загрузка и применение результата; False, если ответ устарел"""
        token = self.start()
        try:
            worksheets = await fetch()
        except ApiError as e:
            return self.fail(token, str(e))
        return self.resolve(token, worksheets)


def threaded(func: Callable[[], List[WorksheetRecord]]) -> Callable[[], Awaitable[List[WorksheetRecord]]]:
    """Обертка блокирующего вызова для выполнения в рабочем потоке"""
    async def run() -> List[WorksheetRecord]:
        return await asyncio.to_thread(func)
    return run
