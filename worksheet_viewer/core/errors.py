from typing import Optional


class WorksheetError(Exception):
    """Базовое исключение домена рабочих листов"""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class StoreUnavailable(WorksheetError):
    """Хранилище документов недоступно или вернуло ошибку"""

    status_code = 500


class InvalidIdentifier(WorksheetError):
    """Некорректный идентификатор документа"""

    status_code = 400

    def __init__(self, message: str = "Invalid worksheet ID", details: Optional[str] = None):
        super().__init__(message, details)


class NotFound(WorksheetError):
    """Документ не найден"""

    status_code = 404

    def __init__(self, message: str = "Worksheet not found", details: Optional[str] = None):
        super().__init__(message, details)
