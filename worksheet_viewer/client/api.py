import logging
from typing import Any, Dict, List, Optional

import requests

from worksheet_viewer.domains.worksheets.entities import WorksheetRecord
from worksheet_viewer.domains.worksheets.normalization import normalize_document

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Ошибка обращения к API; клиент может повторить запрос"""


class WorksheetApiClient:
    """HTTP-клиент API рабочих листов"""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise ApiError(f"Request to {path} failed with status {status}") from e
        except requests.exceptions.JSONDecodeError as e:
            raise ApiError(f"Invalid response from server: {e}") from e
        except requests.RequestException as e:
            raise ApiError(f"Error connecting to server: {e}") from e
        except ValueError as e:
            raise ApiError(f"Invalid response from server: {e}") from e

    def get_worksheets(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None
    ) -> List[WorksheetRecord]:
        """Загрузка списка рабочих листов с нормализацией каждого документа"""
        params = {}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        if search:
            params["search"] = search

        data = self._get("/worksheets", params=params)

        # Сервер отдает конверт пагинации, старые версии отдавали список
        if isinstance(data, dict):
            documents = data.get("worksheets", [])
        else:
            documents = data
        if not isinstance(documents, list):
            raise ApiError("Invalid response from server: worksheets is not a list")

        logger.debug(f"Loaded {len(documents)} worksheets")
        return [normalize_document(document) for document in documents]

    def health(self) -> Dict[str, Any]:
        return self._get("/health")
