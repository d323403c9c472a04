import argparse
import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from worksheet_viewer.client.api import WorksheetApiClient
from worksheet_viewer.client.render import render_content
from worksheet_viewer.client.state import ListState, WorksheetListModel, threaded
from worksheet_viewer.core.config import settings
from worksheet_viewer.core.logging import configure_logging
from worksheet_viewer.domains.worksheets.entities import WorksheetRecord

logger = logging.getLogger(__name__)

TITLE_LENGTH = 20


def format_date(date: datetime, separator: str = " ") -> str:
    return f"{date.day}/{date.month}/{date.year}{separator}{date.hour}:{date.minute:02d}"


def short_title(subject: str) -> str:
    if len(subject) > TITLE_LENGTH:
        return f"{subject[:TITLE_LENGTH]}..."
    return subject


class WorksheetViewer:
    """Терминальный просмотр списка и содержимого рабочих листов"""

    def __init__(
        self,
        api: WorksheetApiClient,
        console: Optional[Console] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None
    ):
        self.api = api
        self.console = console or Console()
        self.model = WorksheetListModel()
        self.search = search
        self.limit = limit

    def _fetch(self) -> List[WorksheetRecord]:
        return self.api.get_worksheets(limit=self.limit, search=self.search)

    async def load(self) -> None:
        """Загрузка списка; интерфейс не блокируется на время запроса"""
        with self.console.status("Loading worksheets..."):
            await self.model.refresh(threaded(self._fetch))
        if self.model.state is ListState.ERROR:
            logger.warning(f"Error loading worksheets: {self.model.error_message}")

    def list_view(self):
        """Содержимое экрана списка для текущего состояния"""
        if self.model.state is ListState.LOADING:
            return Text("Loading worksheets...")

        if self.model.state is ListState.ERROR:
            return Panel(
                Group(
                    Text("Error loading worksheets", style="bold"),
                    Text(self.model.error_message or "", style="grey50"),
                    Text("Press [r] to retry", style="blue"),
                ),
                border_style="red",
            )

        if self.model.is_empty:
            return Panel(
                Group(
                    Text("No worksheets found", style="bold"),
                    Text("Create some worksheets using your n8n workflow first!", style="grey50"),
                ),
            )

        table = Table(title="Worksheets", expand=True)
        table.add_column("#", justify="right", style="blue")
        table.add_column("Subject", style="bold")
        table.add_column("Created", style="grey50")
        table.add_column("User", style="grey50")
        for index, worksheet in enumerate(self.model.worksheets, start=1):
            table.add_row(
                str(index),
                Text(worksheet.subject),
                f"Created: {format_date(worksheet.created_at)}",
                Text(worksheet.user_email or ""),
            )
        return table

    def detail_view(self, worksheet: WorksheetRecord) -> Group:
        """Экран рабочего листа: заголовок и отрисованное содержимое"""
        header = Panel(
            Group(
                Text(worksheet.subject, style="bold blue"),
                Text(f"Created: {format_date(worksheet.created_at, ' at ')}", style="grey50"),
            ),
            title=Text(short_title(worksheet.subject)),
        )
        return Group(header, Panel(render_content(worksheet.content)))

    def select(self, choice: str) -> Optional[WorksheetRecord]:
        if self.model.state is not ListState.LOADED or not choice.isdigit():
            return None
        index = int(choice) - 1
        if 0 <= index < len(self.model.worksheets):
            return self.model.worksheets[index]
        return None

    async def run(self) -> None:
        await self.load()
        while True:
            self.console.print(self.list_view())
            choice = await asyncio.to_thread(
                Prompt.ask, "Open worksheet number, [r]efresh or [q]uit", console=self.console
            )
            choice = choice.strip().lower()

            if choice == "q":
                return
            if choice == "r":
                await self.load()
                continue

            worksheet = self.select(choice)
            if worksheet is None:
                self.console.print(Text("Unknown choice", style="red"))
                continue

            self.console.print(self.detail_view(worksheet))
            await asyncio.to_thread(Prompt.ask, "Press Enter to go back", console=self.console, default="")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Worksheet viewer")
    parser.add_argument("--base-url", default=settings.api_base_url, help="API base URL")
    parser.add_argument("--search", default=None, help="Substring to search in subject or content")
    parser.add_argument("--limit", type=int, default=None, help="Worksheets per page")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    api = WorksheetApiClient(args.base_url, timeout=settings.request_timeout)
    viewer = WorksheetViewer(api, search=args.search, limit=args.limit)

    try:
        asyncio.run(viewer.run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
