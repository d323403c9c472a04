import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from worksheet_viewer.api.http import health_router, worksheets_router
from worksheet_viewer.core.config import Settings, settings as default_settings
from worksheet_viewer.core.db import connect_store, create_session_factory, create_store_engine
from worksheet_viewer.core.errors import WorksheetError
from worksheet_viewer.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_store_engine(settings.database_url, echo=settings.database_echo)
        try:
            # Без хранилища сервис не стартует
            await connect_store(engine)
        except WorksheetError:
            await engine.dispose()
            raise

        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        try:
            yield
        finally:
            logger.info("Shutting down server...")
            await engine.dispose()

    app = FastAPI(
        title="Worksheet Viewer",
        description="API для просмотра сгенерированных рабочих листов",
        version="1.0.0",
        lifespan=lifespan
    )

    # Настройка CORS для работы с клиентом
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(WorksheetError)
    async def worksheet_error_handler(request: Request, exc: WorksheetError):
        body = {"error": exc.message}
        if exc.details is not None:
            body["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)}
        )

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(worksheets_router)

    return app


app = create_app()


def serve() -> None:
    """Запуск HTTP-сервера"""
    configure_logging(default_settings.log_level)
    logger.info(f"Server running on port {default_settings.port}")
    logger.info(f"Health check: http://localhost:{default_settings.port}/health")
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    serve()
