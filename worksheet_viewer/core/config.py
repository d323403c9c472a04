from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./worksheets.db"
    database_echo: bool = False
    collection_name: str = "worksheets"

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://flutter_backend:3000",
    ]
    log_level: str = "INFO"

    # Настройки клиента просмотра
    api_base_url: str = "http://localhost:3000"
    request_timeout: float = 10.0

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
