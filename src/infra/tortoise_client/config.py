"""
Tortoise ORM configuration
"""
from pathlib import Path
from typing import Any, Dict

from tortoise import Tortoise

from ..config import Settings
from ..logging_config import get_logger

MODELS_MODULE = "src.infra.tortoise_client.models"

logger = get_logger("tortoise")


def build_tortoise_config(database_url: str) -> Dict[str, Any]:
    return {
        "connections": {
            "default": database_url
        },
        "apps": {
            "models": {
                "models": [MODELS_MODULE],
                "default_connection": "default",
            },
        },
        "use_tz": True,
        "timezone": "UTC",
    }


async def init_tortoise(settings: Settings) -> None:
    """Tortoise ORM を初期化し、必要ならテーブルを作成する"""
    _ensure_sqlite_directory(settings.database_url)
    await Tortoise.init(config=build_tortoise_config(settings.database_url))
    if settings.generate_schemas:
        await Tortoise.generate_schemas(safe=True)
    logger.info("Tortoise ORM initialized", extra={"generate_schemas": settings.generate_schemas})


def _ensure_sqlite_directory(database_url: str) -> None:
    # aiosqlite はファイルは作るが親ディレクトリは作らない
    if database_url.startswith("sqlite://") and ":memory:" not in database_url:
        Path(database_url[len("sqlite://"):]).parent.mkdir(parents=True, exist_ok=True)


async def close_tortoise() -> None:
    await Tortoise.close_connections()
    logger.info("Tortoise ORM connections closed")
