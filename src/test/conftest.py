import os
import sys
from pathlib import Path

import pytest
from tortoise import Tortoise

# テストではインメモリリポジトリを既定にする（アプリ読み込み前に設定）
os.environ.setdefault("REPOSITORY_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "test")

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.infra.config import Settings
from src.infra.di import DIContainer, get_container, reset_container
from src.infra.memory_client.user_repository import InMemoryUserRepository
from src.infra.tortoise_client.config import build_tortoise_config
from src.infra.tortoise_client.user_repository import TortoiseUserRepository

TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters-long"


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        environment="test",
        repository_backend="memory",
        secret_key=TEST_SECRET_KEY,
    )


@pytest.fixture
def container(test_settings):
    """グローバルDIコンテナをテスト用設定で作り直す"""
    reset_container()
    global_container = get_container()
    global_container._settings = test_settings
    global_container.set_user_repository(InMemoryUserRepository())
    yield global_container
    reset_container()


@pytest.fixture
def isolated_container(test_settings):
    return DIContainer(settings=test_settings)


@pytest.fixture
async def tortoise_db():
    """インメモリSQLiteで Tortoise ORM を初期化"""
    await Tortoise.init(config=build_tortoise_config("sqlite://:memory:"))
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest.fixture(params=["memory", "tortoise"])
async def user_repository(request):
    """両方のリポジトリ実装で同じ契約テストを実行する"""
    if request.param == "memory":
        yield InMemoryUserRepository()
        return

    await Tortoise.init(config=build_tortoise_config("sqlite://:memory:"))
    await Tortoise.generate_schemas()
    yield TortoiseUserRepository()
    await Tortoise.close_connections()
