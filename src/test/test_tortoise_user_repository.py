"""
Tortoise ORM 実装固有のテスト
"""
import pytest

from src.infra.tortoise_client.models import User as UserModel
from src.infra.tortoise_client.user_repository import TortoiseUserRepository
from src.port.dto.user_dto import CreateUserDTO


class TestTortoiseUserRepository:

    @pytest.fixture
    def repository(self, tortoise_db):
        return TortoiseUserRepository()

    @pytest.mark.asyncio
    async def test_create_persists_row(self, repository):
        user = await repository.create(CreateUserDTO(email="Row@Example.com", name="  Row  "))

        row = await UserModel.get(id=user.id)
        assert row.email == "row@example.com"
        assert row.name == "Row"

    @pytest.mark.asyncio
    async def test_rows_inserted_outside_repository_are_visible(self, repository):
        await UserModel.create(email="direct@example.com", name="Direct")

        found = await repository.find_by_email("direct@example.com")

        assert found is not None
        assert found.name == "Direct"
        assert await repository.count() == 1

    def test_table_name(self):
        assert UserModel._meta.db_table == "users"
