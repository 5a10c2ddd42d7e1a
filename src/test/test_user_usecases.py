"""
Get / List / Update / Delete ユースケースのテスト
"""
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from src.domain.entity.user_entity import UserEntity
from src.domain.exception.user_exceptions import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    UserValidationError,
)
from src.usecase.user_management.delete_user import DeleteUserUseCase
from src.usecase.user_management.get_user import GetUserUseCase
from src.usecase.user_management.list_users import ListUsersUseCase
from src.usecase.user_management.update_user import UpdateUserUseCase


def make_user(user_id: int = 1, email: str = "user@example.com", name: str = "User") -> UserEntity:
    now = datetime.now(timezone.utc)
    return UserEntity(id=user_id, email=email, name=name, created_at=now, updated_at=now)


@pytest.fixture
def mock_user_repo():
    return AsyncMock()


class TestGetUserUseCase:

    @pytest.mark.asyncio
    async def test_returns_existing_user(self, mock_user_repo):
        mock_user_repo.find_by_id.return_value = make_user(7)

        user = await GetUserUseCase(mock_user_repo).execute("7")

        assert user.id == 7
        mock_user_repo.find_by_id.assert_awaited_once_with("7")

    @pytest.mark.asyncio
    async def test_missing_user_raises_not_found(self, mock_user_repo):
        mock_user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError, match="User with identifier '999' not found"):
            await GetUserUseCase(mock_user_repo).execute("999")


class TestListUsersUseCase:

    @pytest.mark.asyncio
    async def test_defaults_to_limit_10_offset_0(self, mock_user_repo):
        mock_user_repo.list.return_value = [make_user(1), make_user(2, "b@example.com")]
        mock_user_repo.count.return_value = 2

        result = await ListUsersUseCase(mock_user_repo).execute()

        mock_user_repo.list.assert_awaited_once_with(10, 0)
        assert len(result.users) == 2
        assert result.total == 2

    @pytest.mark.asyncio
    async def test_total_comes_from_repository_count(self, mock_user_repo):
        mock_user_repo.list.return_value = [make_user(3)]
        mock_user_repo.count.return_value = 25

        result = await ListUsersUseCase(mock_user_repo).execute(limit=1, offset=2)

        mock_user_repo.list.assert_awaited_once_with(1, 2)
        assert result.total == 25

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -1, 101])
    async def test_limit_out_of_range(self, mock_user_repo, limit):
        with pytest.raises(UserValidationError, match="Limit must be between 1 and 100"):
            await ListUsersUseCase(mock_user_repo).execute(limit=limit)
        mock_user_repo.list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_negative_offset(self, mock_user_repo):
        with pytest.raises(UserValidationError) as exc_info:
            await ListUsersUseCase(mock_user_repo).execute(offset=-1)
        assert exc_info.value.errors[0]["field"] == "offset"


class TestUpdateUserUseCase:

    @pytest.mark.asyncio
    async def test_updates_name(self, mock_user_repo):
        mock_user_repo.find_by_id.return_value = make_user(1)
        mock_user_repo.update.return_value = make_user(1, name="Updated Name")

        user = await UpdateUserUseCase(mock_user_repo).execute("1", {"name": "  Updated Name "})

        assert user.name == "Updated Name"
        update_dto = mock_user_repo.update.await_args.args[1]
        assert update_dto.changes() == {"name": "Updated Name"}
        mock_user_repo.find_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_user_raises_not_found(self, mock_user_repo):
        mock_user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            await UpdateUserUseCase(mock_user_repo).execute("42", {"name": "Name"})

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user(self, mock_user_repo):
        mock_user_repo.find_by_id.return_value = make_user(1)
        mock_user_repo.find_by_email.return_value = make_user(2, "taken@example.com")

        with pytest.raises(EmailAlreadyExistsError):
            await UpdateUserUseCase(mock_user_repo).execute("1", {"email": "taken@example.com"})
        mock_user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_keeping_own_email_is_allowed(self, mock_user_repo):
        own = make_user(1, "me@example.com")
        mock_user_repo.find_by_id.return_value = own
        mock_user_repo.find_by_email.return_value = own
        mock_user_repo.update.return_value = own

        user = await UpdateUserUseCase(mock_user_repo).execute(1, {"email": "ME@example.com"})

        assert user.id == 1

    @pytest.mark.asyncio
    async def test_invalid_email(self, mock_user_repo):
        with pytest.raises(UserValidationError):
            await UpdateUserUseCase(mock_user_repo).execute("1", {"email": "nope"})
        mock_user_repo.find_by_id.assert_not_awaited()


class TestDeleteUserUseCase:

    @pytest.mark.asyncio
    async def test_deletes_existing_user(self, mock_user_repo):
        mock_user_repo.delete.return_value = True

        await DeleteUserUseCase(mock_user_repo).execute("1")

        mock_user_repo.delete.assert_awaited_once_with("1")

    @pytest.mark.asyncio
    async def test_missing_user_raises_not_found(self, mock_user_repo):
        mock_user_repo.delete.return_value = False

        with pytest.raises(UserNotFoundError):
            await DeleteUserUseCase(mock_user_repo).execute("1")
