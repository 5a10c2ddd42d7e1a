"""サーバーアクションのテスト（グローバルDIコンテナ経由）"""
import pytest

from src.infra.actions.user_actions import (
    ActionError,
    create_user_action,
    delete_user_action,
    get_current_user_action,
    get_user_action,
    list_users_action,
    update_user_action,
)
from src.infra.auth import PlaceholderAuthService, create_access_token
from src.port.dto.user_dto import UserDTO

TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters-long"


class TestUserActions:

    @pytest.mark.asyncio
    async def test_create_and_get(self, container):
        created = await create_user_action({"email": "Action@Example.com", "name": "Action"})
        fetched = await get_user_action(created.id)

        assert isinstance(created, UserDTO)
        assert created.email == "action@example.com"
        assert fetched == created

    @pytest.mark.asyncio
    async def test_failure_raises_action_error(self, container):
        with pytest.raises(ActionError) as exc_info:
            await create_user_action({"email": "invalid", "name": "Action"})

        error = exc_info.value
        assert error.error == "VALIDATION_ERROR"
        assert error.status_code == 400
        assert error.to_dict()["success"] is False
        assert error.to_dict()["details"][0]["field"] == "email"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, container):
        with pytest.raises(ActionError) as exc_info:
            await get_user_action("42")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_list_update_delete(self, container):
        first = await create_user_action({"email": "a@example.com", "name": "A"})
        await create_user_action({"email": "b@example.com", "name": "B"})

        listed = await list_users_action()
        updated = await update_user_action(first.id, {"name": "A2"})
        await delete_user_action(first.id)
        after = await list_users_action()

        assert listed.total == 2
        assert updated.name == "A2"
        assert after.total == 1
        assert after.users[0].email == "b@example.com"

    @pytest.mark.asyncio
    async def test_current_user_with_token(self, container):
        created = await create_user_action({"email": "me@example.com", "name": "Me"})
        token = create_access_token(created.id, TEST_SECRET_KEY)

        current = await get_current_user_action(token)

        assert current == created

    @pytest.mark.asyncio
    async def test_current_user_without_token(self, container):
        assert await get_current_user_action(None) is None

    @pytest.mark.asyncio
    async def test_current_user_with_placeholder(self, container):
        created = await create_user_action({"email": "me@example.com", "name": "Me"})
        container.set_auth_service(PlaceholderAuthService())

        token = create_access_token(created.id, TEST_SECRET_KEY)
        assert await get_current_user_action(token) is None
