from typing import Any

from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import EmailAlreadyExistsError, UserNotFoundError
from ...port.dto.user_dto import parse_update_user_input
from ...port.user_repository import UserId, UserRepository


class UpdateUserUseCase:
    """
    ユーザー情報の部分更新

    メールアドレスを変更する場合は、他のユーザーが使用していないことを確認する。
    """
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: UserId, user_input: Any) -> UserEntity:
        validated = parse_update_user_input(user_input)

        current = await self.user_repository.find_by_id(user_id)
        if current is None:
            raise UserNotFoundError("User", user_id)

        if validated.email is not None:
            owner = await self.user_repository.find_by_email(validated.email)
            if owner is not None and owner.id != current.id:
                raise EmailAlreadyExistsError(validated.email)

        updated = await self.user_repository.update(current.id, validated)
        if updated is None:
            # 取得から更新までの間に削除された
            raise UserNotFoundError("User", user_id)
        return updated
