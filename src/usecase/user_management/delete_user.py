from ...domain.exception.user_exceptions import UserNotFoundError
from ...port.user_repository import UserId, UserRepository


class DeleteUserUseCase:
    """ユーザー削除のユースケース"""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: UserId) -> None:
        deleted = await self.user_repository.delete(user_id)
        if not deleted:
            raise UserNotFoundError("User", user_id)
