from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import UserNotFoundError
from ...port.user_repository import UserId, UserRepository


class GetUserUseCase:
    """IDでユーザーを取得するユースケース"""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: UserId) -> UserEntity:
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError("User", user_id)
        return user
