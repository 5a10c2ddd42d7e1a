from typing import Optional

from ...domain.exception.user_exceptions import UserValidationError
from ...port.dto.user_dto import ListUsersResult
from ...port.user_repository import UserRepository

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class ListUsersUseCase:
    """ページネーション付きのユーザー一覧取得"""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, limit: Optional[int] = None, offset: Optional[int] = None) -> ListUsersResult:
        limit = DEFAULT_LIMIT if limit is None else limit
        offset = 0 if offset is None else offset

        if limit < 1 or limit > MAX_LIMIT:
            raise UserValidationError(
                f"Limit must be between 1 and {MAX_LIMIT}",
                [{"field": "limit", "message": f"Limit must be between 1 and {MAX_LIMIT}", "type": "custom"}],
            )
        if offset < 0:
            raise UserValidationError(
                "Offset must not be negative",
                [{"field": "offset", "message": "Offset must not be negative", "type": "custom"}],
            )

        users = await self.user_repository.list(limit, offset)
        total = await self.user_repository.count()
        return ListUsersResult(users=users, total=total)
