from typing import Any

from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import EmailAlreadyExistsError
from ...port.dto.user_dto import CreateUserDTO, parse_create_user_input
from ...port.user_repository import UserRepository


class CreateUserUseCase:
    """
    ユーザー登録のユースケース実装

    ビジネスルール:
    - 入力は CreateUserDTO のスキーマで検証する
    - メールアドレスは一意でなければならない
    - メールアドレスは小文字に正規化して保存する

    一意性チェックと作成の間に排他制御は行わない。
    """
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_input: Any) -> UserEntity:
        """
        Raises:
            UserValidationError: 入力が不正な場合
            EmailAlreadyExistsError: メールアドレスが既に存在する場合
        """
        validated = parse_create_user_input(user_input)
        email = validated.email.lower()

        existing = await self.user_repository.find_by_email(email)
        if existing is not None:
            raise EmailAlreadyExistsError(email)

        return await self.user_repository.create(CreateUserDTO(email=email, name=validated.name))
