from typing import List, Optional

from tortoise.exceptions import IntegrityError

from ...domain.entity.user_entity import UserEntity, utc_now
from ...domain.exception.user_exceptions import EmailAlreadyExistsError
from ...port.dto.user_dto import CreateUserDTO, UpdateUserDTO
from ...port.user_repository import UserId, UserRepository, parse_user_id
from .models import User


class TortoiseUserRepository(UserRepository):
    """
    Tortoise ORM を用いた UserRepository の実装

    メールアドレスの一意性は users テーブルの UNIQUE 制約でも保証される。
    """

    async def find_by_id(self, user_id: UserId) -> Optional[UserEntity]:
        numeric_id = parse_user_id(user_id)
        if numeric_id is None:
            return None
        user = await User.filter(id=numeric_id).first()
        return self._to_entity(user) if user else None

    async def find_by_email(self, email: str) -> Optional[UserEntity]:
        user = await User.filter(email=email.lower()).first()
        return self._to_entity(user) if user else None

    async def create(self, user_dto: CreateUserDTO) -> UserEntity:
        email = user_dto.email.lower().strip()
        now = utc_now()
        try:
            user = await User.create(
                email=email,
                name=user_dto.name.strip(),
                created_at=now,
                updated_at=now,
            )
        except IntegrityError as e:
            raise EmailAlreadyExistsError(email) from e
        return self._to_entity(user)

    async def update(self, user_id: UserId, user_dto: UpdateUserDTO) -> Optional[UserEntity]:
        numeric_id = parse_user_id(user_id)
        if numeric_id is None:
            return None
        user = await User.filter(id=numeric_id).first()
        if not user:
            return None

        changes = user_dto.changes()
        if "email" in changes:
            user.email = changes["email"].lower().strip()
        if "name" in changes:
            user.name = changes["name"].strip()
        user.updated_at = utc_now()

        try:
            await user.save()
        except IntegrityError as e:
            raise EmailAlreadyExistsError(user.email) from e
        return self._to_entity(user)

    async def delete(self, user_id: UserId) -> bool:
        numeric_id = parse_user_id(user_id)
        if numeric_id is None:
            return False
        deleted_count = await User.filter(id=numeric_id).delete()
        return deleted_count > 0

    async def list(self, limit: int = 10, offset: int = 0) -> List[UserEntity]:
        users = await User.all().order_by("id").offset(offset).limit(limit)
        return [self._to_entity(user) for user in users]

    async def count(self) -> int:
        return await User.all().count()

    @staticmethod
    def _to_entity(user: User) -> UserEntity:
        """データベース行をドメインエンティティへ変換"""
        return UserEntity(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
