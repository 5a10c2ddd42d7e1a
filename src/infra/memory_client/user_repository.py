from typing import Dict, List, Optional

from ...domain.entity.user_entity import UserEntity, utc_now
from ...domain.exception.user_exceptions import EmailAlreadyExistsError
from ...port.dto.user_dto import CreateUserDTO, UpdateUserDTO
from ...port.user_repository import UserId, UserRepository, parse_user_id


class InMemoryUserRepository(UserRepository):
    """
    辞書を用いた UserRepository の実装（開発・テスト用）

    プロセス内でのみ保持され、再起動すると内容は失われる。
    """

    def __init__(self):
        self._users: Dict[int, UserEntity] = {}
        self._email_index: Dict[str, int] = {}
        self._next_id = 1

    async def find_by_id(self, user_id: UserId) -> Optional[UserEntity]:
        numeric_id = parse_user_id(user_id)
        if numeric_id is None:
            return None
        return self._users.get(numeric_id)

    async def find_by_email(self, email: str) -> Optional[UserEntity]:
        numeric_id = self._email_index.get(email.lower())
        if numeric_id is None:
            return None
        return self._users.get(numeric_id)

    async def create(self, user_dto: CreateUserDTO) -> UserEntity:
        email = user_dto.email.lower()
        if email in self._email_index:
            raise EmailAlreadyExistsError(email)

        now = utc_now()
        user = UserEntity(
            id=self._next_id,
            email=email,
            name=user_dto.name.strip(),
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1

        self._users[user.id] = user
        self._email_index[user.email] = user.id
        return user

    async def update(self, user_id: UserId, user_dto: UpdateUserDTO) -> Optional[UserEntity]:
        numeric_id = parse_user_id(user_id)
        if numeric_id is None or numeric_id not in self._users:
            return None

        current = self._users[numeric_id]
        changes = user_dto.changes()
        new_email = changes.get("email")
        if new_email is not None:
            owner = self._email_index.get(new_email.lower())
            if owner is not None and owner != numeric_id:
                raise EmailAlreadyExistsError(new_email.lower())

        updated = current.with_changes(email=new_email, name=changes.get("name"))

        # メールアドレスが変わった場合はインデックスを付け替える
        if updated.email != current.email:
            del self._email_index[current.email]
            self._email_index[updated.email] = numeric_id

        self._users[numeric_id] = updated
        return updated

    async def delete(self, user_id: UserId) -> bool:
        numeric_id = parse_user_id(user_id)
        if numeric_id is None:
            return False

        user = self._users.pop(numeric_id, None)
        if user is None:
            return False
        self._email_index.pop(user.email, None)
        return True

    async def list(self, limit: int = 10, offset: int = 0) -> List[UserEntity]:
        ordered = [self._users[key] for key in sorted(self._users)]
        return ordered[offset:offset + limit]

    async def count(self) -> int:
        return len(self._users)
