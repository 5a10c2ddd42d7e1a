from typing import Optional, Protocol

from ..domain.entity.user_entity import UserEntity


class AuthService(Protocol):
    """
    認証サービスのインターフェース。

    認証プロバイダ（JWT、外部IdP など）の実装詳細をドメイン層から切り離す。
    token はリクエストから取り出したベアラートークン（未指定なら None）。
    """

    async def get_current_user(self, token: Optional[str]) -> Optional[UserEntity]:
        ...

    async def get_current_user_id(self, token: Optional[str]) -> Optional[str]:
        ...

    async def is_authenticated(self, token: Optional[str]) -> bool:
        ...

    async def require_auth(self, token: Optional[str]) -> UserEntity:
        ...
