"""
Port interface for user repository
"""
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from ..domain.entity.user_entity import UserEntity
from ..port.dto.user_dto import CreateUserDTO, UpdateUserDTO

UserId = Union[str, int]

# users.id は符号付き64ビット整数
MAX_USER_ID = 2**63 - 1
_DIGITS = re.compile(r"[0-9]+")


def parse_user_id(user_id: UserId) -> Optional[int]:
    """
    文字列・整数のIDを数値IDへ変換する

    10進数字のみの文字列を受け付ける。それ以外や範囲外の値は None を返す（「見つからない」扱い）。
    """
    if isinstance(user_id, bool):
        return None
    if isinstance(user_id, int):
        numeric_id = user_id
    else:
        text = str(user_id).strip()
        if not _DIGITS.fullmatch(text):
            return None
        numeric_id = int(text)
    if numeric_id < 1 or numeric_id > MAX_USER_ID:
        return None
    return numeric_id


class UserRepository(ABC):
    """
    ユーザーデータの永続化インターフェース。

    見つからない場合は例外ではなく None / False を返す。
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[UserEntity]:
        """IDでユーザーを取得"""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserEntity]:
        """メールアドレスでユーザーを取得（大文字小文字を区別しない）"""
        pass

    @abstractmethod
    async def create(self, user_dto: CreateUserDTO) -> UserEntity:
        """
        ユーザーを新規作成し、ID とタイムスタンプを割り当てる

        Raises:
            EmailAlreadyExistsError: メールアドレスが既に登録されている場合
        """
        pass

    @abstractmethod
    async def update(self, user_id: UserId, user_dto: UpdateUserDTO) -> Optional[UserEntity]:
        """指定フィールドをマージして updated_at を更新する"""
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """ユーザーを削除。存在しなかった場合は False"""
        pass

    @abstractmethod
    async def list(self, limit: int = 10, offset: int = 0) -> List[UserEntity]:
        """ID順にユーザー一覧を取得"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """登録ユーザー数"""
        pass
