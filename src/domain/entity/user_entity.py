from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UserEntity:
    """
    ユーザーのビジネスドメインモデル

    フレームワークや永続化層に依存しない純粋なエンティティ。
    id はリポジトリが採番し、email は常に小文字で保持される。
    """
    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime

    def with_changes(self, email: Optional[str] = None, name: Optional[str] = None) -> "UserEntity":
        """指定されたフィールドだけを差し替え、updated_at を更新したコピーを返す"""
        return replace(
            self,
            email=email.lower() if email is not None else self.email,
            name=name if name is not None else self.name,
            updated_at=utc_now(),
        )
