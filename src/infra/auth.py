"""
認証モジュール

このモジュールは AuthService ポートの実装を提供します。
JWT（JSON Web Token）の生成・検証を行い、トークンの sub クレームに
格納されたユーザーIDをリポジトリで解決して現在のユーザーを返します。

主な機能:
- JWTアクセストークンの生成と検証
- PlaceholderAuthService: 認証プロバイダ導入前のプレースホルダ
- JWTAuthService: ベアラートークンによる認証

セキュリティ考慮事項:
- 不正・期限切れのトークンは「未認証」として扱い、例外を外に漏らさない
- 秘密鍵は設定（SECRET_KEY）からのみ受け取る
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Union
from jose import JWTError, jwt

from ..domain.entity.user_entity import UserEntity
from ..domain.exception.user_exceptions import AuthenticationRequiredError
from ..port.user_repository import UserRepository
from .logging_config import get_logger

logger = get_logger("auth")

DEFAULT_EXPIRE_MINUTES = 30


def create_access_token(
    user_id: Union[str, int],
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """
    JWTアクセストークンを生成する

    Args:
        user_id: トークンの sub に格納するユーザーID
        secret_key: 署名に使用する秘密鍵
        algorithm: 署名アルゴリズム
        expires_delta: 有効期限（省略時は30分）
        extra_claims: 追加で含めるクレーム

    Returns:
        str: エンコードされたJWTトークン
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=DEFAULT_EXPIRE_MINUTES))
    payload: Dict[str, Any] = dict(extra_claims or {})
    payload.update({"sub": str(user_id), "exp": expire})
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> Optional[str]:
    """
    JWTトークンを検証し、sub（ユーザーID）を返す

    署名不正・期限切れ・sub 欠落の場合は None を返す。
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        logger.warning("JWT validation failed", extra={"error": str(e)})
        return None

    subject = payload.get("sub")
    if subject is None:
        logger.warning("JWT missing subject claim")
        return None
    return str(subject)


class PlaceholderAuthService:
    """
    認証プロバイダ導入前のプレースホルダ

    常に未認証として振る舞う。SECRET_KEY を設定すると JWTAuthService に切り替わる。
    """

    async def get_current_user(self, token: Optional[str]) -> Optional[UserEntity]:
        return None

    async def get_current_user_id(self, token: Optional[str]) -> Optional[str]:
        user = await self.get_current_user(token)
        return str(user.id) if user else None

    async def is_authenticated(self, token: Optional[str]) -> bool:
        return await self.get_current_user(token) is not None

    async def require_auth(self, token: Optional[str]) -> UserEntity:
        user = await self.get_current_user(token)
        if user is None:
            raise AuthenticationRequiredError()
        return user


class JWTAuthService(PlaceholderAuthService):
    """ベアラートークン（JWT）による AuthService の実装"""

    def __init__(
        self,
        user_repository: UserRepository,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
    ):
        self.user_repository = user_repository
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_token(self, user_id: Union[str, int]) -> str:
        """設定された有効期限でユーザーのアクセストークンを発行する"""
        return create_access_token(
            user_id,
            self.secret_key,
            algorithm=self.algorithm,
            expires_delta=timedelta(minutes=self.expire_minutes),
        )

    async def get_current_user(self, token: Optional[str]) -> Optional[UserEntity]:
        if not token:
            return None

        user_id = decode_access_token(token, self.secret_key, self.algorithm)
        if user_id is None:
            return None

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logger.warning("Token subject does not match any user", extra={"user_id": user_id})
        return user
