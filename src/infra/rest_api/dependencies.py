"""
FastAPI依存性注入の定義

FastAPIエンドポイントで使用される依存性注入関数。
リクエストから認証情報を取り出し、サーバーアクションへ渡す。
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Authorization: Bearer <token>（任意）
bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    リクエストヘッダーからベアラートークンを取り出す

    Returns:
        Optional[str]: トークン文字列。ヘッダーがなければ None
    """
    if credentials is None:
        return None
    return credentials.credentials
