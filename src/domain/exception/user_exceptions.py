"""
ユーザー関連の例外クラス

このモジュールは、ユーザー管理に関する例外を定義します。
すべての例外は DomainError を継承し、コントローラ境界でエラーコードと
HTTPステータスを持つタグ付きレスポンスへ変換されます。
"""
from typing import Any, Dict, List, Optional, Union


class DomainError(Exception):
    """ドメイン例外の基底クラス"""
    code: str = "DOMAIN_ERROR"
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UserValidationError(DomainError):
    """入力がスキーマ検証に失敗した場合の例外"""
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class UserNotFoundError(DomainError):
    """指定されたリソースが見つからない場合の例外"""
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str = "User", identifier: Optional[Union[str, int]] = None):
        if identifier is not None and identifier != "":
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message)
        self.resource = resource
        self.identifier = identifier


class EmailAlreadyExistsError(DomainError):
    """指定のメールアドレスは既に登録されています。"""
    code = "EMAIL_ALREADY_EXISTS"
    status_code = 409

    def __init__(self, email: str):
        super().__init__("User with this email already exists")
        self.email = email


class AuthenticationRequiredError(DomainError):
    """認証が必要な操作を未認証で呼び出した場合の例外"""
    code = "AUTHENTICATION_REQUIRED"
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
