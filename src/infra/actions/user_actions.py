"""
ユーザー関連のサーバーアクション

UI や REST ルーターから直接呼び出される関数群。
コントローラのタグ付きレスポンスを展開し、失敗時は ActionError を送出する。
"""
from typing import Any, Dict, List, Optional, TypeVar

from ...port.dto.user_dto import UserDTO, UserListDTO
from ...port.user_repository import UserId
from ..controllers.base_controller import ControllerResponse, ErrorResponse
from ..di import get_auth_service, get_user_controller

T = TypeVar("T")


class ActionError(Exception):
    """コントローラが失敗レスポンスを返した場合の例外"""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or []

    @classmethod
    def from_response(cls, response: ErrorResponse) -> "ActionError":
        return cls(
            error=response.error,
            message=response.message,
            status_code=response.status_code,
            details=response.details,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.error,
            "message": self.message,
            "details": self.details,
        }


def _unwrap(result: ControllerResponse[T]) -> T:
    if isinstance(result, ErrorResponse):
        raise ActionError.from_response(result)
    return result.data


async def create_user_action(user_input: Dict[str, Any]) -> UserDTO:
    """ユーザーを新規作成"""
    controller = get_user_controller()
    return _unwrap(await controller.create_user(user_input))


async def get_user_action(user_id: UserId) -> UserDTO:
    """IDでユーザーを取得"""
    controller = get_user_controller()
    return _unwrap(await controller.get_user_by_id(user_id))


async def list_users_action(limit: Optional[int] = None, offset: Optional[int] = None) -> UserListDTO:
    """ページネーション付きでユーザー一覧を取得"""
    controller = get_user_controller()
    return _unwrap(await controller.list_users(limit, offset))


async def update_user_action(user_id: UserId, user_input: Dict[str, Any]) -> UserDTO:
    controller = get_user_controller()
    return _unwrap(await controller.update_user(user_id, user_input))


async def delete_user_action(user_id: UserId) -> None:
    controller = get_user_controller()
    _unwrap(await controller.delete_user(user_id))


async def get_current_user_action(token: Optional[str]) -> Optional[UserDTO]:
    """
    現在の認証済みユーザーを取得

    未認証の場合は None を返す。
    """
    auth_service = get_auth_service()
    user = await auth_service.get_current_user(token)
    if user is None:
        return None
    return UserDTO.from_entity(user)
