"""
コントローラの基底クラス

ユースケース呼び出しを統一されたタグ付きレスポンス（成功/失敗）に変換し、
例外をコントローラ境界の外へ漏らさない。
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, List, TypeVar, Union

from ...domain.exception.user_exceptions import DomainError, UserValidationError

T = TypeVar("T")


@dataclass
class SuccessResponse(Generic[T]):
    data: T
    success: bool = True


@dataclass
class ErrorResponse:
    error: str
    message: str
    status_code: int = 500
    details: List[Dict[str, Any]] = field(default_factory=list)
    success: bool = False


ControllerResponse = Union[SuccessResponse[T], ErrorResponse]


class BaseController:
    def __init__(self, logger: logging.Logger):
        self.logger = logger

    async def _execute(self, fn: Callable[[], Awaitable[T]]) -> ControllerResponse[T]:
        """fn を実行し、結果または例外をタグ付きレスポンスへ変換する"""
        try:
            data = await fn()
        except DomainError as e:
            self.logger.warning(
                e.message,
                extra={"error_name": type(e).__name__, "error_code": e.code},
            )
            details = e.errors if isinstance(e, UserValidationError) else []
            return ErrorResponse(
                error=e.code,
                message=e.message,
                status_code=e.status_code,
                details=details,
            )
        except Exception as e:
            self.logger.error(
                str(e),
                extra={"error_name": type(e).__name__},
                exc_info=True,
            )
            return ErrorResponse(
                error="INTERNAL_ERROR",
                message="An unexpected error occurred",
                status_code=500,
            )
        return SuccessResponse(data=data)
