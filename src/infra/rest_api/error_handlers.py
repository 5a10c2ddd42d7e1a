from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from typing import Any, Dict, List, Optional
from src.infra.logging_config import get_logger
from ..actions.user_actions import ActionError

logger = get_logger("api.errors")


def create_error_response(
    error: str,
    message: str,
    status_code: int = 500,
    details: Optional[List[Dict[str, Any]]] = None,
) -> JSONResponse:
    """統一されたエラーレスポンスを作成"""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "message": message,
            "details": details or [],
        },
    )


async def handle_action_error(request: Request, exc: ActionError):
    """サーバーアクション失敗のハンドリング"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Action failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_code": exc.error,
            "error": exc.message,
        }
    )

    return create_error_response(
        error=exc.error,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """FastAPIバリデーションエラーのハンドリング"""
    logger.warning(
        "FastAPI validation error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "errors": exc.errors()
        }
    )

    return create_error_response(
        error="VALIDATION_ERROR",
        message="Invalid request data",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details=[
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    )


async def handle_generic_error(request: Request, exc: Exception):
    """その他のエラーのハンドリング（内部情報は返さない）"""
    logger.error(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error": str(exc),
            "error_type": type(exc).__name__
        },
        exc_info=True
    )

    return create_error_response(
        error="INTERNAL_ERROR",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
