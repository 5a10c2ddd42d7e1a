from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.infra.config import get_settings
from src.infra.logging_config import LoggingMiddleware, get_logger, resolve_log_level

from ..actions.user_actions import ActionError
from ..tortoise_client.config import close_tortoise, init_tortoise
from .routers.users import router as users_router
from .error_handlers import (
    handle_action_error,
    handle_generic_error,
    handle_validation_exception,
)

APP_VERSION = "0.1.0"

settings = get_settings()
logger = get_logger("app", level=resolve_log_level(settings.app_log_level))

app = FastAPI(
    title="User Service API",
    version=APP_VERSION
)

app.add_middleware(LoggingMiddleware)

# CORS 設定（環境設定に基づく）
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)


@app.on_event("startup")
async def startup_event():
    """アプリケーション起動時の初期化処理"""
    logger.info(
        "Application starting up",
        extra={"environment": settings.environment, "repository_backend": settings.repository_backend},
    )
    if settings.repository_backend == "tortoise":
        await init_tortoise(settings)


@app.on_event("shutdown")
async def shutdown_event():
    """アプリケーション終了時のクリーンアップ"""
    if settings.repository_backend == "tortoise":
        await close_tortoise()
    logger.info("Application shutdown complete")


@app.get("/api/v1/health")
async def health_check():
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy", "version": APP_VERSION}


# エラーハンドラーの登録
app.add_exception_handler(ActionError, handle_action_error)
app.add_exception_handler(RequestValidationError, handle_validation_exception)
app.add_exception_handler(Exception, handle_generic_error)


#uvicorn src.infra.rest_api.main:app --reload
