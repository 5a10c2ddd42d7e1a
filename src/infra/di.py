"""
依存性注入コンテナ

手動で組み立てるシングルトンのオブジェクトグラフ。
依存の向きは Infrastructure → Controller → UseCase → Domain で、内側の層は外側を知らない。

リポジトリ・認証サービス・ロガーは実行時に差し替え可能（テスト用）。
差し替え時は下流のユースケースとコントローラを再構築する。
"""
import logging
from typing import Optional

from ..port.auth_service import AuthService
from ..port.user_repository import UserRepository
from ..usecase.user_management.create_user import CreateUserUseCase
from ..usecase.user_management.delete_user import DeleteUserUseCase
from ..usecase.user_management.get_user import GetUserUseCase
from ..usecase.user_management.list_users import ListUsersUseCase
from ..usecase.user_management.update_user import UpdateUserUseCase
from .auth import JWTAuthService, PlaceholderAuthService
from .config import Settings, get_settings
from .controllers.user_controller import UserController
from .logging_config import get_logger, resolve_log_level
from .memory_client.user_repository import InMemoryUserRepository
from .tortoise_client.user_repository import TortoiseUserRepository


class DIContainer:
    """依存性注入コンテナ"""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._logger: Optional[logging.Logger] = None
        self._user_repository: Optional[UserRepository] = None
        self._auth_service: Optional[AuthService] = None
        self._create_user_usecase: Optional[CreateUserUseCase] = None
        self._get_user_usecase: Optional[GetUserUseCase] = None
        self._list_users_usecase: Optional[ListUsersUseCase] = None
        self._update_user_usecase: Optional[UpdateUserUseCase] = None
        self._delete_user_usecase: Optional[DeleteUserUseCase] = None
        self._user_controller: Optional[UserController] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def logger(self) -> logging.Logger:
        """ロガーのシングルトンインスタンスを取得（他のサービスより先に初期化）"""
        if self._logger is None:
            self._logger = get_logger(
                "app.controller",
                level=resolve_log_level(self.settings.app_log_level),
            )
        return self._logger

    @property
    def user_repository(self) -> UserRepository:
        """設定に応じたユーザーリポジトリのシングルトンインスタンスを取得"""
        if self._user_repository is None:
            if self.settings.repository_backend == "memory":
                self._user_repository = InMemoryUserRepository()
            else:
                self._user_repository = TortoiseUserRepository()
        return self._user_repository

    @property
    def auth_service(self) -> AuthService:
        """SECRET_KEY が設定されていれば JWT 認証、なければプレースホルダ"""
        if self._auth_service is None:
            if self.settings.secret_key:
                self._auth_service = JWTAuthService(
                    self.user_repository,
                    secret_key=self.settings.secret_key,
                    algorithm=self.settings.algorithm,
                    expire_minutes=self.settings.access_token_expire_minutes,
                )
            else:
                self._auth_service = PlaceholderAuthService()
        return self._auth_service

    @property
    def create_user_usecase(self) -> CreateUserUseCase:
        if self._create_user_usecase is None:
            self._create_user_usecase = CreateUserUseCase(self.user_repository)
        return self._create_user_usecase

    @property
    def get_user_usecase(self) -> GetUserUseCase:
        if self._get_user_usecase is None:
            self._get_user_usecase = GetUserUseCase(self.user_repository)
        return self._get_user_usecase

    @property
    def list_users_usecase(self) -> ListUsersUseCase:
        if self._list_users_usecase is None:
            self._list_users_usecase = ListUsersUseCase(self.user_repository)
        return self._list_users_usecase

    @property
    def update_user_usecase(self) -> UpdateUserUseCase:
        if self._update_user_usecase is None:
            self._update_user_usecase = UpdateUserUseCase(self.user_repository)
        return self._update_user_usecase

    @property
    def delete_user_usecase(self) -> DeleteUserUseCase:
        if self._delete_user_usecase is None:
            self._delete_user_usecase = DeleteUserUseCase(self.user_repository)
        return self._delete_user_usecase

    @property
    def user_controller(self) -> UserController:
        if self._user_controller is None:
            self._user_controller = self._build_user_controller()
        return self._user_controller

    def set_user_repository(self, repository: UserRepository) -> None:
        """リポジトリ実装を差し替え、依存するユースケース・コントローラを再構築する"""
        self._user_repository = repository
        if isinstance(self._auth_service, JWTAuthService):
            self._auth_service = None
        self._rebuild_user_components()

    def set_auth_service(self, service: AuthService) -> None:
        self._auth_service = service

    def set_logger(self, logger: logging.Logger) -> None:
        """ロガーを差し替え、コントローラを再構築する"""
        self._logger = logger
        self._user_controller = self._build_user_controller()

    def _rebuild_user_components(self) -> None:
        self._create_user_usecase = CreateUserUseCase(self.user_repository)
        self._get_user_usecase = GetUserUseCase(self.user_repository)
        self._list_users_usecase = ListUsersUseCase(self.user_repository)
        self._update_user_usecase = UpdateUserUseCase(self.user_repository)
        self._delete_user_usecase = DeleteUserUseCase(self.user_repository)
        self._user_controller = self._build_user_controller()

    def _build_user_controller(self) -> UserController:
        return UserController(
            self.logger,
            self.create_user_usecase,
            self.get_user_usecase,
            self.list_users_usecase,
            self.update_user_usecase,
            self.delete_user_usecase,
        )


# グローバルDIコンテナインスタンス
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """DIコンテナを取得（初回呼び出し時に生成）"""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """DIコンテナを破棄（テスト用）"""
    global _container
    _container = None


def get_user_controller() -> UserController:
    """ユーザーコントローラを取得"""
    return get_container().user_controller


def get_auth_service() -> AuthService:
    """認証サービスを取得"""
    return get_container().auth_service
