import logging
from typing import Any, Optional

from ...port.dto.user_dto import UserDTO, UserListDTO
from ...port.user_repository import UserId
from ...usecase.user_management.create_user import CreateUserUseCase
from ...usecase.user_management.delete_user import DeleteUserUseCase
from ...usecase.user_management.get_user import GetUserUseCase
from ...usecase.user_management.list_users import ListUsersUseCase
from ...usecase.user_management.update_user import UpdateUserUseCase
from ..logging_config import TRACE
from .base_controller import BaseController, ControllerResponse


class UserController(BaseController):
    """
    ユーザー関連ユースケースのコントローラ

    HTTP リクエストオブジェクトではなくプレーンなデータを受け取り、
    UserDTO を含むタグ付きレスポンスを返す。フレームワーク非依存。
    """

    def __init__(
        self,
        logger: logging.Logger,
        create_user_usecase: CreateUserUseCase,
        get_user_usecase: GetUserUseCase,
        list_users_usecase: ListUsersUseCase,
        update_user_usecase: UpdateUserUseCase,
        delete_user_usecase: DeleteUserUseCase,
    ):
        super().__init__(logger)
        self.create_user_usecase = create_user_usecase
        self.get_user_usecase = get_user_usecase
        self.list_users_usecase = list_users_usecase
        self.update_user_usecase = update_user_usecase
        self.delete_user_usecase = delete_user_usecase

    async def create_user(self, user_input: Any) -> ControllerResponse[UserDTO]:
        self.logger.debug("UserController > create_user: begin", extra={"input": _loggable(user_input)})

        async def run() -> UserDTO:
            user = await self.create_user_usecase.execute(user_input)
            response = UserDTO.from_entity(user)
            self.logger.log(
                TRACE,
                "UserController > create_user: end",
                extra={"user_id": response.id, "email": response.email},
            )
            return response

        return await self._execute(run)

    async def get_user_by_id(self, user_id: UserId) -> ControllerResponse[UserDTO]:
        self.logger.debug("UserController > get_user_by_id: begin", extra={"user_id": user_id})

        async def run() -> UserDTO:
            user = await self.get_user_usecase.execute(user_id)
            response = UserDTO.from_entity(user)
            self.logger.log(TRACE, "UserController > get_user_by_id: end", extra={"user_id": user_id, "found": True})
            return response

        return await self._execute(run)

    async def list_users(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> ControllerResponse[UserListDTO]:
        self.logger.debug("UserController > list_users: begin", extra={"limit": limit, "offset": offset})

        async def run() -> UserListDTO:
            result = await self.list_users_usecase.execute(limit=limit, offset=offset)
            response = UserListDTO(
                users=[UserDTO.from_entity(user) for user in result.users],
                total=result.total,
            )
            self.logger.log(
                TRACE,
                "UserController > list_users: end",
                extra={"count": len(response.users), "total": response.total},
            )
            return response

        return await self._execute(run)

    async def update_user(self, user_id: UserId, user_input: Any) -> ControllerResponse[UserDTO]:
        self.logger.debug(
            "UserController > update_user: begin",
            extra={"user_id": user_id, "input": _loggable(user_input)},
        )

        async def run() -> UserDTO:
            user = await self.update_user_usecase.execute(user_id, user_input)
            response = UserDTO.from_entity(user)
            self.logger.log(TRACE, "UserController > update_user: end", extra={"user_id": response.id})
            return response

        return await self._execute(run)

    async def delete_user(self, user_id: UserId) -> ControllerResponse[None]:
        self.logger.debug("UserController > delete_user: begin", extra={"user_id": user_id})

        async def run() -> None:
            await self.delete_user_usecase.execute(user_id)
            self.logger.log(TRACE, "UserController > delete_user: end", extra={"user_id": user_id})

        return await self._execute(run)


def _loggable(user_input: Any) -> Any:
    if hasattr(user_input, "model_dump"):
        return user_input.model_dump()
    if isinstance(user_input, dict):
        return dict(user_input)
    return repr(user_input)
