from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...actions.user_actions import (
    create_user_action,
    delete_user_action,
    get_current_user_action,
    get_user_action,
    list_users_action,
    update_user_action,
)
from ..dependencies import get_bearer_token
from ..schemas import (
    CreateUserRequest,
    ErrorResponseBody,
    UpdateUserRequest,
    UserListResponse,
    UserResponse,
)

router = APIRouter(
    prefix="/api/v1/users",
    tags=["users"],
    responses={
        400: {"model": ErrorResponseBody},
        404: {"model": ErrorResponseBody},
        409: {"model": ErrorResponseBody},
    },
)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(req: CreateUserRequest):
    """
    新規ユーザー登録
    """
    return await create_user_action(req.model_dump())


@router.get("", response_model=UserListResponse)
async def list_users(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
):
    """
    ユーザー一覧（limit: 1-100, offset: 0以上）
    """
    return await list_users_action(limit, offset)


@router.get("/me", response_model=Optional[UserResponse])
async def get_current_user(token: Optional[str] = Depends(get_bearer_token)):
    """
    現在の認証済みユーザー。未認証なら null
    """
    return await get_current_user_action(token)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str):
    return await get_user_action(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, req: UpdateUserRequest):
    """
    ユーザー情報の部分更新
    """
    return await update_user_action(user_id, req.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str):
    await delete_user_action(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
