from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional


class CreateUserRequest(BaseModel):
    email: str
    name: str


class UpdateUserRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class UserResponse(BaseModel):
    """UserDTO（dataclass）をそのまま返せるよう属性から読み込む"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    created_at: str
    updated_at: str


class UserListResponse(BaseModel):
    """UserListDTO（dataclass）から読み込む"""
    model_config = ConfigDict(from_attributes=True)

    users: List[UserResponse]
    total: int


class ErrorResponseBody(BaseModel):
    success: bool = False
    error: str
    message: str
    details: List[Dict[str, Any]] = []
