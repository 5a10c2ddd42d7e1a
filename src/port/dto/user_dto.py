"""
ユーザー関連のDTOと入力スキーマ

入力スキーマ（CreateUserDTO / UpdateUserDTO）は pydantic モデルで定義し、
検証ルールの唯一の定義元とする。出力用の UserDTO は API 境界向けに
id を文字列、日時を ISO-8601 文字列で保持する。
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import UserValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 100


def _check_email(value: str) -> str:
    if not value:
        raise PydanticCustomError("email_required", "Email is required")
    if len(value) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError("email_too_long", "Email is too long")
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("invalid_email", "Invalid email format")
    return value


def _check_name(value: str, required_message: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("name_required", required_message)
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError("name_too_long", "Name is too long")
    return value


class CreateUserDTO(BaseModel):
    """
    ユーザー登録用DTO
    """
    model_config = ConfigDict(frozen=True)

    email: str
    name: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v, "Name is required")


class UpdateUserDTO(BaseModel):
    """
    ユーザー更新用DTO（部分更新）
    """
    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_email(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_name(v, "Name cannot be empty")

    def changes(self) -> Dict[str, str]:
        """明示的に指定されたフィールドのみを返す"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


@dataclass
class UserDTO:
    """
    ユーザー情報DTO
    """
    id: str
    email: str
    name: str
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, user: UserEntity) -> "UserDTO":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            created_at=user.created_at.isoformat(),
            updated_at=user.updated_at.isoformat(),
        )


@dataclass
class ListUsersResult:
    """ユーザー一覧の取得結果"""
    users: List[UserEntity]
    total: int


@dataclass
class UserListDTO:
    """ユーザー一覧DTO"""
    users: List[UserDTO]
    total: int


def validation_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    """pydantic の検証エラーを {field, message, type} のリストへ変換"""
    return [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def parse_create_user_input(data: Union[CreateUserDTO, Mapping[str, Any], Any]) -> CreateUserDTO:
    if isinstance(data, CreateUserDTO):
        return data
    try:
        return CreateUserDTO.model_validate(data)
    except ValidationError as e:
        raise UserValidationError("Invalid input", validation_errors(e)) from e


def parse_update_user_input(data: Union[UpdateUserDTO, Mapping[str, Any], Any]) -> UpdateUserDTO:
    if isinstance(data, UpdateUserDTO):
        return data
    try:
        return UpdateUserDTO.model_validate(data)
    except ValidationError as e:
        raise UserValidationError("Invalid input", validation_errors(e)) from e
