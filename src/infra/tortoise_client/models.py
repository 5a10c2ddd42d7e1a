"""
Tortoise ORM models for the user service
"""
from tortoise.models import Model
from tortoise import fields

from ...domain.entity.user_entity import utc_now


class User(Model):
    id = fields.IntField(pk=True)
    email = fields.CharField(max_length=255, unique=True)
    name = fields.CharField(max_length=100)
    created_at = fields.DatetimeField(default=utc_now)
    updated_at = fields.DatetimeField(default=utc_now)

    class Meta:
        table = "users"
