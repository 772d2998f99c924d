"""Key/value settings model."""

from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


# 日本語: JSON 値を持つ汎用設定テーブル / English: Generic key to JSON-value settings table
class Setting(SQLModel, table=True):
    __tablename__ = "setting"

    key: str = Field(primary_key=True, max_length=100)
    value: Any = Field(default=None, sa_column=Column(JSON, nullable=True))
