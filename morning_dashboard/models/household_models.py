"""Household SQLModel models: children and their daily routines."""

import datetime
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from .schedule_models import EventRoutineItem


# 日本語: ダッシュボードに表示する子ども / English: Child shown as one checklist column on the dashboard
class Child(SQLModel, table=True):
    __tablename__ = "child"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    avatar_color: str = Field(default="#3B82F6", max_length=20)
    display_order: int = Field(default=0)

    # 日本語: 子ども削除時に日課とイベント用日課も削除 / English: Deleting a child removes daily and event routines
    routine_items: list["RoutineItem"] = Relationship(
        back_populates="child",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "RoutineItem.display_order",
        },
    )
    event_routine_items: list["EventRoutineItem"] = Relationship(
        back_populates="child",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "EventRoutineItem.display_order",
        },
    )


# 日本語: 毎朝の日課チェック項目 / English: One recurring daily checklist task
class RoutineItem(SQLModel, table=True):
    __tablename__ = "routine_item"

    id: int | None = Field(default=None, primary_key=True)
    child_id: int = Field(foreign_key="child.id", index=True)
    name: str = Field(max_length=100)
    display_order: int = Field(default=0)

    child: Child | None = Relationship(back_populates="routine_items")
    completions: list["RoutineCompletion"] = Relationship(
        back_populates="routine_item", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


# 日本語: 日付単位の完了記録 / English: Per-date completion record for a routine item
class RoutineCompletion(SQLModel, table=True):
    __tablename__ = "routine_completion"

    id: int | None = Field(default=None, primary_key=True)
    routine_item_id: int = Field(foreign_key="routine_item.id", index=True)
    completion_date: datetime.date
    completed_at: datetime.datetime = Field(default_factory=datetime.datetime.now)

    routine_item: RoutineItem | None = Relationship(back_populates="completions")


# 日本語: 子どもへ日課を配るためのテンプレート / English: Reusable name used to seed routine items
class RoutineItemTemplate(SQLModel, table=True):
    __tablename__ = "routine_item_template"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True)
    display_order: int = Field(default=0)
