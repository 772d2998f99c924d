"""Admin operations for children, routine items and routine templates."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Sequence

from sqlalchemy import func
from sqlmodel import Session, select

from morning_dashboard.models import Child, RoutineItem, RoutineItemTemplate
from morning_dashboard.services.errors import InvalidInputError, RecordNotFoundError

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
HEX_COLOR_PATTERN = re.compile(r"#[0-9A-Fa-f]{6}")


def _clean_name(value: Any, label: str = "name") -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{label} is required")
    name = value.strip()
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidInputError(f"{label} must be at most {NAME_MAX_LENGTH} characters")
    return name


def _clean_color(value: Any, label: str = "avatar_color") -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{label} is required")
    color = value.strip()
    if not HEX_COLOR_PATTERN.fullmatch(color):
        raise InvalidInputError(f"{label} must be a hex color such as #3B82F6")
    return color


def _clean_order(value: Any) -> int:
    # 日本語: bool は int のサブクラスなので明示的に除外 / English: bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError("display_order must be a non-negative integer")
    return value


def _next_order(db: Session, column, *criteria) -> int:
    statement = select(func.max(column))
    if criteria:
        statement = statement.where(*criteria)
    current = db.exec(statement).first()
    return 0 if current is None else current + 1


def get_child(db: Session, child_id: int) -> Child:
    child = db.get(Child, child_id)
    if child is None:
        raise RecordNotFoundError(f"Child {child_id} not found")
    return child


def list_children(db: Session) -> List[Child]:
    return list(db.exec(select(Child).order_by(Child.display_order, Child.id)).all())


def create_child(
    db: Session,
    name: Any,
    avatar_color: Any = "#3B82F6",
    display_order: Any = None,
) -> Child:
    order = (
        _next_order(db, Child.display_order) if display_order is None else _clean_order(display_order)
    )
    child = Child(name=_clean_name(name), avatar_color=_clean_color(avatar_color), display_order=order)
    db.add(child)
    db.commit()
    db.refresh(child)
    return child


def update_child(db: Session, child_id: int, **changes: Any) -> Child:
    child = get_child(db, child_id)
    if "name" in changes:
        child.name = _clean_name(changes["name"])
    if "avatar_color" in changes:
        child.avatar_color = _clean_color(changes["avatar_color"])
    if "display_order" in changes:
        child.display_order = _clean_order(changes["display_order"])
    db.add(child)
    db.commit()
    db.refresh(child)
    return child


def delete_child(db: Session, child_id: int) -> None:
    """Delete a child with its daily and event routine items and their completions."""
    child = get_child(db, child_id)
    db.delete(child)
    db.commit()
    logger.info("Deleted child %s with its routine items", child_id)


def get_routine_item(db: Session, item_id: int) -> RoutineItem:
    item = db.get(RoutineItem, item_id)
    if item is None:
        raise RecordNotFoundError(f"Routine item {item_id} not found")
    return item


def list_routine_items(db: Session, child_id: int) -> List[RoutineItem]:
    get_child(db, child_id)
    statement = (
        select(RoutineItem)
        .where(RoutineItem.child_id == child_id)
        .order_by(RoutineItem.display_order, RoutineItem.id)
    )
    return list(db.exec(statement).all())


def add_routine_item(db: Session, child_id: int, name: Any, display_order: Any = None) -> RoutineItem:
    get_child(db, child_id)
    if display_order is None:
        order = _next_order(db, RoutineItem.display_order, RoutineItem.child_id == child_id)
    else:
        order = _clean_order(display_order)
    item = RoutineItem(child_id=child_id, name=_clean_name(name), display_order=order)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_routine_item(db: Session, item_id: int, **changes: Any) -> RoutineItem:
    item = get_routine_item(db, item_id)
    if "name" in changes:
        item.name = _clean_name(changes["name"])
    if "display_order" in changes:
        item.display_order = _clean_order(changes["display_order"])
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def delete_routine_item(db: Session, item_id: int) -> None:
    db.delete(get_routine_item(db, item_id))
    db.commit()


def reorder_routine_items(db: Session, child_id: int, item_ids: Sequence[int]) -> List[RoutineItem]:
    # 日本語: 他の子の項目 ID は無視 / English: Ids owned by another child are ignored
    items = {item.id: item for item in list_routine_items(db, child_id)}
    for index, item_id in enumerate(item_ids):
        item = items.get(item_id)
        if item is not None:
            item.display_order = index
            db.add(item)
    db.commit()
    return list_routine_items(db, child_id)


def get_template(db: Session, template_id: int) -> RoutineItemTemplate:
    template = db.get(RoutineItemTemplate, template_id)
    if template is None:
        raise RecordNotFoundError(f"Routine template {template_id} not found")
    return template


def list_templates(db: Session) -> List[RoutineItemTemplate]:
    statement = select(RoutineItemTemplate).order_by(
        RoutineItemTemplate.display_order, RoutineItemTemplate.name
    )
    return list(db.exec(statement).all())


def _ensure_unique_template_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    statement = select(RoutineItemTemplate).where(RoutineItemTemplate.name == name)
    existing = db.exec(statement).first()
    if existing is not None and existing.id != exclude_id:
        raise InvalidInputError(f"A template named '{name}' already exists")


def create_template(db: Session, name: Any) -> RoutineItemTemplate:
    clean = _clean_name(name)
    _ensure_unique_template_name(db, clean)
    template = RoutineItemTemplate(
        name=clean, display_order=_next_order(db, RoutineItemTemplate.display_order)
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def rename_template(db: Session, template_id: int, name: Any) -> RoutineItemTemplate:
    template = get_template(db, template_id)
    clean = _clean_name(name)
    _ensure_unique_template_name(db, clean, exclude_id=template.id)
    template.name = clean
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def delete_template(db: Session, template_id: int) -> None:
    db.delete(get_template(db, template_id))
    db.commit()


def reorder_templates(db: Session, template_ids: Sequence[int]) -> List[RoutineItemTemplate]:
    templates = {template.id: template for template in list_templates(db)}
    for index, template_id in enumerate(template_ids):
        template = templates.get(template_id)
        if template is not None:
            template.display_order = index
            db.add(template)
    db.commit()
    return list_templates(db)


def _apply_template(db: Session, template: RoutineItemTemplate, child: Child) -> RoutineItem | None:
    duplicate = db.exec(
        select(RoutineItem).where(RoutineItem.child_id == child.id, RoutineItem.name == template.name)
    ).first()
    if duplicate is not None:
        return None
    item = RoutineItem(
        child_id=child.id,
        name=template.name,
        display_order=_next_order(db, RoutineItem.display_order, RoutineItem.child_id == child.id),
    )
    db.add(item)
    db.flush()
    return item


def apply_template_to_child(db: Session, template_id: int, child_id: int) -> RoutineItem | None:
    """Copy a template into a child's routine; None when the child already has it."""
    template = get_template(db, template_id)
    child = get_child(db, child_id)
    item = _apply_template(db, template, child)
    if item is None:
        logger.info("Child %s already has routine item '%s'", child_id, template.name)
        return None
    db.commit()
    db.refresh(item)
    return item


def apply_template_to_all_children(db: Session, template_id: int) -> List[RoutineItem]:
    template = get_template(db, template_id)
    created = []
    for child in list_children(db):
        item = _apply_template(db, template, child)
        if item is not None:
            created.append(item)
    db.commit()
    for item in created:
        db.refresh(item)
    return created


__all__ = [
    "get_child",
    "list_children",
    "create_child",
    "update_child",
    "delete_child",
    "get_routine_item",
    "list_routine_items",
    "add_routine_item",
    "update_routine_item",
    "delete_routine_item",
    "reorder_routine_items",
    "get_template",
    "list_templates",
    "create_template",
    "rename_template",
    "delete_template",
    "reorder_templates",
    "apply_template_to_child",
    "apply_template_to_all_children",
]
