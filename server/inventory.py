"""
Trap inventory API routes.

This module contains endpoints for managing the trap shed: the gear the
user owns, grouped by category.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-05
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import TrapDeployment, TrapInventory, User, get_db
from logic.validation import (
    MAX_NAME_LEN,
    TRAP_CATEGORIES,
    sanitise_choice,
    sanitise_quantity,
    sanitise_text,
)
from server.auth import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/inventory")


class GearIn(BaseModel):
    """Request model for the Add/Edit Gear form."""

    category: str = TRAP_CATEGORIES[0]
    model: str
    total_quantity: Any = None
    notes: Optional[str] = None


def get_owned_item(db: Session, user: User, item_id: str) -> TrapInventory:
    item = (
        db.query(TrapInventory)
        .filter(TrapInventory.id == item_id, TrapInventory.user_id == user.id)
        .first()
    )
    if not item:
        raise HTTPException(404, f"Inventory item '{item_id}' not found")
    return item


def _apply(item: TrapInventory, data: GearIn):
    item.category = sanitise_choice(data.category, TRAP_CATEGORIES, "Category")
    item.model = sanitise_text(data.model, "Model", required=True, max_len=MAX_NAME_LEN)
    item.total_quantity = sanitise_quantity(data.total_quantity)
    item.notes = sanitise_text(data.notes, "Notes")


@router.get("")
def list_inventory(user: User = Depends(require_user), db: Session = Depends(get_db)):
    """List the trap shed ordered by category, then model.

    Returns:
        Dictionary with the items, the total gear count, and the categories.
    """
    items = (
        db.query(TrapInventory)
        .filter(TrapInventory.user_id == user.id)
        .order_by(TrapInventory.category.asc(), TrapInventory.model.asc())
        .all()
    )
    return {
        "items": [i.to_dict() for i in items],
        "total_gear": sum(i.total_quantity or 0 for i in items),
        "categories": list(TRAP_CATEGORIES),
    }


@router.post("")
def add_gear(data: GearIn, user: User = Depends(require_user), db: Session = Depends(get_db)):
    item = TrapInventory(user_id=user.id)
    _apply(item, data)
    db.add(item)
    db.commit()
    db.refresh(item)

    logger.info("User %s added %d x %s", user.id, item.total_quantity, item.model)
    return {"success": True, "message": "Gear added to shed!", "item": item.to_dict()}


@router.put("/{item_id}")
def update_gear(
    item_id: str,
    data: GearIn,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    item = get_owned_item(db, user, item_id)
    _apply(item, data)
    db.commit()
    db.refresh(item)
    return {"success": True, "message": "Gear updated!", "item": item.to_dict()}


@router.delete("/{item_id}")
def delete_gear(item_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    """Remove gear from the shed.

    Raises:
        HTTPException: 409 while any of this gear is deployed.
    """
    item = get_owned_item(db, user, item_id)

    deployed = (
        db.query(TrapDeployment)
        .filter(TrapDeployment.trap_inventory_id == item.id)
        .count()
    )
    if deployed:
        raise HTTPException(409, f"{deployed} trap(s) of this gear are deployed. Pull them first.")

    db.delete(item)
    db.commit()

    logger.info("User %s removed inventory item %s", user.id, item_id)
    return {"success": True, "message": "Gear removed from shed"}
