"""
Operating area API routes.

This module contains endpoints for listing, creating, updating, and deleting
the user's operating areas. Deleting an area also deletes its harvest logs
and trap deployments.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import HarvestLog, OperatingArea, TrapDeployment, User, get_db
from logic.validation import AREA_TYPES, MAX_NAME_LEN, sanitise_choice, sanitise_text
from server.auth import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/areas")


class AreaIn(BaseModel):
    """Request model for the operating area form."""

    name: str
    district: Optional[str] = None
    area_type: str = AREA_TYPES[0]
    license_number: Optional[str] = None


def get_owned_area(db: Session, user: User, area_id: str) -> OperatingArea:
    """Fetch an area belonging to the user.

    Raises:
        HTTPException: 404 if the area does not exist or belongs to someone else.
    """
    area = (
        db.query(OperatingArea)
        .filter(OperatingArea.id == area_id, OperatingArea.user_id == user.id)
        .first()
    )
    if not area:
        raise HTTPException(404, f"Operating area '{area_id}' not found")
    return area


def _apply(area: OperatingArea, data: AreaIn):
    area.name = sanitise_text(data.name, "Name", required=True, max_len=MAX_NAME_LEN)
    area.district = sanitise_text(data.district, "District", max_len=MAX_NAME_LEN)
    area.area_type = sanitise_choice(data.area_type, AREA_TYPES, "Area type")
    area.license_number = sanitise_text(data.license_number, "License number", max_len=64)


@router.get("")
def list_areas(user: User = Depends(require_user), db: Session = Depends(get_db)):
    """List the user's operating areas, oldest first.

    Returns:
        Dictionary with the list of areas and the allowed area types.
    """
    areas = (
        db.query(OperatingArea)
        .filter(OperatingArea.user_id == user.id)
        .order_by(OperatingArea.created_at.asc(), OperatingArea.id.asc())
        .all()
    )
    return {"areas": [a.to_dict() for a in areas], "area_types": list(AREA_TYPES)}


@router.post("")
def create_area(data: AreaIn, user: User = Depends(require_user), db: Session = Depends(get_db)):
    area = OperatingArea(user_id=user.id)
    _apply(area, data)
    db.add(area)
    db.commit()
    db.refresh(area)

    logger.info("User %s created operating area %s", user.id, area.id)
    return {"success": True, "message": "Area added!", "area": area.to_dict()}


@router.put("/{area_id}")
def update_area(
    area_id: str,
    data: AreaIn,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    area = get_owned_area(db, user, area_id)
    _apply(area, data)
    db.commit()
    db.refresh(area)
    return {"success": True, "message": "Area updated!", "area": area.to_dict()}


@router.delete("/{area_id}")
def delete_area(area_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    """Delete an operating area together with its logs and deployments.

    All three deletes are committed in one transaction.

    Args:
        area_id: ID of the area to delete.

    Returns:
        Dictionary with success status and the number of removed children.
    """
    area = get_owned_area(db, user, area_id)

    logs_deleted = (
        db.query(HarvestLog)
        .filter(HarvestLog.operating_area_id == area.id)
        .delete(synchronize_session=False)
    )
    deployments_deleted = (
        db.query(TrapDeployment)
        .filter(TrapDeployment.operating_area_id == area.id)
        .delete(synchronize_session=False)
    )
    db.delete(area)
    db.commit()

    logger.info(
        "User %s deleted operating area %s (%d logs, %d deployments)",
        user.id, area_id, logs_deleted, deployments_deleted,
    )
    return {
        "success": True,
        "message": "Area deleted",
        "logs_deleted": logs_deleted,
        "deployments_deleted": deployments_deleted,
    }
