"""
Trap deployment and map API routes.

This module contains endpoints for placing traps on the map, pulling them,
and building the map view the dashboard draws.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-12
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import TrapDeployment, TrapInventory, User, get_db
from logic.config import load_config
from logic.geolocation import LocationError, resolve_position
from logic.map_view import build_map_view
from server.areas import get_owned_area
from server.auth import require_user
from server.inventory import get_owned_item

logger = logging.getLogger(__name__)

router = APIRouter()


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class DeploymentIn(BaseModel):
    """Request model for deploying a trap.

    Attributes:
        clicked: Position of the last map click, if the trapper tapped the map.
        device: Position returned by the device geolocation request.
        geolocation_error: Error code the device request failed with.
    """

    operating_area_id: str
    trap_inventory_id: str
    clicked: Optional[Coordinates] = None
    device: Optional[Coordinates] = None
    geolocation_error: Optional[int] = None
    status: str = "Active"


def _as_tuple(coords: Optional[Coordinates]):
    return (coords.latitude, coords.longitude) if coords is not None else None


def fetch_deployments(db: Session, user: User, area_id: Optional[str] = None) -> List[dict]:
    """Load the user's deployments with their inventory item, newest first.

    Args:
        db: Database session.
        user: Owning user.
        area_id: Optional operating area to restrict to.

    Returns:
        List of deployment dictionaries.
    """
    query = (
        db.query(TrapDeployment, TrapInventory)
        .outerjoin(TrapInventory, TrapInventory.id == TrapDeployment.trap_inventory_id)
        .filter(TrapDeployment.user_id == user.id)
    )
    if area_id:
        query = query.filter(TrapDeployment.operating_area_id == area_id)

    rows = query.order_by(TrapDeployment.deployed_at.desc(), TrapDeployment.id.desc()).all()
    return [deployment.to_dict(trap) for deployment, trap in rows]


@router.get("/api/deployments")
def list_deployments(
    area_id: Optional[str] = None,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    if area_id:
        get_owned_area(db, user, area_id)
    return {"deployments": fetch_deployments(db, user, area_id)}


@router.post("/api/deployments")
def deploy_trap(data: DeploymentIn, user: User = Depends(require_user), db: Session = Depends(get_db)):
    """Place a trap on the map.

    Uses the captured map click when there is one, otherwise the device
    position.

    Returns:
        Dictionary with the new deployment.

    Raises:
        HTTPException: 400 if no position can be determined, 404 for an
            unknown area or inventory item.
    """
    area = get_owned_area(db, user, data.operating_area_id)
    item = get_owned_item(db, user, data.trap_inventory_id)

    try:
        latitude, longitude = resolve_position(
            clicked=_as_tuple(data.clicked),
            device=_as_tuple(data.device),
            geolocation_error=data.geolocation_error,
        )
    except LocationError as e:
        logger.info("Deployment rejected for user %s: %s", user.id, e.message)
        raise HTTPException(400, e.message)

    deployment = TrapDeployment(
        user_id=user.id,
        operating_area_id=area.id,
        trap_inventory_id=item.id,
        latitude=latitude,
        longitude=longitude,
        status=(data.status or "Active").strip() or "Active",
    )
    db.add(deployment)
    db.commit()
    db.refresh(deployment)

    logger.info("Deployed %s at %.5f, %.5f in area %s", item.model, latitude, longitude, area.id)
    return {"success": True, "message": "Trap deployed!", "deployment": deployment.to_dict(item)}


@router.delete("/api/deployments/{deployment_id}")
def pull_trap(deployment_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    """Pull a trap, removing its deployment record."""
    deployment = (
        db.query(TrapDeployment)
        .filter(TrapDeployment.id == deployment_id, TrapDeployment.user_id == user.id)
        .first()
    )
    if not deployment:
        raise HTTPException(404, f"Deployment '{deployment_id}' not found")

    db.delete(deployment)
    db.commit()

    logger.info("User %s pulled trap %s", user.id, deployment_id)
    return {"success": True, "message": "Trap pulled"}


@router.get("/api/map")
def get_map(
    area_id: Optional[str] = None,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Get the map view of the user's deployed traps.

    Returns:
        Dictionary containing tile layer, center, zoom, icon and markers.
    """
    if area_id:
        get_owned_area(db, user, area_id)
    config = load_config()
    return build_map_view(fetch_deployments(db, user, area_id), config["map"])
