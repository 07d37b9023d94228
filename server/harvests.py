"""
Harvest log API routes.

Harvest logs are inserted from the dashboard form and never edited. They
are only removed when their operating area is deleted.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import HarvestLog, User, get_db, utcnow
from logic.validation import SEXES, SPECIES, sanitise_choice
from server.areas import get_owned_area
from server.auth import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/areas")


class HarvestIn(BaseModel):
    """Request model for the Log Harvest form."""

    species: str = SPECIES[0]
    sex: str = SEXES[0]


def _area_logs(db: Session, area_id: str):
    return (
        db.query(HarvestLog)
        .filter(HarvestLog.operating_area_id == area_id)
        .order_by(HarvestLog.created_at.desc(), HarvestLog.id.desc())
        .all()
    )


@router.get("/{area_id}/logs")
def list_logs(area_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    """List the harvest logs of an area, newest first.

    Args:
        area_id: ID of the selected operating area.

    Returns:
        Dictionary with the area, the season total, and the logs.
    """
    area = get_owned_area(db, user, area_id)
    logs = _area_logs(db, area.id)
    return {
        "area": area.to_dict(),
        "total": len(logs),
        "logs": [log.to_dict() for log in logs],
        "species": list(SPECIES),
        "sexes": list(SEXES),
    }


@router.post("/{area_id}/logs")
def log_harvest(
    area_id: str,
    data: HarvestIn,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Record one harvested animal in an area.

    The harvest time is the moment the log is saved.

    Returns:
        Dictionary with the new log.
    """
    area = get_owned_area(db, user, area_id)

    now = utcnow()
    log = HarvestLog(
        operating_area_id=area.id,
        species=sanitise_choice(data.species, SPECIES, "Species"),
        sex=sanitise_choice(data.sex, SEXES, "Sex"),
        date_harvested=now,
        created_at=now,
    )
    db.add(log)
    db.commit()
    db.refresh(log)

    logger.info("Logged %s (%s) in area %s", log.species, log.sex, area.id)
    return {"success": True, "message": "Harvest Logged!", "log": log.to_dict()}
