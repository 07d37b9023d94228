"""
Landowner permission API routes.

This module contains endpoints for managing private land access contacts
and for downloading the signed permission slip as a PDF.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-14
"""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import LandPermission, Profile, User, get_db
from logic.config import load_config
from logic.contract import contract_filename, render_contract_html
from logic.validation import MAX_NAME_LEN, sanitise_text
from server import export
from server.auth import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/landowners")


class LandownerIn(BaseModel):
    """Request model for the Add/Edit Landowner form."""

    landowner_name: str
    phone: Optional[str] = None
    property_location: str


def get_owned_permission(db: Session, user: User, permission_id: str) -> LandPermission:
    permission = (
        db.query(LandPermission)
        .filter(LandPermission.id == permission_id, LandPermission.user_id == user.id)
        .first()
    )
    if not permission:
        raise HTTPException(404, f"Landowner '{permission_id}' not found")
    return permission


def _apply(permission: LandPermission, data: LandownerIn):
    permission.landowner_name = sanitise_text(
        data.landowner_name, "Name", required=True, max_len=MAX_NAME_LEN
    )
    permission.phone = sanitise_text(data.phone, "Phone", max_len=40)
    permission.property_location = sanitise_text(
        data.property_location, "Property location", required=True
    )


@router.get("")
def list_landowners(user: User = Depends(require_user), db: Session = Depends(get_db)):
    """List the user's landowner contacts, newest first."""
    permissions = (
        db.query(LandPermission)
        .filter(LandPermission.user_id == user.id)
        .order_by(LandPermission.created_at.desc(), LandPermission.id.desc())
        .all()
    )
    return {"landowners": [p.to_dict() for p in permissions]}


@router.post("")
def add_landowner(data: LandownerIn, user: User = Depends(require_user), db: Session = Depends(get_db)):
    permission = LandPermission(user_id=user.id, status="Active")
    _apply(permission, data)
    db.add(permission)
    db.commit()
    db.refresh(permission)

    logger.info("User %s added landowner %s", user.id, permission.id)
    return {"success": True, "message": "Contact added successfully!", "landowner": permission.to_dict()}


@router.put("/{permission_id}")
def update_landowner(
    permission_id: str,
    data: LandownerIn,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Update a contact's name, phone and location. The status is left as is."""
    permission = get_owned_permission(db, user, permission_id)
    _apply(permission, data)
    db.commit()
    db.refresh(permission)
    return {"success": True, "message": "Contact updated!", "landowner": permission.to_dict()}


@router.delete("/{permission_id}")
def delete_landowner(
    permission_id: str,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    permission = get_owned_permission(db, user, permission_id)
    db.delete(permission)
    db.commit()

    logger.info("User %s deleted landowner %s", user.id, permission_id)
    return {"success": True, "message": "Contact deleted"}


@router.get("/{permission_id}/contract.pdf")
async def download_contract(
    permission_id: str,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Generate the trapping permission agreement for a landowner.

    The trapper's credentials are filled in from their profile.

    Returns:
        PDF document as an attachment.
    """
    permission = get_owned_permission(db, user, permission_id)
    profile = db.get(Profile, user.id)
    config = load_config()

    html = render_contract_html(
        permission.to_dict(),
        profile.to_dict() if profile else None,
        jurisdiction=config["jurisdiction"],
        season=config["trapping_season"],
    )
    pdf_bytes = await export.render_pdf(html)

    filename = contract_filename(permission.landowner_name)
    logger.info("Generated permission slip %s for user %s", filename, user.id)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}",
            "Cache-Control": "no-cache",
        },
    )
