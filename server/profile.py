"""
Trapper profile API routes.

The profile holds the trapper's legal credentials. License numbers are
exchanged as a list and stored as one delimited string.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-12
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import Profile, User, get_db, utcnow
from logic.licenses import join_licenses, split_licenses
from logic.validation import MAX_NAME_LEN, sanitise_text
from server.auth import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile")


class ProfileIn(BaseModel):
    """Request model for the credentials form.

    Attributes:
        trapping_licenses: License numbers as a list, or the raw
            comma-separated text typed into the form.
    """

    full_name: Optional[str] = None
    trapping_licenses: Union[List[str], str, None] = None
    outdoors_card: Optional[str] = None
    drivers_license: Optional[str] = None


def get_or_create_profile(db: Session, user: User) -> Profile:
    """Fetch the user's profile, creating a blank one if none exists."""
    profile = db.get(Profile, user.id)
    if profile is None:
        profile = Profile(id=user.id)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        logger.info("Created blank profile for user %s", user.id)
    return profile


@router.get("")
def get_profile(user: User = Depends(require_user), db: Session = Depends(get_db)):
    return {"profile": get_or_create_profile(db, user).to_dict()}


@router.put("")
def save_profile(data: ProfileIn, user: User = Depends(require_user), db: Session = Depends(get_db)):
    """Save the trapper's credentials, creating the profile if needed.

    Returns:
        Dictionary with the saved profile.
    """
    licenses = data.trapping_licenses
    if isinstance(licenses, str):
        licenses = split_licenses(licenses)

    profile = db.get(Profile, user.id)
    if profile is None:
        profile = Profile(id=user.id)
        db.add(profile)

    profile.full_name = sanitise_text(data.full_name, "Full name", max_len=MAX_NAME_LEN)
    profile.trapping_license = join_licenses(licenses or []) or None
    profile.outdoors_card = sanitise_text(data.outdoors_card, "Outdoors card", max_len=64)
    profile.drivers_license = sanitise_text(data.drivers_license, "Driver's license", max_len=64)
    profile.updated_at = utcnow()
    db.commit()
    db.refresh(profile)

    logger.info("Updated credentials for user %s", user.id)
    return {"success": True, "message": "Licenses Updated Successfully", "profile": profile.to_dict()}
