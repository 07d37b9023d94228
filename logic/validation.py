"""
Validation and sanitization utilities.

This module contains the allowed values for form fields and functions for
sanitizing user input before it is written.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""

import re
from typing import Any, Optional

from fastapi import HTTPException

AREA_TYPES = ("Registered Line", "Private Land")

SPECIES = ("Beaver", "Marten", "Fisher", "Otter", "Wolf")
SEXES = ("Male", "Female", "Unknown")

TRAP_CATEGORIES = (
    "Body Grip (e.g., 110, 220, 330)",
    "Foothold / Leg-hold",
    "Snare / Cable Restraint",
    "Dog Proof (DP)",
    "Live / Cage Trap",
    "Other Equipment",
)

MAX_NAME_LEN = 120
MAX_TEXT_LEN = 255
MIN_PASSWORD_LEN = 6
MAX_QUANTITY = 1_000_000

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def sanitise_text(value: Optional[str], field: str, *, required: bool = False,
                  max_len: int = MAX_TEXT_LEN) -> Optional[str]:
    """Sanitize and validate a free-text field.

    Args:
        value: Raw value from the form.
        field: Field label used in error messages.
        required: Whether an empty value is rejected.
        max_len: Maximum accepted length.

    Returns:
        Stripped text, or None for an empty optional field.

    Raises:
        HTTPException: If a required field is empty or the value is too long.
    """
    value = (value or "").strip()
    if not value:
        if required:
            raise HTTPException(400, f"{field} is required")
        return None
    if len(value) > max_len:
        raise HTTPException(400, f"{field} too long")
    return value


def sanitise_choice(value: Any, choices, field: str) -> str:
    if value not in choices:
        raise HTTPException(400, f"Invalid {field.lower()}: {value}")
    return value


def sanitise_quantity(value: Any) -> int:
    """Convert a quantity form value to a non-negative integer.

    Numeric strings are accepted; anything that does not parse as a number
    is stored as 0, the same as an empty number input.

    Raises:
        HTTPException: If the quantity is missing, negative or too large.
    """
    if value is None or value == "":
        raise HTTPException(400, "Quantity is required")
    if isinstance(value, bool):
        return 0
    try:
        quantity = value if isinstance(value, int) else int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    if quantity < 0:
        raise HTTPException(400, "Quantity cannot be negative")
    if quantity > MAX_QUANTITY:
        raise HTTPException(400, "Quantity too large")
    return quantity


def sanitise_email(value: str) -> str:
    value = (value or "").strip().lower()
    if not EMAIL_RE.match(value):
        raise HTTPException(400, "Invalid email address")
    return value


def validate_password(value: str) -> str:
    if len(value or "") < MIN_PASSWORD_LEN:
        raise HTTPException(400, f"Password should be at least {MIN_PASSWORD_LEN} characters")
    return value


def is_valid_position(latitude: float, longitude: float) -> bool:
    """Check if a coordinate pair lies on the globe.

    Args:
        latitude: Degrees north.
        longitude: Degrees east.

    Returns:
        True if both values are in range, False otherwise.
    """
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0
