"""
Trapping license list conversion.

A profile stores all of a trapper's license numbers in a single delimited
string. These helpers convert between that string and a list.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-12
"""

from typing import Iterable, List, Optional

from fastapi import HTTPException

LICENSE_DELIMITER = ","
MAX_LICENSE_LEN = 32


def _normalise(entries: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for entry in entries:
        entry = entry.strip()
        if not entry or entry in seen:
            continue
        seen.add(entry)
        result.append(entry)
    return result


def split_licenses(value: Optional[str]) -> List[str]:
    """Parse a stored license string into a list of license numbers.

    Blank entries are dropped and duplicates keep their first position.

    Args:
        value: Delimited license string, or None.

    Returns:
        List of license numbers.
    """
    if not value:
        return []
    return _normalise(value.split(LICENSE_DELIMITER))


def join_licenses(licenses: Iterable[str]) -> str:
    """Join license numbers into the stored string form.

    Args:
        licenses: License numbers as entered.

    Returns:
        Comma-and-space separated string.

    Raises:
        HTTPException: If a license number contains the delimiter or is too long.
    """
    licenses = list(licenses)
    for entry in licenses:
        if LICENSE_DELIMITER in entry:
            raise HTTPException(400, f"License number cannot contain '{LICENSE_DELIMITER}': {entry}")
        if len(entry.strip()) > MAX_LICENSE_LEN:
            raise HTTPException(400, "License number too long")
    return f"{LICENSE_DELIMITER} ".join(_normalise(licenses))
