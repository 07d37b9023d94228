"""
Coordinate acquisition for trap deployments.

A deployment's position comes either from a point the trapper tapped on the
map or from the device's own position fix. The browser performs the
geolocation request and reports its outcome; this module picks the position
to store.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-12
"""

from typing import Optional, Tuple

from logic.validation import is_valid_position

# W3C GeolocationPositionError codes
PERMISSION_DENIED = 1
POSITION_UNAVAILABLE = 2
TIMEOUT = 3

LOCATION_ERROR_MESSAGE = (
    "Unable to get your location. Enable location access or tap the map to place the trap."
)


class LocationError(Exception):
    """Raised when no usable position can be determined."""

    def __init__(self, message: str = LOCATION_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


def resolve_position(
    clicked: Optional[Tuple[float, float]] = None,
    device: Optional[Tuple[float, float]] = None,
    geolocation_error: Optional[int] = None,
) -> Tuple[float, float]:
    """Pick the coordinates for a new deployment.

    A captured map click always wins. Without one, the device fix is used
    unless the device reported a geolocation error.

    Args:
        clicked: (latitude, longitude) of the last map click, if any.
        device: (latitude, longitude) from the device position request, if any.
        geolocation_error: Error code reported by the device request, if any.

    Returns:
        (latitude, longitude) tuple.

    Raises:
        LocationError: If no position is available or it is off the globe.
    """
    if clicked is not None:
        position = clicked
    elif device is not None and geolocation_error is None:
        position = device
    else:
        raise LocationError()

    latitude, longitude = float(position[0]), float(position[1])
    if not is_valid_position(latitude, longitude):
        raise LocationError(f"Coordinates out of range: {latitude}, {longitude}")
    return latitude, longitude
