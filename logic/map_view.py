"""
Map view model for the deployment map.

Builds everything the Leaflet widget needs to draw the trapline: tiles,
center, zoom, the marker icon, and one marker with a popup per deployed
trap. Tiles themselves are drawn by the browser.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2026-01-12
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

LEAFLET_IMAGES = "https://unpkg.com/leaflet@1.9.4/dist/images"

MARKER_ICON = {
    "iconUrl": f"{LEAFLET_IMAGES}/marker-icon.png",
    "iconRetinaUrl": f"{LEAFLET_IMAGES}/marker-icon-2x.png",
    "shadowUrl": f"{LEAFLET_IMAGES}/marker-shadow.png",
    "iconSize": [25, 41],
    "iconAnchor": [12, 41],
    "popupAnchor": [1, -34],
    "shadowSize": [41, 41],
}

UNKNOWN_TRAP = "Unknown Trap"


def format_date(value: Optional[str]) -> str:
    """Format an ISO timestamp as a calendar date for popups.

    Args:
        value: ISO 8601 timestamp string.

    Returns:
        YYYY-MM-DD string, or an empty string if the value is missing or invalid.
    """
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).date().isoformat()
    except ValueError:
        return ""


def deployment_marker(deployment: Dict[str, Any]) -> Dict[str, Any]:
    trap = deployment.get("trap_inventory") or {}
    return {
        "id": deployment["id"],
        "position": [deployment["latitude"], deployment["longitude"]],
        "popup": {
            "status": deployment.get("status"),
            "title": trap.get("model") or UNKNOWN_TRAP,
            "deployed": format_date(deployment.get("deployed_at")),
            "pull_id": deployment["id"],
        },
    }


def home_base_marker(home_base: List[float]) -> Dict[str, Any]:
    return {
        "id": "home-base",
        "position": list(home_base),
        "popup": {
            "status": None,
            "title": "Home Base",
            "deployed": "",
            "message": "Drop your first pin!",
            "pull_id": None,
        },
    }


def build_map_view(deployments: List[Dict[str, Any]], map_config: Dict[str, Any]) -> Dict[str, Any]:
    """Build the map payload for a list of deployments.

    The map centers on the first deployment, or on the home base when no
    trap is deployed, in which case a single home base marker is shown.

    Args:
        deployments: Deployment dictionaries with embedded trap_inventory.
        map_config: The "map" section of the application config.

    Returns:
        Dictionary with tile layer, center, zoom, icon and markers.
    """
    home_base = list(map_config["home_base"])

    if deployments:
        center = [deployments[0]["latitude"], deployments[0]["longitude"]]
        markers = [deployment_marker(d) for d in deployments]
    else:
        center = home_base
        markers = [home_base_marker(home_base)]

    return {
        "tile_url": map_config["tile_url"],
        "attribution": map_config["attribution"],
        "zoom": map_config["zoom"],
        "center": center,
        "icon": MARKER_ICON,
        "markers": markers,
    }
