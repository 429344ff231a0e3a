"""
Distance Rules — postal-code distance lookups for the geographic scorer.

Locations are resolved through the static ZIP table below. A location with
no ZIP code falls back to a representative ZIP for its city name. Anything
still unresolved yields ``None`` ("unknown") and is never approximated.
"""

from __future__ import annotations

import logging
import math
import re
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3959.0
URBAN_AVERAGE_MPH = 30.0

_ZIP_PATTERN = re.compile(r"\b\d{5}(?:-\d{4})?\b")


class Coordinates(NamedTuple):
    lat: float
    lng: float


ZIP_COORDINATES: dict[str, Coordinates] = {
    # Glendale
    "91201": Coordinates(34.1689, -118.2452),
    "91202": Coordinates(34.1633, -118.2582),
    "91203": Coordinates(34.1494, -118.2508),
    "91204": Coordinates(34.1422, -118.2653),
    "91205": Coordinates(34.1425, -118.2372),
    "91206": Coordinates(34.1308, -118.2556),
    "91207": Coordinates(34.1550, -118.2333),
    "91208": Coordinates(34.1611, -118.2711),
    # Los Angeles
    "90001": Coordinates(33.9731, -118.2479),
    "90012": Coordinates(34.0614, -118.2385),
    "90028": Coordinates(34.0928, -118.3287),
    "90071": Coordinates(34.0522, -118.2551),
    "90045": Coordinates(33.9530, -118.3960),
    # Westside / South Bay
    "90210": Coordinates(34.0901, -118.4065),
    "90245": Coordinates(33.9425, -118.3956),
    "90250": Coordinates(33.8755, -118.3287),
    "90260": Coordinates(33.9880, -118.1596),
    "90266": Coordinates(33.8894, -118.3966),
    "90301": Coordinates(33.9164, -118.3526),
    "90401": Coordinates(34.0195, -118.4912),
    "90501": Coordinates(33.8358, -118.3406),
    # San Gabriel Valley
    "91001": Coordinates(34.0966, -118.0356),
    "91101": Coordinates(34.1478, -118.1445),
    "91754": Coordinates(34.0625, -118.1228),  # Monterey Park
    "91801": Coordinates(34.1064, -118.1280),
    "90601": Coordinates(33.9464, -118.0838),
    "90650": Coordinates(33.9802, -118.0647),
    # San Fernando Valley / Burbank
    "91301": Coordinates(34.1683, -118.6059),
    "91401": Coordinates(34.1814, -118.4481),
    "91501": Coordinates(34.1808, -118.3090),
    "91505": Coordinates(34.1739, -118.3475),
    "91601": Coordinates(34.1688, -118.3760),
    # Long Beach / Orange County / Inland Empire
    "90802": Coordinates(33.7670, -118.1892),
    "92805": Coordinates(33.8353, -117.9145),  # Anaheim
    "92614": Coordinates(33.6846, -117.8265),  # Irvine
    "92501": Coordinates(33.9806, -117.3755),  # Riverside
    # Northern California
    "94102": Coordinates(37.7793, -122.4193),  # San Francisco
}

# lowercase city name → representative ZIP (city hall / downtown)
CITY_ZIP_CODES: dict[str, str] = {
    "los angeles": "90012",
    "glendale": "91203",
    "pasadena": "91101",
    "burbank": "91501",
    "santa monica": "90401",
    "beverly hills": "90210",
    "monterey park": "91754",
    "alhambra": "91801",
    "long beach": "90802",
    "torrance": "90501",
    "inglewood": "90301",
    "whittier": "90601",
    "anaheim": "92805",
    "irvine": "92614",
    "riverside": "92501",
    "san francisco": "94102",
}


def extract_zip_code(location: str) -> Optional[str]:
    """Return the first 5-digit ZIP in *location* (ZIP+4 is truncated)."""
    if not location:
        return None
    match = _ZIP_PATTERN.search(location)
    return match.group(0)[:5] if match else None


def city_zip_code(location: str) -> Optional[str]:
    """Representative ZIP for a "city, state" string, or None for an unknown city."""
    if not location:
        return None
    city = location.split(",")[0].strip().lower()
    return CITY_ZIP_CODES.get(city)


def resolve_zip(location: str) -> Optional[str]:
    """ZIP written in *location*, else the representative ZIP of its city."""
    return extract_zip_code(location) or city_zip_code(location)


def get_coordinates(zip_code: str) -> Optional[Coordinates]:
    return ZIP_COORDINATES.get(zip_code)


def haversine_distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in miles."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def calculate_distance(location_a: str, location_b: str) -> Optional[float]:
    """
    Distance in miles between two location strings, or None when either
    side resolves to no ZIP code or the ZIP is not in the coordinate table.
    """
    zip_a = resolve_zip(location_a)
    zip_b = resolve_zip(location_b)
    if not zip_a or not zip_b:
        logger.debug(f"[distance] Unresolvable location '{location_a}' / '{location_b}'")
        return None

    coords_a = get_coordinates(zip_a)
    coords_b = get_coordinates(zip_b)
    if coords_a is None or coords_b is None:
        logger.debug(f"[distance] Unmapped ZIP: {zip_a if coords_a is None else zip_b}")
        return None

    return haversine_distance(coords_a, coords_b)


def is_within_radius(location_a: str, location_b: str, radius_miles: float) -> bool:
    """True when the distance is known and <= radius. Unknown counts as outside."""
    distance = calculate_distance(location_a, location_b)
    if distance is None:
        return False
    return distance <= radius_miles


def format_distance(miles: float) -> str:
    if miles < 1:
        return "Less than 1 mile"
    if round(miles) == 1:
        return "1 mile"
    return f"{round(miles)} miles"


def estimate_driving_time(miles: float) -> str:
    """Rough urban driving time at an average of 30 mph."""
    hours = miles / URBAN_AVERAGE_MPH
    if hours < 1:
        return f"{round(hours * 60)} min"
    whole = int(hours)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if minutes == 0:
        return f"{whole} hr"
    return f"{whole} hr {minutes} min"
