"""Read coordinates out of Google Maps links pasted into the form."""

from __future__ import annotations

import math
import re
from urllib.parse import parse_qs, urlparse

# .../@40.4167,-3.7037,15z
_AT_PATTERN = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")


def _valid(lat: float, lon: float) -> bool:
    return math.isfinite(lat) and math.isfinite(lon) and -90 <= lat <= 90 and -180 <= lon <= 180


def extract_coordinates(url: str) -> tuple[float, float] | None:
    """Return ``(latitude, longitude)`` from a Google Maps URL, or None.

    Supports ``?q=LAT,LON`` and ``/@LAT,LON,ZOOMz``. Short links
    (goo.gl/maps/...) need a redirect lookup and are not resolved.
    """
    url = (url or "").strip()
    if not url:
        return None

    parsed = urlparse(url)
    query_values = parse_qs(parsed.query).get("q", [])
    if query_values:
        parts = query_values[0].split(",")
        if len(parts) == 2:
            try:
                lat, lon = float(parts[0]), float(parts[1])
            except ValueError:
                lat = lon = math.nan
            if _valid(lat, lon):
                return lat, lon

    match = _AT_PATTERN.search(url)
    if match:
        lat, lon = float(match.group(1)), float(match.group(2))
        if _valid(lat, lon):
            return lat, lon

    return None
