"""
Maps a commissioning (startup) location to a shipping region.

Buckets are checked in order and the first keyword found anywhere in the
location wins, so a yard that names both a country and a city resolves the
same way every time. Anything unrecognised ships as Europe.
"""

from .line_items import EstimateParameters

DEFAULT_REGION = "Europe"

REGION_KEYWORDS = [
    ("Norway", ["norway", "norwegian", "vard", "ulstein", "kleven", "havyard", "myklebust"]),
    ("Romania/Turkey/East-Europe", [
        "romania", "turkey", "balkan", "bulgaria", "croatia", "poland",
        "constanta", "istanbul", "tuzla", "galati",
    ]),
    ("Asia", [
        "asia", "korea", "china", "japan", "singapore", "philippines", "vietnam",
        "shanghai", "guangzhou", "dalian", "hhi", "hmd", "dsme", "samsung", "okpo",
    ]),
    ("USA", ["usa", "houston", "united states", "america"]),
    ("Canada", ["canada"]),
]

# Yard codes too short to scan for inside longer words ("shi" in "shipyard")
LOCATION_ALIASES = {
    "shi": "Asia",
}


def region_for_location(location: str) -> str:
    """Shipping region for a startup location. Empty location → "" (no shipping)."""
    text = (location or "").strip().lower()
    if not text:
        return ""
    if text in LOCATION_ALIASES:
        return LOCATION_ALIASES[text]
    for region, keywords in REGION_KEYWORDS:
        for keyword in keywords:
            if keyword in text:
                return region
    return DEFAULT_REGION


def effective_region(parameters: EstimateParameters) -> str:
    if not parameters.shipping_auto_map:
        return parameters.shipping_region
    return region_for_location(parameters.startup_location)
