"""City normalization and great-circle distance."""
from __future__ import annotations

import math

from .types import Coordinate, CreatorSnapshot, OpportunitySnapshot

EARTH_RADIUS_KM = 6371.0

# Regional spelling variants -> canonical city key. Bump the version when
# entries change so cached feeds can be invalidated.
CITY_ALIASES_VERSION = 1
CITY_ALIASES: dict[str, str] = {
    "münchen": "munich",
    "muenchen": "munich",
    "munchen": "munich",
    "köln": "cologne",
    "koeln": "cologne",
    "koln": "cologne",
    "nürnberg": "nuremberg",
    "nuernberg": "nuremberg",
    "nurnberg": "nuremberg",
    "wien": "vienna",
    "zürich": "zurich",
    "zuerich": "zurich",
    "genève": "geneva",
    "geneve": "geneva",
    "genf": "geneva",
    "den haag": "the hague",
    "'s-gravenhage": "the hague",
    "bruxelles": "brussels",
    "brussel": "brussels",
    "lisboa": "lisbon",
    "praha": "prague",
    "prag": "prague",
    "warszawa": "warsaw",
    "milano": "milan",
    "mailand": "milan",
    "roma": "rome",
    "rom": "rome",
    "københavn": "copenhagen",
    "kobenhavn": "copenhagen",
}


def normalize_city(raw: str | None) -> str:
    """Lower-case, trim and resolve known spelling variants.

    Unknown cities pass through normalized but unmapped.
    """
    key = (raw or "").strip().lower()
    return CITY_ALIASES.get(key, key)


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two lat/lon pairs given in degrees."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push h a hair outside [0, 1] for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def cities_match(a: str | None, b: str | None) -> bool:
    key_a = normalize_city(a)
    return bool(key_a) and key_a == normalize_city(b)


def resolve_distance(location: OpportunitySnapshot, creator: CreatorSnapshot) -> float:
    """Distance in km between a role's location and a creator.

    A role is located where its opportunity is, so ``location`` is the
    parent opportunity. Same city short-circuits to 0; unknown is infinity.
    """
    if cities_match(location.city, creator.city):
        return 0.0
    if location.coordinate is not None and creator.coordinate is not None:
        return distance_km(location.coordinate, creator.coordinate)
    return math.inf
