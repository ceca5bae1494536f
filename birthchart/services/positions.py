"""Canonicalise raw ephemeris placements before any other computation runs."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from .constants import Body, Sign, fmt_deg

logger = logging.getLogger(__name__)


class ChartInputError(ValueError):
    """Raised only when the whole placement list is absent."""


@dataclass(frozen=True)
class Placement:
    body: Body
    lon: float
    retrograde: bool = False

    @property
    def sign(self) -> Sign:
        return Sign.from_longitude(self.lon)

    @property
    def degree(self) -> int:
        return math.floor(self.lon % 30.0)

    @property
    def minute(self) -> int:
        within = self.lon % 30.0
        return math.floor((within - math.floor(within)) * 60)

    @property
    def label(self) -> str:
        return fmt_deg(self.lon)


def normalize_longitude(lon: float) -> float:
    """Wrap any real longitude into [0, 360)."""

    wrapped = ((lon % 360.0) + 360.0) % 360.0
    # -1e-20 % 360 rounds up to 360.0
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def _field(raw: Any, *names: str) -> Any:
    for n in names:
        value = raw.get(n) if isinstance(raw, Mapping) else getattr(raw, n, None)
        if value is not None:
            return value
    return None


def _coerce_longitude(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        lon = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(lon):
        return None
    return lon


def normalize_placement(raw: Any) -> Optional[Placement]:
    """Turn one upstream record into a Placement, or None if unusable."""

    body = Body.parse(_field(raw, "body", "name"))
    if body is None:
        logger.debug("placement_dropped_unknown_body", extra={"body": _field(raw, "body", "name")})
        return None
    lon = _coerce_longitude(_field(raw, "eclipticLongitude", "ecliptic_longitude", "lon", "longitude"))
    if lon is None:
        logger.debug("placement_dropped_bad_longitude", extra={"body": body.label})
        return None
    retro = bool(_field(raw, "retrograde", "retro") or False)
    return Placement(body=body, lon=normalize_longitude(lon), retrograde=retro)


def normalize_placements(raw: Optional[Iterable[Any]]) -> List[Placement]:
    """Normalise a whole placement list.

    Unknown bodies, unusable longitudes and repeated bodies are dropped; the
    first occurrence of a body wins. Only a missing list is an error.
    """

    if raw is None:
        raise ChartInputError("placements are required")

    out: List[Placement] = []
    seen: set[Body] = set()
    for item in raw:
        p = normalize_placement(item)
        if p is None:
            continue
        if p.body in seen:
            logger.debug("placement_dropped_duplicate", extra={"body": p.body.label})
            continue
        seen.add(p.body)
        out.append(p)

    return out


def with_descendant(placements: List[Placement]) -> List[Placement]:
    """Add the Descendant opposite the Ascendant when only the Ascendant is known."""

    asc = find_placement(placements, Body.ASCENDANT)
    if asc is None or find_placement(placements, Body.DESCENDANT) is not None:
        return placements
    return placements + [Placement(body=Body.DESCENDANT, lon=normalize_longitude(asc.lon + 180.0))]


def find_placement(placements: Iterable[Placement], body: Body) -> Optional[Placement]:
    return next((p for p in placements if p.body is body), None)


__all__ = [
    "ChartInputError",
    "Placement",
    "find_placement",
    "normalize_longitude",
    "normalize_placement",
    "normalize_placements",
    "with_descendant",
]
