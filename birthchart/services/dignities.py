"""Essential dignity lookups.

Rulerships use the modern single-ruler convention throughout (Scorpio is ruled
by Pluto, Aquarius by Uranus, Pisces by Neptune); the same table decides the
chart ruler. Exaltations are the traditional seven.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .constants import Body, Sign
from .positions import Placement


class DignityKind(Enum):
    RULERSHIP = ("rulership", 1)
    EXALTATION = ("exaltation", 1)
    DETRIMENT = ("detriment", -1)
    FALL = ("fall", -1)

    def __init__(self, key: str, strength: int):
        self.key = key
        self.strength = strength


RULERS: Dict[Sign, Body] = {
    Sign.ARIES: Body.MARS,
    Sign.TAURUS: Body.VENUS,
    Sign.GEMINI: Body.MERCURY,
    Sign.CANCER: Body.MOON,
    Sign.LEO: Body.SUN,
    Sign.VIRGO: Body.MERCURY,
    Sign.LIBRA: Body.VENUS,
    Sign.SCORPIO: Body.PLUTO,
    Sign.SAGITTARIUS: Body.JUPITER,
    Sign.CAPRICORN: Body.SATURN,
    Sign.AQUARIUS: Body.URANUS,
    Sign.PISCES: Body.NEPTUNE,
}
EXALT: Dict[Body, Sign] = {
    Body.SUN: Sign.ARIES,
    Body.MOON: Sign.TAURUS,
    Body.MERCURY: Sign.VIRGO,
    Body.VENUS: Sign.PISCES,
    Body.MARS: Sign.CAPRICORN,
    Body.JUPITER: Sign.CANCER,
    Body.SATURN: Sign.LIBRA,
}
DETRIMENT: Dict[Sign, Body] = {s.opposite: p for s, p in RULERS.items()}
FALL: Dict[Body, Sign] = {p: s.opposite for p, s in EXALT.items()}

# First match wins.
PRECEDENCE = (DignityKind.RULERSHIP, DignityKind.EXALTATION, DignityKind.DETRIMENT, DignityKind.FALL)


@dataclass(frozen=True)
class DignityRecord:
    planet: Body
    sign: Sign
    kind: DignityKind


def ruler_of(sign: Sign) -> Body:
    return RULERS[sign]


def _matches(kind: DignityKind, planet: Body, sign: Sign) -> bool:
    if kind is DignityKind.RULERSHIP:
        return RULERS[sign] is planet
    if kind is DignityKind.EXALTATION:
        return EXALT.get(planet) is sign
    if kind is DignityKind.DETRIMENT:
        return DETRIMENT[sign] is planet
    return FALL.get(planet) is sign


def dignity_for(planet: Body, sign: Sign) -> Optional[DignityKind]:
    """Dignity of a planet in a sign; None means peregrine."""

    for kind in PRECEDENCE:
        if _matches(kind, planet, sign):
            return kind
    return None


def dignities(placements: Iterable[Placement]) -> List[DignityRecord]:
    out = []
    for p in placements:
        kind = dignity_for(p.body, p.sign)
        if kind is not None:
            out.append(DignityRecord(planet=p.body, sign=p.sign, kind=kind))
    return out


def dignity_balance(records: Iterable[DignityRecord]) -> int:
    return sum(r.kind.strength for r in records)
