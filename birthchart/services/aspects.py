from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .constants import Body, priority_key
from .positions import Placement


class AspectType(Enum):
    CONJUNCTION = ("conjunction", 0.0, 8.0, "☌", "neutral")
    SEXTILE = ("sextile", 60.0, 6.0, "⚹", "harmonious")
    SQUARE = ("square", 90.0, 8.0, "□", "challenging")
    TRINE = ("trine", 120.0, 8.0, "△", "harmonious")
    OPPOSITION = ("opposition", 180.0, 8.0, "☍", "challenging")

    def __init__(self, key: str, angle: float, orb: float, glyph: str, nature: str):
        self.key = key
        self.angle = angle
        self.orb = orb
        self.glyph = glyph
        self.nature = nature

    @property
    def label(self) -> str:
        return self.key.capitalize()


# Lower exact angle first; this order settles equal-orb ties.
MAJOR: Tuple[AspectType, ...] = tuple(sorted(AspectType, key=lambda t: t.angle))


class MinorAspectType(Enum):
    QUINCUNX = ("quincunx", 150.0, 3.0, "⚻", "adjusting")

    def __init__(self, key: str, angle: float, orb: float, glyph: str, nature: str):
        self.key = key
        self.angle = angle
        self.orb = orb
        self.glyph = glyph
        self.nature = nature


@dataclass(frozen=True)
class Aspect:
    p1: Body
    p2: Body
    type: AspectType | MinorAspectType
    angle: float
    orb: float

    @property
    def bodies(self) -> frozenset[Body]:
        return frozenset((self.p1, self.p2))

    def involves(self, body: Body) -> bool:
        return body is self.p1 or body is self.p2

    def other(self, body: Body) -> Body:
        return self.p2 if body is self.p1 else self.p1


def _angle_diff(a: float, b: float) -> float:
    """Return the minimal angular distance between two longitudes."""

    diff = abs(a - b) % 360.0
    return min(diff, 360.0 - diff)


def classify(angle: float, table: Sequence[AspectType] = MAJOR) -> Optional[Tuple[AspectType, float]]:
    """Match a separation in [0, 180] against the aspect table.

    Tightest orb wins; equal orbs go to the lower exact angle.
    """

    best: Optional[Tuple[AspectType, float]] = None
    for t in table:
        orb = abs(angle - t.angle)
        if orb > t.orb:
            continue
        if best is None or orb < best[1]:
            best = (t, orb)
    return best


def _ordered(a: Placement, b: Placement) -> Tuple[Placement, Placement]:
    return (a, b) if priority_key(a.body) <= priority_key(b.body) else (b, a)


def aspect_between(a: Placement, b: Placement) -> Optional[Aspect]:
    if a.body is b.body:
        return None
    a, b = _ordered(a, b)
    angle = _angle_diff(a.lon, b.lon)
    hit = classify(angle)
    if hit is None:
        return None
    t, orb = hit
    return Aspect(p1=a.body, p2=b.body, type=t, angle=angle, orb=orb)


def find_aspects(placements: Sequence[Placement]) -> List[Aspect]:
    """Every major aspect between distinct bodies, tightest first."""

    res: List[Aspect] = []
    for a, b in combinations(placements, 2):
        asp = aspect_between(a, b)
        if asp is not None:
            res.append(asp)
    return sorted(res, key=lambda x: (x.orb, x.type.angle, priority_key(x.p1), priority_key(x.p2)))


def find_quincunxes(placements: Sequence[Placement]) -> List[Aspect]:
    """Quincunx (150°) contacts; these feed Yod detection only."""

    res: List[Aspect] = []
    for a, b in combinations(placements, 2):
        if a.body is b.body:
            continue
        a, b = _ordered(a, b)
        angle = _angle_diff(a.lon, b.lon)
        hit = classify(angle, (MinorAspectType.QUINCUNX,))
        if hit is not None:
            res.append(Aspect(p1=a.body, p2=b.body, type=hit[0], angle=angle, orb=hit[1]))
    return sorted(res, key=lambda x: x.orb)


def aspect_counts(aspects: Iterable[Aspect]) -> Dict[Body, int]:
    counts: Dict[Body, int] = {}
    for a in aspects:
        counts[a.p1] = counts.get(a.p1, 0) + 1
        counts[a.p2] = counts.get(a.p2, 0) + 1
    return counts
