"""Closed enumerations and static lookup tables shared by the chart engine.

Everything in this module is immutable and safe to share between concurrent
analyses.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Optional, Tuple


class Element(Enum):
    FIRE = ("Fire", "\U0001F702")
    EARTH = ("Earth", "\U0001F703")
    AIR = ("Air", "\U0001F701")
    WATER = ("Water", "\U0001F704")

    def __init__(self, label: str, symbol: str):
        self.label = label
        self.symbol = symbol


class Modality(Enum):
    CARDINAL = ("Cardinal", "\U0001F70D")
    FIXED = ("Fixed", "\U0001F714")
    MUTABLE = ("Mutable", "☿")

    def __init__(self, label: str, symbol: str):
        self.label = label
        self.symbol = symbol


class Sign(Enum):
    ARIES = (0, "Aries", "♈", Element.FIRE, Modality.CARDINAL)
    TAURUS = (1, "Taurus", "♉", Element.EARTH, Modality.FIXED)
    GEMINI = (2, "Gemini", "♊", Element.AIR, Modality.MUTABLE)
    CANCER = (3, "Cancer", "♋", Element.WATER, Modality.CARDINAL)
    LEO = (4, "Leo", "♌", Element.FIRE, Modality.FIXED)
    VIRGO = (5, "Virgo", "♍", Element.EARTH, Modality.MUTABLE)
    LIBRA = (6, "Libra", "♎", Element.AIR, Modality.CARDINAL)
    SCORPIO = (7, "Scorpio", "♏", Element.WATER, Modality.FIXED)
    SAGITTARIUS = (8, "Sagittarius", "♐", Element.FIRE, Modality.MUTABLE)
    CAPRICORN = (9, "Capricorn", "♑", Element.EARTH, Modality.CARDINAL)
    AQUARIUS = (10, "Aquarius", "♒", Element.AIR, Modality.FIXED)
    PISCES = (11, "Pisces", "♓", Element.WATER, Modality.MUTABLE)

    def __init__(self, index: int, label: str, glyph: str, element: Element, modality: Modality):
        self.index = index
        self.label = label
        self.glyph = glyph
        self.element = element
        self.modality = modality

    @property
    def start(self) -> float:
        """Ecliptic longitude where the sign begins."""
        return self.index * 30.0

    @property
    def opposite(self) -> "Sign":
        return SIGNS[(self.index + 6) % 12]

    @classmethod
    def from_index(cls, index: int) -> "Sign":
        return SIGNS[index % 12]

    @classmethod
    def from_longitude(cls, lon: float) -> "Sign":
        return SIGNS[int(lon // 30) % 12]


SIGNS: Tuple[Sign, ...] = tuple(Sign)
SIGN_NAMES = [s.label for s in SIGNS]


class BodyKind(Enum):
    PLANET = "planet"
    ANGLE = "angle"
    POINT = "point"
    ASTEROID = "asteroid"


class Body(Enum):
    SUN = ("Sun", BodyKind.PLANET, "☉")
    MOON = ("Moon", BodyKind.PLANET, "☽")
    MERCURY = ("Mercury", BodyKind.PLANET, "☿")
    VENUS = ("Venus", BodyKind.PLANET, "♀")
    MARS = ("Mars", BodyKind.PLANET, "♂")
    JUPITER = ("Jupiter", BodyKind.PLANET, "♃")
    SATURN = ("Saturn", BodyKind.PLANET, "♄")
    URANUS = ("Uranus", BodyKind.PLANET, "♅")
    NEPTUNE = ("Neptune", BodyKind.PLANET, "♆")
    PLUTO = ("Pluto", BodyKind.PLANET, "♇")
    ASCENDANT = ("Ascendant", BodyKind.ANGLE, "AC")
    MIDHEAVEN = ("Midheaven", BodyKind.ANGLE, "MC")
    DESCENDANT = ("Descendant", BodyKind.ANGLE, "DC")
    IC = ("IC", BodyKind.ANGLE, "IC")
    NORTH_NODE = ("North Node", BodyKind.POINT, "☊")
    SOUTH_NODE = ("South Node", BodyKind.POINT, "☋")
    CHIRON = ("Chiron", BodyKind.POINT, "⚷")
    LILITH = ("Lilith", BodyKind.POINT, "⚸")
    CERES = ("Ceres", BodyKind.ASTEROID, "⚳")
    PALLAS = ("Pallas", BodyKind.ASTEROID, "⚴")
    JUNO = ("Juno", BodyKind.ASTEROID, "⚵")
    VESTA = ("Vesta", BodyKind.ASTEROID, "⚶")
    HYGIEA = ("Hygiea", BodyKind.ASTEROID, "⯚")
    PHOLUS = ("Pholus", BodyKind.ASTEROID, "⯛")
    PSYCHE = ("Psyche", BodyKind.ASTEROID, "⯘")
    EROS = ("Eros", BodyKind.ASTEROID, "⯙")

    def __init__(self, label: str, kind: BodyKind, glyph: str):
        self.label = label
        self.kind = kind
        self.glyph = glyph

    @property
    def is_planet(self) -> bool:
        return self.kind is BodyKind.PLANET

    @classmethod
    def parse(cls, raw: object) -> Optional["Body"]:
        """Resolve an upstream body name, returning None for unknown ids."""

        if isinstance(raw, Body):
            return raw
        if not isinstance(raw, str):
            return None
        return _BODY_LOOKUP.get(_body_key(raw))


def _body_key(name: str) -> str:
    return re.sub(r"[\s_\-.]", "", name).lower()


BODY_ALIASES: Dict[str, Body] = {
    "asc": Body.ASCENDANT,
    "ac": Body.ASCENDANT,
    "rising": Body.ASCENDANT,
    "mc": Body.MIDHEAVEN,
    "medium coeli": Body.MIDHEAVEN,
    "dsc": Body.DESCENDANT,
    "dc": Body.DESCENDANT,
    "imum coeli": Body.IC,
    "true node": Body.NORTH_NODE,
    "mean node": Body.NORTH_NODE,
    "rahu": Body.NORTH_NODE,
    "ketu": Body.SOUTH_NODE,
    "black moon lilith": Body.LILITH,
    "mean lilith": Body.LILITH,
}

_BODY_LOOKUP: Dict[str, Body] = {_body_key(b.label): b for b in Body}
_BODY_LOOKUP.update({_body_key(b.name): b for b in Body})
_BODY_LOOKUP.update({_body_key(k): v for k, v in BODY_ALIASES.items()})

PLANETS: Tuple[Body, ...] = tuple(b for b in Body if b.is_planet)

# Personal, then social, then generational planets; everything else follows in
# declaration order. Used wherever "most" or "first" needs a deterministic winner.
PLANET_PRIORITY: Tuple[Body, ...] = (
    Body.SUN,
    Body.MOON,
    Body.MERCURY,
    Body.VENUS,
    Body.MARS,
    Body.JUPITER,
    Body.SATURN,
    Body.URANUS,
    Body.NEPTUNE,
    Body.PLUTO,
) + tuple(b for b in Body if not b.is_planet)

PRIORITY_RANK: Dict[Body, int] = {b: i for i, b in enumerate(PLANET_PRIORITY)}

# Ascendant, Midheaven, nodes, Chiron and Lilith are left out of the occupant
# listing; Descendant and IC are listed like any other body.
NON_OCCUPANTS = frozenset(
    {
        Body.ASCENDANT,
        Body.MIDHEAVEN,
        Body.NORTH_NODE,
        Body.SOUTH_NODE,
        Body.CHIRON,
        Body.LILITH,
    }
)


def priority_key(body: Body) -> int:
    return PRIORITY_RANK[body]


def sign_index_from_lon(lon: float) -> int:
    return int(lon // 30) % 12


def sign_name_from_lon(lon: float) -> str:
    return SIGN_NAMES[sign_index_from_lon(lon)]


def fmt_deg(lon: float) -> str:
    # 0..360 to "sign 12°34′"
    sidx = sign_index_from_lon(lon)
    within = lon % 30.0
    deg = int(within)
    mins = int((within - deg) * 60)
    return f"{SIGN_NAMES[sidx]} {deg}°{mins:02d}′"


def ordinal(num: int) -> str:
    if num % 10 == 1 and num % 100 != 11:
        return f"{num}st"
    if num % 10 == 2 and num % 100 != 12:
        return f"{num}nd"
    if num % 10 == 3 and num % 100 != 13:
        return f"{num}rd"
    return f"{num}th"
