"""Whole-sign houses driven by the ascendant's sign."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .constants import NON_OCCUPANTS, Body, Sign
from .positions import Placement, find_placement


@dataclass(frozen=True)
class HouseCusp:
    house: int
    sign: Sign
    occupants: tuple[Body, ...] = field(default=())

    @property
    def lon(self) -> float:
        return self.sign.start


def house_for_sign(sign_index: int, asc_sign_index: int) -> int:
    """House number (1-12) of a sign counted from the ascendant's sign."""

    return 1 + ((sign_index - asc_sign_index) % 12 + 12) % 12


def whole_sign_cusps(asc_sign: Sign) -> List[HouseCusp]:
    return [HouseCusp(house=i + 1, sign=Sign.from_index(asc_sign.index + i)) for i in range(12)]


def assign_houses(placements: Iterable[Placement], asc_sign: Sign) -> Dict[Body, int]:
    return {p.body: house_for_sign(p.sign.index, asc_sign.index) for p in placements}


def house_occupants(placements: Iterable[Placement], asc_sign: Sign) -> List[HouseCusp]:
    """Cusps with the bodies that sit in each house, in placement order."""

    by_house: Dict[int, List[Body]] = {i: [] for i in range(1, 13)}
    for p in placements:
        if p.body in NON_OCCUPANTS:
            continue
        by_house[house_for_sign(p.sign.index, asc_sign.index)].append(p.body)
    return [
        HouseCusp(house=c.house, sign=c.sign, occupants=tuple(by_house[c.house]))
        for c in whole_sign_cusps(asc_sign)
    ]


def ascendant_sign(placements: Iterable[Placement]) -> Optional[Sign]:
    asc = find_placement(placements, Body.ASCENDANT)
    return asc.sign if asc else None
