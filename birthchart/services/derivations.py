from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .aspects import Aspect, aspect_counts
from .constants import Body, Element, Modality, Sign, priority_key
from .dignities import DignityRecord, dignity_balance, ruler_of
from .narratives import MODALITY_MEANINGS, element_meaning
from .positions import Placement, find_placement


@dataclass(frozen=True)
class Tally:
    name: str
    count: int
    symbol: str
    bodies: Tuple[Body, ...] = ()


@dataclass(frozen=True)
class ChartRuler:
    body: Body
    sign: Optional[Sign] = None
    house: Optional[int] = None


@dataclass(frozen=True)
class Insight:
    category: str
    text: str


def counted(placements: Iterable[Placement]) -> List[Placement]:
    """Placements that take part in element/modality statistics: the ten planets."""
    return [p for p in placements if p.body.is_planet]


def element_counts(placements: Iterable[Placement]) -> List[Tally]:
    groups: Dict[Element, List[Body]] = {e: [] for e in Element}
    for p in counted(placements):
        groups[p.sign.element].append(p.body)
    return [Tally(e.label, len(bodies), e.symbol, tuple(bodies)) for e, bodies in groups.items()]


def modality_counts(placements: Iterable[Placement]) -> List[Tally]:
    groups: Dict[Modality, List[Body]] = {m: [] for m in Modality}
    for p in counted(placements):
        groups[p.sign.modality].append(p.body)
    return [Tally(m.label, len(bodies), m.symbol, tuple(bodies)) for m, bodies in groups.items()]


def dominant(tallies: Sequence[Tally]) -> Optional[Tally]:
    """Highest count; earlier entries win ties. None when nothing was counted."""

    best: Optional[Tally] = None
    for t in tallies:
        if t.count > 0 and (best is None or t.count > best.count):
            best = t
    return best


def most_aspected(placements: Sequence[Placement], aspects: Iterable[Aspect]) -> Optional[Body]:
    """Body in the most aspects, ties settled by PLANET_PRIORITY.

    With placements but no aspects this is simply the highest-priority body.
    """

    if not placements:
        return None
    counts = aspect_counts(aspects)
    present = sorted({p.body for p in placements}, key=priority_key)
    return max(present, key=lambda b: (counts.get(b, 0), -priority_key(b)))


def chart_ruler(placements: Sequence[Placement], houses: Optional[Dict[Body, int]]) -> Optional[ChartRuler]:
    asc = find_placement(placements, Body.ASCENDANT)
    if asc is None:
        return None
    ruler = ruler_of(asc.sign)
    where = find_placement(placements, ruler)
    if where is None:
        return ChartRuler(body=ruler)
    return ChartRuler(body=ruler, sign=where.sign, house=(houses or {}).get(ruler))


def insights(
    placements: Sequence[Placement],
    elements: Sequence[Tally],
    modalities: Sequence[Tally],
    digs: Sequence[DignityRecord],
    top_body: Optional[Body],
    ruler: Optional[ChartRuler],
) -> List[Insight]:
    out: List[Insight] = []
    rets = [p.body.label for p in placements if p.retrograde and p.body.is_planet]
    if len(rets) >= 3:
        out.append(
            Insight(
                "Retrograde Emphasis",
                f"{len(rets)} retrograde planets ({', '.join(rets)}) suggest deep introspection and mastery through internal processing.",
            )
        )

    top_e = dominant(elements)
    if top_e and top_e.count >= 3:
        meaning = element_meaning(Element[top_e.name.upper()])
        out.append(Insight("Elemental Dominance", f"Strong {top_e.name} emphasis brings {meaning} energy to your personality."))
    top_m = dominant(modalities)
    if top_m and top_m.count >= 4:
        meaning = MODALITY_MEANINGS[Modality[top_m.name.upper()]]
        out.append(Insight("Modal Emphasis", f"{top_m.name} modality emphasis: {meaning}."))

    occupied: List[str] = []
    for p in counted(placements):
        if p.sign.label not in occupied:
            occupied.append(p.sign.label)
    if occupied and len(occupied) <= 4:
        out.append(
            Insight(
                "Focused Energy",
                f"Planets concentrated in {len(occupied)} signs ({', '.join(occupied)}) create laser-focused intensity.",
            )
        )
    elif len(occupied) >= 8:
        out.append(Insight("Diverse Expression", f"Planets spread across {len(occupied)} signs bring versatility and adaptability."))

    if digs:
        score = dignity_balance(digs)
        if score > 0:
            out.append(Insight("Dignity Balance", "Dignified planets outweigh debilitated ones; core functions express with ease."))
        elif score < 0:
            out.append(Insight("Dignity Balance", "Debilitated planets outweigh dignified ones; growth comes through conscious effort."))

    if top_body is not None:
        out.append(Insight("Most Aspected", f"{top_body.label} is the most connected point in the chart and colours much of it."))
    if ruler is not None:
        where = f" in {ruler.sign.label}" if ruler.sign else ""
        out.append(Insight("Chart Ruler", f"{ruler.body.label}{where} rules the Ascendant and sets the chart's overall tone."))
    return out


def summary(elements: Sequence[Tally], modalities: Sequence[Tally], top_body: Optional[Body]) -> Dict[str, Optional[str]]:
    top_e, top_m = dominant(elements), dominant(modalities)
    return {
        "dominantElement": top_e.name if top_e else None,
        "dominantModality": top_m.name if top_m else None,
        "mostAspectedBody": top_body.label if top_body else None,
    }


__all__ = [
    "ChartRuler",
    "Insight",
    "Tally",
    "chart_ruler",
    "counted",
    "dominant",
    "element_counts",
    "insights",
    "modality_counts",
    "most_aspected",
    "summary",
]
