"""Run every engine stage over one placement snapshot and shape the result."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..aspects import Aspect, find_aspects, find_quincunxes
from ..constants import Body
from ..derivations import (
    ChartRuler,
    Insight,
    Tally,
    chart_ruler,
    element_counts,
    insights,
    modality_counts,
    most_aspected,
    summary,
)
from ..dignities import DignityRecord, dignities
from ..houses import HouseCusp, assign_houses, ascendant_sign, house_occupants
from ..narratives import (
    aspect_meaning,
    dignity_meaning,
    pattern_description,
    pattern_meaning,
    planet_interpretation,
)
from ..patterns import Pattern, detect_patterns
from ..positions import ChartInputError, Placement, normalize_placements, with_descendant

logger = logging.getLogger(__name__)

ENGINE_VERSION = "birthchart-1.0"
MISSING_ASC_WARNING = "Ascendant missing; houses and chart ruler omitted."


@dataclass
class ChartAnalysis:
    placements: List[Placement]
    houses: Optional[List[HouseCusp]]
    body_houses: Optional[Dict[Body, int]]
    aspects: List[Aspect]
    dignities: List[DignityRecord]
    patterns: List[Pattern]
    element_counts: List[Tally]
    modality_counts: List[Tally]
    most_aspected: Optional[Body]
    chart_ruler: Optional[ChartRuler]
    insights: List[Insight]
    dropped: int = 0
    warnings: List[str] = field(default_factory=list)


def analyze_chart(raw_placements: Optional[Iterable[Any]], derive_descendant: bool = False) -> ChartAnalysis:
    """Single pass over a placement snapshot.

    Malformed entries shrink the result instead of failing it; only a missing
    list raises ``ChartInputError``.
    """

    if raw_placements is None:
        raise ChartInputError("placements are required")
    raw = list(raw_placements)
    placements = normalize_placements(raw)
    dropped = len(raw) - len(placements)
    if derive_descendant:
        placements = with_descendant(placements)

    warnings: List[str] = []
    asc = ascendant_sign(placements)
    if asc is not None:
        houses = house_occupants(placements, asc)
        body_houses = assign_houses(placements, asc)
    else:
        houses, body_houses = None, None
        warnings.append(MISSING_ASC_WARNING)
    if dropped:
        warnings.append(f"{dropped} placement(s) dropped as unknown, duplicate or malformed.")

    aspects = find_aspects(placements)
    digs = dignities(placements)
    patterns = detect_patterns(placements, aspects, find_quincunxes(placements))
    elements = element_counts(placements)
    modalities = modality_counts(placements)
    top = most_aspected(placements, aspects)
    ruler = chart_ruler(placements, body_houses)

    logger.info(
        "chart_analyzed",
        extra={
            "bodies": len(placements),
            "dropped": dropped,
            "aspects": len(aspects),
            "patterns": len(patterns),
            "has_houses": houses is not None,
        },
    )
    return ChartAnalysis(
        placements=placements,
        houses=houses,
        body_houses=body_houses,
        aspects=aspects,
        dignities=digs,
        patterns=patterns,
        element_counts=elements,
        modality_counts=modalities,
        most_aspected=top,
        chart_ruler=ruler,
        insights=insights(placements, elements, modalities, digs, top, ruler),
        dropped=dropped,
        warnings=warnings,
    )


def _tally(t: Tally) -> Dict[str, Any]:
    return {"name": t.name, "count": t.count, "symbol": t.symbol, "bodies": [b.label for b in t.bodies]}


def build_payload(analysis: ChartAnalysis, max_aspects: Optional[int] = None) -> Dict[str, Any]:
    """Plain-dict view of an analysis, keyed the way report renderers expect."""

    bh = analysis.body_houses or {}
    aspects = analysis.aspects if max_aspects is None else analysis.aspects[:max_aspects]
    ruler = analysis.chart_ruler
    return {
        "meta": {
            "engine_version": ENGINE_VERSION,
            "house_system": "whole_sign",
            "dropped": analysis.dropped,
            "warnings": analysis.warnings or None,
        },
        "placements": [
            {
                "body": p.body.label,
                "lon": round(p.lon, 4),
                "sign": p.sign.label,
                "degree": p.degree,
                "minute": p.minute,
                "house": bh.get(p.body),
                "retrograde": p.retrograde,
            }
            for p in analysis.placements
        ],
        "houses": None
        if analysis.houses is None
        else [
            {
                "house": h.house,
                "sign": h.sign.label,
                "eclipticLongitude": h.lon,
                "occupants": [b.label for b in h.occupants],
            }
            for h in analysis.houses
        ],
        "aspects": [
            {
                "bodyA": a.p1.label,
                "bodyB": a.p2.label,
                "type": a.type.key,
                "symbol": a.type.glyph,
                "angleRaw": round(a.angle, 2),
                "orb": round(a.orb, 2),
                "nature": a.type.nature,
                "meaning": aspect_meaning(a),
            }
            for a in aspects
        ],
        "dignities": [
            {"planet": r.planet.label, "sign": r.sign.label, "kind": r.kind.key, "meaning": dignity_meaning(r)}
            for r in analysis.dignities
        ],
        "patterns": [
            {
                "type": pt.type.key,
                "name": pt.type.label,
                "participants": [b.label for b in pt.participants],
                "focal": pt.focal.label if pt.focal else None,
                "sign": pt.sign.label if pt.sign else None,
                "element": pt.element.label if pt.element else None,
                "description": pattern_description(pt),
                "meaning": pattern_meaning(pt),
            }
            for pt in analysis.patterns
        ],
        "elementCounts": [_tally(t) for t in analysis.element_counts],
        "modalityCounts": [_tally(t) for t in analysis.modality_counts],
        "mostAspectedBody": analysis.most_aspected.label if analysis.most_aspected else None,
        "chartRuler": None
        if ruler is None
        else {
            "body": ruler.body.label,
            "sign": ruler.sign.label if ruler.sign else None,
            "house": ruler.house,
        },
        "summary": summary(analysis.element_counts, analysis.modality_counts, analysis.most_aspected),
        "insights": [{"category": i.category, "insight": i.text} for i in analysis.insights],
    }


def build_interpretation(analysis: ChartAnalysis) -> Dict[str, Any]:
    bh = analysis.body_houses or {}
    return {
        "meta": {"engine_version": ENGINE_VERSION, "warnings": analysis.warnings or None},
        "planets": {
            p.body.label: planet_interpretation(p, bh.get(p.body))
            for p in analysis.placements
            if p.body.is_planet
        },
        "insights": [{"category": i.category, "insight": i.text} for i in analysis.insights],
    }
