"""Meaning text keyed by the engine's enumerations.

Wording here is presentation copy and may change freely; nothing numeric
depends on it.
"""

from __future__ import annotations

from typing import Dict, Optional

from .aspects import Aspect
from .constants import Body, Element, Modality, Sign, ordinal
from .dignities import DignityKind, DignityRecord
from .patterns import Pattern, PatternType
from .positions import Placement

SIGN_QUALITIES: Dict[Sign, str] = {
    Sign.ARIES: "bold, direct and pioneering",
    Sign.TAURUS: "steady, practical and determined",
    Sign.GEMINI: "curious, communicative and adaptable",
    Sign.CANCER: "nurturing, protective and emotional",
    Sign.LEO: "confident, creative and generous",
    Sign.VIRGO: "analytical, helpful and precise",
    Sign.LIBRA: "diplomatic, harmonious and fair",
    Sign.SCORPIO: "intense, transformative and deep",
    Sign.SAGITTARIUS: "adventurous, philosophical and honest",
    Sign.CAPRICORN: "ambitious, disciplined and responsible",
    Sign.AQUARIUS: "innovative, independent and humanitarian",
    Sign.PISCES: "compassionate, intuitive and imaginative",
}

PLANET_THEMES: Dict[Body, str] = {
    Body.SUN: "Your core identity",
    Body.MOON: "Your emotional needs",
    Body.MERCURY: "Your thinking and communication",
    Body.VENUS: "Your way of loving and valuing",
    Body.MARS: "Your drive and assertion",
    Body.JUPITER: "Your beliefs, growth and opportunities",
    Body.SATURN: "Your discipline, boundaries and life lessons",
    Body.URANUS: "Your uniqueness and revolutionary spirit",
    Body.NEPTUNE: "Your dreams, spirituality and illusions",
    Body.PLUTO: "Your power and transformative capacity",
}

PLANET_KEYWORDS: Dict[Body, str] = {
    Body.SUN: "core identity",
    Body.MOON: "emotions and instincts",
    Body.MERCURY: "communication and thinking",
    Body.VENUS: "love and values",
    Body.MARS: "action and drive",
    Body.JUPITER: "expansion and beliefs",
    Body.SATURN: "discipline and structure",
    Body.URANUS: "innovation and freedom",
    Body.NEPTUNE: "dreams and spirituality",
    Body.PLUTO: "transformation and power",
}

ELEMENT_MEANINGS: Dict[Element, str] = {
    Element.FIRE: "passionate, energetic, action-oriented",
    Element.EARTH: "practical, grounded, stability-seeking",
    Element.AIR: "intellectual, communicative, idea-focused",
    Element.WATER: "emotional, intuitive, feeling-oriented",
}

MODALITY_MEANINGS: Dict[Modality, str] = {
    Modality.CARDINAL: "Initiative & Leadership",
    Modality.FIXED: "Stability & Persistence",
    Modality.MUTABLE: "Adaptability & Change",
}

ASPECT_MEANINGS: Dict[str, str] = {
    "conjunction": "energies blend and amplify each other",
    "opposition": "creates tension requiring balance and integration",
    "trine": "harmonious flow of energy and natural talents",
    "square": "dynamic tension that motivates growth and action",
    "sextile": "supportive energy offering opportunities for development",
}

PATTERN_MEANINGS: Dict[PatternType, str] = {
    PatternType.GRAND_TRINE: "Natural talents flow effortlessly. Gifts may be taken for granted, so conscious development is needed for full potential.",
    PatternType.T_SQUARE: "Dynamic tension demands action. The focal planet becomes the main tool for resolving inner conflict and achieving success.",
    PatternType.GRAND_CROSS: "Maximum tension and potential. Crisis-driven growth and enormous capacity for achievement once conflicting forces are mastered.",
    PatternType.KITE: "Turns natural talents into concrete achievements. The opposition supplies the motivation to use those gifts productively.",
    PatternType.YOD: "A special mission. The apex planet holds a gift that must be consciously developed; the quincunxes keep the pressure on until it is.",
    PatternType.MYSTIC_RECTANGLE: "A balance of stability and growth. Challenges are met with supportive resources and practical solutions.",
    PatternType.CRADLE: "A natural safety net. Talents are nurtured and protected, leading to gentle but steady growth.",
    PatternType.GRAND_CONJUNCTION: "Several planetary functions act as one unified force, bringing tremendous intensity and focus along with possible blind spots.",
    PatternType.BUNDLE: "Highly focused with specialised interests. Great depth, though perspective in other areas may take effort.",
    PatternType.BOWL: "Self-contained, with a specific life theme. Everything needed to reach your goals is already within you.",
    PatternType.BUCKET: "Life energy pours through the handle planet, which becomes the focused outlet for everything the rest of the chart provides.",
    PatternType.LOCOMOTIVE: "Self-motivated achiever with strong drive. The leading planet shows your primary motivation and area of leadership.",
    PatternType.SEESAW: "Life is a balancing act between two opposing forces. You see both sides of a situation; the work is integrating the polarity.",
    PatternType.SPLASH: "Versatile and adaptable, with interests in many areas. The challenge is keeping focus rather than scattering energy.",
    PatternType.SPLAY: "Independent and self-directed, pursuing several areas of focus at once and resisting being boxed in.",
}

DIGNITY_MEANINGS: Dict[DignityKind, str] = {
    DignityKind.RULERSHIP: "{planet} is at home in {sign}, expressing its pure essence with natural strength.",
    DignityKind.EXALTATION: "{planet} is exalted in {sign}, operating at its highest potential.",
    DignityKind.DETRIMENT: "{planet} is in detriment in {sign}, facing challenges in expressing its natural qualities.",
    DignityKind.FALL: "{planet} is in fall in {sign}, working in a weakened state to reach its highest expression.",
}


def planet_interpretation(p: Placement, house: Optional[int] = None) -> str:
    theme = PLANET_THEMES.get(p.body, f"Your {p.body.label}")
    text = f"{theme} expresses through {SIGN_QUALITIES[p.sign]} {p.sign.label} energy"
    if house is not None:
        text += f" in the {ordinal(house)} house"
    text += "."
    if p.retrograde:
        text += " Retrograde turns this energy inward; it is mastered internally before it is expressed."
    return text


def aspect_meaning(a: Aspect) -> str:
    return f"{a.p1.label} and {a.p2.label} {ASPECT_MEANINGS.get(a.type.key, 'interact significantly')}."


def dignity_meaning(r: DignityRecord) -> str:
    return DIGNITY_MEANINGS[r.kind].format(planet=r.planet.label, sign=r.sign.label)


def element_meaning(element: Element) -> str:
    return ELEMENT_MEANINGS[element]


def stellium_meaning(sign: Sign, count: int) -> str:
    return f"Intense focus on {SIGN_QUALITIES[sign]} themes. {count} bodies amplify {sign.label} energy throughout your personality."


def _names(bodies) -> str:
    return ", ".join(b.label for b in bodies)


def pattern_description(p: Pattern) -> str:
    t = p.type
    if t is PatternType.STELLIUM:
        return f"{len(p.participants)} bodies in {p.sign.label}: {_names(p.participants)}"
    if t is PatternType.GRAND_TRINE:
        where = f" in {p.element.label}" if p.element else ""
        return f"{_names(p.participants)} form a harmonious 120° triangle{where}"
    if t is PatternType.T_SQUARE:
        a, b, apex = p.participants
        return f"{a.label} opposite {b.label}, both square {apex.label} as the outlet"
    if t is PatternType.GRAND_CROSS:
        return f"{_names(p.participants)} locked in two oppositions and four squares"
    if t is PatternType.KITE:
        return f"Grand trine of {_names(p.participants[:3])} anchored by {p.participants[3].label} opposite {p.focal.label}"
    if t is PatternType.YOD:
        a, b, apex = p.participants
        return f"{a.label} and {b.label} form quincunxes pointing to {apex.label}"
    if t is PatternType.MYSTIC_RECTANGLE:
        return f"{_names(p.participants)} linked by two oppositions, two trines and two sextiles"
    if t is PatternType.CRADLE:
        return f"{_names(p.participants)} cradled by a chain of sextiles across an opposition"
    if t is PatternType.GRAND_CONJUNCTION:
        where = f" in {p.sign.label}" if p.sign else ""
        return f"{len(p.participants)} bodies fused{where}: {_names(p.participants)}"
    if t is PatternType.BUCKET:
        return f"Planets gathered in one half with {p.focal.label} as the handle"
    if t is PatternType.LOCOMOTIVE:
        return f"Planets spread around two-thirds of the chart, led by {p.focal.label}"
    return f"{t.label} distribution of {len(p.participants)} planets"


def pattern_meaning(p: Pattern) -> str:
    if p.type is PatternType.STELLIUM:
        return stellium_meaning(p.sign, len(p.participants))
    if p.type is PatternType.GRAND_TRINE and p.element is not None:
        return f"Natural {p.element.label.lower()} talents flow effortlessly. " + PATTERN_MEANINGS[p.type].split(". ", 1)[1]
    return PATTERN_MEANINGS[p.type]
