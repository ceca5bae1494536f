"""Multi-body configurations found in a chart.

Aspect patterns treat the aspect list as an undirected graph (bodies are nodes,
aspects are typed edges) and brute-force the small fixed-size subgraphs each
pattern needs. Each matcher is independent and reports every instance once;
overlapping patterns of different types (a kite and the grand trine inside
it) are all reported.

Chart shapes (bundle, bowl, ...) look only at how the ten planets are spread
around the wheel and at most one shape is reported.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from itertools import combinations, permutations
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

import networkx as nx

from .aspects import Aspect, AspectType, MinorAspectType
from .constants import Body, Element, Sign, priority_key
from .positions import Placement

STELLIUM_MIN = 3
SHAPE_MIN_PLANETS = 5
QUINCUNX = MinorAspectType.QUINCUNX


class PatternType(Enum):
    STELLIUM = ("stellium", "Stellium")
    GRAND_TRINE = ("grand-trine", "Grand Trine")
    T_SQUARE = ("t-square", "T-Square")
    GRAND_CROSS = ("grand-cross", "Grand Cross")
    KITE = ("kite", "Kite")
    YOD = ("yod", "Yod (Finger of God)")
    MYSTIC_RECTANGLE = ("mystic-rectangle", "Mystic Rectangle")
    CRADLE = ("cradle", "Cradle")
    GRAND_CONJUNCTION = ("grand-conjunction", "Grand Conjunction")
    BUNDLE = ("bundle", "Bundle")
    BOWL = ("bowl", "Bowl")
    BUCKET = ("bucket", "Bucket")
    LOCOMOTIVE = ("locomotive", "Locomotive")
    SEESAW = ("seesaw", "Seesaw")
    SPLASH = ("splash", "Splash")
    SPLAY = ("splay", "Splay")

    def __init__(self, key: str, label: str):
        self.key = key
        self.label = label

    @property
    def is_shape(self) -> bool:
        return self in SHAPES


SHAPES = frozenset(
    {
        PatternType.BUNDLE,
        PatternType.BOWL,
        PatternType.BUCKET,
        PatternType.LOCOMOTIVE,
        PatternType.SEESAW,
        PatternType.SPLASH,
        PatternType.SPLAY,
    }
)


@dataclass(frozen=True)
class Pattern:
    type: PatternType
    participants: Tuple[Body, ...]
    focal: Optional[Body] = None
    sign: Optional[Sign] = None
    element: Optional[Element] = None


class AspectGraph:
    """One networkx graph per aspect type; bodies are nodes."""

    def __init__(self, aspects: Iterable[Aspect], extra: Iterable[Aspect] = ()):
        self._graphs: Dict[object, nx.Graph] = defaultdict(nx.Graph)
        nodes: Set[Body] = set()
        for a in list(aspects) + list(extra):
            self._graphs[a.type].add_edge(a.p1, a.p2, orb=a.orb)
            nodes.update((a.p1, a.p2))
        self.nodes: Tuple[Body, ...] = tuple(sorted(nodes, key=priority_key))

    def graph(self, kind: object) -> nx.Graph:
        return self._graphs[kind]

    def has(self, a: Body, b: Body, kind: object) -> bool:
        return self._graphs[kind].has_edge(a, b)

    def neighbours(self, body: Body, kind: object) -> Set[Body]:
        g = self._graphs[kind]
        return set(g.neighbors(body)) if body in g else set()

    def edges(self, kind: object) -> List[Tuple[Body, Body]]:
        out = [tuple(sorted(e, key=priority_key)) for e in self._graphs[kind].edges()]
        return sorted(out, key=lambda e: (priority_key(e[0]), priority_key(e[1])))


def _by_priority(bodies: Iterable[Body]) -> Tuple[Body, ...]:
    return tuple(sorted(bodies, key=priority_key))


def _common_element(bodies: Iterable[Body], signs: Dict[Body, Sign]) -> Optional[Element]:
    elements = {signs[b].element for b in bodies if b in signs}
    if len(elements) == 1:
        return elements.pop()
    return None


def _rotate_to_first(cycle: Sequence[Body]) -> Tuple[Body, ...]:
    """Rotate/reflect a 4-cycle so it starts at its highest-priority body."""

    i = min(range(len(cycle)), key=lambda k: priority_key(cycle[k]))
    fwd = tuple(cycle[i:]) + tuple(cycle[:i])
    rev = (fwd[0],) + tuple(reversed(fwd[1:]))
    return fwd if priority_key(fwd[1]) <= priority_key(rev[1]) else rev


# ---------------------------------------------------------------------------
# sign grouping
# ---------------------------------------------------------------------------

def find_stelliums(placements: Sequence[Placement]) -> List[Pattern]:
    groups: Dict[Sign, List[Placement]] = defaultdict(list)
    for p in placements:
        groups[p.sign].append(p)
    out = []
    for sign in sorted(groups, key=lambda s: s.index):
        members = groups[sign]
        if len(members) >= STELLIUM_MIN:
            ordered = tuple(p.body for p in sorted(members, key=lambda p: (p.lon, priority_key(p.body))))
            out.append(Pattern(PatternType.STELLIUM, ordered, sign=sign, element=sign.element))
    return out


# ---------------------------------------------------------------------------
# aspect graph matchers
# ---------------------------------------------------------------------------

def find_grand_trines(graph: AspectGraph, signs: Dict[Body, Sign]) -> List[Pattern]:
    out = []
    for trio in combinations(graph.nodes, 3):
        if all(graph.has(a, b, AspectType.TRINE) for a, b in combinations(trio, 2)):
            out.append(Pattern(PatternType.GRAND_TRINE, trio, element=_common_element(trio, signs)))
    return out


def find_t_squares(graph: AspectGraph) -> List[Pattern]:
    out = []
    for a, b in graph.edges(AspectType.OPPOSITION):
        apexes = graph.neighbours(a, AspectType.SQUARE) & graph.neighbours(b, AspectType.SQUARE)
        for apex in _by_priority(apexes - {a, b}):
            out.append(Pattern(PatternType.T_SQUARE, (a, b, apex), focal=apex))
    return out


def _pairings(quad: Sequence[Body]) -> List[Tuple[Tuple[Body, Body], Tuple[Body, Body]]]:
    a, b, c, d = quad
    return [((a, c), (b, d)), ((a, b), (c, d)), ((a, d), (b, c))]


def find_grand_crosses(graph: AspectGraph) -> List[Pattern]:
    out = []
    opp, sq = AspectType.OPPOSITION, AspectType.SQUARE
    for quad in combinations(graph.nodes, 4):
        for (a, c), (b, d) in _pairings(quad):
            if not (graph.has(a, c, opp) and graph.has(b, d, opp)):
                continue
            if all(graph.has(x, y, sq) for x, y in ((a, b), (b, c), (c, d), (d, a))):
                out.append(Pattern(PatternType.GRAND_CROSS, _rotate_to_first((a, b, c, d))))
                break
    return out


def find_kites(graph: AspectGraph, signs: Dict[Body, Sign]) -> List[Pattern]:
    """Grand trine plus a tail opposing one vertex and sextile to the other two.

    The opposed vertex is reported as the focal body.
    """

    out = []
    for trine in find_grand_trines(graph, signs):
        vertices = trine.participants
        for tail in graph.nodes:
            if tail in vertices:
                continue
            for head in vertices:
                wings = [v for v in vertices if v is not head]
                if graph.has(tail, head, AspectType.OPPOSITION) and all(
                    graph.has(tail, w, AspectType.SEXTILE) for w in wings
                ):
                    out.append(
                        Pattern(
                            PatternType.KITE,
                            vertices + (tail,),
                            focal=head,
                            element=trine.element,
                        )
                    )
    return out


def find_yods(graph: AspectGraph) -> List[Pattern]:
    """Two quincunxes from a sextile pair converging on one apex."""

    out = []
    for a, b in graph.edges(AspectType.SEXTILE):
        apexes = graph.neighbours(a, QUINCUNX) & graph.neighbours(b, QUINCUNX)
        for apex in _by_priority(apexes - {a, b}):
            out.append(Pattern(PatternType.YOD, (a, b, apex), focal=apex))
    return out


def find_mystic_rectangles(graph: AspectGraph) -> List[Pattern]:
    out = []
    opp, sx, tr = AspectType.OPPOSITION, AspectType.SEXTILE, AspectType.TRINE
    for quad in combinations(graph.nodes, 4):
        for (a, c), (b, d) in _pairings(quad):
            if not (graph.has(a, c, opp) and graph.has(b, d, opp)):
                continue
            side1 = graph.has(a, b, sx) and graph.has(c, d, sx) and graph.has(b, c, tr) and graph.has(d, a, tr)
            side2 = graph.has(a, b, tr) and graph.has(c, d, tr) and graph.has(b, c, sx) and graph.has(d, a, sx)
            if side1 or side2:
                out.append(Pattern(PatternType.MYSTIC_RECTANGLE, _rotate_to_first((a, b, c, d))))
                break
    return out


def find_cradles(graph: AspectGraph) -> List[Pattern]:
    """Opposition a-d bridged by sextiles a-b, b-c, c-d with trines a-c, b-d."""

    out = []
    seen: Set[FrozenSet[Body]] = set()
    sx, tr = AspectType.SEXTILE, AspectType.TRINE
    for a, d in graph.edges(AspectType.OPPOSITION):
        for end1, end2 in ((a, d), (d, a)):
            for b, c in permutations(graph.nodes, 2):
                if b in (a, d) or c in (a, d):
                    continue
                if not (graph.has(end1, b, sx) and graph.has(b, c, sx) and graph.has(c, end2, sx)):
                    continue
                if not (graph.has(end1, c, tr) and graph.has(b, end2, tr)):
                    continue
                key = frozenset((a, b, c, d))
                if key in seen:
                    continue
                seen.add(key)
                out.append(Pattern(PatternType.CRADLE, (end1, b, c, end2)))
    return out


def find_grand_conjunctions(graph: AspectGraph, signs: Dict[Body, Sign]) -> List[Pattern]:
    out = []
    for found in nx.find_cliques(graph.graph(AspectType.CONJUNCTION)):
        if len(found) < 3:
            continue
        clique = _by_priority(found)
        occupied = {signs[b] for b in clique if b in signs}
        sign = occupied.pop() if len(occupied) == 1 else None
        out.append(Pattern(PatternType.GRAND_CONJUNCTION, clique, sign=sign))
    return sorted(out, key=lambda p: tuple(priority_key(b) for b in p.participants))


# ---------------------------------------------------------------------------
# chart shapes
# ---------------------------------------------------------------------------

def _gaps(lons: Sequence[float]) -> List[float]:
    """Gap after each sorted longitude to the next one, wrapping at 360."""

    gaps = [lons[i + 1] - lons[i] for i in range(len(lons) - 1)]
    # the closing arc is a full circle when every longitude coincides
    gaps.append(lons[0] + 360.0 - lons[-1])
    return gaps


def _bucket_handle(ordered: Sequence[Placement]) -> Optional[Body]:
    for i, handle in enumerate(ordered):
        rest = [p.lon for j, p in enumerate(ordered) if j != i]
        if max(_gaps(rest)) < 180.0:
            continue
        gaps = _gaps([p.lon for p in ordered])
        if gaps[i - 1] >= 60.0 and gaps[i] >= 60.0:
            return handle.body
    return None


def chart_shape(placements: Sequence[Placement]) -> Optional[Pattern]:
    """Classify the planets' distribution around the wheel.

    Checked in order: bundle (all within 120°), bowl (within 180°), bucket
    (a bowl plus one isolated handle), locomotive (one empty arc of at least
    120°), seesaw (two opposing groups split by two gaps of 60°+), splash
    (no gap over 60° across 8+ signs) and finally splay.
    """

    planets = sorted((p for p in placements if p.body.is_planet), key=lambda p: p.lon)
    if len(planets) < SHAPE_MIN_PLANETS:
        return None
    lons = [p.lon for p in planets]
    gaps = _gaps(lons)
    widest = max(gaps)
    everyone = tuple(p.body for p in planets)

    if widest >= 240.0:
        return Pattern(PatternType.BUNDLE, everyone)
    if widest >= 180.0:
        return Pattern(PatternType.BOWL, everyone)
    handle = _bucket_handle(planets)
    if handle is not None:
        return Pattern(PatternType.BUCKET, everyone, focal=handle)
    if widest >= 120.0:
        # the planet that closes the empty arc leads the train
        lead = planets[(gaps.index(widest) + 1) % len(planets)].body
        return Pattern(PatternType.LOCOMOTIVE, everyone, focal=lead)
    wide = [i for i, g in enumerate(gaps) if g >= 60.0]
    n = len(planets)
    for i, j in combinations(wide, 2):
        # both sides of the split need at least two planets
        if 2 <= (j - i) <= n - 2:
            return Pattern(PatternType.SEESAW, everyone)
    if widest <= 60.0 and len({p.sign for p in planets}) >= 8:
        return Pattern(PatternType.SPLASH, everyone)
    return Pattern(PatternType.SPLAY, everyone)


# ---------------------------------------------------------------------------
# entry point
# ---------------------------------------------------------------------------

def detect_patterns(
    placements: Sequence[Placement],
    aspects: Sequence[Aspect],
    quincunxes: Sequence[Aspect] = (),
) -> List[Pattern]:
    signs = {p.body: p.sign for p in placements}
    graph = AspectGraph(aspects, extra=quincunxes)

    found: List[Pattern] = []
    found += find_stelliums(placements)
    found += find_grand_trines(graph, signs)
    found += find_t_squares(graph)
    found += find_grand_crosses(graph)
    found += find_kites(graph, signs)
    found += find_yods(graph)
    found += find_mystic_rectangles(graph)
    found += find_cradles(graph)
    found += find_grand_conjunctions(graph, signs)
    shape = chart_shape(placements)
    if shape is not None:
        found.append(shape)
    return found
