from birthchart.services.aspects import find_aspects
from birthchart.services.constants import Body, Sign
from birthchart.services.derivations import (
    chart_ruler,
    dominant,
    element_counts,
    insights,
    modality_counts,
    most_aspected,
    summary,
)
from birthchart.services.dignities import dignities
from birthchart.services.houses import assign_houses
from birthchart.services.positions import Placement


def test_counts_use_planets_only():
    placements = [
        Placement(Body.SUN, 0.0),
        Placement(Body.MOON, 40.0),
        Placement(Body.ASCENDANT, 120.0),
        Placement(Body.CERES, 0.0),
    ]
    elements = {t.name: t.count for t in element_counts(placements)}
    assert elements == {"Fire": 1, "Earth": 1, "Air": 0, "Water": 0}
    modalities = {t.name: t.bodies for t in modality_counts(placements)}
    assert modalities["Cardinal"] == (Body.SUN,)
    assert modalities["Fixed"] == (Body.MOON,)


def test_dominant_ties_go_to_first_listed():
    tallies = element_counts([Placement(Body.SUN, 0.0), Placement(Body.MOON, 40.0)])
    assert dominant(tallies).name == "Fire"
    assert dominant(element_counts([])) is None


def test_most_aspected_counts_then_priority():
    placements = [Placement(Body.SUN, 0.0), Placement(Body.MARS, 90.0), Placement(Body.SATURN, 150.0)]
    assert most_aspected(placements, find_aspects(placements)) is Body.MARS

    placements = [Placement(Body.MARS, 0.0), Placement(Body.SUN, 180.0)]
    assert most_aspected(placements, find_aspects(placements)) is Body.SUN


def test_most_aspected_without_aspects():
    placements = [Placement(Body.MARS, 45.0), Placement(Body.MOON, 0.0)]
    assert most_aspected(placements, []) is Body.MOON
    assert most_aspected([], []) is None


def test_chart_ruler_follows_ascendant_sign():
    assert chart_ruler([Placement(Body.SUN, 0.0)], None) is None

    ruler = chart_ruler([Placement(Body.ASCENDANT, 5.0)], {Body.ASCENDANT: 1})
    assert ruler.body is Body.MARS
    assert ruler.sign is None and ruler.house is None

    placements = [Placement(Body.ASCENDANT, 215.0), Placement(Body.PLUTO, 100.0)]
    ruler = chart_ruler(placements, assign_houses(placements, Sign.SCORPIO))
    assert ruler.body is Body.PLUTO
    assert ruler.sign is Sign.CANCER
    assert ruler.house == 9


def test_insights_flag_retrograde_emphasis():
    placements = [
        Placement(Body.MERCURY, 10.0, retrograde=True),
        Placement(Body.SATURN, 100.0, retrograde=True),
        Placement(Body.JUPITER, 200.0, retrograde=True),
        Placement(Body.NORTH_NODE, 300.0, retrograde=True),
    ]
    elements, modalities = element_counts(placements), modality_counts(placements)
    found = insights(placements, elements, modalities, dignities(placements), None, None)
    retro = [i for i in found if i.category == "Retrograde Emphasis"]
    assert len(retro) == 1
    assert retro[0].text.startswith("3 retrograde planets")


def test_summary_keys():
    placements = [Placement(Body.SUN, 0.0), Placement(Body.MOON, 5.0), Placement(Body.MARS, 130.0)]
    elements, modalities = element_counts(placements), modality_counts(placements)
    out = summary(elements, modalities, Body.SUN)
    assert out == {"dominantElement": "Fire", "dominantModality": "Cardinal", "mostAspectedBody": "Sun"}
