import math

import pytest

from birthchart.services.constants import Body, Sign
from birthchart.services.positions import (
    ChartInputError,
    normalize_longitude,
    normalize_placement,
    normalize_placements,
    with_descendant,
)


@pytest.mark.parametrize("raw", [-725.5, -360.0, -0.0, 0.0, 29.99, 359.999, 360.0, 721.25, -1e-20])
def test_normalize_longitude_is_idempotent_and_in_range(raw):
    once = normalize_longitude(raw)
    assert 0.0 <= once < 360.0
    assert normalize_longitude(once) == once


def test_normalize_longitude_wraps():
    assert normalize_longitude(370.0) == pytest.approx(10.0)
    assert normalize_longitude(-10.0) == pytest.approx(350.0)
    assert normalize_longitude(720.0) == 0.0


def test_sign_degree_and_minute_split():
    p = normalize_placement({"body": "Sun", "eclipticLongitude": 125.5})
    assert p.sign is Sign.LEO
    assert p.degree == 5
    assert p.minute == 30

    p = normalize_placement({"body": "Moon", "eclipticLongitude": 29.999})
    assert p.sign is Sign.ARIES
    assert p.degree == 29
    assert p.minute == 59


def test_out_of_range_longitude_is_normalised_not_rejected():
    p = normalize_placement({"body": "Mars", "eclipticLongitude": -30.0})
    assert p is not None
    assert p.lon == pytest.approx(330.0)
    assert p.sign is Sign.PISCES


@pytest.mark.parametrize("lon", [None, float("nan"), float("inf"), -math.inf, "abc", True])
def test_unusable_longitude_is_dropped(lon):
    assert normalize_placement({"body": "Venus", "eclipticLongitude": lon}) is None


def test_unknown_body_is_dropped():
    assert normalize_placement({"body": "Sedna", "eclipticLongitude": 10.0}) is None
    assert normalize_placement({"eclipticLongitude": 10.0}) is None


def test_body_aliases_and_alternate_keys():
    p = normalize_placement({"name": "TrueNode", "lon": 42.0, "retro": True})
    assert p.body is Body.NORTH_NODE
    assert p.lon == 42.0
    assert p.retrograde is True
    assert normalize_placement({"body": "mc", "longitude": 1.0}).body is Body.MIDHEAVEN
    assert normalize_placement({"body": "north_node", "lon": 1.0}).body is Body.NORTH_NODE


def test_normalize_placements_drops_bad_and_duplicate_entries():
    out = normalize_placements(
        [
            {"body": "Sun", "eclipticLongitude": 10.0},
            {"body": "Sun", "eclipticLongitude": 200.0},
            {"body": "Xyzzy", "eclipticLongitude": 10.0},
            {"body": "Moon", "eclipticLongitude": float("nan")},
            {"body": "Moon", "eclipticLongitude": 50.0},
        ]
    )
    assert [p.body for p in out] == [Body.SUN, Body.MOON]
    assert out[0].lon == 10.0


def test_empty_list_is_valid_but_missing_list_is_an_error():
    assert normalize_placements([]) == []
    with pytest.raises(ChartInputError):
        normalize_placements(None)


def test_with_descendant_adds_opposite_point_once():
    placements = normalize_placements([{"body": "Ascendant", "eclipticLongitude": 200.0}])
    out = with_descendant(placements)
    desc = [p for p in out if p.body is Body.DESCENDANT]
    assert len(desc) == 1
    assert desc[0].lon == pytest.approx(20.0)
    assert with_descendant(out) == out
    assert with_descendant([]) == []
