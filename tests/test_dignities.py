import pytest

from birthchart.services.constants import Body, Sign
from birthchart.services.dignities import (
    DETRIMENT,
    RULERS,
    DignityKind,
    dignities,
    dignity_balance,
    dignity_for,
    ruler_of,
)
from birthchart.services.positions import Placement


def test_every_sign_has_exactly_one_ruler():
    assert set(RULERS) == set(Sign)
    assert set(DETRIMENT) == set(Sign)


def test_modern_rulers():
    assert ruler_of(Sign.SCORPIO) is Body.PLUTO
    assert ruler_of(Sign.AQUARIUS) is Body.URANUS
    assert ruler_of(Sign.PISCES) is Body.NEPTUNE
    assert ruler_of(Sign.ARIES) is Body.MARS


@pytest.mark.parametrize(
    "planet, sign, kind",
    [
        (Body.SUN, Sign.LEO, DignityKind.RULERSHIP),
        (Body.SUN, Sign.ARIES, DignityKind.EXALTATION),
        (Body.SUN, Sign.AQUARIUS, DignityKind.DETRIMENT),
        (Body.SUN, Sign.LIBRA, DignityKind.FALL),
        (Body.MOON, Sign.CAPRICORN, DignityKind.DETRIMENT),
        (Body.VENUS, Sign.VIRGO, DignityKind.FALL),
        (Body.PLUTO, Sign.TAURUS, DignityKind.DETRIMENT),
        (Body.MARS, Sign.SCORPIO, None),
        (Body.JUPITER, Sign.LEO, None),
    ],
)
def test_dignity_lookup(planet, sign, kind):
    assert dignity_for(planet, sign) is kind


def test_rulership_beats_exaltation():
    # Mercury both rules and is exalted in Virgo
    assert dignity_for(Body.MERCURY, Sign.VIRGO) is DignityKind.RULERSHIP


def test_detriment_beats_fall():
    # Mercury in Pisces is in detriment and in fall
    assert dignity_for(Body.MERCURY, Sign.PISCES) is DignityKind.DETRIMENT


def test_dignities_skip_peregrine_and_points():
    records = dignities(
        [
            Placement(Body.SUN, 125.0),
            Placement(Body.JUPITER, 125.0),
            Placement(Body.CHIRON, 125.0),
            Placement(Body.MOON, 275.0),
        ]
    )
    assert [(r.planet, r.kind) for r in records] == [
        (Body.SUN, DignityKind.RULERSHIP),
        (Body.MOON, DignityKind.DETRIMENT),
    ]
    assert dignity_balance(records) == 0
