"""Tests for coordinate notation parsing."""

import pytest

from trakke_search.domain.models import BoundingBox, CoordinateNotation
from trakke_search.services.coordinate_parser import CoordinateParser, format_canonical


@pytest.fixture
def parser(territory):
    return CoordinateParser(territory=territory)


@pytest.fixture
def world_parser():
    return CoordinateParser(territory=BoundingBox(south=-90, west=-180, north=90, east=180))


class TestNotations:
    def test_canonical_notation(self, parser):
        parsed = parser.parse("59.90°N, 10.89°E")
        assert parsed is not None
        assert parsed.lat == pytest.approx(59.90)
        assert parsed.lng == pytest.approx(10.89)
        assert parsed.notation is CoordinateNotation.DECIMAL

    def test_canonical_accepts_norwegian_east_letter(self, parser):
        parsed = parser.parse("61.63600°N, 8.31250°Ø")
        assert parsed is not None
        assert parsed.lng == pytest.approx(8.3125)

    @pytest.mark.parametrize("text", ["59.90,10.75", "59.90, 10.75", "59.90 10.75", "  59.90 ,  10.75 "])
    def test_decimal_pair(self, parser, text):
        parsed = parser.parse(text)
        assert parsed is not None
        assert (parsed.lat, parsed.lng) == pytest.approx((59.90, 10.75))
        assert parsed.notation is CoordinateNotation.DECIMAL

    def test_hemisphere_prefixed_decimal(self, parser):
        parsed = parser.parse("N59.9, E10.75")
        assert parsed is not None
        assert (parsed.lat, parsed.lng) == pytest.approx((59.9, 10.75))

    def test_degrees_minutes_seconds(self, parser):
        parsed = parser.parse("59 54 36 N 10 45 0 E")
        assert parsed is not None
        assert parsed.lat == pytest.approx(59.91)
        assert parsed.lng == pytest.approx(10.75)
        assert parsed.notation is CoordinateNotation.DEGREES_MINUTES_SECONDS

    def test_degrees_minutes_seconds_with_marks(self, parser):
        parsed = parser.parse("59°54'36\"N 10°45'0\"E")
        assert parsed is not None
        assert (parsed.lat, parsed.lng) == pytest.approx((59.91, 10.75))

    def test_minutes_and_seconds_are_optional(self, parser):
        parsed = parser.parse("60 N 10 E")
        assert parsed is not None
        assert (parsed.lat, parsed.lng) == pytest.approx((60.0, 10.0))

    def test_minutes_out_of_range_is_no_match(self, parser):
        assert parser.parse("59 75 0 N 10 45 0 E") is None

    def test_decimal_minutes(self, parser):
        parsed = parser.parse("59 54.6 N 10 45 E")
        assert parsed is not None
        assert (parsed.lat, parsed.lng) == pytest.approx((59.91, 10.75))
        assert parsed.notation is CoordinateNotation.DEGREES_MINUTES_SECONDS

    def test_decimal_minutes_with_marks(self, parser):
        parsed = parser.parse("59°54.6'N 10°45.3'E")
        assert parsed is not None
        assert (parsed.lat, parsed.lng) == pytest.approx((59.91, 10.755))

    @pytest.mark.parametrize("text", ["59 54.6 30 N 10 45 E", "59.5 30 N 10 45 E"])
    def test_fraction_before_last_component_is_no_match(self, parser, text):
        assert parser.parse(text) is None

    def test_southern_and_western_hemispheres_negate(self, world_parser):
        parsed = world_parser.parse("33 52 N 151 12 W")
        assert parsed is not None
        assert parsed.lng == pytest.approx(-151.2)

        parsed = world_parser.parse("S33.86, E151.2")
        assert parsed is not None
        assert parsed.lat == pytest.approx(-33.86)

    def test_canonical_wins_over_other_notations(self, parser):
        parsed = parser.parse("60°N, 10°E")
        assert parsed is not None
        assert parsed.notation is CoordinateNotation.DECIMAL


class TestNoMatch:
    def test_out_of_range_pair(self, parser):
        assert parser.parse("199.0, 10.0") is None

    def test_plausible_pair_outside_territory(self, parser):
        # Paris
        assert parser.parse("48.85, 2.35") is None

    @pytest.mark.parametrize("text", ["", "   ", "Galdhøpiggen", "Storgata 1", "2 dogs 3 cats", "1 2"])
    def test_text_is_not_a_coordinate(self, parser, text):
        assert parser.parse(text) is None


class TestCanonicalFormat:
    def test_format(self):
        assert format_canonical(59.9, 10.75) == "59.90000°N, 10.75000°E"
        assert format_canonical(-33.5, -70.25) == "33.50000°S, 70.25000°W"

    @pytest.mark.parametrize(
        "lat,lng",
        [(59.9, 10.75), (69.6496, 18.956), (57.5, 4.0), (71.5, 31.5), (61.636347, 8.312433)],
    )
    def test_round_trip(self, parser, lat, lng):
        canonical = format_canonical(lat, lng)
        parsed = parser.parse(canonical)
        assert parsed is not None
        assert format_canonical(parsed.lat, parsed.lng) == canonical
