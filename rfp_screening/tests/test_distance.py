"""
Tests: ZIP-table distance lookups and city-name resolution.

Run with:
    pytest rfp_screening/tests/test_distance.py -v
"""

import pytest

from rfp_screening.rules.distance_rules import (
    ZIP_COORDINATES,
    calculate_distance,
    city_zip_code,
    estimate_driving_time,
    extract_zip_code,
    format_distance,
    haversine_distance,
    is_within_radius,
    resolve_zip,
)
from rfp_screening.services.extraction_service import CITY_GAZETTEER


class TestZipExtraction:
    def test_plain_zip(self):
        assert extract_zip_code("613 E Broadway, Glendale, CA 91206") == "91206"

    def test_zip_plus_four_truncated(self):
        assert extract_zip_code("Glendale, CA 91201-1234") == "91201"

    def test_no_zip(self):
        assert extract_zip_code("Glendale, CA") is None
        assert extract_zip_code("") is None


class TestCalculateDistance:
    def test_same_zip_is_zero(self):
        assert calculate_distance("91201", "91201") == pytest.approx(0.0)

    def test_monterey_park_from_glendale(self):
        distance = calculate_distance("91754", "91201")
        assert distance is not None
        assert 5 < distance < 15

    def test_symmetric(self):
        a = ZIP_COORDINATES["91201"]
        b = ZIP_COORDINATES["92501"]
        assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))

    def test_unmapped_zip_is_unknown(self):
        assert calculate_distance("91201", "99999") is None

    def test_unknown_city_is_unknown(self):
        assert calculate_distance("Fresno, CA", "91201") is None


class TestCityResolution:
    def test_gazetteer_city_resolves(self):
        assert resolve_zip("Monterey Park, CA") == "91754"
        assert city_zip_code("los angeles") == "90012"

    def test_written_zip_wins_over_city(self):
        assert resolve_zip("Glendale, CA 91206") == "91206"

    def test_city_only_distance(self):
        distance = calculate_distance("Monterey Park, CA", "91201")
        assert distance == pytest.approx(calculate_distance("91754", "91201"))

    def test_both_sides_by_city(self):
        assert calculate_distance("Pasadena, CA", "Glendale, CA") < 10

    def test_every_gazetteer_city_has_coordinates(self):
        for canonical in set(CITY_GAZETTEER.values()):
            zip_code = city_zip_code(canonical)
            assert zip_code is not None, canonical
            assert zip_code in ZIP_COORDINATES


class TestWithinRadius:
    def test_unknown_distance_is_outside(self):
        assert is_within_radius("99999", "91201", 500) is False

    def test_boundary_is_inclusive(self):
        distance = calculate_distance("91754", "91201")
        assert is_within_radius("91754", "91201", distance) is True

    def test_beyond_radius(self):
        assert is_within_radius("92501", "91201", 40) is False


class TestFormatting:
    def test_format_distance(self):
        assert format_distance(0.4) == "Less than 1 mile"
        assert format_distance(1.2) == "1 mile"
        assert format_distance(14.6) == "15 miles"

    def test_driving_time(self):
        assert estimate_driving_time(15) == "30 min"
        assert estimate_driving_time(45) == "1 hr 30 min"
        assert estimate_driving_time(60) == "2 hr"
