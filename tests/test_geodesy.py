import pytest

from chesscal.geodesy import ll_to_utm, utm_letter_designator, utm_to_ll


@pytest.mark.parametrize(
    "latitude, letter",
    [
        (84.0, "X"),
        (72.0, "X"),
        (71.9, "W"),
        (0.0, "N"),
        (-0.5, "M"),
        (-80.0, "C"),
        (85.0, "Z"),
        (-81.0, "Z"),
    ],
)
def test_letter_designator(latitude, letter):
    assert utm_letter_designator(latitude) == letter


def test_central_meridian_on_equator():
    northing, easting, zone = ll_to_utm(0.0, 3.0)
    assert zone == "31N"
    assert easting == pytest.approx(500000.0)
    assert northing == pytest.approx(0.0, abs=1e-6)


def test_southern_hemisphere_offset():
    northing, _, zone = ll_to_utm(-1e-9, 3.0)
    assert zone.endswith("M")
    assert northing == pytest.approx(10000000.0, abs=1e-3)


def test_norway_special_zone():
    _, _, zone = ll_to_utm(60.0, 5.0)
    assert zone == "32V"


def test_svalbard_special_zone():
    _, _, zone = ll_to_utm(78.0, 10.0)
    assert zone == "33X"


@pytest.mark.parametrize(
    "latitude, longitude",
    [(48.85, 2.35), (-33.9, 151.2), (40.7, -74.0), (78.0, 10.0), (-60.0, -70.0)],
)
def test_round_trip(latitude, longitude):
    northing, easting, zone = ll_to_utm(latitude, longitude)
    lat_back, lon_back = utm_to_ll(northing, easting, zone)
    assert lat_back == pytest.approx(latitude, abs=1e-5)
    assert lon_back == pytest.approx(longitude, abs=1e-5)


def test_easting_symmetric_about_central_meridian():
    _, east_a, zone_a = ll_to_utm(45.0, 8.0)
    _, east_b, zone_b = ll_to_utm(45.0, 10.0)
    assert zone_a == zone_b
    assert east_a - 500000.0 == pytest.approx(-(east_b - 500000.0))


def test_invalid_zone_raises():
    with pytest.raises(ValueError):
        utm_to_ll(0.0, 500000.0, "north")