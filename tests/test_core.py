"""Tests for fieldsurvey geodesy, fallback model and polygon measurement.

Tests: GeoCalculator, SyntheticElevationModel, PolygonMeasure
Focus: Known distances, exact interpolation endpoints, property-based invariants
"""

from math import isclose, nan

import pytest
from hypothesis import given, settings, strategies as st

from fieldsurvey.constants import GeoConfig, UnitConfig
from fieldsurvey.core.fallback_elevation import SyntheticElevationModel
from fieldsurvey.core.geo_calculator import GeoCalculator
from fieldsurvey.core.polygon_measure import PolygonMeasure
from fieldsurvey.errors import InvalidArgument
from fieldsurvey.model.geo_point import GeoPoint

latitudes = st.floats(min_value=-89.0, max_value=89.0, allow_nan=False)
longitudes = st.floats(min_value=-179.0, max_value=179.0, allow_nan=False)


# =============================================================================
# GEO CALCULATOR
# =============================================================================


class TestGeoCalculator:
    """GeoCalculator - great-circle distance and interpolation."""

    def test_one_degree_latitude(self) -> None:
        """1 degree latitude on the 6371 km sphere is ~111.195 km."""
        dist = GeoCalculator.haversine_distance_km(lat1=19.0, lng1=73.0, lat2=20.0, lng2=73.0)
        assert abs(dist - 111.195) < 0.01

    def test_mumbai_markers_distance(self) -> None:
        """Reference markers are roughly 18.9 km apart."""
        a = GeoPoint(lat=19.0760, lng=72.8777)
        b = GeoPoint(lat=19.2000, lng=73.0000)
        assert 18.5 < GeoCalculator.distance_km(a=a, b=b) < 19.2

    def test_identical_points_zero(self) -> None:
        p = GeoPoint(lat=19.0760, lng=72.8777)
        assert GeoCalculator.distance_km(a=p, b=p) == 0.0

    @pytest.mark.parametrize(
        "lat,lng",
        [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0), (nan, 0.0), (0.0, nan)],
    )
    def test_invalid_coordinates_rejected(self, lat: float, lng: float) -> None:
        with pytest.raises(InvalidArgument):
            GeoCalculator.haversine_distance_km(lat1=lat, lng1=lng, lat2=0.0, lng2=0.0)

    def test_invalid_argument_is_value_error(self) -> None:
        """Callers catching ValueError still see coordinate errors."""
        with pytest.raises(ValueError):
            GeoPoint(lat=100.0, lng=0.0)

    def test_interpolate_endpoints_exact(self) -> None:
        """t=0 and t=1 reproduce the endpoints exactly, not approximately."""
        a = GeoPoint(lat=19.0760, lng=72.8777)
        b = GeoPoint(lat=19.2000, lng=73.0000)
        assert GeoCalculator.interpolate(a=a, b=b, t=0.0) == a
        assert GeoCalculator.interpolate(a=a, b=b, t=1.0) == b

    def test_interpolate_midpoint(self) -> None:
        a = GeoPoint(lat=10.0, lng=20.0)
        b = GeoPoint(lat=12.0, lng=24.0)
        mid = GeoCalculator.interpolate(a=a, b=b, t=0.5)
        assert mid.lat == pytest.approx(11.0)
        assert mid.lng == pytest.approx(22.0)

    @pytest.mark.parametrize("t", [-0.01, 1.01, nan])
    def test_interpolate_rejects_t_outside_unit_interval(self, t: float) -> None:
        a = GeoPoint(lat=0.0, lng=0.0)
        b = GeoPoint(lat=1.0, lng=1.0)
        with pytest.raises(InvalidArgument):
            GeoCalculator.interpolate(a=a, b=b, t=t)

    def test_path_length_sums_legs(self) -> None:
        points = [GeoPoint(lat=19.0, lng=73.0), GeoPoint(lat=19.1, lng=73.0), GeoPoint(lat=19.1, lng=73.1)]
        expected = GeoCalculator.distance_km(a=points[0], b=points[1]) + GeoCalculator.distance_km(
            a=points[1], b=points[2]
        )
        assert GeoCalculator.path_length_km(points) == pytest.approx(expected)

    def test_path_length_single_point_zero(self) -> None:
        assert GeoCalculator.path_length_km([GeoPoint(lat=1.0, lng=1.0)]) == 0.0

    def test_km_to_miles(self) -> None:
        assert GeoCalculator.km_to_miles(distance_km=10.0) == pytest.approx(6.21371)

    def test_pixel_to_geo_corners(self) -> None:
        """Top-left maps to the north-west corner, bottom-right to south-east."""
        nw = GeoCalculator.approximate_pixel_to_geo(x=0, y=0, width=800, height=600)
        se = GeoCalculator.approximate_pixel_to_geo(x=800, y=600, width=800, height=600)
        assert nw.lat_lng == (GeoConfig.FALLBACK_BBOX_NORTH, GeoConfig.FALLBACK_BBOX_WEST)
        assert se.lat == pytest.approx(GeoConfig.FALLBACK_BBOX_SOUTH)
        assert se.lng == pytest.approx(GeoConfig.FALLBACK_BBOX_EAST)

    def test_pixel_to_geo_rejects_empty_map(self) -> None:
        with pytest.raises(InvalidArgument):
            GeoCalculator.approximate_pixel_to_geo(x=0, y=0, width=0, height=600)


class TestGeoCalculatorHypothesis:
    """Property-based tests for distance and interpolation."""

    @given(lat1=latitudes, lng1=longitudes, lat2=latitudes, lng2=longitudes)
    @settings(max_examples=30)
    def test_distance_symmetric_and_non_negative(self, lat1: float, lng1: float, lat2: float, lng2: float) -> None:
        d_ab = GeoCalculator.haversine_distance_km(lat1=lat1, lng1=lng1, lat2=lat2, lng2=lng2)
        d_ba = GeoCalculator.haversine_distance_km(lat1=lat2, lng1=lng2, lat2=lat1, lng2=lng1)
        assert d_ab >= 0.0
        assert isclose(d_ab, d_ba, rel_tol=1e-9, abs_tol=1e-9)

    @given(lat1=latitudes, lng1=longitudes, lat2=latitudes, lng2=longitudes)
    @settings(max_examples=30)
    def test_distance_bounded_by_half_circumference(
        self, lat1: float, lng1: float, lat2: float, lng2: float
    ) -> None:
        d = GeoCalculator.haversine_distance_km(lat1=lat1, lng1=lng1, lat2=lat2, lng2=lng2)
        assert d <= GeoConfig.EARTH_RADIUS_KM * 3.14159266

    @given(
        lat1=latitudes,
        lng1=longitudes,
        lat2=latitudes,
        lng2=longitudes,
        t=st.floats(min_value=0.0, max_value=1.0, allow_nan=False),
    )
    @settings(max_examples=30)
    def test_interpolated_point_inside_bounding_box(
        self, lat1: float, lng1: float, lat2: float, lng2: float, t: float
    ) -> None:
        a = GeoPoint(lat=lat1, lng=lng1)
        b = GeoPoint(lat=lat2, lng=lng2)
        p = GeoCalculator.interpolate(a=a, b=b, t=t)
        eps = 1e-9
        assert min(lat1, lat2) - eps <= p.lat <= max(lat1, lat2) + eps
        assert min(lng1, lng2) - eps <= p.lng <= max(lng1, lng2) + eps


# =============================================================================
# SYNTHETIC FALLBACK MODEL
# =============================================================================


class TestSyntheticElevationModel:
    """SyntheticElevationModel - deterministic heuristic terrain."""

    def test_deterministic_for_same_point(self, fallback_model: SyntheticElevationModel) -> None:
        first = fallback_model.elevation_at(lat=19.1, lng=72.9)
        second = SyntheticElevationModel().elevation_at(lat=19.1, lng=72.9)
        assert first == second

    def test_whole_meters_never_negative(self, fallback_model: SyntheticElevationModel) -> None:
        for lat, lng in [(19.1, 72.9), (-30.0, 10.0), (10.0, 60.0), (28.0, 80.0)]:
            value = fallback_model.elevation_at(lat=lat, lng=lng)
            assert value >= 0.0
            assert value == round(value)

    def test_latitude_ramp_at_range_center(self, fallback_model: SyntheticElevationModel) -> None:
        """lat=30 gives a 2000 m ramp; lng=75 is the western range center where sin(0)=0."""
        value = fallback_model.elevation_at(lat=30.0, lng=75.0)
        assert 1950.0 <= value <= 2050.0

    def test_western_range_peak(self, fallback_model: SyntheticElevationModel) -> None:
        """lng=74 is a quarter period from center: |sin(-pi/2)| * 800 = 800 m on top of the ramp."""
        value = fallback_model.elevation_at(lat=30.0, lng=74.0)
        assert 2750.0 <= value <= 2850.0

    def test_coastal_damping(self, fallback_model: SyntheticElevationModel) -> None:
        """Below 15N there is no ramp; noise (at most 50 m) is damped by 0.3."""
        assert fallback_model.elevation_at(lat=10.0, lng=72.0) <= 15.0


# =============================================================================
# POLYGON MEASURE
# =============================================================================


class TestPolygonMeasure:
    """PolygonMeasure - geodesic area and haversine perimeter."""

    SIDE_DEG = 0.009  # ~1 km at the equator

    def _square(self) -> list[GeoPoint]:
        s = self.SIDE_DEG
        return [GeoPoint(lat=0.0, lng=0.0), GeoPoint(lat=0.0, lng=s), GeoPoint(lat=s, lng=s), GeoPoint(lat=s, lng=0.0)]

    def test_square_area_about_one_km2(self) -> None:
        area = PolygonMeasure.area_km2(self._square())
        assert 0.98 < area < 1.01

    def test_area_independent_of_winding(self) -> None:
        square = self._square()
        assert PolygonMeasure.area_km2(square) == pytest.approx(PolygonMeasure.area_km2(list(reversed(square))))

    def test_perimeter_closes_loop(self) -> None:
        expected = 4 * self.SIDE_DEG * 111.195
        assert PolygonMeasure.perimeter_km(self._square()) == pytest.approx(expected, rel=0.01)

    def test_fewer_than_three_vertices(self) -> None:
        two = self._square()[:2]
        measurement = PolygonMeasure.measure(two)
        assert measurement.area_km2 == 0.0
        assert not measurement.is_valid

    def test_bow_tie_is_not_simple(self) -> None:
        s = self.SIDE_DEG
        bow_tie = [GeoPoint(lat=0.0, lng=0.0), GeoPoint(lat=s, lng=s), GeoPoint(lat=0.0, lng=s), GeoPoint(lat=s, lng=0.0)]
        measurement = PolygonMeasure.measure(bow_tie)
        assert measurement.is_simple is False
        assert measurement.is_valid is False

    def test_valid_square(self) -> None:
        measurement = PolygonMeasure.measure(self._square())
        assert measurement.is_simple
        assert measurement.is_valid
        assert len(measurement.vertices) == 4


# =============================================================================
# UNIT CONVERSION
# =============================================================================


class TestUnitConfig:
    def test_feet_conversion(self) -> None:
        assert UnitConfig.convert_elevation(elevation_m=100.0, unit="feet") == pytest.approx(328.084)

    def test_unknown_unit(self) -> None:
        with pytest.raises(ValueError):
            UnitConfig.convert_distance(distance_km=1.0, unit="furlongs")
