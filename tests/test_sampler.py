"""
Tests for the boundary sampler.
"""

import math
from unittest.mock import Mock

import h3
import pytest

from hexgrid.polyfill import sampler, vector
from hexgrid.polyfill.constants import MAX_VERTEX_RADII
from hexgrid.polyfill.errors import DomainError, GridIndexError
from hexgrid.polyfill.geometry import Arc, ArcString, CurvedRing
from hexgrid.polyfill.vector import Coordinate, from_coordinate


@pytest.fixture
def echo_grid():
    """A grid whose 'cells' are the coordinates it is asked about."""
    grid = Mock()
    grid.coordinate_to_cell.side_effect = lambda coord, resolution: coord
    return grid


def degrees(lat, lng):
    return Coordinate(math.radians(lat), math.radians(lng))


class TestStepCount:
    """Test suite for sample density."""

    def test_vertex_radius_table(self):
        assert len(MAX_VERTEX_RADII) == 16
        assert list(MAX_VERTEX_RADII) == sorted(MAX_VERTEX_RADII, reverse=True)
        assert sampler.max_vertex_radius(0) == MAX_VERTEX_RADII[0]
        assert sampler.max_vertex_radius(15) == MAX_VERTEX_RADII[15]

    @pytest.mark.parametrize("resolution", [-1, 16])
    def test_vertex_radius_resolution_domain(self, resolution):
        with pytest.raises(DomainError):
            sampler.max_vertex_radius(resolution)

    def test_zero_length_has_one_step(self):
        assert sampler.step_count(0.0, 9) == 1

    def test_three_steps_per_vertex_radius(self):
        radius = sampler.max_vertex_radius(5)
        assert sampler.step_count(0.99 * radius, 5) == 3
        assert sampler.step_count(1.9 * radius, 5) == 6
        assert sampler.step_count(1.01 * radius, 5) == 4


class TestSampleArc:
    """Test suite for sampling a single great-circle arc."""

    def test_number_of_samples(self, echo_grid):
        length = 1.9 * sampler.max_vertex_radius(9)
        arc = Arc(from_coordinate((0, 0)), from_coordinate((0, length)))

        cells = sampler.sample_arc(arc, 9, echo_grid)

        assert echo_grid.coordinate_to_cell.call_count == 6
        assert len(cells) == 6

    def test_end_point_is_not_sampled(self, echo_grid):
        length = 1.9 * sampler.max_vertex_radius(9)
        arc = Arc(from_coordinate((0, 0)), from_coordinate((0, length)))

        cells = sampler.sample_arc(arc, 9, echo_grid)

        assert min(c.lng for c in cells) == pytest.approx(0, abs=1e-15)
        assert max(c.lng for c in cells) == pytest.approx(5 * length / 6)

    def test_samples_follow_great_circle(self, echo_grid):
        a, b = from_coordinate((0.5, -0.1)), from_coordinate((0.6, 0.2))
        normal = vector.cross(a, b)

        cells = sampler.sample_arc(Arc(a, b), 4, echo_grid)

        for coord in cells:
            assert vector.dot(normal, from_coordinate(coord)) == pytest.approx(0, abs=1e-12)

    def test_first_sample_is_start_cell(self):
        start, end = degrees(40.0, -105.0), degrees(40.1, -104.9)
        arc = Arc(from_coordinate(start), from_coordinate(end))

        cells = sampler.sample_arc(arc, 8)

        assert h3.latlng_to_cell(40.0, -105.0, 8) in cells

    def test_grid_failure_propagates(self):
        grid = Mock()
        grid.coordinate_to_cell.side_effect = GridIndexError("rejected")
        arc = Arc(from_coordinate((0, 0)), from_coordinate((0, 0.01)))

        with pytest.raises(GridIndexError):
            sampler.sample_arc(arc, 9, grid)

    def test_invalid_resolution_makes_no_grid_calls(self, echo_grid):
        arc = Arc(from_coordinate((0, 0)), from_coordinate((0, 0.01)))

        with pytest.raises(DomainError):
            sampler.sample_arc(arc, 16, echo_grid)
        assert not echo_grid.coordinate_to_cell.called


class TestSampleArcString:
    """Test suite for sampling arc strings and rings."""

    def test_includes_every_vertex_cell(self):
        coords = [degrees(40.0, -105.0), degrees(40.05, -104.9), degrees(39.95, -104.8)]
        cells = sampler.sample_arcstring(ArcString.from_coordinates(coords), 8)

        for lat, lng in [(40.0, -105.0), (40.05, -104.9), (39.95, -104.8)]:
            assert h3.latlng_to_cell(lat, lng, 8) in cells

    def test_includes_final_point(self, echo_grid):
        coords = [(0.0, 0.0), (0.0, 0.001)]
        cells = sampler.sample_arcstring(ArcString.from_coordinates(coords), 9, echo_grid)

        assert any(c.lng == pytest.approx(0.001) for c in cells)

    def test_single_point(self):
        cells = sampler.sample_arcstring(ArcString.from_coordinates([degrees(10, 10)]), 5)
        assert cells == {h3.latlng_to_cell(10, 10, 5)}

    def test_empty(self, echo_grid):
        assert sampler.sample_arcstring(ArcString(), 5, echo_grid) == set()
        assert not echo_grid.coordinate_to_cell.called

    def test_ring_boundary_is_connected(self):
        ring = CurvedRing(
            [degrees(40.0, -105.0), degrees(40.0, -104.9), degrees(40.1, -104.9), degrees(40.1, -105.0)]
        )
        cells = sampler.sample_arcstring(ring, 8)

        assert len(cells) > 4
        for cell in cells:
            neighbours = set(h3.grid_disk(cell, 1)) - {cell}
            assert neighbours & cells


class TestSampleLine:
    """Test suite for straight lat/lng line sampling."""

    def test_samples_are_linear_in_lat_lng(self, echo_grid):
        source, target = Coordinate(0.1, 0.1), Coordinate(0.2, 0.3)
        cells = sampler.sample_line(source, target, 5, echo_grid)

        assert len(cells) == sampler.step_count(sampler.line_length(source, target), 5)
        for coord in cells:
            assert (coord.lat - 0.1) / 0.1 == pytest.approx((coord.lng - 0.1) / 0.2)

    def test_line_length_is_at_least_arc_length(self):
        source, target = degrees(10, 20), degrees(-5, 40)
        arc = Arc(from_coordinate(source), from_coordinate(target)).length()
        assert sampler.line_length(source, target) >= arc

    def test_line_length_across_antimeridian(self):
        # Walks the long way round, through longitude 0
        length = sampler.line_length(degrees(0, 179), degrees(0, -179))
        assert length == pytest.approx(math.radians(358))

    def test_line_length_along_high_parallel(self):
        length = sampler.line_length(degrees(80, -100), degrees(80, 100))
        assert length == pytest.approx(math.radians(200) * math.cos(math.radians(80)))

    @pytest.mark.parametrize(
        "source,target,resolution",
        [
            ((0, 179), (0, -179), 3),
            ((80, -100), (80, 100), 4),
        ],
    )
    def test_line_cells_are_connected(self, source, target, resolution):
        cells = sampler.sample_linestring(
            [degrees(*source), degrees(*target)], resolution
        )

        assert len(cells) > 1
        for cell in cells:
            neighbours = set(h3.grid_disk(cell, 1)) - {cell}
            assert neighbours & cells

    def test_planar_line_across_antimeridian_passes_prime_meridian(self):
        cells = sampler.sample_linestring([degrees(0, 179), degrees(0, -179)], 3)
        assert h3.latlng_to_cell(0, 0, 3) in cells

    def test_target_is_not_sampled(self, echo_grid):
        cells = sampler.sample_line(Coordinate(0.1, 0.1), Coordinate(0.2, 0.3), 5, echo_grid)
        assert max(c.lat for c in cells) < 0.2

    def test_linestring_includes_final_point(self, echo_grid):
        coords = [(0.1, 0.1), (0.1, 0.2), (0.15, 0.25)]
        cells = sampler.sample_linestring(coords, 4, echo_grid)

        assert Coordinate(0.15, 0.25) in cells
        assert Coordinate(0.1, 0.1) in cells

    def test_linestring_single_point(self):
        cells = sampler.sample_linestring([degrees(-30, 20)], 6)
        assert cells == {h3.latlng_to_cell(-30, 20, 6)}

    def test_linestring_empty(self, echo_grid):
        assert sampler.sample_linestring([], 6, echo_grid) == set()

    def test_linestring_invalid_resolution(self, echo_grid):
        with pytest.raises(DomainError):
            sampler.sample_linestring([(0.1, 0.1), (0.2, 0.2)], -1, echo_grid)
        assert not echo_grid.coordinate_to_cell.called
