"""
Boundary sampling: the grid cells crossed by arcs, arc strings and lines.

A boundary is walked at a fixed density and each sample point is looked up
in the grid index. Samples are never further apart than one third of the
largest centroid-to-vertex distance at the target resolution, which is dense
enough that consecutive samples can't skip over a cell.

Per-arc sampling never evaluates the arc's end point; that point is the
start of the next arc (or is added once by the arc-string samplers), so
shared vertices are looked up exactly once.
"""

import math
from typing import Set

from funcy import pairwise

from hexgrid.polyfill import vector
from hexgrid.polyfill.constants import MAX_VERTEX_RADII, SAMPLES_PER_VERTEX_RADIUS
from hexgrid.polyfill.geometry import Arc
from hexgrid.polyfill.grid import CellId, H3Grid, default_grid, validate_resolution
from hexgrid.polyfill.vector import Coordinate


def max_vertex_radius(resolution: int) -> float:
    """Largest centroid-to-vertex distance (radians) of any cell at resolution."""
    return MAX_VERTEX_RADII[validate_resolution(resolution)]


def step_count(length: float, resolution: int) -> int:
    """Number of samples to take along a boundary of the given angular length."""
    steps = math.ceil(
        SAMPLES_PER_VERTEX_RADIUS * length / max_vertex_radius(resolution)
    )
    return max(1, steps)


def sample_arc(arc: Arc, resolution: int, grid: H3Grid = None) -> Set[CellId]:
    """
    Cells crossed by a great-circle arc, excluding the cell of its end point
    unless an earlier sample falls in it.
    """
    grid = grid or default_grid()
    n_steps = step_count(arc.length(), resolution)

    cells = set()
    for i in range(n_steps):
        coord = vector.to_coordinate(arc.slerp(i / n_steps))
        cells.add(grid.coordinate_to_cell(coord, resolution))

    return cells


def sample_arcstring(arcstring, resolution: int, grid: H3Grid = None) -> Set[CellId]:
    """
    Cells crossed by every arc of an ArcString or CurvedRing, including the
    cell of its final point.
    """
    grid = grid or default_grid()
    validate_resolution(resolution)

    cells = set()
    if len(arcstring.points) == 0:
        return cells

    for arc in arcstring:
        cells |= sample_arc(arc, resolution, grid)

    last = vector.to_coordinate(arcstring.points[-1])
    cells.add(grid.coordinate_to_cell(last, resolution))

    return cells


def line_length(source: Coordinate, target: Coordinate) -> float:
    """
    Upper bound (radians) on the distance walked along a straight lat/lng
    segment, never less than the great-circle distance between its ends.
    """
    # Longitude steps are widest at the latitude nearest the equator
    if source.lat * target.lat <= 0:
        widest = 0.0
    else:
        widest = min(abs(source.lat), abs(target.lat))
    path = math.hypot(target.lat - source.lat, (target.lng - source.lng) * math.cos(widest))
    arc = vector.angle(vector.from_coordinate(source), vector.from_coordinate(target))
    return max(path, arc)


def sample_line(
    source: Coordinate, target: Coordinate, resolution: int, grid: H3Grid = None
) -> Set[CellId]:
    """
    Cells crossed by a straight segment in latitude/longitude space.

    Latitude and longitude are interpolated linearly instead of following
    the great circle, and the step count is taken from the length of that
    path, which can be far longer than the great-circle distance (across the
    antimeridian or along a parallel near a pole). The target point is not
    sampled.
    """
    grid = grid or default_grid()
    source, target = Coordinate(*source), Coordinate(*target)
    n_steps = step_count(line_length(source, target), resolution)

    dlat = target.lat - source.lat
    dlng = target.lng - source.lng
    cells = set()
    for i in range(n_steps):
        frac = i / n_steps
        coord = Coordinate(source.lat + frac * dlat, source.lng + frac * dlng)
        cells.add(grid.coordinate_to_cell(coord, resolution))

    return cells


def sample_linestring(coords, resolution: int, grid: H3Grid = None) -> Set[CellId]:
    """
    Cells crossed by a path of straight lat/lng segments, including the cell
    of its final coordinate.
    """
    grid = grid or default_grid()
    validate_resolution(resolution)
    coords = [Coordinate(*c) for c in coords]

    cells = set()
    if not coords:
        return cells

    for source, target in pairwise(coords):
        cells |= sample_line(source, target, resolution, grid)

    cells.add(grid.coordinate_to_cell(coords[-1], resolution))

    return cells
