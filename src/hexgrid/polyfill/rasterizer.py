"""
Rasterization of points, lines and polygons to grid cells ("polyfill").

A polygon is filled in three phases:

1. Edge: sample every ring of the polygon, giving the set of cells that
   its boundary passes through.
2. Seed: look at the neighbours of every edge cell. Those that are not
   edge cells and whose centroid lies inside the polygon are interior seeds.
3. Fill: flood-fill breadth-first from the seeds across grid adjacency. The
   edge cells form a closed barrier, so every cell reached without crossing
   it is interior.

The result is the union of edge and interior cells. Self-intersecting
polygons and holes that touch the exterior ring are not validated, and
may let the fill leak; pass check_containment=True to re-test the centroid
of every filled cell at the cost of one containment test per cell.
"""

import logging
import warnings
from collections import deque
from typing import Iterable, Sequence, Set

from hexgrid.polyfill import sampler, vector
from hexgrid.polyfill.errors import DegenerateInputWarning, PolyfillError
from hexgrid.polyfill.geometry import ArcString, CurvedPolygon
from hexgrid.polyfill.grid import CellId, H3Grid, default_grid, validate_resolution
from hexgrid.polyfill.vector import Coordinate

logger = logging.getLogger(__name__)


def _neighbours(grid: H3Grid, cell: CellId):
    return [c for c in grid.grid_disk(cell, 1) if c and c != cell]


def _centroid(grid: H3Grid, cell: CellId) -> vector.UnitVector:
    return vector.from_coordinate(grid.cell_to_coordinate(cell))


def edge_cells(polygon: CurvedPolygon, resolution: int, grid: H3Grid = None) -> Set[CellId]:
    """Cells crossed by the exterior ring and every interior ring."""
    grid = grid or default_grid()
    cells = set()
    for i, ring in enumerate(polygon.rings):
        # A closed ring repeats its first point
        if len(ring) < 4:
            warnings.warn(
                f"Ring {i} has fewer than 3 distinct points and encloses nothing",
                DegenerateInputWarning,
            )
        try:
            cells |= sampler.sample_arcstring(ring, resolution, grid)
        except PolyfillError as e:
            raise e.locate(ring=i)
    return cells


def polygon_to_cells(
    polygon: CurvedPolygon,
    resolution: int,
    grid: H3Grid = None,
    check_containment: bool = False,
) -> Set[CellId]:
    """
    All cells covering a CurvedPolygon at the given resolution.

    Args:
        polygon: Polygon to fill
        resolution: Grid resolution, 0 to 15
        grid: Grid index to query (defaults to H3)
        check_containment: Re-test the centroid of every cell reached by the
                           flood fill and drop those outside the polygon

    Returns:
        Set of edge and interior cells

    Raises:
        DomainError: If the resolution is out of range
        GridIndexError: If the grid index rejects a lookup
    """
    grid = grid or default_grid()
    validate_resolution(resolution)

    if polygon.is_empty:
        warnings.warn("Polygon has no coordinates", DegenerateInputWarning)
        return set()

    edges = edge_cells(polygon, resolution, grid)
    cells = set(edges)

    # Seed phase; visited guards against repeating containment tests
    interior = deque()
    visited = set()
    for edge_cell in edges:
        for cell in _neighbours(grid, edge_cell):
            if cell in edges or cell in visited:
                continue
            visited.add(cell)

            if polygon.contains(_centroid(grid, cell)):
                interior.append(cell)
                cells.add(cell)

    seeds = len(interior)

    # Fill phase
    while interior:
        cell = interior.popleft()
        for neighbour in _neighbours(grid, cell):
            if neighbour in cells:
                continue
            if check_containment:
                if neighbour in visited:
                    continue
                visited.add(neighbour)
                if not polygon.contains(_centroid(grid, neighbour)):
                    continue
            cells.add(neighbour)
            interior.append(neighbour)

    logger.debug(
        f"Filled polygon at resolution {resolution}: {len(edges)} edge cells, "
        f"{seeds} seeds, {len(cells) - len(edges)} interior cells"
    )

    return cells


def rasterize_point(coord: Sequence[float], resolution: int, grid: H3Grid = None) -> CellId:
    """The cell containing a single (lat, lng) coordinate in radians."""
    grid = grid or default_grid()
    validate_resolution(resolution)
    return grid.coordinate_to_cell(Coordinate(*coord), resolution)


def rasterize_linestring(
    coords: Sequence[Sequence[float]],
    resolution: int,
    geodesic: bool = True,
    grid: H3Grid = None,
) -> Set[CellId]:
    """
    Cells crossed by a path of (lat, lng) coordinates in radians.

    Geodesic paths follow great-circle arcs between vertices; otherwise each
    segment is a straight line in latitude/longitude space. A single
    coordinate gives the single cell containing it.
    """
    grid = grid or default_grid()
    validate_resolution(resolution)

    if len(coords) == 0:
        warnings.warn("Line has no coordinates", DegenerateInputWarning)
        return set()

    if geodesic:
        return sampler.sample_arcstring(
            ArcString.from_coordinates(coords), resolution, grid
        )
    return sampler.sample_linestring(coords, resolution, grid)


def rasterize_polygon(
    exterior: Sequence[Sequence[float]],
    interiors: Iterable[Sequence[Sequence[float]]],
    resolution: int,
    grid: H3Grid = None,
    check_containment: bool = False,
) -> Set[CellId]:
    """
    Cells covering a polygon given as an exterior ring and interior rings of
    (lat, lng) coordinates in radians. Rings need not be closed.
    """
    validate_resolution(resolution)
    polygon = CurvedPolygon.from_rings(exterior, interiors)
    return polygon_to_cells(polygon, resolution, grid, check_containment)
