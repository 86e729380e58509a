"""
Conversion between shapely geometry features and grid cells.

Shapely geometries carry longitude as x and latitude as y, in degrees; the
rasterizer works in (lat, lng) radians. This module does the translation in
both directions:

- geometry_to_cells / geometries_to_cells: the cells covered by points,
  lines, polygons and their multi-part and collection forms
- geometry_to_cell / geometries_to_cell: exactly one cell per point feature
- cells_to_points / cells_to_polygons: cell centroids and cell outlines
"""

import logging
import math
from typing import Iterable, List, Optional, Set

import numpy as np
from shapely.geometry import Point, Polygon
from shapely.geometry.base import BaseGeometry

from hexgrid.polyfill import rasterizer
from hexgrid.polyfill.errors import InvalidArgumentError, PolyfillError
from hexgrid.polyfill.grid import CellId, H3Grid, default_grid, validate_resolution

logger = logging.getLogger(__name__)

POINT_TYPES = ("Point", "MultiPoint", "GeometryCollection")


def lat_lng_radians(coords) -> np.ndarray:
    """
    Convert shapely (x, y[, z]) degree coordinates into an (N, 2) array of
    (lat, lng) radians.
    """
    xy = np.asarray(coords, dtype=float)
    if xy.size == 0:
        return np.empty((0, 2))
    return np.radians(xy[:, [1, 0]])


def geometry_to_cells(
    geom: BaseGeometry,
    resolution: int,
    geodesic: bool = True,
    grid: H3Grid = None,
    check_containment: bool = False,
) -> Set[CellId]:
    """
    All cells covered by a shapely geometry.

    Args:
        geom: Any shapely geometry in longitude/latitude degrees
        resolution: Grid resolution, 0 to 15
        geodesic: Follow great circles between line vertices; polygon edges
                  are always geodesic
        grid: Grid index to query (defaults to H3)
        check_containment: Passed through to the polygon fill

    Returns:
        Set of cells; empty for an empty geometry
    """
    grid = grid or default_grid()
    validate_resolution(resolution)

    if geom.is_empty:
        return set()

    geom_type = geom.geom_type
    if geom_type == "Point":
        return {rasterizer.rasterize_point(lat_lng_radians(geom.coords)[0], resolution, grid)}

    if geom_type in ("LineString", "LinearRing"):
        return rasterizer.rasterize_linestring(
            lat_lng_radians(geom.coords), resolution, geodesic, grid
        )

    if geom_type == "Polygon":
        return rasterizer.rasterize_polygon(
            lat_lng_radians(geom.exterior.coords),
            [lat_lng_radians(ring.coords) for ring in geom.interiors],
            resolution,
            grid,
            check_containment,
        )

    if geom_type in ("MultiPoint", "MultiLineString", "MultiPolygon", "GeometryCollection"):
        cells = set()
        for part in geom.geoms:
            cells |= geometry_to_cells(part, resolution, geodesic, grid, check_containment)
        return cells

    raise InvalidArgumentError(f"Can't convert geometry with type {geom_type} to cells")


def _point_coordinates(geom: BaseGeometry) -> List[tuple]:
    if geom.geom_type not in POINT_TYPES:
        raise InvalidArgumentError(f"Can't convert geometry with type {geom.geom_type} to cell")

    if geom.geom_type == "Point":
        return [] if geom.is_empty else [geom.coords[0]]

    return [coord for part in geom.geoms for coord in _point_coordinates(part)]


def geometry_to_cell(
    geom: BaseGeometry, resolution: int, grid: H3Grid = None
) -> Optional[CellId]:
    """
    The single cell for a point feature, or None if the feature is empty.

    Multi-point features and collections are accepted as long as they hold
    at most one coordinate in total.
    """
    grid = grid or default_grid()
    validate_resolution(resolution)

    coords = _point_coordinates(geom)
    if len(coords) > 1:
        raise InvalidArgumentError("Feature contains more than one coordinate.")
    if not coords:
        return None

    return rasterizer.rasterize_point(lat_lng_radians(coords)[0], resolution, grid)


def geometries_to_cells(
    geoms: Iterable[BaseGeometry], resolution: int, **kwargs
) -> List[Set[CellId]]:
    """
    Cells for each geometry in a batch. Errors are raised with the 1-based
    index of the failing feature attached.
    """
    validate_resolution(resolution)
    results = []
    for i, geom in enumerate(geoms, start=1):
        try:
            results.append(geometry_to_cells(geom, resolution, **kwargs))
        except PolyfillError as e:
            raise e.locate(feature=i)
    return results


def geometries_to_cell(
    geoms: Iterable[BaseGeometry], resolution: int, grid: H3Grid = None
) -> List[Optional[CellId]]:
    """One cell (or None) per point feature in a batch."""
    validate_resolution(resolution)
    results = []
    for i, geom in enumerate(geoms, start=1):
        try:
            results.append(geometry_to_cell(geom, resolution, grid))
        except PolyfillError as e:
            raise e.locate(feature=i)
    return results


def cells_to_points(cells: Iterable[CellId], grid: H3Grid = None) -> List[Point]:
    """Cell centroids as longitude/latitude Points."""
    grid = grid or default_grid()
    points = []
    for cell in cells:
        lat, lng = grid.cell_to_coordinate(cell)
        points.append(Point(math.degrees(lng), math.degrees(lat)))
    return points


def cells_to_polygons(cells: Iterable[CellId], grid: H3Grid = None) -> List[Polygon]:
    """Cell outlines as closed longitude/latitude Polygons."""
    grid = grid or default_grid()
    return [
        Polygon([(math.degrees(lng), math.degrees(lat)) for lat, lng in grid.cell_boundary(cell)])
        for cell in cells
    ]
