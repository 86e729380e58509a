"""
Adapter for the hexagonal grid index (H3).

The rasterizer only needs four grid operations: point to cell, cell to
centroid, cell to boundary and the k-ring disk around a cell. H3Grid exposes
exactly those, taking and returning coordinates in radians. Grid failures are
re-raised as GridIndexError with the original H3 exception as the cause and
its message unchanged.
"""

import functools
import logging
import math
import numbers
from typing import List

import h3

from hexgrid.polyfill.constants import MAX_RESOLUTION, MIN_RESOLUTION
from hexgrid.polyfill.errors import DomainError, GridIndexError
from hexgrid.polyfill.vector import Coordinate

logger = logging.getLogger(__name__)

# Opaque cell identifier handed out by the grid index
CellId = str


def validate_resolution(resolution) -> int:
    """
    Raises DomainError unless resolution is an integer in [0, 15]. Values are
    never clamped.
    """
    if (
        isinstance(resolution, bool)
        or not isinstance(resolution, numbers.Integral)
        or not MIN_RESOLUTION <= resolution <= MAX_RESOLUTION
    ):
        raise DomainError(
            f"Resolution must be an integer from {MIN_RESOLUTION} to "
            f"{MAX_RESOLUTION}, got {resolution!r}"
        )
    return int(resolution)


def _grid_call(fn):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        # Malformed cell strings fail in h3 with a plain ValueError
        except (h3.H3BaseException, ValueError) as e:
            logger.debug(f"Grid index call {fn.__name__} failed: {e!r}")
            raise GridIndexError(str(e) or type(e).__name__) from e

    return wrapper


class H3Grid:
    """Stateless H3 grid index; safe to share between threads."""

    @_grid_call
    def coordinate_to_cell(self, coord: Coordinate, resolution: int) -> CellId:
        return h3.latlng_to_cell(
            math.degrees(coord[0]), math.degrees(coord[1]), resolution
        )

    @_grid_call
    def cell_to_coordinate(self, cell: CellId) -> Coordinate:
        lat, lng = h3.cell_to_latlng(cell)
        return Coordinate(math.radians(lat), math.radians(lng))

    @_grid_call
    def cell_boundary(self, cell: CellId) -> List[Coordinate]:
        return [
            Coordinate(math.radians(lat), math.radians(lng))
            for lat, lng in h3.cell_to_boundary(cell)
        ]

    @_grid_call
    def grid_disk(self, cell: CellId, k: int) -> List[CellId]:
        return list(h3.grid_disk(cell, k))


_DEFAULT_GRID = H3Grid()


def default_grid() -> H3Grid:
    return _DEFAULT_GRID
