"""
Great-circle arcs, rings and polygons on the unit sphere.

Edges between consecutive vertices are geodesic: an edge is the shorter
great-circle arc between its endpoints, not a straight line in
latitude/longitude space.
"""

import dataclasses
import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from funcy import pairwise

from hexgrid.polyfill import vector
from hexgrid.polyfill.errors import InvalidArgumentError
from hexgrid.polyfill.vector import Coordinate, UnitVector


@dataclasses.dataclass(frozen=True)
class Arc:
    """The shorter great-circle path from a to b."""

    a: UnitVector
    b: UnitVector

    def length(self) -> float:
        """Great-circle length in radians, always <= pi."""
        return vector.angle(self.a, self.b)

    def slerp(self, frac: float) -> UnitVector:
        """
        Spherical linear interpolation from a (frac = 0) to b (frac = 1).

        Points returned lie on the great circle through a and b, spaced
        evenly by arc length. A zero-length arc returns a.
        """
        theta = self.length()
        sin_theta = math.sin(theta)
        if sin_theta < vector.EPSILON:
            return self.a

        wa = math.sin((1 - frac) * theta) / sin_theta
        wb = math.sin(frac * theta) / sin_theta
        return vector.add(vector.scale(self.a, wa), vector.scale(self.b, wb))


@dataclasses.dataclass(frozen=True)
class ArcString:
    """An ordered sequence of points; each consecutive pair is an Arc."""

    points: Tuple[UnitVector, ...] = ()

    @classmethod
    def from_coordinates(cls, coords: Iterable[Sequence[float]]) -> "ArcString":
        return cls(tuple(vector.from_coordinate(Coordinate(*c)) for c in coords))

    def __iter__(self) -> Iterator[Arc]:
        # Fresh generator on every call, so an ArcString can be walked repeatedly
        return (Arc(a, b) for a, b in pairwise(self.points))

    def __len__(self) -> int:
        return len(self.points)


class CurvedRing:
    """
    A closed ArcString forming one loop of a polygon boundary.

    If the first and last input coordinates differ, the first point is
    appended so the ring always ends where it starts.
    """

    def __init__(self, coords: Iterable[Sequence[float]] = ()):
        coords = [Coordinate(*c) for c in coords]
        if coords and not vector.coordinates_equal(coords[0], coords[-1]):
            coords.append(coords[0])
        self.arcstring = ArcString.from_coordinates(coords)

    @property
    def points(self) -> Tuple[UnitVector, ...]:
        return self.arcstring.points

    def __iter__(self) -> Iterator[Arc]:
        return iter(self.arcstring)

    def __len__(self) -> int:
        return len(self.arcstring)

    def __repr__(self):
        return f"CurvedRing({len(self)} points)"

    def contains(self, point: UnitVector) -> bool:
        """
        Spherical winding-number point-in-ring test.

        For each arc (a, b) the sign of (a x point).y tells which side of the
        point's reference meridian each endpoint lies on, and the sign of
        (a x b) . point tells which side of the arc's great circle the point
        lies on. Upward crossings with the point on the left add one, downward
        crossings with the point on the right subtract one; any non-zero total
        means the point is inside, whatever the ring's orientation.
        """
        if len(self.points) < 3:
            return False

        winding = 0
        for arc in self:
            side = vector.dot(vector.cross(arc.a, arc.b), point)
            if vector.cross(arc.a, point).y <= 0:
                if vector.cross(arc.b, point).y > 0 and side > 0:
                    winding += 1
            elif vector.cross(arc.b, point).y <= 0 and side < 0:
                winding -= 1

        return winding != 0


class CurvedPolygon:
    """
    One exterior CurvedRing plus any number of interior rings (holes).

    Built from a flat coordinate list and the length of each ring, exterior
    first. An empty coordinate list gives an empty polygon, which contains
    nothing, and so does an empty exterior ring whatever holes come with it.
    """

    def __init__(
        self,
        coords: Sequence[Sequence[float]] = (),
        lengths: Sequence[int] = (),
    ):
        self.exterior: Optional[CurvedRing] = None
        self.interiors: List[CurvedRing] = []

        if len(coords) == 0:
            return

        if sum(lengths) != len(coords):
            raise InvalidArgumentError(
                f"Number of coordinates ({len(coords)}) must equal the sum "
                f"of ring lengths ({sum(lengths)})"
            )

        start = 0
        for i, length in enumerate(lengths):
            ring = CurvedRing(coords[start : start + length])
            if i == 0:
                self.exterior = ring
            else:
                self.interiors.append(ring)
            start += length

        # Holes without an exterior ring enclose nothing
        if len(self.exterior) == 0:
            self.exterior = None
            self.interiors = []

    @classmethod
    def from_rings(
        cls,
        exterior: Sequence[Sequence[float]],
        interiors: Iterable[Sequence[Sequence[float]]] = (),
    ) -> "CurvedPolygon":
        rings = [list(exterior)] + [list(interior) for interior in interiors]
        coords = [c for ring in rings for c in ring]
        return cls(coords, [len(ring) for ring in rings])

    @property
    def rings(self) -> List[CurvedRing]:
        """Exterior ring followed by the interior rings."""
        if self.exterior is None:
            return []
        return [self.exterior] + self.interiors

    @property
    def is_empty(self) -> bool:
        return self.exterior is None

    def __repr__(self):
        return f"CurvedPolygon(exterior={self.exterior!r}, interiors={len(self.interiors)})"

    def contains(self, point: UnitVector) -> bool:
        if self.exterior is None or not self.exterior.contains(point):
            return False

        return not any(interior.contains(point) for interior in self.interiors)
