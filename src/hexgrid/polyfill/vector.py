"""
Unit-sphere vector primitives.

All geometric computation is done on 3-D Cartesian direction vectors
("n-vectors") rather than on latitude/longitude pairs, which avoids the
singularities of angular coordinates at the poles and the antimeridian.
Coordinates are always (latitude, longitude) in radians.
"""

import math
import sys
from typing import NamedTuple

EPSILON = sys.float_info.epsilon


class Coordinate(NamedTuple):
    """A (latitude, longitude) pair in radians."""

    lat: float
    lng: float


class UnitVector(NamedTuple):
    """A Cartesian direction vector, of unit length when built by from_coordinate."""

    x: float
    y: float
    z: float


def coordinates_equal(a: Coordinate, b: Coordinate) -> bool:
    return abs(a.lat - b.lat) < EPSILON and abs(a.lng - b.lng) < EPSILON


def add(a: UnitVector, b: UnitVector) -> UnitVector:
    return UnitVector(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: UnitVector, b: UnitVector) -> UnitVector:
    return UnitVector(a.x - b.x, a.y - b.y, a.z - b.z)


def scale(vec: UnitVector, scalar: float) -> UnitVector:
    return UnitVector(scalar * vec.x, scalar * vec.y, scalar * vec.z)


def dot(a: UnitVector, b: UnitVector) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: UnitVector, b: UnitVector) -> UnitVector:
    return UnitVector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def norm(vec: UnitVector) -> float:
    return math.sqrt(vec.x * vec.x + vec.y * vec.y + vec.z * vec.z)


def normalize(vec: UnitVector) -> UnitVector:
    return scale(vec, 1 / norm(vec))


def angle(a: UnitVector, b: UnitVector) -> float:
    """
    Angle in radians between two vectors.

    Uses atan2 of the cross and dot products, which stays accurate for angles
    near 0 and near pi where acos(a . b) does not.
    """
    return math.atan2(norm(cross(a, b)), dot(a, b))


def from_coordinate(coord: Coordinate) -> UnitVector:
    lat, lng = coord
    vec = UnitVector(
        math.cos(lat) * math.cos(lng),
        math.cos(lat) * math.sin(lng),
        math.sin(lat),
    )
    return normalize(vec)


def to_coordinate(vec: UnitVector) -> Coordinate:
    return Coordinate(
        math.atan2(vec.z, math.hypot(vec.x, vec.y)),
        math.atan2(vec.y, vec.x),
    )
