"""
Exceptions and warnings raised while rasterizing geometries to grid cells.

Every hard failure derives from PolyfillError, which can carry the index of
the feature (in a batch) and of the ring (within a polygon) being processed
when the failure happened, so callers can locate the offending input.
"""

from typing import Optional


class PolyfillError(Exception):
    """Base class for all rasterization failures."""

    def __init__(
        self, message: str, feature: Optional[int] = None, ring: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.feature = feature
        self.ring = ring

    def locate(self, feature: Optional[int] = None, ring: Optional[int] = None):
        """
        Attach location context to this error, keeping any context that was
        already recorded closer to the failure. Returns the error itself so
        it can be re-raised directly.
        """
        if self.feature is None:
            self.feature = feature
        if self.ring is None:
            self.ring = ring
        return self

    def __str__(self):
        location = []
        if self.feature is not None:
            location.append(f"feature {self.feature}")
        if self.ring is not None:
            location.append(f"ring {self.ring}")
        if location:
            return f"[{', '.join(location)}] {self.message}"
        return self.message


class InvalidArgumentError(PolyfillError, ValueError):
    """Raised for malformed input, e.g. ring lengths that don't match the coordinates."""

    pass


class DomainError(PolyfillError, ValueError):
    """Raised when the resolution is outside the range supported by the grid."""

    pass


class GridIndexError(PolyfillError):
    """Raised when the grid index rejects a request; the original error is the cause."""

    pass


class DegenerateInputWarning(UserWarning):
    """Emitted for legitimate but empty input such as a polygon with no coordinates."""

    pass
