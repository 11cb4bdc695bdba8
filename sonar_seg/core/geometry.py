"""Scan geometry: beam angles and polar (beam, bin) to image mapping."""
import math
from dataclasses import dataclass
from typing import Tuple


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def beam_direction(angle_rad: float) -> Tuple[float, float]:
    """Unit step along a beam in image coordinates (x right, y down).

    Angle 0 points straight up the image; positive angles lean left.
    """
    return -math.sin(angle_rad), -math.cos(angle_rad)


@dataclass(frozen=True)
class ScanGeometry:
    """Fan of beams leaving a sonar located below the bottom image edge.

    Args:
        rows: Frame height in pixels (range extent).
        cols: Frame width in pixels.
        n_beams: Number of beams swept across the bearing.
        bearing_deg: Total angular span of the fan in degrees.
        start_bin: Bins skipped next to the sonar before scanning starts.
        son_vertical_position: Sonar distance below the last image row.
    """
    rows: int
    cols: int
    n_beams: int = 720
    bearing_deg: float = 130.0
    start_bin: int = 20
    son_vertical_position: int = 1

    def __post_init__(self):
        if self.rows <= self.start_bin:
            raise ValueError(
                f"Frame has {self.rows} rows, start bin {self.start_bin} "
                f"leaves no bins to scan")
        if self.n_beams < 0:
            raise ValueError(f"Beam count must be non-negative: {self.n_beams}")

    @property
    def bearing_rad(self) -> float:
        return deg_to_rad(self.bearing_deg)

    @property
    def angle_increment(self) -> float:
        """Angle between consecutive beams in radians.

        A single beam never repeats, so it gets twice the span instead of
        a division by zero.
        """
        if self.n_beams > 1:
            return self.bearing_rad / (self.n_beams - 1)
        return 2.0 * self.bearing_rad

    @property
    def n_bins(self) -> int:
        """Bins per beam, from the start bin to the image edge."""
        return self.rows - self.start_bin

    @property
    def origin(self) -> Tuple[float, float]:
        """Sonar position: horizontally centered, just below the image."""
        return self.cols / 2.0, float(self.rows + self.son_vertical_position)

    def beam_angle(self, beam: int) -> float:
        """Angle of a beam in radians, swept from -bearing/2."""
        return -self.bearing_rad / 2.0 + beam * self.angle_increment

    def position_at(self, angle_rad: float, bin_idx: int) -> Tuple[float, float]:
        """Image (x, y) of a bin on the beam at the given angle."""
        dx, dy = beam_direction(angle_rad)
        ox, oy = self.origin
        dist = self.start_bin + bin_idx
        return ox + dx * dist, oy + dy * dist

    def bin_position(self, beam: int, bin_idx: int) -> Tuple[float, float]:
        """Image (x, y) of a bin, identical for identical (beam, bin)."""
        return self.position_at(self.beam_angle(beam), bin_idx)

    def contains(self, x: float, y: float) -> bool:
        """True if the point lies on a pixel of the frame."""
        return 0.0 <= x < self.cols and 0.0 <= y < self.rows


def to_pixel(x: float, y: float) -> Tuple[int, int]:
    """Truncate an image position to its (row, col) pixel."""
    return int(y), int(x)
