"""Segments, the reusable segment pool and the per-frame visitation mask."""
from typing import List, Optional, Tuple

import numpy as np


class Segment:
    """Pixels grown from one peak seed."""

    def __init__(self):
        self.rows: List[int] = []
        self.cols: List[int] = []
        self.intensities: List[int] = []
        self.threshold: int = 0
        self.seed: Optional[Tuple[int, int]] = None

    def clear(self) -> None:
        self.rows.clear()
        self.cols.clear()
        self.intensities.clear()
        self.threshold = 0
        self.seed = None

    def add_pixel(self, row: int, col: int, intensity: int) -> None:
        self.rows.append(row)
        self.cols.append(col)
        self.intensities.append(intensity)

    @property
    def pixel_count(self) -> int:
        return len(self.rows)

    def pixels(self) -> List[Tuple[int, int]]:
        """(row, col) of every member pixel, in insertion order."""
        return list(zip(self.rows, self.cols))

    @property
    def centroid(self) -> Tuple[float, float]:
        """Mean (x, y) image position of the members."""
        if not self.rows:
            return 0.0, 0.0
        return (sum(self.cols) / len(self.cols),
                sum(self.rows) / len(self.rows))

    @property
    def bounding_box(self) -> Tuple[int, int, int, int]:
        """(min_row, min_col, max_row, max_col), inclusive."""
        if not self.rows:
            return 0, 0, -1, -1
        return min(self.rows), min(self.cols), max(self.rows), max(self.cols)

    @property
    def peak_intensity(self) -> int:
        return max(self.intensities) if self.intensities else 0

    @property
    def mean_intensity(self) -> float:
        if not self.intensities:
            return 0.0
        return sum(self.intensities) / len(self.intensities)

    def __repr__(self) -> str:
        return (f"Segment(pixel_count={self.pixel_count}, "
                f"threshold={self.threshold}, seed={self.seed})")


class SegmentPool:
    """Index-keyed Segment slots reused across frames.

    Segments handed out by a pass stay valid until their slot is acquired
    again by a later pass.
    """

    def __init__(self):
        self._slots: List[Segment] = []

    def __len__(self) -> int:
        return len(self._slots)

    def acquire(self, index: int) -> Segment:
        """Return the cleared slot at ``index``, allocating as needed."""
        if index < 0:
            raise IndexError(f"Negative segment slot: {index}")
        while len(self._slots) <= index:
            self._slots.append(Segment())
        seg = self._slots[index]
        seg.clear()
        return seg

    def reset(self) -> None:
        self._slots.clear()


class VisitationMask:
    """Pixels already claimed during one segmentation pass over a frame.

    Reset once at the start of a frame and written by every region
    growing call of that pass.
    """

    def __init__(self, rows: int = 0, cols: int = 0):
        self._visited = np.zeros((rows, cols), dtype=bool)

    def reset(self, rows: int, cols: int) -> None:
        if self._visited.shape == (rows, cols):
            self._visited.fill(False)
        else:
            self._visited = np.zeros((rows, cols), dtype=bool)

    @property
    def shape(self) -> Tuple[int, int]:
        return self._visited.shape

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the mask."""
        view = self._visited.view()
        view.flags.writeable = False
        return view

    def is_visited(self, row: int, col: int) -> bool:
        return bool(self._visited[row, col])

    def mark(self, row: int, col: int) -> None:
        self._visited[row, col] = True

    def visited_count(self) -> int:
        return int(np.count_nonzero(self._visited))
