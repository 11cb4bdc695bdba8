"""Grow a segment from a seed pixel with an 8-connected flood fill."""
from collections import deque

from .segment import Segment, VisitationMask

_NEIGHBORS_8 = [(-1, -1), (-1, 0), (-1, 1),
                (0, -1),           (0, 1),
                (1, -1),  (1, 0),  (1, 1)]


class RegionGrower:
    """Flood fill accepting pixels at or above a threshold.

    A peak's threshold is the intensity of the weakest bin of its run, so
    that bin is a member. Pixels below the threshold may still be crossed when they sit
    within ``max_gap`` steps of an accepted pixel (D_seg). They are marked
    visited so the gap is not explored again, but they are not members.
    A crossed pixel counts the shortest gap of any path reaching it, so
    the result does not depend on the fill order. This keeps one object split by noise or acoustic shadow in a single
    segment.
    """

    def __init__(self, mask: VisitationMask, max_gap: int = 2):
        """Initialize grower.

        Args:
            mask: Visitation mask shared by every segment of a pass.
            max_gap: Max consecutive low-intensity pixels bridged (D_seg).
        """
        if max_gap < 0:
            raise ValueError(f"D_seg must be non-negative: {max_gap}")
        self.mask = mask
        self.max_gap = max_gap
        self.threshold = 0

    def set_threshold(self, value: int) -> None:
        self.threshold = int(value)

    def create_segment(self, segment: Segment, frame,
                       seed_row: int, seed_col: int) -> int:
        """Fill ``segment`` with the pixels reachable from the seed.

        The seed itself is always a member unless it lies outside the
        frame or was already claimed, in which case the segment stays
        empty.

        Returns:
            Number of member pixels.
        """
        segment.clear()
        segment.threshold = self.threshold
        segment.seed = (seed_row, seed_col)

        rows, cols = frame.shape
        mask = self.mask
        if not (0 <= seed_row < rows and 0 <= seed_col < cols):
            return 0
        if mask.is_visited(seed_row, seed_col):
            return 0

        threshold = self.threshold
        max_gap = self.max_gap

        mask.mark(seed_row, seed_col)
        segment.add_pixel(seed_row, seed_col, int(frame[seed_row, seed_col]))
        queue = deque([(seed_row, seed_col, 0)])
        # Smallest gap count reaching each pixel claimed by this call
        best_gap = {(seed_row, seed_col): 0}

        while queue:
            r, c, gap = queue.popleft()
            if gap > best_gap[(r, c)]:
                # Superseded by a shorter gap
                continue
            for dr, dc in _NEIGHBORS_8:
                nr, nc = r + dr, c + dc
                if nr < 0 or nr >= rows or nc < 0 or nc >= cols:
                    continue
                known = best_gap.get((nr, nc))
                if known is None and mask.is_visited(nr, nc):
                    continue
                intensity = int(frame[nr, nc])
                if intensity >= threshold:
                    next_gap = 0
                else:
                    next_gap = gap + 1
                    if next_gap > max_gap:
                        continue
                if known is not None:
                    if next_gap >= known:
                        continue
                    # Bridge pixel reached again with a shorter gap
                    best_gap[(nr, nc)] = next_gap
                    queue.append((nr, nc, next_gap))
                    continue
                best_gap[(nr, nc)] = next_gap
                mask.mark(nr, nc)
                if next_gap == 0:
                    segment.add_pixel(nr, nc, intensity)
                queue.append((nr, nc, next_gap))

        return segment.pixel_count
