"""Segment a sonar frame by growing regions from beam intensity peaks.

Each beam is scanned for runs of bins standing out of their local mean.
Every closed run yields a peak: a seed at its strongest bin and an
extraction threshold from its weakest bin. Peaks are then grown into
segments from the lowest threshold to the highest. Wide, low-threshold
peaks claim their territory first, so a single object is less likely to
be cut into several segments by local noise. The visitation mask is
shared by the whole pass: pixels of a rejected (too small) segment stay
claimed and are not explored again.
"""
import logging
from typing import Callable, List, Optional

import numpy as np

from ..config import ExtractorConfig, SegmentationConfig
from ..core.geometry import ScanGeometry, to_pixel
from ..detection.peak_scanner import BeamPeakScanner, BinSample, PeakRecord
from .region_grower import RegionGrower
from .segment import Segment, SegmentPool, VisitationMask

logger = logging.getLogger(__name__)


class PeakSegmenter:
    """Drives peak search and region growing for one frame at a time."""

    def __init__(self, config: Optional[SegmentationConfig] = None,
                 extractor_config: Optional[ExtractorConfig] = None,
                 grower=None,
                 mask: Optional[VisitationMask] = None,
                 pool: Optional[SegmentPool] = None):
        """Initialize segmenter.

        Args:
            config: Peak search and filtering parameters.
            extractor_config: Parameters of the default region grower.
            grower: Object with ``set_threshold(value)`` and
                ``create_segment(segment, frame, seed_row, seed_col)``.
                Must write into ``mask``. Defaults to a RegionGrower.
            mask: Visitation mask shared with the grower.
            pool: Segment slots reused across frames.
        """
        self.config = config or SegmentationConfig()
        self.extractor_config = extractor_config or ExtractorConfig()
        self.mask = mask if mask is not None else VisitationMask()
        self.pool = pool if pool is not None else SegmentPool()
        if grower is None:
            grower = RegionGrower(self.mask, self.extractor_config.max_gap)
        self.grower = grower

        self.last_peaks: List[PeakRecord] = []

        # Optional observers, never needed for the result
        self.on_bin: Optional[Callable[[int, BinSample], None]] = None
        self.on_peak: Optional[Callable[[PeakRecord], None]] = None
        self.on_segment: Optional[Callable[[PeakRecord, Segment, bool], None]] = None

    def geometry_for(self, frame: np.ndarray) -> ScanGeometry:
        rows, cols = frame.shape
        return ScanGeometry(
            rows=rows, cols=cols,
            n_beams=self.config.n_beams,
            bearing_deg=self.config.bearing,
            start_bin=self.config.start_bin,
            son_vertical_position=self.config.son_vertical_position)

    def _check_frame(self, frame) -> np.ndarray:
        frame = np.asarray(frame)
        if frame.ndim != 2:
            raise ValueError(f"Expected a 2-D frame, got shape {frame.shape}")
        return frame

    def find_peaks(self, frame) -> List[PeakRecord]:
        """Scan every beam and return peaks in discovery order."""
        frame = self._check_frame(frame)
        self.config.validate()
        scanner = BeamPeakScanner(h_min=self.config.h_min,
                                  window_size=self.config.mean_window_size,
                                  on_bin=self.on_bin, on_peak=self.on_peak)
        return scanner.scan_frame(frame, self.geometry_for(frame))

    def segment(self, frame) -> List[Segment]:
        """Segment one frame.

        Returns:
            Accepted segments in the order they were grown. They live in
            pool slots and are overwritten by the next pass.
        """
        frame = self._check_frame(frame)
        peaks = self.find_peaks(frame)
        logger.debug("Found %d peaks over %d beams",
                     len(peaks), self.config.n_beams)
        return self.segment_peaks(frame, peaks)

    def segment_peaks(self, frame, peaks: List[PeakRecord]) -> List[Segment]:
        """Grow segments from the given peaks, lowest threshold first."""
        frame = self._check_frame(frame)
        rows, cols = frame.shape

        self.mask.reset(rows, cols)
        ordered = sorted(peaks)
        self.last_peaks = ordered

        segments = []
        rejected = 0
        min_size = self.config.min_sample_size

        for peak in ordered:
            # Slot index only advances on acceptance
            seg = self.pool.acquire(len(segments))

            x, y = peak.position
            seed_row, seed_col = to_pixel(x, y)
            self.grower.set_threshold(peak.extraction_threshold)
            self.grower.create_segment(seg, frame, seed_row, seed_col)

            accepted = seg.pixel_count >= min_size
            if accepted:
                segments.append(seg)
            else:
                rejected += 1

            if self.on_segment is not None:
                self.on_segment(peak, seg, accepted)

        logger.debug("Accepted %d segments, rejected %d below %d pixels",
                     len(segments), rejected, min_size)
        return segments
