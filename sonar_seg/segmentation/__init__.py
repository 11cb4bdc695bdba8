"""Region growing from peaks and the per-frame segmentation driver."""
from .segment import Segment, SegmentPool, VisitationMask
from .region_grower import RegionGrower
from .segmenter import PeakSegmenter

__all__ = [
    'Segment', 'SegmentPool', 'VisitationMask',
    'RegionGrower',
    'PeakSegmenter',
]
