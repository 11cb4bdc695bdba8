"""Mean-peak segmentation of polar sonar images.

Typical use:

    from sonar_seg import PeakSegmenter, load_config_file, load_frame

    seg_config, ext_config = load_config_file("segmentation.json")
    segmenter = PeakSegmenter(seg_config, ext_config)
    segments = segmenter.segment(load_frame("frame.npy"))
"""
from .config import (
    ExtractorConfig, SegmentationConfig, load_config, load_config_file
)
from .core.geometry import ScanGeometry
from .data_import import load_frame
from .detection import BeamPeakScanner, PeakRecord, SlidingWindow
from .segmentation import (
    PeakSegmenter, RegionGrower, Segment, SegmentPool, VisitationMask
)

__version__ = "0.1.0"

__all__ = [
    'SegmentationConfig', 'ExtractorConfig', 'load_config', 'load_config_file',
    'ScanGeometry',
    'load_frame',
    'BeamPeakScanner', 'PeakRecord', 'SlidingWindow',
    'PeakSegmenter', 'RegionGrower', 'Segment', 'SegmentPool', 'VisitationMask',
]
