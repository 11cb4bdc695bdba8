"""Beam peak detection."""
from .sliding_window import SlidingWindow
from .peak_scanner import (
    BeamPeakScanner, BinOutcome, BinSample, PeakRecord, PeakRun, RunState
)

__all__ = [
    'SlidingWindow',
    'BeamPeakScanner', 'BinOutcome', 'BinSample',
    'PeakRecord', 'PeakRun', 'RunState',
]
