"""Detect intensity peaks along sonar beams using a local-mean threshold."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

from ..core.geometry import ScanGeometry
from .sliding_window import SlidingWindow


class BinOutcome(Enum):
    """What a single bin did to the peak run state."""
    IDLE = "idle"          # below the acceptance line, no run open
    ENTERED = "entered"    # first bin of a new run
    INSIDE = "inside"      # run continues
    CLOSED = "closed"      # first bin after a run; the run is emitted


@dataclass(frozen=True)
class PeakRun:
    """Extremes of a finished run of above-threshold bins."""
    min_height: int
    min_height_bin: int
    max_height: int
    max_height_bin: int


@dataclass
class RunState:
    """Two-state machine (Idle / InPeak) tracking one beam's current run.

    Max and min heights are tracked over the whole run; a bin that is not
    a new maximum may still become the new minimum.
    """
    in_peak: bool = False
    max_height: int = 0
    max_height_bin: int = -1
    min_height: int = 0
    min_height_bin: int = -1

    def reset(self) -> None:
        self.in_peak = False
        self.max_height = 0
        self.max_height_bin = -1
        self.min_height = 0
        self.min_height_bin = -1

    def step(self, bin_idx: int, peak_height: int,
             h_min: int) -> Tuple[BinOutcome, Optional[PeakRun]]:
        """Feed one bin's height above the local mean.

        Returns:
            The outcome and, when a run just closed, its extremes.
        """
        if peak_height > h_min:
            if not self.in_peak:
                self.in_peak = True
                self.max_height = self.min_height = peak_height
                self.max_height_bin = self.min_height_bin = bin_idx
                return BinOutcome.ENTERED, None
            if peak_height > self.max_height:
                self.max_height = peak_height
                self.max_height_bin = bin_idx
            elif peak_height < self.min_height:
                self.min_height = peak_height
                self.min_height_bin = bin_idx
            return BinOutcome.INSIDE, None

        if self.in_peak:
            run = PeakRun(min_height=self.min_height,
                          min_height_bin=self.min_height_bin,
                          max_height=self.max_height,
                          max_height_bin=self.max_height_bin)
            self.reset()
            return BinOutcome.CLOSED, run

        return BinOutcome.IDLE, None


@dataclass(frozen=True, order=True)
class PeakRecord:
    """A detected peak, ordered by extraction threshold then discovery.

    The seed position is the strongest bin of the run; the threshold is
    the local mean where the run ended plus the weakest height inside it.
    """
    extraction_threshold: int
    sequence_id: int
    position: Tuple[float, float] = field(compare=False)
    beam: int = field(default=-1, compare=False)
    bin: int = field(default=-1, compare=False)
    mean: int = field(default=0, compare=False)
    min_height: int = field(default=0, compare=False)
    max_height: int = field(default=0, compare=False)


@dataclass(frozen=True)
class BinSample:
    """One step of a beam walk, as plotted when tuning Hmin and the window."""
    bin: int
    x: float
    y: float
    intensity: int
    mean: int
    peak_height: int
    acceptance: int  # mean + Hmin
    outcome: BinOutcome


class BeamPeakScanner:
    """Walks beams bin by bin and emits one PeakRecord per closed run.

    Bins inside an open run are kept out of the sliding window so a peak
    never raises its own baseline. A run still open when the beam leaves
    the frame is dropped.
    """

    def __init__(self, h_min: int = 110, window_size: int = 5,
                 on_bin: Optional[Callable[[int, BinSample], None]] = None,
                 on_peak: Optional[Callable[[PeakRecord], None]] = None):
        """Initialize scanner.

        Args:
            h_min: Minimum height above the local mean to be part of a peak.
            window_size: Number of idle bins averaged into the local mean.
            on_bin: Optional callback(beam, sample) for every scanned bin.
            on_peak: Optional callback(record) for every emitted peak.
        """
        self.h_min = h_min
        self.window = SlidingWindow(window_size)
        self.on_bin = on_bin
        self.on_peak = on_peak

    def _walk(self, frame, geometry: ScanGeometry,
              angle_rad: float) -> Iterator[Tuple[BinSample, Optional[PeakRun]]]:
        window = self.window
        window.clear()
        state = RunState()
        entered = False

        for bin_idx in range(geometry.n_bins):
            x, y = geometry.position_at(angle_rad, bin_idx)
            if not geometry.contains(x, y):
                if entered:
                    # Beam left the image
                    break
                # Sonar sits below the image, not reached the bottom row yet
                continue
            entered = True

            intensity = int(frame[int(y), int(x)])
            mean = window.mean()
            peak_height = intensity - mean

            outcome, run = state.step(bin_idx, peak_height, self.h_min)

            if not state.in_peak:
                window.push(intensity)

            yield BinSample(bin=bin_idx, x=x, y=y, intensity=intensity,
                            mean=mean, peak_height=peak_height,
                            acceptance=mean + self.h_min,
                            outcome=outcome), run

    def scan_beam(self, frame, geometry: ScanGeometry, beam: int,
                  first_id: int = 0) -> List[PeakRecord]:
        """Find the peaks of one beam.

        Args:
            frame: 2-D intensity array indexed [row, col].
            geometry: Scan geometry matching the frame.
            beam: Beam index in [0, n_beams).
            first_id: Sequence id given to the first peak found.

        Returns:
            PeakRecords in the order their runs closed.
        """
        angle = geometry.beam_angle(beam)
        peaks = []
        for sample, run in self._walk(frame, geometry, angle):
            if self.on_bin is not None:
                self.on_bin(beam, sample)
            if run is None:
                continue
            record = PeakRecord(
                extraction_threshold=sample.mean + run.min_height,
                sequence_id=first_id + len(peaks),
                position=geometry.position_at(angle, run.max_height_bin),
                beam=beam,
                bin=run.max_height_bin,
                mean=sample.mean,
                min_height=run.min_height,
                max_height=run.max_height)
            peaks.append(record)
            if self.on_peak is not None:
                self.on_peak(record)
        return peaks

    def scan_frame(self, frame, geometry: ScanGeometry) -> List[PeakRecord]:
        """Find the peaks of every beam, numbered in discovery order."""
        all_peaks = []
        for beam in range(geometry.n_beams):
            all_peaks.extend(self.scan_beam(frame, geometry, beam,
                                            first_id=len(all_peaks)))
        return all_peaks

    def profile(self, frame, geometry: ScanGeometry,
                angle_rad: float) -> List[BinSample]:
        """Per-bin trace of one beam at an arbitrary angle."""
        return [sample for sample, _ in self._walk(frame, geometry, angle_rad)]
