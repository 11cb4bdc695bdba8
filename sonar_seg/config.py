"""Configuration for mean-peak sonar segmentation."""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

logger = logging.getLogger(__name__)

GENERAL_SECTION = "General"
SEGMENTATION_SECTION = "PeakSegmentation"
EXTRACTOR_SECTION = "SegmentExtractor"


def _get_int(doc: Mapping[str, Any], section: str, key: str):
    value = doc.get(section, {}).get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{section}.{key} must be an integer, got {value!r}")


def _get_float(doc: Mapping[str, Any], section: str, key: str):
    value = doc.get(section, {}).get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{section}.{key} must be a number, got {value!r}")


@dataclass
class SegmentationConfig:
    """Peak search and segment filtering parameters."""

    # Scan geometry
    n_beams: int = 720
    bearing: float = 130.0  # Angular span of the fan in degrees
    start_bin: int = 20
    son_vertical_position: int = 1

    # Peak detection
    h_min: int = 110
    mean_window_size: int = 5

    # Segment filtering
    min_sample_size: int = 10

    def load(self, doc: Mapping[str, Any]) -> "SegmentationConfig":
        """Apply the keys present in a sectioned config mapping.

        The generic ``General.MinSampleSize`` is read first so the
        component specific ``minSampleSize`` wins when both are set.
        Missing keys keep their current values.
        """
        value = _get_int(doc, GENERAL_SECTION, "MinSampleSize")
        if value is not None:
            self.min_sample_size = value

        int_keys = [
            ("sonVerticalPosition", "son_vertical_position"),
            ("minSampleSize", "min_sample_size"),
            ("nBeams", "n_beams"),
            ("startBin", "start_bin"),
            ("Hmin", "h_min"),
            ("meanWindowSize", "mean_window_size"),
        ]
        for key, attr in int_keys:
            value = _get_int(doc, SEGMENTATION_SECTION, key)
            if value is not None:
                setattr(self, attr, value)

        value = _get_float(doc, SEGMENTATION_SECTION, "bearing")
        if value is not None:
            self.bearing = value

        return self

    def validate(self) -> None:
        for attr in ("n_beams", "start_bin", "mean_window_size",
                     "min_sample_size"):
            if getattr(self, attr) < 0:
                raise ValueError(f"{attr} must be non-negative, "
                                 f"got {getattr(self, attr)}")


@dataclass
class ExtractorConfig:
    """Region growing parameters."""
    max_gap: int = 2  # D_seg, in pixels

    def load(self, doc: Mapping[str, Any]) -> "ExtractorConfig":
        value = _get_int(doc, EXTRACTOR_SECTION, "Dseg")
        if value is not None:
            self.max_gap = value
        return self

    def validate(self) -> None:
        if self.max_gap < 0:
            raise ValueError(f"max_gap must be non-negative, got {self.max_gap}")


def load_config(doc: Mapping[str, Any]) -> Tuple[SegmentationConfig, ExtractorConfig]:
    """Build validated configs from a sectioned mapping."""
    seg_config = SegmentationConfig().load(doc)
    ext_config = ExtractorConfig().load(doc)
    seg_config.validate()
    ext_config.validate()
    return seg_config, ext_config


def load_config_file(filepath: str) -> Tuple[SegmentationConfig, ExtractorConfig]:
    """Load segmentation and extractor configs from a JSON file.

    Args:
        filepath: Path to a JSON object of sections, e.g.
            ``{"General": {"MinSampleSize": 12},
            "PeakSegmentation": {"Hmin": 90}}``.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If the document is not an object of sections or a
            value has the wrong type.
        json.JSONDecodeError: If JSON is malformed.
    """
    with open(filepath, "r") as f:
        doc = json.load(f)

    if not isinstance(doc, dict):
        raise ValueError(f"Config root must be an object: {filepath}")
    for name, section in doc.items():
        if not isinstance(section, dict):
            raise ValueError(f"Config section {name!r} must be an object")

    logger.debug("Loaded config sections %s from %s", sorted(doc), filepath)
    return load_config(doc)


def config_to_dict(seg_config: SegmentationConfig,
                   ext_config: ExtractorConfig) -> Dict[str, Dict[str, Any]]:
    """Sectioned mapping that ``load_config`` reads back unchanged."""
    return {
        SEGMENTATION_SECTION: {
            "nBeams": seg_config.n_beams,
            "startBin": seg_config.start_bin,
            "Hmin": seg_config.h_min,
            "bearing": seg_config.bearing,
            "sonVerticalPosition": seg_config.son_vertical_position,
            "minSampleSize": seg_config.min_sample_size,
            "meanWindowSize": seg_config.mean_window_size,
        },
        EXTRACTOR_SECTION: {
            "Dseg": ext_config.max_gap,
        },
    }
