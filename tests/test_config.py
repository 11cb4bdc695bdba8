"""Tests for configuration loading and precedence."""
import json

import pytest

from sonar_seg.config import (
    ExtractorConfig, SegmentationConfig, config_to_dict, load_config,
    load_config_file
)


def test_defaults():
    c = SegmentationConfig()
    assert (c.n_beams, c.start_bin, c.h_min, c.bearing) == (720, 20, 110, 130.0)
    assert (c.son_vertical_position, c.min_sample_size, c.mean_window_size) == (1, 10, 5)
    assert ExtractorConfig().max_gap == 2


def test_missing_keys_keep_defaults():
    c = SegmentationConfig().load({"PeakSegmentation": {"Hmin": 90}})
    assert c.h_min == 90
    assert c.n_beams == 720
    assert c.min_sample_size == 10


def test_generic_min_sample_size_applies_alone():
    c = SegmentationConfig().load({"General": {"MinSampleSize": 25}})
    assert c.min_sample_size == 25


def test_component_min_sample_size_wins_over_generic():
    c = SegmentationConfig().load({
        "PeakSegmentation": {"minSampleSize": 7},
        "General": {"MinSampleSize": 25},
    })
    assert c.min_sample_size == 7


def test_all_segmentation_keys():
    c = SegmentationConfig().load({"PeakSegmentation": {
        "nBeams": 256, "startBin": 12, "Hmin": 60, "bearing": "120.5",
        "sonVerticalPosition": 4, "meanWindowSize": 9,
    }})
    assert c.n_beams == 256
    assert c.start_bin == 12
    assert c.h_min == 60
    assert c.bearing == 120.5
    assert c.son_vertical_position == 4
    assert c.mean_window_size == 9


def test_extractor_key():
    assert ExtractorConfig().load({"SegmentExtractor": {"Dseg": 5}}).max_gap == 5


def test_non_numeric_value_rejected():
    with pytest.raises(ValueError):
        SegmentationConfig().load({"PeakSegmentation": {"nBeams": "many"}})


def test_negative_values_rejected():
    with pytest.raises(ValueError):
        load_config({"PeakSegmentation": {"meanWindowSize": -2}})
    with pytest.raises(ValueError):
        load_config({"SegmentExtractor": {"Dseg": -1}})


def test_degenerate_values_are_valid():
    seg, _ = load_config({"PeakSegmentation": {"nBeams": 1, "meanWindowSize": 0}})
    assert seg.n_beams == 1 and seg.mean_window_size == 0


def test_load_config_file(tmp_path):
    path = tmp_path / "seg.json"
    path.write_text(json.dumps({
        "General": {"MinSampleSize": 30},
        "PeakSegmentation": {"Hmin": 70},
        "SegmentExtractor": {"Dseg": 3},
    }))
    seg, ext = load_config_file(str(path))
    assert seg.min_sample_size == 30
    assert seg.h_min == 70
    assert ext.max_gap == 3


def test_load_config_file_rejects_non_object_sections(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"PeakSegmentation": [1, 2]}))
    with pytest.raises(ValueError):
        load_config_file(str(path))


def test_load_config_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config_file(str(tmp_path / "nope.json"))


def test_config_dict_reads_back():
    seg = SegmentationConfig(n_beams=64, h_min=40, bearing=90.0)
    ext = ExtractorConfig(max_gap=4)
    seg2, ext2 = load_config(config_to_dict(seg, ext))
    assert seg2 == seg
    assert ext2 == ext
