"""Shared fixtures for segmentation tests."""
import pytest

from sonar_seg.config import ExtractorConfig, SegmentationConfig
from tests.fakes import make_two_blob_frame


@pytest.fixture()
def two_blob_frame():
    return make_two_blob_frame()


@pytest.fixture()
def blob_config():
    """Narrow fan over the two-blob frame."""
    return SegmentationConfig(n_beams=90, bearing=60.0, start_bin=10,
                              son_vertical_position=1, h_min=100,
                              mean_window_size=5, min_sample_size=10)


@pytest.fixture()
def extractor_config():
    return ExtractorConfig(max_gap=2)
