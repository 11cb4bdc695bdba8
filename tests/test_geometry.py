"""Tests for scan geometry and the (beam, bin) to image mapping."""
import math

import pytest

from sonar_seg.core.geometry import ScanGeometry, beam_direction, to_pixel


def test_single_beam_increment_is_twice_the_bearing():
    g = ScanGeometry(rows=100, cols=100, n_beams=1, bearing_deg=130.0)
    assert g.angle_increment == pytest.approx(2 * math.radians(130.0))
    assert g.beam_angle(0) == pytest.approx(-math.radians(65.0))


def test_zero_beams_uses_degenerate_increment():
    g = ScanGeometry(rows=100, cols=100, n_beams=0, bearing_deg=10.0)
    assert g.angle_increment == pytest.approx(2 * math.radians(10.0))


def test_beams_span_the_bearing():
    g = ScanGeometry(rows=100, cols=100, n_beams=5, bearing_deg=120.0)
    assert g.angle_increment == pytest.approx(math.radians(30.0))
    assert g.beam_angle(0) == pytest.approx(-math.radians(60.0))
    assert g.beam_angle(2) == pytest.approx(0.0)
    assert g.beam_angle(4) == pytest.approx(math.radians(60.0))


def test_origin_below_bottom_center():
    g = ScanGeometry(rows=80, cols=60, son_vertical_position=3)
    assert g.origin == (30.0, 83.0)


def test_n_bins_excludes_start_offset():
    g = ScanGeometry(rows=80, cols=60, start_bin=20)
    assert g.n_bins == 60


def test_direction_points_up_and_left_for_positive_angles():
    dx, dy = beam_direction(0.0)
    assert dx == 0.0 and dy == -1.0
    dx, dy = beam_direction(math.radians(30.0))
    assert dx < 0 and dy < 0


def test_bin_position_steps_one_pixel_per_bin():
    g = ScanGeometry(rows=50, cols=20, n_beams=1, bearing_deg=0.0,
                     start_bin=5, son_vertical_position=1)
    assert g.bin_position(0, 0) == (10.0, 46.0)
    assert g.bin_position(0, 7) == (10.0, 39.0)


def test_bin_position_is_reproducible():
    g = ScanGeometry(rows=300, cols=400, n_beams=720, bearing_deg=130.0)
    first = g.bin_position(123, 77)
    for _ in range(3):
        assert g.bin_position(123, 77) == first
    assert g.position_at(g.beam_angle(123), 77) == first


def test_rows_must_exceed_start_bin():
    with pytest.raises(ValueError):
        ScanGeometry(rows=20, cols=10, start_bin=20)


def test_negative_beam_count_rejected():
    with pytest.raises(ValueError):
        ScanGeometry(rows=50, cols=10, n_beams=-1)


def test_contains_and_to_pixel():
    g = ScanGeometry(rows=10, cols=8, start_bin=2)
    assert g.contains(0.0, 0.0)
    assert g.contains(7.9, 9.9)
    assert not g.contains(-0.1, 5.0)
    assert not g.contains(8.0, 5.0)
    assert not g.contains(3.0, 10.0)
    assert to_pixel(3.7, 9.2) == (9, 3)
