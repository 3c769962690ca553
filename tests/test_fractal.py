from datetime import timedelta

import numpy as np
import pytest

from forktal.colormaps import create_colormap_grayscale
from forktal.fractal import FractalField
from forktal.point import Point


BLACK = [0, 0, 0, 255]


@pytest.fixture
def field():
    return FractalField(4, 3)


def pixel(frame, index):
    return list(frame[index * 4:index * 4 + 4])


def test_new_field_uses_default_view(field):
    assert field.x_range == (-2.25, 0.75)
    assert field.y_range == (-1.25, 1.75)
    assert len(field) == 12
    assert field.global_step == 0
    assert field.accumulated_time == 0.0
    assert field.scale_width() == 3.0
    assert field.scale_height() == 3.0


def test_cells_map_onto_view(field):
    p = field.point(5)  # x=1, y=1
    assert p.c == complex(-1.5, -0.5)
    assert p.z == 0j
    assert p.iterations == 0
    assert field[8].c == complex(-2.25, 0.25)
    assert field[-1].c == field.point(11).c


def test_point_index_out_of_range(field):
    with pytest.raises(IndexError):
        field.point(12)


@pytest.mark.parametrize("size", [(0, 3), (4, -1), (2.5, 2)])
def test_invalid_dimensions(size):
    with pytest.raises(ValueError):
        FractalField(*size)


def test_zoom_halves_extents_around_quarter_point(field):
    field.zoom()
    assert field.x_range == (-1.5, 0.0)
    assert field.y_range == (-0.5, 1.0)
    assert field.point(0).c == complex(-1.5, -0.5)


def test_two_zooms_quarter_the_width(field):
    before = field.scale_width()
    field.zoom()
    field.zoom()
    assert field.scale_width() == pytest.approx(before / 4)
    assert field.scale_height() == pytest.approx(3.0 / 4)


def test_zoom_restarts_iteration(field):
    field.step(0.2)
    field.zoom()
    assert field.global_step == 0
    assert not field.iterations.any()


def test_shift_translates_and_rebuilds(field):
    field.step(0.1)
    field.shift(0.3, -0.2)
    assert field.x_range == pytest.approx((-1.95, 1.05))
    assert field.y_range == pytest.approx((-1.45, 1.55))
    assert field.global_step == 0
    assert field.point(0).c == pytest.approx(complex(-1.95, -1.45))


def test_zero_shift_keeps_grid(field):
    field.step(0.12)
    c, z, iterations = field.c, field.z, field.iterations
    counts = iterations.copy()

    field.shift(0.0, 0.0)

    assert field.c is c
    assert field.z is z
    assert field.iterations is iterations
    assert np.array_equal(field.iterations, counts)
    assert field.global_step == 2
    assert field.accumulated_time == pytest.approx(0.02)


def test_reset_view_returns_home(field):
    field.zoom()
    field.shift(0.1, 0.1)
    field.reset_view()
    assert field.x_range == (-2.25, 0.75)
    assert field.y_range == (-1.25, 1.75)
    assert field.global_step == 0


def test_custom_initial_view():
    f = FractalField(2, 2, x_range=(0.0, 1.0), y_range=(0.0, 2.0))
    assert f.point(3).c == complex(0.5, 1.0)
    f.zoom()
    f.reset_view()
    assert f.x_range == (0.0, 1.0)


def test_one_tick_advances_every_cell(field):
    ticks = field.step(0.05)
    assert ticks == 1
    assert field.global_step == 1
    assert (field.iterations == 1).all()
    assert np.array_equal(field.z, field.c)


def test_partial_ticks_accumulate(field):
    assert field.step(0.025) == 0
    assert field.global_step == 0
    assert field.step(0.025) == 1
    assert field.global_step == 1
    assert field.accumulated_time == 0.0


def test_stalled_frame_catches_up(field):
    assert field.step(0.125) == 2
    assert field.global_step == 2
    assert field.accumulated_time == pytest.approx(0.025)
    assert field.step(0.025) == 1
    assert field.global_step == 3


def test_step_accepts_timedelta(field):
    field.step(timedelta(milliseconds=50))
    assert field.global_step == 1


def test_small_deltas_do_not_drift(field):
    for _ in range(300):
        field.step(1 / 60)
    assert field.global_step == 100


def test_negative_time_rejected(field):
    with pytest.raises(ValueError):
        field.step(-0.01)


def test_escaped_cells_freeze(field):
    field.step(0.2)
    assert field.point(0).is_escaped()
    assert field.iterations[0] == 4
    z = field.z[0]
    field.step(0.5)
    assert field.iterations[0] == 4
    assert field.z[0] == z


def test_non_escaped_cells_keep_counting(field):
    field.step(0.5)
    inside = ~field.escaped().ravel()
    assert inside.any()
    assert (field.iterations[inside] == 10).all()


def test_cells_follow_point_rules(field):
    field.step(0.3)
    for index in range(len(field)):
        c = field.c[index]
        reference = Point(c.real, c.imag)
        for _ in range(field.global_step):
            reference.step()
        cell = field.point(index)
        assert cell.iterations == reference.iterations
        assert cell.z == pytest.approx(reference.z)


def test_counts_and_escaped_shapes(field):
    field.step(0.2)
    assert field.counts().shape == (3, 4)
    assert field.escaped().shape == (3, 4)
    assert field.counts()[0, 0] == 4
    assert field.escaped()[0, 0]


def test_fresh_field_draws_opaque_black(field):
    frame = bytearray(4 * 3 * 4)
    field.draw(frame)
    assert frame == bytearray(BLACK * 12)


def test_golden_frame_after_one_tick(field):
    field.step(0.05)
    assert bytes(field.render()) == bytes(BLACK * 12)


def test_escape_intensity_relative_to_step(field):
    field.step(0.2)
    assert pixel(field.render(), 0) == [255, 0, 0, 255]
    field.step(0.05)
    # round(255 * 4 / 5)
    assert pixel(field.render(), 0) == [204, 0, 0, 255]


def test_draw_into_numpy_array(field):
    field.step(0.2)
    frame = np.zeros((3, 4, 4), dtype=np.uint8)
    field.draw(frame)
    assert frame[0, 0].tolist() == [255, 0, 0, 255]
    assert bytes(frame) == bytes(field.render())


def test_draw_rejects_wrong_size(field):
    with pytest.raises(ValueError):
        field.draw(bytearray(10))


def test_draw_rejects_read_only_buffer(field):
    with pytest.raises(ValueError):
        field.draw(bytes(4 * 3 * 4))


def test_colormap_is_applied():
    f = FractalField(4, 3, colormap=create_colormap_grayscale())
    f.step(0.2)
    assert pixel(f.render(), 0) == [255, 255, 255, 255]


def test_bad_colormap_rejected():
    with pytest.raises(ValueError):
        FractalField(4, 3, colormap=np.zeros((10, 4), dtype=np.uint8))
