import pytest

from forktal.point import Point


def test_new_point_starts_at_origin():
    p = Point(0.5, -0.25)
    assert p.c == complex(0.5, -0.25)
    assert p.z == 0j
    assert p.count() == 0
    assert not p.is_escaped()


def test_step_applies_quadratic_map():
    p = Point(1.0, 1.0)
    p.step()
    assert p.z == complex(1.0, 1.0)
    p.step()
    # (1+i)^2 + (1+i) = 2i + 1 + i
    assert p.z == complex(1.0, 3.0)
    assert p.count() == 2


def test_diverging_orbit_escapes_at_fourth_step():
    p = Point(2.0, 0.0)
    orbit = []
    for _ in range(4):
        assert not p.is_escaped()
        p.step()
        orbit.append(p.z.real)
    assert orbit == [2.0, 6.0, 38.0, 1446.0]
    assert p.is_escaped()
    assert p.count() == 4


def test_escaped_point_is_frozen():
    p = Point(2.0, 0.0)
    while not p.is_escaped():
        p.step()
    z, n = p.z, p.iterations
    for _ in range(10):
        p.step()
    assert p.z == z
    assert p.iterations == n


def test_origin_never_escapes():
    p = Point(0.0, 0.0)
    for _ in range(5000):
        p.step()
    assert not p.is_escaped()
    assert p.count() == 5000


def test_period_two_orbit_stays_bounded():
    p = Point(-1.0, 0.0)
    seen = []
    for _ in range(6):
        p.step()
        seen.append(p.z)
    assert seen == [-1, 0, -1, 0, -1, 0]
    assert not p.is_escaped()


def test_corner_of_default_view_escapes_at_fourth_step():
    p = Point(-2.25, -1.25)
    for _ in range(3):
        p.step()
    assert abs(p.z) == pytest.approx(22.0681, abs=1e-3)
    assert not p.is_escaped()
    p.step()
    assert p.is_escaped()
    assert p.count() == 4


def test_limit_is_strictly_greater():
    p = Point(0.0, 0.0)
    p.z = complex(Point.LIMIT, 0.0)
    assert not p.is_escaped()
    p.z = complex(Point.LIMIT + 1e-9, 0.0)
    assert p.is_escaped()
