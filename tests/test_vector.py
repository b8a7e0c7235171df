import math

import pytest

from raycube.vector import Direction, Vector, direction_vector


def test_add_then_sub_is_identity():
    v = Vector(1.5, -2.25)
    w = Vector(3.0, 4.5)
    assert (v + w) - w == v


def test_scalar_multiplication_matches_repeated_addition():
    v = Vector(1.25, -0.5)
    assert v * 2 == v + v
    assert 2 * v == v * 2


def test_division_inverts_multiplication():
    v = Vector(3.0, -6.0)
    assert (v / 3) * 3 == v


def test_perp_is_orthogonal_and_preserves_length():
    v = Vector(2.0, 3.0)
    p = v.perp()
    assert p.dot(v) == 0
    assert p.dot(p) == v.dot(v)


def test_perp_twice_is_negation():
    v = Vector(2.0, -7.0)
    assert v.perp().perp() == -v


def test_rotate_quarter_turn_equals_perp():
    v = Vector(1.0, 2.0)
    rotated = v.rotate(math.pi / 2)
    expected = v.perp()
    assert (rotated.x, rotated.y) == pytest.approx((expected.x, expected.y), abs=1e-9)


def test_rotate_preserves_length():
    v = Vector(3.0, -1.0)
    r = v.rotate(0.7)
    assert r.dot(r) == pytest.approx(v.dot(v))


def test_rotate_back_and_forth_is_identity():
    v = Vector(0.3, 0.9)
    back = v.rotate(0.4).rotate(-0.4)
    assert (back.x, back.y) == pytest.approx((0.3, 0.9), abs=1e-9)


def test_distance_squared_properties():
    v = Vector(1.0, 2.0)
    w = Vector(-4.0, 6.5)
    assert v.distance_squared(v) == 0
    assert v.distance_squared(w) == w.distance_squared(v)
    assert v.distance_squared(w) == pytest.approx((v - w).dot(v - w))


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.UP, Vector(0, -1)),
        (Direction.DOWN, Vector(0, 1)),
        (Direction.LEFT, Vector(-1, 0)),
        (Direction.RIGHT, Vector(1, 0)),
        (Direction.NONE, Vector(0, 0)),
    ],
)
def test_direction_vector_uses_screen_coordinates(direction, expected):
    assert direction_vector(direction) == expected


def test_opposite_directions_cancel():
    assert direction_vector(Direction.UP) + direction_vector(Direction.DOWN) == Vector()
    assert direction_vector(Direction.LEFT) + direction_vector(Direction.RIGHT) == Vector()


def test_direction_indices_follow_texture_order():
    vectors = [direction_vector(Direction(index)) for index in range(4)]
    assert vectors == [Vector(0, -1), Vector(0, 1), Vector(-1, 0), Vector(1, 0)]