import math

import pytest

from ecosim.math_utils import Vector2


def test_vector2_add_sub_return_new_vectors():
    v1 = Vector2(1, 2)
    v2 = Vector2(3, 4)
    total = v1 + v2
    assert (total.x, total.y) == (4, 6)
    diff = v2 - v1
    assert (diff.x, diff.y) == (2, 2)
    assert (v1.x, v1.y) == (1, 2)


def test_vector2_inplace_ops_return_self():
    v = Vector2(4, 6)
    assert v.add_inplace(Vector2(1, 1)) is v
    assert v.sub_inplace(Vector2(1, 1)) is v
    assert v.mul_inplace(2) is v
    assert v.div_inplace(4) is v
    assert v.x == 2
    assert v.y == 3


def test_vector2_inplace_div_by_zero():
    v1 = Vector2(4, 6)
    with pytest.raises(ZeroDivisionError):
        v1.div_inplace(0)


def test_vector2_equality_tolerance():
    base = Vector2(1.0, 1.0)
    close = Vector2(1.0 + 5e-10, 1.0 - 5e-10)
    far = Vector2(1.0, 1.0001)

    assert base == close
    assert base != far
    assert base != (1.0, 1.0)


def test_normalize_zero_vector_stays_zero():
    assert Vector2(0, 0).normalize() == Vector2(0, 0)
    v = Vector2(0, 0)
    v.normalize_inplace()
    assert v == Vector2(0, 0)


def test_limit_inplace_only_shrinks():
    long = Vector2(30, 40)
    assert long.limit_inplace(5) is long
    assert long.length() == pytest.approx(5)

    short = Vector2(0.3, 0.4)
    assert short.limit_inplace(5) == Vector2(0.3, 0.4)


def test_distance_and_angle():
    assert Vector2(0, 0).distance_to(Vector2(3, 4)) == pytest.approx(5)
    assert Vector2(0, 1).angle_degrees() == pytest.approx(90)
    assert Vector2(-1, 0).angle_degrees() == pytest.approx(180)


def test_from_angle():
    v = Vector2.from_angle(math.pi / 2, 40)
    assert v.x == pytest.approx(0, abs=1e-9)
    assert v.y == pytest.approx(40)


def test_is_finite():
    assert Vector2(1, 2).is_finite()
    assert not Vector2(float("nan"), 0).is_finite()
    assert not Vector2(0, float("inf")).is_finite()


def test_vector2_is_unhashable():
    with pytest.raises(TypeError):
        hash(Vector2(1, 1))
