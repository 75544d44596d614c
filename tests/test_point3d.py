import pytest

from simuverse.point3d import Point3D


def test_zero():
    assert Point3D.zero().is_zero()
    assert not Point3D(0.0, 1.0, 0.0).is_zero()


def test_add_and_sub_round_trip():
    a = Point3D(1.0, 2.0, 3.0)
    b = Point3D(-4.0, 0.5, 2.0)
    assert (a + b) - b == a
    assert (a - a).is_zero()


def test_mul_and_div():
    a = Point3D(1.0, -2.0, 4.0)
    assert a * 2.0 == Point3D(2.0, -4.0, 8.0)
    assert 2.0 * a == a * 2.0
    assert (a * 3.0) / 3.0 == a


def test_div_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Point3D(1.0, 1.0, 1.0) / 0.0


def test_offset():
    assert Point3D(1.0, 2.0, 3.0).offset(1.0, -2.0, 0.5) == Point3D(2.0, 0.0, 3.5)


def test_length():
    assert Point3D(3.0, 4.0, 0.0).length() == pytest.approx(5.0)
    assert Point3D.zero().length() == 0.0


def test_sequence_round_trip():
    p = Point3D(0.25, -1.5, 7.0)
    assert Point3D.from_sequence(p.to_list()) == p
    assert list(p) == p.to_list()


def test_from_sequence_wrong_length():
    with pytest.raises(ValueError):
        Point3D.from_sequence([1.0, 2.0])