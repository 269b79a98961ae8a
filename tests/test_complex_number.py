import math

import pytest

from complexmath.errors import InvalidNumber, UndefinedAngle, UnsupportedCoordinateSystem
from complexmath.number import Complex, CoordinateSystem, normalize_angle


def test_cartesian_derives_polar():
    """3 + 4i has magnitude 5 and angle atan2(4, 3)."""
    c = Complex(3, 4)
    assert c.authoritative is CoordinateSystem.CARTESIAN
    assert c.r == pytest.approx(5.0)
    assert c.theta == pytest.approx(math.atan2(4, 3))


def test_polar_negative_magnitude_rotates_angle():
    c = Complex(-2, 0, CoordinateSystem.POLAR)
    assert c.r == 2.0
    assert c.theta == pytest.approx(math.pi)
    assert c.re == pytest.approx(-2.0)
    assert c.im == pytest.approx(0.0, abs=1e-12)


def test_polar_angle_is_normalized():
    c = Complex.polar(1.0, 1.5 * math.pi)
    assert -math.pi < c.theta <= math.pi
    assert c.theta == pytest.approx(-0.5 * math.pi)
    assert Complex.polar(1.0, -math.pi).theta == pytest.approx(math.pi)


def test_zero_magnitude_forces_zero_angle():
    c = Complex.polar(0.0, 1.3)
    assert c.theta == 0.0
    assert c.re == 0.0 and c.im == 0.0


@pytest.mark.parametrize("re, im", [(0.0, 0.0), (-0.0, 0.0), (-0.0, -0.0), (0.0, -0.0)])
def test_zero_magnitude_forces_zero_angle_for_signed_zeros(re, im):
    c = Complex(re, im)
    assert c.r == 0.0
    assert c.theta == 0.0


@pytest.mark.parametrize("angle", [0.0, 1.0, -2.5, math.pi, 7.0, -9.0])
def test_normalize_angle_range(angle):
    folded = normalize_angle(angle)
    assert -math.pi < folded <= math.pi
    assert math.cos(folded) == pytest.approx(math.cos(angle))
    assert math.sin(folded) == pytest.approx(math.sin(angle))


def test_exact_axis_parts_are_zeroed():
    c = Complex.polar(2.0, math.pi / 2)
    assert c.re == pytest.approx(0.0, abs=1e-15)
    assert Complex.polar(2.0, 0.0).im == 0.0


def test_negative_zero_imaginary_angle_is_pi():
    assert Complex(-1.0, -0.0).theta == math.pi


def test_round_trip_between_representations():
    c = Complex(-1.5, 2.25)
    back = Complex.polar(c.r, c.theta)
    assert back.re == pytest.approx(c.re)
    assert back.im == pytest.approx(c.im)


def test_nan_is_rejected():
    with pytest.raises(InvalidNumber):
        Complex(float("nan"), 0.0)
    with pytest.raises(InvalidNumber):
        Complex.polar(1.0, float("nan"))


def test_infinite_angle_is_rejected():
    with pytest.raises(InvalidNumber):
        Complex.polar(1.0, math.inf)


def test_unknown_coordinate_system():
    with pytest.raises(UnsupportedCoordinateSystem):
        Complex(1.0, 2.0, "spherical")
    assert Complex(1.0, 0.0, "polar").authoritative is CoordinateSystem.POLAR


def test_angle_undefined_for_double_infinity():
    with pytest.raises(UndefinedAngle):
        Complex(math.inf, -math.inf).theta


def test_complex_errors_are_value_errors():
    assert issubclass(InvalidNumber, ValueError)
    assert issubclass(UndefinedAngle, ValueError)


def test_equality_is_symmetric_across_representations():
    a = Complex(1.0, 0.0)
    b = Complex.polar(1.0, 0.0)
    assert a == b
    assert b == a
    assert Complex.polar(1.0, 0.5) == Complex.polar(1.0, 0.5)
    assert Complex(1.0, 2.0) != Complex(1.0, 2.5)


def test_equality_with_python_numbers():
    assert Complex(2.0, 0.0) == 2
    assert Complex(1.0, -1.0) == complex(1, -1)
    assert Complex(1.0, 0.0) != "1"


def test_equal_values_hash_equal():
    assert hash(Complex(0.5, 0.0)) == hash(Complex.polar(0.5, 0.0))
    assert len({Complex(1.0, 1.0), Complex(1.0, 1.0)}) == 1


def test_string_forms():
    assert str(Complex(1.0, 2.0)) == "1.0 + 2.0*i"
    assert str(Complex.polar(2.0, 0.5)) == "2.0*e^(i*0.5)"
    assert Complex(1.0, 2.0).format_as("polar").startswith(str(math.hypot(1.0, 2.0)))


def test_coerce():
    assert Complex.coerce(3) == Complex(3.0, 0.0)
    assert Complex.coerce(1j) == Complex(0.0, 1.0)
    with pytest.raises(TypeError):
        Complex.coerce("3")


def test_operators_delegate_to_arithmetic():
    a = Complex(1.0, 2.0)
    b = Complex(3.0, -1.0)
    assert a + b == Complex(4.0, 1.0)
    assert a - b == Complex(-2.0, 3.0)
    assert a * b == Complex(5.0, 5.0)
    assert -a == Complex(-1.0, -2.0)
    quotient = a / b
    expected = complex(1, 2) / complex(3, -1)
    assert quotient.re == pytest.approx(expected.real)
    assert quotient.im == pytest.approx(expected.imag)
    assert complex(a ** 2) == pytest.approx(complex(1, 2) ** 2)
