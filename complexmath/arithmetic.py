from __future__ import annotations

import math
import numbers
from typing import Union

from complexmath.number import Complex, CoordinateSystem

# Magnitudes below this are treated as exactly zero by power()
ZERO_THRESHOLD = 1e-9

ZERO = Complex(0.0, 0.0)
ONE = Complex(1.0, 0.0)
TWO = Complex(2.0, 0.0)
NEG_ONE = Complex(-1.0, 0.0)
I = Complex(0.0, 1.0)
NEG_I = Complex(0.0, -1.0)


def add(*cs: Complex) -> Complex:
    real_sum = 0.0
    imaginary_sum = 0.0
    for c in cs:
        real_sum += c.re
        imaginary_sum += c.im
    return Complex(real_sum, imaginary_sum, CoordinateSystem.CARTESIAN)


def subtract(c1: Complex, c2: Complex) -> Complex:
    return Complex(c1.re - c2.re, c1.im - c2.im, CoordinateSystem.CARTESIAN)


def multiply(*cs: Complex, scalar: float = 1.0) -> Complex:
    """
    Fold the operands with the complex product, starting from ``scalar``.
    multiply() with no operands returns the scalar itself.
    """
    if not cs:
        return Complex(float(scalar), 0.0, CoordinateSystem.CARTESIAN)

    first, rest = cs[0], cs[1:]
    real_product = scalar * first.re
    imaginary_product = scalar * first.im
    for c in rest:
        next_real = real_product * c.re - imaginary_product * c.im
        next_imaginary = imaginary_product * c.re + real_product * c.im
        real_product = next_real
        imaginary_product = next_imaginary

    return Complex(real_product, imaginary_product, CoordinateSystem.CARTESIAN)


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def power(base: Complex, exponent: Union[Complex, complex, float, int]) -> Complex:
    """
    Raise ``base`` to a real or complex exponent through the polar identity
    exp(exponent * log(base)).

    Bases with a magnitude below ZERO_THRESHOLD return ZERO so the logarithm
    is never taken of zero. An infinite base also returns ZERO; that is a
    saturation rule, not a limit.
    """
    magnitude = base.r
    if magnitude < ZERO_THRESHOLD:
        return ZERO
    if math.isinf(magnitude):
        return ZERO

    log_base = Complex(math.log(magnitude), base.theta, CoordinateSystem.CARTESIAN)
    if isinstance(exponent, (Complex, complex)):
        scaled = multiply(log_base, Complex.coerce(exponent))
    elif isinstance(exponent, numbers.Real):
        scaled = multiply(log_base, scalar=float(exponent))
    else:
        raise TypeError(f"unsupported exponent type {type(exponent).__name__}")

    return Complex(_exp(scaled.re), scaled.im, CoordinateSystem.POLAR)


def divide(c1: Complex, c2: Complex) -> Complex:
    return multiply(c1, power(c2, NEG_ONE))
