from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Optional, Union

from complexmath.errors import (InvalidNumber, UndefinedAngle,
                                UnsupportedCoordinateSystem)

TAU = 2.0 * math.pi


class CoordinateSystem(Enum):
    CARTESIAN = "cartesian"
    POLAR = "polar"


def _coordinate_system(system) -> CoordinateSystem:
    if isinstance(system, CoordinateSystem):
        return system
    try:
        return CoordinateSystem(system)
    except ValueError:
        raise UnsupportedCoordinateSystem(
            f'coordinate system "{system}" not supported') from None


def normalize_angle(angle: float) -> float:
    """Fold an angle into (-pi, pi]."""
    if -math.pi < angle <= math.pi:
        return angle
    folded = math.fmod(angle + math.pi, TAU)
    if folded <= 0.0:
        folded += TAU
    return folded - math.pi


class Complex:
    """
    Immutable complex number that keeps whichever representation it was
    built in (cartesian or polar) and derives the other one lazily.

    Derived parts are cached on first access. The angle is always reported
    in (-pi, pi] and the magnitude is never negative; a zero magnitude pins
    the angle to 0.
    """

    def __init__(self, x1: float, x2: float,
                 system: Union[CoordinateSystem, str] = CoordinateSystem.CARTESIAN):
        system = _coordinate_system(system)
        if math.isnan(x1):
            raise InvalidNumber("x1 is NaN")
        if math.isnan(x2):
            raise InvalidNumber("x2 is NaN")

        self._re: Optional[float] = None
        self._im: Optional[float] = None
        self._r: Optional[float] = None
        self._theta: Optional[float] = None
        self._system = system

        if system is CoordinateSystem.CARTESIAN:
            self._re = float(x1)
            self._im = float(x2)
        else:
            magnitude = abs(float(x1))
            if magnitude == 0.0:
                angle = 0.0
            else:
                if math.isinf(x2):
                    raise InvalidNumber(f"angle {x2} cannot be normalized")
                angle = float(x2) + math.pi if x1 < 0 else float(x2)
                angle = normalize_angle(angle)
            self._r = magnitude
            self._theta = angle

    # ---- Construction helpers --------------------------------------------

    @classmethod
    def cartesian(cls, re: float, im: float) -> "Complex":
        return cls(re, im, CoordinateSystem.CARTESIAN)

    @classmethod
    def polar(cls, r: float, theta: float) -> "Complex":
        return cls(r, theta, CoordinateSystem.POLAR)

    @classmethod
    def coerce(cls, value) -> "Complex":
        """Promote a Python number to a cartesian Complex."""
        if isinstance(value, Complex):
            return value
        if isinstance(value, complex):
            return cls(value.real, value.imag)
        if isinstance(value, numbers.Real):
            return cls(float(value), 0.0)
        raise TypeError(f"cannot convert {type(value).__name__} to Complex")

    # ---- Lazy accessors ---------------------------------------------------

    @property
    def authoritative(self) -> CoordinateSystem:
        return self._system

    @property
    def re(self) -> float:
        if self._re is None:
            cos = math.cos(self.theta)
            self._re = 0.0 if cos == 0.0 else self.r * cos
        return self._re

    @property
    def im(self) -> float:
        if self._im is None:
            sin = math.sin(self.theta)
            self._im = 0.0 if sin == 0.0 else self.r * sin
        return self._im

    @property
    def r(self) -> float:
        if self._r is None:
            self._r = math.hypot(self.re, self.im)
        return self._r

    @property
    def theta(self) -> float:
        if self._theta is None:
            re, im = self.re, self.im
            if math.isinf(re) and math.isinf(im):
                raise UndefinedAngle(
                    "angle is undefined when both real and imaginary parts are infinite")
            if re == 0.0 and im == 0.0:
                # Covers signed zeros, which atan2 would turn into pi
                self._theta = 0.0
                return self._theta
            angle = math.atan2(im, re)
            # atan2 reports -pi for a negative real with a -0.0 imaginary part
            self._theta = math.pi if angle == -math.pi else angle
        return self._theta

    def is_infinite(self) -> bool:
        return math.isinf(self.re) or math.isinf(self.im) or math.isinf(self.r)

    # ---- Comparison & formatting -----------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Complex):
            try:
                other = Complex.coerce(other)
            except (TypeError, InvalidNumber):
                return NotImplemented
        if (self._system is CoordinateSystem.POLAR
                and other._system is CoordinateSystem.POLAR):
            return self._r == other._r and self._theta == other._theta
        return self.re == other.re and self.im == other.im

    def __hash__(self) -> int:
        return hash(complex(self.re, self.im))

    def format_as(self, system: Union[CoordinateSystem, str]) -> str:
        system = _coordinate_system(system)
        if system is CoordinateSystem.CARTESIAN:
            return f"{self.re} + {self.im}*i"
        return f"{self.r}*e^(i*{self.theta})"

    def __str__(self) -> str:
        return self.format_as(self._system)

    def __repr__(self) -> str:
        if self._system is CoordinateSystem.POLAR:
            return f"Complex.polar({self._r!r}, {self._theta!r})"
        return f"Complex({self._re!r}, {self._im!r})"

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __abs__(self) -> float:
        return self.r

    # ---- Operators (delegate to complexmath.arithmetic) -------------------

    def __add__(self, other):
        from complexmath import arithmetic
        try:
            return arithmetic.add(self, Complex.coerce(other))
        except TypeError:
            return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        from complexmath import arithmetic
        try:
            return arithmetic.subtract(self, Complex.coerce(other))
        except TypeError:
            return NotImplemented

    def __rsub__(self, other):
        from complexmath import arithmetic
        try:
            return arithmetic.subtract(Complex.coerce(other), self)
        except TypeError:
            return NotImplemented

    def __mul__(self, other):
        from complexmath import arithmetic
        try:
            return arithmetic.multiply(self, Complex.coerce(other))
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        from complexmath import arithmetic
        try:
            return arithmetic.divide(self, Complex.coerce(other))
        except TypeError:
            return NotImplemented

    def __rtruediv__(self, other):
        from complexmath import arithmetic
        try:
            return arithmetic.divide(Complex.coerce(other), self)
        except TypeError:
            return NotImplemented

    def __pow__(self, exponent):
        from complexmath import arithmetic
        if isinstance(exponent, (Complex, complex)):
            return arithmetic.power(self, Complex.coerce(exponent))
        if isinstance(exponent, numbers.Real):
            return arithmetic.power(self, float(exponent))
        return NotImplemented

    def __neg__(self):
        from complexmath import arithmetic
        return arithmetic.multiply(self, scalar=-1.0)
