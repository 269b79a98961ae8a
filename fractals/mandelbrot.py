from dataclasses import dataclass

from complexmath.arithmetic import ZERO, add, multiply, power
from complexmath.number import Complex
from fractals.base import IterationRule

DIVERGE_RADIUS = 2.0
TRIANGLE_RADIUS = 0.01


@dataclass
class MandelbrotSet(IterationRule):
    """The classic Mandelbrot set: Z_(n+1) = (Z_n)^2 + C, C being the sampled position."""
    name: str = "Mandelbrot Set"

    def start(self, position: Complex) -> Complex:
        return ZERO

    def step(self, value: Complex, position: Complex) -> Complex:
        return add(multiply(value, value), position)

    def diverges(self, value: Complex, iteration: int) -> bool:
        return value.r > DIVERGE_RADIUS

    def display_name(self) -> str:
        return self.name

    def formula_text(self) -> str:
        return "Z_n+1 = (Z_n)^2 + C"

    def initial_view_center(self) -> Complex:
        return ZERO

    def initial_view_diameter(self) -> float:
        return DIVERGE_RADIUS * 2


@dataclass
class PowerMandelbrot(MandelbrotSet):
    name: str = "Mandelbrot^2.1"
    exponent: float = 2.1

    def step(self, value: Complex, position: Complex) -> Complex:
        return add(power(value, self.exponent), position)

    def formula_text(self) -> str:
        return f"Z_n+1 = (Z_n)^{self.exponent} + C"


@dataclass
class TriangleFractal(MandelbrotSet):
    """
    Z_(n+1) = (Z_n)^-2 + C. "Escape" here means collapsing onto the origin,
    so the divergence test is inverted.
    """
    name: str = "Triangle Fractal"

    def step(self, value: Complex, position: Complex) -> Complex:
        return add(power(value, -2), position)

    def diverges(self, value: Complex, iteration: int) -> bool:
        return value.r < TRIANGLE_RADIUS

    def formula_text(self) -> str:
        return "Z_n+1 = (Z_n)^-2 + C"

    def initial_view_diameter(self) -> float:
        return 1.0
