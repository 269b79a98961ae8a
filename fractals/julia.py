import math
from dataclasses import dataclass
from typing import Optional, Union

from complexmath.arithmetic import ZERO, add, power
from complexmath.number import Complex
from fractals.base import IterationRule

DIVERGE_RADIUS = 2.0
GOLDEN_RATIO = (1 + math.sqrt(5)) / 2


@dataclass
class JuliaSet(IterationRule):
    """
    Z_(n+1) = (Z_n)^power + offset, started from the sampled position.

    The step never looks at the starting position, so Julia sets can run on
    the deduplicating evaluator.
    """
    offset: Complex
    power: Union[float, Complex] = 2
    name: Optional[str] = None

    depends_on_position = False

    @classmethod
    def one_minus_phi(cls) -> "JuliaSet":
        return cls(Complex(1 - GOLDEN_RATIO, 0.0), name="Julia Set 1-phi")

    @classmethod
    def neg_one(cls) -> "JuliaSet":
        return cls(Complex(-1.0, 0.0))

    @classmethod
    def cauliflower(cls) -> "JuliaSet":
        return cls(Complex(0.25, 0.0), name="Julia Set cauliflower")

    def start(self, position: Complex) -> Complex:
        return position

    def step(self, value: Complex, position: Complex) -> Complex:
        return add(power(value, self.power), self.offset)

    def diverges(self, value: Complex, iteration: int) -> bool:
        return value.r > DIVERGE_RADIUS

    def display_name(self) -> str:
        if self.name:
            return self.name
        if isinstance(self.power, Complex):
            return f"Julia Set^({self.power})  {self.offset}"
        if self.power != 2:
            return f"Julia Set^{self.power}  {self.offset}"
        return f"Julia Set {self.offset}"

    def formula_text(self) -> str:
        if isinstance(self.power, Complex):
            return f"Z_n+1 = (Z_n)^({self.power}) + {self.offset}"
        return f"Z_n+1 = (Z_n)^{self.power} + {self.offset}"

    def initial_view_center(self) -> Complex:
        return ZERO

    def initial_view_diameter(self) -> float:
        return DIVERGE_RADIUS * 2
