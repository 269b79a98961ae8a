from __future__ import annotations
from typing import Dict, List

from fractals.base import IterationRule
from fractals.julia import JuliaSet
from fractals.mandelbrot import MandelbrotSet, PowerMandelbrot, TriangleFractal

# display name -> rule instance, in selection order
_REGISTRY: Dict[str, IterationRule] = {}


def register_fractal(rule: IterationRule) -> None:
    """
    Register a fractal definition under its display name.
    Example:
        register_fractal(JuliaSet(Complex(-0.8, 0.156)))
    """
    name = rule.display_name()
    if name in _REGISTRY:
        raise ValueError(f"Fractal '{name}' is already registered")
    _REGISTRY[name] = rule


def get_fractal(name: str) -> IterationRule:
    """
    Look up a registered fractal by display name.
    Raises KeyError if not found.
    """
    try:
        return _REGISTRY[name]
    except KeyError as e:
        raise KeyError(f"Fractal not found: '{name}' (known: {', '.join(_REGISTRY)})") from e


def list_fractals() -> List[IterationRule]:
    return list(_REGISTRY.values())


def default_fractal() -> IterationRule:
    return next(iter(_REGISTRY.values()))


for _rule in (
    MandelbrotSet(),
    TriangleFractal(),
    JuliaSet.one_minus_phi(),
    JuliaSet.cauliflower(),
    JuliaSet.neg_one(),
    PowerMandelbrot(),
):
    register_fractal(_rule)
