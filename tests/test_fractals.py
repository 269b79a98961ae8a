import pytest

from complexmath.arithmetic import ZERO
from complexmath.number import Complex
from fractals.julia import JuliaSet, GOLDEN_RATIO
from fractals.mandelbrot import MandelbrotSet, PowerMandelbrot, TriangleFractal
from fractals.registry import (default_fractal, get_fractal, list_fractals,
                               register_fractal)


def test_registry_order_and_default():
    names = [rule.display_name() for rule in list_fractals()]
    assert names[0] == "Mandelbrot Set"
    assert "Triangle Fractal" in names
    assert "Julia Set 1-phi" in names
    assert "Julia Set cauliflower" in names
    assert "Mandelbrot^2.1" in names
    assert default_fractal().display_name() == "Mandelbrot Set"
    assert len(set(names)) == len(names)


def test_get_fractal():
    assert isinstance(get_fractal("Triangle Fractal"), TriangleFractal)
    with pytest.raises(KeyError, match="Burning Ship"):
        get_fractal("Burning Ship")


def test_duplicate_registration_is_rejected():
    with pytest.raises(ValueError):
        register_fractal(MandelbrotSet())


def test_position_dependence_flags():
    assert MandelbrotSet().depends_on_position
    assert TriangleFractal().depends_on_position
    assert not JuliaSet(ZERO).depends_on_position


def test_julia_presets():
    phi = JuliaSet.one_minus_phi()
    assert phi.offset == Complex(1 - GOLDEN_RATIO, 0.0)
    assert JuliaSet.cauliflower().offset == Complex(0.25, 0.0)
    assert JuliaSet.neg_one().display_name() == "Julia Set -1.0 + 0.0*i"


def test_julia_names_and_formulas():
    rule = JuliaSet(Complex(-0.8, 0.156), power=3)
    assert rule.display_name() == "Julia Set^3  -0.8 + 0.156*i"
    assert rule.formula_text() == "Z_n+1 = (Z_n)^3 + -0.8 + 0.156*i"
    assert JuliaSet(ZERO).formula_text() == "Z_n+1 = (Z_n)^2 + 0.0 + 0.0*i"


def test_julia_step_ignores_position():
    rule = JuliaSet(Complex(-1.0, 0.0))
    z = Complex(0.5, 0.5)
    assert rule.step(z, ZERO) == rule.step(z, Complex(3.0, -2.0))
    assert rule.start(Complex(0.25, 0.5)) == Complex(0.25, 0.5)
    assert complex(rule.step(z, ZERO)) == pytest.approx(complex(0.5, 0.5) ** 2 - 1)


def test_julia_default_view():
    rule = JuliaSet.cauliflower()
    assert rule.initial_view_center() == ZERO
    assert rule.initial_view_diameter() == 4.0
    assert rule.diverges(Complex(2.0, 0.1), 1)
    assert not rule.diverges(Complex(2.0, 0.0), 1)


def test_mandelbrot_step():
    rule = MandelbrotSet()
    c = Complex(-1.0, 0.5)
    z = rule.start(c)
    assert z == ZERO
    z = rule.step(z, c)
    assert z == c
    assert rule.step(z, c) == Complex(-0.25, -0.5)


def test_power_mandelbrot():
    rule = PowerMandelbrot()
    assert rule.formula_text() == "Z_n+1 = (Z_n)^2.1 + C"
    c = Complex(0.5, 0.0)
    assert complex(rule.step(Complex(1.0, 0.0), c)) == pytest.approx(1.5)


def test_triangle_fractal_escapes_towards_origin():
    rule = TriangleFractal()
    c = Complex(0.3, 0.0)
    # Zero stays zero under the near-zero power shortcut, so the first step lands on C
    assert rule.step(rule.start(c), c) == c
    assert rule.diverges(Complex(0.001, 0.0), 3)
    assert not rule.diverges(Complex(0.5, 0.0), 3)
    assert rule.initial_view_diameter() == 1.0
