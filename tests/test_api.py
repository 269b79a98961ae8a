import numpy as np
import pytest

from api.render_api import RenderAPI
from coloring.palettes import palettes
from complexmath.number import Complex
from fractals.base import ViewerSettings
from fractals.julia import JuliaSet
from rendering.evaluators.dedup import DeduplicatingGridEvaluator
from rendering.evaluators.grid_merge import GridMergingEvaluator
from rendering.evaluators.naive import NaiveGridEvaluator
from rendering.service import IterationService
from utils.enums import EvaluatorMode


@pytest.fixture
def api():
    service = IterationService(ViewerSettings(width=16, height=16, log_every=0),
                               fractal=JuliaSet.neg_one())
    yield RenderAPI(service)
    service.shutdown()


def test_configure_applies_one_rebuild(api):
    seq = api.service.seq
    api.configure().size(16, 8).spacing(2).apply()
    assert api.service.seq == seq + 1
    assert (api.service.mapping.rows, api.service.mapping.cols) == (4, 8)


def test_configure_palette_and_zoom_factor_do_not_rebuild(api):
    seq = api.service.seq
    api.configure().palette("Ocean").zoom_factor(3).apply()
    assert api.service.seq == seq
    assert np.array_equal(api.service.palette, palettes["Ocean"])
    api.zoom_at(8, 8)
    assert api.service.mapping.diameter == pytest.approx(4.0 / 3)


def test_configure_rejects_small_zoom_factor(api):
    with pytest.raises(ValueError):
        api.configure().zoom_factor(1).apply()


def test_configure_evaluator(api):
    api.configure().evaluator(EvaluatorMode.NAIVE).apply()
    assert isinstance(api.service.evaluator, NaiveGridEvaluator)
    api.configure().evaluator(EvaluatorMode.GRID).apply()
    assert isinstance(api.service.evaluator, GridMergingEvaluator)


def test_configure_fractal_with_size(api):
    api.configure().fractal("Mandelbrot Set").size(10, 20).apply()
    assert api.service.fractal.display_name() == "Mandelbrot Set"
    assert (api.service.mapping.rows, api.service.mapping.cols) == (20, 10)


def test_select_fractal(api):
    api.select_fractal("Julia Set 1-phi")
    assert isinstance(api.service.evaluator, DeduplicatingGridEvaluator)
    with pytest.raises(KeyError):
        api.select_fractal("Nope")


def test_set_view_and_snapshot(api):
    api.set_view(Complex(0.5, 0.0), 1.0)
    assert api.service.mapping.center == Complex(0.5, 0.0)
    assert api.latest_snapshot() is None


def test_callbacks_are_forwarded(api):
    logs = []
    api.on_log(logs.append)
    api.on_frame(lambda evt: None)
    api.set_image_size(8, 8)
    assert logs and logs[-1].message.startswith("View")
    assert api.service.on_frame is not None
