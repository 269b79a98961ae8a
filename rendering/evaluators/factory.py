from __future__ import annotations

import logging

from fractals.base import IterationRule
from rendering.evaluators.base import GridEvaluator
from rendering.evaluators.dedup import DeduplicatingGridEvaluator
from rendering.evaluators.grid_merge import GridMergingEvaluator
from rendering.evaluators.naive import NaiveGridEvaluator
from utils.coords import ViewportMapping
from utils.enums import EvaluatorMode

logger = logging.getLogger(__name__)


def create_evaluator(rule: IterationRule, mapping: ViewportMapping,
                     mode: EvaluatorMode = EvaluatorMode.AUTO) -> GridEvaluator:
    """
    AUTO picks the exact deduplicating evaluator when the rule ignores the
    starting position, the naive one otherwise. GRID is only used when
    asked for.
    """
    if mode == EvaluatorMode.AUTO:
        mode = EvaluatorMode.NAIVE if rule.depends_on_position else EvaluatorMode.DEDUP
    logger.debug("Creating %s evaluator for %s on a %dx%d grid",
                 mode.name, rule.display_name(), mapping.rows, mapping.cols)
    if mode == EvaluatorMode.DEDUP:
        return DeduplicatingGridEvaluator(rule, mapping)
    if mode == EvaluatorMode.GRID:
        return GridMergingEvaluator(rule, mapping)
    if mode == EvaluatorMode.NAIVE:
        return NaiveGridEvaluator(rule, mapping)
    raise ValueError(f"Unsupported evaluator mode {mode}")
