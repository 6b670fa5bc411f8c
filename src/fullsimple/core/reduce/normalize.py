"""Drivers that run the evaluators to a normal form."""

from __future__ import annotations

from enum import Enum

from ..ast import Term
from ..context import Context
from ..errors import NoRuleApplies
from .bigstep import big_step
from .step import step


class EvalMode(Enum):
    SMALL_STEP = "small-step"
    BIG_STEP = "big-step"


def normalize(ctx: Context, term: Term, max_steps: int | None = None) -> Term:
    """Step ``term`` until no rule applies.

    Unbounded by default: a program that loops through ``fix`` never returns.
    ``max_steps`` stops early and hands back whatever term was reached.
    """

    steps = 0
    while max_steps is None or steps < max_steps:
        try:
            term = step(ctx, term)
        except NoRuleApplies:
            return term
        steps += 1
    return term


def evaluate(
    ctx: Context,
    term: Term,
    mode: EvalMode = EvalMode.SMALL_STEP,
    max_steps: int | None = None,
) -> Term:
    """Evaluate ``term`` under ``ctx`` with the evaluator selected by ``mode``.

    ``max_steps`` only bounds the small-step evaluator.
    """

    match mode:
        case EvalMode.SMALL_STEP:
            return normalize(ctx, term, max_steps)
        case EvalMode.BIG_STEP:
            return big_step(ctx, term)

    raise ValueError(f"Unknown evaluation mode: {mode!r}")


__all__ = ["EvalMode", "normalize", "evaluate"]
