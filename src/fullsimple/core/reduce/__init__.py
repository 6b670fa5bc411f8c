"""Evaluators split by strategy (single step, big step, normalization)."""

from .bigstep import big_step
from .normalize import EvalMode, evaluate, normalize
from .step import step
from .values import is_numeric_value, is_value

__all__ = [
    "EvalMode",
    "big_step",
    "evaluate",
    "is_numeric_value",
    "is_value",
    "normalize",
    "step",
]
