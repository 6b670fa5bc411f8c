"""Run programs command by command, threading the context between them."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from fullsimple.config import Settings
from fullsimple.core.ast import Term
from fullsimple.core.commands import Bind, Command, Eval
from fullsimple.core.context import Context, TmAbbBind
from fullsimple.core.equality import type_equals
from fullsimple.core.errors import FullSimpleError, TypeMismatch
from fullsimple.core.pretty import render_in, render_type
from fullsimple.core.reduce import evaluate
from fullsimple.core.resolve import resolve_command
from fullsimple.core.typing import type_of
from fullsimple.surface.parse import parse_program


def _evaluate(ctx: Context, term: Term, settings: Settings) -> Term:
    return evaluate(ctx, term, settings.mode, settings.max_steps)


def process_command(
    ctx: Context, command: Command, settings: Settings | None = None
) -> tuple[Context, str | None]:
    """Resolve, check and run one named command against ``ctx``.

    Returns the context for the next command and the rendered result of an
    ``Eval`` (``None`` for bindings).
    """

    settings = settings or Settings()
    next_ctx, resolved = resolve_command(ctx, command)

    match resolved:
        case Eval(term):
            ty = type_of(ctx, term)
            value = _evaluate(ctx, term, settings)
            line = render_in(ctx, value, settings.style)
            logger.debug("driver.command.eval type={} value={}", render_type(ctx, ty), line)
            return ctx, line

        case Bind(name, TmAbbBind(term, declared)):
            ty = type_of(ctx, term)
            if declared is not None and not type_equals(ctx, declared, ty):
                raise TypeMismatch(
                    f"Type of {name} does not match its annotation",
                    render_type(ctx, declared),
                    render_type(ctx, ty),
                )
            value = _evaluate(ctx, term, settings)
            logger.debug("driver.command.bind name={} kind=term type={}", name, render_type(ctx, ty))
            return ctx.add_binding(name, TmAbbBind(value, ty)), None

        case Bind(name, binding):
            logger.debug("driver.command.bind name={} kind={}", name, type(binding).__name__)
            return next_ctx, None

    raise TypeError(f"Unexpected command in process_command: {resolved!r}")


def run_commands(
    commands: Iterable[Command],
    settings: Settings | None = None,
    ctx: Context | None = None,
) -> list[str]:
    """Run ``commands`` in order and collect the output line of every ``Eval``.

    A failing command aborts the run unless ``settings.recover`` is set, in
    which case it is logged and skipped and the context is left unchanged.
    """

    settings = settings or Settings()
    ctx = ctx if ctx is not None else Context.empty()
    lines: list[str] = []
    for index, command in enumerate(commands):
        try:
            ctx, line = process_command(ctx, command, settings)
        except FullSimpleError as e:
            if not settings.recover:
                raise
            logger.warning("driver.command.skipped index={} error={}", index, e)
            continue
        if line is not None:
            lines.append(line)
    logger.debug("driver.run.done bindings={} outputs={}", len(ctx), len(lines))
    return lines


def run_program(source: str, settings: Settings | None = None) -> list[str]:
    """Parse ``source`` and run it. Syntax errors are never recovered from."""

    return run_commands(parse_program(source), settings)


__all__ = ["process_command", "run_commands", "run_program"]
