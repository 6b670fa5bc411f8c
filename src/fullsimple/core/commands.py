"""Top-level commands of a program."""

from __future__ import annotations

from dataclasses import dataclass

from .ast import Term
from .context import Binding


@dataclass(frozen=True)
class Eval:
    """Type-check and evaluate ``term``, printing its normal form."""

    term: Term


@dataclass(frozen=True)
class Bind:
    """Add ``name`` with ``binding`` to the context of every later command."""

    name: str
    binding: Binding


type Command = Eval | Bind


__all__ = ["Command", "Eval", "Bind"]
