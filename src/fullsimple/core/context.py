"""Naming context: the ordered bindings that De Bruijn indices point into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .ast import Term, Type
from .debruijn import shift, type_shift


@dataclass(frozen=True)
class NameBind:
    """A bare name, introduced while resolving or printing under a binder."""


@dataclass(frozen=True)
class VarBind:
    """A term variable of type ``ty``."""

    ty: Type


@dataclass(frozen=True)
class TyVarBind:
    """An uninterpreted type name."""


@dataclass(frozen=True)
class TyAbbBind:
    """A type abbreviation, unfolded by ``simplify``."""

    ty: Type


@dataclass(frozen=True)
class TmAbbBind:
    """A term abbreviation; ``ty`` is ``None`` until the term is checked."""

    term: Term
    ty: Type | None = None


type Binding = NameBind | VarBind | TyVarBind | TyAbbBind | TmAbbBind


def binding_shift(binding: Binding, by: int) -> Binding:
    """Shift the types and terms stored in ``binding`` by ``by``."""

    match binding:
        case NameBind() | TyVarBind():
            return binding
        case VarBind(ty):
            return VarBind(type_shift(ty, by))
        case TyAbbBind(ty):
            return TyAbbBind(type_shift(ty, by))
        case TmAbbBind(term, ty):
            return TmAbbBind(shift(term, by), None if ty is None else type_shift(ty, by))

    raise TypeError(f"Unexpected binding in binding_shift: {binding!r}")


@dataclass(frozen=True)
class ContextEntry:
    name: str
    binding: Binding


@dataclass(frozen=True)
class Context(Sequence[ContextEntry]):
    """
    Persistent naming/typing context.

    Representation:
        A cons list. ``head`` is the innermost (most recently introduced)
        entry, i.e. index 0, and ``rest`` is the context it was pushed onto.
        Extending never copies: every extension shares its tail with the
        context it came from, and a context value is never modified.

    Invariant:
        Types and terms stored in an entry are scoped in the tail beneath that
        entry. ``lookup`` shifts them by ``index + 1`` so they make sense in
        the full context.
    """

    head: ContextEntry | None = None
    rest: Context | None = None
    size: int = 0

    @staticmethod
    def empty() -> Context:
        return Context()

    @staticmethod
    def of(*entries: tuple[str, Binding]) -> Context:
        """Build a context from ``(name, binding)`` pairs, outermost first."""

        ctx = Context.empty()
        for name, binding in entries:
            ctx = ctx.add_binding(name, binding)
        return ctx

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[ContextEntry]:
        node: Context = self
        while node.head is not None:
            yield node.head
            assert node.rest is not None
            node = node.rest

    def __getitem__(self, i: int) -> ContextEntry:  # type: ignore[override]
        if not isinstance(i, int):
            raise TypeError("Context indices must be integers")
        if i < 0 or i >= self.size:
            raise IndexError(f"Context index {i} out of range for length {self.size}")
        for k, entry in enumerate(self):
            if k == i:
                return entry
        raise AssertionError("unreachable")

    def __str__(self) -> str:
        if self.size == 0:
            return "Context()"
        return f"Context(\n{"".join(f"  #{i}: {e.name} {e.binding}\n" for i, e in enumerate(self))})"

    # ---- extending the context ----
    def add_binding(self, name: str, binding: Binding) -> Context:
        return Context(ContextEntry(name, binding), self, self.size + 1)

    def add_name(self, name: str) -> Context:
        return self.add_binding(name, NameBind())

    # ---- queries ----
    def is_name_bound(self, name: str) -> bool:
        return any(entry.name == name for entry in self)

    def index_of(self, name: str) -> int | None:
        """Innermost-first position of ``name``, or ``None`` when unbound."""

        for i, entry in enumerate(self):
            if entry.name == name:
                return i
        return None

    def name_of(self, i: int) -> str:
        return self[i].name

    def lookup(self, i: int) -> Binding:
        """Return the binding at index ``i``, shifted into this context."""

        return binding_shift(self[i].binding, i + 1)


def pick_fresh_name(ctx: Context, name: str) -> tuple[Context, str]:
    """Extend ``ctx`` with a version of ``name`` no entry already uses.

    Collisions are resolved by appending ticks: ``x``, ``x'``, ``x''``...
    """

    while ctx.is_name_bound(name):
        name += "'"
    return ctx.add_name(name), name


__all__ = [
    "Binding",
    "NameBind",
    "VarBind",
    "TyVarBind",
    "TyAbbBind",
    "TmAbbBind",
    "binding_shift",
    "ContextEntry",
    "Context",
    "pick_fresh_name",
]
