"""
Core types for the import tracking engine.

This module provides the clause/selector model handed over by the host
parser, the tracked-entry records, and the edit/diagnostic types the engine
emits back to the host.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Hashable, List, Optional, Protocol, Sequence, Tuple


# Type aliases for clarity
Owner = Hashable  # opaque scope id used by the host for warning filtering
TextRange = Tuple[int, int]  # (start, end) 0-based character offsets


@dataclass(frozen=True)
class Span:
    """Source range of an import clause.

    Attributes:
        start: Offset where the clause begins. For the first clause of a
            statement this is the offset of the ``import`` keyword.
        point: Offset where the dotted target begins. Differs from ``start``
            only for the clause carrying the keyword.
        end: Offset one past the last character of the clause.
    """
    start: int
    point: int
    end: int

    @property
    def has_keyword(self) -> bool:
        return self.start != self.point


@dataclass(frozen=True)
class Selector:
    """One named item imported from a clause."""
    name: str
    name_pos: int
    rename: Optional[str] = None
    is_wildcard: bool = False

    @property
    def is_exclusion(self) -> bool:
        """``x => _`` hides a name instead of importing it."""
        return self.rename == "_" and not self.is_wildcard

    @property
    def is_rename(self) -> bool:
        return self.rename is not None and self.rename != self.name

    @property
    def is_specific(self) -> bool:
        return not self.is_wildcard

    def render(self) -> str:
        """Source form of the selector as it appears inside braces."""
        if self.is_wildcard:
            return "_"
        if self.is_rename:
            return f"{self.name} => {self.rename}"
        return self.name


@dataclass(frozen=True)
class Clause:
    """One dotted import target with its selectors (``a.b.{x, y}``).

    Clauses are created by ``ClauseArena`` so that ``id`` is stable for the
    lifetime of a compilation unit; the tracker keys its maps on it.
    """
    id: int
    qualifier: str
    selectors: Tuple[Selector, ...]
    span: Optional[Span]
    qualifier_type: Any = field(default=None, compare=False, repr=False)

    def full_selector_string(self, selector: Selector) -> str:
        return self.render_with([selector])

    def render_with(self, selectors: Sequence[Selector]) -> str:
        """Render the clause (without keyword) keeping only ``selectors``."""
        if len(selectors) == 1 and not selectors[0].is_rename:
            return f"{self.qualifier}.{selectors[0].render()}"
        inner = ", ".join(s.render() for s in selectors)
        return f"{self.qualifier}.{{{inner}}}"


@dataclass(frozen=True)
class SourceFile:
    """Immutable source text of a compilation unit."""
    path: str
    content: str


@dataclass(frozen=True)
class CompilationUnit:
    """A unit handed to the resolver once its traversal has finished.

    ``is_foreign`` marks units in a host language (e.g. Java sources in a
    mixed compilation) that are excluded from analysis.
    """
    id: Hashable
    source: SourceFile
    is_foreign: bool = False


@dataclass(frozen=True)
class TrackedEntry:
    """A clause that entered scope, with the clause carrying its keyword."""
    clause: Clause
    keyword_clause: Clause
    owner: Owner = None


@dataclass(frozen=True)
class Edit:
    """A suggested edit to fix an issue."""
    start: int
    end: int
    replacement: str


@dataclass(frozen=True)
class CodeAction:
    """A titled edit attached to a diagnostic."""
    title: str
    description: str
    edit: Edit


@dataclass(frozen=True)
class Diagnostic:
    """A warning reported to a sink."""
    file: str
    position: int
    message: str
    category: str
    owner: Owner
    origin: str
    actions: Tuple[CodeAction, ...] = ()

    @property
    def edits(self) -> List[Edit]:
        return [action.edit for action in self.actions]

    def _replace(self, **kwargs):
        """Provide NamedTuple-like _replace method for compatibility."""
        return replace(self, **kwargs)


@dataclass(frozen=True)
class SymbolInfo:
    """A symbol as seen by the deprecation lookup.

    Attributes:
        kind: Symbol kind as the host prints it ("object", "class", "method", ...)
        name: Symbol name
        deprecated: Whether the symbol carries a deprecation
        message: Optional deprecation message
    """
    kind: str
    name: str
    deprecated: bool = False
    message: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.kind} {self.name}"


class DiagnosticSink(Protocol):
    """Protocol for the host's warning reporter."""

    def warning(self, position: int, message: str, category: str, owner: Owner,
                origin: str, actions: Sequence[CodeAction]) -> None:
        """Report one warning with its (possibly empty) fix actions."""
        ...


class DeprecationLookup(Protocol):
    """Protocol for the host's deprecation information."""

    def member(self, clause: Clause, name: str, is_type: bool) -> Optional[SymbolInfo]:
        """Look up the member ``name`` of the clause's qualifier.

        Args:
            clause: Clause whose qualifier type is searched
            name: Source name of the selector
            is_type: Search the type namespace instead of the term namespace
        """
        ...

    def qualifier_symbol(self, clause: Clause) -> Optional[SymbolInfo]:
        """Return the symbol of the clause's qualifier itself."""
        ...
