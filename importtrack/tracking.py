"""
Usage and context recording for import clauses.

The host's name-resolution pass feeds an ``ImportTracker`` while it traverses a
compilation unit: one ``record_clause_entry`` call whenever an import clause
comes into scope and one ``mark_used`` call whenever a name resolves through a
clause. Both maps are drained by the resolver once the unit is done.
"""

import logging
from collections import deque
from typing import Deque, Dict, Hashable, Iterable, List, Optional, Sequence, Set

from .types import Clause, CompilationUnit, Owner, Selector, Span, TrackedEntry

logger = logging.getLogger(__name__)


class ClauseArena:
    """Hands out clauses with stable integer ids."""

    def __init__(self):
        self._clauses: List[Clause] = []

    def new_clause(self, qualifier: str, selectors: Iterable[Selector],
                   span: Optional[Span], qualifier_type=None) -> Clause:
        clause = Clause(
            id=len(self._clauses),
            qualifier=qualifier,
            selectors=tuple(selectors),
            span=span,
            qualifier_type=qualifier_type,
        )
        self._clauses.append(clause)
        return clause

    def get(self, clause_id: int) -> Clause:
        return self._clauses[clause_id]

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self):
        return iter(self._clauses)


class ImportTracker:
    """Run-scoped record of clause entries and selector usages.

    Create one per compilation run and drop it when the run ends. Not safe for
    concurrent use from several units at once.
    """

    def __init__(self):
        self._used: Dict[int, Set[Selector]] = {}
        self._entries: Dict[Hashable, Deque[TrackedEntry]] = {}

    # === Usage Recorder ===

    def mark_used(self, clause: Clause, selector: Selector) -> None:
        """Record that a name resolved through ``clause`` via ``selector``."""
        used = self._used.get(clause.id)
        if used is None:
            self._used[clause.id] = {selector}
        else:
            used.add(selector)

    def drain_used(self, clause: Clause) -> Set[Selector]:
        """Remove and return the used selectors of ``clause`` (empty if none)."""
        return self._used.pop(clause.id, set())

    # === Context Recorder ===

    def record_clause_entry(self, unit: CompilationUnit, clause: Clause,
                            visible: Sequence[Clause], owner: Owner = None) -> TrackedEntry:
        """
        Record that ``clause`` entered scope in ``unit``.

        Args:
            unit: Compilation unit being traversed
            clause: Clause that just came into scope
            visible: Clauses currently in scope, most recent first
            owner: Lexical owner, passed through to warning filtering

        Returns:
            The recorded entry
        """
        entry = TrackedEntry(clause, keyword_clause_of(clause, visible), owner)
        self._entries.setdefault(unit.id, deque()).appendleft(entry)
        logger.debug(f"Recorded clause {clause.qualifier} (#{clause.id}) in {unit.id}, "
                     f"keyword clause #{entry.keyword_clause.id}")
        return entry

    def drain_unit(self, unit: CompilationUnit) -> List[TrackedEntry]:
        """Remove and return the unit's entries, most recent first."""
        return list(self._entries.pop(unit.id, ()))

    def discard_unit(self, unit: CompilationUnit) -> None:
        """Drop a unit's entries and the used sets of their clauses."""
        for entry in self.drain_unit(unit):
            self._used.pop(entry.clause.id, None)

    def pending_units(self) -> List[Hashable]:
        """Units with entries that have not been drained yet."""
        return list(self._entries)

    def used_count(self) -> int:
        return sum(len(sels) for sels in self._used.values())


def keyword_clause_of(clause: Clause, visible: Sequence[Clause]) -> Clause:
    """Find the clause that carries the ``import`` keyword for ``clause``.

    ``import a.x, b.y`` yields ``a`` for both clauses: only the first clause's
    span covers the keyword.
    """
    if clause.span is not None and clause.span.has_keyword:
        return clause
    for other in visible:
        if other.span is not None and other.span.has_keyword:
            return other
    return clause
