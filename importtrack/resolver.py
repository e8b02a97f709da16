"""
Unused import resolution for a finished compilation unit.

``UnusedImportChecker.resolve_unit`` drains everything the tracker recorded
for a unit, works out which selectors were never used, and reports them to
the diagnostic sink, with fix actions when quick fixes are enabled.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .config import TrackerConfig
from .deprecations import DeprecationTable, NoDeprecations
from .edits import Culled, StatementEditor
from .tracking import ImportTracker
from .types import (
    Clause, CodeAction, CompilationUnit, DeprecationLookup, DiagnosticSink,
    Selector, SymbolInfo, TrackedEntry,
)

logger = logging.getLogger(__name__)

UNUSED_IMPORT = "Unused import"


class UnusedImportChecker:
    """Report unused import selectors once a unit's traversal is complete."""

    def __init__(self, tracker: ImportTracker, sink: DiagnosticSink,
                 config: Optional[TrackerConfig] = None,
                 deprecations: Optional[DeprecationLookup] = None):
        self.tracker = tracker
        self.sink = sink
        self.config = config or TrackerConfig()
        if deprecations is None and self.config.deprecations:
            deprecations = DeprecationTable.from_config(self.config.deprecations)
        self.deprecations = deprecations if deprecations is not None else NoDeprecations()

    def resolve_unit(self, unit: CompilationUnit) -> int:
        """
        Report the unused selectors of ``unit``.

        Args:
            unit: Compilation unit whose traversal has finished

        Returns:
            Number of warnings emitted
        """
        if unit.is_foreign:
            self.tracker.discard_unit(unit)
            return 0

        entries = self._coalesce(self.tracker.drain_unit(unit))
        if not entries:
            return 0

        unused = self.collect_unused(entries)
        logger.debug(f"{unit.id}: {len(entries)} clauses tracked, {len(unused)} unused selectors")
        if not unused:
            return 0

        emitted = []

        def emit(culled: Culled, actions: Sequence[CodeAction]) -> None:
            self._emit(culled, actions)
            emitted.append(culled)

        if self.config.emit_fixes:
            editor = StatementEditor(unit.source.content, emit)
            statements: Dict[int, List[Clause]] = {}
            for entry in entries:
                statements.setdefault(entry.keyword_clause.id, []).append(entry.clause)
            for keyword_id, culled in _group_by_statement(unused).items():
                editor.fix_statement(statements[keyword_id], culled)
        else:
            for culled in unused:
                emit(culled, [])

        return len(emitted)

    def collect_unused(self, entries: Sequence[TrackedEntry]) -> List[Culled]:
        """Drain the used sets of ``entries`` and list what was never used.

        The result is stable-sorted by clause start only; selectors keep their
        order within the clause.
        """
        unused: List[Culled] = []
        for entry in entries:
            used = self.tracker.drain_used(entry.clause)
            for selector in entry.clause.selectors:
                if not selector.is_exclusion and selector not in used:
                    unused.append((selector, entry))
        unused.sort(key=lambda culled: culled[1].clause.span.start)
        return unused

    def deprecation_addendum(self, selector: Selector, clause: Clause) -> str:
        """Describe a deprecated member or qualifier the selector goes through."""
        if not selector.is_exclusion and selector.is_specific:
            for is_type in (False, True):
                member = self.deprecations.member(clause, selector.name, is_type)
                if member is not None and member.deprecated:
                    return f" of deprecated {member}{_message(member)}"

        symbol = self.deprecations.qualifier_symbol(clause)
        if symbol is not None and symbol.deprecated:
            return f" from deprecated {symbol}{_message(symbol)}"
        return ""

    def _coalesce(self, entries: Sequence[TrackedEntry]) -> List[TrackedEntry]:
        """Keep the first entry per clause; drop clauses without a position."""
        seen = set()
        result = []
        for entry in entries:
            clause = entry.clause
            if clause.id in seen:
                continue
            seen.add(clause.id)
            if clause.span is None:
                logger.debug(f"Skipping clause {clause.qualifier} (#{clause.id}) without position")
                self.tracker.drain_used(clause)
                continue
            result.append(entry)
        return result

    def _emit(self, culled: Culled, actions: Sequence[CodeAction]) -> None:
        selector, entry = culled
        addendum = self.deprecation_addendum(selector, entry.clause)
        self.sink.warning(
            selector.name_pos,
            f"{UNUSED_IMPORT}{addendum}",
            self.config.category,
            entry.owner,
            entry.clause.full_selector_string(selector),
            list(actions),
        )


def _message(symbol: SymbolInfo) -> str:
    return f": {symbol.message}" if symbol.message else ""


def _group_by_statement(unused: Sequence[Culled]) -> Dict[int, List[Culled]]:
    """Group by keyword clause, in order of first appearance."""
    groups: Dict[int, List[Culled]] = {}
    for culled in unused:
        groups.setdefault(culled[1].keyword_clause.id, []).append(culled)
    return groups
