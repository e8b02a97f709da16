"""
Fix synthesis for unused import selectors.

Given one import statement (all clauses sharing one ``import`` keyword) and the
unused selectors found in it, compute the smallest set of deletions and
replacements that removes the dead selectors while keeping the statement
syntactically valid and the surrounding formatting intact.
"""

from typing import Callable, Dict, List, Sequence, Set, Tuple

from .positions import edit_range, wrapping_range
from .types import Clause, CodeAction, Edit, Selector, TrackedEntry

FIX_TITLE = "unused import"
FIX_DESCRIPTION = "remove import"

# An unused selector together with the entry of the clause it belongs to
Culled = Tuple[Selector, TrackedEntry]
Emit = Callable[[Culled, Sequence[CodeAction]], None]


def _by_name_pos(culled: Culled) -> int:
    return culled[0].name_pos


class StatementEditor:
    """Emit warnings with fix actions for the unused selectors of a statement.

    Every unused selector gets exactly one call to ``emit``. Within a group of
    selectors that share one fix, only the last (by name position) carries the
    actions; the others are plain warnings.
    """

    def __init__(self, content: str, emit: Emit):
        self.content = content
        self.emit = emit

    def edit(self, start: int, end: int, replacement: str) -> List[CodeAction]:
        start, end = edit_range(self.content, start, end, replacement)
        return [_action(start, end, replacement)]

    def delete(self, start: int, end: int) -> List[CodeAction]:
        return self.edit(start, end, "")

    def fix_statement(self, clauses: Sequence[Clause], culled: Sequence[Culled]) -> None:
        """
        Emit every unused selector of one statement.

        Args:
            clauses: Distinct clauses of the statement, each with a span
            culled: Unused selectors of the statement with their entries
        """
        if not culled:
            return

        if len(culled) == 1 and len(clauses) == 1 and len(clauses[0].selectors) == 1:
            # import a.x
            span = clauses[0].span
            self.emit(culled[0], self.delete(span.start, span.end))
            return

        tracking: Dict[int, List[Culled]] = {}
        for item in culled:
            tracking.setdefault(item[1].clause.id, []).append(item)
        deleting: Dict[int, Set[Selector]] = {
            clause_id: {sel for sel, _ in items} for clause_id, items in tracking.items()
        }

        existing = sorted(clauses, key=lambda c: c.span.start)
        removing = {
            c.id for c in existing
            if c.id in deleting and len(c.selectors) == len(deleting[c.id])
        }

        if len(removing) == len(existing):
            self._remove_statement(existing, culled)
            return

        for i, clause in enumerate(existing):
            if clause.id in removing:
                self._remove_clause(existing, i, tracking[clause.id], removing)
            elif clause.id in deleting:
                self._update_clause(clause, i, tracking[clause.id], deleting[clause.id])

    def _emit_all_but_last(self, culled: Sequence[Culled]) -> Culled:
        ordered = sorted(culled, key=_by_name_pos)
        for item in ordered[:-1]:
            self.emit(item, [])
        return ordered[-1]

    def _remove_statement(self, existing: Sequence[Clause], culled: Sequence[Culled]) -> None:
        last = self._emit_all_but_last(culled)
        start, end = wrapping_range(c.span for c in existing)
        self.emit(last, self.delete(start, end))

    def _remove_clause(self, existing: Sequence[Clause], i: int,
                       culled: Sequence[Culled], removing: Set[int]) -> None:
        """Delete a clause whose selectors are all unused.

        ``a.x, b.{y, z}`` deletes from ``a`` to ``b``. The last clause of the
        statement also takes the comma after the nearest surviving clause.
        """
        last = self._emit_all_but_last(culled)
        span = existing[i].span
        start = span.point if i == 0 else span.start
        n = len(existing)

        if i < n - 1:
            self.emit(last, self.delete(start, existing[i + 1].span.start))
            return

        prev = max(j for j in range(n) if existing[j].id not in removing)
        prev_end = existing[prev].span.end
        comma_end = existing[prev + 1].span.start
        # Repair over the whole tail so the clause edit cannot reach back
        # over the comma edit.
        _, end = edit_range(self.content, prev_end, span.end, "")
        actions = self.delete(prev_end, comma_end) + [_action(start, end, "")]
        self.emit(last, actions)

    def _update_clause(self, clause: Clause, i: int, culled: Sequence[Culled],
                       unused: Set[Selector]) -> None:
        """Drop some selectors of a clause that keeps at least one."""
        span = clause.span
        selectors = clause.selectors
        remaining = [s for s in selectors if s not in unused]

        if len(remaining) == 1:
            # a.{x, y} -> a.y
            last = self._emit_all_but_last(culled)
            start = span.point if i == 0 else span.start
            self.emit(last, self.edit(start, span.end, clause.render_with(remaining)))
            return

        # Braces stay. Delete from a name to the next name, except for the
        # clause's last selector, which takes the comma after the previous
        # kept selector instead.
        final = selectors[-1]
        for item in sorted(culled, key=_by_name_pos):
            selector = item[0]
            if selector != final:
                index = selectors.index(selector)
                self.emit(item, self.delete(selector.name_pos, selectors[index + 1].name_pos))
            else:
                prev = max(j for j, s in enumerate(selectors) if s not in unused)
                comma = self.content.find(',', selectors[prev].name_pos)
                # span.end is one past the closing brace
                actions = (self.delete(comma, selectors[prev + 1].name_pos)
                           + self.delete(selector.name_pos, span.end - 1))
                self.emit(item, actions)


def _action(start: int, end: int, replacement: str) -> CodeAction:
    return CodeAction(FIX_TITLE, FIX_DESCRIPTION, Edit(start, end, replacement))
