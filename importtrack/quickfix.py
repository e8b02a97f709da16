"""
Apply fix actions to source text.

Edits of one run are all computed against the original text, so they are
applied together, from the end of the text towards its start.
"""

import difflib
import logging
from typing import Iterable, List, Optional

from .types import Diagnostic, Edit

logger = logging.getLogger(__name__)


class OverlappingEditsError(ValueError):
    """Two edits touch the same characters."""

    def __init__(self, first: Edit, second: Edit):
        super().__init__(
            f"edit [{second.start}, {second.end}) overlaps edit [{first.start}, {first.end})"
        )
        self.first = first
        self.second = second


def collect_edits(diagnostics: Iterable[Diagnostic]) -> List[Edit]:
    """All edits of all actions, in emission order."""
    edits = []
    for diagnostic in diagnostics:
        edits.extend(diagnostic.edits)
    return edits


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """
    Apply edits computed against ``text``.

    Args:
        text: Original text
        edits: Edits in any order; adjacent edits are allowed

    Returns:
        The edited text

    Raises:
        OverlappingEditsError: if two edits overlap
        ValueError: if an edit falls outside the text
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    previous: Optional[Edit] = None
    for edit in ordered:
        if edit.start < 0 or edit.end > len(text) or edit.start > edit.end:
            raise ValueError(f"edit [{edit.start}, {edit.end}) outside text of length {len(text)}")
        if previous is not None and edit.start < previous.end:
            raise OverlappingEditsError(previous, edit)
        previous = edit

    result = text
    for edit in reversed(ordered):
        result = result[:edit.start] + edit.replacement + result[edit.end:]
    return result


def fix_source(text: str, diagnostics: Iterable[Diagnostic]) -> str:
    """Apply every fix attached to ``diagnostics``."""
    return apply_edits(text, collect_edits(diagnostics))


def unified_diff(path: str, before: str, after: str) -> str:
    """Generate a unified diff between two versions of a file."""
    diff = difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )
    return ''.join(diff)


def apply_to_file(path: str, diagnostics: Iterable[Diagnostic], dry_run: bool = False) -> str:
    """
    Rewrite a file with the fixes attached to its diagnostics.

    Args:
        path: File to rewrite
        diagnostics: Diagnostics reported for that file
        dry_run: Compute the diff without writing

    Returns:
        Unified diff of the change (empty if nothing changed)
    """
    with open(path, 'r', encoding='utf-8', newline='') as f:
        original = f.read()

    edits = collect_edits(diagnostics)
    fixed = apply_edits(original, edits)
    if fixed == original:
        return ""

    if not dry_run:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(fixed)
        logger.info(f"Applied {len(edits)} edits to {path}")

    return unified_diff(path, original, fixed)
