"""
Test support: a small scanner for Scala-style import statements and a harness
that drives the tracker the way a name-resolution pass would.
"""

import re
from typing import List, Optional, Sequence, Tuple

from importtrack import (
    ClauseArena, Clause, CollectingSink, CompilationUnit, Diagnostic, ImportTracker,
    Selector, SourceFile, Span, TrackerConfig, UnusedImportChecker, fix_source,
)

IMPORT_KEYWORD = re.compile(r"(?m)^[ \t]*(import)[ \t]+")
CLAUSE_HEAD = re.compile(
    r"(?P<path>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\.(?:(?P<brace>\{)|(?P<last>[A-Za-z_]\w*))"
)
NAME = re.compile(r"[A-Za-z_]\w*")


def _skip(text: str, pos: int, chars: str) -> int:
    while pos < len(text) and text[pos] in chars:
        pos += 1
    return pos


def _parse_braces(text: str, pos: int) -> Tuple[List[Selector], int]:
    selectors = []
    while True:
        pos = _skip(text, pos, " \t\r\n")
        m = NAME.match(text, pos)
        if m is None:
            raise ValueError(f"expected selector at {pos}")
        name = m.group(0)
        pos = _skip(text, m.end(), " \t\r\n")
        rename = None
        if text.startswith("=>", pos):
            pos = _skip(text, pos + 2, " \t\r\n")
            r = NAME.match(text, pos)
            rename = r.group(0)
            pos = _skip(text, r.end(), " \t\r\n")
        selectors.append(Selector(name, m.start(), rename, is_wildcard=(name == "_")))
        if text[pos] == ",":
            pos += 1
        elif text[pos] == "}":
            return selectors, pos + 1
        else:
            raise ValueError(f"unexpected {text[pos]!r} at {pos}")


def _parse_clause(text: str, pos: int, keyword: Optional[int],
                  arena: ClauseArena) -> Tuple[Clause, int]:
    m = CLAUSE_HEAD.match(text, pos)
    if m is None:
        raise ValueError(f"expected import clause at {pos}")
    if m.group("brace"):
        selectors, end = _parse_braces(text, m.end())
    else:
        name = m.group("last")
        selectors = [Selector(name, m.start("last"), is_wildcard=(name == "_"))]
        end = m.end()
    start = pos if keyword is None else keyword
    return arena.new_clause(m.group("path"), selectors, Span(start, pos, end)), end


def parse_imports(text: str, arena: Optional[ClauseArena] = None) -> List[List[Clause]]:
    """Scan ``text`` for import statements; one list of clauses per statement."""
    arena = arena if arena is not None else ClauseArena()
    statements = []
    for m in IMPORT_KEYWORD.finditer(text):
        pos = m.end()
        clauses: List[Clause] = []
        while True:
            clause, pos = _parse_clause(text, pos, None if clauses else m.start(1), arena)
            clauses.append(clause)
            after = _skip(text, pos, " \t")
            if after < len(text) and text[after] == ",":
                pos = _skip(text, after + 1, " \t\r\n")
                continue
            break
        statements.append(clauses)
    return statements


def imported_names(text: str) -> List[Tuple[str, List[str]]]:
    """(qualifier, selector names) for every clause found in ``text``."""
    return [
        (clause.qualifier, [s.name for s in clause.selectors])
        for statement in parse_imports(text)
        for clause in statement
    ]


class Harness:
    """One compilation unit with its tracker, checker and collecting sink."""

    def __init__(self, text: str, quickfix: bool = True, deprecations=None,
                 path: str = "Test.scala", is_foreign: bool = False,
                 config: Optional[TrackerConfig] = None, sink=None):
        self.text = text
        self.arena = ClauseArena()
        self.tracker = ImportTracker()
        self.collector = CollectingSink(path)
        self.unit = CompilationUnit(path, SourceFile(path, text), is_foreign)
        self.statements = parse_imports(text, self.arena)
        self.config = config or TrackerConfig(quickfix=quickfix)
        self.checker = UnusedImportChecker(
            self.tracker, sink or self.collector, self.config, deprecations
        )

    @property
    def clauses(self) -> List[Clause]:
        return [clause for statement in self.statements for clause in statement]

    def clause(self, qualifier: str) -> Clause:
        for clause in self.clauses:
            if clause.qualifier == qualifier:
                return clause
        raise KeyError(qualifier)

    def enter(self, clauses: Optional[Sequence[Clause]] = None, owner=None) -> None:
        """Bring clauses into scope in order, as a resolver walking the unit would."""
        visible: List[Clause] = []
        for clause in (self.clauses if clauses is None else clauses):
            visible.insert(0, clause)
            self.tracker.record_clause_entry(self.unit, clause, visible, owner)

    def selector(self, name: str, qualifier: Optional[str] = None) -> Tuple[Clause, Selector]:
        for clause in self.clauses:
            if qualifier is not None and clause.qualifier != qualifier:
                continue
            for sel in clause.selectors:
                if sel.name == name:
                    return clause, sel
        raise KeyError(name)

    def use(self, *names: str, qualifier: Optional[str] = None) -> None:
        for name in names:
            self.tracker.mark_used(*self.selector(name, qualifier))

    def run(self) -> List[Diagnostic]:
        self.checker.resolve_unit(self.unit)
        return self.collector.diagnostics

    def fixed(self) -> str:
        return fix_source(self.text, self.run())


def check(text: str, *used: str, quickfix: bool = True, **kwargs) -> Harness:
    """Enter every clause of ``text``, mark ``used`` and resolve."""
    harness = Harness(text, quickfix=quickfix, **kwargs)
    harness.enter()
    harness.use(*used)
    harness.run()
    return harness
