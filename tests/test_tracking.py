"""
Tests for the clause arena and the usage/context recorders.
"""

from importtrack import (
    ClauseArena, CompilationUnit, ImportTracker, Selector, SourceFile, Span, keyword_clause_of,
)

from helpers import Harness, parse_imports


def _unit(name="A.scala", text=""):
    return CompilationUnit(name, SourceFile(name, text))


def test_arena_ids_are_stable_and_sequential():
    arena = ClauseArena()
    first = arena.new_clause("a", [Selector("x", 9)], Span(0, 7, 10))
    second = arena.new_clause("b", [Selector("y", 9)], Span(0, 7, 10))
    assert (first.id, second.id) == (0, 1)
    assert arena.get(1) is second
    assert len(arena) == 2
    assert list(arena) == [first, second]


def test_scanner_positions():
    [[a, b]] = parse_imports("import a.x, b.{y, z => w}\n")
    assert a.span == Span(0, 7, 10)
    assert b.span == Span(12, 12, 25)
    assert [s.name_pos for s in b.selectors] == [15, 18]
    assert b.selectors[1].rename == "w"


def test_keyword_clause_is_itself_when_it_carries_keyword():
    [[a, b]] = parse_imports("import a.x, b.y\n")
    assert keyword_clause_of(a, [a]) is a


def test_keyword_clause_found_among_visible():
    [[a, b]] = parse_imports("import a.x, b.y\n")
    assert keyword_clause_of(b, [b, a]) is a


def test_keyword_clause_is_nearest_statement_start():
    [[a], [b, c]] = parse_imports("import a.x\nimport b.y, c.z\n")
    assert keyword_clause_of(c, [c, b, a]) is b


def test_keyword_clause_skips_clauses_without_position():
    [[a, b]] = parse_imports("import a.x, b.y\n")
    arena = ClauseArena()
    synthetic = arena.new_clause("scala", [Selector("_", 0, is_wildcard=True)], None)
    assert keyword_clause_of(b, [b, synthetic, a]) is a


def test_keyword_clause_falls_back_to_itself():
    [[a, b]] = parse_imports("import a.x, b.y\n")
    assert keyword_clause_of(b, [b]) is b


def test_record_prepends_entries():
    h = Harness("import a.x, b.y\n")
    h.enter(owner="A")
    entries = h.tracker.drain_unit(h.unit)
    assert [e.clause.qualifier for e in entries] == ["b", "a"]
    assert all(e.keyword_clause.qualifier == "a" for e in entries)
    assert all(e.owner == "A" for e in entries)


def test_drain_unit_removes_entries_once():
    h = Harness("import a.x\n")
    h.enter()
    assert h.tracker.pending_units() == [h.unit.id]
    assert len(h.tracker.drain_unit(h.unit)) == 1
    assert h.tracker.drain_unit(h.unit) == []
    assert h.tracker.pending_units() == []


def test_mark_used_and_drain_used():
    tracker = ImportTracker()
    [[clause]] = parse_imports("import a.{x, y}\n")
    x, y = clause.selectors
    tracker.mark_used(clause, x)
    tracker.mark_used(clause, x)
    tracker.mark_used(clause, y)
    assert tracker.used_count() == 2
    assert tracker.drain_used(clause) == {x, y}
    assert tracker.drain_used(clause) == set()


def test_units_are_kept_apart():
    tracker = ImportTracker()
    [[a]] = parse_imports("import a.x\n")
    first, second = _unit("A.scala"), _unit("B.scala")
    tracker.record_clause_entry(first, a, [a])
    tracker.record_clause_entry(second, a, [a])
    assert len(tracker.drain_unit(first)) == 1
    assert tracker.pending_units() == ["B.scala"]


def test_discard_unit_drops_usage():
    h = Harness("import a.{x, y}\n")
    h.enter()
    h.use("x")
    h.tracker.discard_unit(h.unit)
    assert h.tracker.used_count() == 0
    assert h.tracker.pending_units() == []
