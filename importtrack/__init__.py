"""
Unused import tracking and fixing for a compiler front end.

The host's name-resolution pass records clause entries and selector usages on
an ``ImportTracker``; once a unit is done, ``UnusedImportChecker.resolve_unit``
reports every unused selector, optionally with fix actions.
"""

from .types import (
    Span, Selector, Clause, SourceFile, CompilationUnit, TrackedEntry,
    Edit, CodeAction, Diagnostic, SymbolInfo, DiagnosticSink, DeprecationLookup,
)

from .tracking import ClauseArena, ImportTracker, keyword_clause_of

from .resolver import UnusedImportChecker, UNUSED_IMPORT

from .edits import StatementEditor, FIX_TITLE, FIX_DESCRIPTION

from .deprecations import NoDeprecations, DeprecationTable

from .reporting import (
    CollectingSink, SuppressingSink, diagnostics_to_json, validate_diagnostics, build_report
)

from .quickfix import OverlappingEditsError, apply_edits, collect_edits, fix_source, apply_to_file

from .config import (
    TrackerConfig, ConfigError, load_config, get_default_config, save_config, find_config_file
)

__all__ = [
    # Types
    "Span", "Selector", "Clause", "SourceFile", "CompilationUnit", "TrackedEntry",
    "Edit", "CodeAction", "Diagnostic", "SymbolInfo", "DiagnosticSink", "DeprecationLookup",

    # Tracking and resolution
    "ClauseArena", "ImportTracker", "keyword_clause_of",
    "UnusedImportChecker", "UNUSED_IMPORT",
    "StatementEditor", "FIX_TITLE", "FIX_DESCRIPTION",
    "NoDeprecations", "DeprecationTable",

    # Reporting and fixes
    "CollectingSink", "SuppressingSink", "diagnostics_to_json", "validate_diagnostics", "build_report",
    "OverlappingEditsError", "apply_edits", "collect_edits", "fix_source", "apply_to_file",

    # Config
    "TrackerConfig", "ConfigError", "load_config", "get_default_config", "save_config", "find_config_file"
]
