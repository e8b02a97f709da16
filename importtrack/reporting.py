"""
Diagnostic sinks and the JSON contract for reported warnings.

``CollectingSink`` records warnings for one source file, ``SuppressingSink``
applies the owner/category suppression policy in front of another sink, and
``diagnostics_to_json`` / ``validate_diagnostics`` turn diagnostics into
schema-checked protocol dicts for downstream tools.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence
import logging

import jsonschema

from .config import TrackerConfig
from .positions import range_dict
from .types import CodeAction, Diagnostic, DiagnosticSink, Owner

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "1"

RANGE_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "startLine": {"type": "integer", "minimum": 1},
        "startCol": {"type": "integer", "minimum": 0},
        "endLine": {"type": "integer", "minimum": 1},
        "endCol": {"type": "integer", "minimum": 0}
    },
    "required": ["startLine", "startCol", "endLine", "endCol"],
    "additionalProperties": False,
    "description": "Line/column range (1-based lines, 0-based columns)"
}

# JSON Schema for a single reported diagnostic
DIAGNOSTIC_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "file": {
            "type": "string",
            "description": "Path of the compilation unit's source file"
        },
        "position": {
            "type": "integer",
            "minimum": 0,
            "description": "Offset of the unused selector's name"
        },
        "range": RANGE_JSON_SCHEMA,
        "message": {
            "type": "string",
            "description": "Warning text, including any deprecation addendum"
        },
        "category": {"type": "string"},
        "owner": {
            "type": ["string", "null"],
            "description": "Lexical owner used for suppression"
        },
        "origin": {
            "type": "string",
            "description": "Full selector string, e.g. scala.util.Try"
        },
        "actions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    "start": {"type": "integer", "minimum": 0},
                    "end": {"type": "integer", "minimum": 0},
                    "replacement": {"type": "string"},
                    "range": RANGE_JSON_SCHEMA
                },
                "required": ["title", "description", "start", "end", "replacement", "range"],
                "additionalProperties": False
            }
        }
    },
    "required": ["file", "position", "range", "message", "category", "origin", "actions"],
    "additionalProperties": False
}


class CollectingSink:
    """Record warnings for one source file."""

    def __init__(self, file: str = "<unknown>"):
        self.file = file
        self.diagnostics: List[Diagnostic] = []

    def warning(self, position: int, message: str, category: str, owner: Owner,
                origin: str, actions: Sequence[CodeAction]) -> None:
        self.diagnostics.append(Diagnostic(
            file=self.file,
            position=position,
            message=message,
            category=category,
            owner=owner,
            origin=origin,
            actions=tuple(actions),
        ))

    def clear(self) -> None:
        self.diagnostics = []

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)


class SuppressingSink:
    """Drop warnings whose owner or category is suppressed, forward the rest."""

    def __init__(self, delegate: DiagnosticSink, suppressed_owners: Iterable[Owner] = (),
                 disabled_categories: Iterable[str] = ()):
        self.delegate = delegate
        self.suppressed_owners = set(suppressed_owners)
        self.disabled_categories = set(disabled_categories)
        self.suppressed = 0

    @classmethod
    def from_config(cls, delegate: DiagnosticSink, config: TrackerConfig) -> "SuppressingSink":
        return cls(delegate, config.suppressed_owners, config.disabled_categories)

    def suppress_owner(self, owner: Owner) -> None:
        self.suppressed_owners.add(owner)

    def is_suppressed(self, category: str, owner: Owner) -> bool:
        if category in self.disabled_categories:
            return True
        return owner is not None and owner in self.suppressed_owners

    def warning(self, position: int, message: str, category: str, owner: Owner,
                origin: str, actions: Sequence[CodeAction]) -> None:
        if self.is_suppressed(category, owner):
            self.suppressed += 1
            logger.debug(f"Suppressed '{message}' for {origin} (owner {owner})")
            return
        self.delegate.warning(position, message, category, owner, origin, actions)


def diagnostic_to_json(diagnostic: Diagnostic, text: str) -> Dict[str, Any]:
    """Convert a diagnostic to its protocol dict."""
    owner = diagnostic.owner
    return {
        "file": diagnostic.file,
        "position": diagnostic.position,
        "range": range_dict(text, diagnostic.position, diagnostic.position),
        "message": diagnostic.message,
        "category": diagnostic.category,
        "owner": None if owner is None else str(owner),
        "origin": diagnostic.origin,
        "actions": [
            {
                "title": action.title,
                "description": action.description,
                "start": action.edit.start,
                "end": action.edit.end,
                "replacement": action.edit.replacement,
                "range": range_dict(text, action.edit.start, action.edit.end),
            }
            for action in diagnostic.actions
        ],
    }


def diagnostics_to_json(diagnostics: Iterable[Diagnostic], text: str) -> List[Dict[str, Any]]:
    """
    Convert diagnostics of one source file to protocol dicts.

    Args:
        diagnostics: Diagnostics reported for the file
        text: Source text of the file, used to compute line/column ranges

    Returns:
        List of dicts conforming to DIAGNOSTIC_JSON_SCHEMA
    """
    return [diagnostic_to_json(d, text) for d in diagnostics]


def validate_diagnostics(items: List[Dict[str, Any]]) -> List[str]:
    """
    Validate protocol dicts against the JSON schema.

    Args:
        items: List of diagnostic dicts to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    for i, item in enumerate(items):
        try:
            jsonschema.validate(item, DIAGNOSTIC_JSON_SCHEMA)
        except jsonschema.ValidationError as e:
            errors.append(f"Diagnostic {i}: {e.message}")
    return errors


def build_report(diagnostics: Iterable[Diagnostic], text: str,
                 file: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a file's diagnostics with protocol metadata."""
    items = diagnostics_to_json(diagnostics, text)
    return {
        "protocol": PROTOCOL_VERSION,
        "file": file,
        "diagnostics": items,
        "fixable": sum(1 for item in items if item["actions"]),
    }
