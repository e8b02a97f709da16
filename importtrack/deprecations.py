"""
Deprecation lookups used to annotate unused-import warnings.
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from .types import Clause, SymbolInfo


class NoDeprecations:
    """Lookup for hosts without deprecation information."""

    def member(self, clause: Clause, name: str, is_type: bool) -> Optional[SymbolInfo]:
        return None

    def qualifier_symbol(self, clause: Clause) -> Optional[SymbolInfo]:
        return None


class DeprecationTable:
    """Table-driven lookup keyed by the clause's qualifier text.

    Example config::

        deprecations:
          scala.collection.JavaConversions:
            symbol: {kind: object, message: "use JavaConverters"}
          scala.util:
            members:
              Sorting: {kind: object, message: "use scala.math.Ordering"}
            types:
              Sorting: {kind: class}
    """

    def __init__(self):
        self._symbols: Dict[str, SymbolInfo] = {}
        self._members: Dict[Tuple[str, str, bool], SymbolInfo] = {}

    def add_qualifier(self, qualifier: str, kind: str = "package",
                      message: Optional[str] = None, deprecated: bool = True) -> SymbolInfo:
        info = SymbolInfo(kind=kind, name=qualifier, deprecated=deprecated, message=message)
        self._symbols[qualifier] = info
        return info

    def add_member(self, qualifier: str, name: str, kind: str = "value",
                   message: Optional[str] = None, is_type: bool = False,
                   deprecated: bool = True) -> SymbolInfo:
        info = SymbolInfo(kind=kind, name=name, deprecated=deprecated, message=message)
        self._members[(qualifier, name, is_type)] = info
        return info

    def member(self, clause: Clause, name: str, is_type: bool) -> Optional[SymbolInfo]:
        return self._members.get((clause.qualifier, name, is_type))

    def qualifier_symbol(self, clause: Clause) -> Optional[SymbolInfo]:
        return self._symbols.get(clause.qualifier)

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "DeprecationTable":
        """Build a table from the ``deprecations`` section of a config."""
        table = cls()
        for qualifier, entry in (data or {}).items():
            entry = entry or {}
            symbol = entry.get("symbol")
            if symbol is not None:
                table.add_qualifier(
                    qualifier,
                    kind=symbol.get("kind", "package"),
                    message=symbol.get("message"),
                    deprecated=symbol.get("deprecated", True),
                )
            for section, is_type in (("members", False), ("types", True)):
                for name, member in (entry.get(section) or {}).items():
                    member = member or {}
                    table.add_member(
                        qualifier, name,
                        kind=member.get("kind", "class" if is_type else "value"),
                        message=member.get("message"),
                        is_type=is_type,
                        deprecated=member.get("deprecated", True),
                    )
        return table

    def __len__(self) -> int:
        return len(self._symbols) + len(self._members)
