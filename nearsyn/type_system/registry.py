"""
Type registry for declared and referenced names.

The TypeRegistry records every name the analyzed sources declare, with
its declaration kind, and every alias name a resolved type refers to.
Unresolved references are only checked once all sources are consumed,
so declaration order across files does not matter.
"""

from typing import Dict, List, Optional, Tuple

from ..errors import DuplicateIncompatibleDecl
from .mappings import is_catalog_type
from .refs import TypeRef, alias_names


# Kinds that may be declared repeatedly and merged
MERGEABLE_KINDS = {'interface'}


class TypeRegistry:
    """
    Registry of declared names and outstanding type references.

    Tracks:
    - Declared names and their kinds (alias, record, enum, interface)
    - Alias references, with the first item that used each name
    """

    def __init__(self, extra_types: Optional[Dict] = None):
        self.declared: Dict[str, str] = {}
        self.references: Dict[str, str] = {}
        self.extra_types = extra_types or {}

    def declare(self, name: str, kind: str) -> bool:
        """
        Register a declaration.

        Args:
            name: The declared name
            kind: The declaration kind

        Returns:
            True if the name is new, False if it merges into an existing interface

        Raises:
            DuplicateIncompatibleDecl: if the name exists and the two cannot merge
        """
        existing = self.declared.get(name)
        if existing is None:
            self.declared[name] = kind
            return True
        if existing == kind and kind in MERGEABLE_KINDS:
            return False
        raise DuplicateIncompatibleDecl(name, existing, kind)

    def record_references(self, ref: TypeRef, item_name: str) -> None:
        """Remember the alias names used by `ref`, keyed to the first user."""
        for name in alias_names(ref):
            self.references.setdefault(name, item_name)

    def unresolved(self) -> List[Tuple[str, str]]:
        """Get (name, first user) for references that nothing declares, in first-use order."""
        return [
            (name, item_name)
            for name, item_name in self.references.items()
            if name not in self.declared and not is_catalog_type(name, self.extra_types)
        ]
