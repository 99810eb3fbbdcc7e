"""
Exceptions raised while extracting a contract interface.

UnsupportedType and DuplicateIncompatibleDecl abort the whole run.
MalformedDocBlock is raised and recovered inside the doc extractor.
"""


class NearSynError(Exception):
    """Base class for all interface extraction errors."""
    pass


class UnsupportedType(NearSynError):
    """A type expression has no mapping in the output vocabulary."""

    def __init__(self, type_expr: str, item_name: str = '', reason: str = ''):
        self.type_expr = type_expr
        self.item_name = item_name
        self.reason = reason
        message = f"unsupported type `{type_expr}`"
        if item_name:
            message += f" in `{item_name}`"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DuplicateIncompatibleDecl(NearSynError):
    """Two declarations share a name but cannot be merged."""

    def __init__(self, name: str, existing_kind: str, new_kind: str):
        self.name = name
        self.existing_kind = existing_kind
        self.new_kind = new_kind
        if existing_kind == new_kind:
            message = f"duplicate {new_kind} `{name}`"
        else:
            message = f"`{name}` declared as both {existing_kind} and {new_kind}"
        super().__init__(message)


class MalformedDocBlock(NearSynError):
    """Inconsistent code fence nesting inside a doc comment."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"malformed doc block: {reason}")
