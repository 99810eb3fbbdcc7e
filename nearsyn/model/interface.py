"""
Interface Model definitions.

These frozen dataclasses describe the public surface of a contract once
all declaration fragments have been merged. They are produced by the
ModelBuilder and read by both renderers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from ..type_system.refs import TypeRef
from .docs import DocBlock


class MethodKind(Enum):
    """Semantic kind of an exported method."""
    CONSTRUCTOR = 'constructor'
    VIEW = 'view'
    CALL = 'call'


# Documentation badges per method kind
BADGES = {
    MethodKind.CONSTRUCTOR: ':rocket:',
    MethodKind.VIEW: ':eyeglasses:',
    MethodKind.CALL: ':writing_hand:',
}
PAYABLE_BADGE = '&#x24C3;'


# =============================================================================
# TYPE DECLARATIONS
# =============================================================================

@dataclass(frozen=True)
class TypeAliasDecl:
    """A named alias of another type."""
    name: str
    target: TypeRef
    doc: DocBlock = field(default_factory=DocBlock)

    kind = 'alias'


@dataclass(frozen=True)
class FieldDecl:
    name: str
    type_ref: TypeRef
    doc: DocBlock = field(default_factory=DocBlock)


@dataclass(frozen=True)
class RecordDecl:
    """A struct with named fields, in declaration order."""
    name: str
    fields: Tuple[FieldDecl, ...] = ()
    doc: DocBlock = field(default_factory=DocBlock)

    kind = 'record'


@dataclass(frozen=True)
class VariantDecl:
    name: str
    doc: DocBlock = field(default_factory=DocBlock)


@dataclass(frozen=True)
class EnumDecl:
    """An enum whose variants render by name, in declaration order."""
    name: str
    variants: Tuple[VariantDecl, ...] = ()
    doc: DocBlock = field(default_factory=DocBlock)

    kind = 'enum'


# =============================================================================
# INTERFACES
# =============================================================================

@dataclass(frozen=True)
class ParamDecl:
    name: str
    type_ref: TypeRef


@dataclass(frozen=True)
class MethodDecl:
    """An exported contract method after classification."""
    name: str
    kind: MethodKind
    params: Tuple[ParamDecl, ...] = ()
    returns: Optional[TypeRef] = None
    accepts_deposit: bool = False
    accepts_gas: bool = False
    doc: DocBlock = field(default_factory=DocBlock)

    @property
    def badge(self) -> str:
        if self.kind == MethodKind.CALL and self.accepts_deposit:
            return PAYABLE_BADGE
        return BADGES[self.kind]

    @property
    def is_constructor(self) -> bool:
        return self.kind == MethodKind.CONSTRUCTOR


@dataclass(frozen=True)
class InterfaceDecl:
    """
    A merged interface: the methods of every fragment sharing its name.

    `methods` holds unique names in first-seen order. `is_trait` marks
    interfaces named after an implemented trait.
    """
    name: str
    methods: Tuple[MethodDecl, ...] = ()
    extends: Tuple[str, ...] = ()
    doc: DocBlock = field(default_factory=DocBlock)
    is_trait: bool = False

    kind = 'interface'

    def method(self, name: str) -> Optional[MethodDecl]:
        for method in self.methods:
            if method.name == name:
                return method
        return None

    @property
    def method_names(self) -> Tuple[str, ...]:
        return tuple(method.name for method in self.methods)


Declaration = Union[TypeAliasDecl, RecordDecl, EnumDecl, InterfaceDecl]


@dataclass(frozen=True)
class InterfaceModel:
    """
    The merged public surface of a contract.

    `items` are in first-seen order by name. The model is never mutated
    after the builder returns it.
    """
    items: Tuple[Declaration, ...] = ()
    contract_name: str = ''
    doc: DocBlock = field(default_factory=DocBlock)

    def get(self, name: str) -> Optional[Declaration]:
        for item in self.items:
            if item.name == name:
                return item
        return None

    @property
    def interfaces(self) -> Tuple[InterfaceDecl, ...]:
        return tuple(item for item in self.items if isinstance(item, InterfaceDecl))

    def methods_of_kind(self, kind: MethodKind) -> Tuple[str, ...]:
        """Names of all methods with the given kind, in model order."""
        return tuple(
            method.name
            for interface in self.interfaces
            for method in interface.methods
            if method.kind == kind
        )

    @property
    def view_methods(self) -> Tuple[str, ...]:
        return self.methods_of_kind(MethodKind.VIEW)

    @property
    def change_methods(self) -> Tuple[str, ...]:
        return self.methods_of_kind(MethodKind.CALL)
