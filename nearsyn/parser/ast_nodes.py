"""
AST node definitions for Rust declaration parsing.

This module contains the dataclasses representing the declaration
nodes produced by the Rust parser. Only item-level structure is kept:
function bodies and expressions are never represented.
"""

from dataclasses import dataclass, field
from typing import Optional, List


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    pass


# =============================================================================
# TYPE EXPRESSIONS
# =============================================================================

@dataclass
class TypeExpr(ASTNode):
    """Base class for all unresolved type expressions."""
    pass


@dataclass
class PathType(TypeExpr):
    """A path type with optional generic arguments (e.g., `Option<U64>`)."""
    segments: List[str]
    generic_args: List[TypeExpr] = field(default_factory=list)

    @property
    def name(self) -> str:
        """The last path segment, which is what the type catalog matches on."""
        return self.segments[-1]

    def __str__(self) -> str:
        text = '::'.join(self.segments)
        if self.generic_args:
            text += '<' + ', '.join(str(arg) for arg in self.generic_args) + '>'
        return text


@dataclass
class TupleType(TypeExpr):
    """A tuple type; an empty tuple is the unit type `()`."""
    elements: List[TypeExpr] = field(default_factory=list)

    def __str__(self) -> str:
        return '(' + ', '.join(str(elem) for elem in self.elements) + ')'


@dataclass
class ParenType(TypeExpr):
    """A parenthesized type (e.g., `(U64)`)."""
    inner: TypeExpr

    def __str__(self) -> str:
        return f'({self.inner})'


@dataclass
class OtherType(TypeExpr):
    """Any type form outside the supported vocabulary (references, arrays, ...)."""
    text: str

    def __str__(self) -> str:
        return self.text


# =============================================================================
# ATTRIBUTES
# =============================================================================

@dataclass
class Attribute(ASTNode):
    """Represents an outer attribute such as `#[derive(Serialize)]`."""
    path: str
    args: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.split('::')[-1]


# =============================================================================
# DECLARATION NODES
# =============================================================================

@dataclass
class Item(ASTNode):
    """Base class for declarations that carry attributes and a doc span."""
    name: str
    attributes: List[Attribute] = field(default_factory=list)
    doc_span: List[str] = field(default_factory=list)
    line: int = 0

    def has_attribute(self, name: str) -> bool:
        """Check whether an attribute with the given name is present."""
        return any(attr.name == name for attr in self.attributes)

    def derives(self, macro_name: str) -> bool:
        """Check whether any `derive(...)` attribute lists `macro_name`."""
        for attr in self.attributes:
            if attr.name != 'derive':
                continue
            for arg in attr.args:
                if arg.split('::')[-1].strip() == macro_name:
                    return True
        return False

    @property
    def is_serde(self) -> bool:
        return self.derives('Serialize') or self.derives('Deserialize')


@dataclass
class Receiver(ASTNode):
    """The `self` parameter of a method."""
    is_reference: bool = True
    is_mutable: bool = False


@dataclass
class Parameter(ASTNode):
    """A typed function parameter."""
    name: str
    type_expr: TypeExpr


@dataclass
class FnItem(Item):
    """A function or method signature."""
    receiver: Optional[Receiver] = None
    parameters: List[Parameter] = field(default_factory=list)
    return_type: Optional[TypeExpr] = None
    is_public: bool = False  # plain `pub` only, not `pub(crate)`
    generics: List[str] = field(default_factory=list)


@dataclass
class FieldItem(Item):
    """A named struct field."""
    type_expr: Optional[TypeExpr] = None


@dataclass
class VariantItem(Item):
    """An enum variant; payload-carrying variants record their payload style."""
    payload: str = ''  # '', 'tuple', 'struct'


@dataclass
class TypeAliasItem(Item):
    """Represents `type Name = Type;`."""
    target: Optional[TypeExpr] = None
    generics: List[str] = field(default_factory=list)


@dataclass
class StructItem(Item):
    """Represents a struct definition."""
    style: str = 'named'  # 'named', 'tuple', 'unit'
    fields: List[FieldItem] = field(default_factory=list)
    tuple_fields: List[TypeExpr] = field(default_factory=list)
    generics: List[str] = field(default_factory=list)


@dataclass
class EnumItem(Item):
    """Represents an enum definition."""
    variants: List[VariantItem] = field(default_factory=list)
    generics: List[str] = field(default_factory=list)


@dataclass
class TraitItem(Item):
    """Represents a trait definition, used as a forward declaration."""
    supertraits: List[str] = field(default_factory=list)
    methods: List[FnItem] = field(default_factory=list)


@dataclass
class ImplItem(Item):
    """Represents an `impl Type` or `impl Trait for Type` block.

    `name` holds the self type's name, or an empty string when the
    self type is not a plain path.
    """
    self_type: Optional[TypeExpr] = None
    trait_name: Optional[str] = None
    methods: List[FnItem] = field(default_factory=list)


@dataclass
class ModItem(Item):
    """Represents an inline module; `items` is empty for `mod name;`."""
    items: List[Item] = field(default_factory=list)


@dataclass
class SourceFile(ASTNode):
    """Root node representing an entire Rust source file."""
    items: List[Item] = field(default_factory=list)
    inner_doc_span: List[str] = field(default_factory=list)
    path: str = ''
