"""
Resolved type references.

A TypeRef is the output-side view of a Rust type expression: a
primitive, a named alias, or a container over other TypeRefs. TypeRefs
are immutable and hashable so that model declarations built from them
can be shared between renderers.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Tuple


class ContainerKind(Enum):
    """Shapes of built-in containers."""
    OPTIONAL = auto()
    SEQUENCE = auto()
    TUPLE = auto()
    MAP = auto()


@dataclass(frozen=True)
class TypeRef:
    """Base class for resolved type references."""
    pass


@dataclass(frozen=True)
class Primitive(TypeRef):
    """A primitive of the output vocabulary (`boolean`, `number`, `string`, `void`, `null`)."""
    name: str


@dataclass(frozen=True)
class Alias(TypeRef):
    """A named type rendered by name: catalog wrappers, local declarations, or pass-through names."""
    name: str


@dataclass(frozen=True)
class Container(TypeRef):
    """A container over element types; MAP holds (key, value)."""
    kind: ContainerKind
    elements: Tuple[TypeRef, ...]


def alias_names(ref: TypeRef) -> Iterator[str]:
    """Yield every alias name referenced by `ref`, depth first."""
    if isinstance(ref, Alias):
        yield ref.name
    elif isinstance(ref, Container):
        for element in ref.elements:
            yield from alias_names(element)
