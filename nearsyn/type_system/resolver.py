"""
Type resolution from Rust type expressions to TypeRefs.

The TypeResolver consults the catalog on the last path segment before
decomposing any generic arguments. Names outside the catalog pass
through as aliases, so a type may be used before its declaration.
"""

from typing import Dict, List, Optional, Tuple

from ..errors import UnsupportedType
from ..parser.ast_nodes import TypeExpr, PathType, TupleType, ParenType
from .mappings import (
    RUST_TO_TS_MAP,
    CONTAINER_TYPES,
    TRANSPARENT_TYPES,
    JSON_UNSAFE_TYPES,
    wrapper_types,
)
from .refs import TypeRef, Primitive, Alias, Container, ContainerKind


class TypeResolver:
    """
    Maps Rust type expressions to TypeRefs.

    The resolver holds no state besides its catalog, so the same
    expression always resolves to the same TypeRef.
    """

    def __init__(self, extra_types: Optional[Dict[str, Tuple[str, List[str]]]] = None):
        self.wrappers = wrapper_types(extra_types)

    def resolve(self, type_expr: TypeExpr, item_name: str = '', self_name: str = '') -> TypeRef:
        """
        Resolve a type expression.

        Args:
            type_expr: The unresolved type expression
            item_name: The declaring item, used in error messages
            self_name: The type `Self` refers to, if any

        Returns:
            The resolved TypeRef

        Raises:
            UnsupportedType: if the expression has no output representation
        """
        if isinstance(type_expr, PathType):
            return self._resolve_path(type_expr, item_name, self_name)
        if isinstance(type_expr, ParenType):
            return self.resolve(type_expr.inner, item_name, self_name)
        if isinstance(type_expr, TupleType):
            if not type_expr.elements:
                return Primitive('void')
            return Container(ContainerKind.TUPLE, tuple(
                self.resolve(elem, item_name, self_name) for elem in type_expr.elements
            ))
        raise UnsupportedType(str(type_expr), item_name)

    def _resolve_path(self, path: PathType, item_name: str, self_name: str) -> TypeRef:
        name = path.name
        args = path.generic_args

        if name in RUST_TO_TS_MAP:
            self._expect_no_args(path, item_name)
            return Primitive(RUST_TO_TS_MAP[name])

        if name in self.wrappers:
            self._expect_no_args(path, item_name)
            return Alias(name)

        if name in JSON_UNSAFE_TYPES:
            raise UnsupportedType(
                str(path), item_name,
                f"not representable in JSON, use {JSON_UNSAFE_TYPES[name]} instead",
            )

        if name in CONTAINER_TYPES:
            kind, arity = CONTAINER_TYPES[name]
            self._expect_args(path, arity, item_name)
            return Container(kind, tuple(
                self.resolve(arg, item_name, self_name) for arg in args
            ))

        if name in TRANSPARENT_TYPES:
            self._expect_args(path, 1, item_name)
            return self.resolve(args[0], item_name, self_name)

        if args:
            raise UnsupportedType(str(path), item_name, 'generic type parameters are not supported')

        if name == 'Self' and self_name:
            return Alias(self_name)
        return Alias(name)

    def _expect_no_args(self, path: PathType, item_name: str) -> None:
        if path.generic_args:
            raise UnsupportedType(
                str(path), item_name,
                f"{path.name} expects no generic arguments, found {len(path.generic_args)}",
            )

    def _expect_args(self, path: PathType, arity: int, item_name: str) -> None:
        if not path.generic_args:
            raise UnsupportedType(str(path), item_name, f"{path.name} used with no generic arguments")
        if len(path.generic_args) != arity:
            raise UnsupportedType(
                str(path), item_name,
                f"{path.name} expects {arity} generic(s) argument(s), "
                f"found {len(path.generic_args)}",
            )
