"""
Type conversion utilities for rendering.

This module provides the TypeConverter class that turns resolved TypeRefs
and classified methods into TypeScript text. Both renderers use it, so a
method signature reads the same in the bindings and in the documentation.
"""

from typing import Optional, Tuple

from .base import BaseRenderer
from ..model.interface import MethodDecl
from ..type_system.refs import TypeRef, Primitive, Alias, Container, ContainerKind


# Binding strength of rendered types, tightest first
SINGLE = 0
ARRAY = 1
UNION = 2


class TypeConverter(BaseRenderer):
    """
    Handles TypeRef to TypeScript conversions.

    This class provides:
    - Type rendering with precedence-aware parentheses
    - Method signatures for constructors and RPC methods
    """

    # =========================================================================
    # MAIN TYPE CONVERSION
    # =========================================================================

    def ts_type(self, ref: Optional[TypeRef]) -> str:
        """Convert a TypeRef to TypeScript type text.

        `None` (no declared return type) renders as `void`.

        Args:
            ref: The resolved type

        Returns:
            The TypeScript type string
        """
        if ref is None:
            return 'void'
        return self._ts_type_assoc(ref)[0]

    def _ts_type_assoc(self, ref: TypeRef) -> Tuple[str, int]:
        if isinstance(ref, (Primitive, Alias)):
            return ref.name, SINGLE

        if isinstance(ref, Container):
            if ref.kind == ContainerKind.OPTIONAL:
                inner = self._parenthesize(self._ts_type_assoc(ref.elements[0]), UNION)
                return f'{inner}|null', UNION
            if ref.kind == ContainerKind.SEQUENCE:
                inner = self._parenthesize(self._ts_type_assoc(ref.elements[0]), ARRAY)
                return f'{inner}[]', ARRAY
            if ref.kind == ContainerKind.MAP:
                key, value = (self.ts_type(elem) for elem in ref.elements)
                return f'Record<{key}, {value}>', SINGLE
            if ref.kind == ContainerKind.TUPLE:
                return '[' + ', '.join(self.ts_type(elem) for elem in ref.elements) + ']', SINGLE

        raise ValueError(f'Unknown type reference: {ref!r}')

    @staticmethod
    def _parenthesize(rendered: Tuple[str, int], context: int) -> str:
        text, assoc = rendered
        if assoc > context:
            return f'({text})'
        return text

    # =========================================================================
    # SIGNATURES
    # =========================================================================

    def method_signature(self, method: MethodDecl) -> str:
        """Render the TypeScript member declaration for a method.

        Constructors render as a property holding their argument object;
        other methods take a single `args` object, then `gas` and `amount`
        when the method accepts them, and return a Promise.
        """
        args = ', '.join(f'{param.name}: {self.ts_type(param.type_ref)}' for param in method.params)

        if method.is_constructor:
            if not args:
                return f'{method.name}: {{}};'
            return f'{method.name}: {{ {args} }};'

        params = []
        if args:
            params.append(f'args: {{ {args} }}')
        if method.accepts_gas:
            params.append('gas?: any')
        if method.accepts_deposit:
            params.append('amount?: any')

        return f'{method.name}({", ".join(params)}): Promise<{self.ts_type(method.returns)}>;'
