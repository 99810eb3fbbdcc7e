"""
Parser module for the Rust interface extractor.

This module provides declaration node definitions and the parser implementation.
"""

from .ast_nodes import (
    # Base
    ASTNode,
    # Types
    TypeExpr,
    PathType,
    TupleType,
    ParenType,
    OtherType,
    # Declarations
    Attribute,
    Item,
    Receiver,
    Parameter,
    FnItem,
    FieldItem,
    VariantItem,
    TypeAliasItem,
    StructItem,
    EnumItem,
    TraitItem,
    ImplItem,
    ModItem,
    # Top-level
    SourceFile,
)
from .parser import Parser

__all__ = [
    # Base
    'ASTNode',
    # Types
    'TypeExpr',
    'PathType',
    'TupleType',
    'ParenType',
    'OtherType',
    # Declarations
    'Attribute',
    'Item',
    'Receiver',
    'Parameter',
    'FnItem',
    'FieldItem',
    'VariantItem',
    'TypeAliasItem',
    'StructItem',
    'EnumItem',
    'TraitItem',
    'ImplItem',
    'ModItem',
    # Top-level
    'SourceFile',
    # Parser
    'Parser',
]
