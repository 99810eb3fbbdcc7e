"""
Types module for the Rust interface extractor.

This module provides the type catalog, the resolver, and the registry
of declared names.
"""

from .refs import (
    TypeRef,
    Primitive,
    Alias,
    Container,
    ContainerKind,
    alias_names,
)
from .mappings import (
    RUST_TO_TS_MAP,
    NEAR_SDK_TYPES,
    CONTAINER_TYPES,
    TRANSPARENT_TYPES,
    JSON_UNSAFE_TYPES,
    AMOUNT_TYPE,
    wrapper_types,
    is_catalog_type,
)
from .resolver import TypeResolver
from .registry import TypeRegistry

__all__ = [
    'TypeRef',
    'Primitive',
    'Alias',
    'Container',
    'ContainerKind',
    'alias_names',
    'RUST_TO_TS_MAP',
    'NEAR_SDK_TYPES',
    'CONTAINER_TYPES',
    'TRANSPARENT_TYPES',
    'JSON_UNSAFE_TYPES',
    'AMOUNT_TYPE',
    'wrapper_types',
    'is_catalog_type',
    'TypeResolver',
    'TypeRegistry',
]
