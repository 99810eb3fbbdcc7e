"""
Type catalog for Rust to TypeScript conversion.

This module contains the fixed tables used by the TypeResolver: Rust
primitives, NEAR SDK wrapper types that keep their name in the output,
and the built-in container shapes. It is the single place where a Rust
type name is given meaning.
"""

from typing import Dict, List, Optional, Tuple

from .refs import ContainerKind


# =============================================================================
# TYPE MAPPING CONSTANTS
# =============================================================================

# Rust primitives and their TypeScript equivalents
RUST_TO_TS_MAP = {
    # Boolean
    'bool': 'boolean',
    # Integers and floats that fit a JSON number
    'u8': 'number',
    'u16': 'number',
    'u32': 'number',
    'u64': 'number',
    'usize': 'number',
    'i8': 'number',
    'i16': 'number',
    'i32': 'number',
    'i64': 'number',
    'isize': 'number',
    'f32': 'number',
    'f64': 'number',
    # Text
    'String': 'string',
    'char': 'string',
}

SDK_DOCS = 'https://docs.rs/near-sdk/4.0.0-pre.4/near_sdk'

# NEAR SDK types rendered by name, with their TypeScript definition and doc lines.
# Insertion order is the order of the generated prelude.
NEAR_SDK_TYPES: Dict[str, Tuple[str, List[str]]] = {
    'U64': ('string', [
        'Represents an 64 bits unsigned integer encoded as a `string`.',
        f'See {SDK_DOCS}/json_types/struct.U64.html.',
    ]),
    'I64': ('string', [
        'Represents an 64 bits signed integer encoded as a `string`.',
        f'See {SDK_DOCS}/json_types/struct.I64.html.',
    ]),
    'U128': ('string', [
        'Represents an 128 bits unsigned integer encoded as a `string`.',
        f'See {SDK_DOCS}/json_types/struct.U128.html.',
    ]),
    'I128': ('string', [
        'Represents an 128 bits signed integer encoded as a `string`.',
        f'See {SDK_DOCS}/json_types/struct.I128.html.',
    ]),
    'Base64VecU8': ('string', [
        'Represents an encoded array of bytes into a `string`.',
        f'See {SDK_DOCS}/json_types/struct.Base64VecU8.html.',
    ]),
    'Balance': ('U128', [
        'Balance is a type for storing amounts of tokens, specified in yoctoNEAR.',
        f'See {SDK_DOCS}/type.Balance.html.',
    ]),
    'AccountId': ('string', [
        'Account identifier. This is the human readable UTF8 string which is used '
        'internally to index accounts on the network and their respective state.',
        f'See {SDK_DOCS}/struct.AccountId.html.',
    ]),
    'ValidAccountId': ('string', [
        'DEPRECATED since 4.0.0.',
        f'See {SDK_DOCS}/json_types/type.ValidAccountId.html.',
    ]),
}

# The amount type: a parameter of this type marks a method as state-changing
AMOUNT_TYPE = 'Balance'

# Container name -> (shape, number of generic arguments)
CONTAINER_TYPES = {
    'Option': (ContainerKind.OPTIONAL, 1),
    'Vec': (ContainerKind.SEQUENCE, 1),
    'HashSet': (ContainerKind.SEQUENCE, 1),
    'BTreeSet': (ContainerKind.SEQUENCE, 1),
    'HashMap': (ContainerKind.MAP, 2),
    'BTreeMap': (ContainerKind.MAP, 2),
}

# Wrappers that serialize as their single argument
TRANSPARENT_TYPES = {'Box', 'PromiseOrValue'}

# 128-bit integers do not survive a JSON number; the SDK wrappers must be used
JSON_UNSAFE_TYPES = {
    'u128': 'U128',
    'i128': 'I128',
}


# =============================================================================
# CATALOG HELPERS
# =============================================================================

def wrapper_types(
    extra_types: Optional[Dict[str, Tuple[str, List[str]]]] = None,
) -> Dict[str, Tuple[str, List[str]]]:
    """
    Get the wrapper types rendered by name, including configured extras.

    Args:
        extra_types: Additional name -> (definition, doc lines) entries

    Returns:
        A new dict with the SDK types first, then the extras in their order
    """
    types = dict(NEAR_SDK_TYPES)
    if extra_types:
        types.update(extra_types)
    return types


def is_catalog_type(name: str, extra_types: Optional[Dict] = None) -> bool:
    """Check whether `name` has a fixed meaning in the catalog."""
    return (
        name in RUST_TO_TS_MAP
        or name in NEAR_SDK_TYPES
        or name in CONTAINER_TYPES
        or name in TRANSPARENT_TYPES
        or bool(extra_types and name in extra_types)
    )
