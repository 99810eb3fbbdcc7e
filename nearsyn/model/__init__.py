"""
Model module for the Rust interface extractor.

This module provides the Interface Model, doc extraction, method
classification, and the builder that ties them together.
"""

from .docs import DocBlock, DocExtractor, normalize_doc_lines
from .interface import (
    MethodKind,
    BADGES,
    PAYABLE_BADGE,
    Declaration,
    TypeAliasDecl,
    FieldDecl,
    RecordDecl,
    VariantDecl,
    EnumDecl,
    ParamDecl,
    MethodDecl,
    InterfaceDecl,
    InterfaceModel,
)
from .classifier import MethodClassifier
from .builder import ModelBuilder

__all__ = [
    'DocBlock',
    'DocExtractor',
    'normalize_doc_lines',
    'MethodKind',
    'BADGES',
    'PAYABLE_BADGE',
    'Declaration',
    'TypeAliasDecl',
    'FieldDecl',
    'RecordDecl',
    'VariantDecl',
    'EnumDecl',
    'ParamDecl',
    'MethodDecl',
    'InterfaceDecl',
    'InterfaceModel',
    'MethodClassifier',
    'ModelBuilder',
]
