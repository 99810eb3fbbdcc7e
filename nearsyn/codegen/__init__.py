"""
Code generation module for the Rust interface extractor.

This module provides TypeScript and Markdown rendering of an InterfaceModel.
"""

from .diagnostics import GeneratorDiagnostics, Diagnostic, DiagnosticSeverity
from .context import GeneratorConfig
from .base import BaseRenderer
from .type_converter import TypeConverter
from .typescript import TsRenderer
from .markdown import DocRenderer

__all__ = [
    'GeneratorDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
    'GeneratorConfig',
    'BaseRenderer',
    'TypeConverter',
    'TsRenderer',
    'DocRenderer',
]
