"""
NEAR contract interface extractor

This package reads the Rust sources of a NEAR smart contract and renders
its public interface as TypeScript bindings and Markdown documentation.

Module Structure:
- lexer/: Tokenization (TokenType, Token, Lexer)
- parser/: Declaration nodes and parsing (Parser, all node types)
- type_system/: Type catalog, TypeResolver, TypeRegistry
- model/: Interface Model, DocExtractor, MethodClassifier, ModelBuilder
- codegen/: GeneratorConfig, diagnostics, TsRenderer, DocRenderer
- nearsyn.py: Orchestrator and command line interface

Usage:
    from nearsyn import NearSynGenerator

    generator = NearSynGenerator()
    generator.add_file('src/lib.rs')
    print(generator.generate_ts())
"""

__version__ = '0.1.0'

# Re-export main classes for convenience
from .nearsyn import (
    NearSynGenerator,
    main,
)
from .errors import (
    NearSynError,
    UnsupportedType,
    DuplicateIncompatibleDecl,
    MalformedDocBlock,
)

__all__ = [
    '__version__',
    'NearSynGenerator',
    'main',
    'NearSynError',
    'UnsupportedType',
    'DuplicateIncompatibleDecl',
    'MalformedDocBlock',
]
