#!/usr/bin/env python3
"""
NEAR contract interface extractor

Reads the Rust sources of a NEAR smart contract and renders its public
interface either as TypeScript bindings or as Markdown documentation.
Both outputs are rendered from the same InterfaceModel, so they always
agree on method kinds, argument shapes, and doc comments.

Usage:
    nearsyn ts src/lib.rs > contract.ts
    nearsyn md src/lib.rs src/ft.rs > README.md

The pipeline is split into packages:
- lexer: Tokenization (tokens.py, lexer.py)
- parser: Declaration nodes and parsing (ast_nodes.py, parser.py)
- type_system: Type catalog, resolver, and registry
- model: Interface Model, doc extraction, classification, builder
- codegen: TypeScript and Markdown renderers
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, List

from . import __version__
from .lexer import Lexer
from .parser import Parser, SourceFile
from .type_system import TypeResolver
from .model import ModelBuilder, InterfaceModel
from .codegen import GeneratorConfig, GeneratorDiagnostics, TsRenderer, DocRenderer
from .errors import NearSynError


class NearSynGenerator:
    """Main generator class that orchestrates parsing, model building, and rendering."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.diagnostics = GeneratorDiagnostics(verbose=self.config.verbose)
        self.sources: List[SourceFile] = []

    def add_source(self, source: str, path: str = '') -> SourceFile:
        """Parse Rust source text and queue it for the model."""
        lexer = Lexer(source)
        tokens = lexer.tokenize()

        parser = Parser(tokens, source)
        unit = parser.parse()
        unit.path = path

        self.sources.append(unit)
        return unit

    def add_file(self, filepath: str) -> SourceFile:
        """Parse a Rust file and queue it for the model."""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                source = f.read()
        except UnicodeDecodeError as e:
            raise NearSynError(f'{filepath}: not valid UTF-8 ({e.reason} at byte {e.start})') from e
        try:
            return self.add_source(source, filepath)
        except SyntaxError as e:
            raise SyntaxError(f'{filepath}: {e}') from e

    def build_model(self) -> InterfaceModel:
        """Fold all queued sources into an InterfaceModel."""
        builder = ModelBuilder(
            resolver=TypeResolver(self.config.extra_types),
            diagnostics=self.diagnostics,
            bindgen_attribute=self.config.bindgen_attribute,
        )
        return builder.build(self.sources)

    def generate_ts(self, model: Optional[InterfaceModel] = None) -> str:
        """Render TypeScript bindings."""
        return TsRenderer(self.config).render(model if model is not None else self.build_model())

    def generate_md(self, model: Optional[InterfaceModel] = None) -> str:
        """Render Markdown documentation."""
        return DocRenderer(self.config).render(model if model is not None else self.build_model())

    def generate(self, output_format: str) -> str:
        """Render the queued sources as `ts` or `md`."""
        if output_format == 'ts':
            return self.generate_ts()
        if output_format == 'md':
            return self.generate_md()
        raise ValueError(f'Unknown output format: {output_format}')

    def write_output(self, content: str, output: Optional[str] = None) -> None:
        """Write rendered content to a file, or stdout when no file is given."""
        if output is None:
            sys.stdout.write(content)
            return
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)


# =============================================================================
# CLI INTERFACE
# =============================================================================

def utc_now() -> str:
    """Current UTC time as stamped into generated files."""
    return datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')


def build_arg_parser():
    import argparse

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('files', nargs='*', metavar='FILE', help='Rust source files of the contract')
    common.add_argument('-o', '--output', help='Output file (default: stdout)')
    common.add_argument('--config', metavar='FILE', help='JSON configuration file')
    common.add_argument('--now', metavar='TEXT', help='Timestamp to stamp into the output')
    common.add_argument('--no-now', action='store_true',
                        help='Omit the timestamp, for reproducible output')
    common.add_argument('-v', '--verbose', action='store_true', help='List every diagnostic')

    parser = argparse.ArgumentParser(
        prog='nearsyn',
        description='NEAR contract interface extractor: TypeScript bindings and Markdown docs',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', metavar='{ts,md}')
    subparsers.required = True
    subparsers.add_parser('ts', parents=[common], help='Emit TypeScript bindings')
    subparsers.add_parser('md', parents=[common], help='Emit Markdown documentation')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    if args.no_now:
        now = ''
    elif args.now is not None:
        now = args.now
    else:
        now = utc_now()

    config = GeneratorConfig.load(args.config, now=now, verbose=args.verbose)
    generator = NearSynGenerator(config)

    try:
        for filepath in args.files:
            generator.add_file(filepath)
        content = generator.generate(args.command)
        generator.write_output(content, args.output)
    except (NearSynError, SyntaxError, OSError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    finally:
        generator.diagnostics.print_summary()

    return 0


if __name__ == '__main__':
    sys.exit(main())
