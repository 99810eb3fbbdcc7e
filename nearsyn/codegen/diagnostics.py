"""
Diagnostic/warning system for the interface extractor.

Collects and reports non-fatal findings: doc comments that had to be
passed through verbatim, enum payloads that the output cannot carry,
items that were skipped, and type names nothing declares.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for generator diagnostics."""
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    file_path: str = ''
    line: Optional[int] = None
    construct: str = ''  # e.g., 'doc comment', 'enum', 'impl'

    def __str__(self) -> str:
        location = self.file_path
        if self.line:
            location = f'{location}:{self.line}'
        if location:
            return f'[{self.severity.value}] {location}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class GeneratorDiagnostics:
    """
    Collects warnings and info entries while the model is built.

    Usage:
        diag = GeneratorDiagnostics()
        diag.warn_enum_payload_dropped("Status", "Failed", "lib.rs", line=42)
        # ... after generation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    @property
    def infos(self) -> List[Diagnostic]:
        """Get only info-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.INFO]

    @property
    def count(self) -> int:
        """Get total diagnostic count."""
        return len(self._diagnostics)

    def codes(self) -> List[str]:
        """Get the codes of all diagnostics, in the order they were recorded."""
        return [d.code for d in self._diagnostics]

    def clear(self) -> None:
        """Clear all diagnostics."""
        self._diagnostics.clear()

    # =========================================================================
    # SPECIFIC WARNING METHODS
    # =========================================================================

    def warn_malformed_doc(
        self,
        item_name: str,
        reason: str,
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Warn that a doc comment was passed through without normalization."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f'Doc comment of "{item_name}" is malformed ({reason}); '
                    f'emitted verbatim.',
            file_path=file_path,
            line=line,
            construct='doc comment',
        ))

    def warn_enum_payload_dropped(
        self,
        enum_name: str,
        variant_name: str,
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Warn that an enum variant's payload is not represented in the output."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message=f'Payload of variant "{enum_name}::{variant_name}" was dropped; '
                    f'only the variant name is emitted.',
            file_path=file_path,
            line=line,
            construct='enum',
        ))

    def warn_item_skipped(
        self,
        construct: str,
        detail: str = '',
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Warn that a declaration was skipped."""
        msg = f'Skipped {construct}'
        if detail:
            msg += f' ({detail})'
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W003',
            message=msg,
            file_path=file_path,
            line=line,
            construct=construct,
        ))

    def info_unresolved_type(
        self,
        type_name: str,
        item_name: str,
    ) -> None:
        """Info that a type name is neither in the catalog nor declared."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message=f'Type "{type_name}" (first used by "{item_name}") is not declared '
                    f'in the analyzed sources; passed through by name.',
            construct='type',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print a summary of all diagnostics to stderr (or specified file)."""
        if file is None:
            file = sys.stderr

        if not self._diagnostics:
            return

        warnings = self.warnings
        infos = self.infos

        if warnings:
            print(f'\nnearsyn warnings ({len(warnings)}):', file=file)
            # Group by construct type
            by_construct: dict = {}
            for w in warnings:
                key = w.construct or 'other'
                if key not in by_construct:
                    by_construct[key] = []
                by_construct[key].append(w)

            for construct, diags in sorted(by_construct.items()):
                print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
                if self._verbose:
                    for d in diags:
                        print(f'    {d}', file=file)

        if infos and self._verbose:
            print(f'\nnearsyn info ({len(infos)}):', file=file)
            for d in infos:
                print(f'  {d}', file=file)

    def get_summary(self) -> str:
        """Get a summary string of all diagnostics."""
        if not self.warnings:
            return 'No nearsyn warnings.'

        by_construct: dict = {}
        for w in self.warnings:
            key = w.construct or 'other'
            if key not in by_construct:
                by_construct[key] = 0
            by_construct[key] += 1

        parts = [f'{count} {construct}' for construct, count in sorted(by_construct.items())]
        return f'nearsyn warnings: {", ".join(parts)}'
