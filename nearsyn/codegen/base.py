"""
Base renderer class with shared utilities.

This module provides the BaseRenderer class that contains common utilities
used by both output renderers.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GeneratorConfig

from ..model.docs import DocBlock


class BaseRenderer:
    """
    Base class for all renderers.

    Provides shared utilities for:
    - Indentation
    - Doc comment blocks
    - The generator stamp
    """

    def __init__(self, config: 'GeneratorConfig'):
        """
        Initialize the base renderer.

        Args:
            config: The generator configuration
        """
        self._config = config

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self, level: int = 1) -> str:
        """Return the indentation string for the given level."""
        return self._config.indent(level)

    # =========================================================================
    # DOC COMMENTS
    # =========================================================================

    def doc_comment(self, doc: DocBlock, level: int = 0) -> List[str]:
        """Render a doc block as a `/** ... */` comment, one line per doc line.

        An empty doc block still renders the delimiters. A `*/` inside a
        line is written as `*\\/` so it cannot close the comment.
        """
        prefix = self.indent(level)
        lines = [f'{prefix}/**']
        for line in doc.lines:
            text = line.replace('*/', '*\\/')
            lines.append(f'{prefix} * {text}')
        lines.append(f'{prefix} */')
        return lines

    # =========================================================================
    # STAMP
    # =========================================================================

    def stamp(self) -> str:
        """Tool, version, and repository, e.g. `nearsyn v0.1.0 <url>`."""
        text = self._config.stamp
        if self._config.repository:
            text += f' {self._config.repository}'
        return text
