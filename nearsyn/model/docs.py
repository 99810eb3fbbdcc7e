"""
Doc comment extraction.

The DocExtractor turns the raw source lines that precede a declaration
into a DocBlock. Only the run of comment and attribute lines directly
above the declaration is considered; a blank source line or code line
ends it. Inside a code fence the text is kept as written, apart from
the comment delimiter and one separator space.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING

from ..errors import MalformedDocBlock

if TYPE_CHECKING:
    from ..codegen.diagnostics import GeneratorDiagnostics


FENCE = '```'

# Line kinds produced by the classifier
BLANK = 'blank'
CODE = 'code'
COMMENT = 'comment'
ATTRIBUTE = 'attribute'
OUTER_DOC = 'doc'
INNER_DOC = 'inner'

# Kinds that keep a doc run contiguous
RUN_KINDS = (OUTER_DOC, COMMENT, ATTRIBUTE)


@dataclass(frozen=True)
class DocBlock:
    """An ordered sequence of markdown lines attached to one declaration."""
    lines: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def __add__(self, other: 'DocBlock') -> 'DocBlock':
        return DocBlock(self.lines + other.lines)

    def summary(self) -> str:
        """First paragraph on one line, with table pipes escaped."""
        paragraph = []
        for line in self.lines:
            if not line or line.lstrip().startswith(FENCE):
                break
            paragraph.append(line)
        return ' '.join(paragraph).replace('|', '\\|')


def _strip_block_decoration(text: str) -> str:
    """Drop the leading `*` that decorates lines of a `/** ... */` block."""
    stripped = text.lstrip()
    if stripped.startswith('*') and not stripped.startswith('*/'):
        return stripped[1:]
    return text


def classify_lines(span: List[str]) -> List[Tuple[str, Optional[str]]]:
    """
    Classify raw source lines.

    Args:
        span: Raw source lines, in order

    Returns:
        One (kind, payload) pair per line; payload is the comment text
        after its delimiter for doc lines and empty otherwise
    """
    result: List[Tuple[str, Optional[str]]] = []
    block: Optional[str] = None  # kind of the open block comment
    attr_depth = 0

    for line in span:
        stripped = line.strip()

        if block is not None:
            kind = block
            end = line.find('*/')
            text = line if end < 0 else line[:end]
            if end >= 0:
                block = None
                if not text.strip():
                    result.append((kind, None))
                    continue
            result.append((kind, _strip_block_decoration(text) if kind != COMMENT else ''))
            continue

        if attr_depth > 0:
            attr_depth += stripped.count('[') - stripped.count(']')
            result.append((ATTRIBUTE, ''))
            continue

        if not stripped:
            result.append((BLANK, ''))
        elif stripped.startswith('///') and not stripped.startswith('////'):
            result.append((OUTER_DOC, line.lstrip()[3:]))
        elif stripped.startswith('//!'):
            result.append((INNER_DOC, line.lstrip()[3:]))
        elif stripped.startswith('//'):
            result.append((COMMENT, ''))
        elif stripped.startswith('/*'):
            if stripped.startswith('/**') and not stripped.startswith(('/***', '/**/')):
                kind = OUTER_DOC
            elif stripped.startswith('/*!'):
                kind = INNER_DOC
            else:
                kind = COMMENT
            rest = stripped[3:] if kind != COMMENT else stripped[2:]
            end = rest.find('*/')
            if end >= 0:
                rest = rest[:end]
            else:
                block = kind
            if kind == COMMENT:
                result.append((COMMENT, ''))
            elif rest.strip():
                result.append((kind, rest))
            else:
                result.append((kind, None))
        elif stripped.startswith('#[') or stripped.startswith('#!['):
            attr_depth = stripped.count('[') - stripped.count(']')
            result.append((ATTRIBUTE, ''))
        else:
            result.append((CODE, ''))

    return result


class DocExtractor:
    """
    Extracts DocBlocks from raw comment spans.

    Malformed fence nesting is recovered locally: the block is returned
    with only the delimiters removed and a warning is recorded.
    """

    def __init__(self, diagnostics: Optional['GeneratorDiagnostics'] = None):
        self.diagnostics = diagnostics

    def extract(self, span: List[str], item_name: str = '', file_path: str = '', line: int = 0) -> DocBlock:
        """
        Extract the outer doc comment that ends right above a declaration.

        Args:
            span: Raw source lines between the previous declaration and this one
            item_name: The documented declaration, for diagnostics
            file_path: Source file, for diagnostics
            line: Declaration line, for diagnostics

        Returns:
            The DocBlock (empty when no doc comment is adjacent)
        """
        run: List[str] = []
        for kind, payload in reversed(classify_lines(span)):
            if kind not in RUN_KINDS:
                break
            if kind == OUTER_DOC and payload is not None:
                run.append(payload)
        run.reverse()
        return self._normalize(run, item_name, file_path, line)

    def extract_inner(self, span: List[str], file_path: str = '') -> DocBlock:
        """Extract crate-level (`//!`, `/*! */`) docs from a span."""
        lines = [
            payload for kind, payload in classify_lines(span)
            if kind == INNER_DOC and payload is not None
        ]
        return self._normalize(lines, 'crate', file_path, 1)

    def _normalize(self, raw_lines: List[str], item_name: str, file_path: str, line: int) -> DocBlock:
        try:
            return DocBlock(tuple(normalize_doc_lines(raw_lines)))
        except MalformedDocBlock as e:
            if self.diagnostics is not None:
                self.diagnostics.warn_malformed_doc(item_name, e.reason, file_path, line)
            return DocBlock(tuple(_drop_separator(text) for text in raw_lines))


def _drop_separator(text: str) -> str:
    """Remove the single space that separates a comment delimiter from its text."""
    return text[1:] if text.startswith(' ') else text


def normalize_doc_lines(raw_lines: List[str]) -> List[str]:
    """
    Normalize doc comment text.

    Lines outside a code fence are stripped; fence lines and fenced lines
    only lose the separator space so their indentation survives.

    Raises:
        MalformedDocBlock: on a fence with an info string inside an open
            fence, or a fence left open at the end of the block
    """
    lines = []
    in_fence = False
    for text in raw_lines:
        stripped = text.strip()
        if stripped.startswith(FENCE):
            info = stripped[len(FENCE):].strip()
            if in_fence and info:
                raise MalformedDocBlock(f"fence `{stripped}` opened inside a code fence")
            in_fence = not in_fence
            lines.append(_drop_separator(text).rstrip())
        elif in_fence:
            lines.append(_drop_separator(text).rstrip('\r'))
        else:
            lines.append(stripped)

    if in_fence:
        raise MalformedDocBlock('unclosed code fence')
    return lines
