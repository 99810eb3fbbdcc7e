"""
Token definitions for the Rust lexer.

This module contains the TokenType enum, Token dataclass, and
constant mappings for keywords and punctuation. Only the subset of
Rust needed to read item declarations is modelled; everything else
lexes as identifiers or single-character punctuation.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Enumeration of all token types recognized by the Rust lexer."""

    # Keywords
    STRUCT = auto()
    ENUM = auto()
    TYPE = auto()
    TRAIT = auto()
    IMPL = auto()
    FN = auto()
    PUB = auto()
    MOD = auto()
    FOR = auto()
    MUT = auto()
    SELF = auto()
    USE = auto()
    CONST = auto()
    STATIC = auto()
    WHERE = auto()
    CRATE = auto()
    SUPER = auto()
    EXTERN = auto()
    UNSAFE = auto()
    ASYNC = auto()
    DYN = auto()
    AS = auto()

    # Operators
    COLON_COLON = auto()
    ARROW = auto()
    FAT_ARROW = auto()
    HASH = auto()
    BANG = auto()
    EQ = auto()
    AMPERSAND = auto()
    STAR = auto()
    PLUS = auto()
    MINUS = auto()
    SLASH = auto()
    PIPE = auto()
    QUESTION = auto()
    LT = auto()
    GT = auto()
    COLON = auto()
    DOT = auto()
    AT = auto()
    DOLLAR = auto()
    PERCENT = auto()
    CARET = auto()
    TILDE = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    SEMICOLON = auto()
    COMMA = auto()

    # Literals
    NUMBER = auto()
    STRING_LITERAL = auto()
    CHAR_LITERAL = auto()
    LIFETIME = auto()
    IDENTIFIER = auto()

    # Special
    EOF = auto()


@dataclass
class Token:
    """Represents a single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int


# Keyword to TokenType mapping
KEYWORDS = {
    'struct': TokenType.STRUCT,
    'enum': TokenType.ENUM,
    'type': TokenType.TYPE,
    'trait': TokenType.TRAIT,
    'impl': TokenType.IMPL,
    'fn': TokenType.FN,
    'pub': TokenType.PUB,
    'mod': TokenType.MOD,
    'for': TokenType.FOR,
    'mut': TokenType.MUT,
    'self': TokenType.SELF,
    'use': TokenType.USE,
    'const': TokenType.CONST,
    'static': TokenType.STATIC,
    'where': TokenType.WHERE,
    'crate': TokenType.CRATE,
    'super': TokenType.SUPER,
    'extern': TokenType.EXTERN,
    'unsafe': TokenType.UNSAFE,
    'async': TokenType.ASYNC,
    'dyn': TokenType.DYN,
    'as': TokenType.AS,
}

# Two-character operators. `>>` is deliberately absent so that nested
# generic arguments such as `Vec<Vec<u8>>` close one level per token.
TWO_CHAR_OPS = {
    '::': TokenType.COLON_COLON,
    '->': TokenType.ARROW,
    '=>': TokenType.FAT_ARROW,
}

# Single-character operators and delimiters
SINGLE_CHAR_OPS = {
    '#': TokenType.HASH,
    '!': TokenType.BANG,
    '=': TokenType.EQ,
    '&': TokenType.AMPERSAND,
    '*': TokenType.STAR,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '/': TokenType.SLASH,
    '|': TokenType.PIPE,
    '?': TokenType.QUESTION,
    '<': TokenType.LT,
    '>': TokenType.GT,
    ':': TokenType.COLON,
    '.': TokenType.DOT,
    '@': TokenType.AT,
    '$': TokenType.DOLLAR,
    '%': TokenType.PERCENT,
    '^': TokenType.CARET,
    '~': TokenType.TILDE,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    ';': TokenType.SEMICOLON,
    ',': TokenType.COMMA,
}
