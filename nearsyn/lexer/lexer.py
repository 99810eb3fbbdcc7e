"""
Lexer implementation for Rust source code.

The Lexer tokenizes Rust source code into a stream of tokens
that can be consumed by the parser. Comments are skipped here;
documentation is recovered later from the raw source lines.
"""

from typing import List

from .tokens import Token, TokenType, KEYWORDS, TWO_CHAR_OPS, SINGLE_CHAR_OPS


class Lexer:
    """
    Lexer for Rust source code.

    Converts source text into a list of tokens for parsing.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> str:
        """Look ahead in the source without consuming."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ''
        return self.source[pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def skip_whitespace(self) -> None:
        """Skip over whitespace characters."""
        ch = self.peek()
        while ch and ch in ' \t\r\n':
            self.advance()
            ch = self.peek()

    def skip_comment(self) -> None:
        """Skip over line comments and (possibly nested) block comments."""
        if self.peek() == '/' and self.peek(1) == '/':
            while self.peek() and self.peek() != '\n':
                self.advance()
        elif self.peek() == '/' and self.peek(1) == '*':
            self.advance()
            self.advance()
            depth = 1
            while self.peek() and depth > 0:
                if self.peek() == '/' and self.peek(1) == '*':
                    self.advance()
                    self.advance()
                    depth += 1
                elif self.peek() == '*' and self.peek(1) == '/':
                    self.advance()
                    self.advance()
                    depth -= 1
                else:
                    self.advance()

    def read_string(self) -> str:
        """Read a quoted string literal including its quotes."""
        quote = self.advance()
        result = quote
        while self.peek() and self.peek() != quote:
            if self.peek() == '\\':
                result += self.advance()
            result += self.advance()
        if self.peek() == quote:
            result += self.advance()
        return result

    def read_raw_string(self) -> str:
        """Read a raw string literal (`r"..."`, `r#"..."#`) starting at the `r`."""
        result = self.advance()  # r
        hashes = 0
        while self.peek() == '#':
            result += self.advance()
            hashes += 1
        result += self.advance()  # opening quote
        terminator = '"' + '#' * hashes
        while self.peek():
            if self.source.startswith(terminator, self.pos):
                for _ in terminator:
                    result += self.advance()
                break
            result += self.advance()
        return result

    def is_raw_string_start(self, offset: int = 0) -> bool:
        """Check whether a raw string literal starts at the given offset."""
        if self.peek(offset) != 'r':
            return False
        i = offset + 1
        while self.peek(i) == '#':
            i += 1
        return self.peek(i) == '"'

    def read_char_or_lifetime(self) -> Token:
        """Read a character literal (`'a'`, `'\\n'`) or a lifetime (`'a`)."""
        start_line = self.line
        start_col = self.column
        if self.peek(1) == '\\' or (self.peek(1) and self.peek(2) == "'"):
            return Token(TokenType.CHAR_LITERAL, self.read_string(), start_line, start_col)

        result = self.advance()  # '
        while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
            result += self.advance()
        return Token(TokenType.LIFETIME, result, start_line, start_col)

    def read_number(self) -> str:
        """Read a numeric literal, keeping any type suffix (`10u64`, `0xff`, `1.5e3`)."""
        result = ''
        while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
            result += self.advance()
        if self.peek() == '.' and self.peek(1).isdigit():
            result += self.advance()
            while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
                result += self.advance()
        return result

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        result = ''
        while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
            result += self.advance()
        return result

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source and return a list of tokens.

        Returns:
            List of Token objects, ending with an EOF token.
        """
        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            # Skip comments
            if self.peek() == '/' and self.peek(1) in ('/', '*'):
                self.skip_comment()
                continue

            start_line = self.line
            start_col = self.column
            ch = self.peek()

            # String literals, including byte and raw forms
            if ch == '"':
                self.tokens.append(Token(TokenType.STRING_LITERAL, self.read_string(), start_line, start_col))
                continue
            if ch == 'b' and self.peek(1) == '"':
                prefix = self.advance()
                self.tokens.append(Token(TokenType.STRING_LITERAL, prefix + self.read_string(), start_line, start_col))
                continue
            if ch == 'b' and self.is_raw_string_start(1):
                prefix = self.advance()
                self.tokens.append(Token(TokenType.STRING_LITERAL, prefix + self.read_raw_string(), start_line, start_col))
                continue
            if self.is_raw_string_start():
                self.tokens.append(Token(TokenType.STRING_LITERAL, self.read_raw_string(), start_line, start_col))
                continue
            if ch == 'b' and self.peek(1) == "'":
                prefix = self.advance()
                self.tokens.append(Token(TokenType.CHAR_LITERAL, prefix + self.read_string(), start_line, start_col))
                continue

            # Character literals and lifetimes
            if ch == "'":
                self.tokens.append(self.read_char_or_lifetime())
                continue

            # Numbers
            if ch.isdigit():
                self.tokens.append(Token(TokenType.NUMBER, self.read_number(), start_line, start_col))
                continue

            # Raw identifiers (r#type) are plain identifiers without the prefix
            if ch == 'r' and self.peek(1) == '#' and (self.peek(2).isalpha() or self.peek(2) == '_'):
                self.advance()
                self.advance()
                value = self.read_identifier()
                self.tokens.append(Token(TokenType.IDENTIFIER, value, start_line, start_col))
                continue

            # Identifiers and keywords
            if ch.isalpha() or ch == '_':
                value = self.read_identifier()
                token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
                self.tokens.append(Token(token_type, value, start_line, start_col))
                continue

            # Two-character operators
            two_char = self.peek() + self.peek(1)
            if two_char in TWO_CHAR_OPS:
                self.advance()
                self.advance()
                self.tokens.append(Token(TWO_CHAR_OPS[two_char], two_char, start_line, start_col))
                continue

            # Single-character operators and delimiters
            if ch in SINGLE_CHAR_OPS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_OPS[ch], ch, start_line, start_col))
                continue

            # Unknown character - skip
            self.advance()

        self.tokens.append(Token(TokenType.EOF, '', self.line, self.column))
        return self.tokens
