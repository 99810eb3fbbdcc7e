"""
Rust declaration parser implementation.

The Parser converts a stream of tokens from the Lexer into a list of
declaration nodes. It understands item headers, field lists, enum
variants, and method signatures; bodies and every other item kind are
skipped by balanced-delimiter scanning.
"""

from typing import List, Optional

from ..lexer import Token, TokenType
from .ast_nodes import (
    # Types
    TypeExpr,
    PathType,
    TupleType,
    ParenType,
    OtherType,
    # Declarations
    Attribute,
    Item,
    Receiver,
    Parameter,
    FnItem,
    FieldItem,
    VariantItem,
    TypeAliasItem,
    StructItem,
    EnumItem,
    TraitItem,
    ImplItem,
    ModItem,
    SourceFile,
)


OPENERS = (TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE)
CLOSERS = (TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE)

# Tokens allowed as path segments in type position
PATH_SEGMENT_TOKENS = (
    TokenType.IDENTIFIER,
    TokenType.SELF,
    TokenType.CRATE,
    TokenType.SUPER,
)

FN_QUALIFIERS = (
    TokenType.CONST,
    TokenType.ASYNC,
    TokenType.UNSAFE,
    TokenType.EXTERN,
)


def _is_word(token: Token) -> bool:
    return bool(token.value) and (token.value[0].isalnum() or token.value[0] in '_"\'')


def join_tokens(tokens: List[Token]) -> str:
    """Rebuild compact source text from tokens (`a :: b` becomes `a::b`)."""
    text = ''
    prev: Optional[Token] = None
    for token in tokens:
        if prev is not None:
            if (_is_word(prev) and _is_word(token)) or TokenType.EQ in (prev.type, token.type):
                text += ' '
        text += token.value
        prev = token
    return text


class Parser:
    """
    Recursive descent parser for the declaration subset of Rust.

    Parses a stream of tokens into a SourceFile of declaration nodes.
    The original source text is needed to attach raw comment spans.
    """

    def __init__(self, tokens: List[Token], source: str = ''):
        self.tokens = tokens
        self.pos = 0
        self.lines = source.splitlines()

    def peek(self, offset: int = 0) -> Token:
        """Look ahead in the token stream without consuming."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def current(self) -> Token:
        """Return the current token."""
        return self.peek()

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current()
        self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def expect(self, token_type: TokenType, message: str = '') -> Token:
        """Consume the current token if it matches, otherwise raise an error."""
        if self.current().type != token_type:
            raise SyntaxError(
                f"Expected {token_type.name} but got {self.current().type.name} "
                f"at line {self.current().line}, column {self.current().column}: {message}"
            )
        return self.advance()

    def expect_identifier(self, message: str = '') -> str:
        """Consume an identifier and return its text."""
        return self.expect(TokenType.IDENTIFIER, message).value

    def previous_line(self) -> int:
        """Line of the last consumed token, or 0 at the start of input."""
        if self.pos == 0:
            return 0
        return self.tokens[min(self.pos, len(self.tokens)) - 1].line

    def doc_span(self, prev_end: int, decl_line: int) -> List[str]:
        """Raw source lines strictly between `prev_end` and `decl_line` (1-based)."""
        if decl_line - 1 <= prev_end:
            return []
        return self.lines[prev_end:decl_line - 1]

    # =========================================================================
    # TOP-LEVEL PARSING
    # =========================================================================

    def parse(self) -> SourceFile:
        """Parse the entire source file into a SourceFile."""
        unit = SourceFile()

        # Inner attributes (#![...]) may precede the crate docs' end
        while self.match(TokenType.HASH) and self.peek(1).type == TokenType.BANG:
            self.parse_attribute()

        if self.match(TokenType.EOF):
            unit.inner_doc_span = list(self.lines)
        else:
            unit.inner_doc_span = self.lines[:self.current().line - 1]

        unit.items = self.parse_items(TokenType.EOF)
        return unit

    def parse_items(self, closing: TokenType) -> List[Item]:
        """Parse items until `closing` (not consumed)."""
        items: List[Item] = []
        prev_end = self.previous_line()

        while not self.match(closing, TokenType.EOF):
            attributes = self.parse_outer_attributes()
            if self.match(closing, TokenType.EOF):
                break

            decl_line = self.current().line
            item = self.parse_item(attributes)
            if item is not None:
                item.attributes = attributes
                item.doc_span = self.doc_span(prev_end, decl_line)
                item.line = decl_line
                items.append(item)
            prev_end = self.previous_line()

        return items

    def parse_item(self, attributes: List[Attribute]) -> Optional[Item]:
        """Parse a single item, returning None for skipped item kinds."""
        is_public = self.parse_visibility()

        if self.at_fn():
            self.skip_fn_qualifiers()
            fn = self.parse_fn()
            fn.is_public = is_public
            return fn
        if self.match(TokenType.UNSAFE) and self.peek(1).type in (TokenType.TRAIT, TokenType.IMPL):
            self.advance()

        if self.match(TokenType.STRUCT):
            return self.parse_struct()
        if self.match(TokenType.ENUM):
            return self.parse_enum()
        if self.match(TokenType.TYPE):
            return self.parse_type_alias()
        if self.match(TokenType.TRAIT):
            return self.parse_trait()
        if self.match(TokenType.IMPL):
            return self.parse_impl()
        if self.match(TokenType.MOD):
            return self.parse_mod()

        self.skip_item()
        return None

    def parse_mod(self) -> ModItem:
        """Parse an inline module (`mod m { ... }`) or a declaration (`mod m;`)."""
        self.expect(TokenType.MOD)
        name = self.expect_identifier('module name')
        module = ModItem(name=name)
        if self.match(TokenType.SEMICOLON):
            self.advance()
            return module

        self.expect(TokenType.LBRACE)
        module.items = self.parse_items(TokenType.RBRACE)
        self.expect(TokenType.RBRACE)
        return module

    # =========================================================================
    # ATTRIBUTES AND VISIBILITY
    # =========================================================================

    def parse_outer_attributes(self) -> List[Attribute]:
        """Parse `#[...]` attributes; inner attributes (`#![...]`) are dropped."""
        attributes = []
        while self.match(TokenType.HASH):
            is_inner = self.peek(1).type == TokenType.BANG
            attr = self.parse_attribute()
            if not is_inner:
                attributes.append(attr)
        return attributes

    def parse_attribute(self) -> Attribute:
        """Parse a single attribute such as `#[derive(Serialize, Deserialize)]`."""
        self.expect(TokenType.HASH)
        if self.match(TokenType.BANG):
            self.advance()
        self.expect(TokenType.LBRACKET)

        path_tokens = []
        while self.match(TokenType.IDENTIFIER, TokenType.COLON_COLON, TokenType.CRATE,
                         TokenType.SELF, TokenType.SUPER):
            path_tokens.append(self.advance())
        attr = Attribute(path=join_tokens(path_tokens))

        if self.match(TokenType.LPAREN):
            attr.args = self.parse_attribute_args()
        elif self.match(TokenType.EQ):
            self.advance()
            value_tokens = []
            while not self.match(TokenType.RBRACKET, TokenType.EOF):
                value_tokens.append(self.advance())
            attr.args = [join_tokens(value_tokens)]

        # Anything left (unusual token trees) is skipped up to the closing bracket
        depth = 0
        while not self.match(TokenType.EOF):
            if self.match(*OPENERS):
                depth += 1
            elif self.match(*CLOSERS):
                if depth == 0:
                    break
                depth -= 1
            self.advance()
        self.expect(TokenType.RBRACKET)
        return attr

    def parse_attribute_args(self) -> List[str]:
        """Split a parenthesized attribute argument list at top-level commas."""
        self.expect(TokenType.LPAREN)
        args: List[str] = []
        current: List[Token] = []
        depth = 0

        while not self.match(TokenType.EOF):
            if self.match(TokenType.RPAREN) and depth == 0:
                break
            token = self.advance()
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
            if token.type == TokenType.COMMA and depth == 0:
                if current:
                    args.append(join_tokens(current))
                current = []
                continue
            current.append(token)

        if current:
            args.append(join_tokens(current))
        self.expect(TokenType.RPAREN)
        return args

    def parse_visibility(self) -> bool:
        """Consume `pub`, `pub(crate)`, `pub(in path)`; return whether it was plain `pub`."""
        if not self.match(TokenType.PUB):
            return False
        self.advance()
        if self.match(TokenType.LPAREN) and self.peek(1).type in (
                TokenType.CRATE, TokenType.SUPER, TokenType.SELF, TokenType.IDENTIFIER):
            self.skip_balanced()
            return False
        return True

    # =========================================================================
    # DEFINITION PARSING
    # =========================================================================

    def parse_struct(self) -> StructItem:
        """Parse a struct definition (named, tuple, or unit)."""
        self.expect(TokenType.STRUCT)
        name = self.expect_identifier('struct name')
        struct = StructItem(name=name, generics=self.parse_generics())
        self.skip_where_clause()

        if self.match(TokenType.LBRACE):
            struct.fields = self.parse_fields()
        elif self.match(TokenType.LPAREN):
            struct.style = 'tuple'
            struct.tuple_fields = self.parse_tuple_fields()
            self.skip_where_clause()
            self.expect(TokenType.SEMICOLON)
        else:
            struct.style = 'unit'
            self.expect(TokenType.SEMICOLON)

        return struct

    def parse_fields(self) -> List[FieldItem]:
        """Parse a brace-delimited list of named fields."""
        prev_end = self.expect(TokenType.LBRACE).line
        fields = []

        while not self.match(TokenType.RBRACE, TokenType.EOF):
            attributes = self.parse_outer_attributes()
            if self.match(TokenType.RBRACE):
                break
            decl_line = self.current().line
            self.parse_visibility()
            name = self.expect_identifier('field name')
            self.expect(TokenType.COLON)
            type_expr = self.parse_type()
            if self.match(TokenType.COMMA):
                self.advance()

            fields.append(FieldItem(
                name=name,
                attributes=attributes,
                doc_span=self.doc_span(prev_end, decl_line),
                line=decl_line,
                type_expr=type_expr,
            ))
            prev_end = self.previous_line()

        self.expect(TokenType.RBRACE)
        return fields

    def parse_tuple_fields(self) -> List[TypeExpr]:
        """Parse the parenthesized field types of a tuple struct."""
        self.expect(TokenType.LPAREN)
        types = []
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            self.parse_outer_attributes()
            self.parse_visibility()
            types.append(self.parse_type())
            if self.match(TokenType.COMMA):
                self.advance()
        self.expect(TokenType.RPAREN)
        return types

    def parse_enum(self) -> EnumItem:
        """Parse an enum definition."""
        self.expect(TokenType.ENUM)
        name = self.expect_identifier('enum name')
        enum = EnumItem(name=name, generics=self.parse_generics())
        self.skip_where_clause()

        prev_end = self.expect(TokenType.LBRACE).line
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            attributes = self.parse_outer_attributes()
            if self.match(TokenType.RBRACE):
                break
            decl_line = self.current().line
            variant = VariantItem(
                name=self.expect_identifier('variant name'),
                attributes=attributes,
                line=decl_line,
            )
            if self.match(TokenType.LPAREN):
                variant.payload = 'tuple'
                self.skip_balanced()
            elif self.match(TokenType.LBRACE):
                variant.payload = 'struct'
                self.skip_balanced()
            if self.match(TokenType.EQ):
                # Explicit discriminant
                self.skip_until(TokenType.COMMA, TokenType.RBRACE)
            if self.match(TokenType.COMMA):
                self.advance()

            variant.doc_span = self.doc_span(prev_end, decl_line)
            enum.variants.append(variant)
            prev_end = self.previous_line()

        self.expect(TokenType.RBRACE)
        return enum

    def parse_type_alias(self) -> TypeAliasItem:
        """Parse `type Name<...> = Type;`."""
        self.expect(TokenType.TYPE)
        name = self.expect_identifier('type alias name')
        alias = TypeAliasItem(name=name, generics=self.parse_generics())
        self.skip_where_clause()
        self.expect(TokenType.EQ)
        alias.target = self.parse_type()
        self.expect(TokenType.SEMICOLON)
        return alias

    def parse_trait(self) -> TraitItem:
        """Parse a trait definition; only its method signatures are kept."""
        self.expect(TokenType.TRAIT)
        name = self.expect_identifier('trait name')
        trait = TraitItem(name=name)
        self.parse_generics()

        if self.match(TokenType.COLON):
            self.advance()
            trait.supertraits = [str(bound) for bound in self.parse_bounds()
                                 if isinstance(bound, PathType)]
        self.skip_where_clause()
        trait.methods = self.parse_assoc_items()
        return trait

    def parse_impl(self) -> ImplItem:
        """Parse `impl Type { ... }` or `impl Trait for Type { ... }`."""
        self.expect(TokenType.IMPL)
        self.parse_generics()
        if self.match(TokenType.BANG):
            self.advance()

        first = self.parse_type()
        trait_name = None
        if self.match(TokenType.FOR):
            self.advance()
            trait_name = first.name if isinstance(first, PathType) else str(first)
            self_type = self.parse_type()
        else:
            self_type = first
        self.skip_where_clause()

        name = self_type.name if isinstance(self_type, PathType) else ''
        impl = ImplItem(name=name, self_type=self_type, trait_name=trait_name)
        impl.methods = self.parse_assoc_items()
        return impl

    def parse_assoc_items(self) -> List[FnItem]:
        """Parse the body of a trait or impl, keeping only method signatures."""
        prev_end = self.expect(TokenType.LBRACE).line
        methods = []

        while not self.match(TokenType.RBRACE, TokenType.EOF):
            attributes = self.parse_outer_attributes()
            if self.match(TokenType.RBRACE):
                break
            decl_line = self.current().line
            is_public = self.parse_visibility()
            if self.match(TokenType.IDENTIFIER) and self.current().value == 'default':
                self.advance()

            if self.at_fn():
                self.skip_fn_qualifiers()
                fn = self.parse_fn()
                fn.attributes = attributes
                fn.is_public = is_public
                fn.doc_span = self.doc_span(prev_end, decl_line)
                fn.line = decl_line
                methods.append(fn)
            else:
                self.skip_item()
            prev_end = self.previous_line()

        self.expect(TokenType.RBRACE)
        return methods

    # =========================================================================
    # FUNCTION PARSING
    # =========================================================================

    def at_fn(self) -> bool:
        """Check whether the upcoming tokens start a function (after qualifiers)."""
        offset = 0
        while self.peek(offset).type in FN_QUALIFIERS:
            offset += 1
            if self.peek(offset).type == TokenType.STRING_LITERAL:
                offset += 1  # extern "C"
        return self.peek(offset).type == TokenType.FN

    def skip_fn_qualifiers(self) -> None:
        """Skip `const`, `async`, `unsafe`, and `extern "abi"` before `fn`."""
        while self.match(*FN_QUALIFIERS):
            self.advance()
            if self.match(TokenType.STRING_LITERAL):
                self.advance()

    def parse_fn(self) -> FnItem:
        """Parse a function signature, skipping its body if present."""
        self.expect(TokenType.FN)
        name = self.expect_identifier('function name')
        fn = FnItem(name=name, generics=self.parse_generics())

        self.expect(TokenType.LPAREN)
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            self.parse_outer_attributes()
            if fn.receiver is None and not fn.parameters and self.at_receiver():
                fn.receiver = self.parse_receiver()
            else:
                fn.parameters.append(self.parse_parameter())
            if self.match(TokenType.COMMA):
                self.advance()
        self.expect(TokenType.RPAREN)

        if self.match(TokenType.ARROW):
            self.advance()
            fn.return_type = self.parse_type()
        self.skip_where_clause()

        if self.match(TokenType.LBRACE):
            self.skip_balanced()
        else:
            self.expect(TokenType.SEMICOLON, f'after signature of {name}')

        return fn

    def at_receiver(self) -> bool:
        """Check for `self`, `mut self`, `&self`, `&mut self`, `&'a self`, `&'a mut self`."""
        offset = 0
        if self.peek(offset).type == TokenType.AMPERSAND:
            offset += 1
            if self.peek(offset).type == TokenType.LIFETIME:
                offset += 1
        if self.peek(offset).type == TokenType.MUT:
            offset += 1
        return self.peek(offset).type == TokenType.SELF

    def parse_receiver(self) -> Receiver:
        """Parse the `self` parameter."""
        receiver = Receiver(is_reference=False)
        if self.match(TokenType.AMPERSAND):
            self.advance()
            receiver.is_reference = True
            if self.match(TokenType.LIFETIME):
                self.advance()
        if self.match(TokenType.MUT):
            self.advance()
            receiver.is_mutable = True
        self.expect(TokenType.SELF)
        if self.match(TokenType.COLON):
            # Explicit receiver type, e.g. `self: &Self`
            self.advance()
            self.parse_type()
        return receiver

    def parse_parameter(self) -> Parameter:
        """Parse a `pattern: Type` function parameter."""
        pattern: List[Token] = []
        depth = 0
        while not self.match(TokenType.EOF):
            if self.match(TokenType.COLON) and depth == 0:
                break
            token = self.advance()
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
            pattern.append(token)
        self.expect(TokenType.COLON, 'in parameter')

        if pattern and pattern[0].type == TokenType.MUT:
            pattern = pattern[1:]
        return Parameter(name=join_tokens(pattern), type_expr=self.parse_type())

    # =========================================================================
    # GENERICS AND WHERE CLAUSES
    # =========================================================================

    def parse_generics(self) -> List[str]:
        """Parse `<...>` generic parameters, returning their names.

        Lifetimes keep their leading quote so callers can tell them apart.
        """
        if not self.match(TokenType.LT):
            return []
        self.advance()

        names = []
        depth = 0
        expect_name = True
        while not self.match(TokenType.EOF):
            if self.match(TokenType.GT) and depth == 0:
                break
            token = self.advance()
            if token.type == TokenType.LT:
                depth += 1
            elif token.type == TokenType.GT:
                depth -= 1
            elif token.type == TokenType.COMMA and depth == 0:
                expect_name = True
                continue
            elif expect_name and token.type in (TokenType.LIFETIME, TokenType.IDENTIFIER):
                names.append(token.value)
                expect_name = False
            elif expect_name and token.type == TokenType.CONST:
                continue
            else:
                expect_name = False
        self.expect(TokenType.GT)
        return names

    def skip_where_clause(self) -> None:
        """Skip a `where` clause up to the item body or terminator."""
        if not self.match(TokenType.WHERE):
            return
        self.skip_until(TokenType.LBRACE, TokenType.SEMICOLON)

    # =========================================================================
    # TYPE PARSING
    # =========================================================================

    def parse_type(self) -> TypeExpr:
        """Parse a type expression."""
        if self.match(TokenType.LPAREN):
            return self.parse_tuple_type()
        if self.match(TokenType.AMPERSAND):
            self.advance()
            prefix = '&'
            if self.match(TokenType.LIFETIME):
                prefix += self.advance().value + ' '
            if self.match(TokenType.MUT):
                self.advance()
                prefix += 'mut '
            return OtherType(prefix + str(self.parse_type()))
        if self.match(TokenType.LBRACKET):
            return self.parse_array_type()
        if self.match(TokenType.STAR):
            self.advance()
            qualifier = self.advance().value  # const or mut
            return OtherType(f'*{qualifier} {self.parse_type()}')
        if self.match(TokenType.DYN, TokenType.IMPL):
            keyword = self.advance().value
            bounds = ' + '.join(str(bound) for bound in self.parse_bounds())
            return OtherType(f'{keyword} {bounds}')
        if self.match(TokenType.FN, TokenType.UNSAFE, TokenType.EXTERN):
            return self.parse_fn_pointer_type()
        if self.match(TokenType.BANG):
            self.advance()
            return OtherType('!')
        if self.match(TokenType.IDENTIFIER) and self.current().value == '_':
            self.advance()
            return OtherType('_')
        if self.match(TokenType.COLON_COLON, *PATH_SEGMENT_TOKENS):
            return self.parse_path_type()

        token = self.current()
        raise SyntaxError(
            f"Expected a type but got {token.type.name} "
            f"at line {token.line}, column {token.column}"
        )

    def parse_tuple_type(self) -> TypeExpr:
        """Parse `()`, `(T)`, `(T,)`, or `(A, B, ...)`."""
        self.expect(TokenType.LPAREN)
        elements = []
        trailing_comma = False
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            elements.append(self.parse_type())
            trailing_comma = False
            if self.match(TokenType.COMMA):
                self.advance()
                trailing_comma = True
        self.expect(TokenType.RPAREN)

        if len(elements) == 1 and not trailing_comma:
            return ParenType(elements[0])
        return TupleType(elements)

    def parse_array_type(self) -> TypeExpr:
        """Parse `[T]` or `[T; N]` into an opaque type."""
        self.expect(TokenType.LBRACKET)
        element = self.parse_type()
        text = f'[{element}]'
        if self.match(TokenType.SEMICOLON):
            self.advance()
            length = []
            while not self.match(TokenType.RBRACKET, TokenType.EOF):
                length.append(self.advance())
            text = f'[{element}; {join_tokens(length)}]'
        self.expect(TokenType.RBRACKET)
        return OtherType(text)

    def parse_fn_pointer_type(self) -> TypeExpr:
        """Parse `fn(A, B) -> C` (with optional qualifiers) into an opaque type."""
        self.skip_fn_qualifiers()
        self.expect(TokenType.FN)
        text = 'fn' + str(self.parse_tuple_type())
        if self.match(TokenType.ARROW):
            self.advance()
            text += f' -> {self.parse_type()}'
        return OtherType(text)

    def parse_path_type(self) -> TypeExpr:
        """Parse a (possibly qualified) path type with generic arguments."""
        if self.match(TokenType.COLON_COLON):
            self.advance()

        segments: List[str] = []
        generic_args: List[TypeExpr] = []
        while True:
            if not self.match(*PATH_SEGMENT_TOKENS):
                token = self.current()
                raise SyntaxError(
                    f"Expected a path segment but got {token.type.name} "
                    f"at line {token.line}, column {token.column}"
                )
            segments.append(self.advance().value)

            # Turbofish
            if self.match(TokenType.COLON_COLON) and self.peek(1).type == TokenType.LT:
                self.advance()
            if self.match(TokenType.LT):
                generic_args = self.parse_generic_args()

            if self.match(TokenType.COLON_COLON) and self.peek(1).type in PATH_SEGMENT_TOKENS:
                self.advance()
                continue
            break

        # Fn-trait sugar: Fn(A) -> B
        if segments[-1] in ('Fn', 'FnMut', 'FnOnce') and self.match(TokenType.LPAREN):
            params = self.parse_tuple_type()
            text = '::'.join(segments) + str(params)
            if self.match(TokenType.ARROW):
                self.advance()
                text += f' -> {self.parse_type()}'
            return OtherType(text)

        return PathType(segments=segments, generic_args=generic_args)

    def parse_generic_args(self) -> List[TypeExpr]:
        """Parse `<A, B>` generic arguments; lifetimes and bindings are dropped."""
        self.expect(TokenType.LT)
        args: List[TypeExpr] = []
        while not self.match(TokenType.GT, TokenType.EOF):
            if self.match(TokenType.LIFETIME):
                self.advance()
            elif self.match(TokenType.IDENTIFIER) and self.peek(1).type == TokenType.EQ:
                # Associated type binding, e.g. Iterator<Item = T>
                self.advance()
                self.advance()
                self.parse_type()
            elif self.match(TokenType.NUMBER, TokenType.LBRACE, TokenType.MINUS):
                # Const generic argument
                self.skip_until(TokenType.COMMA, TokenType.GT)
            else:
                args.append(self.parse_type())
            if self.match(TokenType.COMMA):
                self.advance()
        self.expect(TokenType.GT)
        return args

    def parse_bounds(self) -> List[TypeExpr]:
        """Parse `A + B + 'a + ?Sized` trait bounds."""
        bounds: List[TypeExpr] = []
        while True:
            if self.match(TokenType.LIFETIME):
                self.advance()
            else:
                if self.match(TokenType.QUESTION):
                    self.advance()
                if self.match(TokenType.FOR):
                    # Higher-ranked bound: for<'a>
                    self.advance()
                    self.parse_generics()
                bounds.append(self.parse_type())
            if self.match(TokenType.PLUS):
                self.advance()
                continue
            return bounds

    # =========================================================================
    # SKIPPING
    # =========================================================================

    def skip_balanced(self) -> None:
        """Skip a delimited group starting at the current opener."""
        depth = 0
        while not self.match(TokenType.EOF):
            token = self.advance()
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
                if depth <= 0:
                    return

    def skip_until(self, *types: TokenType) -> None:
        """Skip tokens until one of `types` appears outside any nesting (not consumed)."""
        depth = 0
        angle = 0
        while not self.match(TokenType.EOF):
            if depth == 0 and angle == 0 and self.match(*types):
                return
            token = self.advance()
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
            elif token.type == TokenType.LT:
                angle += 1
            elif token.type == TokenType.GT and angle > 0:
                angle -= 1

    def skip_item(self) -> None:
        """Skip an unsupported item: up to `;` or the end of a top-level brace group."""
        depth = 0
        while not self.match(TokenType.EOF):
            token = self.advance()
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
                if depth <= 0 and token.type == TokenType.RBRACE:
                    return
                if depth < 0:
                    return
            elif token.type == TokenType.SEMICOLON and depth == 0:
                return
