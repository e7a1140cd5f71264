"""XO Parser — single look-ahead recursive-descent parser.

Parses a token stream into an AST rooted at ``Program``. Every grammar rule
goes through one entry point, ``parse_expression``, which is called by the
top-level loop, by declaration bodies and by call argument lists alike.

Statement forms:
  let name = expr...            (body ends at the next newline)
  name(expr, expr, ...)
  literal | comment | newline
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from xo.lexer import LexerConfig, Token, TokenKind, tokenize
from xo.ast_nodes import (
    Node, Program, VariableAssignment, FunctionCall,
    LiteralNumber, LiteralString, LiteralBoolean,
    Comment, CommentBlock, NewLine,
)
from xo.errors import ParseError, SourceLocation

logger = logging.getLogger(__name__)

DECLARATION_KEYWORD = "let"
TRUE_KEYWORD = "true"
FALSE_KEYWORD = "false"
RESERVED_WORDS = frozenset({DECLARATION_KEYWORD, TRUE_KEYWORD, FALSE_KEYWORD})


class Context(Enum):
    """Where parse_expression is being called from."""
    STATEMENT = "statement"
    ASSIGNMENT = "assignment"
    ARGUMENTS = "arguments"


class Parser:
    """Recursive-descent parser for XO."""

    def __init__(self, tokens: list[Token], filename: str = "<stdin>"):
        self.tokens = tokens
        self.pos = 0
        self.filename = filename

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _current(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _peek(self) -> Optional[TokenKind]:
        tok = self._current()
        return tok.kind if tok else None

    def _peek_ahead(self, offset: int = 1) -> Optional[TokenKind]:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx].kind
        return None

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _last_loc(self) -> SourceLocation:
        if self.tokens:
            return self.tokens[-1].position
        return SourceLocation(1, 1, self.filename)

    def _expect(self, kind: TokenKind, what: str) -> Token:
        tok = self._current()
        if tok is None:
            raise ParseError(f"Expected {what}, got end of input", self._last_loc())
        if tok.kind != kind:
            raise ParseError(
                f"Expected {what}, got {tok.kind.name} ({tok.text!r})",
                tok.position,
                token_kind=tok.kind.name,
            )
        return self._advance()

    # -------------------------------------------------------------------
    # Top-level
    # -------------------------------------------------------------------

    def parse(self) -> Program:
        body = self.parse_sequence(Context.STATEMENT)
        logger.debug("parsed %d top-level nodes from %s", len(body), self.filename)
        return Program(body=body, location=SourceLocation(1, 1, self.filename))

    def parse_sequence(self, context: Context) -> list[Node]:
        """Parse until the tokens run out, dropping separators."""
        nodes: list[Node] = []
        while not self._at_end():
            node = self.parse_expression(context)
            if node is not None:
                nodes.append(node)
        return nodes

    def parse_expression(self, context: Context = Context.STATEMENT) -> Optional[Node]:
        tok = self._current()
        if tok is None:
            raise ParseError("Unexpected end of input", self._last_loc())
        kind = tok.kind
        loc = tok.position

        if kind == TokenKind.COMMA:
            self._advance()
            return None

        if kind in (TokenKind.COMMENT, TokenKind.COMMENT_BLOCK):
            if context == Context.ARGUMENTS:
                raise ParseError("Comments are not allowed inside an argument list",
                                 loc, token_kind=kind.name)
            self._advance()
            if kind == TokenKind.COMMENT:
                return Comment(tok.text, location=loc)
            return CommentBlock(tok.text, location=loc)

        if kind == TokenKind.NEWLINE:
            self._advance()
            if context == Context.ARGUMENTS:
                return None
            return NewLine(location=loc)

        if kind == TokenKind.NAME and tok.text in (TRUE_KEYWORD, FALSE_KEYWORD):
            self._advance()
            return LiteralBoolean(tok.text, location=loc)

        if kind == TokenKind.NUMBER:
            self._advance()
            return LiteralNumber(tok.text, location=loc)

        if kind == TokenKind.STRING:
            self._advance()
            return LiteralString(tok.text, location=loc)

        if kind == TokenKind.NAME and tok.text == DECLARATION_KEYWORD:
            if context != Context.STATEMENT:
                raise ParseError(f"'{DECLARATION_KEYWORD}' is only allowed at the start of a statement",
                                 loc, token_kind=kind.name)
            return self._parse_assignment()

        if kind == TokenKind.NAME:
            if self._peek_ahead() == TokenKind.PAREN_OPEN:
                return self._parse_call()
            raise ParseError(f"Expected '(' after '{tok.text}' to call it",
                             loc, token_kind=kind.name)

        raise ParseError(f"Unexpected token {tok.text!r} ({kind.name})",
                         loc, token_kind=kind.name)

    # -------------------------------------------------------------------
    # let
    # -------------------------------------------------------------------

    def _parse_assignment(self) -> VariableAssignment:
        loc = self._advance().position
        name_tok = self._expect(TokenKind.NAME, f"a variable name after '{DECLARATION_KEYWORD}'")
        if name_tok.text in RESERVED_WORDS:
            raise ParseError(f"Cannot use reserved word '{name_tok.text}' as a variable name",
                             name_tok.position, token_kind=name_tok.kind.name)
        self._expect(TokenKind.EQUALS, f"'=' after '{name_tok.text}'")

        start = self.pos
        while not self._at_end() and self._peek() != TokenKind.NEWLINE:
            self.pos += 1
        # The newline stays in the stream and becomes its own NewLine node.
        body_parser = Parser(self.tokens[start:self.pos], self.filename)
        body = body_parser.parse_sequence(Context.ASSIGNMENT)
        return VariableAssignment(name_tok.text, body, location=loc)

    # -------------------------------------------------------------------
    # calls
    # -------------------------------------------------------------------

    def _parse_call(self) -> FunctionCall:
        name_tok = self._advance()
        self._advance()  # (
        params: list[Node] = []
        while True:
            if self._at_end():
                raise ParseError(f"Unclosed argument list in call to '{name_tok.text}'",
                                 name_tok.position, token_kind=name_tok.kind.name)
            if self._peek() == TokenKind.PAREN_CLOSE:
                self._advance()
                break
            node = self.parse_expression(Context.ARGUMENTS)
            if node is not None:
                params.append(node)
        return FunctionCall(name_tok.text, params, location=name_tok.position)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_tokens(tokens: list[Token], filename: str = "<stdin>") -> Program:
    """Parse an already lexed token stream into an AST."""
    return Parser(tokens, filename).parse()


def parse(source: str, filename: str = "<stdin>",
          config: Optional[LexerConfig] = None) -> Program:
    """Parse XO source code into an AST."""
    tokens = tokenize(source, filename, config)
    return parse_tokens(tokens, filename)
