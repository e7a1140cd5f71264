"""XO Lexer — Tokenizer with line/column tracking.

Produces a stream of tokens from XO source code. Spaces and tabs are
skipped; newlines are kept as tokens because they terminate a declaration.
The lexer knows no keywords: every identifier-like run is a NAME and the
parser decides which names are reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from xo.errors import LexError, SourceLocation

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    NAME = auto()
    NUMBER = auto()
    STRING = auto()
    COMMENT = auto()
    COMMENT_BLOCK = auto()
    EQUALS = auto()
    COMMA = auto()
    PAREN_OPEN = auto()
    PAREN_CLOSE = auto()
    BRACE_OPEN = auto()
    BRACE_CLOSE = auto()
    NEWLINE = auto()


PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.BRACE_OPEN,
    "}": TokenKind.BRACE_CLOSE,
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
    ",": TokenKind.COMMA,
    "=": TokenKind.EQUALS,
}

WHITESPACE = (" ", "\t", "\r")
DIGITS = "0123456789"
DIGIT_SEPARATOR = "_"
DEFAULT_QUOTE = "'"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: SourceLocation

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.position})"


@dataclass(frozen=True)
class LexerConfig:
    """Lexer settings that differ between dialects of the language."""
    quote: str = DEFAULT_QUOTE

    def __post_init__(self) -> None:
        if len(self.quote) != 1:
            raise ValueError(f"String delimiter must be a single character, got {self.quote!r}")
        q = self.quote
        if q in PUNCTUATION or q in WHITESPACE or q in ("\n", "/", DIGIT_SEPARATOR):
            raise ValueError(f"String delimiter {q!r} is already a token character")
        if q in DIGITS or q.isalpha():
            raise ValueError(f"String delimiter {q!r} would clash with names or numbers")


class Lexer:
    """Tokenizer for XO source code."""

    def __init__(self, source: str, filename: str = "<stdin>",
                 config: Optional[LexerConfig] = None):
        self.source = source
        self.filename = filename
        self.config = config or LexerConfig()
        self.pos = 0
        self.line = 1
        self.column = 1

    def _loc(self) -> SourceLocation:
        return SourceLocation(self.line, self.column, self.filename)

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _peek_ahead(self, offset: int = 1) -> Optional[str]:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return None

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    @staticmethod
    def _is_digit(ch: Optional[str]) -> bool:
        return ch is not None and ch in DIGITS

    def _read_line_comment(self) -> Token:
        loc = self._loc()
        self._advance()
        self._advance()
        value = ""
        while not self._at_end() and self.source[self.pos] != "\n":
            value += self._advance()
        return Token(TokenKind.COMMENT, value, loc)

    def _read_block_comment(self) -> Token:
        loc = self._loc()
        self._advance()
        self._advance()
        depth = 1
        value = ""
        while True:
            if self._at_end():
                raise LexError("Unterminated block comment", loc)
            ch = self.source[self.pos]
            nxt = self._peek_ahead()
            if ch == "/" and nxt == "*":
                depth += 1
                value += self._advance() + self._advance()
            elif ch == "*" and nxt == "/":
                depth -= 1
                if depth == 0:
                    self._advance()
                    self._advance()
                    return Token(TokenKind.COMMENT_BLOCK, value, loc)
                value += self._advance() + self._advance()
            else:
                value += self._advance()

    def _read_string(self) -> Token:
        loc = self._loc()
        quote = self._advance()
        value = ""
        while not self._at_end():
            ch = self._advance()
            if ch == quote:
                return Token(TokenKind.STRING, value, loc)
            value += ch
        raise LexError("Unterminated string literal", loc)

    def _read_number(self) -> Token:
        loc = self._loc()
        value = ""
        while not self._at_end():
            ch = self.source[self.pos]
            if ch in DIGITS:
                value += self._advance()
            elif ch == DIGIT_SEPARATOR and self._is_digit(self._peek_ahead()):
                # 1_000 -> "1000"
                self._advance()
            else:
                break
        return Token(TokenKind.NUMBER, value, loc)

    def _read_name(self) -> Token:
        loc = self._loc()
        value = ""
        while not self._at_end():
            ch = self.source[self.pos]
            if ch.isalpha() or ch in DIGITS or ch == "_":
                value += self._advance()
            else:
                break
        return Token(TokenKind.NAME, value, loc)

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while not self._at_end():
            ch = self.source[self.pos]
            loc = self._loc()

            if ch in WHITESPACE:
                self._advance()
            elif ch == "\n":
                self._advance()
                tokens.append(Token(TokenKind.NEWLINE, "\n", loc))
            elif ch in PUNCTUATION:
                self._advance()
                tokens.append(Token(PUNCTUATION[ch], ch, loc))
            elif ch == "/" and self._peek_ahead() == "/":
                tokens.append(self._read_line_comment())
            elif ch == "/" and self._peek_ahead() == "*":
                tokens.append(self._read_block_comment())
            elif ch == self.config.quote:
                tokens.append(self._read_string())
            elif ch in DIGITS:
                tokens.append(self._read_number())
            elif ch.isalpha() or ch == "_":
                tokens.append(self._read_name())
            else:
                raise LexError(f"Unexpected character {ch!r}", loc, character=ch)

        logger.debug("lexed %d tokens from %s", len(tokens), self.filename)
        return tokens


def tokenize(source: str, filename: str = "<stdin>",
             config: Optional[LexerConfig] = None) -> list[Token]:
    """Convenience function to tokenize XO source code."""
    return Lexer(source, filename, config).tokenize()
