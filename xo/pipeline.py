"""Lex → parse → emit in one call."""

from __future__ import annotations

from typing import Optional

from xo.emitter import emit
from xo.lexer import LexerConfig, tokenize
from xo.parser import parse_tokens


def compile_source(source: str, filename: str = "<stdin>",
                   config: Optional[LexerConfig] = None) -> str:
    """Compile XO source text to unformatted JavaScript.

    Raises LexError or ParseError; nothing is returned for partially
    valid input.
    """
    tokens = tokenize(source, filename, config)
    program = parse_tokens(tokens, filename)
    return emit(program)
