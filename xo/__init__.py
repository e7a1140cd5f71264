"""XO — a small language that compiles to JavaScript"""

__version__ = "0.1.0"

from xo.errors import CompileError, LexError, ParseError, UnsupportedNodeError
from xo.lexer import Lexer, LexerConfig, Token, TokenKind, tokenize
from xo.parser import Parser, parse, parse_tokens
from xo.emitter import JavaScriptEmitter, emit
from xo.pipeline import compile_source
