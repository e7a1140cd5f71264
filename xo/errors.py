"""Structured error objects for the XO compiler.

Every user-facing error carries a kind, a message and the 1-based source
location it refers to, and can be rendered as a dict or JSON for tooling.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    LEX_ERROR = "lex_error"
    PARSE_ERROR = "parse_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: int
    file: str = "<stdin>"

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass
class XoError:
    kind: ErrorKind
    message: str
    location: Optional[SourceLocation] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.location:
            d["location"] = {
                "file": self.location.file,
                "line": self.location.line,
                "column": self.location.column,
            }
        if self.details:
            d["details"] = self.details
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        return f"[{self.kind.value}]{loc}: {self.message}"


def lex_error(
    message: str,
    location: Optional[SourceLocation] = None,
    character: Optional[str] = None,
) -> XoError:
    details: dict[str, Any] = {}
    if character is not None:
        details["character"] = character
    return XoError(
        kind=ErrorKind.LEX_ERROR,
        message=message,
        location=location,
        details=details,
    )


def parse_error(
    message: str,
    location: Optional[SourceLocation] = None,
    token_kind: Optional[str] = None,
) -> XoError:
    details: dict[str, Any] = {}
    if token_kind is not None:
        details["token_kind"] = token_kind
    return XoError(
        kind=ErrorKind.PARSE_ERROR,
        message=message,
        location=location,
        details=details,
    )


class CompileError(Exception):
    """Exception wrapping one or more XoErrors."""

    def __init__(self, errors: list[XoError] | XoError):
        if isinstance(errors, XoError):
            errors = [errors]
        self.errors = errors
        super().__init__(self._format())

    def _format(self) -> str:
        return "\n".join(str(e) for e in self.errors)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps([e.to_dict() for e in self.errors], indent=indent)


class LexError(CompileError):
    """Unrecognised character or end of input in the middle of a token."""

    def __init__(self, message: str, position: SourceLocation,
                 character: Optional[str] = None):
        self.message = message
        self.position = position
        super().__init__(lex_error(message, position, character))


class ParseError(CompileError):
    """Token sequence that matches no grammar rule."""

    def __init__(self, message: str, position: Optional[SourceLocation],
                 token_kind: Optional[str] = None):
        self.message = message
        self.position = position
        super().__init__(parse_error(message, position, token_kind))


class UnsupportedNodeError(RuntimeError):
    """The emitter met a node kind it has no rendering for.

    This is an internal invariant failure, not a problem with the user's
    source, so it is not a CompileError.
    """

    def __init__(self, node: Any):
        self.node = node
        self.error = XoError(
            kind=ErrorKind.INTERNAL_ERROR,
            message=f"No emitter rule for node kind '{type(node).__name__}'",
            location=getattr(node, "location", None),
        )
        super().__init__(str(self.error))


class FormatterError(Exception):
    """The external code formatter could not be run or rejected its input."""

    def __init__(self, message: str, command: Optional[list[str]] = None,
                 stderr: str = ""):
        self.command = command or []
        self.stderr = stderr
        super().__init__(message)
