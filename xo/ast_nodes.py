"""XO AST Node definitions.

One dataclass per node kind, each carrying only the fields that kind needs.
Nodes own their children; the tree has no sharing and no cycles.
Source locations are kept for diagnostics but ignored by equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from xo.errors import SourceLocation


@dataclass
class Node:
    location: Optional[SourceLocation] = field(default=None, kw_only=True, compare=False)


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

@dataclass
class LiteralNumber(Node):
    text: str


@dataclass
class LiteralString(Node):
    text: str


@dataclass
class LiteralBoolean(Node):
    """Holds the source spelling of the boolean word, e.g. ``true``."""
    text: str


# ---------------------------------------------------------------------------
# Trivia kept in the tree so output mirrors the source layout
# ---------------------------------------------------------------------------

@dataclass
class Comment(Node):
    text: str


@dataclass
class CommentBlock(Node):
    text: str


@dataclass
class NewLine(Node):
    pass


# ---------------------------------------------------------------------------
# Compound forms
# ---------------------------------------------------------------------------

@dataclass
class VariableAssignment(Node):
    """let name = body..."""
    name: str
    body: list[Node] = field(default_factory=list)


@dataclass
class FunctionCall(Node):
    name: str
    params: list[Node] = field(default_factory=list)


@dataclass
class Program(Node):
    body: list[Node] = field(default_factory=list)
