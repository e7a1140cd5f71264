"""XO Output Formatters — human-friendly rendering of compiler internals.

    format_tokens — one line per token with kind, text and position
    format_ast    — indented tree, any depth, long child lists truncated
    node_to_dict  — machine-readable AST (for --json)
    format_error  — colored diagnostic for a CompileError
"""

from __future__ import annotations

import os
import sys
from dataclasses import fields
from typing import Any, Dict, List, Optional

from xo.ast_nodes import Node
from xo.errors import CompileError
from xo.lexer import Token

DEFAULT_MAX_ITEMS = 100


# ── ANSI color helpers ───────────────────────────────────────────────────

def _no_color() -> bool:
    return os.environ.get("NO_COLOR") is not None or not sys.stdout.isatty()


def _c(code: str, text: str) -> str:
    if _no_color():
        return text
    return f"\033[{code}m{text}\033[0m"


def red(t: str) -> str:
    return _c("31", t)


def green(t: str) -> str:
    return _c("32", t)


def cyan(t: str) -> str:
    return _c("36", t)


def bold(t: str) -> str:
    return _c("1", t)


def dim(t: str) -> str:
    return _c("2", t)


ICON_ERROR = "✖"
ICON_OK = "✔"


def _more(count: int, indent: str = "") -> str:
    return f"{indent}{dim(f'… {count} more')}"


# ── Tokens ───────────────────────────────────────────────────────────────

def format_tokens(tokens: List[Token], max_items: Optional[int] = DEFAULT_MAX_ITEMS) -> str:
    lines: List[str] = []
    shown = tokens if max_items is None else tokens[:max_items]
    for tok in shown:
        pos = f"{tok.position.line}:{tok.position.column}"
        lines.append(f"{dim(f'{pos:>8}')}  {cyan(f'{tok.kind.name:<14}')} {tok.text!r}")
    if len(shown) < len(tokens):
        lines.append(_more(len(tokens) - len(shown)))
    return "\n".join(lines)


# ── AST ──────────────────────────────────────────────────────────────────

def _child_lists(node: Node) -> Dict[str, List[Node]]:
    return {
        f.name: getattr(node, f.name)
        for f in fields(node)
        if isinstance(getattr(node, f.name), list)
    }


def _scalars(node: Node) -> Dict[str, Any]:
    return {
        f.name: getattr(node, f.name)
        for f in fields(node)
        if f.name != "location" and not isinstance(getattr(node, f.name), list)
    }


def format_ast(node: Node, max_items: Optional[int] = DEFAULT_MAX_ITEMS, _depth: int = 0) -> str:
    pad = "  " * _depth
    attrs = " ".join(f"{k}={v!r}" for k, v in _scalars(node).items())
    header = f"{pad}{bold(type(node).__name__)}"
    if attrs:
        header += f" {attrs}"
    lines = [header]
    for name, children in _child_lists(node).items():
        lines.append(f"{pad}  {dim(name + ':')}")
        shown = children if max_items is None else children[:max_items]
        for child in shown:
            lines.append(format_ast(child, max_items, _depth + 2))
        if len(shown) < len(children):
            lines.append(_more(len(children) - len(shown), pad + "    "))
    return "\n".join(lines)


def node_to_dict(node: Node) -> Dict[str, Any]:
    d: Dict[str, Any] = {"kind": type(node).__name__}
    d.update(_scalars(node))
    for name, children in _child_lists(node).items():
        d[name] = [node_to_dict(child) for child in children]
    if node.location is not None:
        d["location"] = {"line": node.location.line, "column": node.location.column}
    return d


# ── Errors ───────────────────────────────────────────────────────────────

def format_error(err: CompileError, filepath: Optional[str] = None) -> str:
    lines: List[str] = []
    for e in err.errors:
        loc = f"{e.location}: " if e.location else (f"{filepath}: " if filepath else "")
        lines.append(f" {red(ICON_ERROR)}  {loc}{red(e.message)} {dim('[' + e.kind.value + ']')}")
    return "\n".join(lines)


def format_ok(message: str) -> str:
    return f" {green(ICON_OK)}  {message}"
