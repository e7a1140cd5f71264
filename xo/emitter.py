"""XO Emitter — AST → JavaScript source text.

Rendering is a pure function of the tree: no counters or other state
survive between calls, so emitting the same AST twice gives identical text.
Layout is left to the external formatter (see xo.reformat).
"""

from __future__ import annotations

import json

from xo.ast_nodes import (
    Node, Program, VariableAssignment, FunctionCall,
    LiteralNumber, LiteralString, LiteralBoolean,
    Comment, CommentBlock, NewLine,
)
from xo.errors import UnsupportedNodeError
from xo.parser import TRUE_KEYWORD, FALSE_KEYWORD


class JavaScriptEmitter:
    """Emits JavaScript from an XO AST."""

    language = "javascript"
    declaration_keyword = "let"
    line_comment = "//"
    booleans = {TRUE_KEYWORD: "true", FALSE_KEYWORD: "false"}

    def emit_program(self, program: Program) -> str:
        return self._emit_sequence(program.body)

    def _emit_sequence(self, nodes: list[Node]) -> str:
        out = ""
        for i, node in enumerate(nodes):
            out += self.emit_node(node)
            # Block comments render as line comments, so anything after one
            # on the same source line has to move to the next line.
            if isinstance(node, CommentBlock) and i + 1 < len(nodes) \
                    and not isinstance(nodes[i + 1], NewLine):
                out += "\n"
        return out

    def emit_node(self, node: Node) -> str:
        if isinstance(node, Program):
            return self.emit_program(node)

        if isinstance(node, VariableAssignment):
            head = f"{self.declaration_keyword} {node.name}"
            if not node.body:
                return head
            return f"{head} = " + self._emit_sequence(node.body)

        if isinstance(node, NewLine):
            return "\n"

        if isinstance(node, Comment):
            return self.line_comment + node.text

        if isinstance(node, CommentBlock):
            # A block comment becomes one line comment per line.
            return "\n".join(self.line_comment + line for line in node.text.split("\n"))

        if isinstance(node, LiteralNumber):
            return node.text

        if isinstance(node, LiteralString):
            return json.dumps(node.text, ensure_ascii=False)

        if isinstance(node, LiteralBoolean):
            if node.text not in self.booleans:
                raise UnsupportedNodeError(node)
            return self.booleans[node.text]

        if isinstance(node, FunctionCall):
            args = ", ".join(self.emit_node(p) for p in node.params)
            return f"{node.name}({args})"

        raise UnsupportedNodeError(node)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def emit(program: Program) -> str:
    """Render an XO AST as JavaScript source."""
    return JavaScriptEmitter().emit_program(program)
