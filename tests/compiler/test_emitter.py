"""XO Emitter Tests — EMIT-001 through EMIT-005."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from xo.ast_nodes import (
    Node, Program, VariableAssignment, FunctionCall,
    LiteralNumber, LiteralBoolean, CommentBlock, NewLine,
)
from xo.emitter import JavaScriptEmitter, emit
from xo.errors import CompileError, UnsupportedNodeError
from xo.parser import parse
from xo.pipeline import compile_source


@dataclass
class Unknown(Node):
    pass


class TestEMIT001:
    """EMIT-001: Declarations, literals and newlines."""

    def test_empty_program(self):
        assert emit(Program()) == ""

    def test_assignment(self):
        assert emit(parse("let x = 5\n")) == "let x = 5\n"

    def test_assignment_without_body(self):
        assert emit(parse("let x =\n")) == "let x\n"

    def test_number_separators_dropped(self):
        assert emit(parse("let n = 1_000")) == "let n = 1000"

    def test_string_is_double_quoted(self):
        assert emit(parse("let s = 'say \"hi\"'")) == 'let s = "say \\"hi\\""'

    def test_booleans_are_not_inverted(self):
        assert emit(parse("let t = true\nlet f = false\n")) == "let t = true\nlet f = false\n"

    def test_body_nodes_concatenated(self):
        tree = Program(body=[VariableAssignment("x", [LiteralNumber("1"), LiteralNumber("2")])])
        assert emit(tree) == "let x = 12"


class TestEMIT002:
    """EMIT-002: Comments."""

    def test_line_comment(self):
        assert emit(parse("// hi")) == "// hi"

    def test_block_comment_becomes_line_comments(self):
        assert emit(parse("/* a\nb */")) == "// a\n//b "

    def test_nested_block_comment_text_kept(self):
        tree = Program(body=[CommentBlock(" a /* b */ c ")])
        assert emit(tree) == "// a /* b */ c "

    def test_code_after_inline_block_comment_moves_to_next_line(self):
        assert emit(parse("/* c */ f(1)\n")) == "// c \nf(1)\n"

    def test_inline_block_comment_in_assignment_body(self):
        assert emit(parse("let x = /* c */ 1\n")) == "let x = // c \n1\n"

    def test_block_comment_before_newline_not_doubled(self):
        assert emit(parse("/* c */\nf(1)")) == "// c \nf(1)"


class TestEMIT003:
    """EMIT-003: Function calls."""

    def test_nested_call(self):
        assert emit(parse("print(add(1, 2), 'x')")) == 'print(add(1, 2), "x")'

    def test_multiline_call_collapses(self):
        assert emit(parse("f(\n1,\n2\n)\n")) == "f(1, 2)\n"


class TestEMIT004:
    """EMIT-004: Rendering is deterministic."""

    def test_same_tree_twice(self):
        tree = parse("// c\nlet x = f(1, 'a', true)\n/* b\n */\n")
        first = emit(tree)
        second = emit(tree)
        assert first == second

    def test_fresh_emitters_agree(self):
        tree = Program(body=[FunctionCall("f", [LiteralBoolean("false")]), NewLine()])
        assert JavaScriptEmitter().emit_program(tree) == JavaScriptEmitter().emit_program(tree)


class TestEMIT005:
    """EMIT-005: Unknown node kinds are internal errors."""

    def test_unknown_node(self):
        with pytest.raises(UnsupportedNodeError) as exc:
            emit(Program(body=[Unknown()]))
        assert not isinstance(exc.value, CompileError)
        assert exc.value.error.to_dict()["kind"] == "internal_error"
        assert "Unknown" in str(exc.value)

    def test_unknown_boolean_spelling(self):
        with pytest.raises(UnsupportedNodeError):
            emit(Program(body=[LiteralBoolean("maybe")]))


class TestPipeline:
    """Lex, parse and emit in one call."""

    def test_compile_source(self):
        source = "// greet\nlet name = 'xo'\nprint(greet(name_of(1)))\n"
        assert compile_source(source) == (
            '// greet\nlet name = "xo"\nprint(greet(name_of(1)))\n'
        )

    def test_example_program(self):
        path = Path(__file__).resolve().parents[2] / "examples" / "hello.xo"
        out = compile_source(path.read_text(encoding="utf-8"), str(path))
        assert 'let greeting = "hello, world"' in out
        assert "let count = 1000" in out
        assert "//   /* like this */" in out
        assert 'print("hello, world")\n' in out
        assert 'log(1000, true, join("a", "b"))\n' in out

    def test_errors_propagate(self):
        with pytest.raises(CompileError):
            compile_source("let = 1")
