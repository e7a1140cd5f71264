"""XO Parser Tests — PARSE-001 through PARSE-007.

Newlines are kept as statement nodes: ``let x = 5\\n`` parses to the
assignment followed by a NewLine node, and the emitter relies on that to
reproduce line breaks.
"""

import pytest

from xo.ast_nodes import (
    Program, VariableAssignment, FunctionCall,
    LiteralNumber, LiteralString, LiteralBoolean,
    Comment, CommentBlock, NewLine,
)
from xo.errors import CompileError, ParseError, SourceLocation
from xo.lexer import LexerConfig, tokenize
from xo.parser import Parser, parse, parse_tokens


class TestPARSE001:
    """PARSE-001: Programs and literals."""

    def test_empty_source_is_empty_program(self):
        assert parse("") == Program(body=[])

    def test_whitespace_only(self):
        assert parse("  \t ").body == []

    def test_literals(self):
        program = parse("5 'five' true false")
        assert program.body == [
            LiteralNumber("5"),
            LiteralString("five"),
            LiteralBoolean("true"),
            LiteralBoolean("false"),
        ]

    def test_parse_tokens_accepts_lexed_stream(self):
        tokens = tokenize("1\n2")
        assert parse_tokens(tokens).body == [LiteralNumber("1"), NewLine(), LiteralNumber("2")]

    def test_custom_quote(self):
        program = parse('"hi"', config=LexerConfig(quote='"'))
        assert program.body == [LiteralString("hi")]


class TestPARSE002:
    """PARSE-002: Variable assignment."""

    def test_assignment_then_newline_node(self):
        program = parse("let x = 5\n")
        assert program.body == [
            VariableAssignment("x", [LiteralNumber("5")]),
            NewLine(),
        ]

    def test_assignment_at_end_of_input(self):
        assert parse("let x = 5").body == [VariableAssignment("x", [LiteralNumber("5")])]

    def test_empty_body(self):
        assert parse("let x =\n").body == [VariableAssignment("x", []), NewLine()]

    def test_body_holds_call_and_comment(self):
        program = parse("let y = add(1, 2) // sum\n")
        assert program.body[0] == VariableAssignment("y", [
            FunctionCall("add", [LiteralNumber("1"), LiteralNumber("2")]),
            Comment(" sum"),
        ])

    def test_body_stops_at_first_newline(self):
        program = parse("let a = 1\nlet b = 2\n")
        assert program.body == [
            VariableAssignment("a", [LiteralNumber("1")]),
            NewLine(),
            VariableAssignment("b", [LiteralNumber("2")]),
            NewLine(),
        ]

    def test_location_points_at_keyword(self):
        program = parse("\nlet x = 1", filename="m.xo")
        assert program.body[1].location == SourceLocation(2, 1, "m.xo")


class TestPARSE003:
    """PARSE-003: Function calls."""

    def test_empty_call(self):
        assert parse("f()").body == [FunctionCall("f", [])]

    def test_nested_call(self):
        program = parse("print(add(1, 2), 'x', true)")
        assert program.body == [
            FunctionCall("print", [
                FunctionCall("add", [LiteralNumber("1"), LiteralNumber("2")]),
                LiteralString("x"),
                LiteralBoolean("true"),
            ]),
        ]

    def test_arguments_may_span_lines(self):
        program = parse("f(\n  1,\n  2\n)\n")
        assert program.body == [
            FunctionCall("f", [LiteralNumber("1"), LiteralNumber("2")]),
            NewLine(),
        ]

    def test_call_location(self):
        call = parse("  go()").body[0]
        assert call.location == SourceLocation(1, 3)


class TestPARSE004:
    """PARSE-004: Comments and newlines are preserved as nodes."""

    def test_comments(self):
        program = parse("// hi\n/* b */")
        assert program.body == [Comment(" hi"), NewLine(), CommentBlock(" b ")]

    def test_blank_lines(self):
        assert parse("\n\n").body == [NewLine(), NewLine()]


class TestPARSE005:
    """PARSE-005: Malformed declarations."""

    def test_missing_name(self):
        with pytest.raises(ParseError) as exc:
            parse("let 5 = 1")
        assert exc.value.position == SourceLocation(1, 5)
        assert "variable name" in exc.value.message

    def test_missing_equals(self):
        with pytest.raises(ParseError) as exc:
            parse("let x 5")
        assert exc.value.position == SourceLocation(1, 7)
        assert "'='" in exc.value.message

    def test_keyword_at_end_of_input(self):
        with pytest.raises(ParseError) as exc:
            parse("let")
        assert "end of input" in exc.value.message
        assert exc.value.position == SourceLocation(1, 1)

    def test_reserved_name(self):
        with pytest.raises(ParseError) as exc:
            parse("let true = 1")
        assert "reserved" in exc.value.message

    def test_nested_declaration(self):
        with pytest.raises(ParseError) as exc:
            parse("let x = let y = 1")
        assert exc.value.position == SourceLocation(1, 9)

    def test_declaration_in_arguments(self):
        with pytest.raises(ParseError):
            parse("f(let x = 1)")


class TestPARSE006:
    """PARSE-006: Malformed calls and stray tokens."""

    def test_bare_name(self):
        with pytest.raises(ParseError) as exc:
            parse("foo")
        assert exc.value.position == SourceLocation(1, 1)

    def test_unclosed_call(self):
        with pytest.raises(ParseError) as exc:
            parse("f(1")
        assert "Unclosed" in exc.value.message
        assert exc.value.position == SourceLocation(1, 1)

    def test_call_cannot_cross_assignment_line(self):
        with pytest.raises(ParseError) as exc:
            parse("let x = f(1\n)")
        assert exc.value.position == SourceLocation(1, 9)

    @pytest.mark.parametrize("source, kind", [
        (")", "PAREN_CLOSE"),
        ("{", "BRACE_OPEN"),
        ("=", "EQUALS"),
    ])
    def test_stray_token(self, source, kind):
        with pytest.raises(ParseError) as exc:
            parse(source)
        assert exc.value.errors[0].details == {"token_kind": kind}

    def test_comment_inside_arguments(self):
        with pytest.raises(ParseError):
            parse("f(// c\n)")


class TestPARSE007:
    """PARSE-007: Parse errors are structured compile errors."""

    def test_json_shape(self):
        with pytest.raises(CompileError) as exc:
            parse("\n  )", filename="bad.xo")
        err = exc.value.errors[0].to_dict()
        assert err["kind"] == "parse_error"
        assert err["location"] == {"file": "bad.xo", "line": 2, "column": 3}

    def test_empty_stream_still_has_a_position(self):
        with pytest.raises(ParseError) as exc:
            Parser([], filename="empty.xo").parse_expression()
        assert exc.value.position == SourceLocation(1, 1, "empty.xo")
