"""
Tests for the layoutdsl parser (Token Stream → Program).

Covers:
    - The value classifier and its lookahead
    - Single lines with every optional part present or absent
    - The default-format header
    - Separators, trailing commas and empty programs
    - Syntax and missing-field errors, with positions
"""

import pytest
from layoutdsl.errors import LayoutParseError, LayoutSyntaxError, MissingRequiredField
from layoutdsl.expressions import (
    Clone,
    DefaultConstructor,
    EitherKind,
    Identifier,
    Literal,
    Reference,
)
from layoutdsl.lexer import TokenKind, tokenize
from layoutdsl.model import Line, Position
from layoutdsl.parser import (
    LayoutParser,
    ParserState,
    TokenCursor,
    classify_value,
    parse_program,
    peek_value_kind,
    value_present,
)


def cursor_for(source):
    return TokenCursor(tokenize(source))


class TestValueClassifier:
    """Test lookahead classification of values."""

    def test_literal(self):
        cursor = cursor_for('"Hello"')
        assert peek_value_kind(cursor) is EitherKind.LITERAL
        assert classify_value(cursor) == Literal('"Hello"', "Hello")
        assert cursor.at(TokenKind.EOF)

    def test_identifier(self):
        cursor = cursor_for("str_slice")
        assert peek_value_kind(cursor) is EitherKind.IDENTIFIER
        assert classify_value(cursor) == Identifier("str_slice")

    def test_reference_consumes_both_tokens(self):
        cursor = cursor_for("&string")
        assert peek_value_kind(cursor) is EitherKind.REFERENCE
        assert classify_value(cursor) == Reference("string")
        assert cursor.at(TokenKind.EOF)

    def test_peek_does_not_consume(self):
        cursor = cursor_for("x")
        peek_value_kind(cursor)
        value_present(cursor)
        assert cursor.pos == 0

    @pytest.mark.parametrize("source", ["<fmt>", ",", ";", ">", "", "&", "&1", "& ,"])
    def test_not_present_leaves_cursor(self, source):
        """Anything that is not a value is reported absent without consuming."""
        cursor = cursor_for(source)
        assert not value_present(cursor)
        assert classify_value(cursor) is None
        assert cursor.pos == 0

    def test_bool_and_char_literals(self):
        assert classify_value(cursor_for("true")) == Literal("true", True)
        assert classify_value(cursor_for("'c'")) == Literal("'c'", "c")


class TestTokenCursor:
    """Test the cursor the classifier reads from."""

    def test_requires_eof(self):
        tokens = tokenize("x")[:-1]
        with pytest.raises(ValueError):
            TokenCursor(tokens)

    def test_peek_past_end_returns_eof(self):
        cursor = cursor_for("x")
        assert cursor.peek(5).kind is TokenKind.EOF

    def test_advance_stops_at_eof(self):
        cursor = cursor_for("")
        cursor.advance()
        cursor.advance()
        assert cursor.pos == 0

    def test_expect_names_expected_token(self):
        cursor = cursor_for("x")
        with pytest.raises(LayoutSyntaxError) as exc:
            cursor.expect(TokenKind.SEMI)
        assert exc.value.expected == "';'"
        assert exc.value.position == Position(0, 1, 1)


class TestLineParser:
    """Test parsing of a single `text [spacing] [<format>]` line."""

    def parse_line(self, source):
        return LayoutParser(tokenize(source)).parse_line()

    def test_text_only(self):
        line = self.parse_line('"Hello"')
        assert line == Line(text=Literal('"Hello"', "Hello"))
        assert line.spacing is None
        assert line.format is None

    def test_text_and_spacing(self):
        line = self.parse_line("&string space")
        assert line.text == Reference("string")
        assert line.spacing == Identifier("space")
        assert line.format is None

    def test_text_and_format(self):
        line = self.parse_line('"a" <bold>')
        assert line.spacing is None
        assert line.format == Identifier("bold")

    def test_all_parts(self):
        line = self.parse_line('"World!" 1.0 <secondary_fmt>')
        assert line.text == Literal('"World!"', "World!")
        assert line.spacing == Literal("1.0", 1.0)
        assert line.format == Identifier("secondary_fmt")

    def test_reference_spacing(self):
        line = self.parse_line("text &gap")
        assert line.spacing == Reference("gap")

    def test_line_records_start_position(self):
        line = self.parse_line('   "a"')
        assert line.position == Position(3, 1, 4)

    def test_missing_text(self):
        with pytest.raises(MissingRequiredField) as exc:
            self.parse_line("<fmt>")
        assert exc.value.field == "text"
        assert exc.value.position.offset == 0

    def test_ampersand_without_name_in_text_position(self):
        with pytest.raises(LayoutSyntaxError) as exc:
            self.parse_line("&1")
        assert exc.value.expected == "identifier"
        assert exc.value.position.offset == 1

    def test_unterminated_bracket(self):
        with pytest.raises(LayoutSyntaxError) as exc:
            self.parse_line('"x" <fmt')
        assert exc.value.expected == "'>'"
        assert exc.value.position.offset == 8

    def test_unterminated_bracket_ignores_trailing_whitespace(self):
        """End of input is reported right after the last token."""
        with pytest.raises(LayoutSyntaxError) as exc:
            self.parse_line('"x" <fmt\n\n   ')
        assert exc.value.position == Position(offset=8, line=1, column=9)

    def test_missing_semicolon_at_end_of_input(self):
        with pytest.raises(LayoutSyntaxError) as exc:
            parse_program("fmt  ")
        assert exc.value.position.offset == 3

    def test_bracket_without_identifier(self):
        with pytest.raises(LayoutSyntaxError) as exc:
            self.parse_line('"x" <"fmt">')
        assert exc.value.expected == "identifier"
        assert exc.value.position.offset == 5

    def test_empty_bracket(self):
        with pytest.raises(LayoutSyntaxError):
            self.parse_line('"x" <>')


class TestProgramParser:
    """Test header handling and line sequences."""

    def test_header_resolves_to_clone(self):
        program = parse_program('default_fmt; "a"')
        assert program.header == Identifier("default_fmt")
        assert program.default_format == Clone(Identifier("default_fmt"))

    def test_no_header_resolves_to_default_constructor(self):
        program = parse_program('"a", "b"')
        assert program.header is None
        assert program.default_format == DefaultConstructor()

    def test_lines_keep_declaration_order(self):
        program = parse_program('"a", "b", "c"')
        assert [line.text.value for line in program.lines] == ["a", "b", "c"]

    def test_trailing_comma(self):
        assert len(parse_program('"a", "b",')) == 2

    def test_empty_program(self):
        program = parse_program("")
        assert program.lines == ()
        assert program.default_format == DefaultConstructor()

    def test_header_only(self):
        program = parse_program("fmt;")
        assert program.lines == ()
        assert program.default_format == Clone(Identifier("fmt"))

    def test_multiline_source(self):
        source = 'fmt;\n"a" 2.0,\n"b" <other>,\n'
        program = parse_program(source)
        assert len(program) == 2
        assert program.lines[1].position.line == 3

    def test_header_needs_semicolon(self):
        """A leading identifier is always read as the header."""
        with pytest.raises(LayoutSyntaxError) as exc:
            parse_program("str_slice space")
        assert exc.value.expected == "';'"
        assert exc.value.position.offset == 10

    def test_missing_separator(self):
        with pytest.raises(LayoutSyntaxError) as exc:
            parse_program('"a" 1.0 2.0')
        assert exc.value.expected == "','"
        assert exc.value.position.offset == 8

    def test_double_comma(self):
        with pytest.raises(MissingRequiredField) as exc:
            parse_program('"a",, "b"')
        assert exc.value.position.offset == 4

    def test_leading_comma(self):
        with pytest.raises(MissingRequiredField):
            parse_program(',')

    def test_format_only_line(self):
        with pytest.raises(MissingRequiredField):
            parse_program("<fmt>")

    def test_second_header_rejected(self):
        with pytest.raises(LayoutSyntaxError):
            parse_program('a; b; "x"')

    def test_accepts_token_list(self):
        program = parse_program(tokenize('"a"'))
        assert len(program) == 1

    def test_errors_share_base_class(self):
        for source in ("<fmt>", '"x" <fmt'):
            with pytest.raises(LayoutParseError):
                parse_program(source)

    def test_error_message_mentions_position(self):
        with pytest.raises(LayoutSyntaxError) as exc:
            parse_program('"x" <fmt')
        assert "line 1, column 9" in str(exc.value)


class TestParserState:
    """The parser walks Start → ParsingHeader → ParsingLines → Done (or Error) once."""

    def test_state_after_parse(self):
        parser = LayoutParser(tokenize('"a"'))
        assert parser.state is ParserState.START
        parser.parse_program()
        assert parser.state is ParserState.DONE

    def test_parser_is_single_use(self):
        parser = LayoutParser(tokenize('"a"'))
        parser.parse_program()
        with pytest.raises(RuntimeError):
            parser.parse_program()

    def test_failed_line_ends_in_error_state(self):
        parser = LayoutParser(tokenize('"a", <x>'))
        with pytest.raises(MissingRequiredField):
            parser.parse_program()
        assert parser.state is ParserState.ERROR

    def test_failed_header_ends_in_error_state(self):
        parser = LayoutParser(tokenize('fmt "a"'))
        with pytest.raises(LayoutSyntaxError):
            parser.parse_program()
        assert parser.state is ParserState.ERROR

    def test_errored_parser_is_not_reusable(self):
        parser = LayoutParser(tokenize('"x" <fmt'))
        with pytest.raises(LayoutSyntaxError):
            parser.parse_program()
        with pytest.raises(RuntimeError):
            parser.parse_program()
