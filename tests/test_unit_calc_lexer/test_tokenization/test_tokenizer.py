"""Comprehensive tests for calculator expression tokenization."""

import logging
import random

import pytest

from unit_calc_lexer.tokenization import (
    LITERAL_KINDS,
    Lexer,
    LexerError,
    Token,
    TokenKind,
    TokenStream,
    UnsupportedTokenError,
    tokenize,
)
from unit_calc_lexer.tokenization.tokenizer import (
    classify,
    clean_input,
    find_unsupported,
)


class TestTokenKind:
    """Tests for TokenKind enumeration."""

    def test_literals(self):
        """Test every non-numeric kind exposes its surface form."""
        assert TokenKind.PLUS.literal == "+"
        assert TokenKind.MINUS.literal == "-"
        assert TokenKind.TIMES.literal == "*"
        assert TokenKind.DIVIDE.literal == "/"
        assert TokenKind.L_PAREN.literal == "("
        assert TokenKind.R_PAREN.literal == ")"
        assert TokenKind.INCH.literal == "in"
        assert TokenKind.POINT.literal == "pt"
        assert TokenKind.NUMBER.literal is None

    def test_literal_table(self):
        """Test the literal table maps every fixed form and nothing else."""
        assert len(LITERAL_KINDS) == 8
        assert LITERAL_KINDS["in"] is TokenKind.INCH
        assert TokenKind.NUMBER not in LITERAL_KINDS.values()

    def test_literal_table_is_read_only(self):
        """Test the shared literal table cannot be modified."""
        with pytest.raises(TypeError):
            LITERAL_KINDS["cm"] = TokenKind.POINT

    def test_kind_groups(self):
        """Test unit and operator helpers."""
        assert TokenKind.INCH.is_unit
        assert TokenKind.POINT.is_unit
        assert not TokenKind.NUMBER.is_unit
        assert TokenKind.DIVIDE.is_operator
        assert not TokenKind.L_PAREN.is_operator


class TestToken:
    """Tests for Token class."""

    def test_token_creation(self):
        """Test Token creation with text."""
        token = Token(TokenKind.NUMBER, "3.5", 0)
        assert token.kind is TokenKind.NUMBER
        assert token.text == "3.5"
        assert token.offset == 0
        assert str(token) == "3.5 NUMBER"

    def test_token_without_text(self):
        """Test fixed-literal tokens may omit their text."""
        token = Token(TokenKind.PLUS)
        assert token.text is None
        assert token.lexeme == "+"
        assert str(token) == "+ PLUS"

    def test_number_requires_text(self):
        """Test NUMBER tokens must carry text."""
        with pytest.raises(ValueError, match="NUMBER tokens must carry their text"):
            Token(TokenKind.NUMBER)

    def test_negative_offset_rejected(self):
        """Test offset validation."""
        with pytest.raises(ValueError, match="Offset must be >= 0"):
            Token(TokenKind.PLUS, "+", -1)

    def test_equality_ignores_offset(self):
        """Test tokens compare on kind and text only."""
        assert Token(TokenKind.NUMBER, "6", 0) == Token(TokenKind.NUMBER, "6", 4)
        assert Token(TokenKind.NUMBER, "6") != Token(TokenKind.NUMBER, "7")

    def test_token_is_immutable(self):
        """Test tokens are frozen."""
        token = Token(TokenKind.PLUS, "+")
        with pytest.raises(AttributeError):
            token.text = "-"


class TestTokenize:
    """Tests for the tokenize function."""

    def test_simple_addition(self):
        """Test tokenizing 6+4."""
        assert tokenize("6+4").to_pairs() == [
            (TokenKind.NUMBER, "6"),
            (TokenKind.PLUS, "+"),
            (TokenKind.NUMBER, "4"),
        ]

    def test_decimal_with_unit(self):
        """Test tokenizing 3.5in*2."""
        assert tokenize("3.5in*2").to_pairs() == [
            (TokenKind.NUMBER, "3.5"),
            (TokenKind.INCH, "in"),
            (TokenKind.TIMES, "*"),
            (TokenKind.NUMBER, "2"),
        ]

    def test_parenthesized_points(self):
        """Test tokenizing (1+2)pt."""
        assert tokenize("(1+2)pt").to_pairs() == [
            (TokenKind.L_PAREN, "("),
            (TokenKind.NUMBER, "1"),
            (TokenKind.PLUS, "+"),
            (TokenKind.NUMBER, "2"),
            (TokenKind.R_PAREN, ")"),
            (TokenKind.POINT, "pt"),
        ]

    def test_all_operators(self):
        """Test each operator maps to its kind."""
        kinds = [token.kind for token in tokenize("1+2-3*4/5")]
        assert kinds == [
            TokenKind.NUMBER, TokenKind.PLUS, TokenKind.NUMBER,
            TokenKind.MINUS, TokenKind.NUMBER, TokenKind.TIMES,
            TokenKind.NUMBER, TokenKind.DIVIDE, TokenKind.NUMBER,
        ]

    def test_greedy_numbers(self):
        """Test numbers consume the longest numeric run."""
        stream = tokenize("1234.5678")
        assert stream.to_pairs() == [(TokenKind.NUMBER, "1234.5678")]

    def test_whitespace_is_removed(self):
        """Test spaces anywhere produce the same stream as none."""
        assert tokenize("  6 + 4  ") == tokenize("6+4")
        assert tokenize("  6 + 4  ").source == "6+4"

    def test_whitespace_inside_number_joins_digits(self):
        """Test whitespace is deleted rather than treated as a separator."""
        assert tokenize("1 2").to_pairs() == [(TokenKind.NUMBER, "12")]

    def test_tabs_and_newlines_removed(self):
        """Test all whitespace characters are removed."""
        assert tokenize("\t3in\n+ 4pt\r\n") == tokenize("3in+4pt")

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_empty_input(self, text):
        """Test blank input gives an empty stream."""
        stream = tokenize(text)
        assert len(stream) == 0
        assert stream.to_pairs() == []
        assert not stream

    def test_offsets_follow_cleaned_input(self):
        """Test token offsets index into the whitespace-stripped input."""
        stream = tokenize("12 in + 3")
        assert [token.offset for token in stream] == [0, 2, 4, 5]

    def test_reconstruct_equals_source(self):
        """Test token texts concatenate back to the cleaned input."""
        for text in ["(2in+ 3.25pt) / 4", "1-2-3", "in pt in", "((()))", "0.5in*10"]:
            stream = tokenize(text)
            assert stream.reconstruct() == stream.source == clean_input(text)

    @pytest.mark.parametrize("seed", range(50))
    def test_random_valid_runs_reconstruct(self, seed):
        """Test generated expressions lex back into their pieces."""
        rng = random.Random(seed)
        numbers = ["0", "7", "12", "3.5", "10.25", "007"]
        symbols = ["+", "-", "*", "/", "(", ")", "in", "pt"]

        pieces = []
        for _ in range(rng.randint(0, 20)):
            # Adjacent numbers would merge into one run
            if pieces and pieces[-1] in numbers:
                pieces.append(rng.choice(symbols))
            else:
                pieces.append(rng.choice(numbers + symbols))
        text = "".join(piece + rng.choice(["", "", " ", "  ", "\t"]) for piece in pieces)

        stream = tokenize(text)
        assert [token.text for token in stream] == pieces
        assert stream.reconstruct() == stream.source == "".join(pieces)

    def test_unit_words_alone(self):
        """Test unit suffixes are tokens of their own."""
        assert tokenize("inpt").to_pairs() == [
            (TokenKind.INCH, "in"),
            (TokenKind.POINT, "pt"),
        ]

    def test_idempotent(self):
        """Test repeated calls yield identical content."""
        first = tokenize("(1.5in + 2) * 3pt")
        second = tokenize("(1.5in + 2) * 3pt")
        assert first == second
        assert first is not second

    def test_stream_is_immutable(self):
        """Test streams cannot be reassigned."""
        stream = tokenize("1+1")
        assert isinstance(stream.tokens, tuple)
        with pytest.raises(AttributeError):
            stream.tokens = ()

    def test_debug_logging(self, caplog):
        """Test successful tokenization is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="unit_calc_lexer.tokenization.tokenizer"):
            tokenize("1+1")
        assert "Tokenized expression" in caplog.text


class TestUnsupportedInput:
    """Tests for rejection of unrecognized input."""

    def test_letter_after_number(self):
        """Test 6a reports the letter."""
        with pytest.raises(UnsupportedTokenError, match="Unsupported token: a") as exc_info:
            tokenize("6a")
        assert exc_info.value.offending_text == "a"
        assert exc_info.value.offset == 1

    def test_is_lexer_error(self):
        """Test the error belongs to the lexer error family."""
        with pytest.raises(LexerError):
            tokenize("6a")

    def test_leading_dot_decimal(self):
        """Test .5 is unsupported."""
        with pytest.raises(UnsupportedTokenError) as exc_info:
            tokenize(".5")
        assert exc_info.value.offending_text == "."
        assert exc_info.value.offset == 0

    def test_trailing_dot(self):
        """Test 5. is unsupported."""
        with pytest.raises(UnsupportedTokenError) as exc_info:
            tokenize("5.")
        assert exc_info.value.offending_text == "."

    def test_unrecognized_run(self):
        """Test the whole unrecognized run is reported."""
        with pytest.raises(UnsupportedTokenError) as exc_info:
            tokenize("3 + 4cm")
        assert exc_info.value.offending_text == "cm"
        assert exc_info.value.offset == 3

    def test_run_stops_at_next_symbol(self):
        """Test the reported run ends where recognized text resumes."""
        with pytest.raises(UnsupportedTokenError) as exc_info:
            tokenize("2xin")
        assert exc_info.value.offending_text == "x"

    def test_partial_unit(self):
        """Test a lone unit letter is unsupported."""
        with pytest.raises(UnsupportedTokenError) as exc_info:
            tokenize("5i")
        assert exc_info.value.offending_text == "i"

    def test_no_partial_result(self):
        """Test rejection happens even when valid text precedes the error."""
        with pytest.raises(UnsupportedTokenError):
            tokenize("1+2+3+4+5+6+7+%")

    def test_non_ascii_digits_rejected(self):
        """Test only ASCII digits form numbers."""
        with pytest.raises(UnsupportedTokenError):
            tokenize("٣")

    def test_first_error_wins(self):
        """Test the earliest unsupported run is reported."""
        with pytest.raises(UnsupportedTokenError) as exc_info:
            tokenize("1a+2b")
        assert exc_info.value.offending_text == "a"


class TestHelpers:
    """Tests for module-level helpers."""

    def test_clean_input(self):
        """Test whitespace removal."""
        assert clean_input("  1 +\t2 ") == "1+2"

    def test_find_unsupported_none(self):
        """Test fully covered input."""
        assert find_unsupported("(1+2)pt") is None
        assert find_unsupported("") is None

    def test_find_unsupported_reports_run(self):
        """Test offset and text of the gap."""
        assert find_unsupported("1+abc") == (2, "abc")

    def test_classify(self):
        """Test literal lookup and NUMBER fallback."""
        assert classify("pt").kind is TokenKind.POINT
        assert classify("42").kind is TokenKind.NUMBER
        assert classify("42", 3).offset == 3


class TestLexer:
    """Tests for the Lexer object wrapper."""

    def test_lexer_token_list(self):
        """Test the token list snapshot."""
        lexer = Lexer("6+4")
        assert [str(token) for token in lexer.get_token_list()] == [
            "6 NUMBER", "+ PLUS", "4 NUMBER",
        ]
        assert len(lexer) == 3
        assert lexer.source == "6+4"

    def test_lexer_raises_on_construction(self):
        """Test invalid input fails in the constructor."""
        with pytest.raises(UnsupportedTokenError, match="a"):
            Lexer("6a")

    def test_lexer_stream(self):
        """Test the lexer exposes the same stream tokenize builds."""
        lexer = Lexer("2in")
        assert isinstance(lexer.tokens, TokenStream)
        assert lexer.tokens == tokenize("2in")
        assert list(lexer) == list(tokenize("2in"))
