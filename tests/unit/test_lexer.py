"""
Unit tests for the configuration lexer.

Tests token classification, literal decoding, numeric literal validation,
comment handling and location tracking.
"""

import io
import pytest

from hierconf.syntax.lexer import Lexer, Token, TokenType
from hierconf.errors import LexicalError
from hierconf.models.location import Location


def tokenize(text, source="test"):
    """Return (type, value) pairs for all tokens in text."""
    return [(t.type, t.value) for t in Lexer(source, io.StringIO(text))]


class TestLexerTokens:
    """Test cases for basic token recognition."""
    
    def test_empty_input(self):
        """Test that empty input yields only END."""
        assert tokenize("") == [(TokenType.END, "")]
    
    def test_punctuation(self):
        """Test punctuation tokens."""
        assert tokenize(". { } =") == [
            (TokenType.DOT, ""),
            (TokenType.OPEN, ""),
            (TokenType.CLOSE, ""),
            (TokenType.EQUAL, ""),
            (TokenType.END, ""),
        ]
    
    def test_identifiers(self):
        """Test identifier words."""
        assert tokenize("alpha _beta gamma_9") == [
            (TokenType.WORD, "alpha"),
            (TokenType.WORD, "_beta"),
            (TokenType.WORD, "gamma_9"),
            (TokenType.END, ""),
        ]
    
    def test_dotted_key(self):
        """Test that a dotted key splits into words and dots."""
        assert tokenize("a.b") == [
            (TokenType.WORD, "a"),
            (TokenType.DOT, ""),
            (TokenType.WORD, "b"),
            (TokenType.END, ""),
        ]
    
    def test_whitespace_and_comments_skipped(self):
        """Test that whitespace and comments produce no tokens."""
        text = "# leading comment\n\t a = b # trailing\r\n# last line without newline"
        assert tokenize(text) == [
            (TokenType.WORD, "a"),
            (TokenType.EQUAL, ""),
            (TokenType.WORD, "b"),
            (TokenType.END, ""),
        ]
    
    def test_advance_updates_current_token(self):
        """Test that advance exposes the token through the lexer."""
        lexer = Lexer("test", io.StringIO("name"))
        token = lexer.advance()
        
        assert isinstance(token, Token)
        assert lexer.token is TokenType.WORD
        assert lexer.value == "name"
        lexer.advance()
        assert lexer.token is TokenType.END
    
    def test_end_is_sticky(self):
        """Test that advancing past the end keeps producing END."""
        lexer = Lexer("test", io.StringIO(""))
        assert lexer.advance().type is TokenType.END
        assert lexer.advance().type is TokenType.END
    
    def test_unexpected_character(self):
        """Test that unknown characters are rejected with their position."""
        lexer = Lexer("test", io.StringIO("a\n  @"))
        lexer.advance()
        
        with pytest.raises(LexicalError, match="unexpected character") as exc_info:
            lexer.advance()
        
        assert exc_info.value.location == Location(source="test", offset=4, line=2)


class TestStringLiterals:
    """Test cases for quoted string literals."""
    
    def test_simple_string(self):
        """Test a plain quoted string."""
        assert tokenize('"hello world"')[0] == (TokenType.WORD, "hello world")
    
    def test_empty_string(self):
        """Test an empty quoted string."""
        assert tokenize('""')[0] == (TokenType.WORD, "")
    
    def test_escapes(self):
        """Test all supported escape sequences."""
        value = tokenize(r'"\b\t\n\r\"\\"')[0][1]
        assert value == '\b\t\n\r"\\'
    
    def test_string_with_special_characters(self):
        """Test that punctuation inside strings is literal."""
        assert tokenize('"a.b {c} = #d"')[0] == (TokenType.WORD, "a.b {c} = #d")
    
    def test_unterminated_string(self):
        """Test that EOF inside a string is fatal."""
        with pytest.raises(LexicalError, match="unterminated literal"):
            tokenize('"never closed')
    
    def test_unterminated_after_backslash(self):
        """Test that EOF right after a backslash is fatal."""
        with pytest.raises(LexicalError, match="unterminated literal"):
            tokenize('"dangling\\')
    
    def test_unicode_escape_unsupported(self):
        """Test that \\u escapes fail instead of passing through."""
        with pytest.raises(LexicalError, match="unicode escapes are not supported"):
            tokenize("\"\\u0041\"")
    
    def test_unknown_escape(self):
        """Test that unknown escapes are rejected."""
        with pytest.raises(LexicalError, match="unsupported escape"):
            tokenize(r'"\q"')


class TestNumberLiterals:
    """Test cases for numeric literals."""
    
    @pytest.mark.parametrize("text", [
        "0", "42", "-7", "+7", "3.14", "-0.5", "1e10", "1E10", "2.5e-3", "6.02E+23", "-1e5"
    ])
    def test_valid_numbers_pass_through_verbatim(self, text):
        """Test that valid numbers become WORD tokens with their exact text."""
        assert tokenize(text) == [(TokenType.WORD, text), (TokenType.END, "")]
    
    @pytest.mark.parametrize("text", ["-", "+", "1.", "1e", "1e+", "-.5", "1.e5"])
    def test_malformed_numbers(self, text):
        """Test that malformed numeric literals are fatal."""
        with pytest.raises(LexicalError, match="unsupported number syntax"):
            tokenize(text)
    
    def test_number_followed_by_word(self):
        """Test that a number ends where the grammar ends."""
        assert tokenize("12abc") == [
            (TokenType.WORD, "12"),
            (TokenType.WORD, "abc"),
            (TokenType.END, ""),
        ]
    
    def test_number_error_location_is_token_start(self):
        """Test that number errors point at the literal's first character."""
        with pytest.raises(LexicalError) as exc_info:
            tokenize("a = 1e")
        
        assert exc_info.value.location.offset == 4
        assert exc_info.value.location.line == 1


class TestLocations:
    """Test cases for location tracking."""
    
    def test_token_locations(self):
        """Test offsets and lines of tokens across lines."""
        tokens = list(Lexer("cfg", io.StringIO("a = 1\n  b = 2\n")))
        locations = [(t.value, t.location.offset, t.location.line) for t in tokens]
        
        assert locations[0] == ("a", 0, 1)
        assert locations[2] == ("1", 4, 1)
        assert locations[3] == ("b", 8, 2)
        assert locations[5] == ("2", 12, 2)
    
    def test_position_tracks_next_character(self):
        """Test that position reflects consumed input."""
        lexer = Lexer("cfg", io.StringIO("abc\ndef"))
        lexer.advance()
        
        assert lexer.position.offset == 3
        assert lexer.position.line == 1
        lexer.advance()
        assert lexer.position.offset == 7
        assert lexer.position.line == 2
    
    def test_source_in_location(self):
        """Test that the source identifier is carried into locations."""
        token = Lexer("settings.conf", io.StringIO("x")).advance()
        assert token.location.source == "settings.conf"
