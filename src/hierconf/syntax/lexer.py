"""
Tokenizer for the configuration text format.

The lexer reads a character stream one character at a time and produces the
tokens consumed by ``hierconf.syntax.parser``:

    WORD   identifiers, quoted strings and numeric literals
    DOT    '.'
    OPEN   '{'
    CLOSE  '}'
    EQUAL  '='
    END    end of input

Whitespace and ``#`` comments are skipped. Numeric literals are only checked
for well-formedness; their text is passed through verbatim as a WORD.
"""

from dataclasses import dataclass
from enum import Enum
from typing import IO, Iterator, List, Optional

from ..errors import LexicalError
from ..models.location import Location


class TokenType(Enum):
    """Token classes produced by the lexer."""
    WORD = "word"
    DOT = "."
    OPEN = "{"
    CLOSE = "}"
    EQUAL = "="
    END = "end of input"


@dataclass(frozen=True)
class Token:
    """
    A single token.

    Attributes:
        type: Token class
        value: Decoded text for WORD tokens, empty otherwise
        location: Position of the token's first character
    """
    type: TokenType
    value: str
    location: Location


WHITESPACE = ' \t\r\n'
DIGITS = '0123456789'
PUNCTUATION = {
    '.': TokenType.DOT,
    '{': TokenType.OPEN,
    '}': TokenType.CLOSE,
    '=': TokenType.EQUAL,
}
ESCAPES = {
    'b': '\b',
    't': '\t',
    'n': '\n',
    'r': '\r',
    '"': '"',
    '\\': '\\',
}


def is_name_start(ch: str) -> bool:
    return len(ch) == 1 and (('a' <= ch <= 'z') or ('A' <= ch <= 'Z') or ch == '_')


def is_name_char(ch: str) -> bool:
    return is_name_start(ch) or (len(ch) == 1 and ch in DIGITS)


class NumberState(Enum):
    """States of the numeric literal recognizer."""
    BEFORE_SIGN = 0
    AFTER_SIGN = 1
    INTEGER = 2
    AFTER_DOT = 3
    FRACTION = 4
    AFTER_EXP_MARKER = 5
    AFTER_EXP_SIGN = 6
    EXPONENT = 7


# States in which a numeric literal may legally end
ACCEPTING_NUMBER_STATES = {NumberState.INTEGER, NumberState.FRACTION, NumberState.EXPONENT}


def _number_transition(state: NumberState, ch: str) -> Optional[NumberState]:
    """Next recognizer state, or None if ``ch`` does not continue the literal."""
    if not ch:
        return None
    if ch in '+-':
        if state is NumberState.BEFORE_SIGN:
            return NumberState.AFTER_SIGN
        if state is NumberState.AFTER_EXP_MARKER:
            return NumberState.AFTER_EXP_SIGN
        return None
    if ch == '.':
        return NumberState.AFTER_DOT if state is NumberState.INTEGER else None
    if ch in 'eE':
        if state in (NumberState.INTEGER, NumberState.FRACTION):
            return NumberState.AFTER_EXP_MARKER
        return None
    if ch in DIGITS:
        if state in (NumberState.BEFORE_SIGN, NumberState.AFTER_SIGN, NumberState.INTEGER):
            return NumberState.INTEGER
        if state in (NumberState.AFTER_DOT, NumberState.FRACTION):
            return NumberState.FRACTION
        return NumberState.EXPONENT
    return None


class Lexer:
    """
    Character-stream tokenizer with one character of lookahead.

    Call ``advance()`` repeatedly; each call reads exactly one token and
    exposes it through ``token``, ``value`` and ``location``. ``position``
    always reflects the next unread character.
    """

    def __init__(self, source: str, stream: IO[str]):
        """
        Initialize the lexer.

        Args:
            source: Identifier used in locations (file name, URL, label)
            stream: Text stream to tokenize
        """
        self.source = source
        self.stream = stream
        self._buffer: Optional[str] = None
        self._eof = False
        self._offset = 0
        self._line = 1
        self._token_offset = 0
        self._token_line = 1
        self._chars: List[str] = []
        self.current: Optional[Token] = None

    # Token accessors

    @property
    def token(self) -> Optional[TokenType]:
        return self.current.type if self.current else None

    @property
    def value(self) -> str:
        return self.current.value if self.current else ""

    @property
    def location(self) -> Location:
        """Location of the first character of the current token."""
        return Location(source=self.source, offset=self._token_offset, line=self._token_line)

    @property
    def position(self) -> Location:
        """Location of the next unread character."""
        return Location(source=self.source, offset=self._offset, line=self._line)

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, END included."""
        while True:
            token = self.advance()
            yield token
            if token.type is TokenType.END:
                return

    # Character input

    def _peek(self) -> str:
        if self._buffer is None:
            if self._eof:
                return ''
            self._buffer = self.stream.read(1)
            if not self._buffer:
                self._eof = True
        return self._buffer

    def _read(self) -> str:
        ch = self._peek()
        self._buffer = None
        if ch:
            self._offset += 1
            if ch == '\n':
                self._line += 1
        return ch

    def _finish(self) -> str:
        text = ''.join(self._chars)
        self._chars = []
        return text

    def _set(self, token_type: TokenType, value: str = "") -> Token:
        self.current = Token(token_type, value, self.location)
        return self.current

    # Tokenizer

    def advance(self) -> Token:
        """
        Read the next token.

        Returns:
            The token just read

        Raises:
            LexicalError: If the input does not form a valid token
        """
        while True:
            self._token_offset = self._offset
            self._token_line = self._line
            ch = self._peek()

            if not ch:
                return self._set(TokenType.END)
            if ch in WHITESPACE:
                self._read()
                continue
            if ch == '#':
                while self._read() not in ('', '\n'):
                    pass
                continue
            if ch in PUNCTUATION:
                self._read()
                return self._set(PUNCTUATION[ch])
            if ch == '"':
                self._read()
                return self._set(TokenType.WORD, self._scan_string())
            if ch in '+-' or ch in DIGITS:
                return self._set(TokenType.WORD, self._scan_number())
            if is_name_start(ch):
                return self._set(TokenType.WORD, self._scan_name())

            raise LexicalError(self.position, f"unexpected character {ch!r}")

    def _scan_name(self) -> str:
        self._chars.append(self._read())
        while is_name_char(self._peek()):
            self._chars.append(self._read())
        return self._finish()

    def _scan_string(self) -> str:
        """Scan a quoted literal; the opening quote is already consumed."""
        while True:
            ch = self._read()
            if not ch:
                raise LexicalError(self.location, "unterminated literal")
            if ch == '"':
                return self._finish()
            if ch != '\\':
                self._chars.append(ch)
                continue

            escape = self._peek()
            if not escape:
                raise LexicalError(self.location, "unterminated literal")
            if escape == 'u':
                raise LexicalError(self.position, "unicode escapes are not supported")
            if escape not in ESCAPES:
                raise LexicalError(self.position, f"unsupported escape sequence '\\{escape}'")
            self._read()
            self._chars.append(ESCAPES[escape])

    def _scan_number(self) -> str:
        state = NumberState.BEFORE_SIGN
        while True:
            following = _number_transition(state, self._peek())
            if following is None:
                break
            self._chars.append(self._read())
            state = following

        text = self._finish()
        if state not in ACCEPTING_NUMBER_STATES:
            raise LexicalError(self.location, f"unsupported number syntax '{text}'")
        return text
