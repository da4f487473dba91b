"""
Recursive-descent parser for the configuration text format.

The grammar is small and needs a single token of lookahead:

    body   := entry*
    entry  := key ( '=' key | '{' body '}' )
    key    := WORD ('.' WORD)*

Nested blocks are folded into dot-qualified keys, so

    server { host = localhost  port = 8080 }

produces the flat mapping ``{"server.host": "localhost", "server.port": "8080"}``.
Values are stored as the literal text of their key production and are never
resolved at parse time.
"""

import io
import os
import logging
from typing import Dict, IO, Mapping, Optional, Set, Union

from ..errors import ConfigSyntaxError, DuplicateKeyError
from ..models.location import Location
from ..models.options import LoaderOptions
from .lexer import Lexer, TokenType
from .sources import Source, open_file, open_source, open_url


logger = logging.getLogger(__name__)


def join_key(prefix: str, name: str) -> str:
    """Join a key onto a prefix, leaving it bare when the prefix is empty."""
    return f"{prefix}.{name}" if prefix else name


class Parser:
    """
    Parser turning a token stream into a flat settings mapping.

    Attributes:
        lexer: Token source
        strict: Whether duplicate keys are rejected
    """

    def __init__(self, lexer: Lexer, strict: bool = False):
        self.lexer = lexer
        self.strict = strict
        self._seen: Set[str] = set()

    def parse(self, defaults: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Parse the whole input.

        Args:
            defaults: Initial entries; parsed settings override them

        Returns:
            New dictionary mapping dotted keys to values

        Raises:
            ConfigSyntaxError: If the input is not well formed
        """
        settings: Dict[str, str] = dict(defaults or {})
        self.lexer.advance()
        self._parse_body("", settings)
        if self.lexer.token is not TokenType.END:
            raise ConfigSyntaxError(self.lexer.location, "found data after settings")
        return settings

    def _parse_body(self, prefix: str, settings: Dict[str, str]) -> None:
        while self.lexer.token is TokenType.WORD:
            self._parse_entry(prefix, settings)

    def _parse_entry(self, prefix: str, settings: Dict[str, str]) -> None:
        key_location = self.lexer.location
        key = self._parse_key(prefix)

        if self.lexer.token is TokenType.EQUAL:
            self.lexer.advance()
            if self.lexer.token is not TokenType.WORD:
                raise ConfigSyntaxError(self.lexer.location, "unexpected token; a value was required here")
            self._store(settings, key, self._parse_key(""), key_location)
        elif self.lexer.token is TokenType.OPEN:
            self.lexer.advance()
            self._parse_body(key, settings)
            if self.lexer.token is not TokenType.CLOSE:
                raise ConfigSyntaxError(self.lexer.location, f"unexpected token; '}}' required to close '{key}'")
            self.lexer.advance()
        else:
            raise ConfigSyntaxError(self.lexer.location, "unexpected token; '=' or '{' required here")

    def _parse_key(self, prefix: str) -> str:
        parts = [prefix] if prefix else []
        parts.append(self.lexer.value)
        self.lexer.advance()
        while self.lexer.token is TokenType.DOT:
            self.lexer.advance()
            if self.lexer.token is not TokenType.WORD:
                raise ConfigSyntaxError(self.lexer.location, "unexpected token; a word was required here")
            parts.append(self.lexer.value)
            self.lexer.advance()
        return '.'.join(parts)

    def _store(self, settings: Dict[str, str], key: str, value: str, location: Location) -> None:
        if key in self._seen:
            if self.strict:
                raise DuplicateKeyError(location, key)
            logger.debug(f"{location}: setting '{key}' overrides an earlier definition")
        self._seen.add(key)
        settings[key] = value


def parse(source: str, stream: IO[str], defaults: Optional[Mapping[str, str]] = None,
          strict: bool = False) -> Dict[str, str]:
    """
    Parse settings from a text stream.

    Args:
        source: Identifier used in error locations
        stream: Text stream holding the configuration
        defaults: Initial entries; parsed settings override them
        strict: Reject keys defined more than once

    Returns:
        Flat mapping of dotted keys to values

    Raises:
        ConfigSyntaxError: If the text is not well formed
    """
    logger.debug(f"Parsing settings from {source}")
    return Parser(Lexer(source, stream), strict=strict).parse(defaults)


def parse_text(text: str, source: str = "<string>", defaults: Optional[Mapping[str, str]] = None,
               strict: bool = False) -> Dict[str, str]:
    """Parse settings from an in-memory string."""
    return parse(source, io.StringIO(text), defaults, strict)


def parse_file(path: Union[str, os.PathLike], options: Optional[LoaderOptions] = None) -> Dict[str, str]:
    """Parse a local configuration file."""
    options = options or LoaderOptions()
    with open_file(path, options) as (source_id, reader):
        return parse(source_id, reader, strict=options.strict_mode)


def parse_url(url: str, options: Optional[LoaderOptions] = None) -> Dict[str, str]:
    """Parse a configuration resource retrieved from a URL."""
    options = options or LoaderOptions()
    with open_url(url, options) as (source_id, reader):
        return parse(source_id, reader, strict=options.strict_mode)


def parse_source(source: Source, options: Optional[LoaderOptions] = None) -> Dict[str, str]:
    """
    Parse any supported source: a URL, a local path or an open stream.

    The source is closed again on every exit path unless the caller
    supplied it already open.
    """
    options = options or LoaderOptions()
    with open_source(source, options) as (source_id, reader):
        return parse(source_id, reader, strict=options.strict_mode)
