"""
Parsing of the hierarchical configuration text format.
"""

from .lexer import Lexer, Token, TokenType
from .parser import Parser, parse, parse_text, parse_file, parse_url, parse_source, join_key
from .sources import open_source, open_file, open_url, open_stream, is_url

__all__ = [
    'Lexer',
    'Token',
    'TokenType',
    'Parser',
    'parse',
    'parse_text',
    'parse_file',
    'parse_url',
    'parse_source',
    'join_key',
    'open_source',
    'open_file',
    'open_url',
    'open_stream',
    'is_url'
]
