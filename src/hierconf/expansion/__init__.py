"""
Substitution templates: lexing, resolution and recursive expansion.
"""

from .lexer import TemplateLexer, TemplateToken
from .expander import Resolver, StoreResolver, expand, relative_key

__all__ = [
    'TemplateLexer',
    'TemplateToken',
    'Resolver',
    'StoreResolver',
    'expand',
    'relative_key'
]
