"""
Template expansion engine.

``expand`` replaces every ``${key}`` marker of a template with the value its
resolver supplies, then expands that value in turn, so settings may refer to
other settings to any depth up to a fixed ceiling. The ceiling is the only
protection against reference cycles such as ``a = "${a}"``.

Resolvers decide what a key means. ``StoreResolver`` implements the store
semantics: absolute keys are looked up as they are, while keys with leading
dots are relative to the key whose value is being expanded, one dot per level
up, much like ``../`` in a path::

    app.host    = localhost
    app.db.host = "${..host}"      # app.db.host -> app.db -> app -> app.host
    app.db.url  = "${.host}"       # app.db.url  -> app.db -> app.db.host
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Protocol, Tuple, runtime_checkable

from ..errors import DepthLimitError, InvalidRelativeSubstitutionError
from ..models.options import DEFAULT_MAX_DEPTH, MIN_MAX_DEPTH
from .lexer import TemplateLexer, TemplateToken


logger = logging.getLogger(__name__)


@runtime_checkable
class Resolver(Protocol):
    """Protocol for objects resolving substitution keys.

    A resolver returns the raw value of a key together with the resolver to
    use for markers found inside that value.
    """

    def resolve(self, key: str) -> Tuple[str, 'Resolver']:
        ...


def relative_key(base_key: str, key: str) -> str:
    """
    Compute the effective key of a substitution.

    Args:
        base_key: Key whose value contains the marker ('' at top level)
        key: Key written inside the marker

    Returns:
        Absolute key to look up

    Raises:
        InvalidRelativeSubstitutionError: If the dots ascend past the root or
            the key names nothing but the ascent
    """
    if not key.startswith('.'):
        return key

    segments = base_key.split('.') if base_key else []
    dots = len(key) - len(key.lstrip('.'))
    if dots > len(segments):
        raise InvalidRelativeSubstitutionError(key, base_key)

    suffix = key[dots:]
    if not suffix:
        raise InvalidRelativeSubstitutionError(key)

    return '.'.join(segments[:len(segments) - dots] + [suffix])


@dataclass(frozen=True)
class StoreResolver:
    """
    Resolver backed by a store.

    Attributes:
        store: Any object with a ``get(key) -> str`` method raising
            ``MissingKeyError`` for absent keys
        base_key: Key relative markers are resolved against
    """
    store: Any
    base_key: str = ""

    def resolve(self, key: str) -> Tuple[str, 'StoreResolver']:
        effective = relative_key(self.base_key, key)
        return self.store.get(effective), StoreResolver(self.store, effective)


def expand(template: str, resolver: Resolver, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """
    Expand all substitution markers in a template.

    Args:
        template: Text to expand
        resolver: Resolver for the outermost markers
        max_depth: Maximum nesting of substitutions

    Returns:
        The fully expanded text

    Raises:
        TemplateSyntaxError: If a template is malformed
        DepthLimitError: If substitutions nest deeper than ``max_depth``
        ExpansionError: Whatever the resolver raises for unknown keys
    """
    if max_depth < MIN_MAX_DEPTH:
        raise ValueError(f"max_depth must be at least {MIN_MAX_DEPTH}, got {max_depth}")

    buffer: List[str] = []
    lexer = TemplateLexer(template, resolver)

    while lexer is not None:
        token = lexer.advance()
        if token is TemplateToken.TEXT:
            buffer.append(lexer.value)
        elif token is TemplateToken.SUBST:
            if lexer.depth >= max_depth:
                raise DepthLimitError(max_depth)
            value, following = lexer.resolver.resolve(lexer.value)
            logger.debug(f"Resolved '{lexer.value}' at depth {lexer.depth}")
            lexer = lexer.push(value, following)
        else:
            lexer = lexer.parent

    return ''.join(buffer)
