"""
Exception hierarchy for hierconf.

Every failure raised by the parser, the expander and the store derives from
``ConfigError`` so callers can catch the whole family with one clause, while
the concrete subclasses keep each condition inspectable on its own.
"""

from typing import Optional

from .models.location import Location


class ConfigError(Exception):
    """Base class of all configuration errors."""
    pass


class ConfigSyntaxError(ConfigError):
    """
    Raised when configuration text cannot be parsed.

    Attributes:
        location: Position of the offending token or character
        reason: Message without the location prefix
    """

    def __init__(self, location: Location, reason: str):
        super().__init__(f"{location}: {reason}")
        self.location = location
        self.reason = reason


class LexicalError(ConfigSyntaxError):
    """Raised for malformed literals, escapes, numbers and stray characters."""
    pass


class DuplicateKeyError(ConfigSyntaxError):
    """Raised in strict mode when a key is defined more than once."""

    def __init__(self, location: Location, key: str):
        super().__init__(location, f"duplicate setting '{key}'")
        self.key = key


class ConfigLoadError(ConfigError):
    """Raised when a configuration source cannot be read or written."""
    pass


class ExpansionError(ConfigError):
    """Base class of failures raised while expanding templates."""
    pass


class MissingKeyError(ExpansionError, KeyError):
    """Raised when a required setting does not exist."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"no such setting: {self.key}"


class InvalidRelativeSubstitutionError(ExpansionError):
    """
    Raised when a relative substitution key cannot be resolved.

    This happens when the leading dots ascend past the root of the base key,
    or when the key consists of nothing but dots.
    """

    def __init__(self, key: str, base_key: Optional[str] = None):
        if base_key is None:
            message = f"invalid substitution key: {key}"
        else:
            message = f"invalid relative substitution '{key}' from '{base_key}'"
        super().__init__(message)
        self.key = key
        self.base_key = base_key


class TemplateSyntaxError(ExpansionError):
    """Raised for malformed templates."""
    pass


class DepthLimitError(TemplateSyntaxError):
    """Raised when nested substitutions exceed the configured ceiling."""

    def __init__(self, max_depth: int):
        super().__init__(f"substitution depth limit reached ({max_depth})")
        self.max_depth = max_depth
