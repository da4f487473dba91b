"""
hierconf - Hierarchical Configuration Store

Parses a nested key/value text format into flat, dot-qualified settings and
expands ``${...}`` templates against them, including relative references
that walk up the key hierarchy.
"""

__version__ = "0.1.0"
__author__ = "hierconf Team"

from .errors import (
    ConfigError,
    ConfigSyntaxError,
    LexicalError,
    DuplicateKeyError,
    ConfigLoadError,
    ExpansionError,
    MissingKeyError,
    InvalidRelativeSubstitutionError,
    TemplateSyntaxError,
    DepthLimitError
)
from .models import Location, ExpansionOptions, LoaderOptions
from .store import Store, StoreLoader, load_store, validate_config_file, dump, dumps, dump_yaml

__all__ = [
    'ConfigError',
    'ConfigSyntaxError',
    'LexicalError',
    'DuplicateKeyError',
    'ConfigLoadError',
    'ExpansionError',
    'MissingKeyError',
    'InvalidRelativeSubstitutionError',
    'TemplateSyntaxError',
    'DepthLimitError',
    'Location',
    'ExpansionOptions',
    'LoaderOptions',
    'Store',
    'StoreLoader',
    'load_store',
    'validate_config_file',
    'dump',
    'dumps',
    'dump_yaml'
]
