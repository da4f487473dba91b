"""
Data models for hierconf.
"""

from .location import Location
from .options import ExpansionOptions, LoaderOptions, DEFAULT_MAX_DEPTH, MIN_MAX_DEPTH

__all__ = [
    'Location',
    'ExpansionOptions',
    'LoaderOptions',
    'DEFAULT_MAX_DEPTH',
    'MIN_MAX_DEPTH'
]
