"""
Configuration stores: lookup, composition, expansion, loading and writing.
"""

from .store import Store, StoreKind, system_properties
from .loader import StoreLoader, load_store, validate_config_file
from .writer import dump, dumps, dump_yaml

__all__ = [
    'Store',
    'StoreKind',
    'system_properties',
    'StoreLoader',
    'load_store',
    'validate_config_file',
    'dump',
    'dumps',
    'dump_yaml'
]
