"""
Read-only configuration stores.

A store maps dot-qualified keys to string values. Stores come in a closed set
of kinds (empty, system properties, environment, materialized mapping and
composite) and never change after construction; composing or loading always
produces a new store.
"""

import os
import sys
import logging
import platform
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Set, Tuple

from ..errors import MissingKeyError
from ..expansion.expander import StoreResolver, expand
from ..models.options import ExpansionOptions, LoaderOptions
from ..syntax.parser import parse_source, parse_text
from ..syntax.sources import Source


logger = logging.getLogger(__name__)

Entry = Tuple[str, str]


class StoreKind(Enum):
    """Kinds of store."""
    EMPTY = "empty"
    SYSTEM = "system"
    ENVIRONMENT = "environment"
    MAPPED = "mapped"
    COMPOSITE = "composite"


def system_properties() -> Dict[str, str]:
    """
    Snapshot of the host properties exposed by ``Store.system()``.

    Returns:
        Property names mapped to their current values
    """
    return {
        'os.name': os.name,
        'os.arch': platform.machine(),
        'os.version': platform.release(),
        'platform.system': platform.system(),
        'python.version': platform.python_version(),
        'python.implementation': platform.python_implementation(),
        'python.executable': sys.executable,
        'file.separator': os.sep,
        'path.separator': os.pathsep,
        'line.separator': os.linesep,
        'user.dir': os.getcwd(),
        'user.home': os.path.expanduser('~'),
    }


@dataclass(frozen=True, eq=False)
class Store:
    """
    Immutable mapping from setting names to values.

    Instances are built through the class-level factories (``empty``,
    ``system``, ``environment``, ``of``, ``of_all``, ``load``) and through
    ``compose``. A composite's primary is never itself a composite, so
    lookups walk the fallback chain in a simple loop.

    Attributes:
        kind: Which variant this store is
        mapping: Entries of a MAPPED store
        primary: First store consulted by a COMPOSITE store
        fallback: Store consulted when the primary has no value
    """
    kind: StoreKind
    mapping: Optional[Mapping[str, str]] = None
    primary: Optional['Store'] = None
    fallback: Optional['Store'] = None

    # Construction

    @classmethod
    def empty(cls) -> 'Store':
        """Store without any settings."""
        return _EMPTY

    @classmethod
    def system(cls) -> 'Store':
        """Store backed by the host properties of the running interpreter."""
        return _SYSTEM

    @classmethod
    def environment(cls) -> 'Store':
        """Store backed by the process environment."""
        return _ENVIRONMENT

    @classmethod
    def of_all(cls, mapping: Mapping[str, str]) -> 'Store':
        """
        Store holding a copy of the given mapping.

        Args:
            mapping: Keys mapped to values; later changes to it are not seen

        Returns:
            A materialized store
        """
        for key, value in mapping.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(f"Settings must map strings to strings, got {key!r}: {value!r}")
        return cls(StoreKind.MAPPED, mapping=MappingProxyType(dict(mapping)))

    @classmethod
    def of(cls, *pairs: str) -> 'Store':
        """
        Store built from alternating keys and values.

        Example:
            Store.of("db.host", "localhost", "db.port", "5432")
        """
        if len(pairs) % 2:
            raise ValueError("Store.of() requires an even number of arguments")
        return cls.of_all(dict(zip(pairs[0::2], pairs[1::2])))

    @classmethod
    def load(cls, source: Source, options: Optional[LoaderOptions] = None) -> 'Store':
        """
        Parse a configuration source into a store.

        Args:
            source: URL, local path or open stream
            options: Loader options (encoding, strict mode, timeout)

        Returns:
            A materialized store with the parsed settings

        Raises:
            ConfigSyntaxError: If the source is not well formed
            ConfigLoadError: If the source cannot be read
        """
        return cls.of_all(parse_source(source, options))

    @classmethod
    def load_text(cls, text: str, source: str = "<string>", strict: bool = False) -> 'Store':
        """Parse configuration text held in memory."""
        return cls.of_all(parse_text(text, source, strict=strict))

    # Look up

    def query(self, key: str) -> Optional[str]:
        """
        Look up a setting without interpreting it.

        Args:
            key: Setting name

        Returns:
            The raw value, or None if the setting does not exist
        """
        store = self
        while store.kind is StoreKind.COMPOSITE:
            value = store.primary.query(key)
            if value is not None:
                return value
            store = store.fallback

        if store.kind is StoreKind.MAPPED:
            return store.mapping.get(key)
        if store.kind is StoreKind.ENVIRONMENT:
            return os.environ.get(key)
        if store.kind is StoreKind.SYSTEM:
            return system_properties().get(key)
        return None

    def get(self, key: str) -> str:
        """
        Look up a setting that must exist.

        Raises:
            MissingKeyError: If there is no such setting
        """
        value = self.query(key)
        if value is None:
            raise MissingKeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.query(key) is not None

    def enumerate(self) -> Iterator[Entry]:
        """
        Iterate over all visible settings.

        Every call starts afresh, so environment and system stores reflect
        their current contents. Each key is produced once; for composite
        stores the value is the one ``query`` would return.

        Yields:
            ``(key, value)`` pairs
        """
        if self.kind is StoreKind.COMPOSITE:
            seen: Set[str] = set()
            for store in self._chain():
                for key, value in store.enumerate():
                    if key not in seen:
                        seen.add(key)
                        yield key, value
        elif self.kind is StoreKind.MAPPED:
            yield from self.mapping.items()
        elif self.kind is StoreKind.ENVIRONMENT:
            yield from dict(os.environ).items()
        elif self.kind is StoreKind.SYSTEM:
            yield from system_properties().items()

    def keys(self) -> List[str]:
        """Sorted names of all visible settings."""
        return sorted(key for key, _ in self.enumerate())

    # Expansion

    def expand(self, template: str, options: Optional[ExpansionOptions] = None) -> str:
        """
        Replace ``${key}`` markers in a template with setting values.

        Values are expanded recursively. Relative markers (``${.key}``) are
        resolved against the setting whose value contains them; at the top
        level there is no enclosing setting.

        Args:
            template: Text to expand
            options: Expansion options (depth ceiling)

        Returns:
            The expanded text

        Raises:
            MissingKeyError: If a marker names an unknown setting
            InvalidRelativeSubstitutionError: If a relative marker ascends past the root
            TemplateSyntaxError: If a template is malformed or nests too deeply
        """
        options = options or ExpansionOptions()
        return expand(template, StoreResolver(self, ""), options.max_depth)

    def resolve(self, key: str, options: Optional[ExpansionOptions] = None) -> str:
        """Fetch a setting and expand its value relative to the setting itself."""
        options = options or ExpansionOptions()
        return expand(self.get(key), StoreResolver(self, key), options.max_depth)

    # Composition

    def compose(self, defaults: 'Store') -> 'Store':
        """
        Layer this store over ``defaults``.

        Settings are looked up here first and in ``defaults`` second. The
        result is right-nested: composing ``(a, b)`` with ``c`` yields
        ``(a, (b, c))``.

        Args:
            defaults: Store providing fallback values

        Returns:
            A composite store, or one of the operands when the other is empty
        """
        if not isinstance(defaults, Store):
            raise TypeError(f"Cannot compose with {type(defaults).__name__}")
        if defaults.kind is StoreKind.EMPTY:
            return self
        if self.kind is StoreKind.EMPTY:
            return defaults

        result = defaults
        for store in reversed(self._chain()):
            result = Store(StoreKind.COMPOSITE, primary=store, fallback=result)
        return result

    def _chain(self) -> List['Store']:
        """Non-composite members of this store in lookup order."""
        chain = []
        store = self
        while store.kind is StoreKind.COMPOSITE:
            chain.append(store.primary)
            store = store.fallback
        chain.append(store)
        return chain

    def __repr__(self) -> str:
        if self.kind is StoreKind.MAPPED:
            return f"Store(mapped, {len(self.mapping)} settings)"
        if self.kind is StoreKind.COMPOSITE:
            return f"Store(composite, {len(self._chain())} layers)"
        return f"Store({self.kind.value})"


_EMPTY = Store(StoreKind.EMPTY)
_SYSTEM = Store(StoreKind.SYSTEM)
_ENVIRONMENT = Store(StoreKind.ENVIRONMENT)
