"""
Configuration loader for hierconf.

This module provides a small facade over the parser and the store factories.
It resolves a source (path, URL or stream) into a ``Store``, optionally layers
it over defaults, and reports problems as ``ConfigError`` subclasses with
helpful messages. ``validate_file`` collects errors instead of raising so that
tooling can report every broken file in one pass.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..errors import ConfigError, ConfigLoadError
from ..models.options import LoaderOptions
from ..syntax.parser import parse_source, parse_text
from ..syntax.sources import Source, is_url
from .store import Store


logger = logging.getLogger(__name__)


class StoreLoader:
    """
    Loader turning configuration sources into stores.

    Attributes:
        options: Loader options; ``strict_mode`` rejects duplicate keys
    """

    def __init__(self, strict_mode: bool = False, options: Optional[LoaderOptions] = None):
        """
        Initialize the loader.

        Args:
            strict_mode: If True, keys defined twice are an error
            options: Full loader options; ``strict_mode`` overrides its flag when set
        """
        options = options or LoaderOptions()
        if strict_mode:
            options = options.model_copy(update={'strict_mode': True})
        self.options = options
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def strict_mode(self) -> bool:
        return self.options.strict_mode

    def load(self, source: Source, defaults: Optional[Store] = None) -> Store:
        """
        Load a store from a source.

        Args:
            source: URL, local path or open stream
            defaults: Store to fall back on for settings the source lacks

        Returns:
            The loaded store, layered over ``defaults`` when given

        Raises:
            ConfigSyntaxError: If the source is not well formed
            ConfigLoadError: If the source cannot be read
        """
        if isinstance(source, os.PathLike) or (isinstance(source, str) and not is_url(source)):
            path = Path(source)
            if not path.exists():
                raise ConfigLoadError(f"Configuration file not found: {path}")

        store = Store.of_all(parse_source(source, self.options))
        self.logger.info(f"Configuration loaded from {_describe(source)} ({len(store.mapping)} settings)")
        return store.compose(defaults) if defaults is not None else store

    def load_text(self, text: str, source: str = "<string>", defaults: Optional[Store] = None) -> Store:
        """Load a store from configuration text held in memory."""
        store = Store.of_all(parse_text(text, source, strict=self.strict_mode))
        self.logger.debug(f"Configuration parsed from {source} ({len(store.mapping)} settings)")
        return store.compose(defaults) if defaults is not None else store

    def validate_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without keeping the result.

        Args:
            config_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        try:
            self.load(Path(config_path))
        except ConfigError as e:
            errors.append(str(e))
            self.logger.warning(f"Invalid configuration file {config_path}: {e}")

        return errors


def _describe(source: Source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return getattr(source, 'name', None) or '<stream>'


def load_store(source: Source, strict_mode: bool = False, defaults: Optional[Store] = None) -> Store:
    """
    Convenience function to load a store.

    Args:
        source: URL, local path or open stream
        strict_mode: Whether duplicate keys are an error
        defaults: Store providing fallback values

    Returns:
        The loaded store

    Raises:
        ConfigError: If the configuration cannot be loaded
    """
    loader = StoreLoader(strict_mode=strict_mode)
    return loader.load(source, defaults)


def validate_config_file(config_path: Union[str, Path], strict_mode: bool = False) -> List[str]:
    """
    Convenience function to validate a configuration file.

    Args:
        config_path: Path to configuration file
        strict_mode: Whether duplicate keys count as errors

    Returns:
        List of validation errors (empty if valid)
    """
    loader = StoreLoader(strict_mode=strict_mode)
    return loader.validate_file(config_path)
