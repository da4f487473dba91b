"""
Opening configuration sources.

A source is a text stream, a binary stream, a filesystem path or a URL. This
module turns any of these into a readable text stream and guarantees that the
underlying resource is released once the caller is done, whether or not the
parse succeeded.
"""

import io
import os
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional, Tuple, Union
from urllib import request as urllib_request
from urllib.parse import urlparse

from ..errors import ConfigLoadError
from ..models.options import LoaderOptions


logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, IO]

URL_SCHEMES = ('http', 'https', 'file', 'ftp')


def is_url(source: str) -> bool:
    """Check whether a string names a URL rather than a local path."""
    return urlparse(source).scheme.lower() in URL_SCHEMES


def source_name(stream: IO, default: str = "<stream>") -> str:
    """Best-effort identifier of an already opened stream."""
    name = getattr(stream, 'name', None)
    return name if isinstance(name, str) else default


@contextmanager
def open_stream(stream: IO, source_id: Optional[str] = None,
                options: Optional[LoaderOptions] = None) -> Iterator[Tuple[str, IO[str]]]:
    """
    Adapt a caller-owned stream for reading.

    Text streams are used as they are; binary streams are decoded with the
    configured encoding. The caller's stream is not closed.
    """
    options = options or LoaderOptions()
    source_id = source_id or source_name(stream)
    if isinstance(stream, io.TextIOBase):
        yield source_id, stream
        return

    reader = io.TextIOWrapper(stream, encoding=options.encoding)
    try:
        yield source_id, reader
    finally:
        # Leave the wrapped stream open for its owner
        reader.detach()


@contextmanager
def open_file(path: Union[str, os.PathLike],
              options: Optional[LoaderOptions] = None) -> Iterator[Tuple[str, IO[str]]]:
    """
    Open a local file read-only.

    Raises:
        ConfigLoadError: If the file cannot be opened
    """
    options = options or LoaderOptions()
    path = Path(path)
    try:
        reader = open(path, 'r', encoding=options.encoding)
    except (OSError, IOError) as e:
        raise ConfigLoadError(f"Cannot read configuration file {path}: {e}") from e

    logger.debug(f"Opened configuration file {path}")
    with reader:
        yield str(path), reader


@contextmanager
def open_url(url: str, options: Optional[LoaderOptions] = None) -> Iterator[Tuple[str, IO[str]]]:
    """
    Open a URL read-only.

    Raises:
        ConfigLoadError: If the resource cannot be retrieved
    """
    options = options or LoaderOptions()
    try:
        response = urllib_request.urlopen(url, timeout=options.timeout_seconds)  # noqa: S310 - caller supplied source
    except (OSError, ValueError) as e:
        raise ConfigLoadError(f"Cannot read configuration resource {url}: {e}") from e

    logger.debug(f"Opened configuration resource {url}")
    with response:
        reader = io.TextIOWrapper(response, encoding=options.encoding)
        try:
            yield url, reader
        finally:
            reader.detach()


@contextmanager
def open_source(source: Source, options: Optional[LoaderOptions] = None) -> Iterator[Tuple[str, IO[str]]]:
    """
    Open any supported source, yielding ``(source_id, text_stream)``.

    Strings that look like URLs are fetched, other strings and path-like
    objects are treated as local files, and anything else is assumed to be an
    open stream.
    """
    if isinstance(source, str) and is_url(source):
        manager = open_url(source, options)
    elif isinstance(source, (str, os.PathLike)):
        manager = open_file(source, options)
    elif hasattr(source, 'read'):
        manager = open_stream(source, options=options)
    else:
        raise TypeError(f"Unsupported configuration source: {type(source).__name__}")

    with manager as opened:
        yield opened
