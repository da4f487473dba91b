"""
Writing stores back out.

``dumps`` renders a store in the native text format, one ``key = "value"``
line per setting, sorted by key; parsing the output yields the same settings.
``dump_yaml`` produces a flat YAML snapshot for tools that speak YAML.
"""

import re
import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml

from ..errors import ConfigLoadError
from .store import Store


logger = logging.getLogger(__name__)

IDENTIFIER = re.compile(r'[A-Za-z_][A-Za-z0-9_]*\Z')

_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\b': '\\b',
    '\t': '\\t',
    '\n': '\\n',
    '\r': '\\r',
}


def quote(text: str) -> str:
    """Render text as a quoted literal."""
    return '"' + ''.join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def render_key(key: str) -> str:
    """Render a dotted key, quoting segments that are not identifiers."""
    return '.'.join(
        segment if IDENTIFIER.match(segment) else quote(segment)
        for segment in key.split('.')
    )


def dumps(store: Store, header: Optional[List[str]] = None) -> str:
    """
    Render a store in the configuration text format.

    Args:
        store: Store to render
        header: Comment lines placed before the settings

    Returns:
        Configuration text
    """
    lines = [f"# {line}" if line else "#" for line in header or []]
    if lines:
        lines.append("")
    for key, value in sorted(store.enumerate()):
        lines.append(f"{render_key(key)} = {quote(value)}")
    return "\n".join(lines) + "\n"


def dump(store: Store, output_path: Union[str, Path]) -> None:
    """
    Save a store to a configuration file.

    Args:
        store: Store to save
        output_path: Path where to save the configuration

    Raises:
        ConfigLoadError: If the file cannot be written
    """
    output_path = Path(output_path)
    content = dumps(store, header=["Generated by hierconf"])

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
    except (OSError, IOError) as e:
        raise ConfigLoadError(f"Cannot write configuration file {output_path}: {e}") from e

    logger.info(f"Configuration saved to {output_path}")


def dump_yaml(store: Store) -> str:
    """
    Render a store as a flat YAML mapping.

    Keys stay dot-qualified; nesting them would be ambiguous for keys that
    are both a setting and a prefix of other settings.
    """
    lines = [
        "# hierconf settings snapshot",
        "# Keys are dot-qualified; all values are strings",
        "",
    ]
    body = yaml.safe_dump(dict(sorted(store.enumerate())),
                          default_flow_style=False,
                          sort_keys=False,
                          allow_unicode=True)
    lines.append(body.rstrip())
    return "\n".join(lines) + "\n"
