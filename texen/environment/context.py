"""Render context population and property coercion."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping

from ..core.host import BuildHost

logger = logging.getLogger(__name__)

FILE_CONTENTS_SUFFIX = "file.contents"

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_TRUE_TOKENS = {"true", "on", "yes"}
_FALSE_TOKENS = {"false", "off", "no"}


def _parse_int(value: str) -> int | None:
    if not _INT_PATTERN.match(value):
        return None
    number = int(value)
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


def _parse_bool(value: str) -> bool | None:
    value_lower = value.lower()
    if value_lower in _TRUE_TOKENS:
        return True
    if value_lower in _FALSE_TOKENS:
        return False
    return None


def timestamp() -> str:
    """Current local time, e.g. ``Mon Oct 19 14:03:00 UTC 2026``."""
    return datetime.now().astimezone().strftime("%a %b %d %H:%M:%S %Z %Y")


def populate_defaults(context: dict[str, Any]) -> dict[str, Any]:
    """Add the built-in values every control template can rely on."""
    context["now"] = timestamp()
    return context


def read_file_contents(path: Path, name: str, encoding: str = "utf-8") -> str:
    """Read a file-contents target; a missing or unreadable file yields ``""``."""
    try:
        text = path.read_text(encoding=encoding)
    except OSError as e:
        logger.warning(f"Cannot read {path} for context variable {name!r} ({e}); using ''")
        return ""
    logger.debug(f"Read {path} into context variable {name!r}")
    return text


def coerce_property(
    key: str, value: str, host: BuildHost, encoding: str = "utf-8"
) -> tuple[str, Any]:
    """Convert one property into a context entry.

    Tried in order: integer, boolean, file contents (for keys ending in
    ``file.contents``), then the raw string. A numeric-looking value is
    always an integer, even under a ``file.contents`` key. A key made of
    the marker alone, or with no separator before it (``xfile.contents``),
    has no usable name and is rejected.

    Args:
        key: Property name
        value: Property value
        host: Host used to resolve file-contents paths
        encoding: Encoding of file-contents targets

    Returns:
        Context key and coerced value
    """
    number = _parse_int(value)
    if number is not None:
        return key, number

    flag = _parse_bool(value)
    if flag is not None:
        return key, flag

    if key.endswith(FILE_CONTENTS_SUFFIX):
        # "license.file.contents" -> "license"; the character before the
        # marker is the separator and is dropped with it.
        name = key[: key.index(FILE_CONTENTS_SUFFIX)][:-1]
        if not name:
            raise ValueError(f"Property {key!r} has no name before {FILE_CONTENTS_SUFFIX!r}")
        return name, read_file_contents(host.resolve_file(value), name, encoding)

    return key, value


def apply_properties(
    context: dict[str, Any],
    properties: Mapping[str, str],
    host: BuildHost,
    encoding: str = "utf-8",
) -> dict[str, Any]:
    """Insert merged properties into the context in merge order.

    Args:
        context: Render context to extend
        properties: Merged properties
        host: Host used to resolve file-contents paths
        encoding: Encoding of file-contents targets

    Returns:
        The same context, extended
    """
    for key, value in properties.items():
        name, coerced = coerce_property(key, value, host, encoding)
        context[name] = coerced

    logger.debug(f"Context variables: {sorted(context)}")
    return context
