"""Property-file parsing and merging.

Property files use ``.properties`` syntax with a few extensions: a value
may be a comma-separated list, a repeated key accumulates values, ``${key}``
references are interpolated, and ``include = other.properties`` pulls in
another file relative to the including one. When a property is read as a
single string, lists yield their first element.
"""

from __future__ import annotations

import logging
import posixpath
import re
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from ..core.host import BuildHost
from .resources import read_resource_text

logger = logging.getLogger(__name__)

INCLUDE_KEY = "include"

_COMMENT_CHARS = "#!"
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_REFERENCE = re.compile(r"\$\{([^}]+)\}")

Lookup = Callable[[str], str | None]
Include = Callable[[str], dict[str, list[str]] | None]


def split_list(value: str | None) -> list[str]:
    """Split a comma-separated setting into stripped, non-empty items."""
    if not value or not value.strip():
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _logical_lines(text: str) -> Iterator[str]:
    """Join continuation lines and drop blanks and comments."""
    pending: str | None = None
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE) if pending is not None else raw
        if pending is None:
            stripped = line.lstrip(_WHITESPACE)
            if not stripped or stripped[0] in _COMMENT_CHARS:
                continue
            line = stripped

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = (pending or "") + line[:-1]
            continue

        yield (pending or "") + line
        pending = None

    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 >= len(text):
            out.append(char)
            i += 1
            continue

        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2 : i + 6]
            if len(digits) != 4:
                raise ValueError(f"Malformed \\uXXXX escape: {text[i:]!r}")
            out.append(chr(int(digits, 16)))
            i += 6
            continue

        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_values(raw: str) -> list[str]:
    """Split a raw value on unescaped commas; ``\\,`` keeps a literal comma."""
    tokens: list[str] = []
    start = 0
    i = 0
    while i < len(raw):
        if raw[i] == "\\":
            i += 2
            continue
        if raw[i] == ",":
            tokens.append(raw[start:i])
            start = i + 1
        i += 1
    tokens.append(raw[start:])
    return [_unescape(token.strip(_WHITESPACE)) for token in tokens]


def _split_entry(line: str) -> tuple[str, str]:
    key_end = len(line)
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            key_end = i
            break
        i += 1

    key = line[:key_end]
    rest = line[key_end:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(key), rest


def parse_properties(text: str, include: Include | None = None) -> dict[str, list[str]]:
    """Parse ``.properties`` text into ordered multi-valued entries.

    Args:
        text: Property file contents
        include: Loader for ``include`` entries; when None they are kept as
            ordinary properties

    Returns:
        Ordered mapping of keys to their values, in file order
    """
    properties: dict[str, list[str]] = {}
    for line in _logical_lines(text):
        key, raw = _split_entry(line)
        if include is not None and key.lower() == INCLUDE_KEY:
            for name in _split_values(raw):
                included = include(name)
                if included is None:
                    logger.warning(f"Included properties file {name} could not be found; skipping")
                    continue
                for inc_key, values in included.items():
                    properties.setdefault(inc_key, []).extend(values)
            continue
        properties.setdefault(key, []).extend(_split_values(raw))
    return properties


def interpolate(value: str, lookup: Lookup, _seen: frozenset[str] = frozenset()) -> str:
    """Replace ``${key}`` references using ``lookup``.

    References to unknown keys are left as written.

    Raises:
        ValueError: The references form a cycle
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in _seen:
            raise ValueError(f"Circular reference to ${{{name}}} in property interpolation")
        resolved = lookup(name)
        if resolved is None:
            return match.group(0)
        return interpolate(resolved, lookup, _seen | {name})

    return _REFERENCE.sub(replace, value)


def resolve_properties(properties: dict[str, list[str]]) -> dict[str, str]:
    """Reduce multi-valued entries to their interpolated first value."""

    def lookup(name: str) -> str | None:
        values = properties.get(name)
        return values[0] if values else None

    return {key: interpolate(values[0], lookup) for key, values in properties.items()}


def _read_file(path: Path, encoding: str, seen: frozenset[Path]) -> dict[str, list[str]] | None:
    if path in seen:
        raise ValueError(f"Properties file {path} includes itself")
    try:
        text = path.read_text(encoding=encoding)
    except OSError as e:
        logger.debug(f"Cannot read {path} ({e})")
        return None

    def include(name: str) -> dict[str, list[str]] | None:
        target = Path(name).expanduser()
        if not target.is_absolute():
            target = path.parent / target
        return _read_file(target.resolve(), encoding, seen | {path})

    return parse_properties(text, include)


def _read_resource(name: str, encoding: str, seen: frozenset[str]) -> dict[str, list[str]] | None:
    if name in seen:
        raise ValueError(f"Properties resource {name} includes itself")
    try:
        text = read_resource_text(name, encoding)
    except OSError as e:
        logger.debug(f"Cannot read package resource {name!r}: {e}")
        return None
    if text is None:
        return None

    def include(other: str) -> dict[str, list[str]] | None:
        target = posixpath.normpath(posixpath.join(posixpath.dirname(name), other))
        return _read_resource(target, encoding, seen | {name})

    return parse_properties(text, include)


def load_property_source(
    source: str, host: BuildHost, encoding: str = "utf-8"
) -> dict[str, str] | None:
    """Load one property source from the filesystem or the package path.

    The filesystem is tried first since templates may come from a package
    while the properties live next to the build. Values are reduced to
    their first element and interpolated against the same source. Returns
    None when the source cannot be found in either place.
    """
    full_path = host.resolve_file(source)
    host.log(f"Using contextProperties file: {full_path}")
    loaded = _read_file(full_path, encoding, frozenset())
    if loaded is None:
        logger.debug(f"Trying package resources for {source!r}")
        loaded = _read_resource(source, encoding, frozenset())

    if loaded is None:
        return None
    return resolve_properties(loaded)


def merge_property_sources(
    sources: Iterable[str], host: BuildHost, encoding: str = "utf-8"
) -> dict[str, str]:
    """Merge property sources in order, later sources overriding earlier ones.

    Sources that cannot be found are skipped with a warning. References
    left unresolved inside one source are resolved against the merged set.

    Args:
        sources: Source identifiers (paths or package resource names)
        host: Host used for path resolution and logging
        encoding: Encoding of the property files

    Returns:
        Merged ordered mapping
    """
    merged: dict[str, str] = {}
    for source in sources:
        loaded = load_property_source(source, host, encoding)
        if loaded is None:
            logger.warning(
                f"Context properties file {source} could not be found in the "
                "file system or in package resources; skipping"
            )
            continue
        merged.update(loaded)

    merged = {key: interpolate(value, merged.get) for key, value in merged.items()}
    logger.debug(f"Merged {len(merged)} context properties")
    return merged
