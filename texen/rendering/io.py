"""File I/O operations for rendering."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO


def ensure_directory(path: Path) -> None:
    """Create a directory and its parents if they do not exist yet.

    Args:
        path: Directory to create
    """
    path.mkdir(parents=True, exist_ok=True)


@contextmanager
def output_writer(path: Path, encoding: str = "utf-8") -> Iterator[TextIO]:
    """Open a writer whose text replaces ``path`` only on success.

    Text goes to a temporary sibling file which is flushed, closed and moved
    over ``path`` when the block exits cleanly. If the block raises, the
    temporary file is removed and ``path`` is left untouched.

    Args:
        path: Destination file path
        encoding: Output text encoding
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, 0o644)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
