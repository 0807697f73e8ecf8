"""Services borrowed from the build system driving a run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class BuildHost(Protocol):
    """What texen needs from a host build system."""

    def log(self, message: str) -> None: ...

    def resolve_file(self, path: str | Path) -> Path: ...


class StandaloneHost:
    """Host used when texen runs outside a build system.

    Messages go to the ``texen`` logger and relative paths are resolved
    against ``base_dir`` (the working directory when omitted).
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def log(self, message: str) -> None:
        logger.info(message)

    def resolve_file(self, path: str | Path) -> Path:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return candidate.resolve()
