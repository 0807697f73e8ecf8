"""Classpath-style lookup of package resources.

A resource name such as ``acme/templates/control.jinja`` names the file
``control.jinja`` inside the importable package ``acme.templates``.
"""

from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable

logger = logging.getLogger(__name__)


def find_resource(name: str) -> Traversable | None:
    """Locate a package resource by slash-separated name.

    Args:
        name: Resource name, package segments separated by ``/``

    Returns:
        The resource, or None when the package or file does not exist

    A single-segment name such as ``defaults.properties`` never resolves:
    Python has no root package to hold top-level resources, so such
    files must live inside a package (``mypkg/defaults.properties``).
    """
    parts = [part for part in name.replace("\\", "/").split("/") if part]
    if len(parts) < 2:
        return None

    package = ".".join(parts[:-1])
    try:
        resource = resources.files(package).joinpath(parts[-1])
    except (ImportError, TypeError, ValueError):
        logger.debug(f"No importable package {package!r} for resource {name!r}")
        return None

    if not resource.is_file():
        return None
    return resource


def read_resource_text(name: str, encoding: str) -> str | None:
    """Read a package resource as text, or None when it cannot be found."""
    resource = find_resource(name)
    if resource is None:
        return None
    return resource.read_text(encoding=encoding)
