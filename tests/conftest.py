"""Shared fixtures for texen tests."""

from __future__ import annotations

import uuid
from pathlib import Path

import pytest

from texen.core.host import StandaloneHost
from texen.core.models import TexenConfig


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A build directory with a templates/ folder."""
    (tmp_path / "templates").mkdir()
    return tmp_path


@pytest.fixture
def host(project: Path) -> StandaloneHost:
    return StandaloneHost(project)


@pytest.fixture
def config(project: Path) -> TexenConfig:
    """A complete configuration rendering templates/control.jinja."""
    return TexenConfig(
        control_template="control.jinja",
        template_path="templates",
        output_directory=Path("out"),
        output_file="result.txt",
    )


@pytest.fixture
def resource_package(tmp_path_factory: pytest.TempPathFactory, monkeypatch) -> tuple[str, Path]:
    """An importable package, with a uniquely named root, for resource lookups."""
    root = tmp_path_factory.mktemp("site")
    name = f"texen_res_{uuid.uuid4().hex[:8]}"
    package_dir = root / name
    package_dir.mkdir()
    (package_dir / "__init__.py").write_text("")
    monkeypatch.syspath_prepend(str(root))
    return name, package_dir

