"""Unit tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from texen.core.host import StandaloneHost
from texen.core.models import TexenConfig
from texen.core.settings import Settings


@pytest.mark.unit
def test_config_defaults():
    config = TexenConfig()
    assert config.control_template is None
    assert config.output_encoding == "utf-8"
    assert config.input_encoding == "utf-8"
    assert config.use_classpath is False


@pytest.mark.unit
def test_config_rejects_unknown_encoding():
    with pytest.raises(ValidationError):
        TexenConfig(output_encoding="no-such-codec")


@pytest.mark.unit
def test_config_validates_assignment():
    config = TexenConfig()
    config.output_directory = "build/out"
    assert config.output_directory == Path("build/out")

    with pytest.raises(ValidationError):
        config.input_encoding = "no-such-codec"


@pytest.mark.unit
def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TEXEN_TEMPLATE_PATH", "a,b")
    monkeypatch.setenv("TEXEN_USE_CLASSPATH", "true")

    settings = Settings()
    assert settings.template_path == "a,b"
    assert settings.use_classpath is True


@pytest.mark.unit
def test_standalone_host_resolution(tmp_path):
    host = StandaloneHost(tmp_path)
    assert host.resolve_file("x/y.txt") == (tmp_path / "x" / "y.txt").resolve()
    assert host.resolve_file(tmp_path / "abs") == (tmp_path / "abs").resolve()


@pytest.mark.unit
def test_standalone_host_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert StandaloneHost().resolve_file("f") == (tmp_path / "f").resolve()
