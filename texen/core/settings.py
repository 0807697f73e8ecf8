from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TEXEN_", case_sensitive=False)

    control_template: str | None = None
    template_path: str | None = None
    output_directory: Path | None = None
    output_file: str | None = None
    output_encoding: str = "utf-8"
    input_encoding: str = "utf-8"
    context_properties: str | None = None
    use_classpath: bool = False
    base_dir: Path | None = None
