"""Domain models for the generation task configuration."""

from __future__ import annotations

import codecs
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TexenConfig(BaseModel):
    """Settings for a single control-template run.

    Every field may be left unset at construction time; required fields are
    checked when the task executes so the model can be filled in piecemeal
    by a build host.
    """

    model_config = ConfigDict(validate_assignment=True)

    control_template: str | None = Field(
        default=None, description="Name of the template that governs the output"
    )
    template_path: str | None = Field(
        default=None, description="Comma-separated template search directories"
    )
    output_directory: Path | None = Field(
        default=None, description="Directory that receives the output file"
    )
    output_file: str | None = Field(
        default=None, description="Output file name, relative to output_directory"
    )
    output_encoding: str = Field(default="utf-8", description="Output file encoding")
    input_encoding: str = Field(
        default="utf-8", description="Encoding of templates and property files"
    )
    context_properties: str | None = Field(
        default=None, description="Comma-separated property files seeding the context"
    )
    use_classpath: bool = Field(
        default=False, description="Also look templates up as package resources"
    )

    @field_validator("output_encoding", "input_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value!r}") from e
        return value
