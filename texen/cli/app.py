"""Main CLI application."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..core.exceptions import TexenError
from ..core.host import StandaloneHost
from ..core.models import TexenConfig
from ..core.settings import Settings
from ..task import TexenTask
from .parsers import parse_base_dir, parse_encoding, pick

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="texen",
    help="Render a Jinja2 control template seeded from property files.",
)


@app.command()
def render(
    control_template: Annotated[
        Optional[str],
        typer.Option(
            "--control-template",
            help="Template that governs the output.",
            metavar="NAME",
        ),
    ] = None,
    template_path: Annotated[
        Optional[str],
        typer.Option(
            "--template-path",
            help="Comma-separated directories searched for templates.",
            metavar="DIRS",
        ),
    ] = None,
    output_directory: Annotated[
        Optional[str],
        typer.Option(
            "--output-directory",
            help="Directory for the generated file (created if missing).",
            metavar="DIR",
        ),
    ] = None,
    output_file: Annotated[
        Optional[str],
        typer.Option(
            "--output-file",
            help="Name of the generated file inside the output directory.",
            metavar="FILE",
        ),
    ] = None,
    output_encoding: Annotated[
        Optional[str],
        typer.Option(
            "--output-encoding",
            help="Encoding of the generated file (default: utf-8).",
            metavar="ENCODING",
        ),
    ] = None,
    input_encoding: Annotated[
        Optional[str],
        typer.Option(
            "--input-encoding",
            help="Encoding of templates and property files (default: utf-8).",
            metavar="ENCODING",
        ),
    ] = None,
    context_properties: Annotated[
        Optional[str],
        typer.Option(
            "--context-properties",
            help="Comma-separated property files seeding the template context.",
            metavar="FILES",
        ),
    ] = None,
    use_classpath: Annotated[
        Optional[bool],
        typer.Option(
            "--use-classpath/--no-use-classpath",
            help="Also look templates up as package resources (pkg/sub/name).",
        ),
    ] = None,
    base_dir: Annotated[
        Optional[str],
        typer.Option(
            "--base-dir",
            help="Base directory for relative paths (default: cwd).",
            metavar="DIR",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render the control template to the output file."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting texen")

    settings = Settings()

    if output_encoding is not None:
        parse_encoding(output_encoding)
    if input_encoding is not None:
        parse_encoding(input_encoding)

    try:
        config = TexenConfig(
            control_template=pick(control_template, settings.control_template),
            template_path=pick(template_path, settings.template_path),
            output_directory=pick(output_directory, settings.output_directory),
            output_file=pick(output_file, settings.output_file),
            output_encoding=pick(output_encoding, settings.output_encoding),
            input_encoding=pick(input_encoding, settings.input_encoding),
            context_properties=pick(context_properties, settings.context_properties),
            use_classpath=pick(use_classpath, settings.use_classpath),
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e

    host = StandaloneHost(parse_base_dir(pick(base_dir, settings.base_dir)))
    logger.debug(f"Config: {config.model_dump()}")

    try:
        output_path = TexenTask(config, host=host).execute()
    except TexenError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    logger.debug(f"Completed: wrote {output_path}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
