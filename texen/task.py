"""The control-template generation task."""

from __future__ import annotations

import logging
from pathlib import Path, PurePath
from typing import Any, Callable

from .core.exceptions import ConfigurationError, GenerationError
from .core.host import BuildHost, StandaloneHost
from .core.models import TexenConfig
from .environment.context import apply_properties, populate_defaults
from .environment.properties import merge_property_sources, split_list
from .rendering.engine import TemplateEngine, describe_failure
from .rendering.io import ensure_directory, output_writer

logger = logging.getLogger(__name__)


class TexenTask:
    """Render one control template into one output file.

    The task can be driven directly, from the CLI, or by a build system
    that supplies its own :class:`BuildHost` for logging and path
    resolution.

    Subclasses may override :meth:`init_control_context`,
    :meth:`populate_initial_context` and :meth:`cleanup`; callers that only
    need a different starting context can pass ``context_factory`` instead.
    """

    def __init__(
        self,
        config: TexenConfig | None = None,
        host: BuildHost | None = None,
        context_factory: Callable[[], dict[str, Any]] | None = None,
    ) -> None:
        self.config = config if config is not None else TexenConfig()
        self.host: BuildHost = host if host is not None else StandaloneHost()
        self.context_factory = context_factory

    def init_control_context(self) -> dict[str, Any]:
        """Create the context the control template is rendered with."""
        if self.context_factory is not None:
            return self.context_factory()
        return {}

    def populate_initial_context(self, context: dict[str, Any]) -> None:
        """Place built-in values into the context; ``now`` by default."""
        populate_defaults(context)

    def cleanup(self) -> None:
        """Release resources held for the run. Does nothing by default."""

    def resolve_template_path(self, template_path: str) -> list[str]:
        """Resolve each comma-separated template directory against the host."""
        return [str(self.host.resolve_file(entry)) for entry in split_list(template_path)]

    @staticmethod
    def validate(config: TexenConfig) -> None:
        """Check required settings before anything touches the filesystem.

        Raises:
            ConfigurationError: A required setting is missing or the output
                file is not relative to the output directory
        """
        if not config.template_path and not config.use_classpath:
            raise ConfigurationError(
                "The template path needs to be defined if you are not using "
                "the classpath for locating templates!"
            )
        if not config.control_template:
            raise ConfigurationError("The control template needs to be defined!")
        if config.output_directory is None:
            raise ConfigurationError("The output directory needs to be defined!")
        if not config.output_file:
            raise ConfigurationError("The output file needs to be defined!")
        if PurePath(config.output_file).anchor:
            raise ConfigurationError(
                "The output file must be relative to the output directory!"
            )

    def load_context_properties(self, config: TexenConfig) -> dict[str, str]:
        if not config.context_properties:
            return {}
        try:
            return merge_property_sources(
                split_list(config.context_properties), self.host, config.input_encoding
            )
        except ValueError as e:
            raise ConfigurationError(f"Malformed context properties: {e}") from e

    def execute(self) -> Path:
        """Run the generation.

        Returns:
            Path of the written output file

        Raises:
            ConfigurationError: Required settings are missing
            GenerationError: Rendering or writing the output failed
        """
        config = self.config.model_copy()
        self.validate(config)

        properties = self.load_context_properties(config)

        try:
            search_path = None
            if config.template_path:
                search_path = self.resolve_template_path(config.template_path)
                self.host.log(f"Using templatePath: {','.join(search_path)}")
            if config.use_classpath:
                self.host.log("Using classpath")

            engine = TemplateEngine(
                search_path=search_path,
                use_classpath=config.use_classpath,
                input_encoding=config.input_encoding,
            )
            engine.init()

            output_path = self.host.resolve_file(config.output_directory) / config.output_file
            ensure_directory(output_path.parent)
            self.host.log(f"Generating to file {output_path}")

            with output_writer(output_path, config.output_encoding) as writer:
                context = self.init_control_context()
                self.populate_initial_context(context)
                apply_properties(context, properties, self.host, config.input_encoding)
                writer.write(engine.render(config.control_template, context))

            self.cleanup()
        except Exception as e:
            category = describe_failure(e)
            logger.debug(f"{category}: {e!r}", exc_info=True)
            raise GenerationError(category) from e

        return output_path
