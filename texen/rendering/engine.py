"""Template rendering engine."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from ..environment.resources import find_resource

logger = logging.getLogger(__name__)

# Package resources are re-read on every lookup unless caching is enabled,
# in which case they are considered fresh for this many seconds.
MODIFICATION_CHECK_INTERVAL = 2


class ResourceLoader(BaseLoader):
    """Load templates from package resources (``pkg/sub/name.jinja``)."""

    def __init__(
        self,
        encoding: str = "utf-8",
        cache: bool = False,
        modification_check_interval: int = MODIFICATION_CHECK_INTERVAL,
    ) -> None:
        self.encoding = encoding
        self.cache = cache
        self.modification_check_interval = modification_check_interval

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str | None, Callable[[], bool]]:
        resource = find_resource(template)
        if resource is None:
            raise TemplateNotFound(template)

        source = resource.read_text(encoding=self.encoding)
        loaded_at = time.monotonic()

        def uptodate() -> bool:
            if not self.cache:
                return False
            return time.monotonic() - loaded_at < self.modification_check_interval

        return source, str(resource), uptodate


def build_loader(
    search_path: list[str] | None, use_classpath: bool, encoding: str = "utf-8"
) -> BaseLoader:
    """Build the template loader chain: file system first, then packages.

    Args:
        search_path: Absolute template directories, or None
        use_classpath: Whether to fall back to package resources
        encoding: Template encoding

    Returns:
        Loader for the rendering environment
    """
    loaders: list[BaseLoader] = []
    if search_path:
        loaders.append(FileSystemLoader(search_path, encoding=encoding))
    if use_classpath:
        loaders.append(ResourceLoader(encoding=encoding, cache=False))

    if not loaders:
        raise ValueError("No template search path or package lookup configured")
    if len(loaders) == 1:
        return loaders[0]
    return ChoiceLoader(loaders)


class TemplateEngine:
    """Jinja2 environment configured for a single generation run."""

    def __init__(
        self,
        search_path: list[str] | None = None,
        use_classpath: bool = False,
        input_encoding: str = "utf-8",
    ) -> None:
        self.search_path = search_path
        self.use_classpath = use_classpath
        self.input_encoding = input_encoding
        self._env: Environment | None = None

    @property
    def initialized(self) -> bool:
        return self._env is not None

    def init(self) -> Environment:
        """Create the Jinja2 environment; repeated calls reuse it."""
        if self._env is None:
            self._env = Environment(
                loader=build_loader(
                    self.search_path, self.use_classpath, self.input_encoding
                ),
                undefined=StrictUndefined,
                autoescape=False,
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
                auto_reload=True,
            )
            logger.debug("Template engine initialized")
        return self._env

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render a template by name.

        Args:
            template_name: Template name as seen by the loaders
            context: Template context data

        Returns:
            Rendered text
        """
        logger.debug(f"Rendering template: {template_name}")
        template = self.init().get_template(template_name)
        return template.render(**context)


def describe_failure(exc: BaseException) -> str:
    """Map a rendering failure to a short, user-facing category message."""
    if isinstance(exc, UndefinedError):
        return f"Exception thrown by template reference: {exc.message}"
    if isinstance(exc, TemplateSyntaxError):
        where = exc.filename or exc.name or "<template>"
        return f"Template syntax error in {where}, line {exc.lineno}: {exc.message}"
    if isinstance(exc, TemplateNotFound):
        return f"Resource not found: {exc.name}"
    return "Generation failed"
