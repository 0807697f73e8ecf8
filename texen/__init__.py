"""Texen - control-template text generator.

Seeds a Jinja2 context from property files and renders a single control
template into an output file, standalone or driven by a build host.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.exceptions import ConfigurationError, GenerationError, TexenError
from .core.models import TexenConfig
from .task import TexenTask

# Re-export main CLI entry point
from .cli import main

__all__ = [
    "ConfigurationError",
    "GenerationError",
    "TexenConfig",
    "TexenError",
    "TexenTask",
    "main",
]
