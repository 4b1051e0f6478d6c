"""Report formatters."""

from .formatters import ConsoleFormatter, FormatterFactory, JSONFormatter, OutputFormatter

__all__ = [
    "ConsoleFormatter",
    "FormatterFactory",
    "JSONFormatter",
    "OutputFormatter",
]
