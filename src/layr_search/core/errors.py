"""
Error types for layr-search project loading, configuration, and rule registration.

Findings about the analysed project are never raised: they are reported as
diagnostics. The exceptions here cover the host-facing failure modes around
an analysis run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class LayrSearchError(Exception):
    """Base exception for all layr-search errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ProjectLoadError(LayrSearchError):
    """
    Raised when a project snapshot cannot be turned into a Project Model.

    Examples:
    - File missing or unreadable
    - Invalid JSON
    - Top-level structure that does not validate (e.g. `components` is a list)
    """

    pass


class ConfigError(LayrSearchError):
    """
    Raised when `layr.toml` contains invalid search settings.

    Examples:
    - Unknown resolution order
    - Non-positive expansion depth
    - Rule level other than off/warning/error
    """

    pass


class RuleRegistrationError(LayrSearchError):
    """
    Raised when a rule set cannot be run.

    Examples:
    - Two rules registered under the same code
    - Unknown rule code requested by the host
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Path to the project or config file involved
        path: Optional structural path inside the file
    """

    file: Path | None = None
    path: tuple[str | int, ...] = ()

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "project.json at components.home.nodes"
        """
        location = str(self.file) if self.file else "<memory>"
        if self.path:
            location += " at " + ".".join(str(segment) for segment in self.path)
        return location


def make_load_error(
    message: str,
    file: Path | None = None,
    path: tuple[str | int, ...] = (),
) -> ProjectLoadError:
    """
    Helper to create a ProjectLoadError with optional context.

    Args:
        message: Error description
        file: Optional source file path
        path: Optional structural path of the offending value

    Returns:
        ProjectLoadError with context if a location was provided
    """
    if file or path:
        return ProjectLoadError(message, ErrorContext(file=file, path=path))
    return ProjectLoadError(message)


def make_config_error(message: str, file: Path | None = None) -> ConfigError:
    """Helper to create a ConfigError pointing at the config file."""
    if file:
        return ConfigError(message, ErrorContext(file=file))
    return ConfigError(message)
