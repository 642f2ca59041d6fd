"""
layr-search - static analysis for layr visual-programming projects.

Validates a serialized project (components, nodes, formulas, actions and
imported packages) for broken references and other semantic problems
without executing it.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import ConfigError, LayrSearchError, ProjectLoadError, RuleRegistrationError
from .core.loader import load_project, parse_project
from .search import Diagnostic, SearchOptions, find_problems

__version__ = get_version()

__all__ = [
    "ConfigError",
    "Diagnostic",
    "LayrSearchError",
    "ProjectLoadError",
    "RuleRegistrationError",
    "SearchOptions",
    "__version__",
    "find_problems",
    "ir",
    "load_project",
    "parse_project",
]
