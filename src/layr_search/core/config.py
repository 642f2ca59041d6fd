"""
Search configuration loaded from ``layr.toml``.

Example:

    [search]
    builtin_prefix = "@toddle/"
    resolution_order = "project_only"
    max_expansion_depth = 32

    [search.rules]
    no-reference-attribute = "off"
    unknown-variable = "warning"
"""

import logging
import tomllib
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from .errors import make_config_error

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "layr.toml"
DEFAULT_BUILTIN_PREFIX = "@toddle/"
DEFAULT_MAX_EXPANSION_DEPTH = 32


class ResolutionOrder(StrEnum):
    """Where a bare (unqualified) component name is looked up."""

    PROJECT_ONLY = "project_only"
    PROJECT_THEN_PACKAGES = "project_then_packages"
    PACKAGES_THEN_PROJECT = "packages_then_project"


class RuleSetting(StrEnum):
    OFF = "off"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class SearchConfig:
    """Settings for one analysis run."""

    builtin_prefix: str = DEFAULT_BUILTIN_PREFIX
    resolution_order: ResolutionOrder = ResolutionOrder.PROJECT_ONLY
    max_expansion_depth: int = DEFAULT_MAX_EXPANSION_DEPTH
    rules: dict[str, RuleSetting] = field(default_factory=dict)
    source: Path | None = None

    def is_disabled(self, code: str) -> bool:
        return self.rules.get(code) == RuleSetting.OFF

    def level_override(self, code: str) -> str | None:
        """Configured level for a rule, or None to keep its declared level."""
        setting = self.rules.get(code)
        if setting is None or setting == RuleSetting.OFF:
            return None
        return setting.value


def parse_config(data: dict[str, Any], source: Path | None = None) -> SearchConfig:
    """Build a SearchConfig from parsed TOML data. Unknown keys are ignored."""
    search = data.get("search", {})
    if not isinstance(search, dict):
        raise make_config_error("[search] must be a table", source)

    builtin_prefix = search.get("builtin_prefix", DEFAULT_BUILTIN_PREFIX)
    if not isinstance(builtin_prefix, str) or not builtin_prefix:
        raise make_config_error("search.builtin_prefix must be a non-empty string", source)

    order_value = search.get("resolution_order", ResolutionOrder.PROJECT_ONLY.value)
    try:
        resolution_order = ResolutionOrder(order_value)
    except ValueError:
        choices = ", ".join(o.value for o in ResolutionOrder)
        raise make_config_error(
            f"Unknown resolution_order '{order_value}' (expected one of: {choices})", source
        ) from None

    depth = search.get("max_expansion_depth", DEFAULT_MAX_EXPANSION_DEPTH)
    if isinstance(depth, bool) or not isinstance(depth, int) or depth <= 0:
        raise make_config_error("search.max_expansion_depth must be a positive integer", source)

    rules_data = search.get("rules", {})
    if not isinstance(rules_data, dict):
        raise make_config_error("[search.rules] must be a table", source)

    rules: dict[str, RuleSetting] = {}
    for code, value in rules_data.items():
        try:
            rules[code] = RuleSetting(value)
        except ValueError:
            raise make_config_error(
                f"Rule '{code}' has invalid level '{value}' (expected off, warning or error)",
                source,
            ) from None

    return SearchConfig(
        builtin_prefix=builtin_prefix,
        resolution_order=resolution_order,
        max_expansion_depth=depth,
        rules=rules,
        source=source,
    )


def load_config(path: Path) -> SearchConfig:
    """Load search settings from a TOML file; a missing file yields defaults."""
    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return SearchConfig()
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e
    logger.debug("Loaded config from %s", path)
    return parse_config(data, source=path)


def find_config(start: Path) -> Path | None:
    """Walk up from ``start`` looking for ``layr.toml``."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
