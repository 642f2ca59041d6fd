"""
Diagnostic reporter: the append-only sink rules report into.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .models import Diagnostic, IssueLevel, SearchOptions

if TYPE_CHECKING:
    from .rules.base import Report, Rule


class DiagnosticReporter:
    """
    Collects diagnostics in report order.

    ``for_rule`` hands out the ``report(payload, path)`` callable for one
    rule; each call produces exactly one Diagnostic tagged with that rule's
    code, level and category. Diagnostics outside ``paths_to_visit`` are
    dropped.
    """

    def __init__(self, options: SearchOptions | None = None) -> None:
        self._options = options or SearchOptions()
        self._diagnostics: list[Diagnostic] = []

    def for_rule(self, rule: Rule, level: IssueLevel | None = None) -> Report:
        effective = level or rule.level

        def report(payload: dict[str, Any], path: Sequence[str | int]) -> None:
            self.add(
                Diagnostic(
                    code=rule.code,
                    level=effective,
                    category=rule.category,
                    payload=dict(payload),
                    path=tuple(path),
                )
            )

        return report

    def add(self, diagnostic: Diagnostic) -> None:
        if self._options.wants_path(diagnostic.path):
            self._diagnostics.append(diagnostic)

    def add_unfiltered(self, diagnostic: Diagnostic) -> None:
        """Append regardless of path filters (used for engine diagnostics)."""
        self._diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self._diagnostics)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)
