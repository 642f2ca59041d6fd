"""
Rule runner: runs rules against a project and aggregates their diagnostics.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator, Sequence
from typing import Literal

from layr_search.core.config import SearchConfig
from layr_search.core.errors import RuleRegistrationError
from layr_search.core.ir import ProjectFiles

from .context import RuleContext
from .models import Diagnostic, IssueLevel, RuleCategory, SearchOptions
from .reporter import DiagnosticReporter
from .rules import Rule, get_all_rules

logger = logging.getLogger(__name__)

INTERNAL_RULE_ERROR = "internal-rule-error"

BatchSize = int | Literal["all", "per-file"]


def internal_rule_error(rule: Rule, exc: BaseException) -> Diagnostic:
    """Synthetic diagnostic standing in for a rule that raised."""
    return Diagnostic(
        code=INTERNAL_RULE_ERROR,
        level=IssueLevel.ERROR,
        category=RuleCategory.MISC,
        payload={
            "ruleCode": rule.code,
            "errorType": type(exc).__name__,
            "message": str(exc),
        },
        path=(),
    )


class RuleRunner:
    """
    Run an ordered rule set against one project.

    Output order is rule order, then report order within a rule. A rule
    that raises contributes the findings it reported before failing plus a
    single ``internal-rule-error`` diagnostic; the remaining rules still run.
    """

    def __init__(self, rules: Sequence[Rule], config: SearchConfig | None = None) -> None:
        seen: set[str] = set()
        for candidate in rules:
            if candidate.code in seen:
                raise RuleRegistrationError(f"Duplicate rule code '{candidate.code}'")
            seen.add(candidate.code)
        self.rules = list(rules)
        self.config = config or SearchConfig()

    def effective_level(self, rule: Rule) -> IssueLevel:
        override = self.config.level_override(rule.code)
        return IssueLevel(override) if override else rule.level

    def select(self, options: SearchOptions | None = None) -> list[tuple[Rule, IssueLevel]]:
        """Rules to run with their effective level, after config and option filters."""
        options = options or SearchOptions()
        if options.rules is not None:
            known = {r.code for r in self.rules}
            unknown = [code for code in options.rules if code not in known]
            if unknown:
                raise RuleRegistrationError(f"Unknown rule code(s): {', '.join(unknown)}")

        selected: list[tuple[Rule, IssueLevel]] = []
        for candidate in self.rules:
            if self.config.is_disabled(candidate.code):
                continue
            if options.rules is not None and candidate.code not in options.rules:
                continue
            level = self.effective_level(candidate)
            if options.levels is not None and level not in options.levels:
                continue
            selected.append((candidate, level))
        return selected

    def run(self, files: ProjectFiles, options: SearchOptions | None = None) -> list[Diagnostic]:
        context = RuleContext(files, self.config)
        reporter = DiagnosticReporter(options)
        selected = self.select(options)
        t0 = time.monotonic()

        for candidate, level in selected:
            before = len(reporter)
            try:
                candidate.visit(reporter.for_rule(candidate, level), context)
            except Exception as exc:
                logger.warning("Rule %s failed", candidate.code, exc_info=True)
                reporter.add_unfiltered(internal_rule_error(candidate, exc))
            logger.debug("Rule %s: %d diagnostics", candidate.code, len(reporter) - before)

        elapsed = (time.monotonic() - t0) * 1000
        logger.debug(
            "Ran %d rules in %.1f ms: %d diagnostics", len(selected), elapsed, len(reporter)
        )
        return reporter.diagnostics


def find_problems(
    files: ProjectFiles,
    options: SearchOptions | None = None,
    config: SearchConfig | None = None,
    rules: Sequence[Rule] | None = None,
) -> list[Diagnostic]:
    """Run ``rules`` (default: every registered rule) against ``files``."""
    runner = RuleRunner(get_all_rules() if rules is None else rules, config)
    return runner.run(files, options)


def iter_batches(
    diagnostics: Iterable[Diagnostic], batch_size: BatchSize = "per-file"
) -> Iterator[list[Diagnostic]]:
    """
    Group diagnostics for incremental delivery.

    - ``"all"``: a single batch
    - ``"per-file"``: one batch per rule and component, in first-seen order
    - ``n``: consecutive batches of at most ``n``
    """
    items = list(diagnostics)
    if batch_size == "all":
        if items:
            yield items
        return

    if batch_size == "per-file":
        groups: dict[tuple[str, str | None], list[Diagnostic]] = {}
        for diagnostic in items:
            groups.setdefault((diagnostic.code, diagnostic.component), []).append(diagnostic)
        yield from groups.values()
        return

    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0:
        raise ValueError(f"Invalid batch size: {batch_size!r}")
    for start in range(0, len(items), batch_size):
        yield items[start : start + batch_size]
