# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Pattern rule definition."""

from __future__ import annotations

import re
from dataclasses import dataclass

from logtriage.core.constants import RuleFamily, Severity


@dataclass(frozen=True, slots=True)
class PatternRule:
    """A single (matcher, category, severity, template) entry of the catalogue."""

    family: RuleFamily
    category: str
    title: str
    pattern: re.Pattern[str]
    severity: Severity
    message_template: str = "{line}"

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None

    def render(self, line: str) -> str:
        """Build the finding message for a matching line."""
        return self.message_template.format(line=line.strip())

    @classmethod
    def http(cls, code: int, title: str, severity: Severity) -> PatternRule:
        """Whitespace-delimited HTTP status code rule."""
        return cls(
            family=RuleFamily.HTTP,
            category=str(code),
            title=title,
            pattern=re.compile(rf"\s{code}\s"),
            severity=severity,
            message_template=f"{title}: {{line}}",
        )

    @classmethod
    def keyword(
        cls,
        family: RuleFamily,
        category: str,
        title: str,
        pattern: str,
        severity: Severity,
    ) -> PatternRule:
        """Case-insensitive keyword rule whose message is the trimmed line."""
        return cls(
            family=family,
            category=category,
            title=title,
            pattern=re.compile(pattern, re.IGNORECASE),
            severity=severity,
        )
