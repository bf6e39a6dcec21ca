# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Classification result model."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field, computed_field

from logtriage.core.constants import SEVERITY_RANK, Severity
from logtriage.models.finding import Finding


class ClassificationResult(BaseModel):
    """Ordered findings for one file plus counts derived from them."""

    findings: list[Finding] = Field(default_factory=list)
    line_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return len(self.findings)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def severity_counts(self) -> dict[str, int]:
        counts = {str(s): 0 for s in Severity}
        for f in self.findings:
            counts[f.severity] += 1
        return counts

    @computed_field  # type: ignore[prop-decorator]
    @property
    def critical_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.CRITICAL)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def category_counts(self) -> dict[str, int]:
        return dict(Counter(f.category for f in self.findings))

    @property
    def highest_severity(self) -> Severity | None:
        if not self.findings:
            return None
        return max(self.findings, key=lambda f: SEVERITY_RANK[f.severity]).severity
