# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Line-scanning classification engine."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from logtriage.classifier.catalogue import all_rules
from logtriage.models.finding import Finding
from logtriage.models.result import ClassificationResult
from logtriage.models.rule import PatternRule

logger = logging.getLogger("logtriage.classifier.engine")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(content: str) -> list[str]:
    """Split on any of CRLF, CR or LF. Empty content has no lines."""
    if not content:
        return []
    return _LINE_BREAK.split(content)


class ClassificationEngine:
    """Stateless matcher of log lines against an ordered rule sequence.

    Every rule is tested against every line; a line yields one finding per
    matching rule. Findings come out in line order, then rule order.
    """

    def __init__(self, rules: Sequence[PatternRule] | None = None) -> None:
        self._rules: tuple[PatternRule, ...] = tuple(rules) if rules is not None else all_rules()

    @property
    def rules(self) -> tuple[PatternRule, ...]:
        return self._rules

    def classify(self, content: str) -> ClassificationResult:
        if not isinstance(content, str):
            msg = f"classify() expects decoded text, got {type(content).__name__}"
            raise TypeError(msg)

        lines = split_lines(content)
        findings: list[Finding] = []

        for line_number, line in enumerate(lines, 1):
            for rule in self._rules:
                if rule.matches(line):
                    findings.append(
                        Finding(
                            category=rule.category,
                            message=rule.render(line),
                            line_number=line_number,
                            severity=rule.severity,
                        )
                    )

        logger.debug(
            "Classified %d lines against %d rules: %d findings",
            len(lines),
            len(self._rules),
            len(findings),
        )
        return ClassificationResult(findings=findings, line_count=len(lines))


_default_engine = ClassificationEngine()


def classify(content: str) -> ClassificationResult:
    """Classify *content* against the built-in catalogue."""
    return _default_engine.classify(content)
