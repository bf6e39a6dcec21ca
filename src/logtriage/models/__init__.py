# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Data models for rules, findings, and classification results."""

from logtriage.models.finding import Finding
from logtriage.models.log_file import LogFile, ProcessingOutcome
from logtriage.models.result import ClassificationResult
from logtriage.models.rule import PatternRule

__all__ = [
    "ClassificationResult",
    "Finding",
    "LogFile",
    "PatternRule",
    "ProcessingOutcome",
]
