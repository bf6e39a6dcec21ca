# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""logtriage - Rule-based severity classification for uploaded log files."""

__version__ = "0.1.0"

from logtriage.classifier.catalogue import all_rules, suggestions_for
from logtriage.classifier.engine import ClassificationEngine, classify
from logtriage.models.finding import Finding
from logtriage.models.result import ClassificationResult

__all__ = [
    "ClassificationEngine",
    "ClassificationResult",
    "Finding",
    "__version__",
    "all_rules",
    "classify",
    "suggestions_for",
]
