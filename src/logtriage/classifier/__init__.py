# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Log classification: the rule catalogue and the line-scanning engine."""

from logtriage.classifier.catalogue import all_rules, suggestions_for
from logtriage.classifier.engine import ClassificationEngine, classify

__all__ = [
    "ClassificationEngine",
    "all_rules",
    "classify",
    "suggestions_for",
]
