# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""JSON output formatter."""

from __future__ import annotations

import json

from logtriage.models.result import ClassificationResult


def format_json(result: ClassificationResult) -> str:
    """Return the classification result as a formatted JSON string."""
    return result.model_dump_json(indent=2)


def format_json_summary(result: ClassificationResult, target: str = "") -> str:
    """Return a compact JSON summary without per-finding detail."""
    data = {
        "target": target,
        "line_count": result.line_count,
        "total": result.total,
        "severity_counts": result.severity_counts,
        "category_counts": result.category_counts,
    }
    return json.dumps(data, indent=2)
