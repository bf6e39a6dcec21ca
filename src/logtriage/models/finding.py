# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Finding model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from logtriage.core.constants import Severity


class Finding(BaseModel):
    """A single rule match at a specific line."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(description="Category of the matching rule, e.g. 404")
    message: str
    line_number: int = Field(ge=1)
    severity: Severity
