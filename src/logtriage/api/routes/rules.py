# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rule catalogue and remediation suggestion endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from logtriage.classifier.catalogue import CATALOGUE_VERSION, all_rules, suggestions_for

router = APIRouter()


class RuleItem(BaseModel):
    family: str
    category: str
    title: str
    pattern: str
    severity: str


class RuleCatalogueResponse(BaseModel):
    version: str
    rules: list[RuleItem]


class SuggestionsResponse(BaseModel):
    category: str
    suggestions: list[str]


@router.get("/rules", response_model=RuleCatalogueResponse)
async def list_rules() -> RuleCatalogueResponse:
    """List the rule catalogue in evaluation order."""
    return RuleCatalogueResponse(
        version=CATALOGUE_VERSION,
        rules=[
            RuleItem(
                family=r.family,
                category=r.category,
                title=r.title,
                pattern=r.pattern.pattern,
                severity=r.severity,
            )
            for r in all_rules()
        ],
    )


@router.get("/suggestions/{category}", response_model=SuggestionsResponse)
async def get_suggestions(category: str) -> SuggestionsResponse:
    return SuggestionsResponse(category=category, suggestions=suggestions_for(category))
