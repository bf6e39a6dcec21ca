# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Fixed, versioned catalogue of pattern rules and remediation suggestions.

Rules are evaluated per line in the order of :data:`RULES`: every HTTP rule,
then every application rule, then every security rule. Reports produced by
earlier versions depend on the categories, severities and messages below, so
entries are appended rather than edited.
"""

from __future__ import annotations

from logtriage.core.constants import FAMILY_ORDER, RuleFamily, Severity
from logtriage.models.rule import PatternRule

CATALOGUE_VERSION = "1.0.0"

HTTP_RULES: tuple[PatternRule, ...] = (
    PatternRule.http(400, "Bad Request", Severity.MEDIUM),
    PatternRule.http(401, "Unauthorized Access", Severity.CRITICAL),
    PatternRule.http(403, "Forbidden Access", Severity.CRITICAL),
    PatternRule.http(404, "Resource Not Found", Severity.MEDIUM),
    PatternRule.http(500, "Internal Server Error", Severity.CRITICAL),
    PatternRule.http(502, "Bad Gateway", Severity.CRITICAL),
    PatternRule.http(503, "Service Unavailable", Severity.CRITICAL),
    PatternRule.http(504, "Gateway Timeout", Severity.CRITICAL),
)

_APP = RuleFamily.APPLICATION

APPLICATION_RULES: tuple[PatternRule, ...] = (
    PatternRule.keyword(_APP, "APPLICATION_ERROR", "Application error", r"ERROR", Severity.MEDIUM),
    PatternRule.keyword(_APP, "FATAL_ERROR", "Fatal error", r"FATAL", Severity.CRITICAL),
    PatternRule.keyword(_APP, "WARNING", "Warning", r"WARN(?:ING)?", Severity.LOW),
    PatternRule.keyword(_APP, "EXCEPTION", "Exception", r"EXCEPTION", Severity.MEDIUM),
    PatternRule.keyword(_APP, "TIMEOUT", "Timeout", r"TIMEOUT", Severity.MEDIUM),
    PatternRule.keyword(
        _APP,
        "CONNECTION_ERROR",
        "Connection error",
        r"CONNECTION\s+(?:FAILED|REFUSED|RESET)",
        Severity.MEDIUM,
    ),
    PatternRule.keyword(
        _APP, "DATABASE_ERROR", "Database error", r"DATABASE\s+ERROR", Severity.CRITICAL
    ),
    PatternRule.keyword(
        _APP, "MEMORY_ERROR", "Out of memory", r"OUT\s+OF\s+MEMORY", Severity.CRITICAL
    ),
)

_SEC = RuleFamily.SECURITY

SECURITY_RULES: tuple[PatternRule, ...] = (
    PatternRule.keyword(
        _SEC, "SECURITY_VIOLATION", "Security violation", r"SECURITY\s+VIOLATION",
        Severity.CRITICAL,
    ),
    PatternRule.keyword(_SEC, "FAILED_LOGIN", "Failed login", r"FAILED\s+LOGIN", Severity.MEDIUM),
    PatternRule.keyword(_SEC, "BRUTE_FORCE", "Brute force", r"BRUTE\s+FORCE", Severity.CRITICAL),
    PatternRule.keyword(
        _SEC, "SQL_INJECTION", "SQL injection", r"SQL\s+INJECTION", Severity.CRITICAL
    ),
    PatternRule.keyword(_SEC, "XSS_ATTACK", "XSS attack", r"XSS\s+ATTACK", Severity.CRITICAL),
)

_FAMILY_RULES: dict[RuleFamily, tuple[PatternRule, ...]] = {
    RuleFamily.HTTP: HTTP_RULES,
    RuleFamily.APPLICATION: APPLICATION_RULES,
    RuleFamily.SECURITY: SECURITY_RULES,
}

RULES: tuple[PatternRule, ...] = tuple(
    r for family in FAMILY_ORDER for r in _FAMILY_RULES[family]
)

_RULES_BY_CATEGORY: dict[str, PatternRule] = {r.category: r for r in RULES}


def all_rules() -> tuple[PatternRule, ...]:
    """Return every rule in evaluation order."""
    return RULES


def rules_for_family(family: RuleFamily | str) -> tuple[PatternRule, ...]:
    return _FAMILY_RULES[RuleFamily(family)]


def get_rule(category: str) -> PatternRule | None:
    return _RULES_BY_CATEGORY.get(category)


def categories() -> list[str]:
    return [r.category for r in RULES]


# ---------------------------------------------------------------------------
# Remediation suggestions
# ---------------------------------------------------------------------------

_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "404": (
        "Check for broken internal links and fix them",
        "Implement proper redirects for moved or deleted content",
        "Create custom 404 error pages with helpful navigation",
        "Review and update your sitemap",
        "Set up monitoring for frequently accessed missing resources",
    ),
    "500": (
        "Review server error logs for detailed stack traces",
        "Check database connectivity and query performance",
        "Monitor server resource usage (CPU, memory, disk)",
        "Implement proper error handling in application code",
        "Set up automated alerting for server errors",
    ),
    "401": (
        "Review authentication token expiration policies",
        "Check for issues with session management",
        "Implement proper error handling for expired sessions",
        "Consider implementing refresh token mechanisms",
        "Review access control configurations",
    ),
    "403": (
        "Review user permission settings and role-based access",
        "Check for proper authorization implementations",
        "Audit file and directory permissions",
        "Review API endpoint access controls",
        "Implement proper error messages for access denials",
    ),
    "APPLICATION_ERROR": (
        "Add comprehensive logging to identify root causes",
        "Implement proper exception handling",
        "Review recent code changes for potential issues",
        "Set up application performance monitoring",
        "Consider implementing circuit breaker patterns",
    ),
    "DATABASE_ERROR": (
        "Check database connection pool configuration",
        "Review slow query logs and optimize queries",
        "Monitor database resource usage",
        "Implement proper database backup and recovery",
        "Consider database connection retry mechanisms",
    ),
    "SECURITY_VIOLATION": (
        "Implement additional security monitoring",
        "Review and update security policies",
        "Consider implementing rate limiting",
        "Set up immediate alerting for security events",
        "Review access logs for suspicious patterns",
    ),
}

GENERIC_SUGGESTIONS: tuple[str, ...] = (
    "Review logs for patterns and root causes",
    "Implement monitoring and alerting",
    "Consider adding additional error handling",
    "Document and track error resolution steps",
)


def suggestions_for(category: str) -> list[str]:
    """Return remediation suggestions for *category*, or the generic four."""
    return list(_SUGGESTIONS.get(category, GENERIC_SUGGESTIONS))
