# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the line-scanning classification engine."""

from __future__ import annotations

import re
import time

import pytest

from logtriage.classifier.catalogue import all_rules
from logtriage.classifier.engine import ClassificationEngine, classify, split_lines
from logtriage.core.constants import MAX_UPLOAD_BYTES, RuleFamily, Severity
from logtriage.models.rule import PatternRule

# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_single_404_line(self) -> None:
        result = classify("2024-01-01 GET /x 404 OK\n")

        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.category == "404"
        assert finding.severity == Severity.MEDIUM
        assert finding.line_number == 1
        assert finding.message == "Resource Not Found: 2024-01-01 GET /x 404 OK"

    def test_fatal_and_warning_on_separate_lines(self) -> None:
        result = classify("FATAL: disk full\nWARN: retry\n")

        assert [(f.line_number, f.category, f.severity) for f in result.findings] == [
            (1, "FATAL_ERROR", Severity.CRITICAL),
            (2, "WARNING", Severity.LOW),
        ]

    def test_sql_injection(self) -> None:
        result = classify("SQL INJECTION attempt blocked\n")

        assert len(result.findings) == 1
        assert result.findings[0].category == "SQL_INJECTION"
        assert result.findings[0].severity == Severity.CRITICAL
        assert result.findings[0].line_number == 1
        assert result.findings[0].message == "SQL INJECTION attempt blocked"

    def test_line_number_after_500_blank_lines(self) -> None:
        content = "\n" * 500 + " 500 Internal Server Error "
        result = classify(content)

        # "Error" also satisfies the case-insensitive application rule.
        assert [f.category for f in result.findings] == ["500", "APPLICATION_ERROR"]
        assert {f.line_number for f in result.findings} == {501}
        assert result.findings[0].message == "Internal Server Error: 500 Internal Server Error"

    def test_two_application_rules_follow_catalogue_order(self) -> None:
        result = classify("Connection failed: timeout waiting for DB\n")

        assert [f.category for f in result.findings] == ["TIMEOUT", "CONNECTION_ERROR"]
        assert all(f.line_number == 1 for f in result.findings)
        assert all(f.severity == Severity.MEDIUM for f in result.findings)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_determinism(self, mixed_log: str) -> None:
        first = classify(mixed_log)
        second = classify(mixed_log)
        assert first.findings == second.findings

    def test_line_numbers_within_line_count(self, mixed_log: str) -> None:
        result = classify(mixed_log)
        assert result.findings
        assert max(f.line_number for f in result.findings) <= result.line_count

    def test_families_do_not_suppress_each_other(self) -> None:
        result = classify("GET /orders 500 DATABASE ERROR while saving\n")
        categories = [f.category for f in result.findings]

        assert "500" in categories
        assert "DATABASE_ERROR" in categories
        assert categories.index("500") < categories.index("DATABASE_ERROR")

    def test_empty_input(self) -> None:
        result = classify("")

        assert result.findings == []
        assert result.total == 0
        assert result.line_count == 0
        assert result.severity_counts == {"critical": 0, "medium": 0, "low": 0}

    def test_severity_tally_matches_findings(self, mixed_log: str) -> None:
        result = classify(mixed_log)

        for severity in Severity:
            expected = sum(1 for f in result.findings if f.severity == severity)
            assert result.severity_counts[severity] == expected
        assert sum(result.severity_counts.values()) == result.total

    def test_order_is_line_then_family(self, mixed_log: str) -> None:
        rule_index = {r.category: i for i, r in enumerate(all_rules())}
        keys = [(f.line_number, rule_index[f.category]) for f in classify(mixed_log).findings]
        assert keys == sorted(keys)

    def test_repeated_matches_are_not_deduplicated(self) -> None:
        result = classify("x 404 a\nx 404 b\nx 404 c\n")
        assert [f.line_number for f in result.findings] == [1, 2, 3]


# ---------------------------------------------------------------------------
# Mixed fixture file
# ---------------------------------------------------------------------------


class TestMixedLog:
    def test_findings(self, mixed_log: str) -> None:
        result = classify(mixed_log)

        assert [(f.line_number, f.category) for f in result.findings] == [
            (2, "404"),
            (3, "APPLICATION_ERROR"),
            (3, "DATABASE_ERROR"),
            (4, "WARNING"),
            (5, "401"),
            (6, "APPLICATION_ERROR"),
            (6, "FAILED_LOGIN"),
            (7, "500"),
        ]
        assert result.severity_counts == {"critical": 3, "medium": 4, "low": 1}
        assert result.critical_count == 3
        assert result.highest_severity == Severity.CRITICAL

    def test_clean_log_has_no_findings(self, clean_log: str) -> None:
        result = classify(clean_log)
        assert result.findings == []
        assert result.highest_severity is None


# ---------------------------------------------------------------------------
# Line splitting and input handling
# ---------------------------------------------------------------------------


class TestLineSplitting:
    @pytest.mark.parametrize("sep", ["\n", "\r\n", "\r"])
    def test_line_terminators(self, sep: str) -> None:
        content = sep.join(["ok", "FATAL boom", "ok"])
        result = classify(content)

        assert result.line_count == 3
        assert [(f.line_number, f.message) for f in result.findings] == [(2, "FATAL boom")]

    def test_crlf_not_counted_twice(self) -> None:
        assert split_lines("a\r\nb\r\n") == ["a", "b", ""]

    def test_empty_content_has_no_lines(self) -> None:
        assert split_lines("") == []

    def test_http_code_requires_surrounding_whitespace(self) -> None:
        result = classify("GET /4040 took 5000ms\nstatus=404\n")
        assert result.findings == []

    def test_message_is_trimmed(self) -> None:
        result = classify("   \tException in thread main   ")
        assert result.findings[0].message == "Exception in thread main"

    def test_bytes_rejected(self) -> None:
        with pytest.raises(TypeError):
            classify(b"FATAL")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Custom rule sequences
# ---------------------------------------------------------------------------


class TestCustomRules:
    def test_engine_uses_given_rules_only(self) -> None:
        rule = PatternRule(
            family=RuleFamily.APPLICATION,
            category="DISK_FULL",
            title="Disk full",
            pattern=re.compile(r"disk full", re.IGNORECASE),
            severity=Severity.CRITICAL,
            message_template="Disk full: {line}",
        )
        engine = ClassificationEngine([rule])
        result = engine.classify("FATAL: Disk Full on /var\n")

        assert engine.rules == (rule,)
        assert [f.category for f in result.findings] == ["DISK_FULL"]
        assert result.findings[0].message == "Disk full: FATAL: Disk Full on /var"

    def test_default_engine_uses_catalogue(self) -> None:
        assert ClassificationEngine().rules == all_rules()


# ---------------------------------------------------------------------------
# Upload-sized input
# ---------------------------------------------------------------------------


class TestLargeInput:
    def test_classifies_max_upload_size(self, mixed_log: str, clean_log: str) -> None:
        block = mixed_log + clean_log * 9
        copies = MAX_UPLOAD_BYTES // len(block.encode("utf-8"))
        content = block * copies
        lines_per_block = block.count("\n")

        start = time.monotonic()
        result = classify(content)
        elapsed = time.monotonic() - start

        assert elapsed < 60
        assert result.total == 8 * copies
        assert result.severity_counts == {
            "critical": 3 * copies,
            "medium": 4 * copies,
            "low": 1 * copies,
        }
        last = result.findings[-1]
        assert last.line_number > lines_per_block * (copies - 1)
        assert [f.line_number for f in result.findings] == sorted(
            f.line_number for f in result.findings
        )
