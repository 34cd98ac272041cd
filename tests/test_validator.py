"""
Unit tests for the report validator.
"""

from datetime import date, datetime

import pytest

from ohs_report.models import Report
from ohs_report.validator import (
    DATE_INVALID,
    DATE_REQUIRED,
    EXPECTED_OBJECT,
    EXPECTED_STRING,
    REPORT_RULES,
    REQUIRED,
    FieldViolation,
    validate,
)


def _drop(data, path):
    *parents, leaf = path.split(".")
    node = data
    for key in parents:
        node = node[key]
    del node[leaf]


def _set(data, path, value):
    *parents, leaf = path.split(".")
    node = data
    for key in parents:
        node = node[key]
    node[leaf] = value


REQUIRED_TEXT_PATHS = [r.path for r in REPORT_RULES if r.kind == "text" and r.required]
OPTIONAL_PATHS = [r.path for r in REPORT_RULES if not r.required]


class TestValidReports:
    """Reports that satisfy every rule."""

    def test_example_report_passes(self, report_dict):
        """The Pinetown example validates with no violations."""
        result = validate(report_dict)
        assert result.ok
        assert result.violations == ()
        assert isinstance(result.report, Report)
        assert result.report.depot_location == "Pinetown"
        assert result.report.date == date(2024, 1, 1)
        assert result.report.health_and_safety_performance.year_on_year_comparison is None

    def test_validate_does_not_mutate_input(self, report_dict):
        """Validation is a pure function of its input."""
        snapshot = repr(report_dict)
        validate(report_dict)
        assert repr(report_dict) == snapshot

    @pytest.mark.parametrize("path", OPTIONAL_PATHS)
    def test_optional_fields_may_be_absent(self, report_dict, path):
        """Dropping or nulling an optional field is never a violation."""
        _set(report_dict, path, None)
        assert validate(report_dict).ok

    def test_optional_empty_string_is_accepted(self, report_dict):
        _set(report_dict, "signOff.inspectorSignature", "")
        assert validate(report_dict).ok

    def test_whitespace_counts_toward_length(self, report_dict):
        """Ten spaces satisfy a ten-character minimum; nothing is trimmed."""
        report_dict["policyStatement"] = " " * 10
        result = validate(report_dict)
        assert result.ok
        assert result.report.policy_statement == " " * 10

    def test_existing_id_is_kept(self, report_dict):
        report_dict["id"] = "abc123"
        assert validate(report_dict).report.id == "abc123"

    @pytest.mark.parametrize(
        "value",
        ["2024-01-01", "2024-01-01T00:00:00.000Z", date(2024, 1, 1), datetime(2024, 1, 1, 9, 30)],
    )
    def test_date_formats(self, report_dict, value):
        report_dict["date"] = value
        result = validate(report_dict)
        assert result.ok
        assert result.report.date == date(2024, 1, 1)


class TestViolations:
    """Every broken rule is reported with its dotted path."""

    def test_short_policy_statement(self, report_dict):
        """A 5-character policy statement yields exactly one violation."""
        report_dict["policyStatement"] = "Safe!"
        result = validate(report_dict)
        assert not result.ok
        assert result.report is None
        assert result.violations == (
            FieldViolation("policyStatement", "Policy statement must be at least 10 characters."),
        )

    @pytest.mark.parametrize("path", REQUIRED_TEXT_PATHS)
    def test_missing_required_field_is_reported(self, report_dict, path):
        _drop(report_dict, path)
        result = validate(report_dict)
        assert not result.ok
        assert FieldViolation(path, REQUIRED) in result.violations

    @pytest.mark.parametrize("path", REQUIRED_TEXT_PATHS)
    def test_empty_required_field_is_reported(self, report_dict, path):
        _set(report_dict, path, "")
        result = validate(report_dict)
        assert [v.path for v in result.violations] == [path]

    def test_all_violations_are_collected(self, report_dict):
        """Evaluation does not stop at the first failure."""
        report_dict["depotLocation"] = "P"
        report_dict["healthAndSafetyPerformance"]["incidentSummary"]["ltifr"] = ""
        report_dict["signOff"]["inspectorName"] = "A"
        result = validate(report_dict)
        assert [v.path for v in result.violations] == [
            "depotLocation",
            "healthAndSafetyPerformance.incidentSummary.ltifr",
            "signOff.inspectorName",
        ]
        assert result.violations[0].message == "Depot location must be at least 2 characters."

    def test_non_string_leaf(self, report_dict):
        report_dict["executiveSummary"]["keyHighlights"]["emergencyDrills"] = 4
        result = validate(report_dict)
        assert result.violations == (
            FieldViolation("executiveSummary.keyHighlights.emergencyDrills", EXPECTED_STRING),
        )

    def test_non_string_optional_leaf(self, report_dict):
        report_dict["appendices"] = ["checklist.pdf"]
        assert validate(report_dict).violations == (FieldViolation("appendices", EXPECTED_STRING),)

    def test_missing_section_reports_each_leaf(self, report_dict):
        del report_dict["employeeHealth"]
        result = validate(report_dict)
        assert result.violations == (
            FieldViolation("employeeHealth.wellnessInitiatives", REQUIRED),
            FieldViolation("employeeHealth.campaignsAndAwareness", REQUIRED),
        )

    def test_wrong_type_section_reported_once(self, report_dict):
        report_dict["challenges"] = "none"
        result = validate(report_dict)
        assert result.violations == (FieldViolation("challenges", EXPECTED_OBJECT),)

    def test_wrong_type_nested_container(self, report_dict):
        report_dict["hazardIdentification"]["riskAssessments"] = []
        result = validate(report_dict)
        assert result.violations == (
            FieldViolation("hazardIdentification.riskAssessments", EXPECTED_OBJECT),
        )

    def test_missing_date(self, report_dict):
        del report_dict["date"]
        assert validate(report_dict).violations == (FieldViolation("date", DATE_REQUIRED),)

    @pytest.mark.parametrize("value", ["not a date", "2024-13-40", 20240101])
    def test_malformed_date(self, report_dict, value):
        report_dict["date"] = value
        assert validate(report_dict).violations == (FieldViolation("date", DATE_INVALID),)

    def test_non_mapping_candidate(self):
        result = validate(["not", "a", "report"])
        assert result.violations == (FieldViolation("", EXPECTED_OBJECT),)

    def test_non_string_id(self, report_dict):
        report_dict["id"] = 42
        assert validate(report_dict).violations == (FieldViolation("id", EXPECTED_STRING),)
