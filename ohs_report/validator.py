"""
Report schema rules and the validator that applies them.

Every leaf of the report has one rule. ``validate`` walks the rules in
document order and keeps going after a failure, so the caller receives every
problem at once, each tagged with the dotted path of the offending field
(e.g. ``healthAndSafetyPerformance.incidentSummary.ltifr``).

Minimum lengths are checked against the raw string. Whitespace counts toward
the length and values are never trimmed.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Set, Tuple

from .models import Report, parse_report_date

logger = logging.getLogger(__name__)

REQUIRED = "Required."
EXPECTED_STRING = "Expected string."
EXPECTED_OBJECT = "Expected object."
DATE_REQUIRED = "A date is required."
DATE_INVALID = "Invalid date."

_MISSING = object()


@dataclass(frozen=True)
class FieldViolation:
    path: str
    message: str


@dataclass(frozen=True)
class FieldRule:
    """
    One leaf constraint. ``min_length`` of None marks an optional text
    field; ``kind="date"`` marks the report date.
    """

    path: str
    min_length: Optional[int] = None
    message: str = REQUIRED
    kind: str = "text"

    @property
    def required(self) -> bool:
        return self.kind == "date" or self.min_length is not None


def _req(path: str, min_length: int, message: str = REQUIRED) -> FieldRule:
    return FieldRule(path=path, min_length=min_length, message=message)


def _opt(path: str) -> FieldRule:
    return FieldRule(path=path)


_AT_LEAST_2 = "At least 2 characters."

REPORT_RULES: Tuple[FieldRule, ...] = (
    _req("depotLocation", 2, "Depot location must be at least 2 characters."),
    _req("reportingPeriod", 2, "Reporting period must be at least 2 characters."),
    _req("preparedBy", 2, "Prepared by must be at least 2 characters."),
    FieldRule(path="date", message=DATE_REQUIRED, kind="date"),
    # 1. Executive summary
    _req("executiveSummary.purposeOfReport", 10, "Provide an overview (at least 10 characters)."),
    _req("executiveSummary.keyHighlights.injuryReduction", 1),
    _req("executiveSummary.keyHighlights.safetyTraining", 1),
    _req("executiveSummary.keyHighlights.emergencyDrills", 1),
    _req("executiveSummary.keyHighlights.riskAssessmentCompletion", 1),
    # 2. Policy statement
    _req("policyStatement", 10, "Policy statement must be at least 10 characters."),
    # 3. Performance
    _req("healthAndSafetyPerformance.incidentSummary.totalIncidents", 1),
    _req("healthAndSafetyPerformance.incidentSummary.minorInjuries", 1),
    _req("healthAndSafetyPerformance.incidentSummary.majorAccidents", 1),
    _req("healthAndSafetyPerformance.incidentSummary.ltifr", 1),
    _req("healthAndSafetyPerformance.incidentSummary.trir", 1),
    _opt("healthAndSafetyPerformance.yearOnYearComparison"),
    _opt("healthAndSafetyPerformance.leadingIndicators"),
    # 4. Safety training
    _req("safetyTraining.trainingInitiatives.employeesTrained", 1),
    _req("safetyTraining.trainingInitiatives.topicsCovered", 2, _AT_LEAST_2),
    _req("safetyTraining.trainingInitiatives.specializedTraining", 2, _AT_LEAST_2),
    _req("safetyTraining.newHireOrientation", 2, _AT_LEAST_2),
    _req("safetyTraining.refresherCourses", 2, _AT_LEAST_2),
    # 5. Hazard identification
    _req("hazardIdentification.riskAssessments.completionRate", 1),
    _req("hazardIdentification.riskAssessments.methodology", 2, _AT_LEAST_2),
    _req("hazardIdentification.topHazards", 2, _AT_LEAST_2),
    _req("hazardIdentification.controlMeasures", 2, _AT_LEAST_2),
    # 6. Incident investigations
    _req("incidentInvestigations.totalInvestigated", 1),
    _req("incidentInvestigations.rootCauses", 2, _AT_LEAST_2),
    _req("incidentInvestigations.correctiveActions", 2, _AT_LEAST_2),
    _req("incidentInvestigations.followUpVerification", 2, _AT_LEAST_2),
    # 7. Emergency preparedness
    _req("emergencyPreparedness.drills.drillsConducted", 1),
    _req("emergencyPreparedness.drills.participationRate", 1),
    _req("emergencyPreparedness.drills.evacuationSuccessRate", 1),
    _req("emergencyPreparedness.firstAidCapabilities", 2, "Must be at least 2 characters."),
    _req("emergencyPreparedness.emergencyResponsePlans", 2, "Must be at least 2 characters."),
    # 8. PPE and equipment
    _req("ppeAndEquipment.ppeCompliance.complianceRate", 1),
    _req("ppeAndEquipment.ppeCompliance.ppeTypes", 2, _AT_LEAST_2),
    _req("ppeAndEquipment.equipmentInspections", 2, _AT_LEAST_2),
    # 9. Employee health
    _req("employeeHealth.wellnessInitiatives", 2, _AT_LEAST_2),
    _req("employeeHealth.campaignsAndAwareness", 2, _AT_LEAST_2),
    # 10. Challenges
    _req("challenges.keyChallenges", 2, _AT_LEAST_2),
    _req("challenges.proposedImprovements", 2, _AT_LEAST_2),
    # 11. Recommendations
    _req("recommendations", 2, _AT_LEAST_2),
    # 12. Sign-off
    _req("signOff.inspectorName", 2, "Inspector name must be at least 2 characters."),
    _opt("signOff.inspectorSignature"),
    # Appendices
    _opt("appendices"),
)


@dataclass(frozen=True)
class ValidationResult:
    report: Optional[Report]
    violations: Tuple[FieldViolation, ...] = ()

    @property
    def ok(self) -> bool:
        return self.report is not None and not self.violations


def _lookup(candidate: Mapping[str, Any], path: str, bad_containers: Set[str], errors: List[FieldViolation]) -> Any:
    """
    Resolve a dotted path. A missing container resolves every leaf below it
    to _MISSING; a container of the wrong type is reported once and yields
    None so its leaves are skipped.
    """
    node: Any = candidate
    parts = path.split(".")
    for depth, key in enumerate(parts[:-1]):
        node = node.get(key)
        container_path = ".".join(parts[: depth + 1])
        if node is None:
            return _MISSING
        if not isinstance(node, Mapping):
            if container_path not in bad_containers:
                bad_containers.add(container_path)
                errors.append(FieldViolation(container_path, EXPECTED_OBJECT))
            return None
    return node.get(parts[-1], _MISSING)


def _check_text(rule: FieldRule, value: Any, errors: List[FieldViolation]) -> None:
    if value is _MISSING or value is None:
        if rule.required:
            errors.append(FieldViolation(rule.path, REQUIRED))
        return
    if not isinstance(value, str):
        errors.append(FieldViolation(rule.path, EXPECTED_STRING))
        return
    if rule.required and len(value) < rule.min_length:
        errors.append(FieldViolation(rule.path, rule.message))


def _check_date(rule: FieldRule, value: Any, errors: List[FieldViolation]) -> None:
    if value is _MISSING or value is None or value == "":
        errors.append(FieldViolation(rule.path, DATE_REQUIRED))
        return
    if parse_report_date(value) is None:
        errors.append(FieldViolation(rule.path, DATE_INVALID))


def validate(candidate: Any, rules: Tuple[FieldRule, ...] = REPORT_RULES) -> ValidationResult:
    """Check a raw record against every rule and build a Report when clean."""
    if not isinstance(candidate, Mapping):
        return ValidationResult(report=None, violations=(FieldViolation("", EXPECTED_OBJECT),))

    errors: List[FieldViolation] = []
    bad_containers: Set[str] = set()
    for rule in rules:
        value = _lookup(candidate, rule.path, bad_containers, errors)
        if value is None and any(rule.path.startswith(p + ".") for p in bad_containers):
            continue
        if rule.kind == "date":
            _check_date(rule, value, errors)
        else:
            _check_text(rule, value, errors)
    if candidate.get("id") is not None and not isinstance(candidate["id"], str):
        errors.append(FieldViolation("id", EXPECTED_STRING))

    if errors:
        logger.debug("Report rejected with %d violation(s)", len(errors))
        return ValidationResult(report=None, violations=tuple(errors))
    return ValidationResult(report=Report.from_dict(candidate))
