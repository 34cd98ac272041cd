import dataclasses
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, get_type_hints

from .errors import MalformedReportError


def camel_key(name: str) -> str:
    """Persisted key for a snake_case attribute, e.g. ``year_on_year_comparison``."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def parse_report_date(value: Any) -> Optional[date]:
    """
    Accept a date, a datetime, or an ISO 8601 string (plain date or the
    ``2024-01-01T00:00:00.000Z`` form browsers serialise). Returns None
    when the value cannot be read as a calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


class _Record:
    """Mapping <-> dataclass plumbing shared by every section record."""

    @classmethod
    def from_dict(cls, data: Any):
        if not isinstance(data, Mapping):
            raise MalformedReportError(
                f"{cls.__name__} expects a mapping, got {type(data).__name__}"
            )
        hints = get_type_hints(cls)
        values: Dict[str, Any] = {}
        for f in fields(cls):
            hint = hints[f.name]
            raw = data.get(camel_key(f.name))
            if isinstance(hint, type) and is_dataclass(hint):
                values[f.name] = hint.from_dict(raw)
            elif hint is date:
                parsed = parse_report_date(raw)
                if parsed is None:
                    raise MalformedReportError(
                        f"{cls.__name__}.{f.name} is not a calendar date: {raw!r}"
                    )
                values[f.name] = parsed
            elif hint is str:
                if not isinstance(raw, str):
                    raise MalformedReportError(
                        f"{cls.__name__}.{f.name} must be a string, got {type(raw).__name__}"
                    )
                values[f.name] = raw
            else:
                if raw is not None and not isinstance(raw, str):
                    raise MalformedReportError(
                        f"{cls.__name__}.{f.name} must be a string or absent"
                    )
                values[f.name] = raw
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, _Record):
                value = value.to_dict()
            out[camel_key(f.name)] = value
        return out


# 1. Executive summary
@dataclass(frozen=True)
class KeyHighlights(_Record):
    injury_reduction: str
    safety_training: str
    emergency_drills: str
    risk_assessment_completion: str


@dataclass(frozen=True)
class ExecutiveSummary(_Record):
    purpose_of_report: str
    key_highlights: KeyHighlights


# 3. Health and safety performance
@dataclass(frozen=True)
class IncidentSummary(_Record):
    total_incidents: str
    minor_injuries: str
    major_accidents: str
    ltifr: str
    trir: str


@dataclass(frozen=True)
class HealthAndSafetyPerformance(_Record):
    incident_summary: IncidentSummary
    year_on_year_comparison: Optional[str] = None
    leading_indicators: Optional[str] = None


# 4. Safety training
@dataclass(frozen=True)
class TrainingInitiatives(_Record):
    employees_trained: str
    topics_covered: str
    specialized_training: str


@dataclass(frozen=True)
class SafetyTraining(_Record):
    training_initiatives: TrainingInitiatives
    new_hire_orientation: str
    refresher_courses: str


# 5. Hazard identification
@dataclass(frozen=True)
class RiskAssessments(_Record):
    completion_rate: str
    methodology: str


@dataclass(frozen=True)
class HazardIdentification(_Record):
    risk_assessments: RiskAssessments
    top_hazards: str
    control_measures: str


# 6. Incident investigations
@dataclass(frozen=True)
class IncidentInvestigations(_Record):
    total_investigated: str
    root_causes: str
    corrective_actions: str
    follow_up_verification: str


# 7. Emergency preparedness
@dataclass(frozen=True)
class Drills(_Record):
    drills_conducted: str
    participation_rate: str
    evacuation_success_rate: str


@dataclass(frozen=True)
class EmergencyPreparedness(_Record):
    drills: Drills
    first_aid_capabilities: str
    emergency_response_plans: str


# 8. PPE and equipment
@dataclass(frozen=True)
class PPECompliance(_Record):
    compliance_rate: str
    ppe_types: str


@dataclass(frozen=True)
class PPEAndEquipment(_Record):
    ppe_compliance: PPECompliance
    equipment_inspections: str


# 9. Employee health
@dataclass(frozen=True)
class EmployeeHealth(_Record):
    wellness_initiatives: str
    campaigns_and_awareness: str


# 10. Challenges
@dataclass(frozen=True)
class Challenges(_Record):
    key_challenges: str
    proposed_improvements: str


# 12. Sign-off
@dataclass(frozen=True)
class SignOff(_Record):
    inspector_name: str
    inspector_signature: Optional[str] = None


@dataclass(frozen=True)
class Report(_Record):
    """
    One annual OHS submission. Sections are declared in document order; the
    renderer and the validator both rely on that order.
    """

    depot_location: str
    reporting_period: str
    prepared_by: str
    date: date
    executive_summary: ExecutiveSummary
    policy_statement: str
    health_and_safety_performance: HealthAndSafetyPerformance
    safety_training: SafetyTraining
    hazard_identification: HazardIdentification
    incident_investigations: IncidentInvestigations
    emergency_preparedness: EmergencyPreparedness
    ppe_and_equipment: PPEAndEquipment
    employee_health: EmployeeHealth
    challenges: Challenges
    recommendations: str
    sign_off: SignOff
    appendices: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["date"] = self.date.isoformat()
        if self.id is None:
            out.pop("id")
        return out

    def with_id(self, report_id: str) -> "Report":
        return dataclasses.replace(self, id=report_id)
