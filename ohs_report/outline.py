"""
The fixed table of contents of an OHS report.

Each section lists its sub-section headings and fields in the order they are
printed. Field values are read through plain attribute accessors, so the
outline stays tied to the concrete section records in ``models``.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from .models import Report


@dataclass(frozen=True)
class FieldSpec:
    label: str
    value: Callable[[Report], Optional[str]]
    bold_label: bool = True


@dataclass(frozen=True)
class SubSection:
    title: str


OutlineItem = Union[SubSection, FieldSpec]


@dataclass(frozen=True)
class SectionSpec:
    id: str
    title: str
    items: Tuple[OutlineItem, ...]
    optional: bool = False

    def is_present(self, report: Report) -> bool:
        """Optional blocks are only printed when at least one field has content."""
        if not self.optional:
            return True
        return any(isinstance(item, FieldSpec) and item.value(report) for item in self.items)


HEADER_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("Depot Location", lambda r: r.depot_location),
    FieldSpec("Reporting Period", lambda r: r.reporting_period),
    FieldSpec("Prepared By", lambda r: r.prepared_by),
    FieldSpec("Date", lambda r: r.date.isoformat()),
)


SECTION_REGISTRY: Tuple[SectionSpec, ...] = (
    SectionSpec(
        "executive_summary",
        "1. Executive Summary",
        (
            SubSection("1.1 Purpose of the Report"),
            FieldSpec("", lambda r: r.executive_summary.purpose_of_report),
            SubSection("1.2 Key Highlights"),
            FieldSpec(
                "Reduction in Workplace Injuries",
                lambda r: r.executive_summary.key_highlights.injury_reduction,
            ),
            FieldSpec("Safety Training", lambda r: r.executive_summary.key_highlights.safety_training),
            FieldSpec("Emergency Drills", lambda r: r.executive_summary.key_highlights.emergency_drills),
            FieldSpec(
                "Risk Assessment Completion",
                lambda r: r.executive_summary.key_highlights.risk_assessment_completion,
            ),
        ),
    ),
    SectionSpec(
        "policy_statement",
        "2. Health and Safety Policy Statement",
        (FieldSpec("", lambda r: r.policy_statement),),
    ),
    SectionSpec(
        "health_and_safety_performance",
        "3. Health and Safety Performance Indicators",
        (
            SubSection("3.1 Incident Summary"),
            FieldSpec(
                "Total Number of Incidents",
                lambda r: r.health_and_safety_performance.incident_summary.total_incidents,
            ),
            FieldSpec(
                "Minor Injuries",
                lambda r: r.health_and_safety_performance.incident_summary.minor_injuries,
            ),
            FieldSpec(
                "Major Accidents/Fatalities",
                lambda r: r.health_and_safety_performance.incident_summary.major_accidents,
            ),
            FieldSpec(
                "Lost Time Injury Frequency Rate (LTIFR)",
                lambda r: r.health_and_safety_performance.incident_summary.ltifr,
            ),
            FieldSpec(
                "Total Recordable Incident Rate (TRIR)",
                lambda r: r.health_and_safety_performance.incident_summary.trir,
            ),
            SubSection("3.2 Year-on-Year Comparison"),
            FieldSpec("", lambda r: r.health_and_safety_performance.year_on_year_comparison),
            SubSection("3.3 Leading Indicators"),
            FieldSpec("", lambda r: r.health_and_safety_performance.leading_indicators),
        ),
    ),
    SectionSpec(
        "safety_training",
        "4. Safety Training and Education",
        (
            SubSection("4.1 Training Initiatives"),
            FieldSpec(
                "Number of Employees Trained",
                lambda r: r.safety_training.training_initiatives.employees_trained,
            ),
            FieldSpec("Topics Covered", lambda r: r.safety_training.training_initiatives.topics_covered),
            FieldSpec(
                "Specialized Training",
                lambda r: r.safety_training.training_initiatives.specialized_training,
            ),
            SubSection("4.2 New Hire Orientation"),
            FieldSpec("", lambda r: r.safety_training.new_hire_orientation),
            SubSection("4.3 Refresher Courses"),
            FieldSpec("", lambda r: r.safety_training.refresher_courses),
        ),
    ),
    SectionSpec(
        "hazard_identification",
        "5. Hazard Identification and Risk Assessment",
        (
            SubSection("5.1 Risk Assessments"),
            FieldSpec("Completion Rate", lambda r: r.hazard_identification.risk_assessments.completion_rate),
            FieldSpec("Methodology Used", lambda r: r.hazard_identification.risk_assessments.methodology),
            SubSection("5.2 Top Hazards Identified"),
            FieldSpec("", lambda r: r.hazard_identification.top_hazards),
            SubSection("5.3 Control Measures Implemented"),
            FieldSpec("", lambda r: r.hazard_identification.control_measures),
        ),
    ),
    SectionSpec(
        "incident_investigations",
        "6. Incident Investigations and Corrective Actions",
        (
            FieldSpec("Total Incidents Investigated", lambda r: r.incident_investigations.total_investigated),
            FieldSpec("Root Causes Identified", lambda r: r.incident_investigations.root_causes),
            FieldSpec("Corrective Actions Taken", lambda r: r.incident_investigations.corrective_actions),
            FieldSpec("Follow-Up and Verification", lambda r: r.incident_investigations.follow_up_verification),
        ),
    ),
    SectionSpec(
        "emergency_preparedness",
        "7. Emergency Preparedness",
        (
            SubSection("7.1 Emergency Drills"),
            FieldSpec("Drills Conducted", lambda r: r.emergency_preparedness.drills.drills_conducted),
            FieldSpec("Participation Rate", lambda r: r.emergency_preparedness.drills.participation_rate),
            FieldSpec(
                "Evacuation Success Rate",
                lambda r: r.emergency_preparedness.drills.evacuation_success_rate,
            ),
            SubSection("7.2 First Aid and Response Capabilities"),
            FieldSpec("", lambda r: r.emergency_preparedness.first_aid_capabilities),
            SubSection("7.3 Emergency Response Plans"),
            FieldSpec("", lambda r: r.emergency_preparedness.emergency_response_plans),
        ),
    ),
    SectionSpec(
        "ppe_and_equipment",
        "8. PPE and Equipment Management",
        (
            SubSection("8.1 PPE Compliance"),
            FieldSpec("Compliance Rate", lambda r: r.ppe_and_equipment.ppe_compliance.compliance_rate),
            FieldSpec("Types of PPE Issued", lambda r: r.ppe_and_equipment.ppe_compliance.ppe_types),
            SubSection("8.2 Equipment Inspections"),
            FieldSpec("", lambda r: r.ppe_and_equipment.equipment_inspections),
        ),
    ),
    SectionSpec(
        "employee_health",
        "9. Employee Health and Wellness Programs",
        (
            SubSection("9.1 Wellness Initiatives"),
            FieldSpec("", lambda r: r.employee_health.wellness_initiatives),
            SubSection("9.2 Campaigns and Awareness"),
            FieldSpec("", lambda r: r.employee_health.campaigns_and_awareness),
        ),
    ),
    SectionSpec(
        "challenges",
        "10. Challenges and Areas for Improvement",
        (
            SubSection("10.1 Key Challenges"),
            FieldSpec("", lambda r: r.challenges.key_challenges),
            SubSection("10.2 Proposed Improvements"),
            FieldSpec("", lambda r: r.challenges.proposed_improvements),
        ),
    ),
    SectionSpec(
        "recommendations",
        "11. Recommendations",
        (FieldSpec("", lambda r: r.recommendations),),
    ),
    SectionSpec(
        "sign_off",
        "12. Sign-Off and Compliance Statement",
        (
            FieldSpec("Name of OHS Inspector/Auditor", lambda r: r.sign_off.inspector_name),
            FieldSpec("Inspector Signature", lambda r: r.sign_off.inspector_signature),
        ),
    ),
    SectionSpec(
        "appendices",
        "Additional Notes / Appendices",
        (FieldSpec("", lambda r: r.appendices),),
        optional=True,
    ),
)
