"""
Pytest configuration and shared fixtures for ohs_report.
"""

import copy
from typing import List

import pytest

from ohs_report.models import Report


VALID_REPORT = {
    "depotLocation": "Pinetown",
    "reportingPeriod": "2024",
    "preparedBy": "J. Smith",
    "date": "2024-01-01",
    "executiveSummary": {
        "purposeOfReport": "Annual review of depot safety.",
        "keyHighlights": {
            "injuryReduction": "15%",
            "safetyTraining": "100 staff",
            "emergencyDrills": "4 drills",
            "riskAssessmentCompletion": "100%",
        },
    },
    "policyStatement": "Zero harm to every employee.",
    "healthAndSafetyPerformance": {
        "incidentSummary": {
            "totalIncidents": "5",
            "minorInjuries": "3",
            "majorAccidents": "0",
            "ltifr": "1.2",
            "trir": "3.5",
        },
        "leadingIndicators": "Near-miss reports up 20%",
    },
    "safetyTraining": {
        "trainingInitiatives": {
            "employeesTrained": "80",
            "topicsCovered": "First aid",
            "specializedTraining": "Working at height",
        },
        "newHireOrientation": "Two-day induction",
        "refresherCourses": "Biannual",
    },
    "hazardIdentification": {
        "riskAssessments": {"completionRate": "100%", "methodology": "HIRA"},
        "topHazards": "Manual handling",
        "controlMeasures": "Lifting aids",
    },
    "incidentInvestigations": {
        "totalInvestigated": "5",
        "rootCauses": "Training gaps",
        "correctiveActions": "Retraining",
        "followUpVerification": "Quarterly audit",
    },
    "emergencyPreparedness": {
        "drills": {
            "drillsConducted": "4",
            "participationRate": "80%",
            "evacuationSuccessRate": "100%",
        },
        "firstAidCapabilities": "6 first aiders",
        "emergencyResponsePlans": "Reviewed in March",
    },
    "ppeAndEquipment": {
        "ppeCompliance": {"complianceRate": "95%", "ppeTypes": "Hard hats"},
        "equipmentInspections": "Monthly",
    },
    "employeeHealth": {
        "wellnessInitiatives": "Health screenings",
        "campaignsAndAwareness": "Ergonomics",
    },
    "challenges": {
        "keyChallenges": "Training completion",
        "proposedImprovements": "E-learning",
    },
    "recommendations": "Expand near-miss reporting",
    "signOff": {"inspectorName": "A. Auditor"},
}


class FixedWidthMeasurer:
    """Deterministic measurer: every character is the same width."""

    def __init__(self, char_width: float = 5.0):
        self.char_width = char_width
        self.calls = []

    def wrap(self, text: str, width: float, font_style: str, font_size: float) -> List[str]:
        self.calls.append((text, width, font_style, font_size))
        per_line = max(1, int(width // self.char_width))
        return [text[i:i + per_line] for i in range(0, len(text), per_line)] or [""]


@pytest.fixture
def report_dict():
    """A fresh, fully valid raw report (yearOnYearComparison left out)."""
    return copy.deepcopy(VALID_REPORT)


@pytest.fixture
def report(report_dict):
    return Report.from_dict(report_dict)


@pytest.fixture
def measurer():
    return FixedWidthMeasurer()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "store" / "reports.json"
