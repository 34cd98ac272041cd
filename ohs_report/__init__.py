"""
Annual Occupational Health and Safety report tooling.

The package validates report submissions against the fixed report schema
and lays validated reports out as fixed-size pages for PDF output.
"""

from .errors import MalformedReportError
from .models import Report
from .renderer import DocumentRenderer, Page, PageLayout, TextRun, render
from .validator import FieldViolation, ValidationResult, validate

__all__ = [
    "DocumentRenderer",
    "FieldViolation",
    "MalformedReportError",
    "Page",
    "PageLayout",
    "Report",
    "TextRun",
    "ValidationResult",
    "render",
    "validate",
]
