from pathlib import Path

# Storage and output locations. Env vars override the defaults.
ENV_STORE_PATH = "OHS_REPORT_STORE"
ENV_REPORT_DIR = "OHS_REPORT_DIR"
DEFAULT_STORE_FILENAME = "ohs_reports.json"

DEFAULT_REPORT_DIR = Path(__file__).resolve().parent.parent / "reports"
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

DOCUMENT_TITLE = "Annual Occupational Health and Safety Report"
PLACEHOLDER = "N/A"
END_OF_REPORT = "End of Report"

# Page geometry in PDF points (A4 portrait).
PAGE_FORMAT = "A4"
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
TOP_MARGIN = 40
LEFT_MARGIN = 40
RIGHT_EDGE = 555
LINE_HEIGHT = 16
FIELD_INDENT = 20
# Leaves a generous buffer above the bottom edge so wrapped lines never clip.
BOTTOM_THRESHOLD = 780

FONT_FAMILY = "helvetica"
FONT_SIZES = {
    "title": 18,
    "section": 14,
    "subsection": 12,
    "body": 10,
}
