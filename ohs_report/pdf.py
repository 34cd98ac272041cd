import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from fpdf import FPDF

from .config import DEFAULT_REPORT_DIR, ENV_REPORT_DIR, FONT_FAMILY, PAGE_FORMAT
from .models import Report
from .renderer import DocumentRenderer, Page
from .text_metrics import FPDF_STYLES, FPDFTextMeasurer, pdf_safe_text

logger = logging.getLogger(__name__)


def encode_pages(pages: Sequence[Page], title: str = "") -> bytes:
    """
    Emit one PDF page per rendered Page and place each run at its exact
    position. Automatic page breaks are off: the layout already decided them.
    """
    pdf = FPDF(orientation="P", unit="pt", format=PAGE_FORMAT)
    pdf.set_auto_page_break(auto=False)
    if title:
        pdf.set_title(title)
    for page in pages:
        pdf.add_page()
        for run in page.runs:
            pdf.set_font(FONT_FAMILY, FPDF_STYLES[run.font_style], run.font_size)
            pdf.text(run.x, run.y, pdf_safe_text(run.text))
    return bytes(pdf.output())


def report_filename(report: Report) -> str:
    return f"OHS_Report_{report.id or 'draft'}.pdf"


def resolve_report_dir() -> Path:
    env_dir = os.getenv(ENV_REPORT_DIR, "").strip()
    return Path(env_dir) if env_dir else DEFAULT_REPORT_DIR


def save_pdf(pdf_bytes: bytes, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(pdf_bytes)
    return path


def render_pdf_bytes(report: Report) -> bytes:
    pages = DocumentRenderer(FPDFTextMeasurer()).render(report)
    return encode_pages(pages, title=f"OHS Report - {report.depot_location}")


def generate_pdf(
    report: Report,
    output_dir: Optional[Path] = None,
    filename: Optional[str] = None,
) -> Path:
    """
    Convenience helper that renders, encodes and saves a report. Returns the
    path written.
    """
    pdf_bytes = render_pdf_bytes(report)
    output_path = (output_dir or resolve_report_dir()) / (filename or report_filename(report))
    save_pdf(pdf_bytes, output_path)
    logger.info("Wrote %s (%d bytes)", output_path, len(pdf_bytes))
    return output_path
