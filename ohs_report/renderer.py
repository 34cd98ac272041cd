"""
Paginated layout of a validated report.

The renderer walks the fixed outline and emits positioned text runs onto
fixed-size pages. Page breaks are decided while content is emitted: before
every drawn line the cursor is compared against the bottom threshold, and a
new page is started when it has gone past it. A long field therefore splits
itself across pages line by line, and the continuation resumes at the top
margin of the next page.

Nothing here produces bytes; ``pdf.encode_pages`` turns the pages into a PDF.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import (
    BOTTOM_THRESHOLD,
    DOCUMENT_TITLE,
    END_OF_REPORT,
    FIELD_INDENT,
    FONT_SIZES,
    LEFT_MARGIN,
    LINE_HEIGHT,
    PLACEHOLDER,
    RIGHT_EDGE,
    TOP_MARGIN,
)
from .errors import MalformedReportError
from .models import Report
from .outline import HEADER_FIELDS, SECTION_REGISTRY, FieldSpec, SectionSpec, SubSection
from .text_metrics import FPDFTextMeasurer, TextMeasurer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRun:
    """One draw instruction: ``text`` with its baseline at (x, y)."""

    x: float
    y: float
    font_style: str
    font_size: float
    text: str


@dataclass(frozen=True)
class Page:
    number: int
    runs: Tuple[TextRun, ...] = field(default_factory=tuple)

    @property
    def texts(self) -> List[str]:
        return [run.text for run in self.runs]


class PageLayout:
    """
    Running cursor plus the page accumulators for a single render. Every
    primitive checks for overflow before it draws.
    """

    def __init__(
        self,
        measurer: TextMeasurer,
        top: float = TOP_MARGIN,
        left: float = LEFT_MARGIN,
        right: float = RIGHT_EDGE,
        line_height: float = LINE_HEIGHT,
        indent: float = FIELD_INDENT,
        threshold: float = BOTTOM_THRESHOLD,
    ):
        self.measurer = measurer
        self.top = top
        self.left = left
        self.right = right
        self.line_height = line_height
        self.indent = indent
        self.threshold = threshold

        self.cursor_y = top
        self.pages: List[Page] = []
        self._runs: List[TextRun] = []

    @property
    def wrap_width(self) -> float:
        return self.right - self.left - self.indent

    def _draw(self, x: float, font_style: str, font_size: float, text: str) -> None:
        self._runs.append(TextRun(x, self.cursor_y, font_style, font_size, text))

    def _flush_page(self) -> None:
        self.pages.append(Page(number=len(self.pages) + 1, runs=tuple(self._runs)))
        self._runs = []

    def check_for_new_page(self) -> None:
        if self.cursor_y > self.threshold:
            self._flush_page()
            self.cursor_y = self.top

    def add_title(self, text: str) -> None:
        self.check_for_new_page()
        self._draw(self.left, "bold", FONT_SIZES["title"], text)
        self.cursor_y += self.line_height * 2

    def add_section_title(self, text: str) -> None:
        self.check_for_new_page()
        self._draw(self.left, "bold", FONT_SIZES["section"], text)
        self.cursor_y += self.line_height * 1.5

    def add_sub_section_title(self, text: str) -> None:
        self.check_for_new_page()
        self._draw(self.left, "bold", FONT_SIZES["subsection"], text)
        self.cursor_y += self.line_height

    def add_field(self, label: str, value: Optional[str], bold_label: bool = True) -> None:
        """
        Label on its own line, then the wrapped value indented beneath it.
        Absent or empty values print the placeholder. An empty label skips
        the label line and starts the value at the cursor.
        """
        size = FONT_SIZES["body"]
        if label:
            self.check_for_new_page()
            self._draw(self.left, "bold" if bold_label else "normal", size, f"{label}:")
            self.cursor_y += self.line_height
        lines = self.measurer.wrap(value or PLACEHOLDER, self.wrap_width, "normal", size)
        for line in lines:
            self.check_for_new_page()
            self._draw(self.left + self.indent, "normal", size, line)
            self.cursor_y += self.line_height

    def add_spacing(self, lines: float = 1) -> None:
        self.cursor_y += self.line_height * lines

    def add_closing_note(self, text: str, gap: float = 30) -> None:
        self.cursor_y += gap
        self.check_for_new_page()
        self._draw(self.left, "italic", FONT_SIZES["body"], text)

    def finish(self) -> List[Page]:
        if self._runs or not self.pages:
            self._flush_page()
        return self.pages


class DocumentRenderer:
    """
    Lays out a Report in the fixed outline order. The renderer keeps no
    state between calls; each ``render`` builds its own PageLayout.
    """

    def __init__(
        self,
        measurer: Optional[TextMeasurer] = None,
        sections: Tuple[SectionSpec, ...] = SECTION_REGISTRY,
    ):
        self.measurer = measurer
        self.sections = sections

    def render(self, report: Report) -> List[Page]:
        if not isinstance(report, Report):
            raise MalformedReportError(
                f"render expects a validated Report, got {type(report).__name__}"
            )
        layout = PageLayout(self.measurer or FPDFTextMeasurer())

        layout.add_title(DOCUMENT_TITLE)
        for spec in HEADER_FIELDS:
            layout.add_field(spec.label, spec.value(report), spec.bold_label)
        layout.add_spacing()

        for section in self.sections:
            if not section.is_present(report):
                continue
            layout.add_section_title(section.title.upper())
            for item in section.items:
                if isinstance(item, SubSection):
                    layout.add_sub_section_title(item.title)
                elif isinstance(item, FieldSpec):
                    layout.add_field(item.label, item.value(report), item.bold_label)

        layout.add_closing_note(END_OF_REPORT)
        pages = layout.finish()
        logger.debug("Rendered report %s into %d page(s)", report.id or "<unsaved>", len(pages))
        return pages


def render(report: Report, measurer: Optional[TextMeasurer] = None) -> List[Page]:
    return DocumentRenderer(measurer).render(report)
