from typing import List, Protocol

from fpdf import FPDF

from .config import FONT_FAMILY, PAGE_FORMAT

FPDF_STYLES = {
    "normal": "",
    "bold": "B",
    "italic": "I",
    "bolditalic": "BI",
}


def pdf_safe_text(text: str) -> str:
    """Core PDF fonts only cover latin-1; anything else becomes '?'."""
    if text is None:
        return ""
    return str(text).encode("latin-1", "replace").decode("latin-1")


class TextMeasurer(Protocol):
    """Wraps text so that no returned line is wider than ``width``."""

    def wrap(self, text: str, width: float, font_style: str, font_size: float) -> List[str]:
        ...


def wrap_words(text: str, max_w: float, measure) -> List[str]:
    """
    Greedy word wrap of a single paragraph. ``measure`` returns the width of
    a string; words longer than a full line are broken per character.
    """
    if max_w <= 0:
        return [text]
    lines = []
    current = ""
    for word in text.split(" "):
        if word == "":
            continue
        candidate = word if not current else f"{current} {word}"
        if measure(candidate) <= max_w:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if measure(word) <= max_w:
            current = word
            continue
        chunk = ""
        for ch in word:
            if not chunk or measure(chunk + ch) <= max_w:
                chunk += ch
            else:
                lines.append(chunk)
                chunk = ch
        current = chunk
    if current:
        lines.append(current)
    return lines if lines else [text]


def wrap_text(text: str, max_w: float, measure) -> List[str]:
    """Wrap every newline-separated paragraph; blank paragraphs keep their line."""
    lines: List[str] = []
    for paragraph in text.splitlines() or [""]:
        lines.extend(wrap_words(paragraph, max_w, measure))
    return lines


class FPDFTextMeasurer:
    """
    Measures with fpdf2's built-in Helvetica metrics. Holds its own FPDF
    instance, so use one measurer per thread.
    """

    def __init__(self, family: str = FONT_FAMILY):
        self.family = family
        self.pdf = FPDF(orientation="P", unit="pt", format=PAGE_FORMAT)

    def wrap(self, text: str, width: float, font_style: str, font_size: float) -> List[str]:
        self.pdf.set_font(self.family, FPDF_STYLES[font_style], font_size)
        return wrap_text(pdf_safe_text(text), width, self.pdf.get_string_width)
