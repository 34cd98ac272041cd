import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .config import DEFAULT_TEMPLATE_DIR, DOCUMENT_TITLE, PLACEHOLDER
from .models import Report
from .outline import HEADER_FIELDS, SECTION_REGISTRY, FieldSpec, SubSection

logger = logging.getLogger(__name__)


def _build_env(template_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(enabled_extensions=("html", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def build_payload(report: Report) -> Dict[str, Any]:
    """Flatten the outline into plain dicts in print order, placeholders applied."""
    header = [
        {"label": spec.label, "value": spec.value(report) or PLACEHOLDER} for spec in HEADER_FIELDS
    ]
    sections: List[Dict[str, Any]] = []
    for section in SECTION_REGISTRY:
        if not section.is_present(report):
            continue
        items = []
        for item in section.items:
            if isinstance(item, SubSection):
                items.append({"kind": "subsection", "title": item.title})
            elif isinstance(item, FieldSpec):
                items.append(
                    {"kind": "field", "label": item.label, "value": item.value(report) or PLACEHOLDER}
                )
        sections.append({"id": section.id, "title": section.title, "items": items})
    return {"title": DOCUMENT_TITLE, "report_id": report.id, "header": header, "sections": sections}


class HtmlReportRenderer:
    """
    Thin wrapper around Jinja2 for the on-screen view of a report.
    If the template is missing, render a minimal fallback page instead.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir or DEFAULT_TEMPLATE_DIR
        self.env = _build_env(self.template_dir)

    def render(self, report: Report, template_name: str = "report.html") -> str:
        payload = build_payload(report)
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound:
            logger.warning("Missing template %s in %s", template_name, self.template_dir)
            return f"<html><body><h1>{payload['title']}</h1><p>[Missing template: {template_name}]</p></body></html>"
        return template.render(**payload)


def build_html_report(report: Report, template_dir: Optional[Path] = None) -> str:
    return HtmlReportRenderer(template_dir).render(report)
