import json
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import DEFAULT_REPORT_DIR, DEFAULT_STORE_FILENAME, ENV_STORE_PATH
from .models import Report
from .pdf import render_pdf_bytes, report_filename, resolve_report_dir
from .validator import validate

logger = logging.getLogger(__name__)


def resolve_store_path() -> Path:
    env_path = os.getenv(ENV_STORE_PATH, "").strip()
    if env_path:
        return Path(env_path)
    return DEFAULT_REPORT_DIR / DEFAULT_STORE_FILENAME


class ReportStore:
    """
    Reports persisted as one JSON array of camelCase records, each carrying
    its ``id``. Ids are assigned on create and never derived from content.
    Missing ids are reported through boolean results, not exceptions.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else resolve_store_path()
        self.lock = threading.Lock()

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        return json.loads(self.path.read_text(encoding="utf-8") or "[]")

    def _write(self, records: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def create(self, report: Report) -> str:
        report_id = uuid.uuid4().hex[:12]
        with self.lock:
            records = self._load()
            records.append(report.with_id(report_id).to_dict())
            self._write(records)
        logger.info("Stored report %s (%s)", report_id, report.depot_location)
        return report_id

    def list(self) -> List[Report]:
        with self.lock:
            records = self._load()
        return [Report.from_dict(record) for record in records]

    def get(self, report_id: str) -> Optional[Report]:
        with self.lock:
            records = self._load()
        for record in records:
            if record.get("id") == report_id:
                return Report.from_dict(record)
        return None

    def _load_for_write(self) -> Optional[List[Dict[str, Any]]]:
        try:
            return self._load()
        except json.JSONDecodeError as exc:
            logger.error("Store file %s is not valid JSON: %s", self.path, exc)
            return None

    def update(self, report_id: str, changes: Union[Report, Mapping[str, Any]]) -> bool:
        """
        Shallow-merge ``changes`` over the stored record; the stored id always
        wins. The merged record must still validate as a full report,
        otherwise nothing is written and False is returned. Nested sections
        are replaced whole, so a partial section must carry all its fields.
        """
        patch = changes.to_dict() if isinstance(changes, Report) else dict(changes)
        patch.pop("id", None)
        with self.lock:
            records = self._load_for_write()
            if records is None:
                return False
            for idx, record in enumerate(records):
                if record.get("id") != report_id:
                    continue
                result = validate({**record, **patch, "id": report_id})
                if not result.ok:
                    logger.warning(
                        "Update of report %s rejected: %s",
                        report_id,
                        "; ".join(f"{v.path}: {v.message}" for v in result.violations),
                    )
                    return False
                records[idx] = result.report.to_dict()
                self._write(records)
                logger.info("Updated report %s", report_id)
                return True
        logger.warning("Update skipped: no report with id %s", report_id)
        return False

    def delete(self, report_id: str) -> bool:
        with self.lock:
            records = self._load_for_write()
            if records is None:
                return False
            remaining = [r for r in records if r.get("id") != report_id]
            if len(remaining) == len(records):
                logger.warning("Delete skipped: no report with id %s", report_id)
                return False
            self._write(remaining)
        logger.info("Deleted report %s", report_id)
        return True


def save_report_pdf(report: Report, pdf_bytes: bytes, report_dir: Optional[Path] = None) -> Path:
    """
    Persist a generated PDF and a small metadata sidecar next to it.
    Returns the PDF path.
    """
    report_dir = report_dir or resolve_report_dir()
    report_dir.mkdir(parents=True, exist_ok=True)
    pdf_path = report_dir / report_filename(report)
    meta_path = pdf_path.with_suffix(".json")

    pdf_path.write_bytes(pdf_bytes)

    metadata = {
        "report_id": report.id,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "depot_location": report.depot_location,
        "reporting_period": report.reporting_period,
        "prepared_by": report.prepared_by,
        "report_date": report.date.isoformat(),
        "size_bytes": len(pdf_bytes),
        "path": str(pdf_path),
    }
    try:
        meta_path.write_text(json.dumps(metadata, indent=2))
    except OSError as exc:
        # Metadata failures should not block PDF saving.
        logger.warning("Could not write metadata sidecar %s: %s", meta_path, exc)
    return pdf_path


def render_and_save(report: Report, report_dir: Optional[Path] = None) -> Path:
    """Render a report to PDF and store it with its sidecar."""
    path = save_report_pdf(report, render_pdf_bytes(report), report_dir)
    logger.info("Saved %s", path)
    return path
