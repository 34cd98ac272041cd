import logging
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional

from .models import Report
from .report_store import render_and_save

logger = logging.getLogger(__name__)

PdfBuilder = Callable[[Report], Path]


@dataclass
class ReportJob:
    id: str
    report: Report
    status: str = "submitted"
    result_path: Optional[str] = None
    error: Optional[str] = None
    future: Optional[Future] = field(default=None, repr=False)


class ReportQueue:
    """
    Threaded queue so several PDFs can be rendered without blocking the caller.
    Each job renders with its own measurer and layout, so jobs share nothing.
    """

    def __init__(self, max_workers: int = 2, builder: PdfBuilder = render_and_save):
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="report")
        self.builder = builder
        self.jobs: Dict[str, ReportJob] = {}
        self.lock = threading.Lock()

    def submit(self, report: Report) -> str:
        job_id = uuid.uuid4().hex[:12]
        job = ReportJob(id=job_id, report=report, status="queued")
        with self.lock:
            self.jobs[job_id] = job
        job.future = self.executor.submit(self._run_job, job_id)
        return job_id

    def _run_job(self, job_id: str) -> None:
        with self.lock:
            job = self.jobs[job_id]
            job.status = "running"
        try:
            path = self.builder(job.report)
            with self.lock:
                job.status = "completed"
                job.result_path = str(path)
        except Exception as exc:
            logger.exception("Report job %s failed", job_id)
            with self.lock:
                job.status = "failed"
                job.error = str(exc)

    def get(self, job_id: str) -> Optional[ReportJob]:
        with self.lock:
            return self.jobs.get(job_id)

    def forget(self, job_id: str) -> bool:
        """Drop a finished job. Queued or running jobs are kept."""
        with self.lock:
            job = self.jobs.get(job_id)
            if job is None or job.status not in ("completed", "failed"):
                return False
            del self.jobs[job_id]
        return True

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)
