"""
Job Manager for deferred commentary.

An asynchronous analysis first stores a pending report (metadata, hygiene
findings and one placeholder per source file), then a background thread asks
the LLM about every file and commits the finished report with compare-and-set,
so a newer analysis of the same repository is never overwritten by a stale job.

Example:
--------
>>> from repo_review.core.services.job_manager import JobManager
>>> jobs = JobManager(store)
>>> report = jobs.start_job(snapshot, agent, background=False)
>>> report["status"]
'pending'
>>> store.get("octocat/hello-world")["status"]
'completed'
"""

import logging
import threading
import uuid
from typing import Any, Dict

from repo_review.core.agent.commentary import CommentaryAgent
from repo_review.core.analyzers.manager import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PENDING,
    RepositorySnapshot,
    pending_analyses,
)
from repo_review.core.storage import ReportStore, report_key

logger = logging.getLogger(__name__)


class JobManager:
    """
    Run deferred commentary jobs and write their results to a ReportStore.

    Job state lives in the stored report (`status`, `error`); the manager
    itself keeps nothing per job.
    """

    def __init__(self, store: ReportStore) -> None:
        self.store = store

    def start_job(
        self,
        snapshot: RepositorySnapshot,
        agent: CommentaryAgent,
        background: bool = True,
    ) -> Dict[str, Any]:
        """
        Store the pending report and schedule commentary for its files.

        Args:
            snapshot: Repository data collected by the analyzer.
            agent: CommentaryAgent used by the job.
            background: Whether to run in a background thread.

        Returns:
            The pending report as stored.
        """
        key = report_key(snapshot.owner, snapshot.repo)
        report = snapshot.to_report(pending_analyses(snapshot.files), STATUS_PENDING)
        revision = self.store.put(key, report)

        job_id = f"job-{uuid.uuid4().hex}"
        logger.info("Queued %s for %s (%d files)", job_id, snapshot.full_name, len(snapshot.files))

        if background:
            thread = threading.Thread(
                target=self._run_job,
                args=(job_id, key, revision, snapshot, agent),
                daemon=True,
            )
            thread.start()
        else:
            self._run_job(job_id, key, revision, snapshot, agent)

        return report

    def _run_job(
        self,
        job_id: str,
        key: str,
        revision: int,
        snapshot: RepositorySnapshot,
        agent: CommentaryAgent,
    ) -> None:
        """
        Internal worker: analyze files and commit the final report.
        """
        try:
            analyses = agent.analyze_files(snapshot.files)
            report = snapshot.to_report(analyses, STATUS_COMPLETED)
        except Exception:
            logger.exception("Commentary job %s for %s failed", job_id, snapshot.full_name)
            unfinished = [dict(entry, deepAnalysisPending=False) for entry in pending_analyses(snapshot.files)]
            report = snapshot.to_report(unfinished, STATUS_FAILED)
            report["error"] = "Failed to analyze repository files."

        if not self.store.replace(key, revision, report):
            logger.info("Discarding result of %s: %s was re-analyzed", job_id, snapshot.full_name)
