"""
API routes for the repo-review FastAPI app.

Endpoints:
- POST /api/analyze: Analyze a GitHub repository.
- GET /api/reports: List the most recent reports.
- GET /api/reports/{owner}/{repo}: Latest report for a repository.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from repo_review.config.llm_config import AnalysisConfig, load_analysis_config
from repo_review.core.agent.commentary import CommentaryAgent
from repo_review.core.analyzers.manager import ClientFactory, analyze_snapshot, collect_repository
from repo_review.core.errors import AnalysisError, ReportNotFound, UnhandledFailure
from repo_review.core.services.job_manager import JobManager
from repo_review.core.storage import InMemoryReportStore, ReportStore, report_key
from repo_review.integrations.github_integration import GitHubClient

from repo_review.core.app.api.schemas import AnalysisReport, AnalyzeRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

_report_store = InMemoryReportStore()
_job_manager = JobManager(_report_store)

ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)
}


def get_report_store() -> ReportStore:
    return _report_store


def get_job_manager() -> JobManager:
    return _job_manager


@lru_cache(maxsize=1)
def get_commentary_agent() -> Optional[CommentaryAgent]:
    return CommentaryAgent.from_env()


def get_client_factory() -> ClientFactory:
    return GitHubClient


def get_analysis_config() -> AnalysisConfig:
    return load_analysis_config()


@router.post(
    "/analyze",
    response_model=AnalysisReport,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
def analyze_repo_endpoint(
    request: AnalyzeRequest,
    agent: Optional[CommentaryAgent] = Depends(get_commentary_agent),
    client_factory: ClientFactory = Depends(get_client_factory),
    config: AnalysisConfig = Depends(get_analysis_config),
    store: ReportStore = Depends(get_report_store),
    jobs: JobManager = Depends(get_job_manager),
):
    """
    Analyze a GitHub repository.

    - Without `runAsync`, runs every stage and returns the completed report.
    - With `runAsync` and LLM commentary enabled, returns a `pending` report
      whose file entries carry `deepAnalysisPending: true`; poll
      `GET /api/reports/{owner}/{repo}` for the result.

    Example response:
    ```json
    {
      "basicInfo": {"name": "hello-world", "description": null, "stars": 42,
                    "forks": 7, "openIssues": 1, "language": "Python", "isPrivate": false},
      "fileAnalyses": [],
      "suggestions": ["Add a repository description to help others understand your project."],
      "vulnerabilities": [],
      "status": "completed"
    }
    ```
    """
    try:
        snapshot = collect_repository(
            request.repo_url,
            token=request.token,
            fetch_files=agent is not None,
            client_factory=client_factory,
            config=config,
        )

        if agent is not None and request.run_async:
            report = jobs.start_job(snapshot, agent, background=True)
        else:
            report = analyze_snapshot(snapshot, agent)
            store.put(report_key(snapshot.owner, snapshot.repo), report)
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("Error analyzing repository %s", request.repo_url)
        raise UnhandledFailure(str(e))

    return AnalysisReport.model_validate(report)


@router.get("/reports", response_model=List[AnalysisReport], response_model_exclude_unset=True)
def list_reports(limit: int = 20, offset: int = 0, store: ReportStore = Depends(get_report_store)):
    """
    List stored reports, most recently written first.
    """
    return [AnalysisReport.model_validate(r) for r in store.list_reports(limit=limit, offset=offset)]


@router.get(
    "/reports/{owner}/{repo}",
    response_model=AnalysisReport,
    response_model_exclude_unset=True,
    responses={404: {"model": ErrorResponse}},
)
def get_report(owner: str, repo: str, store: ReportStore = Depends(get_report_store)):
    """
    Fetch the latest report for a repository (e.g. to poll a deferred analysis).
    """
    report = store.get(report_key(owner, repo))
    if report is None:
        raise ReportNotFound(f"{owner}/{repo}")
    return AnalysisReport.model_validate(report)
