"""
manager.py - Repository analysis orchestrator

This module coordinates the analysis of a GitHub repository:
URL resolution, metadata fetch, file-tree walk, hygiene checks and the
optional per-file LLM commentary, and aggregates the results into a single
report.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from repo_review.config.llm_config import AnalysisConfig, load_analysis_config
from repo_review.core.agent.commentary import CommentaryAgent
from repo_review.core.hygiene import check_hygiene
from repo_review.core.tree_walker import FileRecord, TreeWalker
from repo_review.core.url_resolver import resolve_repository
from repo_review.integrations.github_integration import GitHubClient, fetch_basic_info

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

ClientFactory = Callable[[Optional[str]], Any]


@dataclass
class RepositorySnapshot:
    """Everything fetched from GitHub for one analysis, before commentary."""

    owner: str
    repo: str
    basic_info: Dict[str, Any]
    suggestions: List[str]
    vulnerabilities: List[str]
    files: List[FileRecord] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def to_report(self, file_analyses: List[Dict[str, Any]], status: str) -> Dict[str, Any]:
        return {
            "basicInfo": dict(self.basic_info),
            "fileAnalyses": file_analyses,
            "suggestions": list(self.suggestions),
            "vulnerabilities": list(self.vulnerabilities),
            "status": status,
        }


def collect_repository(
    repo_url: str,
    token: Optional[str] = None,
    fetch_files: bool = True,
    client_factory: ClientFactory = GitHubClient,
    config: Optional[AnalysisConfig] = None,
) -> RepositorySnapshot:
    """
    Resolve the URL, fetch metadata and walk the repository.

    Args:
        repo_url: Repository URL (https://github.com/owner/repo[/...]).
        token: Optional GitHub token, forwarded verbatim.
        fetch_files: Walk the whole tree and decode source files. When False,
            only the listing needed for hygiene checks is fetched.
        client_factory: Callable building a GitHub client from a token.
        config: AnalysisConfig; loaded from the environment when None.

    Raises:
        InvalidUrl, MissingPathSegments, RepositoryNotFound, InvalidCredential,
        AccessDenied, UpstreamFailure
    """
    config = config or load_analysis_config()
    owner, repo = resolve_repository(repo_url)
    logger.info("Analyzing %s/%s", owner, repo)

    client = client_factory(token)
    basic_info = fetch_basic_info(client, owner, repo)

    walker = TreeWalker(client, owner, repo, config=config, fetch_content=fetch_files)
    files: List[FileRecord] = []
    if fetch_files or config.hygiene_scope == "all":
        files = walker.walk()
    else:
        walker.list_paths()

    if config.hygiene_scope == "all":
        paths = walker.paths
    else:
        paths = [p for p in walker.paths if "/" not in p]

    suggestions, vulnerabilities = check_hygiene(basic_info.get("description"), paths)
    logger.info(
        "%s/%s: %d source files, %d suggestions, %d vulnerabilities",
        owner, repo, len(files), len(suggestions), len(vulnerabilities),
    )

    return RepositorySnapshot(
        owner=owner,
        repo=repo,
        basic_info=basic_info,
        suggestions=suggestions,
        vulnerabilities=vulnerabilities,
        files=files,
    )


def pending_analyses(files: List[FileRecord]) -> List[Dict[str, Any]]:
    """Placeholder entries for files whose commentary has not arrived yet."""
    return [
        {"path": f.path, "good": [], "bad": [], "improvements": [], "deepAnalysisPending": True}
        for f in files
    ]


def analyze_snapshot(snapshot: RepositorySnapshot, agent: Optional[CommentaryAgent] = None) -> Dict[str, Any]:
    """Run commentary (if enabled) over a collected snapshot and build the completed report."""
    file_analyses: List[Dict[str, Any]] = []
    if agent is not None:
        file_analyses = agent.analyze_files(snapshot.files)
    return snapshot.to_report(file_analyses, STATUS_COMPLETED)


def analyze_repository(
    repo_url: str,
    token: Optional[str] = None,
    agent: Optional[CommentaryAgent] = None,
    client_factory: ClientFactory = GitHubClient,
    config: Optional[AnalysisConfig] = None,
) -> Dict[str, Any]:
    """
    Run the full analysis synchronously.

    Args:
        repo_url: Repository URL.
        token: Optional GitHub token.
        agent: CommentaryAgent; when None the commentary stage is skipped and
            fileAnalyses is empty.

    Returns:
        Dict[str, Any]: report with keys
            basicInfo, fileAnalyses, suggestions, vulnerabilities, status
    """
    snapshot = collect_repository(
        repo_url,
        token=token,
        fetch_files=agent is not None,
        client_factory=client_factory,
        config=config,
    )
    return analyze_snapshot(snapshot, agent)
