# src/repo_review/integrations/github_integration.py
"""
GitHub Integration Module

Thin REST client for the three GitHub calls the analyzer needs: repository
metadata, directory listings and file contents. Also maps metadata errors onto
the analysis error taxonomy.

Usage:
------
>>> from repo_review.integrations.github_integration import GitHubClient, fetch_basic_info
>>> client = GitHubClient(token="ghp_xxx")
>>> info = fetch_basic_info(client, "octocat", "hello-world")
>>> info["stars"]
42
>>> client.get_contents("octocat", "hello-world", "src")
[{'type': 'file', 'name': 'main.py', 'path': 'src/main.py', ...}]
"""

import base64
import binascii
import logging
from typing import Any, Dict, List, Optional, Union

import requests

from repo_review.config.llm_config import GitHubConfig, load_github_config
from repo_review.core.errors import (
    AccessDenied,
    InvalidCredential,
    RepositoryNotFound,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """A GitHub request failed; `status` is None for network errors."""

    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        super().__init__(f"GitHub API error {status}: {message}")


class GitHubClient:
    """
    Minimal GitHub REST v3 client.

    Args:
        token: Personal access token. When omitted, requests are unauthenticated
            (public data only, lower rate limits).
        config: GitHubConfig; loaded from the environment when None.
        session: Optional requests.Session, mainly for tests.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        config: Optional[GitHubConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or load_github_config()
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/vnd.github.v3+json"})
        if token:
            self.session.headers.update({"Authorization": f"token {token}"})

    def _get(self, path: str) -> Any:
        url = f"{self.config.api_url}{path}"
        try:
            resp = self.session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise GitHubAPIError(None, str(e))

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.status_code != 200:
            message = resp.text
            if isinstance(payload, dict):
                message = payload.get("message", message)
            raise GitHubAPIError(resp.status_code, message)
        if payload is None:
            raise GitHubAPIError(resp.status_code, f"non-JSON response from {url}")
        return payload

    def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        """GET /repos/{owner}/{repo}"""
        return self._get(f"/repos/{owner}/{repo}")

    def get_contents(self, owner: str, repo: str, path: str = "") -> List[Dict[str, Any]]:
        """
        List a directory. A single-object response (path is a file) is
        returned as a one-item list.
        """
        data: Union[List, Dict] = self._get(f"/repos/{owner}/{repo}/contents/{path}")
        if isinstance(data, list):
            return data
        return [data] if data else []

    def get_file_content(self, owner: str, repo: str, path: str) -> Optional[str]:
        """
        Fetch a file and decode its base64 payload to text.

        Returns None when GitHub sends no inline content (e.g. files above the
        contents API size limit).
        """
        data = self._get(f"/repos/{owner}/{repo}/contents/{path}")
        if not isinstance(data, dict):
            return None
        return decode_content(data)


def decode_content(item: Dict[str, Any]) -> Optional[str]:
    """
    Decode the `content` field of a contents API item.

    Example:
        >>> decode_content({"content": "aGVsbG8=\\n", "encoding": "base64"})
        'hello'
    """
    content = item.get("content")
    if not content:
        return None
    if item.get("encoding", "base64") != "base64":
        return None
    try:
        raw = base64.b64decode(content)
    except binascii.Error as e:
        logger.warning("Undecodable base64 content for %s: %s", item.get("path", "?"), e)
        return None
    return raw.decode("utf-8", errors="replace")


def fetch_basic_info(client: GitHubClient, owner: str, repo: str) -> Dict[str, Any]:
    """
    Fetch repository metadata and project it onto the report's basicInfo shape.

    Raises:
        RepositoryNotFound: upstream 404
        InvalidCredential: upstream 401
        AccessDenied: upstream 403
        UpstreamFailure: anything else, carrying the upstream message
    """
    try:
        data = client.get_repository(owner, repo)
    except GitHubAPIError as e:
        logger.error("Metadata fetch for %s/%s failed: %s", owner, repo, e)
        if e.status == 404:
            raise RepositoryNotFound(e.message)
        if e.status == 401:
            raise InvalidCredential(e.message)
        if e.status == 403:
            raise AccessDenied(e.message)
        raise UpstreamFailure(e.message)

    return {
        "name": data.get("name"),
        "description": data.get("description"),
        "stars": data.get("stargazers_count", 0),
        "forks": data.get("forks_count", 0),
        "openIssues": data.get("open_issues_count", 0),
        "language": data.get("language"),
        "isPrivate": bool(data.get("private", False)),
    }
