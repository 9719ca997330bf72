"""
Shared fakes for the GitHub API and the completion API.
No test talks to the network.
"""

import base64
import json
from typing import Any, Dict, List, Optional

import pytest

from repo_review.config.llm_config import AnalysisConfig, LLMConfig
from repo_review.core.agent.commentary import CommentaryAgent
from repo_review.integrations.github_integration import GitHubAPIError


def file_entry(path: str) -> Dict[str, Any]:
    return {"type": "file", "name": path.rsplit("/", 1)[-1], "path": path}


def dir_entry(path: str) -> Dict[str, Any]:
    return {"type": "dir", "name": path.rsplit("/", 1)[-1], "path": path}


def symlink_entry(path: str) -> Dict[str, Any]:
    return {"type": "symlink", "name": path.rsplit("/", 1)[-1], "path": path}


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


REPO_DATA = {
    "name": "hello-world",
    "description": "My first repository",
    "stargazers_count": 42,
    "forks_count": 7,
    "open_issues_count": 1,
    "language": "Python",
    "private": False,
}


class FakeGitHubClient:
    """
    In-memory stand-in for GitHubClient.

    Args:
        repo: metadata returned by get_repository
        tree: directory path -> list of entries
        files: file path -> decoded content (None simulates a file without inline content)
        errors: directory or file path -> GitHubAPIError raised for it
        repo_error: GitHubAPIError raised by get_repository
    """

    def __init__(
        self,
        repo: Optional[Dict[str, Any]] = None,
        tree: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        files: Optional[Dict[str, Optional[str]]] = None,
        errors: Optional[Dict[str, GitHubAPIError]] = None,
        repo_error: Optional[GitHubAPIError] = None,
    ):
        self.repo = dict(REPO_DATA if repo is None else repo)
        self.tree = tree or {"": []}
        self.files = files or {}
        self.errors = errors or {}
        self.repo_error = repo_error
        self.calls: List[tuple] = []

    def get_repository(self, owner, repo):
        self.calls.append(("repo", owner, repo))
        if self.repo_error:
            raise self.repo_error
        return self.repo

    def get_contents(self, owner, repo, path=""):
        self.calls.append(("contents", path))
        if path in self.errors:
            raise self.errors[path]
        return list(self.tree.get(path, []))

    def get_file_content(self, owner, repo, path):
        self.calls.append(("file", path))
        if path in self.errors:
            raise self.errors[path]
        return self.files.get(path)


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.text = str(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Minimal requests.Session replacement keyed by URL."""

    def __init__(self, routes=None, exc=None):
        self.headers = {}
        self.routes = routes or {}
        self.exc = exc
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append((url, timeout))
        if self.exc:
            raise self.exc
        return self.routes.get(url, FakeResponse(404, {"message": "Not Found"}))


class FakeClientFactory:
    """Callable(token) -> FakeGitHubClient that remembers the tokens it saw."""

    def __init__(self, client: FakeGitHubClient):
        self.client = client
        self.tokens: List[Optional[str]] = []

    def __call__(self, token=None):
        self.tokens.append(token)
        return self.client


def llm_config(**overrides) -> LLMConfig:
    values = dict(
        use_llm=True,
        provider="openai",
        api_key="test-key",
        llm_model="gpt-4o-mini",
        max_tokens=500,
        max_file_chars=20000,
        max_workers=4,
    )
    values.update(overrides)
    return LLMConfig(**values)


def make_agent(reply="", **config_overrides) -> CommentaryAgent:
    """
    Build an agent whose completion function returns `reply`.

    `reply` may be a string, a dict (serialized to JSON) or a callable prompt -> str.
    """
    if callable(reply):
        complete = reply
    elif isinstance(reply, dict):
        complete = lambda prompt: json.dumps(reply)
    else:
        complete = lambda prompt: reply
    return CommentaryAgent(llm_config(**config_overrides), complete=complete)


@pytest.fixture
def analysis_config() -> AnalysisConfig:
    return AnalysisConfig(max_workers=4)


@pytest.fixture
def sample_tree():
    """A small repository: hygiene files at the root, sources in src/, noise in node_modules/."""
    tree = {
        "": [
            file_entry("README.md"),
            file_entry("LICENSE"),
            file_entry(".gitignore"),
            file_entry("main.py"),
            dir_entry("src"),
            dir_entry("node_modules"),
            symlink_entry("link.py"),
        ],
        "src": [file_entry("src/app.ts"), file_entry("src/notes.txt"), dir_entry("src/lib")],
        "src/lib": [file_entry("src/lib/util.rb")],
        "node_modules": [file_entry("node_modules/dep.js")],
    }
    files = {
        "main.py": "print('hello')\n",
        "src/app.ts": "export const x = 1;\n",
        "src/lib/util.rb": "puts 'hi'\n",
        "node_modules/dep.js": "module.exports = {};\n",
        "src/notes.txt": "not source",
    }
    return tree, files
