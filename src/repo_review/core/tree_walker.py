"""
tree_walker.py - Depth-first walk over a GitHub repository's contents.

Collects decoded source files (FileRecord) for the commentary stage and
remembers every path it visits so hygiene checks can run over them.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from repo_review.config.llm_config import AnalysisConfig
from repo_review.integrations.github_integration import GitHubAPIError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileRecord:
    path: str
    content: str


def file_extension(name: str) -> str:
    """Lower-cased text after the last dot ("Makefile" -> "makefile")."""
    return name.rsplit(".", 1)[-1].lower()


def is_excluded_dir(path: str, excluded_dirs) -> bool:
    return any(part in excluded_dirs for part in path.split("/"))


class TreeWalker:
    """
    Walk a repository through the GitHub contents API.

    Args:
        client: GitHubClient (or anything with get_contents/get_file_content).
        owner, repo: Repository identifiers.
        config: AnalysisConfig with the extension allow-list and excluded dirs.
        fetch_content: When False, only list entries and emit no FileRecords.
    """

    def __init__(
        self,
        client: Any,
        owner: str,
        repo: str,
        config: Optional[AnalysisConfig] = None,
        fetch_content: bool = True,
    ) -> None:
        self.client = client
        self.owner = owner
        self.repo = repo
        self.config = config or AnalysisConfig()
        self.fetch_content = fetch_content
        self.extensions = {ext.lower() for ext in self.config.source_extensions}
        self.excluded_dirs = set(self.config.excluded_dirs)
        self.paths: List[str] = []

    def walk(self, path: str = "") -> List[FileRecord]:
        """
        Return FileRecords under `path`, depth-first, siblings in listing order.

        A listing error is logged and the subtree yields no files.
        """
        try:
            items = self.client.get_contents(self.owner, self.repo, path)
        except GitHubAPIError as e:
            logger.warning("Skipping %r in %s/%s: %s", path or "/", self.owner, self.repo, e)
            return []

        self.paths.extend(item.get("path", item.get("name", "")) for item in items)

        contents: Dict[str, Optional[str]] = {}
        if self.fetch_content:
            wanted = [item for item in items if self._is_source_file(item)]
            contents = self._fetch_contents(wanted)

        records: List[FileRecord] = []
        for item in items:
            kind = item.get("type")
            item_path = item.get("path", "")
            if kind == "file":
                content = contents.get(item_path)
                if content is not None:
                    records.append(FileRecord(path=item_path, content=content))
            elif kind == "dir" and not is_excluded_dir(item_path, self.excluded_dirs):
                records.extend(self.walk(item_path))
            # symlink / submodule: ignored
        return records

    def list_paths(self, path: str = "") -> List[str]:
        """List entry paths of a single directory without recursing."""
        try:
            items = self.client.get_contents(self.owner, self.repo, path)
        except GitHubAPIError as e:
            logger.warning("Could not list %r in %s/%s: %s", path or "/", self.owner, self.repo, e)
            return []
        listed = [item.get("path", item.get("name", "")) for item in items]
        self.paths.extend(listed)
        return listed

    def _is_source_file(self, item: Dict[str, Any]) -> bool:
        return item.get("type") == "file" and file_extension(item.get("name", "")) in self.extensions

    def _fetch_contents(self, items: List[Dict[str, Any]]) -> Dict[str, Optional[str]]:
        """Fetch file contents of one directory concurrently."""
        if not items:
            return {}
        workers = max(1, min(self.config.max_workers, len(items)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(self._fetch_one, items))
        return dict(zip((item["path"] for item in items), results))

    def _fetch_one(self, item: Dict[str, Any]) -> Optional[str]:
        try:
            content = self.client.get_file_content(self.owner, self.repo, item["path"])
        except GitHubAPIError as e:
            logger.warning("Could not fetch %s: %s", item["path"], e)
            return None
        if content is None:
            logger.warning("No content found for file: %s", item["path"])
        return content
