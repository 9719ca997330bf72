"""
Resolve a repository URL into its (owner, repo) identifiers.

>>> resolve_repository("https://github.com/octocat/hello-world/tree/main")
('octocat', 'hello-world')
"""

from typing import Tuple
from urllib.parse import urlparse

from repo_review.core.errors import InvalidUrl, MissingPathSegments


def resolve_repository(repo_url: str) -> Tuple[str, str]:
    """
    Parse a repository URL and return its owner and repository name.

    Only the first two non-empty path segments are used; anything after
    them (branch, tree path, etc.) is ignored.

    Raises:
        InvalidUrl: the string is not an absolute URL.
        MissingPathSegments: fewer than two path segments.
    """
    if not isinstance(repo_url, str) or not repo_url.strip():
        raise InvalidUrl("empty repository URL")

    try:
        parsed = urlparse(repo_url.strip())
        # Accessing port validates it and raises ValueError when malformed
        parsed.port
    except ValueError as e:
        raise InvalidUrl(str(e))

    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrl(f"not an absolute URL: {repo_url!r}")

    segments = [part for part in parsed.path.split("/") if part]
    if len(segments) < 2:
        raise MissingPathSegments(f"expected /owner/repo, got {parsed.path!r}")

    return segments[0], segments[1]
