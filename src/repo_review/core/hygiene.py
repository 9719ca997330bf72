"""
Repository hygiene checks.

Heuristic, path-substring based tests for the conventional files every
repository should carry (README, license, .gitignore).

Example:
    >>> check_hygiene("A tool", ["README.md", "LICENSE", ".gitignore"])
    ([], [])
"""

from typing import Iterable, List, Optional, Tuple

DESCRIPTION_SUGGESTION = "Add a repository description to help others understand your project."
README_SUGGESTION = "Add a README.md file to document your project."
LICENSE_SUGGESTION = "Consider adding a license file to specify usage terms."
GITIGNORE_VULNERABILITY = (
    "Add a .gitignore file to prevent sensitive information from being committed."
)


def check_hygiene(
    description: Optional[str], paths: Iterable[str]
) -> Tuple[List[str], List[str]]:
    """
    Run hygiene checks over repository metadata and a set of paths.

    Args:
        description: Repository description from the metadata (may be None).
        paths: Repository paths to inspect (root entries or the whole walk).

    Returns:
        (suggestions, vulnerabilities)
    """
    lowered = [p.lower() for p in paths]
    suggestions: List[str] = []
    vulnerabilities: List[str] = []

    if not description:
        suggestions.append(DESCRIPTION_SUGGESTION)

    if not any(p == "readme.md" or p.endswith("readme.md") for p in lowered):
        suggestions.append(README_SUGGESTION)

    if not any("license" in p for p in lowered):
        suggestions.append(LICENSE_SUGGESTION)

    if not any(".gitignore" in p for p in lowered):
        vulnerabilities.append(GITIGNORE_VULNERABILITY)

    return suggestions, vulnerabilities
