"""
Pytest tests for the hygiene checker.
"""

from repo_review.core.hygiene import (
    DESCRIPTION_SUGGESTION,
    GITIGNORE_VULNERABILITY,
    LICENSE_SUGGESTION,
    README_SUGGESTION,
    check_hygiene,
)


def test_bare_repository_gets_every_finding():
    """
    No README, license or .gitignore: three suggestions plus the .gitignore vulnerability.
    """
    suggestions, vulnerabilities = check_hygiene("A project", ["main.py", "src"])

    assert suggestions == [README_SUGGESTION, LICENSE_SUGGESTION]
    assert vulnerabilities == [GITIGNORE_VULNERABILITY]


def test_missing_description():
    """
    Empty or null descriptions yield the description suggestion first.
    """
    for description in (None, ""):
        suggestions, _ = check_hygiene(description, ["README.md", "LICENSE", ".gitignore"])
        assert suggestions == [DESCRIPTION_SUGGESTION], f"Unexpected suggestions for {description!r}"


def test_whitespace_description_is_not_missing():
    """
    A description made only of whitespace is still a description; only null or empty counts as missing.
    """
    suggestions, _ = check_hygiene("   ", ["README.md", "LICENSE", ".gitignore"])
    assert suggestions == []


def test_all_missing_including_description():
    suggestions, vulnerabilities = check_hygiene(None, [])
    assert suggestions == [DESCRIPTION_SUGGESTION, README_SUGGESTION, LICENSE_SUGGESTION]
    assert vulnerabilities == [GITIGNORE_VULNERABILITY]


def test_checks_are_case_insensitive():
    """
    readme.md, License.txt and .GITIGNORE satisfy the checks regardless of case.
    """
    suggestions, vulnerabilities = check_hygiene("desc", ["readme.MD", "License.txt", ".GITIGNORE"])
    assert suggestions == []
    assert vulnerabilities == []


def test_nested_paths_match_by_substring():
    """
    Checks are substring based, so nested files suppress the findings too.
    """
    suggestions, vulnerabilities = check_hygiene(
        "desc", ["docs/README.md", "docs/license-notes.md", "web/.gitignore"]
    )
    assert suggestions == []
    assert vulnerabilities == []
