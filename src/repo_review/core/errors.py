"""
Error taxonomy for repository analysis.

Every error raised to the HTTP layer derives from AnalysisError and carries
the response status code plus a static, user-facing message. Upstream
details travel in `detail` and are logged, never returned to the caller.
"""

from typing import Optional


class AnalysisError(Exception):
    """Base class for failures that map to an HTTP error response."""

    status_code = 500
    message = "Failed to analyze repository. Please check the URL and try again."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(detail or self.message)


class InvalidUrl(AnalysisError):
    status_code = 400
    message = (
        "Invalid URL format. Please provide a valid GitHub repository URL "
        "(e.g., https://github.com/owner/repo)."
    )


class MissingPathSegments(AnalysisError):
    status_code = 400
    message = "URL must include owner and repository name (e.g., https://github.com/owner/repo)."


class RepositoryNotFound(AnalysisError):
    status_code = 404
    message = (
        "Repository not found. Please check the URL and ensure it points to a "
        "valid public repository."
    )


class InvalidCredential(AnalysisError):
    status_code = 401
    message = "Invalid GitHub token provided."


class AccessDenied(AnalysisError):
    status_code = 403
    message = "This is a private repository. Please provide a valid GitHub token to access it."


class UpstreamFailure(AnalysisError):
    """Any other GitHub API error; `detail` holds the upstream message."""


class UnhandledFailure(AnalysisError):
    """Catch-all for unexpected exceptions."""


class CompletionParseFailure(Exception):
    """A completion reply could not be parsed as the expected JSON object.

    Raised and caught per file; never reaches the HTTP layer.
    """


class ReportNotFound(AnalysisError):
    status_code = 404
    message = "No analysis found for this repository."
