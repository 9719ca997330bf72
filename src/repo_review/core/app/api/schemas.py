"""
Pydantic schemas for the FastAPI app.
These define the request body and the analysis report exchanged via the API.
Wire names are camelCase; Python attributes are snake_case with aliases.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """Body of POST /api/analyze."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "repoUrl": "https://github.com/octocat/hello-world",
                "token": None,
                "runAsync": False,
            }
        },
    )

    repo_url: str = Field("", alias="repoUrl")
    token: Optional[str] = None
    run_async: bool = Field(False, alias="runAsync")


class BasicInfo(BaseModel):
    """Repository metadata as reported by GitHub."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: Optional[str] = None
    stars: int
    forks: int
    open_issues: int = Field(alias="openIssues")
    language: Optional[str] = None
    is_private: bool = Field(alias="isPrivate")


class FileAnalysis(BaseModel):
    """LLM commentary for one source file."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    good: List[str] = []
    bad: List[str] = []
    improvements: List[str] = []
    deep_analysis_pending: bool = Field(False, alias="deepAnalysisPending")


class AnalysisReport(BaseModel):
    """Schema for the full analysis report."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "basicInfo": {
                    "name": "hello-world",
                    "description": "My first repository",
                    "stars": 42,
                    "forks": 7,
                    "openIssues": 1,
                    "language": "Python",
                    "isPrivate": False,
                },
                "fileAnalyses": [
                    {
                        "path": "app/main.py",
                        "good": ["Clear function names"],
                        "bad": ["No error handling around file IO"],
                        "improvements": ["Add unit tests for main()"],
                        "deepAnalysisPending": False,
                    }
                ],
                "suggestions": ["Consider adding a license file to specify usage terms."],
                "vulnerabilities": [],
                "status": "completed",
            }
        },
    )

    basic_info: BasicInfo = Field(alias="basicInfo")
    file_analyses: List[FileAnalysis] = Field(default_factory=list, alias="fileAnalyses")
    suggestions: List[str] = []
    vulnerabilities: List[str] = []
    status: Literal["pending", "completed", "failed"] = "completed"
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
