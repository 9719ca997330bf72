# src/repo_review/config/llm_config.py
"""
LLM, GitHub and Analysis Configuration

This module reads configuration from environment variables, provides safe defaults,
and returns dataclasses with all relevant settings.

⚠️ Privacy / Cost Notice:
When an LLM API key is configured, repository source files are sent to an external
provider (OpenAI or Gemini), which may incur cost and privacy considerations.
Set USE_LLM=false to keep the analysis to GitHub metadata and hygiene checks.
"""

import os
import dataclasses
from typing import Optional, Tuple

DEFAULT_SOURCE_EXTENSIONS = ("js", "ts", "py", "java", "cpp", "c", "cs", "rb", "php")
DEFAULT_EXCLUDED_DIRS = (
    "node_modules",
    "target",
    ".git",
    "venv",
    ".venv",
    "env",
    "dist",
    "build",
    "vendor",
    "__pycache__",
)
DEFAULT_MODELS = {"openai": "gpt-4o-mini", "gemini": "gemini-2.5-flash"}


@dataclasses.dataclass
class LLMConfig:
    use_llm: bool
    provider: str  # 'openai' | 'gemini'
    api_key: Optional[str]
    llm_model: str
    max_tokens: int
    max_file_chars: int
    max_workers: int


@dataclasses.dataclass
class GitHubConfig:
    api_url: str
    timeout: float


@dataclasses.dataclass
class AnalysisConfig:
    source_extensions: Tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS
    excluded_dirs: Tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    hygiene_scope: str = "root"  # 'root' | 'all'
    max_workers: int = 8


def _csv_env(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(part.strip().lower().lstrip(".") for part in raw.split(",") if part.strip())


def load_llm_config() -> LLMConfig:
    """
    Load LLM configuration from environment variables.

    Environment Variables:
        USE_LLM (default: unset -> enabled when an API key is present)
        LLM_PROVIDER (default: "openai")
        OPENAI_API_KEY / GEMINI_API_KEY
        LLM_MODEL (default: "gpt-4o-mini", or "gemini-2.5-flash" for gemini)
        LLM_MAX_TOKENS (default: 500)
        LLM_MAX_FILE_CHARS (default: 20000)
        ANALYSIS_MAX_WORKERS (default: 8)

    Returns:
        LLMConfig: Fully populated configuration object.
    """
    provider = os.getenv("LLM_PROVIDER", "openai").lower()
    if provider == "gemini":
        api_key = os.getenv("GEMINI_API_KEY")
    else:
        api_key = os.getenv("OPENAI_API_KEY")

    use_llm_env = os.getenv("USE_LLM", "").lower()
    if use_llm_env in ("0", "false", "no"):
        use_llm = False
    else:
        use_llm = bool(api_key)

    llm_model = os.getenv("LLM_MODEL", DEFAULT_MODELS.get(provider, "gpt-4o-mini"))
    max_tokens = int(os.getenv("LLM_MAX_TOKENS", "500"))
    max_file_chars = int(os.getenv("LLM_MAX_FILE_CHARS", "20000"))
    max_workers = int(os.getenv("ANALYSIS_MAX_WORKERS", "8"))

    return LLMConfig(
        use_llm=use_llm,
        provider=provider,
        api_key=api_key,
        llm_model=llm_model,
        max_tokens=max_tokens,
        max_file_chars=max_file_chars,
        max_workers=max_workers,
    )


def load_github_config() -> GitHubConfig:
    """Load GitHub REST settings (GITHUB_API_URL, GITHUB_TIMEOUT)."""
    return GitHubConfig(
        api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
        timeout=float(os.getenv("GITHUB_TIMEOUT", "15")),
    )


def load_analysis_config() -> AnalysisConfig:
    """
    Load tree-walk and hygiene settings.

    Environment Variables:
        SOURCE_EXTENSIONS (comma-separated, default: js,ts,py,java,cpp,c,cs,rb,php)
        EXCLUDED_DIRS (comma-separated directory names)
        HYGIENE_SCOPE ("root" | "all", default: "root")
        ANALYSIS_MAX_WORKERS (default: 8)
    """
    scope = os.getenv("HYGIENE_SCOPE", "root").lower()
    if scope not in ("root", "all"):
        scope = "root"

    excluded = os.getenv("EXCLUDED_DIRS")
    excluded_dirs = (
        tuple(part.strip() for part in excluded.split(",") if part.strip())
        if excluded
        else DEFAULT_EXCLUDED_DIRS
    )

    return AnalysisConfig(
        source_extensions=_csv_env("SOURCE_EXTENSIONS", DEFAULT_SOURCE_EXTENSIONS),
        excluded_dirs=excluded_dirs,
        hygiene_scope=scope,
        max_workers=int(os.getenv("ANALYSIS_MAX_WORKERS", "8")),
    )


if __name__ == "__main__":
    cfg = load_llm_config()
    print("LLM Config Loaded:")
    print({**dataclasses.asdict(cfg), "api_key": "***" if cfg.api_key else None})
    print(dataclasses.asdict(load_github_config()))
    print(dataclasses.asdict(load_analysis_config()))
