"""
cli.py - Command Line Interface for repo-review

Usage Examples:
---------------
# Analyze a public repository and print the JSON report
$ repo-review analyze https://github.com/octocat/hello-world

# Analyze a private repository, skip LLM commentary, write the report to a file
$ repo-review analyze https://github.com/me/private-repo --token ghp_xxx --no-llm --out report.json

# Run the HTTP API
$ repo-review serve --port 8000
"""

import json
import logging
import os
import sys
from pathlib import Path

import click

from repo_review.core.agent.commentary import CommentaryAgent
from repo_review.core.analyzers.manager import analyze_repository
from repo_review.core.errors import AnalysisError

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """GitHub repository review CLI."""
    pass


@cli.command()
@click.argument("repo_url")
@click.option("--token", envvar="GITHUB_TOKEN", default=None, help="GitHub token (default: $GITHUB_TOKEN).")
@click.option("--no-llm", is_flag=True, default=False, help="Skip per-file LLM commentary.")
@click.option(
    "--out",
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help="File to write the JSON report to (default: stdout).",
)
def analyze(repo_url: str, token: str, no_llm: bool, out: str) -> None:
    """
    Analyze the GitHub repository at REPO_URL.
    """
    agent = None if no_llm else CommentaryAgent.from_env()
    try:
        report = analyze_repository(repo_url, token=token, agent=agent)
    except AnalysisError as e:
        logger.debug("Analysis failed: %s", e.detail)
        raise click.ClickException(e.message)

    text = json.dumps(report, indent=2)
    if out:
        Path(out).write_text(text, encoding="utf-8")
        logger.info("Report written to %s", out)
    else:
        click.echo(text)


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, default=False, help="Auto-reload on code changes.")
def serve(host: str, port: int, reload: bool) -> None:
    """
    Run the HTTP API with uvicorn.
    """
    import uvicorn

    uvicorn.run("repo_review.core.app.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
