# src/repo_review/core/agent/commentary.py
"""
Per-file Commentary Agent

Sends each source file to a chat-completion model and collects up to three
good aspects, bad aspects and improvement suggestions.

Supports:
- OpenAI chat completions (default, OPENAI_API_KEY)
- Gemini via google-genai (LLM_PROVIDER=gemini, GEMINI_API_KEY)

Replies that are not valid JSON degrade to empty lists for that file only.

Example usage:
---------------
>>> from repo_review.core.agent.commentary import CommentaryAgent
>>> agent = CommentaryAgent.from_env()
>>> agent.analyze_file(FileRecord("app.py", "print('hi')"))
{'path': 'app.py', 'good': [...], 'bad': [...], 'improvements': [...], 'deepAnalysisPending': False}
"""

import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

from google import genai
from google.genai import types as genai_types
from openai import OpenAI

from repo_review.config.llm_config import LLMConfig, load_llm_config
from repo_review.core.errors import CompletionParseFailure
from repo_review.core.tree_walker import FileRecord

logger = logging.getLogger(__name__)

CATEGORIES = ("good", "bad", "improvements")
MAX_ITEMS = 3

PROMPT_TEMPLATE = (
    "Analyze the following code file content:\n\n{content}\n\n"
    "Provide a list of up to 3 good aspects, 3 bad aspects, and 3 potential improvements. "
    'Format as JSON: {{ "good": ["point1", "point2", "point3"], '
    '"bad": ["point1", "point2", "point3"], '
    '"improvements": ["point1", "point2", "point3"] }}.'
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def build_prompt(content: str, max_chars: int = 0) -> str:
    if max_chars and len(content) > max_chars:
        content = content[:max_chars] + "\n... (truncated)"
    return PROMPT_TEMPLATE.format(content=content)


def parse_commentary(text: Optional[str]) -> Dict[str, List[str]]:
    """
    Parse a model reply into the three feedback categories.

    Accepts bare JSON, JSON inside a markdown fence, or JSON embedded in prose.

    Raises:
        CompletionParseFailure: no JSON object could be decoded.
    """
    if not text or not text.strip():
        raise CompletionParseFailure("empty completion")

    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        start, end = cleaned.find("{"), cleaned.rfind("}")
        if start == -1 or end <= start:
            raise CompletionParseFailure(f"no JSON object in completion: {text[:80]!r}")
        try:
            data = json.loads(cleaned[start : end + 1])
        except json.JSONDecodeError as e:
            raise CompletionParseFailure(str(e))

    if not isinstance(data, dict):
        raise CompletionParseFailure(f"expected a JSON object, got {type(data).__name__}")

    result: Dict[str, List[str]] = {}
    for key in CATEGORIES:
        values = data.get(key) or []
        if not isinstance(values, list):
            values = [values]
        result[key] = [str(v) for v in values][:MAX_ITEMS]
    return result


def empty_commentary() -> Dict[str, List[str]]:
    return {key: [] for key in CATEGORIES}


class CommentaryAgent:
    """
    Generate per-file commentary with an LLM.

    Args:
        config: LLMConfig instance. If None, load from environment.
        complete: Optional callable prompt -> reply text. Overrides the
            provider client (used by tests and custom backends).
    """

    def __init__(self, config: Optional[LLMConfig] = None, complete: Optional[Callable[[str], str]] = None):
        self.config = config or load_llm_config()
        self._complete = complete
        self._client: Any = None
        if complete is None:
            self._client = self._make_client()

    @classmethod
    def from_env(cls) -> Optional["CommentaryAgent"]:
        """Return an agent when LLM usage is enabled, otherwise None."""
        cfg = load_llm_config()
        if not cfg.use_llm:
            logger.info("LLM commentary disabled (no API key or USE_LLM=false)")
            return None
        return cls(cfg)

    def analyze_file(self, record: FileRecord) -> Dict[str, Any]:
        """
        Analyze a single file. Parse failures degrade to empty categories;
        completion API errors propagate.
        """
        prompt = build_prompt(record.content, self.config.max_file_chars)
        reply = self._call_llm(prompt)
        try:
            commentary = parse_commentary(reply)
        except CompletionParseFailure as e:
            logger.warning("Unparseable commentary for %s: %s", record.path, e)
            commentary = empty_commentary()

        return {"path": record.path, **commentary, "deepAnalysisPending": False}

    def analyze_files(self, records: List[FileRecord]) -> List[Dict[str, Any]]:
        """
        Analyze all files concurrently on a bounded pool, preserving input order.
        Returns once every request has settled.
        """
        if not records:
            return []
        workers = max(1, min(self.config.max_workers, len(records)))
        logger.info("Requesting commentary for %d files (%d workers)", len(records), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.analyze_file, records))

    def _make_client(self) -> Any:
        provider = self.config.provider.lower()
        if provider == "openai":
            return OpenAI(api_key=self.config.api_key)
        if provider == "gemini":
            return genai.Client(api_key=self.config.api_key)
        raise RuntimeError(f"LLM provider {self.config.provider} not supported.")

    def _call_llm(self, prompt: str) -> str:
        """
        Internal LLM call helper.

        Returns:
            LLM-generated text (possibly empty)
        """
        if self._complete is not None:
            return self._complete(prompt)

        if self.config.provider.lower() == "gemini":
            response = self._client.models.generate_content(
                model=self.config.llm_model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(max_output_tokens=self.config.max_tokens),
            )
            return response.text or ""

        response = self._client.chat.completions.create(
            model=self.config.llm_model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.config.max_tokens,
        )
        return response.choices[0].message.content or ""
