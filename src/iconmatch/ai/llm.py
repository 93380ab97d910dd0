"""Optional Claude API integration for semantic keyword matching."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"

# (title, available_keywords) -> keyword | None
SemanticResolver = Callable[[str, Sequence[str]], Awaitable["str | None"]]

_MATCH_PROMPT = """\
Given the track title "{title}", find the most relevant keyword from this list: {keywords}

Return ONLY the exact keyword from the list, or "none" if no good match exists.
Consider semantic meaning, not just exact word matching.

Examples:
- "The Lion King" → lion
- "Goodnight Moon" → moon
- "Chocolate Cake Recipe" → chocolate
- "Advanced Calculus" → none

Track title: "{title}"
Best match:"""


def build_prompt(title: str, available_keywords: Sequence[str], max_keywords: int) -> str:
    keywords = ", ".join(list(available_keywords)[:max_keywords])
    return _MATCH_PROMPT.format(title=title, keywords=keywords)


def parse_answer(content: str, available_keywords: Sequence[str]) -> str | None:
    """Turn the model's answer into a known keyword or None."""
    answer = content.strip().strip('"').strip().lower()
    if not answer or answer == "none":
        return None
    if answer not in available_keywords:
        logger.info("Claude answered %r, which is not an available keyword", answer)
        return None
    return answer


async def resolve_keyword(
    title: str,
    available_keywords: Sequence[str],
    api_key: str,
    *,
    model: str | None = None,
    max_keywords: int | None = None,
) -> str | None:
    """Ask Claude which keyword ``title`` is about.

    Returns None on any error (never blocks a batch).
    """
    if not api_key or not title or not available_keywords:
        return None

    prompt = build_prompt(
        title, available_keywords, max_keywords or settings.semantic_max_keywords,
    )

    try:
        async with httpx.AsyncClient(timeout=30.0) as client:
            resp = await client.post(
                ANTHROPIC_API_URL,
                headers={
                    "x-api-key": api_key,
                    "anthropic-version": "2023-06-01",
                    "content-type": "application/json",
                },
                json={
                    "model": model or settings.semantic_model,
                    "max_tokens": 10,
                    "temperature": 0.1,
                    "messages": [{"role": "user", "content": prompt}],
                },
            )

        if resp.status_code != 200:
            logger.warning("Claude API returned %d: %s", resp.status_code, resp.text[:200])
            return None

        data = resp.json()
        content = data.get("content", [{}])[0].get("text", "")
        return parse_answer(content, available_keywords)

    except Exception as e:
        logger.warning("Semantic matching failed for %r: %s", title, e)
        return None


class ClaudeResolver:
    """``SemanticResolver`` bound to an API key and model."""

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        self.api_key = settings.anthropic_api_key if api_key is None else api_key
        self.model = model or settings.semantic_model

    async def __call__(self, title: str, available_keywords: Sequence[str]) -> str | None:
        return await resolve_keyword(
            title, available_keywords, self.api_key, model=self.model,
        )
