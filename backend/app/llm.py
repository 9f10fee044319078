# backend/app/llm.py

import logging
from typing import Any, List, Optional, Tuple

from openai import AsyncOpenAI

from app.config import Settings
from app.errors import SimplificationError, WordInfoError
from app.prompts import Audience, build_simplify_prompt, build_word_info_prompt

logger = logging.getLogger("uvicorn.error")

DEFINITION_FALLBACK = "Definition not found"
SYNONYMS_FALLBACK = ["No synonyms found"]


class CompletionClient:
    """Single-prompt wrapper over the chat completions endpoint."""

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.model = settings.openai_model
        self.max_tokens = settings.max_tokens
        self.temperature = settings.temperature
        if client is None and not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY not set; completion calls will fail.")
        self._client = client or AsyncOpenAI(api_key=settings.openai_api_key or "missing")

    async def complete(self, prompt: str) -> str:
        resp = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        if not resp.choices:
            return ""
        return (resp.choices[0].message.content or "").strip()

    async def simplify(self, text: str, audience: Audience) -> str:
        prompt = build_simplify_prompt(text, audience)
        try:
            out = await self.complete(prompt)
        except Exception as e:
            logger.error(f"Error during text simplification: {e}")
            raise SimplificationError(f"Text simplification failed: {e}") from e
        if not out:
            raise SimplificationError("Text simplification failed: empty response from model")
        return out

    async def word_info(self, word: str) -> dict:
        try:
            content = await self.complete(build_word_info_prompt(word))
        except Exception as e:
            logger.error(f"Error fetching word info: {e}")
            raise WordInfoError("Error fetching word information") from e
        definition, synonyms = parse_word_info(content)
        return {"word": word, "definition": definition, "synonyms": synonyms}


def _after_colon(line: str) -> Optional[str]:
    parts = line.split(":")
    if len(parts) < 2:
        return None
    return parts[1].strip() or None


def parse_word_info(content: str) -> Tuple[str, List[str]]:
    # expects "Definition: ...\nSynonyms: a, b, c"; anything else falls back
    lines = [ln for ln in (content or "").split("\n") if ln.strip()]
    fields = [_after_colon(ln) for ln in lines[:2]]
    fields += [None] * (2 - len(fields))
    definition_raw, synonyms_raw = fields
    definition = definition_raw or DEFINITION_FALLBACK
    if synonyms_raw:
        synonyms = [s.strip() for s in synonyms_raw.split(",") if s.strip()]
    else:
        synonyms = list(SYNONYMS_FALLBACK)
    return definition, synonyms or list(SYNONYMS_FALLBACK)
