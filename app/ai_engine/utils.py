"""
app/ai_engine/utils.py — Shared AI helper utilities.

Provides:
  - build_openrouter_llm()   : factory for the LangChain-compatible OpenRouter LLM
  - extract_response_text()  : pull plain text out of a model response envelope
  - truncate_for_context()   : safely trim long strings to fit LLM context window
"""

import logging
from typing import Any

from langchain_openai import ChatOpenAI

from app.config import settings

logger = logging.getLogger(__name__)

# OpenRouter's base URL (drop-in OpenAI-compatible API)
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


def build_openrouter_llm() -> ChatOpenAI:
    """
    Build a LangChain ChatOpenAI client pointed at OpenRouter.

    Timeout and retry count come from settings; with the default
    LLM_MAX_RETRIES=0 each call is a single request.
    """
    return ChatOpenAI(
        model=settings.openrouter_model,
        api_key=settings.openrouter_api_key,
        base_url=OPENROUTER_BASE_URL,
        temperature=settings.llm_temperature,
        timeout=settings.llm_timeout_seconds,
        max_retries=settings.llm_max_retries,
        default_headers={
            "X-Title": "Lead Qualifier",
        },
    )


def _field(obj: Any, name: str) -> Any:
    """Read a key from a dict or an attribute from anything else."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _join_parts(parts: list) -> str:
    chunks = []
    for part in parts:
        if isinstance(part, str):
            chunks.append(part)
        else:
            text = _field(part, "text")
            if isinstance(text, str):
                chunks.append(text)
    return "".join(chunks)


def extract_response_text(response: Any) -> str | None:
    """
    Return the first non-empty text found in a model response.

    Shapes are tried in order:
      1. content as a list of parts (strings or {"text": ...}) joined together
      2. content as a mapping with a "text" field, or content as a plain string
      3. a flat "output" field
      4. a top-level "text" field

    Returns None if every shape is absent or blank.
    """
    if response is None:
        return None

    content = _field(response, "content")
    candidates = []
    if isinstance(content, list):
        candidates.append(_join_parts(content))
    elif isinstance(content, dict):
        candidates.append(content.get("text"))
    else:
        candidates.append(content)
    candidates.append(_field(response, "output"))
    candidates.append(_field(response, "text"))

    for candidate in candidates:
        text = _as_text(candidate)
        if text:
            return text

    logger.debug("No text found in model response of type %s", type(response).__name__)
    return None


def truncate_for_context(text: str | None, max_chars: int = 2000) -> str:
    """
    Trim a string to max_chars to avoid exceeding LLM context window.
    Appends '...' if truncated.
    """
    if not text or len(text) <= max_chars:
        return text or ""
    return text[:max_chars] + "..."
