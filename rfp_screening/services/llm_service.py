"""
LLM Service — centralized Groq Cloud LLM client.

The screening core works fully without it. Every caller goes through
llm_text_call() and validates the reply with parse_json_object() and
check_schema() before trusting any field; any failure means the caller
uses its deterministic path instead.

  - get_llm()            → configured Groq ChatModel (bounded timeout)
  - llm_text_call()      → raw text response, at most one retry
  - parse_json_object()  → dict from a possibly fenced JSON reply
  - check_schema()       → required top-level keys and their types
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Any

from rfp_screening.config import get_settings

logger = logging.getLogger(__name__)

_llm_instance = None


class LLMUnavailableError(RuntimeError):
    """No credential configured, or the remote call failed."""


class LLMResponseError(ValueError):
    """The reply was not a JSON object of the expected shape."""


def get_llm():
    """
    Return a configured Groq LLM client (singleton).
    Uses langchain-groq's ChatGroq.
    """
    global _llm_instance
    if _llm_instance is not None:
        return _llm_instance

    settings = get_settings()

    if not settings.llm_configured:
        raise LLMUnavailableError("GROQ_API_KEY is not set in environment / .env file")

    from langchain_groq import ChatGroq

    _llm_instance = ChatGroq(
        api_key=settings.groq_api_key,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,  # retries are counted here, not inside the client
    )
    logger.info(f"Initialized Groq LLM: {settings.llm_model}")
    return _llm_instance


def reset_llm() -> None:
    global _llm_instance
    _llm_instance = None


def llm_text_call(prompt: str, max_retries: int | None = None) -> str:
    """
    Call the LLM and return the raw text response.

    Retries on an empty response or a transport error, never more than once.
    Raises LLMUnavailableError when every attempt failed.
    """
    settings = get_settings()
    retries = settings.llm_max_retries if max_retries is None else max_retries
    attempts = min(max(retries, 0), 1) + 1

    logger.debug(f"[LLM-TEXT] Prompt length: {len(prompt)} chars")
    logger.debug(f"[LLM-TEXT] Prompt preview:\n{prompt[:500]}{'…' if len(prompt) > 500 else ''}")

    llm = get_llm()
    last_error: Exception | None = None

    for attempt in range(1, attempts + 1):
        t0 = time.perf_counter()
        try:
            response = llm.invoke(prompt)
        except Exception as exc:
            last_error = exc
            logger.warning(
                f"[LLM-TEXT] Call failed on attempt {attempt}/{attempts}: {exc}. "
                f"{'Retrying…' if attempt < attempts else 'No retries left.'}"
            )
            continue

        elapsed = time.perf_counter() - t0
        content = response.content or ""

        meta = getattr(response, "response_metadata", {}) or {}
        finish_reason = meta.get("finish_reason", "unknown")
        usage = meta.get("token_usage") or meta.get("usage", {})
        logger.info(
            f"[LLM-TEXT] Response received in {elapsed:.2f}s | "
            f"Response length: {len(content)} chars | "
            f"finish_reason={finish_reason} | "
            f"tokens={usage}"
        )
        logger.debug(f"[LLM-TEXT] Full response:\n{content}")

        if content.strip():
            return content

        logger.warning(
            f"[LLM-TEXT] Empty response on attempt {attempt}/{attempts} "
            f"(finish_reason={finish_reason}). "
            f"{'Retrying…' if attempt < attempts else 'No retries left.'}"
        )

    raise LLMUnavailableError(f"LLM returned no usable response: {last_error or 'empty reply'}")


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a JSON object out of an LLM reply (markdown fences tolerated)."""
    cleaned = (raw or "").strip()
    cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned)
    cleaned = re.sub(r"\s*```$", "", cleaned)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        # Fallback: find first { ... } block
        match = re.search(r"\{.*\}", cleaned, re.DOTALL)
        if not match:
            raise LLMResponseError("no JSON object in response")
        try:
            data = json.loads(match.group())
        except json.JSONDecodeError as exc:
            raise LLMResponseError(f"malformed JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise LLMResponseError(f"expected a JSON object, got {type(data).__name__}")
    return data


def check_schema(data: dict[str, Any], required: dict[str, type | tuple[type, ...]]) -> None:
    """Raise LLMResponseError unless every required key is present with the given type."""
    missing = [key for key in required if key not in data]
    if missing:
        raise LLMResponseError(f"missing required keys: {missing}")
    wrong = [
        key for key, expected in required.items()
        if not isinstance(data[key], expected)
    ]
    if wrong:
        raise LLMResponseError(f"wrong types for keys: {wrong}")
