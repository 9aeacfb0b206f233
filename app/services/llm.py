"""Thin helpers around the OpenAI SDK shared by label suggestions and /ai/chat."""
import logging
from typing import Any, Dict, List, Optional
import openai
from openai import OpenAI
from app.errors import LLMNotConfigured

logger = logging.getLogger(__name__)


def build_client(api_key: Optional[str] = None, timeout: Optional[float] = None) -> OpenAI:
    """Create an OpenAI client from explicit values or app.config.

    Automatic retries are disabled: every caller issues a single call and
    decides on its own how to degrade.
    """
    import app.config as _cfg
    api_key = api_key if api_key is not None else _cfg.OPENAI_API_KEY
    if not api_key or not api_key.strip():
        raise LLMNotConfigured("OpenAI API key not configured")
    return OpenAI(
        api_key=api_key,
        timeout=timeout if timeout is not None else _cfg.OPENAI_TIMEOUT_SECONDS,
        max_retries=0,
    )


def error_details(exc: Exception) -> Dict[str, Any]:
    """Pull status/code/type/message out of an SDK exception, when it has them."""
    body = getattr(exc, "body", None)
    err = body.get("error", body) if isinstance(body, dict) else {}
    if not isinstance(err, dict):
        err = {}
    return {
        "status": getattr(exc, "status_code", None),
        "code": getattr(exc, "code", None) or err.get("code"),
        "type": getattr(exc, "type", None) or err.get("type"),
        "message": (getattr(exc, "message", None) or str(exc)).strip(),
    }


def is_rate_limit_error(exc: Exception) -> bool:
    """True for HTTP 429 and quota exhaustion, whatever shape the SDK gives them."""
    if isinstance(exc, openai.RateLimitError):
        return True
    details = error_details(exc)
    message = (details["message"] or "").lower()
    return (
        details["status"] == 429
        or details["code"] in ("rate_limit_exceeded", "insufficient_quota")
        or "quota" in message
        or "429" in message
    )


def complete_chat(
    client: OpenAI,
    messages: List[Dict[str, str]],
    model: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
):
    """Issue one chat completion call and return the raw completion object."""
    params = {"model": model, "messages": messages}
    if temperature is not None:
        params["temperature"] = temperature
    if max_tokens is not None:
        params["max_tokens"] = max_tokens
    logger.debug("Chat completion: model=%s messages=%d", model, len(messages))
    return client.chat.completions.create(**params)


def first_choice_text(completion) -> Optional[str]:
    try:
        return completion.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        return None
