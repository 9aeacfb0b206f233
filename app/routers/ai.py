import logging
import openai
from fastapi import APIRouter, Depends, HTTPException
from app.dependencies import get_current_identity, get_llm_client
from app.errors import LLMNotConfigured, LLMProviderError
from app.schemas.chat import ChatRequest, ChatResponse
from app.services.identity import Identity
from app.services.llm import complete_chat, error_details, first_choice_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest, identity: Identity = Depends(get_current_identity), client=Depends(get_llm_client)):
    """Relay a chat completion for an authenticated user.

    A bare ``prompt`` is sent as a single user message; otherwise ``messages``
    is forwarded as-is.
    """
    if client is None:
        raise LLMNotConfigured("OpenAI API key not configured")
    if request.messages is None and not request.prompt:
        raise HTTPException(status_code=400, detail="Either 'messages' or 'prompt' is required")

    if request.prompt:
        messages = [{"role": "user", "content": request.prompt}]
    else:
        messages = [m.model_dump() for m in request.messages]
    if not messages:
        raise HTTPException(status_code=400, detail="Invalid messages format")

    import app.config as _cfg
    try:
        completion = complete_chat(
            client,
            messages,
            model=request.model or _cfg.OPENAI_MODEL,
            temperature=request.temperature if request.temperature is not None else _cfg.CHAT_TEMPERATURE,
            max_tokens=request.max_tokens,
        )
    except openai.OpenAIError as e:
        details = error_details(e)
        logger.error("Chat completion failed for user %s: %s", identity.user_id, details)
        raise LLMProviderError(
            details["message"] or "OpenAI API error",
            status_code=details["status"],
            code=details["code"],
            error_type=details["type"],
        ) from e

    content = first_choice_text(completion)
    if not content:
        raise HTTPException(status_code=500, detail="No response from OpenAI")

    usage = getattr(completion, "usage", None)
    return ChatResponse(
        content=content,
        model=completion.model,
        usage=usage.model_dump() if usage is not None else None,
        finish_reason=completion.choices[0].finish_reason,
    )
