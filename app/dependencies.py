from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import LLMNotConfigured, MissingCredential
from app.services.identity import Identity, JwtIdentityVerifier, extract_token
from app.services.labels import LabelSuggester
from app.services.llm import build_client
from app.services.task_creation import TaskCreator
from app.services.task_store import TaskStore


def get_identity_verifier() -> JwtIdentityVerifier:
    return JwtIdentityVerifier()


def get_task_store(db: Session = Depends(get_db)) -> TaskStore:
    return TaskStore(db)


def get_llm_client():
    """OpenAI client, or None when no API key is configured."""
    try:
        return build_client()
    except LLMNotConfigured:
        return None


def get_label_suggester(client=Depends(get_llm_client)) -> LabelSuggester:
    # read at call-time so tests can flip app.config values
    import app.config as _cfg
    return LabelSuggester(
        client,
        enabled=_cfg.ENABLE_OPENAI,
        model=_cfg.OPENAI_MODEL,
        temperature=_cfg.LABEL_TEMPERATURE,
        max_tokens=_cfg.LABEL_MAX_TOKENS,
    )


def get_task_creator(
    verifier: JwtIdentityVerifier = Depends(get_identity_verifier),
    store: TaskStore = Depends(get_task_store),
    suggester: LabelSuggester = Depends(get_label_suggester),
) -> TaskCreator:
    return TaskCreator(verifier, store, suggester)


def get_credential(authorization: Optional[str] = Header(None), token: Optional[str] = None) -> Optional[str]:
    return extract_token(authorization, token)


def require_credential(credential: Optional[str] = Depends(get_credential)) -> str:
    # resolved before the request body is validated, so a missing token always wins
    if not credential:
        raise MissingCredential("Missing token")
    return credential


def get_current_identity(
    credential: Optional[str] = Depends(get_credential),
    verifier: JwtIdentityVerifier = Depends(get_identity_verifier),
) -> Identity:
    return verifier.verify(credential)
