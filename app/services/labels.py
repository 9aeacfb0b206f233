"""AI label suggestions for freshly created tasks.

:meth:`LabelSuggester.suggest` is best-effort: provider failures are logged
and come back as ``None``, the same as an answer outside the label vocabulary.
"""
import logging
from typing import Optional
from app.models.task import LABELS
from app.services.llm import complete_chat, error_details, first_choice_text, is_rate_limit_error

logger = logging.getLogger(__name__)


def build_prompt(title: str, description: Optional[str]) -> str:
    return (
        f'Based on this task title: "{title}" and description: "{description or ""}", '
        f"suggest ONE of these labels: {', '.join(LABELS)}. "
        "Reply with just the label word and nothing else."
    )


def parse_label(text: Optional[str]) -> Optional[str]:
    """Normalize the model's reply: first line, trimmed, lower-cased, must be a known label."""
    if not text:
        return None
    lines = text.strip().splitlines()
    if not lines:
        return None
    candidate = lines[0].strip().lower()
    return candidate if candidate in LABELS else None


class LabelSuggester:
    def __init__(self, client=None, enabled=True, model=None, temperature=None, max_tokens=None):
        # unset values fall back to app.config, read at construction time
        import app.config as _cfg
        self.client = client
        self._enabled = enabled
        self.model = model or _cfg.OPENAI_MODEL
        self.temperature = temperature if temperature is not None else _cfg.LABEL_TEMPERATURE
        self.max_tokens = max_tokens if max_tokens is not None else _cfg.LABEL_MAX_TOKENS

    @property
    def enabled(self) -> bool:
        return self._enabled and self.client is not None

    def suggest(self, title: str, description: Optional[str] = None) -> Optional[str]:
        if not self.enabled:
            return None
        try:
            completion = complete_chat(
                self.client,
                [{"role": "user", "content": build_prompt(title, description)}],
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            self._log_failure(e)
            return None

        text = first_choice_text(completion)
        label = parse_label(text)
        if label is None:
            logger.info("Discarding label suggestion %r: not one of %s", text, ", ".join(LABELS))
        else:
            logger.info("AI suggested label: %s", label)
        return label

    def _log_failure(self, exc: Exception) -> None:
        details = error_details(exc)
        if is_rate_limit_error(exc):
            logger.warning(
                "OpenAI quota exceeded - task created without AI label (status=%s, code=%s)",
                details["status"], details["code"],
            )
        else:
            logger.error(
                "OpenAI error (task will be created without label): status=%s code=%s type=%s message=%s",
                details["status"], details["code"], details["type"], details["message"],
            )
