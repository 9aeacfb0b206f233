"""Task creation with best-effort label enrichment.

Creation is the only mandatory part. Once the row is inserted the request
succeeds: a missing suggestion, a provider failure or a failed label update
only means the task comes back without a label.
"""
import logging
from typing import Optional
from app.errors import MissingCredential, StoreError
from app.models.task import LABELS
from app.schemas.task import TaskOut

logger = logging.getLogger(__name__)


class TaskCreator:
    def __init__(self, verifier, store, suggester):
        self.verifier = verifier
        self.store = store
        self.suggester = suggester

    def handle(self, credential: Optional[str], title: str, description: Optional[str] = None) -> TaskOut:
        if not credential:
            raise MissingCredential("Missing token")
        identity = self.verifier.verify(credential)
        # Snapshot the row as created: a failed label update rolls the session
        # back and expires the ORM object, which may then be unreadable.
        created = TaskOut.model_validate(self.store.create(identity.user_id, title, description))

        if not self.suggester.enabled:
            return created

        label = self.suggester.suggest(title, description)
        if not label or label not in LABELS:
            return created

        try:
            return TaskOut.model_validate(self.store.update_label(created.task_id, label))
        except StoreError as e:
            logger.error("Error updating task %s with label %r: %s", created.task_id, label, e)
            return created
