"""Owner-scoped task persistence on top of a SQLAlchemy session.

Database failures never leak out as SQLAlchemy exceptions: the session is rolled
back and the failure is re-raised as one of the :mod:`app.errors` store errors.
"""
import logging
from contextlib import contextmanager
from datetime import datetime, UTC
from math import ceil
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.errors import ConstraintViolation, NotFound, StoreUnavailable
from app.models.task import LABELS, Task

logger = logging.getLogger(__name__)

# Fields an owner may change through update()
UPDATABLE_FIELDS = ("title", "description", "due_date", "completed", "image_url")


class TaskStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _writing(self, action):
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Task %s rejected by the store: %s", action, e.orig)
            raise ConstraintViolation(f"Task {action} violates a store constraint") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Task %s failed: %s", action, e)
            raise StoreUnavailable("Task store unavailable") from e

    def _query(self, owner_id):
        return self.db.query(Task).filter(Task.user_id == owner_id)

    def create(self, owner_id: str, title: str, description: Optional[str] = None) -> Task:
        if not title or not title.strip():
            raise ConstraintViolation("title cannot be empty")
        task = Task(user_id=owner_id, title=title.strip(), description=description, completed=False)
        with self._writing("insert"):
            self.db.add(task)
        self.db.refresh(task)
        logger.info("Created task %s for user %s", task.task_id, owner_id)
        return task

    def update_label(self, task_id: str, label: str) -> Task:
        if label not in LABELS:
            raise ConstraintViolation(f"invalid label: {label!r}")
        try:
            task = self.db.get(Task, task_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable("Task store unavailable") from e
        if task is None:
            raise NotFound("Task not found")
        with self._writing("label update"):
            task.label = label
            # refreshed even when the label is unchanged
            task.updated_at = datetime.now(UTC)
        self.db.refresh(task)
        return task

    def get(self, owner_id: str, task_id: str) -> Task:
        try:
            task = self._query(owner_id).filter(Task.task_id == task_id).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable("Task store unavailable") from e
        # Someone else's task is reported exactly like a missing one
        if task is None:
            raise NotFound("Task not found")
        return task

    def list(self, owner_id: str, q: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None):
        """If page and limit are provided, return a dict {items,page,limit,total,pages}.
        Otherwise return the plain list of tasks.
        """
        query = self._query(owner_id)
        if q:
            query = query.filter(Task.title.ilike(f"%{q}%"))
        query = query.order_by(Task.created_at.desc())
        try:
            if page is None or limit is None:
                return query.all()

            # normalize page/limit
            if page < 1:
                page = 1
            if limit < 1:
                limit = 10
            total = query.count()
            pages = ceil(total / limit) if total > 0 else 1
            items = query.limit(limit).offset((page - 1) * limit).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable("Task store unavailable") from e
        return {"items": items, "page": page, "limit": limit, "total": total, "pages": pages}

    def update(self, owner_id: str, task_id: str, changes: dict) -> Task:
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ConstraintViolation(f"fields cannot be updated: {', '.join(sorted(unknown))}")
        if "title" in changes and (not changes["title"] or not changes["title"].strip()):
            raise ConstraintViolation("title cannot be empty")
        due_date = changes.get("due_date")
        if due_date is not None and due_date.tzinfo is not None:
            changes = {**changes, "due_date": due_date.astimezone(UTC)}
        task = self.get(owner_id, task_id)
        with self._writing("update"):
            for field, value in changes.items():
                setattr(task, field, value)
            task.updated_at = datetime.now(UTC)
        self.db.refresh(task)
        return task

    def delete(self, owner_id: str, task_id: str) -> None:
        task = self.get(owner_id, task_id)
        with self._writing("delete"):
            self.db.delete(task)
        logger.info("Deleted task %s for user %s", task_id, owner_id)
