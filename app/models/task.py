import uuid
from datetime import datetime, UTC
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, String, Text
from app.database import Base

LABELS = ("work", "personal", "priority", "shopping", "home")


def _now():
    return datetime.now(UTC)


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(
            "label IS NULL OR label IN (%s)" % ", ".join(f"'{label}'" for label in LABELS),
            name="ck_tasks_label",
        ),
    )

    task_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    label = Column(String(16), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now)
