"""QuizResult (immutable history) and HealthProfile (latest plan snapshot)."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fitplan.db.base import Base, JSONType


class QuizResult(Base):
    """One quiz submission: answers keyed by question id + derived {bmi, bmr, tdee}.

    Never updated; a new submission creates a new row.
    """

    __tablename__ = "quiz_results"
    __table_args__ = (Index("ix_quiz_results_user_created", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    # {"1": 30, "2": "Male", ...}; JSON object keys are strings
    answers: Mapped[dict] = mapped_column(JSONType, nullable=False)
    calculations: Mapped[dict] = mapped_column(JSONType, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


class HealthProfile(Base):
    """Latest quiz snapshot per user, overwritten on every submission."""

    __tablename__ = "health_profiles"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True
    )
    quiz_result_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("quiz_results.id", ondelete="SET NULL"), nullable=True
    )
    answers: Mapped[dict] = mapped_column(JSONType, nullable=False)
    calculations: Mapped[dict] = mapped_column(JSONType, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
