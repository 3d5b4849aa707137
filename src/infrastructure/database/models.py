"""SQLAlchemy ORM models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile; the id is the identity provider's user id."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("username = lower(username)", name="ck_profiles_username_lowercase"),
        CheckConstraint("length(username) >= 3", name="ck_profiles_username_length"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    username: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    goals: Mapped[list["GoalModel"]] = relationship(
        "GoalModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class GoalModel(Base):
    """Yearly goal row. progress and is_completed are kept consistent by the domain."""

    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("goal_type IN ('one_time', 'progress')", name="ck_goals_goal_type"),
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_goals_progress_range"),
        Index("ix_goals_user_id_year", "user_id", "year"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    goal_type: Mapped[str] = mapped_column(String(20), nullable=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    user: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="goals")
