from datetime import datetime
from sqlalchemy import Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.timestamps import utcnow


class Season(Base):
    """League season.

    A season is "current" when ``start_at <= now <= end_at``. Overlapping
    seasons are possible in malformed data, so callers must not assume a
    single current season.
    """
    __tablename__ = "seasons"
    __table_args__ = (
        Index("ix_seasons_start_end", "start_at", "end_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    stages: Mapped[list["SportsSeasonsStage"]] = relationship(
        "SportsSeasonsStage", back_populates="season"
    )
    teams: Mapped[list["SchoolsTeam"]] = relationship("SchoolsTeam", back_populates="season")
