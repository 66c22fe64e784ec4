from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.sports import CompetitionStage
from app.utils.timestamps import utcnow


class SportsSeasonsStage(Base):
    """One (sport category, season, competition phase) combination.

    The unit standings are computed over.
    """
    __tablename__ = "sports_seasons_stages"
    __table_args__ = (
        Index("ix_stages_category_season", "sport_category_id", "season_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sport_category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sports_categories.id"), nullable=False
    )
    season_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("seasons.id"), nullable=False, index=True
    )
    competition_stage: Mapped[CompetitionStage] = mapped_column(
        Enum(CompetitionStage), nullable=False
    )
    name: Mapped[str | None] = mapped_column(String(255))
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    category: Mapped["SportCategory"] = relationship("SportCategory", back_populates="stages")
    season: Mapped["Season"] = relationship("Season", back_populates="stages")
    matches: Mapped[list["Match"]] = relationship("Match", back_populates="stage")
