import enum
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, Enum, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.timestamps import utcnow


class MatchStatus(str, enum.Enum):
    """Match lifecycle."""
    upcoming = "upcoming"
    ongoing = "ongoing"
    finished = "finished"
    canceled = "canceled"


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        Index("ix_matches_stage_scheduled", "stage_id", "scheduled_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    stage_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sports_seasons_stages.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text)
    venue: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[MatchStatus] = mapped_column(
        Enum(MatchStatus), nullable=False, default=MatchStatus.upcoming, server_default="upcoming"
    )
    scheduled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    best_of: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")

    # Bracket placement (elimination stages only)
    bracket_round: Mapped[int | None] = mapped_column(Integer)  # 1 = first round
    bracket_position: Mapped[int | None] = mapped_column(Integer)  # 0-based slot within round

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    stage: Mapped["SportsSeasonsStage"] = relationship("SportsSeasonsStage", back_populates="matches")
    participants: Mapped[list["MatchParticipant"]] = relationship(
        "MatchParticipant", back_populates="match", order_by="MatchParticipant.id"
    )


class MatchParticipant(Base):
    __tablename__ = "match_participants"
    __table_args__ = (
        UniqueConstraint("match_id", "team_id", name="uq_match_participants_match_team"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("matches.id"), nullable=False, index=True
    )
    team_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("schools_teams.id"), nullable=False, index=True
    )
    match_score: Mapped[int | None] = mapped_column(Integer)  # NULL until recorded
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    match: Mapped["Match"] = relationship("Match", back_populates="participants")
    team: Mapped["SchoolsTeam"] = relationship("SchoolsTeam")
