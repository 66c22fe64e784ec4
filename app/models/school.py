from datetime import datetime
from sqlalchemy import Integer, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.timestamps import utcnow


class School(Base):
    __tablename__ = "schools"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    abbreviation: Mapped[str] = mapped_column(String(20), nullable=False)
    logo_url: Mapped[str | None] = mapped_column(String(500))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    teams: Mapped[list["SchoolsTeam"]] = relationship("SchoolsTeam", back_populates="school")


class SchoolsTeam(Base):
    """A school's team registered for one sport category in one season."""
    __tablename__ = "schools_teams"
    __table_args__ = (
        Index("ix_schools_teams_season_category", "season_id", "sport_category_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    school_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("schools.id"), nullable=False, index=True
    )
    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), nullable=False)
    sport_category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sports_categories.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    school: Mapped["School"] = relationship("School", back_populates="teams")
    season: Mapped["Season"] = relationship("Season", back_populates="teams")
    category: Mapped["SportCategory"] = relationship("SportCategory")
