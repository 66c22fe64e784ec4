import enum
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.timestamps import utcnow


class SportDivision(str, enum.Enum):
    men = "men"
    women = "women"
    mixed = "mixed"


class SportLevel(str, enum.Enum):
    elementary = "elementary"
    high_school = "high_school"
    college = "college"


class Sport(Base):
    __tablename__ = "sports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    categories: Mapped[list["SportCategory"]] = relationship(
        "SportCategory", back_populates="sport"
    )


class SportCategory(Base):
    """A (sport, division, level) combination, e.g. Basketball / men / college."""
    __tablename__ = "sports_categories"
    __table_args__ = (
        UniqueConstraint("sport_id", "division", "levels", name="uq_sports_categories_triple"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sport_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sports.id"), nullable=False, index=True
    )
    division: Mapped[SportDivision] = mapped_column(Enum(SportDivision), nullable=False)
    levels: Mapped[SportLevel] = mapped_column(Enum(SportLevel), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    sport: Mapped["Sport"] = relationship("Sport", back_populates="categories")
    stages: Mapped[list["SportsSeasonsStage"]] = relationship(
        "SportsSeasonsStage", back_populates="category"
    )
