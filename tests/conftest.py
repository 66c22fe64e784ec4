import pytest
from datetime import datetime, timedelta
from typing import AsyncGenerator

from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base
from app.api.deps import get_db  # Import from where routes actually use it
from app.models import (
    Season, Sport, SportCategory, SportDivision, SportLevel,
    SportsSeasonsStage, CompetitionStage,
    School, SchoolsTeam, Match, MatchParticipant, MatchStatus,
)
from app.utils.timestamps import utcnow


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed ids used across the test modules
PAST_SEASON_ID = 1
CURRENT_SEASON_ID = 2

BASKETBALL_ID = 1
VOLLEYBALL_ID = 2

MEN_COLLEGE_BASKETBALL = 11
WOMEN_COLLEGE_BASKETBALL = 12
MIXED_HS_VOLLEYBALL = 21

GROUP_STAGE_ID = 1001
PLAYOFFS_STAGE_ID = 1002
WOMEN_GROUP_STAGE_ID = 1003
VOLLEYBALL_GROUP_STAGE_ID = 1004
PAST_GROUP_STAGE_ID = 2001

ALPHA, BRAVO, CHARLIE, DELTA = 101, 102, 103, 104


@pytest.fixture(autouse=True)
def disabled_cache():
    """Decorated routes need an initialised cache; keep it switched off."""
    FastAPICache.init(InMemoryBackend(), prefix="test", enable=False)


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture(scope="function")
async def client(test_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database dependency."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Data Fixtures ---

@pytest.fixture
def now() -> datetime:
    return utcnow()


@pytest.fixture
async def sample_seasons(test_session, now) -> list[Season]:
    """An ended season and a current one."""
    seasons = [
        Season(
            id=PAST_SEASON_ID,
            start_at=now - timedelta(days=565),
            end_at=now - timedelta(days=200),
        ),
        Season(
            id=CURRENT_SEASON_ID,
            start_at=now - timedelta(days=100),
            end_at=now + timedelta(days=100),
        ),
    ]
    test_session.add_all(seasons)
    await test_session.commit()
    return seasons


@pytest.fixture
async def sample_categories(test_session) -> list[SportCategory]:
    """Basketball with two categories, volleyball with one."""
    test_session.add_all([
        Sport(id=BASKETBALL_ID, name="Basketball"),
        Sport(id=VOLLEYBALL_ID, name="Volleyball"),
    ])
    categories = [
        SportCategory(
            id=MEN_COLLEGE_BASKETBALL, sport_id=BASKETBALL_ID,
            division=SportDivision.men, levels=SportLevel.college,
        ),
        SportCategory(
            id=WOMEN_COLLEGE_BASKETBALL, sport_id=BASKETBALL_ID,
            division=SportDivision.women, levels=SportLevel.college,
        ),
        SportCategory(
            id=MIXED_HS_VOLLEYBALL, sport_id=VOLLEYBALL_ID,
            division=SportDivision.mixed, levels=SportLevel.high_school,
        ),
    ]
    test_session.add_all(categories)
    await test_session.commit()
    return categories


@pytest.fixture
async def sample_stages(test_session, sample_seasons, sample_categories) -> list[SportsSeasonsStage]:
    stages = [
        SportsSeasonsStage(
            id=GROUP_STAGE_ID, sport_category_id=MEN_COLLEGE_BASKETBALL,
            season_id=CURRENT_SEASON_ID, competition_stage=CompetitionStage.group_stage,
            name="Regular Season", order_index=0,
        ),
        SportsSeasonsStage(
            id=PLAYOFFS_STAGE_ID, sport_category_id=MEN_COLLEGE_BASKETBALL,
            season_id=CURRENT_SEASON_ID, competition_stage=CompetitionStage.playoffs,
            name="Playoffs", order_index=1,
        ),
        SportsSeasonsStage(
            id=WOMEN_GROUP_STAGE_ID, sport_category_id=WOMEN_COLLEGE_BASKETBALL,
            season_id=CURRENT_SEASON_ID, competition_stage=CompetitionStage.group_stage,
            name="Regular Season", order_index=0,
        ),
        SportsSeasonsStage(
            id=VOLLEYBALL_GROUP_STAGE_ID, sport_category_id=MIXED_HS_VOLLEYBALL,
            season_id=CURRENT_SEASON_ID, competition_stage=CompetitionStage.group_stage,
            name="Pool Play", order_index=0,
        ),
        SportsSeasonsStage(
            id=PAST_GROUP_STAGE_ID, sport_category_id=MEN_COLLEGE_BASKETBALL,
            season_id=PAST_SEASON_ID, competition_stage=CompetitionStage.group_stage,
            name="Regular Season", order_index=0,
        ),
    ]
    test_session.add_all(stages)
    await test_session.commit()
    test_session.expunge_all()
    return stages


@pytest.fixture
async def sample_teams(test_session, sample_stages) -> list[SchoolsTeam]:
    """Three active men's college teams plus an inactive one."""
    test_session.add_all([
        School(id=1, name="Alpha University", abbreviation="AU", logo_url="https://cdn.example.edu/au.png"),
        School(id=2, name="Bravo College", abbreviation="BC"),
        School(id=3, name="Charlie State", abbreviation="CS"),
        School(id=4, name="Delta Institute", abbreviation="DI"),
    ])
    teams = [
        SchoolsTeam(id=ALPHA, school_id=1, season_id=CURRENT_SEASON_ID,
                    sport_category_id=MEN_COLLEGE_BASKETBALL, name="Alpha"),
        SchoolsTeam(id=BRAVO, school_id=2, season_id=CURRENT_SEASON_ID,
                    sport_category_id=MEN_COLLEGE_BASKETBALL, name="Bravo"),
        SchoolsTeam(id=CHARLIE, school_id=3, season_id=CURRENT_SEASON_ID,
                    sport_category_id=MEN_COLLEGE_BASKETBALL, name="Charlie"),
        SchoolsTeam(id=DELTA, school_id=4, season_id=CURRENT_SEASON_ID,
                    sport_category_id=MEN_COLLEGE_BASKETBALL, name="Delta", is_active=False),
    ]
    test_session.add_all(teams)
    await test_session.commit()
    test_session.expunge_all()
    return teams


@pytest.fixture
def make_match(test_session):
    """Factory: ``await make_match(stage_id, [(team_id, score), ...], ...)``.

    The session is cleared afterwards so services load fresh objects with
    their relationships eagerly.
    """
    next_id = iter(range(5001, 6000))

    async def _make(
        stage_id: int,
        scores: list[tuple[int, int | None]],
        status: MatchStatus = MatchStatus.finished,
        bracket_round: int | None = None,
        bracket_position: int | None = None,
        scheduled_at: datetime | None = None,
        name: str = "",
        match_id: int | None = None,
    ) -> int:
        match = Match(
            id=match_id or next(next_id),
            stage_id=stage_id,
            name=name,
            status=status,
            bracket_round=bracket_round,
            bracket_position=bracket_position,
            scheduled_at=scheduled_at,
        )
        match.participants = [
            MatchParticipant(team_id=team_id, match_score=score) for team_id, score in scores
        ]
        test_session.add(match)
        await test_session.commit()
        test_session.expunge_all()
        return match.id

    return _make
