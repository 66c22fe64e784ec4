import pytest
from httpx import AsyncClient

from tests.conftest import (
    ALPHA,
    BASKETBALL_ID,
    BRAVO,
    CHARLIE,
    CURRENT_SEASON_ID,
    GROUP_STAGE_ID,
    MEN_COLLEGE_BASKETBALL,
    PLAYOFFS_STAGE_ID,
)


@pytest.mark.asyncio
class TestStandingsAPI:
    """Tests for /api/v1/standings endpoints."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_group_table(self, client: AsyncClient, sample_teams, make_match):
        await make_match(GROUP_STAGE_ID, [(ALPHA, 10), (BRAVO, 8)])
        await make_match(GROUP_STAGE_ID, [(BRAVO, 5), (CHARLIE, 3)])

        response = await client.get(
            "/api/v1/standings", params={"sport_category_id": MEN_COLLEGE_BASKETBALL}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["selection"]["season_id"] == CURRENT_SEASON_ID
        standings = body["data"]["standings"]
        assert standings["format"] == "group_table"
        rows = [
            (t["team_name"], t["wins"], t["losses"], t["point_differential"])
            for t in standings["groups"][0]["teams"]
        ]
        assert rows == [("Alpha", 1, 0, 2), ("Bravo", 1, 1, 0), ("Charlie", 0, 1, -2)]
        assert [t["draws"] for t in standings["groups"][0]["teams"]] == [0, 0, 0]

    async def test_bracket(self, client: AsyncClient, sample_teams, make_match):
        await make_match(PLAYOFFS_STAGE_ID, [(ALPHA, 20), (BRAVO, 15)], bracket_round=1, bracket_position=0)

        response = await client.get(
            "/api/v1/standings",
            params={"sport_category_id": MEN_COLLEGE_BASKETBALL, "competition_stage": "playoffs"},
        )

        body = response.json()
        assert body["success"] is True
        node = body["data"]["standings"]["nodes"][0]
        assert node["state"] == "decided"
        assert node["winner"]["team_id"] == ALPHA
        assert node["slot1"]["team"]["school_name"] == "Alpha University"

    async def test_failure_envelope_uses_status_200(self, client: AsyncClient, sample_stages):
        response = await client.get("/api/v1/standings", params={"sport_id": BASKETBALL_ID})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "ambiguous_selection"
        assert body["data"] is None

    async def test_invalid_filters_are_rejected(self, client: AsyncClient):
        response = await client.get("/api/v1/standings", params={"season_id": 0})
        assert response.status_code == 422

        response = await client.get("/api/v1/standings", params={"competition_stage": "semifinal"})
        assert response.status_code == 422

    async def test_navigation(self, client: AsyncClient, sample_stages):
        response = await client.get(
            "/api/v1/standings/navigation", params={"sport_category_id": MEN_COLLEGE_BASKETBALL}
        )

        body = response.json()
        assert body["success"] is True
        assert body["data"]["sport_id"] == BASKETBALL_ID
        assert [s["id"] for s in body["data"]["available_stages"]] == [GROUP_STAGE_ID, PLAYOFFS_STAGE_ID]

    async def test_stage_standings(self, client: AsyncClient, sample_teams):
        response = await client.get(f"/api/v1/standings/stages/{PLAYOFFS_STAGE_ID}")

        body = response.json()
        assert body["success"] is True
        assert body["data"]["format"] == "bracket"

    async def test_unknown_stage(self, client: AsyncClient, sample_teams):
        response = await client.get("/api/v1/standings/stages/999")

        assert response.status_code == 200
        assert response.json()["error"] == "stage_not_found"

    async def test_option_lists(self, client: AsyncClient, sample_stages):
        seasons = (await client.get("/api/v1/standings/seasons")).json()
        sports = (await client.get(f"/api/v1/standings/seasons/{CURRENT_SEASON_ID}/sports")).json()
        categories = (
            await client.get(
                f"/api/v1/standings/seasons/{CURRENT_SEASON_ID}/sports/{BASKETBALL_ID}/categories"
            )
        ).json()

        assert [s["name"] for s in seasons["data"]][0].count("-") == 1
        assert [s["name"] for s in sports["data"]] == ["Basketball", "Volleyball"]
        assert [c["display_name"] for c in categories["data"]] == ["Men's College", "Women's College"]
