from fastapi import APIRouter

from app.api.standings import router as standings_router

api_router = APIRouter()

# Standings and their filter navigation
api_router.include_router(standings_router)
