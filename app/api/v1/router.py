from fastapi import APIRouter

from app.api.v1.endpoints import calendar, extract, location, profile, seeds

api_router = APIRouter()

api_router.include_router(seeds.router)
api_router.include_router(profile.router)
api_router.include_router(location.router)
api_router.include_router(calendar.router)
api_router.include_router(extract.router)
