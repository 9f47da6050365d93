"""API router aggregation."""

from fastapi import APIRouter

from meetsync.api.health import router as health_router
from meetsync.api.rooms import router as rooms_router
from meetsync.api.transcripts import router as transcripts_router
from meetsync.api.ws import router as ws_router

api_router = APIRouter()
api_router.include_router(health_router)
# Room listing and minutes
api_router.include_router(rooms_router)
# Development transcript injection
api_router.include_router(transcripts_router)
# Real-time session events
api_router.include_router(ws_router)
