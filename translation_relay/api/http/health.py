"""Service status endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from translation_relay.dependencies import RoomManagerDep

router = APIRouter()


class RootResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    sessions: int
    participants: int
    active_connections: int


@router.get("/", response_model=RootResponse, tags=["health"])
async def root() -> RootResponse:
    return RootResponse(message="Live translation API is running")


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    tags=["health"],
)
async def health_check(room_manager: RoomManagerDep) -> HealthResponse:
    """
    Report service status with room and connection counts.

    The relay has no external dependencies, so it is healthy whenever it
    can answer.
    """
    stats = room_manager.stats()
    return HealthResponse(
        status="healthy",
        sessions=stats["sessions"],
        participants=stats["participants"],
        active_connections=stats["connections"],
    )
