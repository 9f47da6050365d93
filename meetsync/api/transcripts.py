"""Transcript injection endpoint for development without browser STT."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from meetsync.api.dependencies import get_session_router
from meetsync.models import TranscriptEntry, WireModel
from meetsync.sessions.router import SessionEventRouter
from meetsync.sessions.schemas import TranscriptSubmission, describe_validation_error

router = APIRouter(tags=["transcripts"])


class TranscriptCreatedResponse(WireModel):
    """Stored transcript entry."""

    status: str = "ok"
    message: str = "transcript added"
    room: str
    entry: TranscriptEntry


@router.post(
    "/mock-transcript",
    status_code=201,
    response_model=TranscriptCreatedResponse,
    responses={400: {"description": "Missing room, userId or text"}},
)
async def mock_transcript(
    payload: dict[str, Any] | None = Body(default=None),
    session_router: SessionEventRouter = Depends(get_session_router),
):
    """Append a transcript entry as if a client had spoken it.

    Broadcasts ``transcript_broadcast`` to the room.
    """
    try:
        submission = TranscriptSubmission.model_validate(payload or {})
    except ValidationError as e:
        return JSONResponse(
            status_code=400,
            content={
                "error": "bad_request",
                "message": describe_validation_error("mock-transcript", e),
            },
        )
    entry = await session_router.submit_transcript(submission)
    return TranscriptCreatedResponse(room=submission.room, entry=entry)
