from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends

from app.models import BookingRequest, BookingResponse, CancelResponse, Meeting, MeetingsResponse
from app.scheduler import SchedulingEngine, get_engine
from app.security import require_admin_key

router = APIRouter(prefix="/api/meetings", tags=["Meetings"])


# POST /api/meetings/book
# Gets: JSON body {firstName, lastName, email, phone?, company, message?, date, time, timezone}
# Returns: {"success": true, "meetingId": str, "message": str}; 400/409 {"error": str}
# Example:
#   curl -X POST http://localhost:8000/api/meetings/book \
#     -H 'Content-Type: application/json' \
#     -d '{"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com",
#          "company": "Engines Ltd", "date": "2025-03-04", "time": "10:00 AM",
#          "timezone": "America/New_York"}'
@router.post("/book", response_model=BookingResponse)
async def book_meeting(
    request: BookingRequest,
    background_tasks: BackgroundTasks,
    engine: SchedulingEngine = Depends(get_engine),
):
    """Book a slot. Confirmation emails are sent after the response."""
    meeting = engine.book(request, dispatch=background_tasks.add_task)
    return BookingResponse(
        meeting_id=meeting.id,
        message=f"Meeting scheduled for {meeting.meeting_date.isoformat()} at {meeting.meeting_time}",
    )


# POST /api/meetings/{meeting_id}/cancel
# Gets: path param meeting_id
# Returns: {"success": true, "message": str}; 404 {"error": str}
# Example:
#   curl -X POST http://localhost:8000/api/meetings/3f2a.../cancel
@router.post("/{meeting_id}/cancel", response_model=CancelResponse)
async def cancel_meeting(meeting_id: str, engine: SchedulingEngine = Depends(get_engine)):
    """Cancel a meeting and free its slot."""
    engine.cancel(meeting_id)
    return CancelResponse(message="Meeting cancelled successfully")


# GET /api/meetings?status=scheduled
# Gets: optional query param status (scheduled | cancelled); X-API-Key header when API_KEY is set
# Returns: {"meetings": [Meeting, ...]} sorted by date then time
# Example:
#   curl -H 'X-API-Key: ...' 'http://localhost:8000/api/meetings?status=scheduled'
@router.get("", response_model=MeetingsResponse)
async def list_meetings(
    status: Optional[str] = None,
    engine: SchedulingEngine = Depends(get_engine),
    _: str = Depends(require_admin_key),
):
    """List meetings (admin)."""
    return MeetingsResponse(meetings=engine.list_meetings(status))


# GET /api/meetings/{meeting_id}
# Gets: path param meeting_id; X-API-Key header when API_KEY is set
# Returns: Meeting; 404 {"error": str}
# Example:
#   curl -H 'X-API-Key: ...' http://localhost:8000/api/meetings/3f2a...
@router.get("/{meeting_id}", response_model=Meeting)
async def get_meeting(
    meeting_id: str,
    engine: SchedulingEngine = Depends(get_engine),
    _: str = Depends(require_admin_key),
):
    """Get one meeting (admin)."""
    return engine.get_meeting(meeting_id)
