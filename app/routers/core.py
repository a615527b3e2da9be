from fastapi import APIRouter

from app.health import SERVICE_VERSION

router = APIRouter(tags=["Core"])


# GET /
# Gets: nothing
# Returns: basic API metadata and a map of key endpoints
# Example:
#   curl http://localhost:8000/
@router.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Corprex Scheduler API - meeting availability and booking",
        "version": SERVICE_VERSION,
        "endpoints": {
            "health": "/api/health",
            "available_dates": "/api/availability/dates?year=&month=",
            "available_times": "/api/availability/times?date=YYYY-MM-DD",
            "book_meeting": "/api/meetings/book",
            "cancel_meeting": "/api/meetings/{meeting_id}/cancel",
            "meetings": "/api/meetings",
            "metrics": "/metrics",
        },
        "features": [
            "Weekday slot calendar",
            "Double-booking protection",
            "Booking confirmation emails",
            "Admin meeting listing",
        ],
    }
