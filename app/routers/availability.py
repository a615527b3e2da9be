from fastapi import APIRouter, Depends, Query

from app.models import AvailableDatesResponse, AvailableTimesResponse
from app.scheduler import SchedulingEngine, get_engine, parse_date

router = APIRouter(prefix="/api/availability", tags=["Availability"])


# GET /api/availability/dates?year=2025&month=3
# Gets: query params year (int), month (int, 1-12)
# Returns: {"availableDates": ["YYYY-MM-DD", ...]}
# Example:
#   curl 'http://localhost:8000/api/availability/dates?year=2025&month=3'
@router.get("/dates", response_model=AvailableDatesResponse)
async def available_dates(
    year: int,
    month: int,
    engine: SchedulingEngine = Depends(get_engine),
):
    """Dates in the month with at least one open slot."""
    return AvailableDatesResponse(available_dates=engine.list_available_dates(year, month))


# GET /api/availability/times?date=2025-03-04
# Gets: query param date (YYYY-MM-DD)
# Returns: {"availableTimes": ["9:00 AM", ...]} in chronological order
# Example:
#   curl 'http://localhost:8000/api/availability/times?date=2025-03-04'
@router.get("/times", response_model=AvailableTimesResponse)
async def available_times(
    day: str = Query(..., alias="date"),
    engine: SchedulingEngine = Depends(get_engine),
):
    """Open times on a date (past times are never offered)."""
    return AvailableTimesResponse(available_times=engine.list_available_times(parse_date(day)))
