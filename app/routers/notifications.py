from fastapi import APIRouter, Depends

from app.services.tracker import HolidayTracker, get_tracker
from schemas import NotificationResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
def drain_notifications(
    tracker: HolidayTracker = Depends(get_tracker),
) -> list[NotificationResponse]:
    return tracker.drain_notifications()
