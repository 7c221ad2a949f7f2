"""Endpoints for waitlist actions on registrations."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_waitlist as notify_waitlist_uc
from app.domain.entities import Caller
from app.domain.exceptions import EvenzaError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_caller
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import WaitlistNotifyResponse

router = APIRouter(prefix="/api/registrations", tags=["registrations"])


@router.post("/notify/{registration_id}", response_model=WaitlistNotifyResponse)
def notify_me(
    registration_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> WaitlistNotifyResponse:
    """Ask to be notified when a spot opens for a waitlisted event."""

    try:
        result = notify_waitlist_uc(
            db, registration_id=registration_id, user_id=caller.user_id
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc

    message = "Notification created" if result.created else "Already notified"
    return WaitlistNotifyResponse(message=message, already_notified=True)
