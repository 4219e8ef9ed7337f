"""Contact form router module."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_contact_notifier
from ..schemas import CreateContactRequest
from ...contact_notifier import ContactNotifier
from ...notifications import DeliveryError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])

@router.post("/contact")
def create_contact(
    request: CreateContactRequest,
    notifier: ContactNotifier = Depends(get_contact_notifier)
):
    """Forward a contact inquiry to the moderators."""
    try:
        notifier.notify(request.name, request.email, request.message)
    except DeliveryError as e:
        logger.error(f"Contact inquiry could not be delivered: {e}")
        raise HTTPException(status_code=500, detail="failed to send Slack notification")
    return "ok"
