# sahayata/routers/submissions.py
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from sahayata.core.errors import StorageError
from sahayata.deps import get_repo
from sahayata.schemas import (
    ContactUsCreated,
    ContactUsIn,
    FeedbackCreated,
    FeedbackIn,
    missing_fields,
    validation_message,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["submissions"])


def _validate(model, payload: dict, required):
    missing = missing_fields(payload, required)
    if missing:
        raise HTTPException(400, f"All fields ({', '.join(required)}) are required.")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(400, validation_message(exc))


@router.post("/feedback", status_code=status.HTTP_201_CREATED, response_model=FeedbackCreated)
async def submit_feedback(payload: dict = Body(...), repo=Depends(get_repo)):
    body = _validate(FeedbackIn, payload, ("name", "email", "stars"))
    try:
        saved = await repo.insert_feedback(body.model_dump())
    except StorageError:
        logger.exception("Error saving feedback")
        raise HTTPException(500, "Server Error: Unable to submit feedback.")
    return {"message": "Feedback submitted successfully!", "feedback": saved}


@router.post("/contactus", status_code=status.HTTP_201_CREATED, response_model=ContactUsCreated)
async def submit_contact(payload: dict = Body(...), repo=Depends(get_repo)):
    body = _validate(ContactUsIn, payload, ("name", "email", "message"))
    try:
        saved = await repo.insert_contact(body.model_dump())
    except StorageError:
        logger.exception("Error saving contact message")
        raise HTTPException(500, "Server Error: Unable to submit message.")
    return {"message": "Message sent successfully!", "contact": saved}
