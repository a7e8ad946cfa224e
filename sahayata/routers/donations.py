# sahayata/routers/donations.py
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from sahayata.core.errors import StorageError
from sahayata.deps import get_repo
from sahayata.schemas import (
    ByCauseOut,
    DonationCreated,
    DonationIn,
    DonationsOut,
    LastDonationsOut,
    TotalOut,
    missing_fields,
    validation_message,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["donations"])

REQUIRED = ("name", "email", "amount", "cause")
RECENT_LIMIT = 5


@router.post("/donate", status_code=status.HTTP_201_CREATED, response_model=DonationCreated)
@router.post("/donation", status_code=status.HTTP_201_CREATED, response_model=DonationCreated,
             include_in_schema=False)
async def submit_donation(payload: dict = Body(...), repo=Depends(get_repo)):
    if missing_fields(payload, REQUIRED):
        raise HTTPException(400, "All fields (name, email, amount, cause) are required.")
    try:
        body = DonationIn.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(400, validation_message(exc))

    doc = body.model_dump(exclude_none=True)
    try:
        saved = await repo.insert_donation(doc)
    except StorageError:
        logger.exception("Error saving donation")
        raise HTTPException(500, "Server Error: Unable to process donation.")
    logger.info("Donation %s recorded for %s", saved["id"], saved["cause"])
    return {"message": "Donation submitted successfully!", "donation": saved}


@router.get("/donations/total", response_model=TotalOut)
async def total_donations(repo=Depends(get_repo)):
    try:
        total = await repo.total_donated()
    except StorageError:
        logger.exception("Error fetching total donations")
        raise HTTPException(500, "Server Error: Unable to fetch total donations.")
    return {"totalDonated": total or 0}


@router.get("/donations/last-5", response_model=LastDonationsOut)
async def last_donations(repo=Depends(get_repo)):
    try:
        rows = await repo.recent_donations(RECENT_LIMIT)
    except StorageError:
        logger.exception("Error fetching last donations")
        raise HTTPException(500, "Server Error: Unable to fetch last donations.")
    return {"lastDonations": rows}


@router.get("/donations/by-cause", response_model=ByCauseOut)
async def donations_by_cause(repo=Depends(get_repo)):
    try:
        rows = await repo.donations_by_cause()
    except StorageError:
        logger.exception("Error fetching donations by cause")
        raise HTTPException(500, "Server Error: Unable to fetch donations by cause.")
    return {"donationsByCause": rows}


@router.get("/donations", response_model=DonationsOut)
async def list_donations(repo=Depends(get_repo)):
    """All donations, newest first. Unbounded."""
    try:
        rows = await repo.list_donations()
    except StorageError:
        logger.exception("Error fetching donations")
        raise HTTPException(500, "Server Error: Unable to fetch donations.")
    return {"donations": rows}
