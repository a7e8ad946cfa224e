import math
import re
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

# --------------------------
# Shared rules
# --------------------------
CAUSES = ("Old Age Home", "Orphanage", "Medical Emergency", "Education", "Environmental")

EMAIL_PATTERN = re.compile(r".+@.+\..+")

# error types raised by our own validators; their messages go out verbatim
_OWN_ERRORS = {"required", "email", "amount", "cause", "stars"}


def _required(value: str, message: str) -> str:
    if not value.strip():
        raise PydanticCustomError("required", message)
    return value


def _email(value: str) -> str:
    if not EMAIL_PATTERN.search(value):
        raise PydanticCustomError("email", "Please fill a valid email address")
    return value


def validation_message(exc: ValidationError) -> str:
    """Join every field violation into one client-facing sentence list."""
    messages = []
    for err in exc.errors():
        if err["type"] in _OWN_ERRORS:
            messages.append(err["msg"])
        else:
            field = ".".join(str(p) for p in err["loc"]) or "body"
            messages.append(f"{field}: {err['msg']}")
    return ". ".join(messages)


def missing_fields(payload: dict, fields) -> List[str]:
    """Fields that are absent, null or empty strings."""
    return [f for f in fields if payload.get(f) is None or payload.get(f) == ""]


# --------------------------
# Donations
# --------------------------
class DonationIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    email: str
    amount: float
    cause: str
    date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _required(v, "Name is required")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise PydanticCustomError("amount", "Donation amount must be positive")
        return v

    @field_validator("cause")
    @classmethod
    def check_cause(cls, v: str) -> str:
        if v not in CAUSES:
            raise PydanticCustomError(
                "cause",
                "`{value}` is not a valid enum value for path `cause`",
                {"value": v},
            )
        return v

    @field_validator("date")
    @classmethod
    def check_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        # naive timestamps are taken as UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class DonationOut(BaseModel):
    id: str
    name: str
    email: str
    amount: float
    cause: str
    date: datetime


class DonationCreated(BaseModel):
    message: str
    donation: DonationOut


class TotalOut(BaseModel):
    totalDonated: float


class LastDonationsOut(BaseModel):
    lastDonations: List[DonationOut]


class CauseTotal(BaseModel):
    cause: str
    totalAmount: float
    count: int


class ByCauseOut(BaseModel):
    donationsByCause: List[CauseTotal]


class DonationsOut(BaseModel):
    donations: List[DonationOut]


# --------------------------
# Feedback & contact
# --------------------------
class FeedbackIn(BaseModel):
    name: str
    email: str
    stars: int

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _required(v, "Name is required")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator("stars")
    @classmethod
    def check_stars(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise PydanticCustomError("stars", "Stars must be between 1 and 5")
        return v


class FeedbackOut(BaseModel):
    id: str
    name: str
    email: str
    stars: int
    date: datetime


class FeedbackCreated(BaseModel):
    message: str
    feedback: FeedbackOut


class ContactUsIn(BaseModel):
    name: str
    email: str
    message: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _required(v, "Name is required")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator("message")
    @classmethod
    def check_message(cls, v: str) -> str:
        return _required(v, "Message is required")


class ContactUsOut(BaseModel):
    id: str
    name: str
    email: str
    message: str
    date: datetime


class ContactUsCreated(BaseModel):
    message: str
    contact: ContactUsOut
