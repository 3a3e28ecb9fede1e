"""Reservation schemas"""

import re
from datetime import datetime, timezone
from typing import Annotated, Optional, List, Literal

from bson import ObjectId
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from app.database import utcnow

PHONE_PATTERN = re.compile(r"^961\d{7,8}$")

Branch = Literal["Clemenceau", "Jal El Dib", "Kfarehbeb", "Bliss"]
ReservationStatus = Literal["pending", "confirmed", "cancelled"]
CancellationReason = Literal[
    "customer_changed_mind",
    "no_show",
    "duplicate_order",
    "store_capacity",
    "technical_issue",
    "other",
]


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _check_phone(value: str) -> str:
    if not PHONE_PATTERN.match(value):
        raise ValueError(f"{value} is not a valid Lebanese phone number!")
    return value


CustomerName = Annotated[str, BeforeValidator(_strip), Field(min_length=1)]
PhoneNumber = Annotated[str, AfterValidator(_check_phone)]
PickupTime = Annotated[str, Field(min_length=1)]


class ReservationCreate(BaseModel):
    """Create reservation request"""
    model_config = ConfigDict(populate_by_name=True)

    name: CustomerName
    phone: PhoneNumber
    branch: Branch
    time: PickupTime
    status: ReservationStatus = "pending"
    otp: Optional[str] = None
    cancellation_reason: Optional[CancellationReason] = Field(None, alias="cancellationReason")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    def to_document(self) -> dict:
        """Build the document stored in the reservations collection"""
        document = self.model_dump(by_alias=True, exclude_none=True)
        created_at = document.get("createdAt")
        if created_at is None:
            document["createdAt"] = utcnow()
        elif created_at.tzinfo is not None:
            document["createdAt"] = created_at.astimezone(timezone.utc).replace(tzinfo=None)
        return document


class ReservationUpdate(BaseModel):
    """Partial update request; only the fields sent are changed"""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[CustomerName] = None
    phone: Optional[PhoneNumber] = None
    branch: Optional[Branch] = None
    time: Optional[PickupTime] = None
    status: Optional[ReservationStatus] = None
    otp: Optional[str] = None
    cancellation_reason: Optional[CancellationReason] = Field(None, alias="cancellationReason")

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for field in ("name", "phone", "branch", "time", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def to_update(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class ReservationResponse(BaseModel):
    """Reservation response"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    phone: str
    branch: str
    time: str
    status: str = "pending"
    otp: Optional[str] = None
    cancellation_reason: Optional[str] = Field(None, alias="cancellationReason")
    created_at: datetime = Field(..., alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def object_id_to_str(cls, value):
        return str(value) if isinstance(value, ObjectId) else value

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class MessageResponse(BaseModel):
    """Plain message response"""
    message: str


class DeleteOldResponse(BaseModel):
    """Manual cleanup response"""
    message: str
    count: int


ReservationList = List[ReservationResponse]
