"""Reservation management API endpoints"""

from typing import List

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException
import structlog

from app.database import get_db
from app.maintenance import retention
from app.models.reservation import ReservationStore
from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    MessageResponse,
    DeleteOldResponse,
)

router = APIRouter()
logger = structlog.get_logger()


async def get_store(db=Depends(get_db)) -> ReservationStore:
    """Dependency for the reservation store"""
    return ReservationStore(db)


def to_object_id(reservation_id: str) -> ObjectId:
    if not ObjectId.is_valid(reservation_id):
        raise HTTPException(status_code=400, detail="Invalid reservation id")
    return ObjectId(reservation_id)


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(store: ReservationStore = Depends(get_store)):
    """List all reservations, newest first"""
    return await store.list()


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    store: ReservationStore = Depends(get_store),
):
    """Create a new reservation"""
    reservation = await store.create(reservation_data.to_document())
    logger.info(
        "Reservation created",
        reservation_id=str(reservation["_id"]),
        branch=reservation["branch"],
    )
    return reservation


@router.delete("/old", response_model=DeleteOldResponse)
async def delete_old_reservations(store: ReservationStore = Depends(get_store)):
    """Delete confirmed and cancelled reservations older than 30 days"""
    count = await retention.delete_expired_completed(store)
    logger.info("Old reservations deleted", count=count)
    return DeleteOldResponse(message="Old reservations deleted successfully", count=count)


@router.get("/status/{status}", response_model=List[ReservationResponse])
async def list_by_status(status: str, store: ReservationStore = Depends(get_store)):
    """List reservations with the given status"""
    return await store.list({"status": status})


@router.get("/branch/{branch}", response_model=List[ReservationResponse])
async def list_by_branch(branch: str, store: ReservationStore = Depends(get_store)):
    """List reservations for one branch"""
    return await store.list({"branch": branch})


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(reservation_id: str, store: ReservationStore = Depends(get_store)):
    """Get reservation details"""
    reservation = await store.get(to_object_id(reservation_id))

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    return reservation


@router.put("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: str,
    reservation_data: ReservationUpdate,
    store: ReservationStore = Depends(get_store),
):
    """Update status, OTP or any other reservation field"""
    reservation = await store.update(to_object_id(reservation_id), reservation_data.to_update())

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    return reservation


@router.delete("/{reservation_id}", response_model=MessageResponse)
async def delete_reservation(reservation_id: str, store: ReservationStore = Depends(get_store)):
    """Delete a reservation"""
    reservation = await store.delete(to_object_id(reservation_id))

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    logger.info("Reservation deleted", reservation_id=reservation_id)
    return MessageResponse(message="Reservation deleted successfully")
