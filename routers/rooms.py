# routers/rooms.py
"""
Room API routes.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import Room
from services import ownership_service
from schemas.property import RoomCreate, RoomUpdate, RoomResponse

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


def _get_room_or_404(db: Session, room_id: int) -> Room:
     room = db.query(Room).filter(Room.id == room_id).first()
     if not room:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"Room with ID {room_id} not found"
          )
     return room


@router.get(
     "",
     response_model=list[RoomResponse],
     summary="List rooms"
)
def list_rooms(
     apartment_id: Optional[int] = Query(None, description="Filter by apartment ID"),
     db: Session = Depends(get_session)
):
     """Rooms sorted by room number, optionally for one apartment."""
     query = db.query(Room)
     if apartment_id:
          query = query.filter(Room.apartment_id == apartment_id)
     rooms = query.order_by(Room.room_number.asc(), Room.id.asc()).all()
     return [_build_room_response(r) for r in rooms]


@router.post(
     "",
     response_model=RoomResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new room"
)
def create_room(
     room_data: RoomCreate,
     db: Session = Depends(get_session)
):
     # Verify apartment exists
     ownership_service.get_apartment(db, room_data.apartment_id)

     room = Room(**room_data.model_dump())
     db.add(room)
     db.commit()
     db.refresh(room)
     return _build_room_response(room)


@router.get(
     "/{room_id}",
     response_model=RoomResponse,
     summary="Get room by ID"
)
def get_room(
     room_id: int,
     db: Session = Depends(get_session)
):
     return _build_room_response(_get_room_or_404(db, room_id))


@router.put(
     "/{room_id}",
     response_model=RoomResponse,
     summary="Update room"
)
def update_room(
     room_id: int,
     room_data: RoomUpdate,
     db: Session = Depends(get_session)
):
     """
     Only provided fields will be updated.

     A room that bills reference cannot move to another apartment (409).
     """
     room = _get_room_or_404(db, room_id)
     ownership_service.update_room(db, room, room_data.model_dump(exclude_none=True))

     db.commit()
     db.refresh(room)
     return _build_room_response(room)


@router.delete(
     "/{room_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete room"
)
def delete_room(
     room_id: int,
     db: Session = Depends(get_session)
):
     """
     Delete a room by ID.

     A room that bills still reference cannot be deleted (409).
     """
     room = _get_room_or_404(db, room_id)
     ownership_service.delete_room(db, room)
     db.commit()
     return None


def _build_room_response(room: Room) -> RoomResponse:
     response = RoomResponse.model_validate(room)
     response.apartment_name = room.apartment.name if room.apartment else None
     return response
