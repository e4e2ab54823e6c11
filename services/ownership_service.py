# services/ownership_service.py
"""
Ownership Service - apartments, rooms, owners and the relation between them.

The owner <-> apartment relation is one association table
(models.owner.apartment_owners). Every change to it goes through this
module so both sides stay consistent inside one session transaction,
and the deletion guards live in one place:
- an owner linked to any apartment cannot be deleted
- an apartment with rooms or bills cannot be deleted
- a room with bills cannot be deleted or moved to another apartment
"""
import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from models import Apartment, Bill, Owner, Room
from services.exceptions import (
     ApartmentInUseError,
     DuplicateTaxIdError,
     NotFoundError,
     OwnerInUseError,
     RoomInUseError,
)

logger = logging.getLogger(__name__)

APARTMENT_FIELDS = ("name", "address", "phone", "tax_id")
OWNER_FIELDS = ("name", "address", "phone", "tax_id")


def get_apartment(db: Session, apartment_id: int) -> Apartment:
     apartment = db.query(Apartment).filter(Apartment.id == apartment_id).first()
     if not apartment:
          raise NotFoundError(f"Apartment with ID {apartment_id} not found")
     return apartment


def get_owner(db: Session, owner_id: int) -> Owner:
     owner = db.query(Owner).filter(Owner.id == owner_id).first()
     if not owner:
          raise NotFoundError(f"Owner with ID {owner_id} not found")
     return owner


def _load_owners(db: Session, owner_ids: Iterable[int]) -> list[Owner]:
     """Owners for the given ids, in the given order, without duplicates."""
     unique_ids = list(dict.fromkeys(owner_ids))
     if not unique_ids:
          return []
     found = {o.id: o for o in db.query(Owner).filter(Owner.id.in_(unique_ids)).all()}
     missing = [i for i in unique_ids if i not in found]
     if missing:
          raise NotFoundError(f"Owner(s) not found: {', '.join(str(i) for i in missing)}")
     return [found[i] for i in unique_ids]


def _ensure_unique_tax_id(db: Session, tax_id: str, exclude_owner_id: Optional[int] = None) -> None:
     query = db.query(Owner).filter(Owner.tax_id == tax_id)
     if exclude_owner_id is not None:
          query = query.filter(Owner.id != exclude_owner_id)
     if query.first():
          raise DuplicateTaxIdError("Owner with this tax ID already exists")


# ---------------------------------------------------------------------------
# Apartments
# ---------------------------------------------------------------------------

def create_apartment(db: Session, data: dict, owner_ids: Iterable[int] = ()) -> Apartment:
     """
     Create an apartment and link its owners on both sides.

     Raises:
          NotFoundError: If any owner id doesn't exist (nothing is created)
     """
     owners = _load_owners(db, owner_ids)
     apartment = Apartment(**{f: data[f] for f in APARTMENT_FIELDS})
     apartment.owners = owners
     db.add(apartment)
     db.flush()
     logger.info("Created apartment id=%s with %d owner(s)", apartment.id, len(owners))
     return apartment


def update_apartment(
     db: Session,
     apartment_id: int,
     data: dict,
     owner_ids: Optional[Iterable[int]] = None
) -> Apartment:
     """
     Update apartment fields. When owner_ids is given it replaces the
     owner set; owners dropped from the set lose the back-reference too.
     """
     apartment = get_apartment(db, apartment_id)
     for field in APARTMENT_FIELDS:
          if data.get(field) is not None:
               setattr(apartment, field, data[field])
     if owner_ids is not None:
          apartment.owners = _load_owners(db, owner_ids)
     db.flush()
     return apartment


def delete_apartment(db: Session, apartment_id: int) -> None:
     """
     Raises:
          NotFoundError: If the apartment doesn't exist
          ApartmentInUseError: If rooms or bills still reference it
     """
     apartment = get_apartment(db, apartment_id)
     room_count = db.query(Room).filter(Room.apartment_id == apartment_id).count()
     bill_count = db.query(Bill).filter(Bill.apartment_id == apartment_id).count()
     if room_count or bill_count:
          logger.warning(
               "Refused to delete apartment id=%s: %d room(s), %d bill(s)",
               apartment_id, room_count, bill_count,
          )
          raise ApartmentInUseError(
               f"Apartment has {room_count} room(s) and {bill_count} bill(s). "
               "Remove them before deleting the apartment."
          )
     apartment.owners = []
     db.delete(apartment)
     db.flush()


def add_owner(db: Session, apartment_id: int, owner_id: int) -> Apartment:
     """Link one owner to one apartment (no-op if already linked)."""
     apartment = get_apartment(db, apartment_id)
     owner = get_owner(db, owner_id)
     if owner not in apartment.owners:
          apartment.owners.append(owner)
          db.flush()
     return apartment


def remove_owner(db: Session, apartment_id: int, owner_id: int) -> Apartment:
     """Unlink one owner from one apartment (no-op if not linked)."""
     apartment = get_apartment(db, apartment_id)
     owner = get_owner(db, owner_id)
     if owner in apartment.owners:
          apartment.owners.remove(owner)
          db.flush()
     return apartment


# ---------------------------------------------------------------------------
# Owners
# ---------------------------------------------------------------------------

def create_owner(db: Session, data: dict) -> Owner:
     """
     Raises:
          DuplicateTaxIdError: If another owner has the same tax ID
     """
     _ensure_unique_tax_id(db, data["tax_id"])
     owner = Owner(**{f: data[f] for f in OWNER_FIELDS})
     db.add(owner)
     db.flush()
     logger.info("Created owner id=%s", owner.id)
     return owner


def update_owner(db: Session, owner_id: int, data: dict) -> Owner:
     owner = get_owner(db, owner_id)
     if data.get("tax_id") is not None:
          _ensure_unique_tax_id(db, data["tax_id"], exclude_owner_id=owner.id)
     for field in OWNER_FIELDS:
          if data.get(field) is not None:
               setattr(owner, field, data[field])
     db.flush()
     return owner


def delete_owner(db: Session, owner_id: int) -> Owner:
     """
     Raises:
          NotFoundError: If the owner doesn't exist
          OwnerInUseError: If the owner is still linked to any apartment
     """
     owner = get_owner(db, owner_id)
     if owner.apartments:
          count = len(owner.apartments)
          logger.warning("Refused to delete owner id=%s: linked to %d apartment(s)", owner_id, count)
          raise OwnerInUseError(
               f"Owner is associated with {count} apartment(s). "
               "Please remove the owner from all apartments first."
          )
     db.delete(owner)
     db.flush()
     return owner


def latest_owner(db: Session) -> Optional[Owner]:
     """The business owner shown on bills: the most recently created owner."""
     return db.query(Owner).order_by(Owner.created_at.desc(), Owner.id.desc()).first()


def save_business_owner(db: Session, data: dict) -> Owner:
     """Update the current business owner, or create one if none exists."""
     owner = latest_owner(db)
     if owner is None:
          return create_owner(db, data)
     return update_owner(db, owner.id, data)


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

def update_room(db: Session, room: Room, changes: dict) -> Room:
     """
     Apply the given field changes to a room.

     Raises:
          NotFoundError: If the new apartment doesn't exist
          RoomInUseError: If the room moves to another apartment while bills reference it
     """
     new_apartment_id = changes.get("apartment_id")
     if new_apartment_id is not None and new_apartment_id != room.apartment_id:
          get_apartment(db, new_apartment_id)
          bill_count = db.query(Bill).filter(Bill.room_id == room.id).count()
          if bill_count:
               logger.warning(
                    "Refused to move room id=%s to apartment id=%s: %d bill(s)",
                    room.id, new_apartment_id, bill_count,
               )
               raise RoomInUseError(
                    f"Room has {bill_count} bill(s) in its current apartment and cannot be moved."
               )
     for field, value in changes.items():
          setattr(room, field, value)
     db.flush()
     return room


def delete_room(db: Session, room: Room) -> None:
     """
     Raises:
          RoomInUseError: If any bill still references the room
     """
     bill_count = db.query(Bill).filter(Bill.room_id == room.id).count()
     if bill_count:
          logger.warning("Refused to delete room id=%s: %d bill(s)", room.id, bill_count)
          raise RoomInUseError(f"Room has {bill_count} bill(s). Delete them before deleting the room.")
     db.delete(room)
     db.flush()
