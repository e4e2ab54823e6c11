# routers/apartments.py
"""
Apartment API routes.

Owner links are kept on both sides through services.ownership_service;
an apartment that still has rooms or bills cannot be deleted.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from models import Apartment
from services import ownership_service
from schemas.property import (
     ApartmentCreate,
     ApartmentUpdate,
     ApartmentResponse,
)

router = APIRouter(prefix="/api/apartments", tags=["apartments"])


@router.get(
     "",
     response_model=list[ApartmentResponse],
     summary="List apartments"
)
def list_apartments(db: Session = Depends(get_session)):
     """All apartments, newest first."""
     apartments = db.query(Apartment).order_by(Apartment.created_at.desc(), Apartment.id.desc()).all()
     return [ApartmentResponse.model_validate(a) for a in apartments]


@router.post(
     "",
     response_model=ApartmentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new apartment"
)
def create_apartment(
     apartment_data: ApartmentCreate,
     db: Session = Depends(get_session)
):
     """
     Create an apartment.

     - **owner_ids**: owners to link; each owner gets the apartment in its list too
     """
     apartment = ownership_service.create_apartment(
          db,
          apartment_data.model_dump(exclude={"owner_ids"}),
          owner_ids=apartment_data.owner_ids,
     )
     db.commit()
     db.refresh(apartment)
     return ApartmentResponse.model_validate(apartment)


@router.get(
     "/{apartment_id}",
     response_model=ApartmentResponse,
     summary="Get apartment by ID"
)
def get_apartment(
     apartment_id: int,
     db: Session = Depends(get_session)
):
     return ApartmentResponse.model_validate(ownership_service.get_apartment(db, apartment_id))


@router.put(
     "/{apartment_id}",
     response_model=ApartmentResponse,
     summary="Update apartment"
)
def update_apartment(
     apartment_id: int,
     apartment_data: ApartmentUpdate,
     db: Session = Depends(get_session)
):
     """
     Update an apartment. Only provided fields are changed; **owner_ids**
     replaces the owner set when given.
     """
     apartment = ownership_service.update_apartment(
          db,
          apartment_id,
          apartment_data.model_dump(exclude={"owner_ids"}, exclude_none=True),
          owner_ids=apartment_data.owner_ids,
     )
     db.commit()
     db.refresh(apartment)
     return ApartmentResponse.model_validate(apartment)


@router.delete(
     "/{apartment_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete apartment"
)
def delete_apartment(
     apartment_id: int,
     db: Session = Depends(get_session)
):
     """Delete an apartment that has no rooms and no bills."""
     ownership_service.delete_apartment(db, apartment_id)
     db.commit()
     return None


@router.post(
     "/{apartment_id}/owners/{owner_id}",
     response_model=ApartmentResponse,
     summary="Link an owner to an apartment"
)
def add_apartment_owner(
     apartment_id: int,
     owner_id: int,
     db: Session = Depends(get_session)
):
     apartment = ownership_service.add_owner(db, apartment_id, owner_id)
     db.commit()
     return ApartmentResponse.model_validate(apartment)


@router.delete(
     "/{apartment_id}/owners/{owner_id}",
     response_model=ApartmentResponse,
     summary="Unlink an owner from an apartment"
)
def remove_apartment_owner(
     apartment_id: int,
     owner_id: int,
     db: Session = Depends(get_session)
):
     apartment = ownership_service.remove_owner(db, apartment_id, owner_id)
     db.commit()
     return ApartmentResponse.model_validate(apartment)
