# routers/owners.py
"""
Owner API routes.

Two routers live here:
- /api/owners: owner CRUD. An owner still linked to an apartment cannot
  be deleted, and tax IDs are unique.
- /api/owner: the business owner printed on bills (the latest owner).
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import Owner
from services import ownership_service
from schemas.property import (
     ApartmentRef,
     OwnerCreate,
     OwnerUpdate,
     OwnerResponse,
)

router = APIRouter(prefix="/api/owners", tags=["owners"])
business_owner_router = APIRouter(prefix="/api/owner", tags=["owners"])


@router.get(
     "",
     response_model=list[OwnerResponse],
     summary="List owners"
)
def list_owners(
     populate: Optional[str] = Query(None, description="Set to 'apartments' to include linked apartments"),
     db: Session = Depends(get_session)
):
     """All owners, newest first."""
     owners = db.query(Owner).order_by(Owner.created_at.desc(), Owner.id.desc()).all()
     include_apartments = populate == "apartments"
     return [_build_owner_response(o, include_apartments) for o in owners]


@router.post(
     "",
     response_model=OwnerResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new owner"
)
def create_owner(
     owner_data: OwnerCreate,
     db: Session = Depends(get_session)
):
     """
     Create an owner.

     - **tax_id**: must not belong to another owner (409 otherwise)
     """
     owner = ownership_service.create_owner(db, owner_data.model_dump())
     db.commit()
     db.refresh(owner)
     return _build_owner_response(owner)


@router.get(
     "/{owner_id}",
     response_model=OwnerResponse,
     summary="Get owner by ID"
)
def get_owner(
     owner_id: int,
     db: Session = Depends(get_session)
):
     """The owner with the apartments it is linked to."""
     return _build_owner_response(ownership_service.get_owner(db, owner_id), include_apartments=True)


@router.put(
     "/{owner_id}",
     response_model=OwnerResponse,
     summary="Update owner"
)
def update_owner(
     owner_id: int,
     owner_data: OwnerUpdate,
     db: Session = Depends(get_session)
):
     owner = ownership_service.update_owner(db, owner_id, owner_data.model_dump(exclude_none=True))
     db.commit()
     db.refresh(owner)
     return _build_owner_response(owner)


@router.delete(
     "/{owner_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete owner"
)
def delete_owner(
     owner_id: int,
     db: Session = Depends(get_session)
):
     """Delete an owner that is not linked to any apartment."""
     ownership_service.delete_owner(db, owner_id)
     db.commit()
     return None


@business_owner_router.get(
     "",
     response_model=Optional[OwnerResponse],
     summary="Get the business owner"
)
def get_business_owner(db: Session = Depends(get_session)):
     """The most recently created owner, or null when there is none."""
     owner = ownership_service.latest_owner(db)
     if owner is None:
          return None
     return _build_owner_response(owner)


@business_owner_router.post(
     "",
     response_model=OwnerResponse,
     summary="Save the business owner"
)
def save_business_owner(
     owner_data: OwnerCreate,
     db: Session = Depends(get_session)
):
     """Update the current business owner, or create it when none exists."""
     owner = ownership_service.save_business_owner(db, owner_data.model_dump())
     db.commit()
     db.refresh(owner)
     return _build_owner_response(owner)


def _build_owner_response(owner: Owner, include_apartments: bool = False) -> OwnerResponse:
     response = OwnerResponse(
          id=owner.id,
          name=owner.name,
          address=owner.address,
          phone=owner.phone,
          tax_id=owner.tax_id,
          created_at=owner.created_at,
          updated_at=owner.updated_at,
     )
     if include_apartments:
          response.apartments = [ApartmentRef.model_validate(a) for a in owner.apartments]
     return response
