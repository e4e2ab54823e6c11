# schemas/property.py
"""
Pydantic schemas for apartments, rooms and owners.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


# ---------------------------------------------------------------------------
# Owners
# ---------------------------------------------------------------------------

class OwnerCreate(BaseModel):
     """Schema for creating an owner."""
     name: str = Field(..., min_length=1, max_length=255)
     address: str = Field(..., min_length=1, max_length=500)
     phone: str = Field(..., min_length=1, max_length=50)
     tax_id: str = Field(..., min_length=1, max_length=50, description="Must be unique")

     model_config = ConfigDict(
          str_strip_whitespace=True,
          json_schema_extra={
               "example": {
                    "name": "Niran Property Co., Ltd.",
                    "address": "1 Silom Rd, Bangkok",
                    "phone": "021234567",
                    "tax_id": "0105555000001",
               }
          }
     )


class OwnerUpdate(BaseModel):
     """Schema for updating an owner; only provided fields change."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address: Optional[str] = Field(None, min_length=1, max_length=500)
     phone: Optional[str] = Field(None, min_length=1, max_length=50)
     tax_id: Optional[str] = Field(None, min_length=1, max_length=50)

     model_config = ConfigDict(str_strip_whitespace=True)


class ApartmentRef(BaseModel):
     id: int
     name: str

     model_config = ConfigDict(from_attributes=True)


class OwnerResponse(BaseModel):
     id: int
     name: str
     address: str
     phone: str
     tax_id: str
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
     apartments: Optional[List[ApartmentRef]] = None

     model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Apartments
# ---------------------------------------------------------------------------

class ApartmentCreate(BaseModel):
     """Schema for creating an apartment, optionally linked to owners."""
     name: str = Field(..., min_length=1, max_length=255)
     address: str = Field(..., min_length=1, max_length=500)
     phone: str = Field(..., min_length=1, max_length=50)
     tax_id: str = Field(..., min_length=1, max_length=50)
     owner_ids: List[int] = Field(default_factory=list, description="Owner IDs (must exist)")

     model_config = ConfigDict(
          str_strip_whitespace=True,
          json_schema_extra={
               "example": {
                    "name": "Baan Suan Apartment",
                    "address": "12 Ratchada Rd, Bangkok",
                    "phone": "029876543",
                    "tax_id": "0105555000002",
                    "owner_ids": [1],
               }
          }
     )


class ApartmentUpdate(BaseModel):
     """Only provided fields change; owner_ids replaces the owner set when given."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address: Optional[str] = Field(None, min_length=1, max_length=500)
     phone: Optional[str] = Field(None, min_length=1, max_length=50)
     tax_id: Optional[str] = Field(None, min_length=1, max_length=50)
     owner_ids: Optional[List[int]] = None

     model_config = ConfigDict(str_strip_whitespace=True)


class ApartmentResponse(BaseModel):
     id: int
     name: str
     address: str
     phone: str
     tax_id: str
     owner_ids: List[int]
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

class RoomCreate(BaseModel):
     apartment_id: int = Field(..., gt=0, description="Apartment ID (must exist)")
     room_number: str = Field(..., min_length=1, max_length=50)
     tenant_name: Optional[str] = Field(None, max_length=255)
     tenant_address: Optional[str] = Field(None, max_length=500)
     tenant_phone: Optional[str] = Field(None, max_length=50)
     tenant_tax_id: Optional[str] = Field(None, max_length=50)

     model_config = ConfigDict(str_strip_whitespace=True)


class RoomUpdate(BaseModel):
     apartment_id: Optional[int] = Field(None, gt=0)
     room_number: Optional[str] = Field(None, min_length=1, max_length=50)
     tenant_name: Optional[str] = Field(None, max_length=255)
     tenant_address: Optional[str] = Field(None, max_length=500)
     tenant_phone: Optional[str] = Field(None, max_length=50)
     tenant_tax_id: Optional[str] = Field(None, max_length=50)

     model_config = ConfigDict(str_strip_whitespace=True)


class RoomResponse(BaseModel):
     id: int
     apartment_id: int
     room_number: str
     tenant_name: Optional[str] = None
     tenant_address: Optional[str] = None
     tenant_phone: Optional[str] = None
     tenant_tax_id: Optional[str] = None
     apartment_name: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
