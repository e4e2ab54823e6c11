# models/room.py
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Room(TimestampMixin, Base):
     """
     Room model - a rentable unit inside an apartment.
     Tenant fields are an optional snapshot, bills keep their own copy.
     """
     __tablename__ = "rooms"

     id = Column(Integer, primary_key=True, autoincrement=True)
     apartment_id = Column(Integer, ForeignKey("apartments.id"), nullable=False, index=True)
     room_number = Column(String(50), nullable=False)

     # Tenant snapshot
     tenant_name = Column(String(255), nullable=True)
     tenant_address = Column(String(500), nullable=True)
     tenant_phone = Column(String(50), nullable=True)
     tenant_tax_id = Column(String(50), nullable=True)

     # Relationships
     apartment = relationship("Apartment", back_populates="rooms")
     bills = relationship("Bill", back_populates="room")

     def __repr__(self):
          return f"<Room(id={self.id}, room_number='{self.room_number}', apartment_id={self.apartment_id})>"
