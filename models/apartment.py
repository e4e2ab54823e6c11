# models/apartment.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin
from .owner import apartment_owners


class Apartment(TimestampMixin, Base):
     """
     Apartment model - a rental building with rooms.
     Owned by zero or more owners through apartment_owners.
     """
     __tablename__ = "apartments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=False)
     phone = Column(String(50), nullable=False)
     tax_id = Column(String(50), nullable=False)

     # Relationships
     owners = relationship(
          "Owner",
          secondary=apartment_owners,
          back_populates="apartments",
          order_by="Owner.id",
     )
     rooms = relationship("Room", back_populates="apartment")
     bills = relationship("Bill", back_populates="apartment")

     @property
     def owner_ids(self) -> list[int]:
          return [owner.id for owner in self.owners]

     def __repr__(self):
          return f"<Apartment(id={self.id}, name='{self.name}')>"
