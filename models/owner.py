# models/owner.py
"""
Owner model and the owner <-> apartment association table.

The relation is many-to-many and lives in a single association table,
so Owner.apartments and Apartment.owners are two views of the same rows.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


apartment_owners = Table(
     "apartment_owners",
     Base.metadata,
     Column("apartment_id", Integer, ForeignKey("apartments.id", ondelete="CASCADE"), primary_key=True),
     Column("owner_id", Integer, ForeignKey("owners.id", ondelete="CASCADE"), primary_key=True),
)


class Owner(TimestampMixin, Base):
     """
     Owner model - a person or company owning one or more apartments.
     tax_id is unique across owners.
     """
     __tablename__ = "owners"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=False)
     phone = Column(String(50), nullable=False)
     tax_id = Column(String(50), nullable=False, unique=True, index=True)

     # Relationships
     apartments = relationship(
          "Apartment",
          secondary=apartment_owners,
          back_populates="owners",
          order_by="Apartment.id",
     )

     def __repr__(self):
          return f"<Owner(id={self.id}, name='{self.name}', tax_id='{self.tax_id}')>"
