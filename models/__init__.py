# models/__init__.py
from .base import Base
from .owner import Owner, apartment_owners
from .apartment import Apartment
from .room import Room
from .bill import Bill, BillLineItem, LineItemKind

__all__ = [
     "Base",
     "Owner",
     "apartment_owners",
     "Apartment",
     "Room",
     "Bill",
     "BillLineItem",
     "LineItemKind",
]
