# models/bill.py
import enum
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class LineItemKind(str, enum.Enum):
     """Which side of the bill a line item belongs to."""
     DISCOUNT = "DISCOUNT"
     OTHER_FEE = "OTHER_FEE"


class Bill(TimestampMixin, Base):
     """
     Bill model - one tenant invoice for one room and one rental period.

     Tenant fields are copied when the bill is created and are not a live
     reference to the room. net_rent, electricity_cost, water_cost,
     other_fees_total and grand_total are derived; they are recomputed by
     services.bill_calculator on every create and full update.
     """
     __tablename__ = "bills"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     apartment_id = Column(Integer, ForeignKey("apartments.id"), nullable=False, index=True)
     room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)

     # Dates (billing_date is naive, in the reporting time zone)
     billing_date = Column(DateTime, nullable=False, index=True)
     payment_due_date = Column(Date, nullable=False)
     rental_from = Column(Date, nullable=False)
     rental_to = Column(Date, nullable=False)

     # Tenant snapshot
     tenant_name = Column(String(255), nullable=False)
     tenant_address = Column(String(500), nullable=False)
     tenant_phone = Column(String(50), nullable=False)
     tenant_tax_id = Column(String(50), nullable=False)

     # Charges
     rent = Column(Numeric(12, 2), nullable=False)
     electricity_start_meter = Column(Numeric(12, 2), nullable=False)
     electricity_end_meter = Column(Numeric(12, 2), nullable=False)
     electricity_rate = Column(Numeric(10, 4), nullable=False)
     electricity_meter_fee = Column(Numeric(12, 2), nullable=False, default=0)
     water_start_meter = Column(Numeric(12, 2), nullable=False)
     water_end_meter = Column(Numeric(12, 2), nullable=False)
     water_rate = Column(Numeric(10, 4), nullable=False)
     water_meter_fee = Column(Numeric(12, 2), nullable=False, default=0)
     aircon_fee = Column(Numeric(12, 2), nullable=False, default=0)
     fridge_fee = Column(Numeric(12, 2), nullable=False, default=0)

     # Derived
     net_rent = Column(Numeric(12, 2), nullable=False, default=0)
     electricity_cost = Column(Numeric(12, 2), nullable=False, default=0)
     water_cost = Column(Numeric(12, 2), nullable=False, default=0)
     other_fees_total = Column(Numeric(12, 2), nullable=False, default=0)
     grand_total = Column(Numeric(12, 2), nullable=False, default=0)

     document_number = Column(String(100), nullable=True)

     # Relationships
     apartment = relationship("Apartment", back_populates="bills")
     room = relationship("Room", back_populates="bills")
     line_items = relationship(
          "BillLineItem",
          back_populates="bill",
          order_by="BillLineItem.position",
          cascade="all, delete-orphan",
     )

     def __repr__(self):
          return f"<Bill(id={self.id}, room_id={self.room_id}, grand_total={self.grand_total}, billing_date={self.billing_date})>"

     @property
     def discounts(self) -> list["BillLineItem"]:
          return [item for item in self.line_items if item.kind == LineItemKind.DISCOUNT]

     @property
     def other_fees(self) -> list["BillLineItem"]:
          return [item for item in self.line_items if item.kind == LineItemKind.OTHER_FEE]

     @property
     def discount_total(self):
          return sum((item.amount for item in self.discounts), Decimal("0"))

     def replace_line_items(self, discounts, other_fees) -> None:
          """
          Replace all line items with the given (description, amount) pairs.
          Position keeps the submitted order within each kind.
          """
          items = []
          for kind, entries in ((LineItemKind.DISCOUNT, discounts), (LineItemKind.OTHER_FEE, other_fees)):
               for position, (description, amount) in enumerate(entries):
                    items.append(BillLineItem(kind=kind, position=position, description=description, amount=amount))
          self.line_items = items


class BillLineItem(Base):
     """Itemized discount or extra fee owned by a single bill."""
     __tablename__ = "bill_line_items"

     id = Column(Integer, primary_key=True, autoincrement=True)
     bill_id = Column(
          Integer,
          ForeignKey("bills.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     kind = Column(
          Enum(LineItemKind, name="line_item_kind", create_constraint=True),
          nullable=False
     )
     position = Column(Integer, nullable=False, default=0)
     description = Column(String(255), nullable=False)
     amount = Column(Numeric(12, 2), nullable=False)

     bill = relationship("Bill", back_populates="line_items")

     def __repr__(self):
          return f"<BillLineItem(bill_id={self.bill_id}, kind='{self.kind.value}', amount={self.amount})>"
