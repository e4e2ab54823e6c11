# services/bill_service.py
"""
Bill Service - business logic layer for bill operations.

Handles bill creation and updates (validation, tenant snapshot, line
items, derived-field recomputation), monthly reports, running numbers
and the room pre-fill helpers, separate from the API layer.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session, selectinload

from config import REPORT_TIMEZONE
from models import Apartment, Bill, Room
from services.bill_calculator import apply_to_bill, as_charge, ScalarCharge
from services.bill_validation import validate_bill_draft
from services.exceptions import BillValidationError, NotFoundError
from services.monthly_summary import (
     MonthlySummary,
     build_monthly_summary,
     format_running_number,
     month_bounds,
     to_report_time,
     validate_period,
)

logger = logging.getLogger(__name__)

LEGACY_DISCOUNT_DESCRIPTION = "Discount"
LEGACY_OTHER_FEES_DESCRIPTION = "Other fees"


def _report_now() -> datetime:
     return datetime.now(ZoneInfo(REPORT_TIMEZONE)).replace(tzinfo=None)


def _line_items(itemized, scalar, legacy_description: str) -> list[tuple[str, Decimal]]:
     """
     Canonical itemized form for either submitted shape.
     A legacy scalar becomes one item; zero or missing becomes no item.
     """
     charge = as_charge(itemized if itemized is not None else scalar)
     if isinstance(charge, ScalarCharge):
          if charge.amount:
               return [(legacy_description, charge.amount)]
          return []
     return [(item.description, item.amount) for item in charge.items]


class BillService:
     """Service class for bill-related business logic."""

     @staticmethod
     def get_bill(db: Session, bill_id: int) -> Bill:
          """
          Raises:
               NotFoundError: If the bill doesn't exist
          """
          bill = db.query(Bill).filter(Bill.id == bill_id).first()
          if not bill:
               raise NotFoundError(f"Bill with ID {bill_id} not found")
          return bill

     @staticmethod
     def _resolve_room(db: Session, apartment_id: int, room_id: int) -> tuple[Apartment, Room]:
          apartment = db.query(Apartment).filter(Apartment.id == apartment_id).first()
          if not apartment:
               raise NotFoundError(f"Apartment with ID {apartment_id} not found")

          room = db.query(Room).filter(Room.id == room_id).first()
          if not room:
               raise NotFoundError(f"Room with ID {room_id} not found")

          if room.apartment_id != apartment.id:
               raise BillValidationError({"room_id": "Room does not belong to the selected apartment"})
          return apartment, room

     @staticmethod
     def _apply_draft(bill: Bill, draft) -> None:
          """Copy submitted fields onto the bill and recompute derived fields."""
          bill.apartment_id = draft.apartment_id
          bill.room_id = draft.room_id
          bill.billing_date = to_report_time(draft.billing_date)
          bill.payment_due_date = draft.payment_due_date

          bill.tenant_name = draft.tenant_name.strip()
          bill.tenant_address = draft.tenant_address.strip()
          bill.tenant_phone = draft.tenant_phone.strip()
          bill.tenant_tax_id = draft.tenant_tax_id.strip()

          bill.rental_from = draft.rental_period.from_date
          bill.rental_to = draft.rental_period.to_date

          bill.rent = draft.rent
          bill.electricity_start_meter = draft.electricity.start_meter
          bill.electricity_end_meter = draft.electricity.end_meter
          bill.electricity_rate = draft.electricity.rate
          bill.electricity_meter_fee = draft.electricity.meter_fee
          bill.water_start_meter = draft.water.start_meter
          bill.water_end_meter = draft.water.end_meter
          bill.water_rate = draft.water.rate
          bill.water_meter_fee = draft.water.meter_fee
          bill.aircon_fee = draft.aircon_fee
          bill.fridge_fee = draft.fridge_fee
          bill.document_number = draft.document_number

          bill.replace_line_items(
               _line_items(draft.discounts, draft.discount, LEGACY_DISCOUNT_DESCRIPTION),
               _line_items(draft.other_fees, draft.other_fees_amount, LEGACY_OTHER_FEES_DESCRIPTION),
          )

          totals = apply_to_bill(bill)
          if totals.net_rent < 0 or totals.grand_total < 0:
               logger.warning(
                    "Bill for room %s has a negative total (net_rent=%s, grand_total=%s); kept as a credit",
                    bill.room_id, totals.net_rent, totals.grand_total,
               )

     @staticmethod
     def create_bill(db: Session, draft) -> Bill:
          """
          Validate a draft and create the bill with its derived fields.

          Args:
               db: SQLAlchemy database session
               draft: schemas.bill.BillCreate

          Returns:
               Created Bill object (flushed, not committed)

          Raises:
               BillValidationError: If the draft breaks a domain rule
               NotFoundError: If the apartment or room doesn't exist
          """
          validate_bill_draft(draft)
          BillService._resolve_room(db, draft.apartment_id, draft.room_id)

          bill = Bill()
          BillService._apply_draft(bill, draft)
          db.add(bill)
          db.flush()  # Flush to get the ID without committing

          logger.info("Created bill id=%s room=%s grand_total=%s", bill.id, bill.room_id, bill.grand_total)
          return bill

     @staticmethod
     def update_bill(db: Session, bill_id: int, draft) -> Bill:
          """
          Replace every submitted field of a bill and recompute its totals.

          Raises:
               NotFoundError: If the bill, apartment or room doesn't exist
               BillValidationError: If the draft breaks a domain rule
          """
          bill = BillService.get_bill(db, bill_id)
          validate_bill_draft(draft)
          BillService._resolve_room(db, draft.apartment_id, draft.room_id)

          BillService._apply_draft(bill, draft)
          db.flush()

          logger.info("Updated bill id=%s grand_total=%s", bill.id, bill.grand_total)
          return bill

     @staticmethod
     def delete_bill(db: Session, bill_id: int) -> None:
          bill = BillService.get_bill(db, bill_id)
          db.delete(bill)
          db.flush()
          logger.info("Deleted bill id=%s", bill_id)

     @staticmethod
     def list_bills(
          db: Session,
          apartment_id: Optional[int] = None,
          room_id: Optional[int] = None
     ) -> list[Bill]:
          """Bills filtered by apartment and/or room, newest first."""
          query = db.query(Bill).options(selectinload(Bill.line_items))
          if apartment_id:
               query = query.filter(Bill.apartment_id == apartment_id)
          if room_id:
               query = query.filter(Bill.room_id == room_id)
          return query.order_by(Bill.created_at.desc(), Bill.id.desc()).all()

     @staticmethod
     def fetch_bills_for_month(
          db: Session,
          month: int,
          year: int,
          apartment_id: Optional[int] = None
     ) -> list[Bill]:
          """
          Bills with billing_date inside the month, in creation order.

          This order is the one running numbers follow.
          """
          start, end = month_bounds(month, year)
          query = db.query(Bill).filter(
               Bill.billing_date >= start,
               Bill.billing_date <= end
          )
          if apartment_id:
               query = query.filter(Bill.apartment_id == apartment_id)
          return query.order_by(Bill.id.asc()).all()

     @staticmethod
     def monthly_summary(
          db: Session,
          month,
          year,
          apartment_id: Optional[int] = None
     ) -> MonthlySummary:
          """
          Numbered report for a month.

          Raises:
               ParameterError: If month/year are missing or out of range (before querying)
          """
          month, year = validate_period(month, year)
          bills = BillService.fetch_bills_for_month(db, month, year, apartment_id)
          return build_monthly_summary(month, year, bills, apartment_id=apartment_id)

     @staticmethod
     def get_bill_with_running_number(db: Session, bill_id: int) -> tuple[Bill, str, int, int]:
          """
          Running number of a bill among all bills of its billing month.

          Returns:
               (bill, running_number, position, total_bills_in_month)
          """
          bill = BillService.get_bill(db, bill_id)
          billing_date = to_report_time(bill.billing_date)
          month, year = billing_date.month, billing_date.year

          bills_in_month = BillService.fetch_bills_for_month(db, month, year)
          position = next(i for i, b in enumerate(bills_in_month, start=1) if b.id == bill.id)

          return bill, format_running_number(month, year, position), position, len(bills_in_month)

     @staticmethod
     def _current_month_bills_for_room(db: Session, room_id: int, now: datetime) -> list[Bill]:
          start, end = month_bounds(now.month, now.year)
          return (
               db.query(Bill)
               .filter(
                    Bill.room_id == room_id,
                    Bill.billing_date >= start,
                    Bill.billing_date <= end
               )
               .order_by(Bill.billing_date.desc(), Bill.created_at.desc(), Bill.id.desc())
               .all()
          )

     @staticmethod
     def latest_room_data(db: Session, room_id: int, now: Optional[datetime] = None) -> dict:
          """
          Data from the latest bill of a room, to pre-fill the next bill.

          - Tenant info comes from the newest bill of the current month,
            falling back to the latest bill overall
          - Meter start points are the latest bill's end readings, rate and fee
          - Recurring fees: rent, total discount, aircon and fridge fees
          """
          now = now or _report_now()

          latest = (
               db.query(Bill)
               .filter(Bill.room_id == room_id)
               .order_by(Bill.billing_date.desc(), Bill.created_at.desc(), Bill.id.desc())
               .first()
          )
          if latest is None:
               return {"has_data": False, "message": "No previous bills found for this room"}

          current_month_bills = BillService._current_month_bills_for_room(db, room_id, now)
          tenant_source = current_month_bills[0] if current_month_bills else latest

          return {
               "has_data": True,
               "room_id": latest.room_id,
               "room_number": latest.room.room_number if latest.room else None,
               "apartment_id": latest.apartment_id,
               "apartment_name": latest.apartment.name if latest.apartment else None,
               "tenant_info": {
                    "tenant_name": tenant_source.tenant_name,
                    "tenant_address": tenant_source.tenant_address,
                    "tenant_phone": tenant_source.tenant_phone,
                    "tenant_tax_id": tenant_source.tenant_tax_id,
                    "last_updated": tenant_source.billing_date,
               },
               "electricity": {
                    "end_meter": latest.electricity_end_meter,
                    "rate": latest.electricity_rate,
                    "meter_fee": latest.electricity_meter_fee,
               },
               "water": {
                    "end_meter": latest.water_end_meter,
                    "rate": latest.water_rate,
                    "meter_fee": latest.water_meter_fee,
               },
               "recurring_fees": {
                    "rent": latest.rent,
                    "discount": latest.discount_total,
                    "aircon_fee": latest.aircon_fee,
                    "fridge_fee": latest.fridge_fee,
               },
               "last_bill_date": latest.billing_date,
               "last_bill_id": latest.id,
               "has_current_month_bills": bool(current_month_bills),
               "current_month_bills_count": len(current_month_bills),
          }

     @staticmethod
     def update_current_month_tenant_info(
          db: Session,
          room_id: int,
          tenant_info,
          now: Optional[datetime] = None
     ) -> tuple[int, int]:
          """
          Rewrite the tenant snapshot on every bill of a room in the current month.

          Totals are untouched; only the tenant fields change.

          Returns:
               (matched_count, updated_count)

          Raises:
               BillValidationError: If any tenant field is blank (no bill is touched)
          """
          fields = ("tenant_name", "tenant_address", "tenant_phone", "tenant_tax_id")
          values = {field: (getattr(tenant_info, field) or "").strip() for field in fields}
          blank = {field: "This field is required" for field, value in values.items() if not value}
          if blank:
               raise BillValidationError(blank)

          now = now or _report_now()
          bills = BillService._current_month_bills_for_room(db, room_id, now)

          updated = 0
          for bill in bills:
               changed = False
               for field in fields:
                    value = values[field]
                    if getattr(bill, field) != value:
                         setattr(bill, field, value)
                         changed = True
               if changed:
                    updated += 1

          db.flush()
          logger.info("Tenant info update for room %s: matched=%d updated=%d", room_id, len(bills), updated)
          return len(bills), updated
