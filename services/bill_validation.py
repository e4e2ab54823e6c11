# services/bill_validation.py
"""
Domain validation for bill drafts.

Runs before the calculator; a draft that fails here must never have its
derived fields computed or be persisted. All failing rules are collected
so the client can show every problem at once.
"""
from decimal import Decimal

from services.exceptions import BillValidationError


def _blank(value) -> bool:
     return value is None or not str(value).strip()


def collect_bill_errors(draft) -> dict[str, str]:
     """
     Return {field: message} for every rule the draft breaks.

     draft is any object shaped like schemas.bill.BillCreate.
     """
     errors: dict[str, str] = {}

     if not draft.apartment_id:
          errors["apartment_id"] = "Please select an apartment"
     if not draft.room_id:
          errors["room_id"] = "Please select a room"

     for field, label in (
          ("tenant_name", "Tenant name"),
          ("tenant_address", "Tenant address"),
          ("tenant_phone", "Tenant phone"),
          ("tenant_tax_id", "Tenant tax ID"),
     ):
          if _blank(getattr(draft, field)):
               errors[field] = f"{label} is required"

     period = draft.rental_period
     from_date = period.from_date if period is not None else None
     to_date = period.to_date if period is not None else None
     if from_date is None:
          errors["rental_period.from"] = "Rental period start date is required"
     if to_date is None:
          errors["rental_period.to"] = "Rental period end date is required"
     if from_date is not None and to_date is not None and from_date >= to_date:
          errors["rental_period.to"] = "Rental period start must be before its end"

     if draft.rent is None or Decimal(draft.rent) <= 0:
          errors["rent"] = "Rent must be greater than zero"

     for utility in ("electricity", "water"):
          reading = getattr(draft, utility)
          if reading.end_meter < reading.start_meter:
               errors[f"{utility}.end_meter"] = (
                    f"{utility.capitalize()} end meter must be greater than or equal to start meter"
               )

     return errors


def validate_bill_draft(draft) -> None:
     """
     Raise BillValidationError if the draft breaks any domain rule.

     Raises:
          BillValidationError: with the full {field: message} map
     """
     errors = collect_bill_errors(draft)
     if errors:
          raise BillValidationError(errors)
