# services/__init__.py
from .exceptions import (
     BillingServiceError,
     BillValidationError,
     ParameterError,
     NotFoundError,
     OwnerInUseError,
     ApartmentInUseError,
     RoomInUseError,
     DuplicateTaxIdError,
)
from .bill_calculator import (
     BillCharges,
     BillTotals,
     MeterReading,
     calculate_bill,
     apply_to_bill,
)
from .monthly_summary import build_monthly_summary, format_running_number
from .bill_service import BillService
from . import ownership_service

__all__ = [
     "BillingServiceError",
     "BillValidationError",
     "ParameterError",
     "NotFoundError",
     "OwnerInUseError",
     "ApartmentInUseError",
     "RoomInUseError",
     "DuplicateTaxIdError",
     "BillCharges",
     "BillTotals",
     "MeterReading",
     "calculate_bill",
     "apply_to_bill",
     "build_monthly_summary",
     "format_running_number",
     "BillService",
     "ownership_service",
]
