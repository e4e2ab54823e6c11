# services/monthly_summary.py
"""
Monthly Aggregator - numbered monthly bill report with category totals.

Given a month, a year and the candidate bills fetched by the caller, this
module:
1. Rejects missing or out-of-range month/year (ParameterError) before any work
2. Keeps bills whose billing_date lies in [first instant, last instant] of the month
   (and in the apartment, when one is given)
3. Numbers the kept bills 1..n in the order they were supplied, as MMYY-NNN
4. Sums rent, electricity, water, other fees and grand totals

Running numbers follow the order of the supplied sequence (the store
returns bills in creation order), not room number. They restart at 001
for every (month, year[, apartment]) selection and are never stored.

Time zone policy: billing dates are naive datetimes in REPORT_TIMEZONE.
Aware datetimes are converted into that zone before comparison.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from config import REPORT_TIMEZONE
from services.exceptions import ParameterError

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
MIN_YEAR = 1000
MAX_YEAR = 9999


def to_report_time(value: datetime, zone: str = REPORT_TIMEZONE) -> datetime:
     """Return a naive datetime in the reporting zone."""
     if value.tzinfo is None:
          return value
     return value.astimezone(ZoneInfo(zone)).replace(tzinfo=None)


def _as_int(value) -> int:
     """Integer value of an int, an integral number or a digit string; anything else is a ParameterError."""
     if isinstance(value, bool):
          raise ParameterError("Month and year must be integers")
     if isinstance(value, int):
          return value
     if isinstance(value, str):
          try:
               return int(value.strip())
          except ValueError:
               raise ParameterError("Month and year must be integers")
     if isinstance(value, (float, Decimal)):
          try:
               integral = int(value)
          except (ValueError, OverflowError):
               raise ParameterError("Month and year must be integers")
          if integral == value:
               return integral
     raise ParameterError("Month and year must be integers")


def validate_period(month, year) -> tuple[int, int]:
     """
     Check report parameters.

     Raises:
          ParameterError: month/year missing, not integers, or out of range
     """
     if month is None or year is None:
          raise ParameterError("Month and year parameters are required")
     month = _as_int(month)
     year = _as_int(year)
     if month < 1 or month > 12:
          raise ParameterError("Month must be between 1 and 12")
     if year < MIN_YEAR or year > MAX_YEAR:
          raise ParameterError("Year must be a 4-digit year")
     return month, year


def month_bounds(month: int, year: int) -> tuple[datetime, datetime]:
     """First and last instant (inclusive) of the month, naive in the reporting zone."""
     month, year = validate_period(month, year)
     start = datetime(year, month, 1)
     if month == 12:
          next_start = datetime(year + 1, 1, 1)
     else:
          next_start = datetime(year, month + 1, 1)
     return start, next_start - timedelta(microseconds=1)


def format_running_number(month: int, year: int, sequence: int) -> str:
     """0324-001 for the first bill of March 2024."""
     return f"{month:02d}{year % 100:02d}-{sequence:03d}"


@dataclass(frozen=True)
class Period:
     from_date: date
     to_date: date


@dataclass(frozen=True)
class MonthlySummaryRow:
     id: int
     running_number: str
     room_number: Optional[str]
     apartment_name: Optional[str]
     tenant_name: str
     rental_period: Period
     rent: Decimal
     electricity_cost: Decimal
     water_cost: Decimal
     other_fees_total: Decimal
     grand_total: Decimal
     billing_date: datetime


@dataclass(frozen=True)
class MonthlySummaryTotals:
     total_bills: int = 0
     total_rent: Decimal = ZERO
     total_electricity: Decimal = ZERO
     total_water: Decimal = ZERO
     total_other_fees: Decimal = ZERO
     grand_total: Decimal = ZERO


@dataclass(frozen=True)
class MonthlySummary:
     month: int
     year: int
     apartment_id: Optional[int]
     bills: list[MonthlySummaryRow] = field(default_factory=list)
     summary: MonthlySummaryTotals = field(default_factory=MonthlySummaryTotals)


def _money(value) -> Decimal:
     return ZERO if value is None else Decimal(value)


def _build_row(bill, running_number: str) -> MonthlySummaryRow:
     room = bill.room
     apartment = bill.apartment
     return MonthlySummaryRow(
          id=bill.id,
          running_number=running_number,
          room_number=room.room_number if room is not None else None,
          apartment_name=apartment.name if apartment is not None else None,
          tenant_name=bill.tenant_name,
          rental_period=Period(bill.rental_from, bill.rental_to),
          rent=_money(bill.net_rent),
          electricity_cost=_money(bill.electricity_cost),
          water_cost=_money(bill.water_cost),
          other_fees_total=_money(bill.other_fees_total),
          grand_total=_money(bill.grand_total),
          billing_date=bill.billing_date,
     )


def summarize_rows(rows: list[MonthlySummaryRow]) -> MonthlySummaryTotals:
     return MonthlySummaryTotals(
          total_bills=len(rows),
          total_rent=sum((r.rent for r in rows), ZERO),
          total_electricity=sum((r.electricity_cost for r in rows), ZERO),
          total_water=sum((r.water_cost for r in rows), ZERO),
          total_other_fees=sum((r.other_fees_total for r in rows), ZERO),
          grand_total=sum((r.grand_total for r in rows), ZERO),
     )


def build_monthly_summary(
     month,
     year,
     bills: Iterable,
     apartment_id: Optional[int] = None,
) -> MonthlySummary:
     """
     Build the numbered report for one month.

     Args:
          month: 1-12
          year: 4-digit year
          bills: candidate models.Bill records, in the order numbering should follow
          apartment_id: keep only bills of this apartment when given

     Returns:
          MonthlySummary with one row per selected bill and the totals

     Raises:
          ParameterError: invalid month/year (nothing is read from bills)
     """
     month, year = validate_period(month, year)
     start, end = month_bounds(month, year)

     selected = [
          bill for bill in bills
          if start <= to_report_time(bill.billing_date) <= end
          and (apartment_id is None or bill.apartment_id == apartment_id)
     ]

     rows = [
          _build_row(bill, format_running_number(month, year, index))
          for index, bill in enumerate(selected, start=1)
     ]
     totals = summarize_rows(rows)

     logger.info(
          "Monthly summary %02d/%d apartment=%s: %d bills, grand total %s",
          month, year, apartment_id, totals.total_bills, totals.grand_total,
     )
     return MonthlySummary(month=month, year=year, apartment_id=apartment_id, bills=rows, summary=totals)
