# schemas/summary.py
"""
Pydantic schemas for the monthly bill summary report.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict

from .bill import RentalPeriod


class MonthlySummaryRowResponse(BaseModel):
     """One numbered bill of the month."""
     id: int
     running_number: str
     room_number: Optional[str] = None
     apartment_name: Optional[str] = None
     tenant_name: str
     rental_period: RentalPeriod
     rent: Decimal
     electricity_cost: Decimal
     water_cost: Decimal
     other_fees_total: Decimal
     grand_total: Decimal
     billing_date: datetime

     model_config = ConfigDict(from_attributes=True)


class MonthlySummaryTotalsResponse(BaseModel):
     total_bills: int
     total_rent: Decimal
     total_electricity: Decimal
     total_water: Decimal
     total_other_fees: Decimal
     grand_total: Decimal

     model_config = ConfigDict(from_attributes=True)


class MonthlySummaryResponse(BaseModel):
     """Schema for GET /api/bills/monthly-summary."""
     month: int
     year: int
     apartment_id: Optional[int] = None
     bills: List[MonthlySummaryRowResponse]
     summary: MonthlySummaryTotalsResponse

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "month": 3,
                    "year": 2024,
                    "apartment_id": None,
                    "bills": [
                         {
                              "id": 1,
                              "running_number": "0324-001",
                              "room_number": "101",
                              "apartment_name": "Baan Suan Apartment",
                              "tenant_name": "Somchai Jaidee",
                              "rental_period": {"from": "2024-03-01", "to": "2024-03-31"},
                              "rent": "9500.00",
                              "electricity_cost": "400.00",
                              "water_cost": "350.00",
                              "other_fees_total": "200.00",
                              "grand_total": "10750.00",
                              "billing_date": "2024-03-01T09:00:00",
                         }
                    ],
                    "summary": {
                         "total_bills": 1,
                         "total_rent": "9500.00",
                         "total_electricity": "400.00",
                         "total_water": "350.00",
                         "total_other_fees": "200.00",
                         "grand_total": "10750.00",
                    },
               }
          }
     )
