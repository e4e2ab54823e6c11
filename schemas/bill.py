# schemas/bill.py
"""
Pydantic schemas for Bill API request/response validation.

Structural checks (types, non-negative amounts) live here. Domain rules
(rent > 0, end meter >= start meter, rental period order, required
tenant fields) are checked by services.bill_validation so they are
reported together with field names.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, model_validator


class RentalPeriod(BaseModel):
     """Rental period; serialized as {"from": ..., "to": ...}."""
     from_date: Optional[date] = Field(None, alias="from")
     to_date: Optional[date] = Field(None, alias="to")

     model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class LineItemIn(BaseModel):
     """One described discount or extra fee."""
     description: str = Field(..., min_length=1, max_length=255)
     amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class LineItemOut(BaseModel):
     description: str
     amount: Decimal

     model_config = ConfigDict(from_attributes=True)


class MeterReadingIn(BaseModel):
     """Utility meter readings for one billing period."""
     start_meter: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     end_meter: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     rate: Decimal = Field(..., ge=0, max_digits=10, decimal_places=4)
     meter_fee: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)


class MeterReadingOut(BaseModel):
     start_meter: Decimal
     end_meter: Decimal
     rate: Decimal
     meter_fee: Decimal


class BillCreate(BaseModel):
     """
     Schema for creating a bill.

     Discounts may be sent itemized (discounts) or as one legacy number
     (discount); other fees likewise (other_fees or other_fees_amount).
     Derived totals are never accepted from the client.
     """
     apartment_id: Optional[int] = Field(None, gt=0, description="Apartment being billed")
     room_id: Optional[int] = Field(None, gt=0, description="Room being billed (must belong to the apartment)")
     billing_date: datetime = Field(..., description="Billing date and time")
     payment_due_date: date = Field(..., description="Payment due date")

     tenant_name: str = ""
     tenant_address: str = ""
     tenant_phone: str = ""
     tenant_tax_id: str = ""

     rental_period: RentalPeriod = Field(default_factory=RentalPeriod)

     rent: Decimal = Field(..., max_digits=12, decimal_places=2)
     discounts: Optional[List[LineItemIn]] = None
     discount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2, description="Legacy single discount")

     electricity: MeterReadingIn
     water: MeterReadingIn
     aircon_fee: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     fridge_fee: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)

     other_fees: Optional[List[LineItemIn]] = None
     other_fees_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2, description="Legacy single other-fees amount")

     document_number: Optional[str] = Field(None, max_length=100)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "apartment_id": 1,
                    "room_id": 3,
                    "billing_date": "2024-03-01T09:00:00",
                    "payment_due_date": "2024-03-05",
                    "tenant_name": "Somchai Jaidee",
                    "tenant_address": "99 Sukhumvit Rd, Bangkok",
                    "tenant_phone": "0812345678",
                    "tenant_tax_id": "1101700000001",
                    "rental_period": {"from": "2024-03-01", "to": "2024-03-31"},
                    "rent": 10000,
                    "discounts": [{"description": "Loyalty", "amount": 500}],
                    "electricity": {"start_meter": 100, "end_meter": 150, "rate": 7, "meter_fee": 50},
                    "water": {"start_meter": 50, "end_meter": 70, "rate": 15, "meter_fee": 50},
                    "aircon_fee": 300,
                    "fridge_fee": 0,
                    "other_fees": [{"description": "Cleaning", "amount": 200}],
               }
          }
     )

     @model_validator(mode="after")
     def _one_shape_per_charge(self):
          if self.discounts is not None and self.discount is not None:
               raise ValueError("Send either discounts or discount, not both")
          if self.other_fees is not None and self.other_fees_amount is not None:
               raise ValueError("Send either other_fees or other_fees_amount, not both")
          return self


class BillUpdate(BillCreate):
     """Schema for a full bill update; all derived fields are recomputed."""
     pass


class BillResponse(BaseModel):
     """Schema for bill response."""
     id: int
     apartment_id: int
     room_id: int
     billing_date: datetime
     payment_due_date: date

     tenant_name: str
     tenant_address: str
     tenant_phone: str
     tenant_tax_id: str

     rental_period: RentalPeriod
     rent: Decimal
     discounts: List[LineItemOut]
     discount_total: Decimal
     electricity: MeterReadingOut
     water: MeterReadingOut
     aircon_fee: Decimal
     fridge_fee: Decimal
     other_fees: List[LineItemOut]

     net_rent: Decimal
     electricity_cost: Decimal
     water_cost: Decimal
     other_fees_total: Decimal
     grand_total: Decimal

     document_number: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     # Optional related data
     apartment_name: Optional[str] = None
     room_number: Optional[str] = None


class BillWithRunningNumberResponse(BillResponse):
     """Bill plus its running number within the billing month."""
     running_number: str
     bill_position: int
     total_bills_in_month: int


class BillListResponse(BaseModel):
     bills: List[BillResponse]
     total: int


class TenantInfo(BaseModel):
     tenant_name: str = Field(..., min_length=1)
     tenant_address: str = Field(..., min_length=1)
     tenant_phone: str = Field(..., min_length=1)
     tenant_tax_id: str = Field(..., min_length=1)

     model_config = ConfigDict(str_strip_whitespace=True)


class TenantInfoSnapshot(BaseModel):
     tenant_name: str
     tenant_address: str
     tenant_phone: str
     tenant_tax_id: str
     last_updated: datetime


class MeterStart(BaseModel):
     """Previous end reading, rate and fee to start the next bill from."""
     end_meter: Decimal
     rate: Decimal
     meter_fee: Decimal


class RecurringFees(BaseModel):
     rent: Decimal
     discount: Decimal
     aircon_fee: Decimal
     fridge_fee: Decimal


class LatestRoomDataResponse(BaseModel):
     """Data from the latest bill of a room, used to pre-fill a new bill."""
     has_data: bool
     message: Optional[str] = None
     room_id: Optional[int] = None
     room_number: Optional[str] = None
     apartment_id: Optional[int] = None
     apartment_name: Optional[str] = None
     tenant_info: Optional[TenantInfoSnapshot] = None
     electricity: Optional[MeterStart] = None
     water: Optional[MeterStart] = None
     recurring_fees: Optional[RecurringFees] = None
     last_bill_date: Optional[datetime] = None
     last_bill_id: Optional[int] = None
     has_current_month_bills: bool = False
     current_month_bills_count: int = 0


class TenantInfoUpdateRequest(BaseModel):
     """Rewrite the tenant snapshot on every bill of a room in the current month."""
     room_id: int = Field(..., gt=0)
     tenant_info: TenantInfo
     update_current_month: bool = Field(..., description="Must be true to apply the update")


class TenantInfoUpdateResponse(BaseModel):
     matched_count: int
     updated_count: int
