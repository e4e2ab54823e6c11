# routers/bills.py
"""
Bill API routes.

Provides CRUD operations for tenant bills, the monthly summary report,
per-bill running numbers and the room pre-fill helpers.

Domain errors raised by the services (validation, not found, bad report
parameters) are turned into JSON responses by the handlers in main.py.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import Bill
from services.bill_service import BillService
from services.monthly_summary import MonthlySummary
from schemas.bill import (
     BillCreate,
     BillUpdate,
     BillResponse,
     BillListResponse,
     BillWithRunningNumberResponse,
     LatestRoomDataResponse,
     LineItemOut,
     MeterReadingOut,
     RentalPeriod,
     TenantInfoUpdateRequest,
     TenantInfoUpdateResponse,
)
from schemas.summary import (
     MonthlySummaryResponse,
     MonthlySummaryRowResponse,
     MonthlySummaryTotalsResponse,
)

router = APIRouter(prefix="/api/bills", tags=["bills"])


@router.post(
     "",
     response_model=BillResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new bill"
)
def create_bill(
     bill_data: BillCreate,
     db: Session = Depends(get_session)
):
     """
     Create a bill for a room. Derived totals are computed server-side.

     - **discounts** or legacy **discount**: itemized list or one amount
     - **other_fees** or legacy **other_fees_amount**: itemized list or one amount
     - **rent** must be greater than zero; meter end readings must not be below start readings
     """
     bill = BillService.create_bill(db, bill_data)
     db.commit()
     db.refresh(bill)

     return _build_bill_response(bill)


@router.get(
     "",
     response_model=BillListResponse,
     summary="List bills"
)
def list_bills(
     apartment_id: Optional[int] = Query(None, description="Filter by apartment ID"),
     room_id: Optional[int] = Query(None, description="Filter by room ID"),
     db: Session = Depends(get_session)
):
     """Bills filtered by apartment and/or room, newest first."""
     bills = BillService.list_bills(db, apartment_id=apartment_id, room_id=room_id)
     return BillListResponse(
          bills=[_build_bill_response(b) for b in bills],
          total=len(bills)
     )


@router.get(
     "/monthly-summary",
     response_model=MonthlySummaryResponse,
     summary="Monthly bill summary"
)
def get_monthly_summary(
     month: Optional[str] = Query(None, description="Month (1-12)"),
     year: Optional[str] = Query(None, description="4-digit year"),
     apartment_id: Optional[int] = Query(None, description="Filter by apartment ID"),
     db: Session = Depends(get_session)
):
     """
     All bills whose billing date falls in the month, numbered MMYY-NNN
     in creation order, with totals per category.

     An empty month is not an error: it returns zero totals. Missing or
     malformed month/year are rejected with 400.
     """
     summary = BillService.monthly_summary(db, month, year, apartment_id=apartment_id)
     return _build_summary_response(summary)


@router.get(
     "/latest-room-data",
     response_model=LatestRoomDataResponse,
     summary="Latest bill data for a room"
)
def get_latest_room_data(
     room_id: Optional[int] = Query(None, description="Room ID"),
     db: Session = Depends(get_session)
):
     """
     Tenant info, meter start readings and recurring fees taken from the
     room's latest bill, used to pre-fill the next bill.
     """
     if not room_id:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Room ID parameter is required"
          )
     return LatestRoomDataResponse(**BillService.latest_room_data(db, room_id))


@router.post(
     "/latest-room-data",
     response_model=TenantInfoUpdateResponse,
     summary="Update tenant info on current month bills"
)
def update_current_month_tenant_info(
     body: TenantInfoUpdateRequest,
     db: Session = Depends(get_session)
):
     """Rewrite the tenant snapshot on every bill of the room in the current month."""
     if not body.update_current_month:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="update_current_month must be true"
          )
     matched, updated = BillService.update_current_month_tenant_info(db, body.room_id, body.tenant_info)
     db.commit()
     return TenantInfoUpdateResponse(matched_count=matched, updated_count=updated)


@router.get(
     "/{bill_id}/with-running-number",
     response_model=BillWithRunningNumberResponse,
     summary="Get bill with its running number"
)
def get_bill_with_running_number(
     bill_id: int,
     db: Session = Depends(get_session)
):
     """
     The bill plus its MMYY-NNN number: its position among all bills of
     its billing month, in creation order.
     """
     bill, running_number, position, total = BillService.get_bill_with_running_number(db, bill_id)
     base = _build_bill_response(bill)
     return BillWithRunningNumberResponse(
          **base.model_dump(),
          running_number=running_number,
          bill_position=position,
          total_bills_in_month=total,
     )


@router.get(
     "/{bill_id}",
     response_model=BillResponse,
     summary="Get bill by ID"
)
def get_bill(
     bill_id: int,
     db: Session = Depends(get_session)
):
     """Retrieve a bill with its apartment name and room number."""
     return _build_bill_response(BillService.get_bill(db, bill_id))


@router.put(
     "/{bill_id}",
     response_model=BillResponse,
     summary="Update bill"
)
def update_bill(
     bill_id: int,
     bill_data: BillUpdate,
     db: Session = Depends(get_session)
):
     """
     Replace a bill's submitted fields. Totals are always recomputed,
     never carried over from the stored values.
     """
     bill = BillService.update_bill(db, bill_id, bill_data)
     db.commit()
     db.refresh(bill)

     return _build_bill_response(bill)


@router.delete(
     "/{bill_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete bill"
)
def delete_bill(
     bill_id: int,
     db: Session = Depends(get_session)
):
     """
     Delete a bill by ID.

     Note: This permanently removes the bill and its line items.
     """
     BillService.delete_bill(db, bill_id)
     db.commit()

     return None


def _build_bill_response(bill: Bill) -> BillResponse:
     """
     Helper function to build BillResponse with related data.
     """
     return BillResponse(
          id=bill.id,
          apartment_id=bill.apartment_id,
          room_id=bill.room_id,
          billing_date=bill.billing_date,
          payment_due_date=bill.payment_due_date,
          tenant_name=bill.tenant_name,
          tenant_address=bill.tenant_address,
          tenant_phone=bill.tenant_phone,
          tenant_tax_id=bill.tenant_tax_id,
          rental_period=RentalPeriod(from_date=bill.rental_from, to_date=bill.rental_to),
          rent=bill.rent,
          discounts=[LineItemOut.model_validate(item) for item in bill.discounts],
          discount_total=bill.discount_total,
          electricity=MeterReadingOut(
               start_meter=bill.electricity_start_meter,
               end_meter=bill.electricity_end_meter,
               rate=bill.electricity_rate,
               meter_fee=bill.electricity_meter_fee,
          ),
          water=MeterReadingOut(
               start_meter=bill.water_start_meter,
               end_meter=bill.water_end_meter,
               rate=bill.water_rate,
               meter_fee=bill.water_meter_fee,
          ),
          aircon_fee=bill.aircon_fee,
          fridge_fee=bill.fridge_fee,
          other_fees=[LineItemOut.model_validate(item) for item in bill.other_fees],
          net_rent=bill.net_rent,
          electricity_cost=bill.electricity_cost,
          water_cost=bill.water_cost,
          other_fees_total=bill.other_fees_total,
          grand_total=bill.grand_total,
          document_number=bill.document_number,
          created_at=bill.created_at,
          updated_at=bill.updated_at,
          apartment_name=bill.apartment.name if bill.apartment else None,
          room_number=bill.room.room_number if bill.room else None,
     )


def _build_summary_response(summary: MonthlySummary) -> MonthlySummaryResponse:
     rows = [
          MonthlySummaryRowResponse(
               id=row.id,
               running_number=row.running_number,
               room_number=row.room_number,
               apartment_name=row.apartment_name,
               tenant_name=row.tenant_name,
               rental_period=RentalPeriod(
                    from_date=row.rental_period.from_date,
                    to_date=row.rental_period.to_date,
               ),
               rent=row.rent,
               electricity_cost=row.electricity_cost,
               water_cost=row.water_cost,
               other_fees_total=row.other_fees_total,
               grand_total=row.grand_total,
               billing_date=row.billing_date,
          )
          for row in summary.bills
     ]
     totals = summary.summary
     return MonthlySummaryResponse(
          month=summary.month,
          year=summary.year,
          apartment_id=summary.apartment_id,
          bills=rows,
          summary=MonthlySummaryTotalsResponse(
               total_bills=totals.total_bills,
               total_rent=totals.total_rent,
               total_electricity=totals.total_electricity,
               total_water=totals.total_water,
               total_other_fees=totals.total_other_fees,
               grand_total=totals.grand_total,
          ),
     )
