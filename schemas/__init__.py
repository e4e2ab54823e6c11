# schemas/__init__.py
from .bill import (
     BillCreate,
     BillUpdate,
     BillResponse,
     BillListResponse,
     BillWithRunningNumberResponse,
     LatestRoomDataResponse,
     TenantInfoUpdateRequest,
     TenantInfoUpdateResponse,
)
from .property import (
     ApartmentCreate,
     ApartmentUpdate,
     ApartmentResponse,
     OwnerCreate,
     OwnerUpdate,
     OwnerResponse,
     RoomCreate,
     RoomUpdate,
     RoomResponse,
)
from .summary import MonthlySummaryResponse

__all__ = [
     "BillCreate",
     "BillUpdate",
     "BillResponse",
     "BillListResponse",
     "BillWithRunningNumberResponse",
     "LatestRoomDataResponse",
     "TenantInfoUpdateRequest",
     "TenantInfoUpdateResponse",
     "ApartmentCreate",
     "ApartmentUpdate",
     "ApartmentResponse",
     "OwnerCreate",
     "OwnerUpdate",
     "OwnerResponse",
     "RoomCreate",
     "RoomUpdate",
     "RoomResponse",
     "MonthlySummaryResponse",
]
