# routers/__init__.py
from .apartments import router as apartments_router
from .bills import router as bills_router
from .owners import router as owners_router, business_owner_router
from .rooms import router as rooms_router

__all__ = [
     "apartments_router",
     "bills_router",
     "owners_router",
     "business_owner_router",
     "rooms_router",
]
