import logging
import sys
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from config import CORS_ORIGINS, LOG_FILE, LOG_LEVEL, PORT
from routers import (
    apartments_router,
    bills_router,
    business_owner_router,
    owners_router,
    rooms_router,
)
from services.exceptions import (
    ApartmentInUseError,
    BillValidationError,
    DuplicateTaxIdError,
    NotFoundError,
    OwnerInUseError,
    ParameterError,
    RoomInUseError,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Console logging, plus a rotating file when LOG_FILE is set."""
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if LOG_FILE:
        handler = RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        handler.setFormatter(formatter)
        root.addHandler(handler)
        # Keep uvicorn access logs in the same file
        logging.getLogger("uvicorn.access").addHandler(handler)


configure_logging()

# App instance
app = FastAPI(title="Rent Billing API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(owners_router)
app.include_router(business_owner_router)
app.include_router(apartments_router)
app.include_router(rooms_router)
app.include_router(bills_router)


@app.get("/api/health")
def health():
    return {"status": "ok"}


# Domain error handlers
@app.exception_handler(BillValidationError)
async def bill_validation_handler(request: Request, exc: BillValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "validation_errors": exc.errors},
    )


@app.exception_handler(ParameterError)
async def parameter_error_handler(request: Request, exc: ParameterError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(OwnerInUseError)
@app.exception_handler(ApartmentInUseError)
@app.exception_handler(RoomInUseError)
@app.exception_handler(DuplicateTaxIdError)
async def conflict_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


# 404 Fallback: unknown routes only, domain 404s keep their message
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.middleware("http")
async def internal_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=True)
