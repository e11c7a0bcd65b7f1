import os

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tripsplit.errors import InvalidInput, RoundingInconsistency
from tripsplit.logging_config import setup_logging
from tripsplit.middleware import RequestLoggingMiddleware
from tripsplit.routes import payments, settlements

load_dotenv()

# Sentry
sentry_dsn = os.getenv("SENTRY_DSN")
if sentry_dsn:
    sentry_sdk.init(
        dsn=sentry_dsn,
        traces_sample_rate=0.1,
        send_default_pii=False,
    )

logger = setup_logging()


async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    logger.warning(
        "Rejected settlement input",
        extra={"extra_data": {"path": request.url.path, "reason": str(exc)}},
    )
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def rounding_inconsistency_handler(request: Request, exc: RoundingInconsistency) -> JSONResponse:
    logger.error(
        "Settlement could not be balanced",
        extra={"extra_data": {
            "path": request.url.path,
            "residuals": {pid: str(amount) for pid, amount in exc.residuals.items()},
        }},
    )
    sentry_sdk.capture_exception(exc)
    return JSONResponse(status_code=500, content={"detail": "Settlement could not be balanced"})


app = FastAPI(title="TripSplit API", version="0.1.0")
app.add_exception_handler(InvalidInput, invalid_input_handler)
app.add_exception_handler(RoundingInconsistency, rounding_inconsistency_handler)

# CORS
origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in origins],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)
app.add_middleware(RequestLoggingMiddleware)

# Routes
app.include_router(settlements.router, prefix="/api")
app.include_router(payments.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}
