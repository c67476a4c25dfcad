#!/usr/bin/env python3
import sys
import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from Auth.database import init_db
from Auth.routes import router as auth_router
from Records.routes import routers as record_routers

load_dotenv()

# Configure logging to stdout
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready")
    yield


# ─── FASTAPI SETUP ─────────────────────────────────────────────────────────
app = FastAPI(
    title="District Command",
    description="Personnel, cases, duties, alerts and communications for the district command",
    version="1.0.0",
    lifespan=lifespan,
)

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── ERRORS ────────────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    """Malformed body or query → 400 with the field-level errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid data", "errors": jsonable_encoder(exc.errors())},
    )


# ─── ROOT & HEALTH ─────────────────────────────────────────────────────────
@app.get("/", include_in_schema=False)
def root():
    return {"status": "ok"}


@app.get("/health", tags=["Health"])
def health_check():
    logger.info("Health check invoked")
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}


# ─── ROUTES ────────────────────────────────────────────────────────────────
app.include_router(auth_router)
for router in record_routers:
    app.include_router(router)


# ─── Uvicorn LAUNCH (DEV ONLY) ─────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=True
    )
