"""FastAPI application."""

import argparse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from configs import settings
from salescrm.controllers.admin_controllers import admin_router
from salescrm.controllers.appointments_controllers import appointments_router
from salescrm.controllers.campaigns_controllers import campaigns_router
from salescrm.controllers.closer_controllers import closer_router
from salescrm.controllers.deals_controllers import deals_router
from salescrm.controllers.leads_controllers import leads_router
from salescrm.controllers.reports_controllers import reports_router
from salescrm.logger_config import get_logger
from salescrm.repositories.crm.database import Base, engine
from salescrm.repositories.crm import models  # noqa: F401

from startup import create_mock_data

logger = get_logger(__name__)

INVALID_DATA = "Invalid data"
INTERNAL_ERROR = "Internal server error"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully!")

    if settings.SEED_MOCK_DATA:
        logger.info("Populating mocked data!")
        create_mock_data()
    yield


logger.info("Starting FastAPI application...")
app = FastAPI(
    title="Sales CRM API",
    root_path=settings.ROOT_PATH_BACKEND,
    description="Leads, appointments, deals and revenue for the sales team",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(campaigns_router)
app.include_router(leads_router)
app.include_router(appointments_router)
app.include_router(deals_router)
app.include_router(reports_router)
app.include_router(admin_router)
app.include_router(closer_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed input with a generic 400."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": INVALID_DATA}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR},
    )


@app.get("/api/health", response_description="Api healthcheck")
async def health() -> Dict[str, str]:
    """Define a route for handling HTTP GET requests to the health check URL."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", required=True, help="Application host.")
    parser.add_argument("--port", required=True, help="Application port.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development purposes.",
    )
    args = parser.parse_args()

    uvicorn.run("app:app", host=args.host, port=int(args.port), reload=args.reload)
