"""Application entrypoint: sets up FastAPI app, CORS, logging, error mapping and registers API routers.

Domain services raise MarketplaceError subclasses; the handler below turns them
into `{"detail": ...}` responses with the matching status code.
"""
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routers import health as health_router
from app.api.routers import auth as auth_router
from app.api.routers import profiles as profiles_router
from app.api.routers import jobs as jobs_router
from app.api.routers import applications as applications_router
from app.api.routers import invitations as invitations_router
from app.api.routers import messages as messages_router
from app.api.routers import notifications as notifications_router
from app.api.routers import saved as saved_router
from app.api.routers import directory as directory_router
from app.api.routers import subscriptions as subscriptions_router
from app.api.routers import engagements as engagements_router
from app.api.routers import admin as admin_router
from app.api.routers import assistant as assistant_router
from app.api.routers import realtime as realtime_router
from app.api.routers import storage as storage_router
from app.core.config import settings
from app.core.errors import MarketplaceError


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Set specific log levels for different modules
logging.getLogger("jobs.service").setLevel(logging.INFO)
logging.getLogger("applications.service").setLevel(logging.INFO)
logging.getLogger("realtime.feed").setLevel(logging.INFO)

# Reduce noise from external libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger("app")


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)

    app.include_router(health_router.router)
    app.include_router(auth_router.router)
    app.include_router(profiles_router.router)
    app.include_router(jobs_router.router)
    app.include_router(applications_router.router)
    app.include_router(invitations_router.router)
    app.include_router(messages_router.router)
    app.include_router(notifications_router.router)
    app.include_router(saved_router.router)
    app.include_router(directory_router.router)
    app.include_router(subscriptions_router.router)
    app.include_router(engagements_router.router)
    app.include_router(admin_router.router)
    app.include_router(assistant_router.router)
    app.include_router(realtime_router.router)
    app.include_router(storage_router.router)

    return app


app = create_app()
