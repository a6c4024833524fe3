import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from canteen.api import admin_routes, coupon_routes, menu_routes, order_routes
from canteen.auth.routes import auth_backend, fastapi_users
from canteen.core.config import get_settings
from canteen.core.errors import CanteenError, ConfigurationError
from canteen.core.logging_config import configure_logging
from canteen.db import create_db_and_tables

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create the FastAPI app
app = FastAPI(title="Canteen Coupons API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CanteenError)
async def canteen_error_handler(request: Request, exc: CanteenError):
    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error on %s %s: %s", request.method, request.url.path, exc.message)
    elif exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.on_event("startup")
async def on_startup():
    logger.info("Starting DB setup...")
    await create_db_and_tables()
    logger.info("DB schema ready.")


@app.get("/health")
async def health_check() -> dict:
    return {"status": "ok"}


# Auth routes (admin login only; there is no self-registration)
app.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["auth"],
)

# Core app routers
app.include_router(order_routes.router)
app.include_router(menu_routes.router)
app.include_router(coupon_routes.router)
app.include_router(admin_routes.router)
