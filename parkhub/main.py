from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from parkhub.config import settings
from parkhub.core.cache import get_cache
from parkhub.core.database import engine, Base, async_session_maker
from parkhub.core.exceptions import DataAccessError, InvalidPeriod
from parkhub.core.logging_config import setup_logging, get_logger
from parkhub.models import Staff, StaffRole
from parkhub.api.auth import router as auth_router
from parkhub.api.customers import router as customers_router
from parkhub.api.staff import router as staff_router
from parkhub.api.restaurants import router as restaurants_router
from parkhub.api.menu_items import router as menu_items_router
from parkhub.api.restaurant_orders import router as restaurant_orders_router
from parkhub.api.rides import router as rides_router
from parkhub.api.ride_queues import router as ride_queues_router
from parkhub.api.stores import router as stores_router
from parkhub.api.souvenirs import router as souvenirs_router
from parkhub.api.souvenir_orders import router as souvenir_orders_router
from parkhub.api.lost_and_found import router as lost_and_found_router
from parkhub.api.maintenance import router as maintenance_router
from parkhub.api.chats import router as chats_router
from parkhub.api.broadcasts import router as broadcasts_router
from parkhub.api.reports import router as reports_router
from parkhub.services.auth_service import hash_password

setup_logging()
logger = get_logger(__name__)


async def ensure_superuser():
    """Create the bootstrap CEO account if no staff has its email yet."""
    email = settings.superuser_email.strip().lower()
    async with async_session_maker() as session:
        r = await session.execute(select(Staff).where(Staff.email == email))
        if r.scalar_one_or_none() is not None:
            return
        session.add(
            Staff(
                email=email,
                password_hash=hash_password(settings.superuser_password),
                name=settings.superuser_name,
                role=StaffRole.CEO,
            )
        )
        await session.commit()
        logger.info("Superuser created: %s", email)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables checked/created")
    try:
        await ensure_superuser()
    except SQLAlchemyError as e:
        logger.warning("Superuser: %s", e)
    yield
    await get_cache().close()
    await engine.dispose()


app = FastAPI(title="ParkHub", version="1.0.0", lifespan=lifespan)


@app.exception_handler(InvalidPeriod)
async def invalid_period_handler(request: Request, exc: InvalidPeriod):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(DataAccessError)
async def data_access_error_handler(request: Request, exc: DataAccessError):
    logger.error("Data access failed on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    detail = "Internal server error"
    err_str = str(exc).lower()
    if "duplicate key" in err_str or "unique constraint" in err_str:
        detail = "Data conflict (duplicate). Refresh and try again."
    elif "foreign key" in err_str:
        detail = "Referenced record does not exist or is still in use."
    return JSONResponse(
        status_code=500,
        content={"detail": detail},
    )


_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(auth_router)
app.include_router(customers_router)
app.include_router(staff_router)
app.include_router(restaurants_router)
app.include_router(menu_items_router)
app.include_router(restaurant_orders_router)
app.include_router(rides_router)
app.include_router(ride_queues_router)
app.include_router(stores_router)
app.include_router(souvenirs_router)
app.include_router(souvenir_orders_router)
app.include_router(lost_and_found_router)
app.include_router(maintenance_router)
app.include_router(chats_router)
app.include_router(broadcasts_router)
app.include_router(reports_router)


@app.get("/health")
def health():
    return {"status": "ok"}
