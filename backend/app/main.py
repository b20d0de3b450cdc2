from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.exceptions import register_exception_handlers
from app.startup import configure_startup_logging, create_tables, run_startup_checks

# ========== Bookings & Availability ==========
from modules.bookings.routes import router as bookings_router
from modules.bookings.services import BookingCommitGuard

# ========== Floor Plans ==========
from modules.floorplans.routes import router as floor_plans_router

# ========== Restaurants ==========
from modules.restaurants.routes import router as restaurants_router

app = FastAPI(
    title="DineBook - Restaurant Booking API",
    description="""
    Restaurant table-booking backend.

    ## Features

    * **Availability** - Weekly schedules, special dates and per-slot capacity
    * **Bookings** - Race-safe placement, confirmation codes and lifecycle transitions
    * **Table Assignment** - Smallest fitting free table with turning-time overlap checks
    * **Floor Plans** - Restaurant layouts whose tables feed table-based booking
    * **Opening Hours** - Grouped, localized rendering of free-form hours text
    """,
    version="0.1.0",
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One guard per process, shared by every booking request
app.state.commit_guard = BookingCommitGuard()

app.include_router(bookings_router)
app.include_router(floor_plans_router)
app.include_router(restaurants_router)


@app.on_event("startup")
def startup_event():
    """Initialize services on application startup"""
    configure_startup_logging()
    if settings.is_development:
        create_tables()
    run_startup_checks()


@app.get("/")
def read_root():
    return {"message": "DineBook backend is running"}
