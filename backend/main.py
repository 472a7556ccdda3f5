import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import settings
from core.limiter import limiter
from database import connect_db, close_db

# Routers
from routers import requests, beneficiaries, couriers, templates, organizations, families, tasks, alerts, reports

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_db()
    logger.info("AidFlow API started")
    yield
    # Shutdown
    await close_db()
    logger.info("AidFlow API stopped")


app = FastAPI(
    title="AidFlow API",
    description="Humanitarian aid distribution: requests, approvals and deliveries in Gaza",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(requests.router, prefix="/api/requests", tags=["Distribution Requests"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(beneficiaries.router, prefix="/api/beneficiaries", tags=["Beneficiaries"])
app.include_router(couriers.router, prefix="/api/couriers", tags=["Couriers"])
app.include_router(templates.router, prefix="/api/templates", tags=["Package Templates"])
app.include_router(organizations.router, prefix="/api/organizations", tags=["Organizations"])
app.include_router(families.router, prefix="/api/families", tags=["Families"])
app.include_router(alerts.router, prefix="/api/alerts", tags=["Alerts"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok", "app": "aidflow", "version": "1.0.0"}
