import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cashpool.config import settings
from cashpool.api.routes import health, scenarios, simulations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: configure logging for engine and service modules
    logging.basicConfig(level=settings.LOG_LEVEL)
    logger.info("Cash pool simulator started (default horizon %d days)", settings.DEFAULT_DAYS)
    yield


app = FastAPI(title="Cash Pool Liquidity Simulator", version=settings.APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(scenarios.router, prefix="/api")
app.include_router(simulations.router, prefix="/api")
