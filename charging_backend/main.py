import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from charging_backend.api.error_handlers import register_error_handlers
from charging_backend.api.router import api
from charging_backend.core.observability import setup_logging
from charging_backend.core.settings import settings
from charging_backend.db.init_db import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    await init_db()
    logger.info("Charging stations backend started")
    yield


app = FastAPI(title="Charging Stations Backend", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(api)
