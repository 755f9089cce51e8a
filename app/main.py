import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.rest_routes.analysis import router as analysis_router
from app.api.rest_routes.financial_analysis import (
    router as financial_analysis_router,
)
from app.api.rest_routes.knowledge_base import router as knowledge_base_router
from app.api.rest_routes.ndvi import router as ndvi_router
from app.api.rest_routes.weather import router as weather_router
from app.core.config import settings
from app.services.knowledge_base import ensure_upload_dir

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_upload_dir()
    yield


app = FastAPI(title="Soybean Farm Advisor", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGIN.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(weather_router)
app.include_router(ndvi_router)
app.include_router(knowledge_base_router)
app.include_router(analysis_router)
app.include_router(financial_analysis_router)

app.mount(
    "/uploads",
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/api/health")
async def health():
    return {"status": "ok", "message": "Server is running"}
