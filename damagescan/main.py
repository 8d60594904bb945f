from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import estimates, materials, rates

logger = logging.getLogger("damagescan")
logger.setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title=settings.APP_NAME,
    description="CDMv23 water damage restoration cost estimator",
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimates.router, prefix="/api")
app.include_router(rates.router, prefix="/api")
app.include_router(materials.router, prefix="/api")


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "app": "damagescan-estimator",
        "version": settings.APP_VERSION,
    }
