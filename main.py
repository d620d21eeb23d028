"""
Order Profit Calculator
FastAPI Application Entry Point
"""
import logging

import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.core import settings, engine, Base
from app.api.router import api_router
from app.api.deps import get_services

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Lifespan for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create tables if not exist
    Base.metadata.create_all(bind=engine)
    await get_services().settings.ensure_defaults()
    logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT}")

    yield

    logger.info(f"{settings.APP_NAME} shutting down")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Order totals, payment fees and partner profit sharing",
    version="1.0.0",
    lifespan=lifespan
)

# Include routers
app.include_router(api_router, prefix="/api")

# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG
    )
