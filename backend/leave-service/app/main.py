import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.automation import router as automation_router
from app.api.automation_logs import router as automation_logs_router
from app.api.leaves import router as leaves_router
from app.core.config import settings
from app.core.db import (
    close_client,
    ensure_indexes,
    get_automation_logs_collection,
    get_leaves_collection,
)
from app.core.errors import register_exception_handlers

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Leave Service",
    version="0.1.0",
    description="Leave management service (REST + MongoDB) with point-in-time partial restore",
)

# 대시보드(React)에서 직접 호출
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Ensuring MongoDB indexes for Leave Service")
    await ensure_indexes(get_leaves_collection(), get_automation_logs_collection())


@app.on_event("shutdown")
async def on_shutdown() -> None:
    logger.info("Closing MongoDB client for Leave Service")
    close_client()


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": "leave-service",
    }


@app.get("/")
async def root():
    return {
        "message": "Leave Service is running",
        "docs": "/docs",
    }


app.include_router(leaves_router)
app.include_router(automation_logs_router)
app.include_router(automation_router)
