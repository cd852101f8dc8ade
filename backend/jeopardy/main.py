#!/usr/bin/env python3
"""
Jeopardy backend - application entry point
"""

import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from jeopardy.api import api_router
from jeopardy.core.config import settings
from jeopardy.core.database import init_db
from jeopardy.core.exceptions import AppError
from jeopardy.core.logging import setup_logging

setup_logging()
logger = logging.getLogger("jeopardy")

app = FastAPI(
    title=settings.APP_NAME,
    description="Jeopardy-style trivia game backend: games, live sessions, scoring and AI game generation",
    version=settings.VERSION
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    content = {"detail": exc.message}
    if exc.details is not None:
        content["errors"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "; ".join(errors), "errors": errors})

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

# API routes
app.include_router(api_router, prefix="/api")

@app.on_event("startup")
async def startup_event():
    """Create tables on startup"""
    logger.info("Starting %s %s", settings.APP_NAME, settings.VERSION)
    await init_db()

@app.get("/")
async def root():
    """Health check"""
    return {"message": f"{settings.APP_NAME} is running", "status": "healthy"}

@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "jeopardy-backend"}

if __name__ == "__main__":
    uvicorn.run(
        "jeopardy.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
