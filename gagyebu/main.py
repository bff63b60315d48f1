# gagyebu/main.py
import uvicorn
import os
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from gagyebu.core.config import settings
from gagyebu.core.database import engine, Base
from gagyebu.core.auth import AuthError
from gagyebu.core.db_utils import StoreWriteError
from gagyebu.api.v1.api import api_router
from gagyebu.api.v1.routes.auth import error_router

# Register every table on Base.metadata before create_all
from gagyebu.models import category, fixed_expense, payment_method, transaction  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create all tables on startup (deployments run the Alembic migrations instead)
async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    openapi_tags=[
        {"name": "Authentication", "description": "Sign in, sign up and session handling"},
        {"name": "views", "description": "Calendar, budget, wallet and stats aggregates"},
    ],
)

# CORS Configuration
origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",  # Local development
    "http://localhost:3001",  # Backup local port
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StoreWriteError)
async def store_write_exception_handler(request: Request, exc: StoreWriteError):
    return JSONResponse(status_code=400, content={"detail": exc.detail})

@app.exception_handler(AuthError)
async def auth_exception_handler(request: Request, exc: AuthError):
    return JSONResponse(status_code=400, content={"detail": exc.message})

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for better error responses"""
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )

    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

# ------------------------------------------------------------
# ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix="/api/v1")
app.include_router(error_router)

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION,
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Service unhealthy: {str(e)}")
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Startup event to create database tables"""
    try:
        await create_db_and_tables()
        logger.info("✅ Database tables created successfully")
        logger.info(f"✅ Frontend URL: {settings.FRONTEND_URL}")
    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("gagyebu.main:app", host="0.0.0.0", port=port, reload=False)
