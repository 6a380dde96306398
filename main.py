from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import uvicorn
import logging

from config import settings, configure_logging

from routes import (
    auth_router,
    pets_router,
    consultations_router,
    owners_router,
    profile_router,
    users_router,
)
from core.exceptions import AppException
from models.common import HealthCheckResponse, create_error_response
from database.db import create_tables, get_database_url

logger = logging.getLogger(__name__)

# Configurar logging una sola vez al inicio
configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Maneja el ciclo de vida de la aplicación."""
    # Startup
    try:
        create_tables()
        logger.info(f"Base de datos: {get_database_url()}")
    except Exception as e:
        logger.warning(f"No se pudieron crear tablas en la base de datos: {e}")
    yield
    # Shutdown

app = FastAPI(
    title=settings.app_name,
    description="Censo de mascotas y seguimiento de consultas veterinarias.",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    debug=settings.debug_mode
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Excepciones de negocio que escapan de una dependencia o de una ruta."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(
            error=exc.__class__.__name__,
            message=exc.message,
            details=exc.details,
        ),
    )


@app.get("/")
async def root():
    """Endpoint raíz con información de la API."""
    return {
        "message": f"{settings.app_name} - Censo de Mascotas",
        "version": settings.app_version,
        "status": "active",
        "environment": "production" if settings.is_production else "development",
        "docs": "/docs",
        "redoc": "/redoc"
    }

app.include_router(auth_router)
app.include_router(owners_router)
app.include_router(profile_router)
app.include_router(pets_router)
app.include_router(consultations_router)
app.include_router(users_router)

# fotos subidas (mascotas y perfiles)
Path(settings.media_root).mkdir(parents=True, exist_ok=True)
app.mount(settings.media_url, StaticFiles(directory=settings.media_root), name="media")

@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Health check endpoint con verificación de base de datos."""
    from database.db import engine
    from sqlalchemy import text

    db_status = "unknown"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        logger.error(f"Health check: Error de conexión a BD: {e}")
        db_status = "disconnected"

    return {
        "status": "healthy" if db_status == "connected" else "unhealthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "database": db_status,
        "environment": "production" if settings.is_production else "development"
    }

if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
