# backend/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.logging_config import configure_logging
from config.settings import Settings, get_settings
from database.session import Database
from gateway.error_handlers import register_error_handlers
from gateway.gateway_router import gateway_router

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_PREFIX = "/api/v1"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("🚀 Inventory API is starting…")
        database = Database(settings.database_url, echo=settings.sql_echo)
        database.create_all()
        app.state.database = database

        try:
            database.ping()
            logger.info("✅ Database connected")
        except Exception as e:
            logger.error(f"❌ Database connection failed: {e}")

        yield
        # Shutdown
        logger.info("🛑 Shutting down…")
        database.dispose()

    app = FastAPI(
        title="Grocery Inventory API",
        description="Products, orders and dashboard statistics for a grocery store",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS
    allow_all = settings.cors_origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.get("/")
    async def root():
        return {
            "message": "Grocery Inventory API",
            "version": API_VERSION,
            "docs": "/docs",
            "endpoints": {
                "health": f"{API_PREFIX}/health",
                "products": f"{API_PREFIX}/products",
                "orders": f"{API_PREFIX}/orders",
                "vendors": f"{API_PREFIX}/vendors",
                "dashboard": f"{API_PREFIX}/dashboard",
            },
        }

    app.include_router(gateway_router, prefix=API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
        log_level=settings.log_level.lower(),
    )
