from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from core.config import settings
from core.logging_config import setup_logging
from core.cache import init_cache
from core.scheduler import Scheduler

from features.display.routes.display_routes import router as display_router
from features.display.services.display_service import DisplayService
from features.display.services.svg_renderer import SvgRenderer
from features.weather.services.openweathermap_client import OpenWeatherMapClient

setup_logging()
logger = logging.getLogger(__name__)

def build_display_service() -> DisplayService:
    """Wire the configured weather source and renderer together."""
    source = OpenWeatherMapClient(
        lat=settings.lat,
        lon=settings.lon,
        api_key=settings.get_api_key()
    )
    renderer = SvgRenderer(settings.template_path, tz=settings.display_tz)
    return DisplayService(
        source=source,
        renderer=renderer,
        output_path=settings.output_path,
        hourly_hours=settings.hourly_hours,
        daily_days=settings.daily_days,
        tz=settings.display_tz
    )

def create_app(
    display_service: Optional[DisplayService] = None,
    start_scheduler: bool = True
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        try:
            logger.info("🚀 Starting Nook Weather API...")
            await init_cache()

            service = display_service or build_display_service()
            app.state.display_service = service
            app.state.scheduler = None

            if start_scheduler:
                app.state.scheduler = Scheduler(service)
                app.state.scheduler.start()

            logger.info(f"\n✨ API startup complete - reporting for {settings.lat},{settings.lon}")
            yield

        except Exception as e:
            logger.error(f"❌ Startup error: {str(e)}")
            raise
        finally:
            logger.info("\n🔄 Shutting down API...")
            if getattr(app.state, "scheduler", None):
                app.state.scheduler.shutdown()

            if getattr(app.state, "display_service", None):
                await app.state.display_service.source.close()

            logger.info("👋 API shutdown complete")

    app = FastAPI(
        title="Nook Weather API",
        description="Weather display generator for e-ink readers",
        version="0.2.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(display_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        service = getattr(app.state, "display_service", None)
        generated_at = service.generated_at if service else None
        return {
            "status": "healthy",
            "time": datetime.now().isoformat(),
            "last_generated": generated_at.isoformat() if generated_at else None
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5010))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
        workers=1
    )
