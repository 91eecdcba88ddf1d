"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from balance_tracker.config import Settings, settings as default_settings
from balance_tracker.api.routes import balances, wallets, history
from balance_tracker.services.tracker_service import TrackerService
from balance_tracker.utils.logger import setup_logging


def create_app(settings: Settings = default_settings, tracker: TrackerService = None) -> FastAPI:
    """Build the API around a tracker service (one is created from settings if not given)."""
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if tracker is None:
            setup_logging(settings.log_level, settings.log_json)
        service = tracker or TrackerService.from_settings(settings)
        await service.start()
        app.state.tracker = service
        try:
            yield
        finally:
            await service.close()
    
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="Solana wallet balance tracking API",
        lifespan=lifespan
    )
    
    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Include routers
    app.include_router(balances.router, prefix=settings.api_prefix, tags=["balances"])
    app.include_router(wallets.router, prefix=f"{settings.api_prefix}/wallets", tags=["wallets"])
    app.include_router(history.router, prefix=f"{settings.api_prefix}/history", tags=["history"])
    
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Solana Balance Tracker API",
            "version": settings.api_version,
            "docs": "/docs"
        }
    
    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}
    
    return app


app = create_app()
