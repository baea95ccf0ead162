import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.config import settings
from src.exhibitions import router as exhibitions_router
from src.exhibitions import ExhibitionRegistry
from src.bookings import router as bookings_router
from src.bookings import BookingService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

def create_app() -> FastAPI:
    """Build the API with a fresh in-memory registry"""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Exhibition Stall Booking API",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    registry = ExhibitionRegistry()
    app.state.registry = registry
    app.state.bookings = BookingService(registry)

    # Include routers
    app.include_router(
        exhibitions_router,
        prefix=f"{settings.API_V1_STR}/exhibitions",
        tags=["Exhibitions & Layouts"]
    )

    app.include_router(
        bookings_router,
        prefix=f"{settings.API_V1_STR}/bookings",
        tags=["Bookings"]
    )

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": "Exhibition Stall Booking API",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
