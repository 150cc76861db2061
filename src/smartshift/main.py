from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartshift.api.routes import api_router
from smartshift.core.config import get_settings


def create_application() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        description="API for ranking and assigning healthcare staff to shifts.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Simple health endpoint for infrastructure monitoring."""
        return {"status": "ok"}

    return app


app = create_application()
