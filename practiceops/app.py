import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from practiceops.core.settings import get_settings
from practiceops.routes import clients, imports, service_lines, work_items


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.title, version=settings.version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(work_items.router, prefix="/api")
    app.include_router(clients.router, prefix="/api")
    app.include_router(service_lines.router, prefix="/api")
    app.include_router(imports.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": settings.title,
                "docs": "/docs",
                "health": "/api/service-lines",
            }
        )

    return app


app = create_app()
