import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tracker.logger import get_logger
from web.backend.routers import entries, goals, tags, todos

logger = get_logger("api")


def create_app() -> FastAPI:
    app = FastAPI(title="Goal Tracker API", version="1.0")

    raw_origins = os.getenv("GOAL_TRACKER_ALLOWED_ORIGINS", "*")
    allow_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    allow_credentials = "*" not in allow_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "Goal Tracker"}

    app.include_router(goals.router, prefix="/api/goals", tags=["goals"])
    app.include_router(entries.router, prefix="/api/entries", tags=["entries"])
    app.include_router(todos.router, prefix="/api/todos", tags=["todos"])
    app.include_router(tags.router, prefix="/api/tags", tags=["tags"])

    frontend_dist = Path(__file__).parent.parent / "client" / "dist"

    if frontend_dist.exists() and (frontend_dist / "index.html").exists():
        logger.info("Frontend found, serving static files from %s", frontend_dist)
        app.mount("/", StaticFiles(directory=str(frontend_dist), html=True), name="static")
    else:
        logger.info("Frontend dist not found at %s. Running in API-only mode.", frontend_dist)

        @app.get("/")
        async def root():
            return {
                "message": "Goal Tracker API is running",
                "docs": "/docs",
                "health": "/health",
            }

    return app


app = create_app()
