"""
FastAPI application factory.

Creates and configures the FastAPI app with CORS and routers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def create_app() -> FastAPI:
    app = FastAPI(
        title="Linsta Job Insights API",
        description="Job match scoring and scam-risk detection",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:8081",
            "http://localhost:19006",
            "http://127.0.0.1:8081",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import insights, jobs

    app.include_router(insights.router, prefix="/api/insights", tags=["insights"])
    app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])

    @app.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return app
