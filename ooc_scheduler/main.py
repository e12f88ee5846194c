"""
Main FastAPI application for the OOC Football Scheduling System.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ooc_scheduler.api import routes
from ooc_scheduler.core.config import CORS_ORIGINS

app = FastAPI(
    title="OOC Football Scheduling API",
    description="API for filling open weeks with out-of-conference games",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "OOC Football Scheduling API",
        "version": "1.0.0",
        "endpoints": {
            "generate": "/api/schedule",
            "generate_csv": "/api/schedule/csv",
            "validate": "/api/validate",
            "stats": "/api/stats",
            "health": "/api/health"
        }
    }
