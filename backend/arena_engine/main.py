import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arena_engine import config
from arena_engine.routes import brackets, schedule

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Arena Scheduling Engine API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Bracket generation + results (stateless; caller persists matches)
app.include_router(brackets.router, prefix="/api", tags=["brackets"])

# Slot synchronization + conflict report
app.include_router(schedule.router, prefix="/api", tags=["schedule"])


@app.get("/api/health")
def health_check():
    """Diagnostic endpoint to verify the service is up"""
    return {"app_name": "Arena Scheduling Engine API", "status": "healthy"}
