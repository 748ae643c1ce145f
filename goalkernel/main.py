import logging

from fastapi import FastAPI

from goalkernel.config import settings
from goalkernel.goals.router import router as goals_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="GoalKernel", version="0.1.0")
app.include_router(goals_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "kernel": {
            "goals": "/kernel/goals",
            "goals_validate": "/kernel/goals/validate",
            "goals_progress": "/kernel/goals/progress",
            "goal_progress": "/kernel/goals/{goal_id}/progress",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
