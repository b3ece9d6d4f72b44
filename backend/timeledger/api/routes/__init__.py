from fastapi import APIRouter

from timeledger.api.routes import (
    blocks,
    categories,
    dashboard,
    goals,
    rules,
    streaks,
    templates,
    time_entries,
    validations,
)


api_router = APIRouter()
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(blocks.router, prefix="/blocks", tags=["blocks"])
api_router.include_router(validations.router, prefix="/validations", tags=["validations"])
api_router.include_router(rules.router, prefix="/rules", tags=["rules"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(time_entries.router, prefix="/time-entries", tags=["time-entries"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(streaks.router, prefix="/streaks", tags=["streaks"])
