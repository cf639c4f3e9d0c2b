"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from formguard.api.health import router as health_router
from formguard.api.validation import router as validation_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Form validation, remote checks, ruleset
api_router.include_router(validation_router, tags=["Validation"])
