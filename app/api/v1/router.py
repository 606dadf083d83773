"""API v1 router aggregation."""
from __future__ import annotations

from fastapi import APIRouter

from app.api.v1.endpoints import audit, health

router = APIRouter()

router.include_router(audit.router)
router.include_router(health.router)
