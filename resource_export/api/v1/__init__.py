"""
API v1 — Router aggregation.
"""

from fastapi import APIRouter

from resource_export.api.v1.exports import router as exports_router
from resource_export.api.v1.system import router as system_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(system_router)
api_router.include_router(exports_router)
