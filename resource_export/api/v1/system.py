"""System endpoints — health check."""

from fastapi import APIRouter

from resource_export.core.storage import storage
from resource_export.services.export.registry import export_registry

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def health_check():
    """Basic liveness probe."""
    return {
        "status": "ok",
        "exports": export_registry.keys(),
        "disks": storage.names(),
    }
