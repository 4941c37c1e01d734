"""
Storage endpoint — serves files from the public (staging) disk.

  GET /storage/{file_path} → file download

Only local disks are served; S3 disks hand out signed URLs instead.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from resource_export.core.errors import StorageError
from resource_export.core.storage import XLSX_MEDIA_TYPE, LocalDisk, storage

router = APIRouter(prefix="/storage", tags=["storage"])


@router.get("/{file_path:path}")
def download_file(file_path: str):
    disk = storage.disk()
    if not isinstance(disk, LocalDisk):
        raise HTTPException(status_code=404, detail="Staging disk is not served")

    try:
        full_path = disk.path(file_path)
    except StorageError:
        raise HTTPException(status_code=404, detail="File not found")
    if not full_path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    media_type = XLSX_MEDIA_TYPE if full_path.suffix == ".xlsx" else None
    return FileResponse(full_path, media_type=media_type, filename=full_path.name)
