"""
Storage disks — named backends for staged and final export files.

Every disk exposes the same small contract (``put`` / ``get`` /
``delete`` / ``exists`` / ``url`` / ``make_directory``).  Paths are
always relative to the disk root, e.g. ``exports/Users_01_31_2024.xlsx``.

Disks:
  LocalDisk : directory on the local filesystem, served under a base URL.
  S3Disk    : bucket on an S3-compatible object store (MinIO client).

Usage::

    from resource_export.core.storage import storage

    disk = storage.disk("public")
    disk.make_directory("exports")
    disk.url("exports/Users_01_31_2024.xlsx")
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import quote

from minio import Minio
from minio.error import S3Error
from urllib3.exceptions import HTTPError

from resource_export.core.config import settings
from resource_export.core.errors import DiskNotConfiguredError, StorageError

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class Disk(ABC):
    """Abstract storage backend addressed by relative paths."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def put(self, path: str, content: bytes) -> bool:
        """Write *content* at *path*; return ``False`` on failure."""

    @abstractmethod
    def get(self, path: str) -> bytes:
        """Return the content at *path* or raise ``StorageError``."""

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Remove *path*; return ``True`` if something was removed."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def url(self, path: str) -> str:
        """Public (or signed) URL for *path*."""

    def make_directory(self, path: str) -> bool:
        """Create *path* as a directory.  No-op for flat object stores."""
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


# ─────────────────────────────────────────────────────────────────
#  LOCAL FILESYSTEM
# ─────────────────────────────────────────────────────────────────

class LocalDisk(Disk):
    """Disk rooted at a local directory."""

    def __init__(self, name: str, root: str | Path, base_url: str = "") -> None:
        super().__init__(name)
        self.root = Path(root).resolve()
        self.base_url = base_url.rstrip("/")

    def path(self, relative: str) -> Path:
        """Absolute filesystem path for *relative*; never escapes the root."""
        full = (self.root / relative).resolve()
        if full != self.root and self.root not in full.parents:
            raise StorageError(f"Path {relative!r} escapes disk {self.name!r}")
        return full

    def put(self, path: str, content: bytes) -> bool:
        target = self.path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            logger.error(f"[LocalDisk:{self.name}] write failed for {path}: {exc}")
            return False
        return True

    def get(self, path: str) -> bytes:
        try:
            return self.path(path).read_bytes()
        except OSError as exc:
            raise StorageError(
                f"Unable to read {path} from disk {self.name}: {exc}"
            ) from exc

    def delete(self, path: str) -> bool:
        target = self.path(path)
        if not target.is_file():
            return False
        target.unlink()
        return True

    def exists(self, path: str) -> bool:
        return self.path(path).exists()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{quote(path)}"

    def make_directory(self, path: str) -> bool:
        self.path(path).mkdir(parents=True, exist_ok=True)
        return True


# ─────────────────────────────────────────────────────────────────
#  S3-COMPATIBLE OBJECT STORE
# ─────────────────────────────────────────────────────────────────

class S3Disk(Disk):
    """Disk backed by one bucket of an S3-compatible store."""

    def __init__(
        self,
        name: str,
        client: Minio,
        bucket: str,
        url_expires: timedelta = timedelta(hours=24),
    ) -> None:
        super().__init__(name)
        self.client = client
        self.bucket = bucket
        self.url_expires = url_expires
        self._bucket_checked = False

    @classmethod
    def from_settings(cls, name: str = "s3") -> "S3Disk":
        endpoint = settings.S3_ENDPOINT or ""
        client = Minio(
            endpoint.replace("http://", "").replace("https://", ""),
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
            secure=endpoint.startswith("https://"),
        )
        return cls(
            name,
            client,
            settings.S3_BUCKET,
            url_expires=timedelta(hours=settings.S3_URL_EXPIRE_HOURS),
        )

    def _ensure_bucket(self) -> None:
        if self._bucket_checked:
            return
        if not self.client.bucket_exists(bucket_name=self.bucket):
            self.client.make_bucket(bucket_name=self.bucket)
        self._bucket_checked = True

    def put(self, path: str, content: bytes) -> bool:
        try:
            self._ensure_bucket()
            self.client.put_object(
                bucket_name=self.bucket,
                object_name=path,
                data=io.BytesIO(content),
                length=len(content),
                content_type=XLSX_MEDIA_TYPE if path.endswith(".xlsx") else "application/octet-stream",
            )
        except (S3Error, HTTPError) as exc:
            logger.error(f"[S3Disk:{self.name}] upload failed for {path}: {exc}")
            return False
        return True

    def get(self, path: str) -> bytes:
        try:
            response = self.client.get_object(bucket_name=self.bucket, object_name=path)
        except (S3Error, HTTPError) as exc:
            raise StorageError(
                f"Unable to read {path} from disk {self.name}: {exc}"
            ) from exc
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()

    def delete(self, path: str) -> bool:
        if not self.exists(path):
            return False
        self.client.remove_object(bucket_name=self.bucket, object_name=path)
        return True

    def exists(self, path: str) -> bool:
        try:
            self.client.stat_object(bucket_name=self.bucket, object_name=path)
        except S3Error:
            return False
        return True

    def url(self, path: str) -> str:
        return self.client.presigned_get_object(
            bucket_name=self.bucket, object_name=path, expires=self.url_expires,
        )


# ─────────────────────────────────────────────────────────────────
#  DISK MANAGER
# ─────────────────────────────────────────────────────────────────

class DiskManager:
    """
    Registry of named disks.

    Without explicit disks the defaults are built lazily from settings:
    ``public`` (served under ``STORAGE_URL``), ``local`` (private) and,
    when ``S3_ENDPOINT`` is set, ``s3``.
    """

    def __init__(self, disks: Optional[Dict[str, Disk]] = None) -> None:
        self._disks: Dict[str, Disk] = dict(disks or {})
        self._defaults_loaded = disks is not None

    def _load_defaults(self) -> None:
        if self._defaults_loaded:
            return
        root = Path(settings.STORAGE_ROOT)
        self._disks.setdefault(
            "public", LocalDisk("public", root / "public", settings.STORAGE_URL),
        )
        self._disks.setdefault("local", LocalDisk("local", root / "private"))
        if settings.S3_ENDPOINT:
            self._disks.setdefault("s3", S3Disk.from_settings("s3"))
        self._defaults_loaded = True

    def register(self, disk: Disk) -> Disk:
        self._disks[disk.name] = disk
        return disk

    def disk(self, name: Optional[str] = None) -> Disk:
        """Return the disk called *name* (defaults to the staging disk)."""
        self._load_defaults()
        key = name or settings.STAGING_DISK
        try:
            return self._disks[key]
        except KeyError:
            raise DiskNotConfiguredError(f"Disk [{key}] is not configured") from None

    def has(self, name: str) -> bool:
        self._load_defaults()
        return name in self._disks

    def names(self) -> List[str]:
        self._load_defaults()
        return sorted(self._disks)


# ── Singleton ────────────────────────────────────────────────────
storage = DiskManager()
