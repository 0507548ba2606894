"""Object store abstraction with GCS, local-directory and in-memory implementations."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from google.api_core import exceptions as gcs_exceptions

from brandgallery.errors import StorageFailure
from brandgallery.keys import public_url

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ObjectStore(ABC):
    """Abstract object store contract.

    ``get_bytes`` returns None for a missing object. Any other failure is
    raised as StorageFailure.
    """

    backend_name: str

    def __init__(self, *, storage_root: str = ""):
        self.storage_root = storage_root

    @abstractmethod
    def get_bytes(self, key: str) -> Optional[bytes]:
        """Read an object, or None when it does not exist."""

    @abstractmethod
    def put_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        """Create or overwrite an object."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete an object; deleting a missing object is not an error."""

    def public_url(self, key: str) -> str:
        return public_url(self.storage_root, key)


class GCSObjectStore(ObjectStore):
    """Objects stored in a Google Cloud Storage bucket."""

    backend_name = "gcs"

    def __init__(
        self,
        *,
        bucket_name: str,
        project_id: Optional[str] = None,
        client: Optional[Any] = None,
        storage_root: str = "",
    ):
        if not bucket_name:
            raise ValueError("GCSObjectStore requires a storage bucket name")
        super().__init__(storage_root=storage_root or f"https://storage.googleapis.com/{bucket_name}/")

        if client is None:
            from google.cloud import storage

            client = storage.Client(project=project_id) if project_id else storage.Client()

        self.bucket_name = bucket_name
        self._bucket = client.bucket(bucket_name)

    def get_bytes(self, key: str) -> Optional[bytes]:
        blob = self._bucket.blob(key)
        try:
            return blob.download_as_bytes()
        except gcs_exceptions.NotFound:
            return None
        except (gcs_exceptions.GoogleAPIError, OSError) as exc:
            logger.error("GCS read failed for %s/%s: %s", self.bucket_name, key, exc)
            raise StorageFailure(f"Failed to read {key}: {exc}", key=key) from exc

    def put_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        blob = self._bucket.blob(key)
        try:
            blob.upload_from_string(data, content_type=content_type or DEFAULT_CONTENT_TYPE)
        except (gcs_exceptions.GoogleAPIError, OSError) as exc:
            logger.error("GCS write failed for %s/%s: %s", self.bucket_name, key, exc)
            raise StorageFailure(f"Failed to write {key}: {exc}", key=key) from exc

    def delete(self, key: str) -> None:
        blob = self._bucket.blob(key)
        try:
            blob.delete()
        except gcs_exceptions.NotFound:
            return
        except (gcs_exceptions.GoogleAPIError, OSError) as exc:
            logger.error("GCS delete failed for %s/%s: %s", self.bucket_name, key, exc)
            raise StorageFailure(f"Failed to delete {key}: {exc}", key=key) from exc


class LocalObjectStore(ObjectStore):
    """Objects stored as files under a local directory (development)."""

    backend_name = "local"

    def __init__(self, *, root_dir: str, storage_root: str = "/uploads/"):
        super().__init__(storage_root=storage_root)
        self.root_dir = Path(root_dir)

    def _path_for(self, key: str) -> Path:
        path = (self.root_dir / key.lstrip("/")).resolve()
        if self.root_dir.resolve() not in path.parents:
            raise StorageFailure(f"Key escapes storage directory: {key}", key=key)
        return path

    def get_bytes(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageFailure(f"Failed to read {key}: {exc}", key=key) from exc

    def put_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageFailure(f"Failed to write {key}: {exc}", key=key) from exc

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageFailure(f"Failed to delete {key}: {exc}", key=key) from exc


class MemoryObjectStore(ObjectStore):
    """Process-local object store for tests and throwaway dev runs."""

    backend_name = "memory"

    def __init__(self, *, storage_root: str = "memory://"):
        super().__init__(storage_root=storage_root)
        self.objects: Dict[str, Tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def get_bytes(self, key: str) -> Optional[bytes]:
        with self._lock:
            entry = self.objects.get(key)
        return entry[0] if entry else None

    def put_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        with self._lock:
            self.objects[key] = (bytes(data), content_type or DEFAULT_CONTENT_TYPE)

    def delete(self, key: str) -> None:
        with self._lock:
            self.objects.pop(key, None)


def create_object_store(backend: Optional[str] = None, *, settings: Any = None) -> ObjectStore:
    """Instantiate the configured object store."""
    if settings is None:
        from brandgallery.settings import settings

    normalized = (backend or settings.storage_backend or "gcs").strip().lower()
    if normalized in {"gcs", "google", "google_cloud_storage"}:
        return GCSObjectStore(
            bucket_name=settings.storage_bucket_name,
            project_id=settings.gcp_project_id,
            storage_root=settings.storage_root,
        )

    if normalized in {"local", "filesystem"}:
        return LocalObjectStore(
            root_dir=settings.local_storage_dir,
            storage_root=settings.storage_root,
        )

    if normalized in {"memory"}:
        return MemoryObjectStore(storage_root=settings.public_base_url or "memory://")

    raise ValueError(f"Unsupported storage backend: {backend}")
