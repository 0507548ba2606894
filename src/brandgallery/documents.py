"""Whole-document JSON repositories on top of an object store.

Each metadata document is read and written in full. A missing document loads
as empty. There is no locking or versioning: concurrent writers race and the
last save wins.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from brandgallery.errors import StorageFailure
from brandgallery.hierarchy import PhotoHierarchy
from brandgallery.purchases import PurchaseDocument
from brandgallery.sheets import SheetDocument
from brandgallery.storage import ObjectStore

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def encode_document(data: Dict[str, Any]) -> bytes:
    return json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")


def decode_document(raw: bytes, *, key: str = "") -> Dict[str, Any]:
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StorageFailure(f"Metadata document {key} is not valid JSON: {exc}", key=key) from exc
    if not isinstance(data, dict):
        raise StorageFailure(f"Metadata document {key} must be a JSON object", key=key)
    return data


class JsonDocumentRepository:
    """Load and save one JSON object stored under a fixed key."""

    def __init__(self, store: ObjectStore, key: str):
        self.store = store
        self.key = key

    def load_raw(self) -> Dict[str, Any]:
        raw = self.store.get_bytes(self.key)
        if raw is None:
            logger.debug("Metadata document %s not found; starting empty", self.key)
            return {}
        return decode_document(raw, key=self.key)

    def save_raw(self, data: Dict[str, Any]) -> None:
        self.store.put_bytes(self.key, encode_document(data), content_type=JSON_CONTENT_TYPE)
        logger.info("Saved metadata document %s", self.key)


class HierarchyRepository(JsonDocumentRepository):
    """Photo hierarchy document."""

    def load(self) -> PhotoHierarchy:
        return PhotoHierarchy.from_document(self.load_raw())

    def save(self, doc: PhotoHierarchy) -> None:
        self.save_raw(doc.to_document())


class SheetLinkRepository(JsonDocumentRepository):
    """Sheet link document, kept as raw entries so unrelated fields survive."""

    def load(self) -> SheetDocument:
        return self.load_raw()

    def save(self, doc: SheetDocument) -> None:
        self.save_raw(doc)


class PurchaseRepository(JsonDocumentRepository):
    """Purchase document."""

    def load(self) -> PurchaseDocument:
        return self.load_raw()

    def save(self, doc: PurchaseDocument) -> None:
        self.save_raw(doc)
