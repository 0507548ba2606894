"""Shared dependencies for FastAPI endpoints."""

from functools import lru_cache

from fastapi import Depends

from brandgallery.documents import HierarchyRepository, PurchaseRepository, SheetLinkRepository
from brandgallery.services import PhotoService, PurchaseService, SheetService
from brandgallery.settings import settings
from brandgallery.storage import ObjectStore, create_object_store


@lru_cache(maxsize=1)
def _shared_object_store() -> ObjectStore:
    return create_object_store(settings.storage_backend, settings=settings)


def get_object_store() -> ObjectStore:
    """Return the process-wide object store (client created once, reused across requests)."""
    return _shared_object_store()


def get_photo_service(store: ObjectStore = Depends(get_object_store)) -> PhotoService:
    return PhotoService(
        store,
        HierarchyRepository(store, settings.photos_document_key),
        default_brand=settings.default_brand,
        default_person=settings.default_person,
        default_date=settings.default_date,
    )


def get_sheet_service(store: ObjectStore = Depends(get_object_store)) -> SheetService:
    return SheetService(SheetLinkRepository(store, settings.sheets_document_key))


def get_purchase_service(store: ObjectStore = Depends(get_object_store)) -> PurchaseService:
    return PurchaseService(store, PurchaseRepository(store, settings.purchases_document_key))
