"""Load → mutate → save orchestration for photos, sheet links and purchases.

Every write performs one full document load, one in-memory mutation and one
full save. Required fields are checked before anything is loaded.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from typing import List, Optional, Sequence

from brandgallery.documents import HierarchyRepository, PurchaseRepository, SheetLinkRepository
from brandgallery.errors import StorageFailure, ValidationError, require_fields
from brandgallery.hierarchy import (
    AssetRecord,
    PhotoHierarchy,
    delete_asset,
    find_asset,
    insert_asset,
    normalize_category,
    rename_asset,
)
from brandgallery.keys import (
    now_millis,
    photo_file_name,
    photo_storage_key,
    purchase_id,
    purchase_storage_key,
    storage_key_from_url,
)
from brandgallery.projection import AssetPredicate, BrandView, no_filter, project
from brandgallery.purchases import (
    PurchaseRecord,
    add_purchase,
    get_purchase,
    list_purchases,
    remove_purchase,
)
from brandgallery.sheets import SheetLink, link_at, list_active, remove, upsert
from brandgallery.storage import ObjectStore

logger = logging.getLogger(__name__)


@dataclass
class IncomingFile:
    """An uploaded file, already read into memory."""

    filename: str
    data: bytes
    content_type: Optional[str] = None

    @property
    def resolved_content_type(self) -> str:
        guessed = mimetypes.guess_type(self.filename or "")[0]
        return (self.content_type or guessed or "application/octet-stream").strip()


class PhotoService:
    """Photo uploads and metadata edits against the hierarchy document."""

    def __init__(
        self,
        store: ObjectStore,
        repository: HierarchyRepository,
        *,
        default_brand: str = "DefaultBrand",
        default_person: str = "DefaultPerson",
        default_date: str = "NoDate",
    ):
        self.store = store
        self.repository = repository
        self.default_brand = default_brand
        self.default_person = default_person
        self.default_date = default_date

    def load(self) -> PhotoHierarchy:
        return self.repository.load()

    def gallery(self, predicate: AssetPredicate = no_filter, excluded_brands: Sequence[str] = ()) -> List[BrandView]:
        return project(self.load(), predicate, excluded_brands=excluded_brands)

    def upload(
        self,
        brand: Optional[str],
        person: Optional[str],
        date: Optional[str],
        files: Sequence[IncomingFile],
        category: Optional[str] = None,
    ) -> List[AssetRecord]:
        """Store files one at a time and record them under brand/person/date.

        If a store call fails part-way, the files already stored are still
        recorded before the failure propagates.
        """
        if not files:
            raise ValidationError("No files uploaded", field="files")

        brand = (brand or "").strip() or self.default_brand
        person = (person or "").strip() or self.default_person
        date = (date or "").strip() or self.default_date
        category = normalize_category(category)

        doc = self.repository.load()
        stored: List[AssetRecord] = []
        stamp = now_millis() - 1
        try:
            for incoming in files:
                # Strictly increasing within a batch so repeated names get distinct keys
                stamp = max(stamp + 1, now_millis())
                file_name = photo_file_name(incoming.filename, stamp)
                storage_key = photo_storage_key(brand, person, date, file_name)
                self.store.put_bytes(storage_key, incoming.data, content_type=incoming.resolved_content_type)
                record = AssetRecord(
                    name=file_name,
                    url=self.store.public_url(storage_key),
                    storage_key=storage_key,
                    category=category,
                )
                doc = insert_asset(doc, brand, person, date, record)
                stored.append(record)
        except StorageFailure:
            if stored:
                logger.warning(
                    "Upload failed after %d of %d files; saving metadata for stored files",
                    len(stored),
                    len(files),
                )
                self.repository.save(doc)
            raise

        self.repository.save(doc)
        logger.info("Uploaded %d file(s) to %s/%s/%s as %s", len(stored), brand, person, date, category)
        return stored

    def rename(self, brand: str, person: str, date: str, old_name: str, new_name: str) -> Optional[AssetRecord]:
        """Rename a record's display name. Returns the updated record, or None if absent."""
        require_fields(brand=brand, person=person, date=date, old_name=old_name, new_name=new_name)

        doc = self.repository.load()
        original = find_asset(doc, brand, person, date, old_name)
        if original is None:
            return None
        position = doc.get_leaf(brand, person, date).index(original)
        updated = rename_asset(doc, brand, person, date, old_name, new_name)
        self.repository.save(updated)
        return updated.get_leaf(brand, person, date)[position]

    def delete(self, brand: str, person: str, date: str, name: str) -> Optional[AssetRecord]:
        """Remove the stored object (best effort) and then its metadata record."""
        require_fields(brand=brand, person=person, date=date, name=name)

        doc = self.repository.load()
        record = find_asset(doc, brand, person, date, name)
        if record is None:
            return None

        if record.storage_key:
            try:
                self.store.delete(record.storage_key)
                logger.info("Deleted object %s", record.storage_key)
            except StorageFailure as exc:
                logger.error("Object delete failed for %s: %s", record.storage_key, exc)

        self.repository.save(delete_asset(doc, brand, person, date, name))
        return record


class SheetService:
    """Spreadsheet links per brand/person/date."""

    def __init__(self, repository: SheetLinkRepository):
        self.repository = repository

    def add(self, brand: str, person: str, date: str, sheet_id: str, display_name: Optional[str] = None) -> SheetLink:
        require_fields(brand=brand, person=person, date=date, sheet_id=sheet_id)

        updated = upsert(self.repository.load(), brand, person, date, sheet_id, display_name)
        self.repository.save(updated)
        return link_at(updated, brand, person, date)

    def remove(self, brand: str, person: str, date: str) -> None:
        require_fields(brand=brand, person=person, date=date)

        self.repository.save(remove(self.repository.load(), brand, person, date))

    def list(self) -> List[SheetLink]:
        return list_active(self.repository.load())


class PurchaseService:
    """Purchase records and their invoice/product photos."""

    def __init__(self, store: ObjectStore, repository: PurchaseRepository):
        self.store = store
        self.repository = repository

    def _store_photos(self, purchase_ref: str, kind: str, files: Sequence[IncomingFile]) -> List[str]:
        urls: List[str] = []
        for index, incoming in enumerate(files):
            storage_key = purchase_storage_key(purchase_ref, kind, index, incoming.filename)
            self.store.put_bytes(storage_key, incoming.data, content_type=incoming.resolved_content_type)
            urls.append(self.store.public_url(storage_key))
        return urls

    def create(
        self,
        *,
        date: str,
        supplier: str,
        purchase_ids_text: str = "",
        total_text: str = "",
        return_info_text: str = "",
        invoice_files: Sequence[IncomingFile] = (),
        product_files: Sequence[IncomingFile] = (),
        timestamp: Optional[int] = None,
    ) -> PurchaseRecord:
        """Store the photos, then add the purchase record.

        A store failure leaves no record behind; objects written before the
        failure are not removed.
        """
        require_fields(date=date, supplier=supplier)

        doc = self.repository.load()
        purchase_ref = purchase_id(date, supplier, now_millis() if timestamp is None else timestamp)
        record = PurchaseRecord(
            id=purchase_ref,
            date=date.strip(),
            supplier=supplier.strip(),
            purchase_ids_text=purchase_ids_text or "",
            invoice_photo_urls=self._store_photos(purchase_ref, "invoice", invoice_files),
            product_photo_urls=self._store_photos(purchase_ref, "product", product_files),
            total_text=total_text or "",
            return_info_text=return_info_text or "",
        )
        self.repository.save(add_purchase(doc, record))
        logger.info("Created purchase %s", purchase_ref)
        return record

    def delete(self, purchase_ref: str) -> Optional[PurchaseRecord]:
        """Remove a purchase and (best effort) its stored photos."""
        require_fields(purchase_id=purchase_ref)

        doc = self.repository.load()
        record = get_purchase(doc, purchase_ref)
        if record is None:
            return None

        for url in record.invoice_photo_urls + record.product_photo_urls:
            storage_key = storage_key_from_url(self.store.storage_root, url)
            if not storage_key:
                logger.warning(
                    "Cannot map %s to a storage key under %s; object left in place",
                    url,
                    self.store.storage_root,
                )
                continue
            try:
                self.store.delete(storage_key)
            except StorageFailure as exc:
                logger.error("Object delete failed for %s: %s", storage_key, exc)

        self.repository.save(remove_purchase(doc, purchase_ref))
        logger.info("Deleted purchase %s", purchase_ref)
        return record

    def list(self) -> List[PurchaseRecord]:
        return list_purchases(self.repository.load())
