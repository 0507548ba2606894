"""Base command class for shared CLI setup."""

from typing import Optional

import click

from brandgallery.documents import HierarchyRepository, PurchaseRepository, SheetLinkRepository
from brandgallery.errors import StorageFailure
from brandgallery.services import PhotoService, PurchaseService, SheetService
from brandgallery.settings import settings
from brandgallery.storage import ObjectStore, create_object_store


class CliCommand:
    """Base class for all CLI commands with shared storage setup."""

    def __init__(self, backend: Optional[str] = None):
        self.backend = backend
        self.store: Optional[ObjectStore] = None

    def setup_storage(self) -> ObjectStore:
        """Create the object store for the configured (or overridden) backend."""
        try:
            self.store = create_object_store(self.backend, settings=settings)
        except ValueError as exc:
            raise click.ClickException(str(exc))
        return self.store

    def photo_service(self) -> PhotoService:
        if not self.store:
            raise click.ClickException("Storage not initialized")
        return PhotoService(
            self.store,
            HierarchyRepository(self.store, settings.photos_document_key),
            default_brand=settings.default_brand,
            default_person=settings.default_person,
            default_date=settings.default_date,
        )

    def sheet_service(self) -> SheetService:
        if not self.store:
            raise click.ClickException("Storage not initialized")
        return SheetService(SheetLinkRepository(self.store, settings.sheets_document_key))

    def purchase_service(self) -> PurchaseService:
        if not self.store:
            raise click.ClickException("Storage not initialized")
        return PurchaseService(self.store, PurchaseRepository(self.store, settings.purchases_document_key))

    def run(self):
        """Execute command - override in subclasses."""
        raise NotImplementedError

    def execute(self):
        """Set up storage and run, reporting storage failures as CLI errors."""
        self.setup_storage()
        try:
            return self.run()
        except StorageFailure as exc:
            raise click.ClickException(f"Storage failure: {exc}")
