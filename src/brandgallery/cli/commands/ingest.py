"""Image ingestion command."""

from pathlib import Path
from typing import List, Optional

import click

from brandgallery.cli.base import CliCommand
from brandgallery.hierarchy import KNOWN_CATEGORIES
from brandgallery.services import IncomingFile

SUPPORTED_FORMATS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic")


@click.command(name='ingest')
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
@click.option('--brand', default=None, help='Brand name')
@click.option('--person', default=None, help='Person name')
@click.option('--date', 'date_value', default=None, help='Date label (e.g. 2024-01-01)')
@click.option('--category', type=click.Choice(KNOWN_CATEGORIES), default='main', help='Gallery category')
@click.option('--recursive/--no-recursive', default=False, help='Process subdirectories')
@click.option('--backend', default=None, help='Override the configured storage backend')
def ingest_command(directory: str, brand: Optional[str], person: Optional[str], date_value: Optional[str],
                   category: str, recursive: bool, backend: Optional[str]):
    """Upload images from a local directory under one brand/person/date."""
    cmd = IngestCommand(directory, brand, person, date_value, category, recursive, backend)
    cmd.execute()


class IngestCommand(CliCommand):
    """Command to ingest images from a local directory."""

    def __init__(self, directory: str, brand: Optional[str], person: Optional[str], date: Optional[str],
                 category: str, recursive: bool, backend: Optional[str] = None):
        super().__init__(backend)
        self.directory = directory
        self.brand = brand
        self.person = person
        self.date = date
        self.category = category
        self.recursive = recursive

    def find_images(self) -> List[Path]:
        dir_path = Path(self.directory)
        pattern = '**/*' if self.recursive else '*'
        return sorted(
            path for path in dir_path.glob(pattern)
            if path.is_file() and path.suffix.lower() in SUPPORTED_FORMATS
        )

    def run(self):
        """Execute ingest command."""
        image_files = self.find_images()
        click.echo(f"Found {len(image_files)} images in {self.directory}")
        if not image_files:
            click.echo("No images found!")
            return []

        incoming = [IncomingFile(filename=path.name, data=path.read_bytes()) for path in image_files]
        records = self.photo_service().upload(self.brand, self.person, self.date, incoming, category=self.category)
        for record in records:
            click.echo(f"  {record.name} -> {record.storage_key}")
        click.echo(f"\n✓ Uploaded {len(records)} images")
        return records
