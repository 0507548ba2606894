"""Inspection commands: gallery tree, sheet links, purchases, config."""

from typing import Optional

import click

from brandgallery.cli.base import CliCommand
from brandgallery.settings import settings
from brandgallery.views import GALLERY_VIEWS, ROLE_ADMIN, ROLE_BOSS, render_view


@click.command(name='tree')
@click.option('--view', 'view_name', type=click.Choice(sorted(GALLERY_VIEWS)), default='admin',
              help='Gallery view to project')
@click.option('--as-boss', is_flag=True, help='Apply the boss brand exclusions')
@click.option('--backend', default=None, help='Override the configured storage backend')
def tree_command(view_name: str, as_boss: bool, backend: Optional[str]):
    """Print the brand/person/date tree for a gallery view."""
    TreeCommand(view_name, as_boss, backend).execute()


class TreeCommand(CliCommand):
    def __init__(self, view_name: str, as_boss: bool, backend: Optional[str] = None):
        super().__init__(backend)
        self.view_name = view_name
        self.role = ROLE_BOSS if as_boss else ROLE_ADMIN

    def run(self):
        view = GALLERY_VIEWS[self.view_name]
        brands = render_view(
            self.photo_service().load(),
            view,
            self.role,
            boss_excluded_brands=settings.boss_excluded_brands,
        )
        if not brands:
            click.echo("(empty)")
        for brand in brands:
            click.echo(brand.brand)
            for person in brand.persons:
                click.echo(f"  {person.person}")
                for date in person.dates:
                    click.echo(f"    {date.date} ({len(date.files)} files)")
                    for item in date.files:
                        click.echo(f"      [{item.category}] {item.name}")
        return brands


@click.command(name='sheets')
@click.option('--backend', default=None, help='Override the configured storage backend')
def sheets_command(backend: Optional[str]):
    """List attached spreadsheet links."""
    SheetsCommand(backend).execute()


class SheetsCommand(CliCommand):
    def run(self):
        links = self.sheet_service().list()
        if not links:
            click.echo("No sheets attached")
        for link in links:
            click.echo(f"{link.brand}/{link.person}/{link.date}: {link.display_name} {link.embed_url}")
        return links


@click.command(name='purchases')
@click.option('--backend', default=None, help='Override the configured storage backend')
def purchases_command(backend: Optional[str]):
    """List purchase records, newest first."""
    PurchasesCommand(backend).execute()


class PurchasesCommand(CliCommand):
    def run(self):
        records = self.purchase_service().list()
        if not records:
            click.echo("No purchases recorded")
        for record in records:
            click.echo(
                f"{record.id}: {record.supplier} on {record.date} "
                f"({len(record.invoice_photo_urls)} invoice, {len(record.product_photo_urls)} product photos)"
            )
        return records


@click.command(name='show-config')
def show_config_command():
    """Show the effective storage and document configuration."""
    click.echo(f"Environment:        {settings.environment}")
    click.echo(f"Storage backend:    {settings.storage_backend}")
    click.echo(f"Bucket:             {settings.storage_bucket_name}")
    click.echo(f"Storage root:       {settings.storage_root}")
    click.echo(f"Photos document:    {settings.photos_document_key}")
    click.echo(f"Sheets document:    {settings.sheets_document_key}")
    click.echo(f"Purchases document: {settings.purchases_document_key}")
    excluded = ", ".join(settings.boss_excluded_brands) or "(none)"
    click.echo(f"Boss excluded:      {excluded}")
