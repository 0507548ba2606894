"""Spreadsheet links attached to a brand/person/date.

Links are keyed by the raw ``brand/person/date`` string exactly as entered,
unlike the photo hierarchy which normalizes its keys. A link only counts as
attached while its entry has a ``sheetId``; removing a link strips the link
fields and leaves the entry (and any other data under it) in place.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from brandgallery.keys import composite_key, split_composite_key

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Sales Data"
SHEET_EMBED_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/edit"
LINK_FIELDS = ("sheetId", "displayName", "embedUrl")
_LEGACY_NAME_FIELD = "sheetName"

SheetDocument = Dict[str, Dict[str, Any]]


@dataclass
class SheetLink:
    brand: str
    person: str
    date: str
    sheet_id: str
    display_name: str
    embed_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brand": self.brand,
            "person": self.person,
            "date": self.date,
            "sheetId": self.sheet_id,
            "displayName": self.display_name,
            "embedUrl": self.embed_url,
        }


def embed_url_for(sheet_id: str) -> str:
    return SHEET_EMBED_URL.format(sheet_id=sheet_id)


def upsert(
    doc: SheetDocument,
    brand: str,
    person: str,
    date: str,
    sheet_id: str,
    display_name: Optional[str] = None,
) -> SheetDocument:
    """Attach or replace the link for a raw composite key."""
    updated = copy.deepcopy(doc)
    key = composite_key(brand, person, date)
    entry = updated.get(key)
    if not isinstance(entry, dict):
        entry = updated[key] = {}
    entry.pop(_LEGACY_NAME_FIELD, None)
    entry["sheetId"] = sheet_id
    entry["displayName"] = display_name or DEFAULT_SHEET_NAME
    entry["embedUrl"] = embed_url_for(sheet_id)
    logger.info("Attached sheet %s to %s", sheet_id, key)
    return updated


def remove(doc: SheetDocument, brand: str, person: str, date: str) -> SheetDocument:
    """Strip the link fields for a key; the key itself is kept."""
    updated = copy.deepcopy(doc)
    key = composite_key(brand, person, date)
    entry = updated.get(key)
    if isinstance(entry, dict):
        for field_name in LINK_FIELDS + (_LEGACY_NAME_FIELD,):
            entry.pop(field_name, None)
        logger.info("Removed sheet link for %s", key)
    return updated


def _link_from_entry(brand: str, person: str, date: str, entry: Any) -> Optional[SheetLink]:
    if not isinstance(entry, dict) or not entry.get("sheetId"):
        return None
    sheet_id = str(entry["sheetId"])
    return SheetLink(
        brand=brand,
        person=person,
        date=date,
        sheet_id=sheet_id,
        display_name=entry.get("displayName") or entry.get(_LEGACY_NAME_FIELD) or DEFAULT_SHEET_NAME,
        embed_url=entry.get("embedUrl") or embed_url_for(sheet_id),
    )


def link_at(doc: SheetDocument, brand: str, person: str, date: str) -> Optional[SheetLink]:
    """Return the active link stored under the raw key, keeping the given parts as-is."""
    return _link_from_entry(brand, person, date, doc.get(composite_key(brand, person, date)))


def list_active(doc: SheetDocument) -> List[SheetLink]:
    """Return entries that currently carry a sheet id, in document order.

    Parts are recovered by splitting the key, so a ``/`` inside a brand or
    person shifts into the following part.
    """
    links: List[SheetLink] = []
    for key, entry in doc.items():
        link = _link_from_entry(*split_composite_key(key), entry)
        if link is not None:
            links.append(link)
    return links
