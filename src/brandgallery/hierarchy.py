"""Typed Brand → Person → Date → asset tree and its pure mutations.

The persisted form is a plain nested mapping::

    {brand: {person: {date: [{name, url, storageKey, category}, ...]}}}

``PhotoHierarchy.from_document`` / ``to_document`` convert between that shape
and the typed tree. ``insert_asset``, ``rename_asset`` and ``delete_asset``
never modify their input; they return a new tree, so a document loaded for a
request stays unchanged until the caller saves the returned value.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from brandgallery.keys import file_extension, has_extension_marker, normalize_key

logger = logging.getLogger(__name__)

CATEGORY_MAIN = "main"
CATEGORY_OTHER = "other"
CATEGORY_OTHER2 = "other2"
CATEGORY_SALES = "sales"
KNOWN_CATEGORIES = (CATEGORY_MAIN, CATEGORY_OTHER, CATEGORY_OTHER2, CATEGORY_SALES)

# Field names written by earlier revisions of the portal.
_LEGACY_STORAGE_KEY = "s3Key"
_LEGACY_CATEGORY = "galleryType"
_RECORD_FIELDS = {"name", "url", "storageKey", "category", _LEGACY_STORAGE_KEY, _LEGACY_CATEGORY}


def normalize_category(raw_value: Optional[str], *, default: str = CATEGORY_MAIN) -> str:
    """Coerce an upload category to a known value; unknown input falls back to default."""
    value = str(raw_value or "").strip().lower()
    if value in KNOWN_CATEGORIES:
        return value
    return default


@dataclass
class AssetRecord:
    """Metadata for one stored asset."""

    name: str
    url: str = ""
    storage_key: str = ""
    category: Optional[str] = None  # None for records created before category tagging
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def effective_category(self) -> str:
        return self.category or CATEGORY_MAIN

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetRecord":
        storage_key = data.get("storageKey") or data.get(_LEGACY_STORAGE_KEY) or ""
        category = data.get("category") or data.get(_LEGACY_CATEGORY) or None
        return cls(
            name=str(data.get("name") or ""),
            url=str(data.get("url") or ""),
            storage_key=str(storage_key),
            category=category,
            extra={k: v for k, v in data.items() if k not in _RECORD_FIELDS},
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.extra)
        payload["name"] = self.name
        payload["url"] = self.url
        payload["storageKey"] = self.storage_key
        if self.category is not None:
            payload["category"] = self.category
        return payload


@dataclass
class DateNode:
    name: str
    assets: List[AssetRecord] = field(default_factory=list)


@dataclass
class PersonNode:
    name: str
    dates: Dict[str, DateNode] = field(default_factory=dict)

    def ensure_date(self, key: str) -> DateNode:
        node = self.dates.get(key)
        if node is None:
            node = self.dates[key] = DateNode(name=key)
        return node


@dataclass
class BrandNode:
    name: str
    persons: Dict[str, PersonNode] = field(default_factory=dict)

    def ensure_person(self, key: str) -> PersonNode:
        node = self.persons.get(key)
        if node is None:
            node = self.persons[key] = PersonNode(name=key)
        return node


@dataclass
class PhotoHierarchy:
    """Root of the photo metadata document."""

    brands: Dict[str, BrandNode] = field(default_factory=dict)

    @classmethod
    def from_document(cls, data: Optional[Dict[str, Any]]) -> "PhotoHierarchy":
        hierarchy = cls()
        for brand_name, persons in (data or {}).items():
            brand = hierarchy.brands[brand_name] = BrandNode(name=brand_name)
            for person_name, dates in (persons or {}).items():
                person = brand.persons[person_name] = PersonNode(name=person_name)
                for date_name, records in (dates or {}).items():
                    person.dates[date_name] = DateNode(
                        name=date_name,
                        assets=[AssetRecord.from_dict(item) for item in (records or []) if isinstance(item, dict)],
                    )
        return hierarchy

    def to_document(self) -> Dict[str, Any]:
        return {
            brand.name: {
                person.name: {
                    date.name: [record.to_dict() for record in date.assets]
                    for date in person.dates.values()
                }
                for person in brand.persons.values()
            }
            for brand in self.brands.values()
        }

    def copy(self) -> "PhotoHierarchy":
        return copy.deepcopy(self)

    def ensure_brand(self, key: str) -> BrandNode:
        node = self.brands.get(key)
        if node is None:
            node = self.brands[key] = BrandNode(name=key)
        return node

    def get_leaf(self, brand: str, person: str, date: str) -> Optional[List[AssetRecord]]:
        """Return the asset list at a normalized path, or None when any level is missing."""
        brand_node = self.brands.get(normalize_key(brand))
        if brand_node is None:
            return None
        person_node = brand_node.persons.get(normalize_key(person))
        if person_node is None:
            return None
        date_node = person_node.dates.get(normalize_key(date))
        if date_node is None:
            return None
        return date_node.assets

    def iter_assets(self) -> Iterator[Tuple[str, str, str, AssetRecord]]:
        for brand in self.brands.values():
            for person in brand.persons.values():
                for date in person.dates.values():
                    for record in date.assets:
                        yield brand.name, person.name, date.name, record

    def count_assets(self) -> int:
        return sum(1 for _ in self.iter_assets())


def insert_asset(
    doc: PhotoHierarchy,
    brand_raw: str,
    person_raw: str,
    date_raw: str,
    record: AssetRecord,
) -> PhotoHierarchy:
    """Append a record under the normalized path, creating missing levels."""
    updated = doc.copy()
    leaf = (
        updated.ensure_brand(normalize_key(brand_raw))
        .ensure_person(normalize_key(person_raw))
        .ensure_date(normalize_key(date_raw))
    )
    leaf.assets.append(copy.deepcopy(record))
    return updated


def find_asset(doc: PhotoHierarchy, brand: str, person: str, date: str, name: str) -> Optional[AssetRecord]:
    """Return the first record named ``name`` at the path, if any."""
    leaf = doc.get_leaf(brand, person, date)
    if not leaf:
        return None
    for record in leaf:
        if record.name == name:
            return record
    return None


def renamed_display_name(current_name: str, new_name: str) -> str:
    """Keep the current suffix when the new name carries none."""
    if has_extension_marker(new_name):
        return new_name
    return f"{new_name}{file_extension(current_name)}"


def rename_asset(
    doc: PhotoHierarchy,
    brand: str,
    person: str,
    date: str,
    old_name: str,
    new_name: str,
) -> PhotoHierarchy:
    """Rename the first record named ``old_name``; missing targets are a no-op."""
    updated = doc.copy()
    record = find_asset(updated, brand, person, date, old_name)
    if record is None:
        return updated
    record.name = renamed_display_name(record.name, new_name)
    logger.info("Renamed asset %s -> %s", old_name, record.name)
    return updated


def delete_asset(doc: PhotoHierarchy, brand: str, person: str, date: str, name: str) -> PhotoHierarchy:
    """Remove the first record named ``name``; missing targets are a no-op.

    Only metadata is touched. Removing the stored object is up to the caller.
    """
    updated = doc.copy()
    leaf = updated.get_leaf(brand, person, date)
    if not leaf:
        return updated
    for index, record in enumerate(leaf):
        if record.name == name:
            del leaf[index]
            logger.info("Deleted asset metadata %s", name)
            break
    return updated
