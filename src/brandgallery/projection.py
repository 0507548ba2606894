"""Read-only, filtered projections of the photo hierarchy.

A projection walks brand → person → date in document order, keeps the asset
records accepted by a predicate, and prunes every date, person and brand left
empty by the filter. One hierarchy document therefore serves every gallery
view; only the predicate changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List

from brandgallery.hierarchy import (
    CATEGORY_MAIN,
    AssetRecord,
    PhotoHierarchy,
)
from brandgallery.keys import normalize_key

AssetPredicate = Callable[[AssetRecord], bool]


def no_filter(record: AssetRecord) -> bool:
    return True


def is_main(record: AssetRecord) -> bool:
    """Main gallery: explicit ``main`` or no category at all."""
    return not record.category or record.category == CATEGORY_MAIN


def category_is(category: str) -> AssetPredicate:
    def predicate(record: AssetRecord) -> bool:
        return record.category == category

    predicate.__name__ = f"category_is_{category}"
    return predicate


def all_of(*predicates: AssetPredicate) -> AssetPredicate:
    """Compose predicates; a record must satisfy every one of them."""

    def predicate(record: AssetRecord) -> bool:
        return all(check(record) for check in predicates)

    return predicate


@dataclass
class FileView:
    name: str
    src: str
    storage_key: str
    category: str

    @classmethod
    def from_record(cls, record: AssetRecord) -> "FileView":
        return cls(
            name=record.name,
            src=record.url,
            storage_key=record.storage_key,
            category=record.effective_category,
        )


@dataclass
class DateView:
    date: str
    files: List[FileView] = field(default_factory=list)


@dataclass
class PersonView:
    person: str
    dates: List[DateView] = field(default_factory=list)


@dataclass
class BrandView:
    brand: str
    persons: List[PersonView] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brand": self.brand,
            "persons": [
                {
                    "person": person.person,
                    "dates": [
                        {
                            "date": date.date,
                            "files": [
                                {
                                    "name": item.name,
                                    "src": item.src,
                                    "storageKey": item.storage_key,
                                    "category": item.category,
                                }
                                for item in date.files
                            ],
                        }
                        for date in person.dates
                    ],
                }
                for person in self.persons
            ],
        }


def project(
    doc: PhotoHierarchy,
    predicate: AssetPredicate = no_filter,
    excluded_brands: Iterable[str] = (),
) -> List[BrandView]:
    """Build a pruned view of ``doc``; the document itself is not modified."""
    excluded = {normalize_key(brand) for brand in excluded_brands}
    brands: List[BrandView] = []
    for brand_node in doc.brands.values():
        if normalize_key(brand_node.name) in excluded:
            continue
        persons: List[PersonView] = []
        for person_node in brand_node.persons.values():
            dates: List[DateView] = []
            for date_node in person_node.dates.values():
                files = [FileView.from_record(record) for record in date_node.assets if predicate(record)]
                if files:
                    dates.append(DateView(date=date_node.name, files=files))
            if dates:
                persons.append(PersonView(person=person_node.name, dates=dates))
        if persons:
            brands.append(BrandView(brand=brand_node.name, persons=persons))
    return brands


def projection_to_dicts(views: List[BrandView]) -> List[Dict[str, Any]]:
    return [view.to_dict() for view in views]
