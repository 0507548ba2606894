"""Gallery view catalogue and role scoping.

Authorization (which role may open a view) and projection (which records a
view shows) are kept apart: ``GALLERY_VIEWS`` maps a view name to its record
predicate and allowed roles, and ``excluded_brands_for_role`` adds role-specific
brand exclusions on top.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from brandgallery.hierarchy import CATEGORY_OTHER, CATEGORY_OTHER2, CATEGORY_SALES, PhotoHierarchy
from brandgallery.projection import (
    AssetPredicate,
    BrandView,
    category_is,
    is_main,
    no_filter,
    project,
)

ROLE_ADMIN = "admin"
ROLE_BOSS = "boss"
VALID_ROLES = {ROLE_ADMIN, ROLE_BOSS}


@dataclass(frozen=True)
class GalleryView:
    name: str
    predicate: AssetPredicate
    roles: FrozenSet[str]


GALLERY_VIEWS = {
    "admin": GalleryView("admin", no_filter, frozenset({ROLE_ADMIN})),
    "main": GalleryView("main", is_main, frozenset({ROLE_ADMIN, ROLE_BOSS})),
    "other": GalleryView("other", category_is(CATEGORY_OTHER), frozenset({ROLE_ADMIN, ROLE_BOSS})),
    "other2": GalleryView("other2", category_is(CATEGORY_OTHER2), frozenset({ROLE_ADMIN, ROLE_BOSS})),
    "sales": GalleryView("sales", category_is(CATEGORY_SALES), frozenset({ROLE_ADMIN, ROLE_BOSS})),
}


def get_gallery_view(name: str) -> Optional[GalleryView]:
    return GALLERY_VIEWS.get(str(name or "").strip().lower())


def can_open_view(view: GalleryView, role: Optional[str]) -> bool:
    return bool(role) and role in view.roles


def excluded_brands_for_role(role: str, boss_excluded_brands: Sequence[str]) -> List[str]:
    if role == ROLE_BOSS:
        return list(boss_excluded_brands)
    return []


def render_view(
    doc: PhotoHierarchy,
    view: GalleryView,
    role: str,
    *,
    boss_excluded_brands: Sequence[str] = (),
) -> List[BrandView]:
    """Project ``doc`` through ``view`` with the exclusions that apply to ``role``."""
    return project(
        doc,
        view.predicate,
        excluded_brands=excluded_brands_for_role(role, boss_excluded_brands),
    )
