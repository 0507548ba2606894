"""Key normalization and storage key derivation.

Every hierarchy level (brand, person, date) is addressed by a normalized key:
surrounding whitespace is trimmed and each internal whitespace run becomes a
single ``-``. The same raw input always yields the same key, and normalizing
a key twice is a no-op, so lookups on the read path match the keys written on
the write path.
"""

from __future__ import annotations

import posixpath
import re
import time
from typing import Optional

KEY_SEPARATOR = "-"
PHOTOS_PREFIX = "photos"
PURCHASES_PREFIX = "purchases"
PURCHASE_ASSET_KINDS = {"invoice", "product"}

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_key(raw_value: Optional[str]) -> str:
    """Normalize one hierarchy key (brand, person or date)."""
    value = str(raw_value or "").strip()
    return _WHITESPACE_RUN.sub(KEY_SEPARATOR, value)


def now_millis() -> int:
    return int(time.time() * 1000)


def sanitize_filename(filename: Optional[str], fallback: str = "file") -> str:
    """Keep only the basename segment for object-key safety."""
    safe_name = str(filename or "").strip().replace("\\", "/").split("/")[-1]
    return safe_name or fallback


def file_extension(filename: Optional[str]) -> str:
    """Return the extension including the dot, or an empty string."""
    _, ext = posixpath.splitext(str(filename or ""))
    return ext


def has_extension_marker(filename: Optional[str]) -> bool:
    """A display name containing a dot is treated as carrying its own suffix."""
    return "." in str(filename or "")


def composite_key(brand: str, person: str, date: str) -> str:
    """Build the ``brand/person/date`` key used by sheet links.

    Values are used as given; no normalization is applied.
    """
    return f"{brand}/{person}/{date}"


def split_composite_key(key: str) -> tuple[str, str, str]:
    """Split a composite key back into (brand, person, date).

    Anything after the second separator belongs to the date part; missing
    parts come back as empty strings.
    """
    parts = str(key or "").split("/", 2)
    while len(parts) < 3:
        parts.append("")
    return parts[0], parts[1], parts[2]


def photo_file_name(original_name: Optional[str], timestamp: Optional[int] = None) -> str:
    """Build the stored display name ``{timestamp}_{originalName}``."""
    stamp = now_millis() if timestamp is None else int(timestamp)
    return f"{stamp}_{sanitize_filename(original_name)}"


def photo_storage_key(brand: str, person: str, date: str, file_name: str) -> str:
    """Build the object key for a hierarchy asset.

    Format:
    photos/{brand}/{person}/{date}/{timestamp}_{originalName}
    """
    return "/".join(
        [PHOTOS_PREFIX, normalize_key(brand), normalize_key(person), normalize_key(date), file_name]
    )


def purchase_id(date: str, supplier: str, timestamp: Optional[int] = None) -> str:
    """Build the synthetic purchase id ``{date}-{supplier}-{timestamp}``."""
    stamp = now_millis() if timestamp is None else int(timestamp)
    return f"{normalize_key(date)}-{normalize_key(supplier)}-{stamp}"


def purchase_storage_key(purchase_ref: str, kind: str, index: int, original_name: Optional[str]) -> str:
    """Build the object key for a purchase photo.

    Format:
    purchases/{purchaseId}-{kind}-{index}{ext}
    """
    if kind not in PURCHASE_ASSET_KINDS:
        raise ValueError(f"Unsupported purchase asset kind: {kind}")
    ext = file_extension(sanitize_filename(original_name)).lower()
    return f"{PURCHASES_PREFIX}/{purchase_ref}-{kind}-{int(index)}{ext}"


def public_url(storage_root: str, storage_key: str) -> str:
    """Join the storage root and a storage key into a public URL."""
    root = str(storage_root or "")
    if root and not root.endswith("/"):
        root += "/"
    return f"{root}{storage_key.lstrip('/')}"


def storage_key_from_url(storage_root: str, url: str) -> Optional[str]:
    """Recover the storage key from a public URL built by ``public_url``."""
    root = str(storage_root or "")
    if root and not root.endswith("/"):
        root += "/"
    value = str(url or "")
    if not root or not value.startswith(root):
        return None
    return value[len(root):] or None
