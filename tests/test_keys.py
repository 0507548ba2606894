"""Test key normalization and storage key derivation."""

import pytest

from brandgallery.keys import (
    composite_key,
    normalize_key,
    photo_file_name,
    photo_storage_key,
    public_url,
    purchase_id,
    purchase_storage_key,
    sanitize_filename,
    split_composite_key,
    storage_key_from_url,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Acme", "Acme"),
        ("  J Smith  ", "J-Smith"),
        ("J   Smith", "J-Smith"),
        ("J\tvan\n Smith", "J-van-Smith"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_key(raw, expected):
    assert normalize_key(raw) == expected


def test_normalize_key_is_idempotent():
    for raw in ["J Smith", "  a  b   c ", "2024 01 01", "already-normal"]:
        once = normalize_key(raw)
        assert normalize_key(once) == once


def test_whitespace_variants_normalize_identically():
    assert normalize_key("J Smith") == normalize_key(" J \t  Smith ")


def test_photo_storage_key_normalizes_path_segments():
    key = photo_storage_key("Acme Corp", "J Smith", "2024 01 01", "1700000000000_a.jpg")
    assert key == "photos/Acme-Corp/J-Smith/2024-01-01/1700000000000_a.jpg"


def test_photo_file_name_uses_basename():
    assert photo_file_name("dir/sub/pic.jpg", timestamp=42) == "42_pic.jpg"
    assert photo_file_name("", timestamp=7) == "7_file"


def test_sanitize_filename_handles_backslashes():
    assert sanitize_filename("C:\\Users\\me\\img.png") == "img.png"


def test_purchase_id_and_storage_key():
    ref = purchase_id("2024-05-01", "Big Supplier", timestamp=123)
    assert ref == "2024-05-01-Big-Supplier-123"
    assert purchase_storage_key(ref, "invoice", 0, "Scan.PDF") == f"purchases/{ref}-invoice-0.pdf"
    assert purchase_storage_key(ref, "product", 2, "noext") == f"purchases/{ref}-product-2"


def test_purchase_storage_key_rejects_unknown_kind():
    with pytest.raises(ValueError):
        purchase_storage_key("x", "receipt", 0, "a.jpg")


def test_composite_key_keeps_raw_values():
    assert composite_key("Acme Corp", "J Smith", "2024 01 01") == "Acme Corp/J Smith/2024 01 01"


def test_split_composite_key():
    assert split_composite_key("a/b/c") == ("a", "b", "c")
    assert split_composite_key("a/b/c/d") == ("a", "b", "c/d")
    assert split_composite_key("a") == ("a", "", "")


def test_public_url_round_trip():
    url = public_url("https://cdn.example.test", "photos/a.jpg")
    assert url == "https://cdn.example.test/photos/a.jpg"
    assert storage_key_from_url("https://cdn.example.test/", url) == "photos/a.jpg"
    assert storage_key_from_url("https://other.example.test/", url) is None
