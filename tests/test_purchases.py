"""Test purchase record bookkeeping."""

from brandgallery.purchases import (
    PurchaseRecord,
    add_purchase,
    get_purchase,
    list_purchases,
    remove_purchase,
)


def _record(ref, date, supplier="Supplier"):
    return PurchaseRecord(id=ref, date=date, supplier=supplier)


def test_add_and_get_round_trip():
    record = PurchaseRecord(
        id="p1",
        date="2024-05-01",
        supplier="Big Supplier",
        purchase_ids_text="PO-1, PO-2",
        invoice_photo_urls=["https://cdn.example.test/purchases/p1-invoice-0.jpg"],
        total_text="$120",
    )

    doc = add_purchase({}, record)

    assert doc["p1"]["purchaseIdsText"] == "PO-1, PO-2"
    assert doc["p1"]["invoicePhotoUrls"] == ["https://cdn.example.test/purchases/p1-invoice-0.jpg"]
    assert get_purchase(doc, "p1") == record
    assert get_purchase(doc, "missing") is None


def test_add_does_not_mutate_input():
    doc = {}
    add_purchase(doc, _record("p1", "2024-01-01"))
    assert doc == {}


def test_remove_unknown_id_is_noop():
    doc = add_purchase({}, _record("p1", "2024-01-01"))
    assert remove_purchase(doc, "nope") == doc
    assert remove_purchase(doc, "p1") == {}


def test_list_sorted_by_date_descending_with_stable_ties():
    doc = {}
    for ref, date in [("a", "2024-01-01"), ("b", "2024-03-01"), ("c", "2024-01-01"), ("d", "2024-02-01")]:
        doc = add_purchase(doc, _record(ref, date))

    assert [record.id for record in list_purchases(doc)] == ["b", "d", "a", "c"]


def test_from_dict_uses_key_when_id_missing():
    doc = {"legacy": {"date": "2023-12-01", "supplier": "Old"}}

    record = list_purchases(doc)[0]

    assert record.id == "legacy"
    assert record.invoice_photo_urls == []
