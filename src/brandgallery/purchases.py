"""Purchase records with invoice and product photos."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

PurchaseDocument = Dict[str, Dict[str, Any]]


@dataclass
class PurchaseRecord:
    id: str
    date: str
    supplier: str
    purchase_ids_text: str = ""
    invoice_photo_urls: List[str] = field(default_factory=list)
    product_photo_urls: List[str] = field(default_factory=list)
    total_text: str = ""
    return_info_text: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, fallback_id: str = "") -> "PurchaseRecord":
        return cls(
            id=str(data.get("id") or fallback_id),
            date=str(data.get("date") or ""),
            supplier=str(data.get("supplier") or ""),
            purchase_ids_text=str(data.get("purchaseIdsText") or ""),
            invoice_photo_urls=[str(url) for url in data.get("invoicePhotoUrls") or []],
            product_photo_urls=[str(url) for url in data.get("productPhotoUrls") or []],
            total_text=str(data.get("totalText") or ""),
            return_info_text=str(data.get("returnInfoText") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "supplier": self.supplier,
            "purchaseIdsText": self.purchase_ids_text,
            "invoicePhotoUrls": list(self.invoice_photo_urls),
            "productPhotoUrls": list(self.product_photo_urls),
            "totalText": self.total_text,
            "returnInfoText": self.return_info_text,
        }


def add_purchase(doc: PurchaseDocument, record: PurchaseRecord) -> PurchaseDocument:
    updated = copy.deepcopy(doc)
    updated[record.id] = record.to_dict()
    return updated


def get_purchase(doc: PurchaseDocument, purchase_ref: str) -> Optional[PurchaseRecord]:
    data = doc.get(purchase_ref)
    if not isinstance(data, dict):
        return None
    return PurchaseRecord.from_dict(data, fallback_id=purchase_ref)


def remove_purchase(doc: PurchaseDocument, purchase_ref: str) -> PurchaseDocument:
    """Drop a purchase by id; unknown ids leave the document unchanged."""
    updated = copy.deepcopy(doc)
    updated.pop(purchase_ref, None)
    return updated


def list_purchases(doc: PurchaseDocument) -> List[PurchaseRecord]:
    """All purchases, newest date first (ties keep document order)."""
    records = [
        PurchaseRecord.from_dict(data, fallback_id=key)
        for key, data in doc.items()
        if isinstance(data, dict)
    ]
    return sorted(records, key=lambda record: record.date, reverse=True)
