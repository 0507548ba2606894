"""Purchase record endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from brandgallery.auth.dependencies import SessionUser, require_role
from brandgallery.dependencies import get_purchase_service
from brandgallery.routers.photos import read_uploads
from brandgallery.services import PurchaseService
from brandgallery.views import ROLE_ADMIN, ROLE_BOSS

router = APIRouter(prefix="/api/v1/purchases", tags=["purchases"])


@router.get("")
async def list_purchases(
    service: PurchaseService = Depends(get_purchase_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN, ROLE_BOSS)),
):
    return {"purchases": [record.to_dict() for record in service.list()]}


@router.post("")
async def create_purchase(
    date: Optional[str] = Form(None),
    supplier: Optional[str] = Form(None),
    purchase_ids_text: str = Form("", alias="purchaseIdsText"),
    total_text: str = Form("", alias="totalText"),
    return_info_text: str = Form("", alias="returnInfoText"),
    invoice_photos: List[UploadFile] = File(default=[], alias="invoicePhotos"),
    product_photos: List[UploadFile] = File(default=[], alias="productPhotos"),
    service: PurchaseService = Depends(get_purchase_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN)),
):
    """Create a purchase record, storing its invoice and product photos."""
    record = service.create(
        date=date,
        supplier=supplier,
        purchase_ids_text=purchase_ids_text,
        total_text=total_text,
        return_info_text=return_info_text,
        invoice_files=await read_uploads(invoice_photos),
        product_files=await read_uploads(product_photos),
    )
    return record.to_dict()


@router.post("/{purchase_id}/delete")
async def delete_purchase(
    purchase_id: str,
    service: PurchaseService = Depends(get_purchase_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN)),
):
    record = service.delete(purchase_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Purchase {purchase_id} not found")
    return {"status": "deleted", "id": purchase_id}
