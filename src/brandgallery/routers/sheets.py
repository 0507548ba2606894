"""Spreadsheet link endpoints."""

from fastapi import APIRouter, Depends

from brandgallery.auth.dependencies import SessionUser, require_role
from brandgallery.dependencies import get_sheet_service
from brandgallery.models.requests import RemoveSheetRequest, SheetLinkRequest
from brandgallery.services import SheetService
from brandgallery.views import ROLE_ADMIN, ROLE_BOSS

router = APIRouter(prefix="/api/v1/sheets", tags=["sheets"])


@router.get("")
async def list_sheets(
    service: SheetService = Depends(get_sheet_service),
    user: SessionUser = Depends(require_role(ROLE_ADMIN, ROLE_BOSS)),
):
    """List entries with an attached sheet."""
    return {
        "is_admin": user.role == ROLE_ADMIN,
        "sheets": [link.to_dict() for link in service.list()],
    }


@router.post("")
async def add_sheet(
    body: SheetLinkRequest,
    service: SheetService = Depends(get_sheet_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN)),
):
    link = service.add(body.brand, body.person, body.date, body.sheet_id, body.display_name)
    return link.to_dict()


@router.post("/remove")
async def remove_sheet(
    body: RemoveSheetRequest,
    service: SheetService = Depends(get_sheet_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN)),
):
    service.remove(body.brand, body.person, body.date)
    return {"status": "removed"}
