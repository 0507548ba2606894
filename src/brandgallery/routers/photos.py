"""Photo upload, rename and delete endpoints (admin only)."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from brandgallery.auth.dependencies import SessionUser, require_role
from brandgallery.dependencies import get_photo_service
from brandgallery.models.requests import DeletePhotoRequest, RenamePhotoRequest
from brandgallery.services import IncomingFile, PhotoService
from brandgallery.settings import settings
from brandgallery.views import ROLE_ADMIN

router = APIRouter(prefix="/api/v1/photos", tags=["photos"])


async def read_uploads(files: List[UploadFile]) -> List[IncomingFile]:
    """Read uploaded files into memory, enforcing the per-file size limit."""
    incoming: List[IncomingFile] = []
    for upload in files:
        data = await upload.read()
        if len(data) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"{upload.filename} exceeds upload limit ({settings.max_upload_bytes // (1024 * 1024)} MB).",
            )
        incoming.append(IncomingFile(filename=upload.filename or "", data=data, content_type=upload.content_type))
    return incoming


@router.post("/upload")
async def upload_photos(
    files: List[UploadFile] = File(...),
    brand: Optional[str] = Form(None),
    person: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    service: PhotoService = Depends(get_photo_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN)),
):
    """Store images and record them under brand/person/date."""
    incoming = await read_uploads(files)
    records = service.upload(brand, person, date, incoming, category=category)
    return {
        "uploaded": len(records),
        "files": [record.to_dict() for record in records],
    }


@router.post("/rename")
async def rename_photo(
    body: RenamePhotoRequest,
    service: PhotoService = Depends(get_photo_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN)),
):
    record = service.rename(body.brand, body.person, body.date, body.old_filename, body.new_filename)
    if record is None:
        return {"status": "unchanged"}
    return {"status": "renamed", "file": record.to_dict()}


@router.post("/delete")
async def delete_photo(
    body: DeletePhotoRequest,
    service: PhotoService = Depends(get_photo_service),
    _user: SessionUser = Depends(require_role(ROLE_ADMIN)),
):
    record = service.delete(body.brand, body.person, body.date, body.filename)
    if record is None:
        return {"status": "unchanged"}
    return {"status": "deleted", "file": record.to_dict()}
