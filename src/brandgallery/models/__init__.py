"""Pydantic models for API requests."""

from brandgallery.models.requests import (
    DeletePhotoRequest,
    LoginRequest,
    RemoveSheetRequest,
    RenamePhotoRequest,
    SheetLinkRequest,
)

__all__ = [
    "DeletePhotoRequest",
    "LoginRequest",
    "RemoveSheetRequest",
    "RenamePhotoRequest",
    "SheetLinkRequest",
]
