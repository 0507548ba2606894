"""Pydantic request models for API endpoints.

Fields are optional at the schema level; services reject blank required
fields with a 400 before any document is loaded.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request model for the login endpoint."""
    username: str = ""
    password: str = ""


class RenamePhotoRequest(BaseModel):
    brand: Optional[str] = None
    person: Optional[str] = None
    date: Optional[str] = None
    old_filename: Optional[str] = Field(default=None, alias="oldfilename")
    new_filename: Optional[str] = Field(default=None, alias="newfilename")

    model_config = {"populate_by_name": True}


class DeletePhotoRequest(BaseModel):
    brand: Optional[str] = None
    person: Optional[str] = None
    date: Optional[str] = None
    filename: Optional[str] = None


class SheetLinkRequest(BaseModel):
    brand: Optional[str] = None
    person: Optional[str] = None
    date: Optional[str] = None
    sheet_id: Optional[str] = Field(default=None, alias="sheetId")
    display_name: Optional[str] = Field(default=None, alias="displayName")

    model_config = {"populate_by_name": True}


class RemoveSheetRequest(BaseModel):
    brand: Optional[str] = None
    person: Optional[str] = None
    date: Optional[str] = None
