"""Gallery endpoints: one projection of the photo hierarchy per view."""

from fastapi import APIRouter, Depends, HTTPException, status

from brandgallery.auth.dependencies import SessionUser, get_current_user
from brandgallery.dependencies import get_photo_service
from brandgallery.projection import projection_to_dicts
from brandgallery.services import PhotoService
from brandgallery.settings import settings
from brandgallery.views import ROLE_ADMIN, can_open_view, get_gallery_view, render_view

router = APIRouter(prefix="/api/v1/galleries", tags=["galleries"])


@router.get("/{view_name}")
async def get_gallery(
    view_name: str,
    service: PhotoService = Depends(get_photo_service),
    user: SessionUser = Depends(get_current_user),
):
    """Return the brand → person → date tree for a view, empty branches pruned."""
    view = get_gallery_view(view_name)
    if view is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown gallery {view_name}")
    if not can_open_view(view, user.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    brands = render_view(
        service.load(),
        view,
        user.role,
        boss_excluded_brands=settings.boss_excluded_brands,
    )
    return {
        "view": view.name,
        "is_admin": user.role == ROLE_ADMIN,
        "brands": projection_to_dicts(brands),
    }
