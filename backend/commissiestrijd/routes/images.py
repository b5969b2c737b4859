from __future__ import annotations
from fastapi import APIRouter, Depends, Response

from commissiestrijd.auth_deps import require_admin
from commissiestrijd.deps import get_image_store
from commissiestrijd.errors import NotFound
from commissiestrijd.services.storage import ImageStore

router = APIRouter(prefix="/images", tags=["images"])

@router.get("/{filename}")
async def get_image(filename: str, store: ImageStore = Depends(get_image_store), admin=Depends(require_admin)):
    """Stored proof photo; 404 once the retention sweeper removed it."""
    try:
        data, content_type = store.get(filename)
    except FileNotFoundError:
        raise NotFound("Image not found.")
    return Response(content=data, media_type=content_type)
