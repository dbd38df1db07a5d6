"""Image upload endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from notebook.api.dependencies import get_current_user, get_object_storage
from notebook.config import get_settings
from notebook.exceptions import ValidationFailed
from notebook.services.session import Authenticated
from notebook.services.storage import ObjectStorage, object_path, validate_image

router = APIRouter(prefix="/api/v1", tags=["upload"])


@router.post("/upload")
async def upload_image(
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    storage: Annotated[ObjectStorage, Depends(get_object_storage)],
    file: Annotated[UploadFile | None, File()] = None,
):
    """Upload an image (max 5MB) and return its public URL."""
    if file is None:
        raise ValidationFailed("No file provided", field="file")

    max_bytes = get_settings().max_upload_bytes
    try:
        # Read one byte past the limit so oversize files are detected without reading them whole
        content = await file.read(max_bytes + 1)
    finally:
        await file.close()

    validate_image(file.content_type, len(content), max_bytes)

    stored = await storage.put(object_path(current_user.user_id, file.filename), content)
    return {"url": stored.url}
