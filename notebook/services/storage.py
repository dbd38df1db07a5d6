"""Image upload validation and blob storage on local disk."""

import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import aiofiles

from notebook.config import get_settings
from notebook.exceptions import InternalFailure, ValidationFailed

logger = logging.getLogger(__name__)

UPLOADS_MOUNT = "/uploads"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredObject:
    """Where a stored object lives."""

    path: str
    url: str


def validate_image(content_type: str | None, size: int, max_bytes: int) -> None:
    """Check an upload before anything is written.

    Raises:
        ValidationFailed: if the content is not an image or is too large.
    """
    if not content_type or not content_type.startswith("image/"):
        raise ValidationFailed("File must be an image", field="file")
    if size > max_bytes:
        raise ValidationFailed(
            f"File too large (max {max_bytes // (1024 * 1024)}MB)",
            field="file",
            context={"max_bytes": max_bytes},
        )


def object_path(owner_id: str, filename: str | None) -> str:
    """Build a collision-free storage path scoped to the uploading user."""
    name = _UNSAFE_CHARS.sub("-", PurePosixPath(filename or "").name).strip("-.") or "image"
    return f"{owner_id}/{uuid.uuid4()}-{name}"


class ObjectStorage:
    """Blob store writing to a directory served under ``/uploads``."""

    def __init__(self, root: str | None = None, public_base_url: str | None = None):
        settings = get_settings()
        self.root = Path(root or settings.storage_root).resolve()
        self.public_base_url = (public_base_url or settings.public_base_url).rstrip("/")

    def url_for(self, path: str) -> str:
        """Public URL of a stored object."""
        return f"{self.public_base_url}{UPLOADS_MOUNT}/{path}"

    async def put(self, path: str, content: bytes) -> StoredObject:
        """Write an object and return its public URL."""
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root):
            raise ValidationFailed("Invalid object path", field="file")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Failed to store {path}: {e}")
            raise InternalFailure(context={"path": path}) from e

        logger.info(f"Stored {path} ({len(content)} bytes)")
        return StoredObject(path=path, url=self.url_for(path))
