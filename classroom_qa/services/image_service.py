# classroom_qa/services/image_service.py
import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy.orm import Session

from classroom_qa.core.config import settings
from classroom_qa.core.exceptions import ValidationError
from classroom_qa.models.image import Image
from classroom_qa.schemas.image import ImageRef
from classroom_qa.services.storage import ImageStorage, is_bare_filename

logger = logging.getLogger(__name__)


def validate_upload(content_type: str | None, size: int) -> None:
    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationError("File type is not allowed")
    if size > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"File is too large (max {settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB)"
        )
    if size == 0:
        raise ValidationError("Uploaded file is empty")


def build_images(db: Session, refs: List[ImageRef], storage: ImageStorage) -> List[Image]:
    """
    Turn uploaded-file references from a request body into unsaved Image rows.

    The stored path is always derived from the filename.
    """
    filenames = [ref.filename for ref in refs]
    for filename in filenames:
        if not is_bare_filename(filename):
            raise ValidationError("Invalid image file name")
    if len(set(filenames)) != len(filenames):
        raise ValidationError("The same image was attached twice")
    for filename in filenames:
        if not storage.exists(filename):
            raise ValidationError("Unknown image")
    if filenames:
        taken = db.query(Image.filename).filter(Image.filename.in_(filenames)).all()
        if taken:
            raise ValidationError("Image is already attached elsewhere")
    return [Image(filename=name, path=storage.url_for(name)) for name in filenames]


def sweep_orphaned_uploads(
    db: Session,
    storage: ImageStorage,
    *,
    max_age: timedelta,
    now: datetime | None = None,
) -> List[str]:
    """
    Delete stored files older than ``max_age`` that no Image row points at.

    Younger files are left alone: they may belong to a form still being filled in.
    """
    now = now or datetime.now(timezone.utc)
    referenced = {name for (name,) in db.query(Image.filename).all()}

    removed = []
    for filename, modified_at in list(storage.iter_files()):
        if filename in referenced or now - modified_at < max_age:
            continue
        if storage.delete(filename):
            removed.append(filename)

    logger.info(f"Upload sweep removed {len(removed)} orphaned file(s)")
    return removed


def delete_detached_uploads(db: Session, storage: ImageStorage, filenames: List[str]) -> List[str]:
    """
    Delete the named files right away, skipping any that an Image row still uses.
    """
    names = [name for name in filenames if is_bare_filename(name)]
    if not names:
        return []
    referenced = {
        name for (name,) in db.query(Image.filename).filter(Image.filename.in_(names)).all()
    }

    removed = []
    for filename in names:
        if filename in referenced:
            continue
        if storage.delete(filename):
            removed.append(filename)

    logger.info(f"Removed {len(removed)} upload(s) of deleted content")
    return removed
