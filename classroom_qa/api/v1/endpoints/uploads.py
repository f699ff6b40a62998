# classroom_qa/api/v1/endpoints/uploads.py
import logging

from fastapi import APIRouter, Depends, File, UploadFile, status

from classroom_qa.core.config import settings
from classroom_qa.core.exceptions import NotFoundError, ValidationError
from classroom_qa.core.security import get_current_user
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.schemas.base import Message
from classroom_qa.schemas.image import UploadedImage, UploadEnvelope
from classroom_qa.services import image_service
from classroom_qa.services.storage import ImageStorage, get_storage, is_bare_filename

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=UploadEnvelope, status_code=status.HTTP_201_CREATED)
def upload_image(
    image: UploadFile | None = File(None),
    storage: ImageStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Store an image; attach it later by passing filename/path in a question or answer body.
    """
    if image is None:
        raise ValidationError("No file was uploaded")

    # one byte past the limit is enough to tell the file is too large
    data = image.file.read(settings.MAX_UPLOAD_BYTES + 1)
    image_service.validate_upload(image.content_type, len(data))

    filename = storage.save(data, image.content_type)
    logger.info(f"User {current_user.id} uploaded {filename}")
    return UploadEnvelope(
        image=UploadedImage(
            filename=filename,
            path=storage.url_for(filename),
            original_name=image.filename,
        )
    )


@router.delete("/{filename}", response_model=Message)
def delete_image(
    filename: str,
    storage: ImageStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    if not is_bare_filename(filename):
        raise ValidationError("Invalid file name")
    if not storage.delete(filename):
        raise NotFoundError("Image not found")
    return Message(message="Image deleted")
