# classroom_qa/services/storage.py
"""
Local-disk storage for uploaded images.

Files are saved under a random name so two uploads never collide; the
public URL is ``<url_prefix>/<filename>``, served by the static mount in
``classroom_qa.main``.
"""
import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from classroom_qa.core.config import settings
from classroom_qa.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def is_bare_filename(filename: str) -> bool:
    return bool(filename) and Path(filename).name == filename and filename not in (".", "..")


class ImageStorage:
    def __init__(self, root: str | os.PathLike, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def url_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def _path(self, filename: str) -> Path:
        if not is_bare_filename(filename):
            raise ValidationError("Invalid file name")
        return self.root / filename

    def exists(self, filename: str) -> bool:
        return self._path(filename).is_file()

    def save(self, data: bytes, content_type: str) -> str:
        """
        Store ``data`` under a new name whose suffix follows ``content_type``.
        """
        ext = settings.IMAGE_EXTENSIONS.get(content_type, "")
        filename = f"{uuid.uuid4().hex}{ext}"
        self._path(filename).write_bytes(data)
        logger.info(f"Stored upload {filename} ({len(data)} bytes)")
        return filename

    def delete(self, filename: str) -> bool:
        path = self._path(filename)
        if not path.is_file():
            return False
        path.unlink()
        logger.info(f"Deleted upload {filename}")
        return True

    def iter_files(self) -> Iterator[tuple[str, datetime]]:
        """Yield ``(filename, modified_at)`` for every stored file."""
        for entry in self.root.iterdir():
            if entry.is_file():
                mtime = datetime.fromtimestamp(entry.stat().st_mtime, tz=timezone.utc)
                yield entry.name, mtime


_storage: ImageStorage | None = None


def get_storage() -> ImageStorage:
    global _storage
    if _storage is None:
        _storage = ImageStorage(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX)
    return _storage
