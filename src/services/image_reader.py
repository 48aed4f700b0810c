# src/services/image_reader.py

"""Load a local image file for upload through the product form."""

import logging
import mimetypes
from pathlib import Path

from src.models.image_source import UploadedImage

logger = logging.getLogger("catalog_manager.files")

_FALLBACK_TYPE = "application/octet-stream"


def read_image_file(path: str | Path) -> UploadedImage:
    """Read *path* into an :class:`UploadedImage`.

    The content type is guessed from the file name.  Whether it is an image
    is decided by the form, not here.  ``OSError`` propagates to the caller.
    """
    file_path = Path(path).expanduser()
    data = file_path.read_bytes()
    content_type, _encoding = mimetypes.guess_type(file_path.name)
    upload = UploadedImage(
        filename=file_path.name,
        content_type=content_type or _FALLBACK_TYPE,
        data=data,
    )
    logger.debug(
        "Read %s (%s, %d bytes)",
        file_path,
        upload.content_type,
        len(data),
    )
    return upload
