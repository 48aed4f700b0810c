# src/models/image_source.py

"""Image inputs for the product form: typed URL versus uploaded file."""

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedImage:
    """A locally selected file, held in memory until submission."""

    filename: str
    content_type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def data_uri(self) -> str:
        """Inline preview of the file as a ``data:`` URI."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


@dataclass(frozen=True)
class UrlImage:
    """Image referenced by a typed URL."""

    url: str


@dataclass(frozen=True)
class UploadImage:
    """Image supplied as an uploaded file; always beats a URL."""

    upload: UploadedImage


ImageSource = UrlImage | UploadImage | None


def resolve_image_source(
    url: str, upload: UploadedImage | None,
) -> ImageSource:
    """Pick the authoritative image source.

    An upload wins over a URL; an empty URL counts as absent.
    """
    if upload is not None:
        return UploadImage(upload)
    if url:
        return UrlImage(url)
    return None
