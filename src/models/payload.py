# src/models/payload.py

"""Submission payload shapes accepted by the product API client."""

from dataclasses import dataclass, field

from src.models.image_source import UploadedImage
from src.models.product import Product


@dataclass(frozen=True)
class MultipartPayload:
    """Form-data bundle sent when the image comes from an uploaded file."""

    file: UploadedImage
    fields: dict[str, str] = field(default_factory=dict)


ProductPayload = Product | MultipartPayload
