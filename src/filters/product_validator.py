# src/filters/product_validator.py

"""Draft product validation for the create/edit form."""

import logging

from src.models.image_source import UploadedImage
from src.models.product import Product

logger = logging.getLogger("catalog_manager.filters")

TITLE_REQUIRED = "Title is required"
DESCRIPTION_REQUIRED = "Description is required"
PRICE_NOT_POSITIVE = "Price must be greater than 0"
CATEGORY_REQUIRED = "Category is required"
IMAGE_REQUIRED = "Image is required"
IMAGE_WRONG_TYPE = "Please upload an image file"


class ProductValidator:
    """Check a draft against the required-field rules."""

    @staticmethod
    def validate(
        draft: Product,
        upload: UploadedImage | None = None,
        existing_image: str = "",
    ) -> dict[str, str]:
        """Return a field -> message mapping for every rule violated.

        An empty mapping means the draft can be submitted.  Never raises.
        """
        errors: dict[str, str] = {}

        if not draft.title.strip():
            errors["title"] = TITLE_REQUIRED
        if not draft.description.strip():
            errors["description"] = DESCRIPTION_REQUIRED
        if draft.price <= 0:
            errors["price"] = PRICE_NOT_POSITIVE
        if not draft.category:
            errors["category"] = CATEGORY_REQUIRED
        if not draft.image and upload is None and not existing_image:
            errors["image"] = IMAGE_REQUIRED

        if errors:
            logger.debug(
                "Draft id=%d failed validation on %s",
                draft.id,
                ", ".join(sorted(errors)),
            )

        return errors
