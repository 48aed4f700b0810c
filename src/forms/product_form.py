# src/forms/product_form.py

"""Product form state: an immutable draft plus a pure reducer.

The UI never mutates a draft directly.  Every keystroke, file pick or
submit attempt becomes an action, and :func:`reduce_form` returns the next
:class:`FormState` together with its error mapping::

    state = FormState.new()
    state, errors = reduce_form(state, EditField("title", "Red Shirt"))
    state, errors = reduce_form(state, Validate())
    if not errors:
        payload = build_payload(state)

Image handling keeps two inputs side by side, the typed URL (``draft.image``)
and an optional :class:`UploadedImage`.  While an upload is attached the URL
field is disabled and ignored; clearing the upload hands authority back to
whatever URL was typed.
"""

import logging
import math
from dataclasses import dataclass, field, replace

from src.filters.product_validator import IMAGE_WRONG_TYPE, ProductValidator
from src.models.image_source import (
    ImageSource,
    UploadedImage,
    resolve_image_source,
)
from src.models.payload import MultipartPayload, ProductPayload
from src.models.product import Product, Rating

logger = logging.getLogger("catalog_manager.forms")

EDITABLE_FIELDS = ("title", "description", "price", "category", "image")

SUBMISSION_FAILED = "Failed to submit form. Please try again."


@dataclass(frozen=True)
class FormState:
    """Snapshot of one form session."""

    draft: Product
    upload: UploadedImage | None = None
    existing_image: str = ""
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def new(cls) -> "FormState":
        """Empty draft for the create flow."""
        return cls(
            draft=Product(title="", price=0.0, rating=Rating(0.0, 0)),
        )

    @classmethod
    def for_product(cls, product: Product) -> "FormState":
        """Draft seeded from a fetched record for the edit flow."""
        return cls(draft=replace(product), existing_image=product.image)

    @property
    def image_source(self) -> ImageSource:
        return resolve_image_source(self.draft.image, self.upload)

    @property
    def url_enabled(self) -> bool:
        return self.upload is None

    @property
    def preview(self) -> str:
        """What the preview pane shows: file, then URL, then the seeded image."""
        if self.upload is not None:
            return self.upload.data_uri
        return self.draft.image or self.existing_image

    @property
    def is_submittable(self) -> bool:
        return not ProductValidator.validate(
            self.draft, self.upload, self.existing_image
        )


# ── Actions ──────────────────────────────────────────────


@dataclass(frozen=True)
class EditField:
    """User typed into (or picked) one of the editable fields."""

    name: str
    value: str


@dataclass(frozen=True)
class AttachFile:
    upload: UploadedImage


@dataclass(frozen=True)
class ClearFile:
    pass


@dataclass(frozen=True)
class Validate:
    """Submit attempt: recompute every error."""


@dataclass(frozen=True)
class SubmissionFailed:
    pass


FormAction = EditField | AttachFile | ClearFile | Validate | SubmissionFailed


def parse_price(value: str) -> float:
    """Parse the price box; anything unparsable or non-finite counts as 0."""
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(price):
        return 0.0
    return price


def _without(errors: dict[str, str], key: str) -> dict[str, str]:
    return {k: v for k, v in errors.items() if k != key}


def _edit_field(state: FormState, action: EditField) -> FormState:
    if action.name not in EDITABLE_FIELDS:
        logger.warning(
            "Ignoring edit of non-editable field %r", action.name
        )
        return state

    if action.name == "image" and not state.url_enabled:
        logger.debug("Image URL edit ignored while a file is attached")
        return state

    if action.name == "price":
        draft = replace(state.draft, price=parse_price(action.value))
    else:
        draft = replace(state.draft, **{action.name: action.value})

    return replace(
        state, draft=draft, errors=_without(state.errors, action.name)
    )


def _attach_file(state: FormState, action: AttachFile) -> FormState:
    if not action.upload.is_image:
        logger.info(
            "Rejected upload %s (%s)",
            action.upload.filename,
            action.upload.content_type,
        )
        return replace(
            state, errors={**state.errors, "image": IMAGE_WRONG_TYPE}
        )

    logger.debug(
        "Attached %s (%d bytes)",
        action.upload.filename,
        len(action.upload.data),
    )
    return replace(
        state,
        upload=action.upload,
        errors=_without(state.errors, "image"),
    )


def reduce_form(
    state: FormState, action: FormAction,
) -> tuple[FormState, dict[str, str]]:
    """Apply *action* to *state* and return the new state and its errors."""
    if isinstance(action, EditField):
        new_state = _edit_field(state, action)
    elif isinstance(action, AttachFile):
        new_state = _attach_file(state, action)
    elif isinstance(action, ClearFile):
        new_state = replace(state, upload=None)
    elif isinstance(action, Validate):
        new_state = replace(
            state,
            errors=ProductValidator.validate(
                state.draft, state.upload, state.existing_image
            ),
        )
    elif isinstance(action, SubmissionFailed):
        new_state = replace(
            state, errors={**state.errors, "form": SUBMISSION_FAILED}
        )
    else:
        raise TypeError(f"Unknown form action: {action!r}")

    return new_state, dict(new_state.errors)


def format_number(value: float) -> str:
    """Stringify a price like a browser would (``10.0`` -> ``"10"``)."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_payload(state: FormState) -> ProductPayload:
    """Turn a valid form state into what the submission sink receives.

    With an upload the result is a multipart bundle of the file and the
    scalar fields (no image URL).  Otherwise it is the draft itself, with
    ``id`` and ``rating`` carried through untouched.
    """
    if state.upload is not None:
        draft = state.draft
        return MultipartPayload(
            file=state.upload,
            fields={
                "title": draft.title,
                "description": draft.description,
                "price": format_number(draft.price),
                "category": draft.category,
            },
        )

    if not state.draft.image and state.existing_image:
        return replace(state.draft, image=state.existing_image)
    return replace(state.draft)
