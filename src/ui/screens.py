# src/ui/screens.py

"""Detail, delete-confirmation and create/edit form screens."""

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    RadioButton,
    RadioSet,
    Static,
    TextArea,
)

from src.config.settings import Settings
from src.forms.product_form import (
    AttachFile,
    ClearFile,
    EditField,
    FormAction,
    FormState,
    SubmissionFailed,
    Validate,
    format_number,
    reduce_form,
)
from src.models.product import Product, display_category, format_price
from src.services.catalog_service import CatalogService
from src.services.image_reader import read_image_file

logger = logging.getLogger("catalog_manager.ui")

_PREVIEW_CHARS = 72


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Yes/no prompt shown before deleting a product."""

    def __init__(self, title: str) -> None:
        super().__init__()
        self.product_title = title

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label("Are you sure you want to delete this product?"),
            Label(Text(self.product_title, style="bold")),
            Horizontal(
                Button("Delete", variant="error", id="confirm_delete"),
                Button("Cancel", id="cancel_delete"),
            ),
            id="confirm_dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm_delete")


class ProductDetailScreen(Screen[bool]):
    """Single product view with edit and delete.

    Dismisses with ``True`` when the product was edited or deleted so the
    list can reload.
    """

    BINDINGS = [("escape", "back", "Back")]

    def __init__(self, service: CatalogService, product_id: int) -> None:
        super().__init__()
        self.service = service
        self.product_id = product_id
        self.product: Product | None = None
        self.changed = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(
            Static("", id="detail_category"),
            Static("Loading...", id="detail_title"),
            Static("", id="detail_rating"),
            Static("", id="detail_price"),
            Static("", id="detail_description"),
            Static("", id="detail_image"),
            Horizontal(
                Button("Edit", id="edit_btn"),
                Button("Delete", variant="error", id="delete_btn"),
                Button("Back to Products", id="back_btn"),
            ),
            id="detail_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        await self.load()

    async def load(self) -> None:
        """Fetch the product fresh from the API and render it."""
        product = await self.service.get_product_async(self.product_id)
        if product is None:
            self.notify("Product not found", severity="error")
            self.query_one("#detail_title", Static).update(
                "Product not found"
            )
            return
        self.product = product
        self.render_product()

    def render_product(self) -> None:
        product = self.product
        if product is None:
            return
        self.query_one("#detail_category", Static).update(
            display_category(product.category)
        )
        self.query_one("#detail_title", Static).update(
            Text(product.title, style="bold")
        )
        badge = "  🔥 Popular" if product.is_popular else ""
        self.query_one("#detail_rating", Static).update(
            f"⭐ {product.rating.rate} ({product.rating.count} reviews){badge}"
        )
        shipping = "  Free Shipping" if product.free_shipping else ""
        self.query_one("#detail_price", Static).update(
            f"{format_price(product.price)}{shipping}"
        )
        self.query_one("#detail_description", Static).update(
            Text(product.description)
        )
        self.query_one("#detail_image", Static).update(
            Text(f"Image: {product.image}")
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "back_btn":
            self.action_back()
        elif self.product is None:
            self.notify("Product not loaded", severity="warning")
        elif event.button.id == "edit_btn":
            self.app.push_screen(
                ProductFormScreen(
                    self.service,
                    FormState.for_product(self.product),
                    form_title="Edit Product",
                    submit_label="Update Product",
                    success_message="Product updated successfully!",
                    close_on_success=False,
                ),
                self._on_edit_closed,
            )
        elif event.button.id == "delete_btn":
            self.app.push_screen(
                ConfirmDeleteScreen(self.product.title),
                self._on_delete_confirmed,
            )

    def _on_edit_closed(self, product: Product | None) -> None:
        if product is not None:
            self.changed = True
            self.product = product
            self.render_product()

    def _on_delete_confirmed(self, confirmed: bool | None) -> None:
        if confirmed:
            self.run_worker(self.delete_product(), exclusive=True)

    async def delete_product(self) -> None:
        button = self.query_one("#delete_btn", Button)
        button.disabled = True
        try:
            deleted = await self.service.delete_async(self.product_id)
        finally:
            button.disabled = False
        if deleted:
            self.notify("Product deleted successfully!")
            self.dismiss(True)
        else:
            self.notify("Failed to delete product", severity="error")

    def action_back(self) -> None:
        self.dismiss(self.changed)


class ProductFormScreen(Screen[Product | None]):
    """Create/edit form driven entirely by :func:`reduce_form`."""

    BINDINGS = [("escape", "back", "Back")]

    ERROR_FIELDS = ("title", "description", "price", "category", "image", "form")

    def __init__(
        self,
        service: CatalogService,
        state: FormState,
        form_title: str,
        submit_label: str,
        success_message: str = "",
        close_on_success: bool = True,
    ) -> None:
        super().__init__()
        self.service = service
        self.state = state
        self.form_title = form_title
        self.submit_label = submit_label
        self.success_message = success_message
        self.close_on_success = close_on_success
        self.submitting = False
        self.saved: Product | None = None

    def compose(self) -> ComposeResult:
        draft = self.state.draft
        price_text = format_number(draft.price) if draft.price else ""
        yield Header()
        yield VerticalScroll(
            Static(Text(self.form_title, style="bold"), id="form_title"),
            Static("", id="error_form", classes="error"),
            Label("Product Image *"),
            Static("", id="image_preview"),
            Input(
                value=draft.image,
                placeholder="https://example.com/image.jpg",
                id="image_url",
            ),
            Horizontal(
                Input(placeholder="Or upload image: /path/to/file.png", id="image_file"),
                Button("Attach", id="attach_btn"),
                Button("Clear file", id="clear_file_btn"),
            ),
            Static("", id="error_image", classes="error"),
            Label("Product Title *"),
            Input(value=draft.title, placeholder="Enter product title", id="title"),
            Static("", id="error_title", classes="error"),
            Label("Description *"),
            TextArea(draft.description, id="description"),
            Static("", id="error_description", classes="error"),
            Label("Price *"),
            Input(value=price_text, placeholder="0.00", type="number", id="price"),
            Static("", id="error_price", classes="error"),
            Label("Category *"),
            RadioSet(
                *[
                    RadioButton(
                        display_category(category),
                        value=category == draft.category,
                    )
                    for category in Settings.CATEGORIES
                ],
                id="category",
            ),
            Static("", id="error_category", classes="error"),
            Horizontal(
                Button(self.submit_label, variant="primary", id="submit_btn"),
                Button("Back to Products", id="form_back_btn"),
            ),
            id="form_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.render_state()

    # ── State plumbing ───────────────────────────────────

    def dispatch(self, action: FormAction) -> dict[str, str]:
        """Run *action* through the reducer and redraw."""
        self.state, errors = reduce_form(self.state, action)
        self.render_state()
        return errors

    def render_state(self) -> None:
        """Sync error labels, URL lock and preview with the form state."""
        for name in self.ERROR_FIELDS:
            self.query_one(f"#error_{name}", Static).update(
                self.state.errors.get(name, "")
            )

        self.query_one("#image_url", Input).disabled = not self.state.url_enabled

        preview = self.query_one("#image_preview", Static)
        if self.state.upload is not None:
            upload = self.state.upload
            preview.update(
                Text(
                    f"Selected: {upload.filename} "
                    f"({upload.content_type}, {len(upload.data)} bytes)\n"
                    f"{self.state.preview[:_PREVIEW_CHARS]}…"
                )
            )
        elif self.state.preview:
            preview.update(Text(f"Preview: {self.state.preview}"))
        else:
            preview.update("No image selected")

    # ── Events ───────────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        field_name = {"title": "title", "price": "price", "image_url": "image"}.get(
            event.input.id or ""
        )
        if field_name is not None:
            self.dispatch(EditField(field_name, event.value))

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.dispatch(EditField("description", event.text_area.text))

    def on_radio_set_changed(self, event: RadioSet.Changed) -> None:
        event.stop()
        self.dispatch(
            EditField("category", Settings.CATEGORIES[event.index])
        )

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id
        if button_id == "attach_btn":
            self.attach_file(self.query_one("#image_file", Input).value.strip())
        elif button_id == "clear_file_btn":
            self.query_one("#image_file", Input).value = ""
            self.dispatch(ClearFile())
        elif button_id == "submit_btn":
            await self.submit()
        elif button_id == "form_back_btn":
            self.action_back()

    def attach_file(self, path: str) -> None:
        """Read *path* from disk and hand it to the reducer."""
        if not path:
            self.notify("Enter a file path first", severity="warning")
            return
        try:
            upload = read_image_file(path)
        except OSError as exc:
            logger.warning("Could not read %s: %s", path, exc)
            self.notify(f"Could not read file: {exc}", severity="error")
            return
        self.dispatch(AttachFile(upload))

    async def submit(self) -> None:
        """Validate, then send the payload through the catalog service."""
        if self.submitting:
            return
        errors = self.dispatch(Validate())
        if errors:
            return

        button = self.query_one("#submit_btn", Button)
        self.submitting = True
        button.disabled = True
        button.label = "Processing..."
        try:
            result = await self.service.submit_async(self.state)
        except Exception:
            logger.error("Form submission error", exc_info=True)
            result = None
        finally:
            self.submitting = False
            button.disabled = False
            button.label = self.submit_label

        if result is None:
            self.dispatch(SubmissionFailed())
            return

        self.saved = result
        if self.success_message:
            self.notify(self.success_message)
        if self.close_on_success:
            self.dismiss(result)

    def action_back(self) -> None:
        self.dismiss(self.saved)
