# src/ui/app.py

"""Terminal UI for browsing and editing the product catalog."""

import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from src.forms.product_form import FormState
from src.models.product import Product, display_category, format_price
from src.services.catalog_service import CatalogService
from src.ui.screens import ProductDetailScreen, ProductFormScreen

logger = logging.getLogger("catalog_manager.ui")


class CatalogApp(App[object]):
    """Catalog list with live search and category filtering."""

    CSS_PATH = "styles.css"
    TITLE = "Product Catalog"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "new_product", "New Product"),
        Binding("r", "refresh", "Refresh"),
        Binding("c", "clear_filters", "Clear Filters"),
    ]

    def __init__(self, service: CatalogService | None = None) -> None:
        super().__init__()
        self.service = service or CatalogService()
        self.query_text: str = ""
        self.selected_category: str | None = None
        self.categories: list[str] = []
        self.visible_products: list[Product] = []

    def compose(self) -> ComposeResult:
        """Build the widget tree for the list view."""
        yield Header()
        yield Container(
            Static("🛍  Our Products", id="title"),
            Horizontal(
                Input(placeholder="Search products...", id="search_input"),
                Button("Clear filters", id="clear_btn"),
                id="search_bar",
            ),
            Horizontal(id="category_bar"),
            Static("Loading products...", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="products_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            id="main_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        table = cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )
        table.add_columns("Title", "Price", "Rating", "Category", "")
        await self.load_catalog()

    # ── Data ─────────────────────────────────────────────

    async def load_catalog(self, force: bool = False) -> None:
        """Fetch (or reuse) the catalog and redraw everything."""
        status = self.query_one("#status", Static)
        status.update("⏳ Loading products...")
        products = await self.service.load_catalog_async(force)
        if not products:
            logger.error("Catalog load returned no products")
            self.notify("Could not load products", severity="error")
        await self._rebuild_category_bar()
        self.apply_filters()

    async def _rebuild_category_bar(self) -> None:
        bar = self.query_one("#category_bar", Horizontal)
        await bar.remove_children()
        self.categories = self.service.view().categories
        buttons = [Button("All", id="cat_all")] + [
            Button(display_category(category), id=f"cat_{idx}")
            for idx, category in enumerate(self.categories)
        ]
        await bar.mount(*buttons)

    def apply_filters(self) -> None:
        """Recompute the visible products and refresh the table."""
        view = self.service.view(self.query_text, self.selected_category)
        self.visible_products = view.products
        self.query_one("#status", Static).update(
            view.summary if view.products else "No products found"
        )
        self._highlight_category()
        self.populate_table()

    def _highlight_category(self) -> None:
        for button in self.query("#category_bar Button").results(Button):
            if button.id == "cat_all":
                active = self.selected_category is None
            else:
                idx = int(str(button.id).removeprefix("cat_"))
                active = self.categories[idx] == self.selected_category
            button.variant = "primary" if active else "default"

    def populate_table(self) -> None:
        """Fill the DataTable with the currently visible products."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )
        table.clear()
        for p in self.visible_products:
            badges: list[str] = []
            if p.is_popular:
                badges.append("Popular")
            if p.free_shipping:
                badges.append("Free Shipping")
            table.add_row(
                p.title[:60],
                Text(format_price(p.price), style="bold"),
                f"⭐ {p.rating.rate} ({p.rating.count})",
                display_category(p.category),
                Text(" · ".join(badges), style="green"),
            )

    def select_category(self, category: str | None) -> None:
        self.selected_category = category
        self.apply_filters()

    # ── Events ───────────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        """Filter as the user types."""
        if event.input.id == "search_input":
            self.query_text = event.value
            self.apply_filters()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "clear_btn":
            self.action_clear_filters()
        elif button_id == "cat_all":
            self.select_category(None)
        elif button_id.startswith("cat_"):
            idx = int(button_id.removeprefix("cat_"))
            self.select_category(self.categories[idx])

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the detail screen for the chosen product."""
        if 0 <= event.cursor_row < len(self.visible_products):
            product = self.visible_products[event.cursor_row]
            self.push_screen(
                ProductDetailScreen(self.service, product.id),
                self._on_detail_closed,
            )

    # ── Actions ──────────────────────────────────────────

    def action_new_product(self) -> None:
        self.push_screen(
            ProductFormScreen(
                self.service,
                FormState.new(),
                form_title="Add New Product",
                submit_label="Create Product",
                success_message="Product created successfully!",
            ),
            self._on_product_saved,
        )

    def _on_product_saved(self, product: Product | None) -> None:
        if product is not None:
            logger.info("Product %d saved, reloading catalog", product.id)
            self.run_worker(self.load_catalog(force=True), exclusive=True)

    def _on_detail_closed(self, changed: bool | None) -> None:
        if changed:
            logger.info("Product edited or deleted, reloading catalog")
            self.run_worker(self.load_catalog(force=True), exclusive=True)

    async def action_refresh(self) -> None:
        """Drop the cached catalog and fetch it again."""
        removed = self.service.cache.clear()
        logger.info("Manual refresh, %d cached products dropped", removed)
        await self.load_catalog(force=True)
        self.notify("Catalog refreshed")

    def action_clear_filters(self) -> None:
        self.query_text = ""
        self.selected_category = None
        self.query_one("#search_input", Input).value = ""
        self.apply_filters()
