# main.py

"""Entry point for the catalog_manager application (TUI or headless CLI)."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("catalog_manager.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="catalog_manager",
        description="Browse and edit the remote product catalog.",
        epilog=f"Product API: {Settings.API_URL}",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        dest="list_products",
        help="Print the catalog and exit (omit all flags for the TUI).",
    )
    parser.add_argument(
        "--search",
        default="",
        help="Case-insensitive title filter for --list.",
    )
    parser.add_argument(
        "--category",
        default=None,
        choices=Settings.CATEGORIES,
        help="Category filter for --list (default: all).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format for --list (default: json).",
    )
    parser.add_argument(
        "--show",
        type=int,
        default=None,
        metavar="ID",
        help="Print a single product as JSON.",
    )
    parser.add_argument(
        "--delete",
        type=int,
        default=None,
        metavar="ID",
        help="Delete a product by id.",
    )
    parser.add_argument(
        "--categories",
        action="store_true",
        default=False,
        help="Print the categories present in the catalog.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import CatalogApp

    try:
        app = CatalogApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("catalog_manager TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless command and exit with its status."""
    from src.cli import runner

    if args.show is not None:
        exit_code = runner.run_show(args.show)
    elif args.delete is not None:
        exit_code = runner.run_delete(args.delete)
    elif args.categories:
        exit_code = runner.run_categories()
    else:
        exit_code = runner.run_list(
            search=args.search,
            category=args.category,
            output_format=args.output_format,
        )
    sys.exit(exit_code)


def main(argv: list[str] | None = None) -> None:
    """Route to TUI (no flags) or a headless command."""
    args = _build_parser().parse_args(argv)

    headless = (
        args.list_products
        or args.show is not None
        or args.delete is not None
        or args.categories
    )
    log_file = setup_logging(console=bool(headless))
    logger.info("catalog_manager starting, log file: %s", log_file)

    if headless:
        _run_cli(args)
    else:
        _run_tui()


if __name__ == "__main__":
    main()
