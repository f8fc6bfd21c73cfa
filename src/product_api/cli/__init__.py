"""Main CLI application module."""

import typer

from .db_commands import db_app
from .product_commands import products_app, serve

app = typer.Typer(
    help="🛒 Product API CLI - serve the API and manage the product store",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db")
app.add_typer(products_app, name="products")
app.command(name="serve")(serve)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
