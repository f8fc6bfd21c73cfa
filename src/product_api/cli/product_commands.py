"""Product CLI commands."""

from decimal import Decimal, InvalidOperation

import typer
from rich.table import Table

from src.product_api.core.exceptions import ProductError
from src.product_api.entities.product import DECIMAL_MAX, ProductDTO, ProductTable
from src.product_api.runtime.context import get_config

from .utils import console, product_service

products_app = typer.Typer(help="Inspect and seed products")

SAMPLE_PRODUCTS = [
    ("Espresso Cup", "Porcelain cup, 90 ml", Decimal("4.50")),
    ("French Press", "Borosilicate glass, 1 l", Decimal("24.90")),
    ("Burr Grinder", "Conical steel burrs, 40 settings", Decimal("89.00")),
    ("Milk Jug", "Stainless steel, 600 ml", Decimal("12.75")),
    ("Kettle", "Gooseneck, temperature control", Decimal("64.00")),
]

MEMORY_HELP = "Run against a throwaway in-memory store instead of the database"


def sample_catalogue() -> list[ProductTable]:
    """SAMPLE_PRODUCTS as rows with ids 1-5."""
    return [
        ProductTable(id=product_id, name=name, description=description, price=price)
        for product_id, (name, description, price) in enumerate(SAMPLE_PRODUCTS, start=1)
    ]


def parse_price(value: str, option: str) -> Decimal:
    try:
        price = Decimal(value)
    except InvalidOperation as e:
        raise typer.BadParameter(f"{value!r} is not a price", param_hint=option) from e
    if not price.is_finite():
        raise typer.BadParameter(f"{value!r} is not a price", param_hint=option)
    return price


@products_app.command("list")
def list_products(
    min_price: str = typer.Option("0", "--min-price", help="Lowest price to include"),
    max_price: str | None = typer.Option(None, "--max-price", help="Highest price to include"),
    memory: bool = typer.Option(
        False, "--memory", help=f"{MEMORY_HELP}; it holds the sample catalogue"
    ),
) -> None:
    """List products priced between --min-price and --max-price."""
    lower = parse_price(min_price, "--min-price")
    upper = DECIMAL_MAX if max_price is None else parse_price(max_price, "--max-price")
    try:
        with product_service(memory, sample_catalogue() if memory else None) as service:
            products = service.list_products(lower, upper)
    except ProductError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e

    if not products:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title="Products")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Description")
    table.add_column("Price", style="magenta", justify="right")
    for product in products:
        table.add_row(
            str(product.id),
            product.name or "",
            product.description or "",
            f"{product.price:.2f}",
        )
    console.print(table)


@products_app.command("seed")
def seed_products(
    count: int = typer.Option(
        len(SAMPLE_PRODUCTS), "--count", "-n", min=1, max=len(SAMPLE_PRODUCTS),
        help="Number of sample products to create",
    ),
    memory: bool = typer.Option(False, "--memory", help=f"{MEMORY_HELP} (dry run)"),
) -> None:
    """Insert sample products."""
    try:
        with product_service(memory) as service:
            for name, description, price in SAMPLE_PRODUCTS[:count]:
                created = service.create_product(
                    ProductDTO(name=name, description=description, price=price)
                )
                console.print(f"[green]✅ Created product {created.id}: {created.name}[/green]")
    except ProductError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e


def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """🚀 Start the API server with uvicorn."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")

    uvicorn.run(
        "src.product_api.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )
