"""Tests for the product-api command line interface."""

from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from src.product_api.cli import app
from src.product_api.runtime.config.config_data import ConfigData, DatabaseConfig
from src.product_api.runtime.context import with_context

runner = CliRunner()


@pytest.fixture
def cli_database(tmp_path: Path) -> Generator[Path]:
    """Point the CLI at a SQLite file inside tmp_path."""
    db_path = tmp_path / "cli.db"
    override = ConfigData(database=DatabaseConfig(url=f"sqlite:///{db_path}"))
    with with_context(override):
        yield db_path


def test_db_init_creates_database(cli_database: Path):
    result = runner.invoke(app, ["db", "init"])

    assert result.exit_code == 0, result.output
    assert "Database tables created" in result.output
    assert cli_database.exists()


def test_seed_then_list(cli_database: Path):
    assert runner.invoke(app, ["db", "init"]).exit_code == 0

    seeded = runner.invoke(app, ["products", "seed", "-n", "3"])
    assert seeded.exit_code == 0, seeded.output
    assert "Created product 1: Espresso Cup" in seeded.output
    assert "Created product 3: Burr Grinder" in seeded.output

    listed = runner.invoke(app, ["products", "list"])
    assert listed.exit_code == 0, listed.output
    assert "French Press" in listed.output
    assert "Kettle" not in listed.output


def test_list_with_price_range(cli_database: Path):
    runner.invoke(app, ["db", "init"])
    runner.invoke(app, ["products", "seed"])

    result = runner.invoke(app, ["products", "list", "--min-price", "10", "--max-price", "30"])

    assert result.exit_code == 0, result.output
    assert "French Press" in result.output
    assert "Milk Jug" in result.output
    assert "Espresso Cup" not in result.output


def test_list_empty_range(cli_database: Path):
    runner.invoke(app, ["db", "init"])

    result = runner.invoke(app, ["products", "list"])

    assert result.exit_code == 0
    assert "No products found" in result.output


def test_list_without_table_fails(cli_database: Path):
    result = runner.invoke(app, ["products", "list"])

    assert result.exit_code == 1
    assert "not initialized" in result.output


def test_drop_requires_confirmation(cli_database: Path):
    runner.invoke(app, ["db", "init"])

    result = runner.invoke(app, ["db", "drop"], input="n\n")

    assert result.exit_code == 1
    assert "Aborted" in result.output


def test_drop_forced(cli_database: Path):
    runner.invoke(app, ["db", "init"])

    result = runner.invoke(app, ["db", "drop", "--force"])

    assert result.exit_code == 0, result.output
    assert "Database tables dropped" in result.output


def test_list_exact_decimal_bounds(cli_database: Path):
    runner.invoke(app, ["db", "init"])
    runner.invoke(app, ["products", "seed"])

    result = runner.invoke(
        app, ["products", "list", "--min-price", "12.75", "--max-price", "24.90"]
    )

    assert result.exit_code == 0, result.output
    assert "Milk Jug" in result.output
    assert "French Press" in result.output
    assert "Espresso Cup" not in result.output


@pytest.mark.parametrize("price", ["cheap", "NaN", "Infinity"])
def test_list_rejects_invalid_price(cli_database: Path, price: str):
    result = runner.invoke(app, ["products", "list", "--max-price", price])

    assert result.exit_code == 2
    assert "is not a price" in result.output


def test_list_memory_shows_sample_catalogue(cli_database: Path):
    result = runner.invoke(app, ["products", "list", "--memory", "--min-price", "60"])

    assert result.exit_code == 0, result.output
    assert "Burr Grinder" in result.output
    assert "Kettle" in result.output
    assert "Milk Jug" not in result.output
    assert not cli_database.exists()


def test_seed_memory_is_dry_run(cli_database: Path):
    result = runner.invoke(app, ["products", "seed", "--memory", "-n", "2"])

    assert result.exit_code == 0, result.output
    assert "Created product 1: Espresso Cup" in result.output
    assert "Created product 2: French Press" in result.output
    assert not cli_database.exists()
