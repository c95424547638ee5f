from __future__ import annotations

import json
import sys
from decimal import Decimal
from typing import Optional

import psycopg
import typer

from warehouse.config import get_settings
from warehouse.errors import WarehouseError
from warehouse.generation.seeder import generate_data
from warehouse.infrastructure.db_factory import check_connection, get_sync_pool
from warehouse.reports import (
    count_products_costing_more,
    find_best_customers,
    increase_price_for_scarce_products,
)
from warehouse.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Warehouse seeder and reporting CLI.")
log = get_logger(__name__)


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.pool_min_size},{settings.pool_max_size}) env={settings.app_env}"
    )


@app.command()
def ping() -> None:
    """
    Check that the database is reachable.
    """
    version = check_connection()
    typer.echo(f"Connected: {version}")


@app.command()
def seed() -> None:
    """
    Populate an empty schema with deterministic synthetic data.
    """
    result = generate_data(get_sync_pool())
    typer.echo(json.dumps(result, indent=2))


@app.command()
def report(
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Price threshold for the product count (default from settings).",
    ),
) -> None:
    """
    Print the number of products above a price and the ten best customers.
    """
    cost = Decimal(str(threshold)) if threshold is not None else get_settings().price_threshold
    pool = get_sync_pool()
    count = count_products_costing_more(pool, cost)
    typer.echo(f"There are {count} products costing more than {cost}.")
    for name in find_best_customers(pool):
        typer.echo(name)


@app.command("raise-prices")
def raise_prices() -> None:
    """
    Raise prices by 10% for products close to their reorder point.
    """
    updated = increase_price_for_scarce_products(get_sync_pool())
    typer.echo(f"Updated prices of {updated} products.")


@app.command()
def run() -> None:
    """
    Seed if needed, run the reports, then raise scarce-product prices.
    """
    seed()
    report(threshold=None)
    raise_prices()


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
    except (WarehouseError, psycopg.Error) as exc:
        log.exception("Run failed")
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
