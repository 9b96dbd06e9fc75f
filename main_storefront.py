"""Mini README: Entry point CLI for the Tray Ledger storefront service.

This script exposes a Typer CLI that starts the FastAPI JSON service with
configurable host, port and production flags, and prints the current
profit and loss report straight from the store. Settings come from
``TRAYLEDGER_`` environment variables when available.
"""

from __future__ import annotations

import os

import typer
import uvicorn

from trayledger.application import build_ledger
from trayledger.configuration import get_settings
from trayledger.logging_utils import configure_root_logger, level_for_environment
from trayledger.reporting import build_report

cli = typer.Typer(help="Run and inspect the Tray Ledger storefront service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
    demo: bool = typer.Option(False, help="Serve the seeded in-memory store offline."),
) -> None:
    """Start the FastAPI application using uvicorn."""

    if demo:
        # The reloader imports the factory in a child process; settings travel via env.
        os.environ["TRAYLEDGER_DEMO_MODE"] = "true"
        get_settings.cache_clear()
    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Tray Ledger on {effective_host}:{effective_port}.\n"
        f"API available at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "trayledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def report(
    demo: bool = typer.Option(False, help="Report on the seeded in-memory store."),
) -> None:
    """Load orders and expenses and print the profit and loss summary."""

    settings = get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    ledger = build_ledger(settings, demo=demo)
    snapshot = build_report(
        ledger.store.list_orders(), ledger.store.list_expenses(), today=ledger.today()
    )
    currency = settings.base_currency
    typer.echo(f"Revenue:        {snapshot.revenue:>14,.2f} {currency}")
    typer.echo(f"Expenses:       {snapshot.total_expenses:>14,.2f} {currency}")
    typer.echo(f"Net profit:     {snapshot.net_profit:>14,.2f} {currency}")
    typer.echo(f"Orders today:   {snapshot.orders_today:>14}")
    for category, amount in snapshot.expense_by_category.items():
        typer.echo(f"  {category:<20} {amount:>12,.2f} {currency}")


if __name__ == "__main__":
    cli()
