"""Voxbone CLI - search, allocate and manage numbers from the command line."""

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from voxbone import __version__
from voxbone.client import VoxboneClient
from voxbone.exceptions import VoxboneError
from voxbone.logging_utils import configure_logging
from voxbone.models import AllocationResult
from voxbone.results import ApiResult


def _console() -> Console:
    return Console()


def print_error(message: str) -> None:
    _console().print(f"[red]✗[/red] {escape(message)}")


def print_json(data: Any) -> None:
    _console().print_json(json.dumps(data, default=str))


def print_table(rows: List[Dict[str, Any]], columns: Optional[List[str]] = None, title: Optional[str] = None) -> None:
    """Print records as a table, using the first record's keys by default."""
    console = _console()
    if not rows:
        console.print("[dim]No data to display[/dim]")
        return

    display_columns = columns or list(rows[0].keys())[:8]
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for col in display_columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*[_cell(row.get(col)) for col in display_columns])
    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        return json.dumps(value, default=str)
    return str(value)


def _run(ctx: click.Context, call: Callable[[VoxboneClient], Awaitable[Any]]) -> Any:
    """Create a client from the CLI options and run ``call`` with it."""

    async def runner() -> Any:
        async with VoxboneClient(
            user=ctx.obj["user"],
            password=ctx.obj["password"],
            url=ctx.obj["url"],
        ) as client:
            return await call(client)

    try:
        return asyncio.run(runner())
    except VoxboneError as e:
        print_error(str(e))
        sys.exit(2)


def _show(ctx: click.Context, result: ApiResult, key: str, columns: Optional[List[str]] = None) -> None:
    """Print a listing response and exit non-zero if the request failed."""
    if ctx.obj["output"] == "json":
        print_json(result.payload)
    elif result.ok:
        rows = result.get(key)
        if isinstance(rows, dict):
            rows = [rows]
        if isinstance(rows, list):
            print_table(rows, columns)
        else:
            print_table([result.data] if isinstance(result.data, dict) else [], columns)
    if result.failed:
        print_error(f"Request failed: {result.error}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="voxbone")
@click.option("--user", envvar="VOXBONE_USER", help="API user name")
@click.option("--password", envvar="VOXBONE_PASSWORD", help="API password")
@click.option("--url", envvar="VOXBONE_URL", help="REST API base URL")
@click.option("--output", "-o", type=click.Choice(["table", "json"]), default="table",
              help="Output format")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, user: Optional[str], password: Optional[str], url: Optional[str],
        output: str, debug: bool):
    """Voxbone CLI - Provision phone numbers from the command line.

    \b
    Examples:
      voxbone didgroups BEL --feature-id 50
      voxbone allocate USA --quantity 2 --area-code 212
      voxbone dids --order-reference 7412345
    """
    ctx.ensure_object(dict)
    configure_logging("debug" if debug else "warning")

    ctx.obj["user"] = user
    ctx.obj["password"] = password
    ctx.obj["url"] = url
    ctx.obj["output"] = output


@cli.command("allocate")
@click.argument("country")
@click.option("--quantity", "-q", type=int, default=1, help="Number of DIDs")
@click.option("--feature-id", "-f", "feature_ids", type=int, multiple=True,
              help="Required feature code (repeatable, default 50 for voice)")
@click.option("--area-code", "-a", help="Area code of the DID group")
@click.pass_context
def allocate(ctx: click.Context, country: str, quantity: int, feature_ids: Tuple[int, ...],
             area_code: Optional[str]):
    """Search, reserve and order DIDs in COUNTRY (ISO alpha-3)."""
    result: AllocationResult = _run(
        ctx,
        lambda client: client.allocate(
            country_code=country,
            quantity=quantity,
            feature_ids=list(feature_ids) or None,
            area_code=area_code,
        ),
    )

    if ctx.obj["output"] == "json":
        print_json(result.to_dict())
    elif result.succeeded:
        print_table(result.dids, columns=["didId", "e164", "countryCodeA3", "didGroupId"],
                    title=f"Order {result.order_reference}")
    else:
        print_error(f"Allocation {result.status.value} at {result.stage.value}: "
                    f"{result.message or json.dumps(result.payload, default=str)}")

    if not result.succeeded:
        sys.exit(1)


@cli.command("didgroups")
@click.argument("country")
@click.option("--area-code", "-a", help="Filter by area code")
@click.option("--feature-id", "-f", "feature_ids", type=int, multiple=True,
              help="Filter by feature code (repeatable)")
@click.option("--did-type", help="Filter by DID type (GEOGRAPHIC, TOLL_FREE, ...)")
@click.option("--page-number", type=int, help="Page number")
@click.option("--page-size", type=int, help="Page size")
@click.pass_context
def didgroups(ctx: click.Context, country: str, area_code: Optional[str],
              feature_ids: Tuple[int, ...], did_type: Optional[str],
              page_number: Optional[int], page_size: Optional[int]):
    """List DID groups in COUNTRY."""
    result = _run(
        ctx,
        lambda client: client.inventory.list_did_groups(
            country_code_a3=country,
            area_code=area_code,
            feature_ids=list(feature_ids),
            did_type=did_type,
            page_number=page_number,
            page_size=page_size,
        ),
    )
    _show(ctx, result, "didGroups",
          columns=["didGroupId", "cityName", "areaCode", "didType", "stock", "available"])


@cli.command("dids")
@click.option("--order-reference", "-r", help="Filter by order reference")
@click.option("--country", "-c", help="Filter by country code (ISO alpha-3)")
@click.option("--e164-pattern", help="Filter by E.164 pattern")
@click.pass_context
def dids(ctx: click.Context, order_reference: Optional[str], country: Optional[str],
         e164_pattern: Optional[str]):
    """List your DIDs."""
    result = _run(
        ctx,
        lambda client: client.inventory.list_dids(
            order_reference=order_reference,
            country_code_a3=country,
            e164_pattern=e164_pattern,
        ),
    )
    _show(ctx, result, "dids", columns=["didId", "e164", "countryCodeA3", "orderReference"])


@cli.command("countries")
@click.option("--country", "-c", help="Filter by country code (ISO alpha-3)")
@click.option("--did-type", help="Filter by DID type")
@click.pass_context
def countries(ctx: click.Context, country: Optional[str], did_type: Optional[str]):
    """List countries with inventory."""
    result = _run(
        ctx,
        lambda client: client.inventory.list_countries(country_code_a3=country, did_type=did_type),
    )
    _show(ctx, result, "countries", columns=["countryCodeA3", "countryName", "phoneCode"])


@cli.command("orders")
@click.option("--reference", "-r", help="Filter by order reference")
@click.pass_context
def orders(ctx: click.Context, reference: Optional[str]):
    """List orders."""
    result = _run(ctx, lambda client: client.ordering.list_orders(reference=reference))
    _show(ctx, result, "orders")


@cli.command("balance")
@click.pass_context
def balance(ctx: click.Context):
    """Show the account balance."""
    result = _run(ctx, lambda client: client.ordering.account_balance())
    _show(ctx, result, "accountBalance")


@cli.command("cancel")
@click.argument("did_ids", nargs=-1, type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def cancel(ctx: click.Context, did_ids: Tuple[int, ...], yes: bool):
    """Release DID_IDS back to the inventory."""
    if did_ids and not yes:
        click.confirm(f"Cancel {len(did_ids)} DID(s)?", abort=True)
    result = _run(ctx, lambda client: client.ordering.cancel_dids(list(did_ids)))
    _show(ctx, result, "dids")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
