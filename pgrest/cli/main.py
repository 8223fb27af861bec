"""pgrest CLI - query a PostgREST endpoint from the terminal."""
import asyncio
import json
from typing import List, Optional, Tuple

import aiohttp
import typer
from rich.console import Console
from rich.json import JSON
from rich.table import Table

from pgrest.core.api import APIConfig, AiohttpTransport, PagedList, RequestBuilder
from pgrest.core.exceptions import PostgrestException

app = typer.Typer(
    name="pgrest",
    help="PostgREST request builder CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def parse_eq(values: List[str]) -> dict:
    """Parse --eq column=value options."""
    criteria = {}
    for item in values:
        column, sep, value = item.partition('=')
        if not sep or not column:
            raise typer.BadParameter(f"Expected column=value, got {item!r}", param_hint="--eq")
        criteria[column] = value
    return criteria


def parse_filter(item: str) -> Tuple[str, str, object]:
    """Parse a --filter column:operator:value option; in/not values may be comma lists."""
    parts = item.split(':', 2)
    if len(parts) != 3 or not all(parts[:2]):
        raise typer.BadParameter(f"Expected column:operator:value, got {item!r}", param_hint="--filter")
    column, operator, value = parts
    if operator == 'in':
        return column, operator, value.split(',')
    return column, operator, value


def parse_order(value: str) -> Tuple[str, bool]:
    """Parse --order column[.asc|.desc]; descending unless .asc is given."""
    column, _, direction = value.partition('.')
    if direction not in ('', 'asc', 'desc'):
        raise typer.BadParameter(f"Unknown direction {direction!r}", param_hint="--order")
    return column, direction == 'asc'


def parse_range(value: str) -> Tuple[int, Optional[str]]:
    """Parse --range START-END (END optional).

    END stays a string so an explicit 0 is not read as an open range.
    """
    start, sep, end = value.partition('-')
    try:
        return int(start or 0), (str(int(end)) if end else None)
    except ValueError:
        raise typer.BadParameter(f"Expected START-END, got {value!r}", param_hint="--range")


def build_request(
    url: str,
    select: Optional[str],
    eq: List[str],
    filters: List[str],
    order: Optional[str],
    range_: Optional[str],
    single: bool,
    token: Optional[str],
    transport=None,
) -> RequestBuilder:
    """Turn command line options into a RequestBuilder."""
    builder = RequestBuilder('GET', url, transport).select(select)
    if token:
        builder.auth(token)
    if eq:
        builder.match(parse_eq(eq))
    for item in filters:
        builder.filter(*parse_filter(item))
    if order:
        column, ascending = parse_order(order)
        builder.order(column, ascending=ascending)
    if range_:
        builder.range(*parse_range(range_))
    if single:
        builder.single()
    return builder


def render_table(rows: list) -> Table:
    """Render a list of row objects as a rich table."""
    table = Table()
    columns: List[str] = []
    for row in rows:
        for key in (row if isinstance(row, dict) else {}):
            if key not in columns:
                columns.append(key)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*("" if row.get(c) is None else str(row.get(c)) for c in columns))
    return table


@app.command()
def get(
    url: str = typer.Argument(..., help="Table or view URL"),
    select: str = typer.Option(None, "--select", "-s", help="Columns to select"),
    eq: List[str] = typer.Option([], "--eq", help="Equality filter column=value"),
    filters: List[str] = typer.Option([], "--filter", "-f", help="Filter column:operator:value"),
    order: str = typer.Option(None, "--order", "-o", help="Order by column[.asc|.desc]"),
    range_: str = typer.Option(None, "--range", "-r", help="Row range START-END"),
    single: bool = typer.Option(False, "--single", help="Expect exactly one object"),
    token: str = typer.Option(None, "--token", "-t", envvar="PGREST_TOKEN", help="Bearer token"),
    table: bool = typer.Option(False, "--table", help="Print rows as a table"),
    insecure: bool = typer.Option(False, "--insecure", "-k", help="Skip TLS verification"),
):
    """Fetch rows from a PostgREST endpoint."""
    config = APIConfig.insecure() if insecure else APIConfig.default()
    try:
        builder = build_request(
            url, select, eq, filters, order, range_, single, token,
            transport=AiohttpTransport(config=config),
        )
    except PostgrestException as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        result = run_async(builder.end())
    except (aiohttp.ClientError, PostgrestException) as e:
        console.print(f"[red]Request failed: {e}[/red]")
        raise typer.Exit(1)

    if table and isinstance(result, list):
        console.print(render_table(result))
    else:
        console.print(JSON(json.dumps(result)))

    if isinstance(result, PagedList):
        console.print(f"[dim]{len(result)} of {result.full_length} rows[/dim]")


@app.command()
def url(
    url: str = typer.Argument(..., help="Table or view URL"),
    select: str = typer.Option(None, "--select", "-s", help="Columns to select"),
    eq: List[str] = typer.Option([], "--eq", help="Equality filter column=value"),
    filters: List[str] = typer.Option([], "--filter", "-f", help="Filter column:operator:value"),
    order: str = typer.Option(None, "--order", "-o", help="Order by column[.asc|.desc]"),
):
    """Print the URL a request would be sent to, without sending it."""
    try:
        builder = build_request(url, select, eq, filters, order, None, False, None)
    except PostgrestException as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    typer.echo(builder.prepare().url)


def main():
    app()


if __name__ == "__main__":
    main()
