"""Crawl command: fetch the tender set once, then show charts and the table."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from liyao.config import settings
from liyao.crawl.state import CrawlState, Loading
from liyao.dashboard import Dashboard
from liyao.tenders.fetcher import fetch_tenders
from liyao.view.columns import COLUMNS, parse_column
from cli.rendering import ModeCountChart, NatureShareChart, render_progress, render_table

_BROWSE_HELP = "s <欄位> 排序 | n 下一頁 | p 上一頁 | g <頁> 跳頁 | r 重新爬取 | q 離開"


def _run_crawl(dashboard: Dashboard) -> None:
    """Trigger one crawl and block until it settles, echoing progress ticks."""

    def _on_state(state: CrawlState) -> None:
        if isinstance(state, Loading):
            line = render_progress(state.elapsed_seconds, dashboard.controller.progress_percent)
            typer.echo(f"\r{dashboard.trigger_label} {line}", nl=False)

    async def _crawl() -> None:
        unsubscribe = dashboard.controller.subscribe(_on_state)
        try:
            task = dashboard.crawl()
            if task is not None:
                await task
        finally:
            unsubscribe()

    asyncio.run(_crawl())
    typer.echo("")


def _show_results(dashboard: Dashboard, charts: list) -> None:
    if dashboard.error_visible:
        typer.echo(f"❌ Error: {dashboard.error_message}")
        return
    if dashboard.charts_visible:
        for chart in charts:
            typer.echo(chart.render())
            typer.echo("")
    typer.echo(render_table(dashboard.table))


def _browse(dashboard: Dashboard, charts: list) -> None:
    """Interactive loop over the fetched table until the user quits."""
    typer.echo(_BROWSE_HELP)
    while True:
        raw = typer.prompt(">", default="q", show_default=False).strip()
        command, _, arg = raw.partition(" ")
        arg = arg.strip()

        if command == "q":
            return
        if command == "r":
            _run_crawl(dashboard)
            _show_results(dashboard, charts)
            continue
        if command == "s":
            column = parse_column(arg)
            if column is None:
                typer.echo(f"Unknown column {arg!r}. Use one of: {', '.join(c.value for c in COLUMNS)}")
                continue
            dashboard.sort_by(column)
        elif command == "n":
            dashboard.table.next_page()
        elif command == "p":
            dashboard.table.previous_page()
        elif command == "g":
            if not arg.isdigit():
                typer.echo("Usage: g <page>")
                continue
            dashboard.table.go_to(int(arg))
        else:
            typer.echo(_BROWSE_HELP)
            continue
        typer.echo(render_table(dashboard.table))


def crawl(
    sort: Optional[str] = typer.Option(None, "--sort", help="Column key or header to sort by."),
    desc: bool = typer.Option(False, "--desc", help="Sort descending (requires --sort)."),
    page: int = typer.Option(1, "--page", help="Table page to show."),
    page_size: Optional[int] = typer.Option(None, "--page-size", help="Rows per page."),
    interactive: bool = typer.Option(False, "--interactive/--no-interactive", help="Browse the table afterwards."),
) -> None:
    """Crawl the tender listing once and display the results."""
    column = None
    if sort is not None:
        column = parse_column(sort)
        if column is None:
            typer.echo(f"[crawl] Unknown column {sort!r}. Use one of: {', '.join(c.value for c in COLUMNS)}")
            raise typer.Exit(2)
    elif desc:
        typer.echo("[crawl] --desc ignored without --sort")
    if page_size is not None and page_size <= 0:
        typer.echo(f"[crawl] --page-size must be positive, got {page_size}")
        raise typer.Exit(2)

    dashboard = Dashboard(fetch_tenders, page_size=page_size)
    charts = [NatureShareChart(), ModeCountChart()]
    for chart in charts:
        dashboard.charts.attach(chart)

    try:
        typer.echo(f"[crawl] GET {settings.tenders_url} …")
        _run_crawl(dashboard)

        if dashboard.results_visible and column is not None:
            dashboard.sort_by(column)
            if desc:
                dashboard.sort_by(column)
        dashboard.table.go_to(page)

        _show_results(dashboard, charts)
        if interactive:
            _browse(dashboard, charts)
        if dashboard.error_visible:
            raise typer.Exit(1)
    finally:
        dashboard.close()


def columns() -> None:
    """List the sortable table columns."""
    for column in COLUMNS:
        kind = "numeric" if column.is_numeric else "text"
        typer.echo(f"  {column.value:<20} {column.header}  ({kind})")
