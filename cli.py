#!/usr/bin/env python3
"""
Forensic Correlator - CLI Entry Point

Inspect stored analyses, import records and run the correlation engine
from a terminal.
"""

import asyncio
import sys
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich import box

from config import WEB_URL, WEB_PORT
from correlation import (
    aggregate_actors,
    compute_entity_correlations,
    find_discoveries,
    run_safely,
    summarize_flows,
    timeline_events,
)
from correlation.result import Err
from ingest import load_records_file
from repositories import get_store

console = Console()


def _run(coro):
    """Run a core operation; print the error and return None on failure."""
    result = asyncio.run(run_safely(coro))
    if isinstance(result, Err):
        console.print(f"[red]Computation failed: {result.reason}[/red]")
        return None
    return result.value


def list_records():
    """List every stored record"""
    records = _run(get_store().get_all_results())
    if records is None:
        return None
    if not records:
        console.print("[dim]No analyses stored yet. Import some with: forensic --import FILE[/dim]")
        return []

    table = Table(title="Analyses", box=box.ROUNDED)
    table.add_column("ID", style="cyan")
    table.add_column("Status")
    table.add_column("Query")
    table.add_column("Entities", justify="right")
    table.add_column("Transactions", justify="right")
    table.add_column("PII", justify="right", style="red")

    for record in records:
        s = record.summary()
        table.add_row(
            s["id"], s["status"], s["query"][:60],
            str(s["entities"]), str(s["transactions"]), str(s["pii"]),
        )

    console.print(table)
    return records


def import_records(path: str) -> Optional[int]:
    """Import records from a JSON, JSONL or YAML file. None on failure."""
    try:
        records = load_records_file(path)
    except FileNotFoundError:
        console.print(f"[red]File not found: {path}[/red]")
        return None
    except ValidationError as e:
        console.print(f"[red]Invalid record file: {e.error_count()} errors[/red]")
        return None

    if not records:
        console.print(f"[yellow]No records in {path}[/yellow]")
        return 0

    store = get_store()

    async def save_all():
        for record in records:
            await store.save_result(record)
        return len(records)

    saved = _run(save_all())
    if saved is None:
        return None
    console.print(f"[green]Imported {saved} records.[/green]")
    return saved


def show_discoveries(record_id: str):
    """Show records bridged to record_id"""
    results = _run(find_discoveries(get_store(), record_id))
    if results is None:
        return None
    if not results:
        console.print(f"[dim]No correlations found for {record_id}.[/dim]")
        return results

    for result in results:
        table = Table(
            title=f"{record_id} <-> {result.other_id(record_id)}  (strength {result.total_strength})",
            box=box.ROUNDED,
        )
        table.add_column("Type", style="cyan")
        table.add_column("Link")
        table.add_column("Strength", justify="right", style="green")
        for link in result.links:
            table.add_row(link.type.value, link.description, str(link.strength))
        console.print(table)
    return results


def show_entities():
    """Show cross-session entity correlations"""
    correlations = _run(compute_entity_correlations(get_store()))
    if correlations is None:
        return None
    if not correlations:
        console.print("[dim]No cross-session correlations yet.[/dim]")
        return correlations

    table = Table(title="Cross-Session Entities", box=box.ROUNDED)
    table.add_column("Entity", style="cyan")
    table.add_column("Risk", justify="right", style="red")
    table.add_column("Investigations", justify="right")
    table.add_column("PII", justify="right")
    table.add_column("Sent", justify="right")
    table.add_column("Received", justify="right")
    table.add_column("Hub")

    for c in correlations:
        table.add_row(
            c.entity, str(c.risk_score), str(c.occurrences), str(c.pii_count),
            f"{c.total_amount_sent:,.0f}", f"{c.total_amount_received:,.0f}",
            "yes" if c.financial_hub else "",
        )

    console.print(table)
    return correlations


def show_actors():
    """Show main actors merged across records"""
    records = _run(get_store().get_all_results())
    if records is None:
        return None

    actors = aggregate_actors(records)
    table = Table(title="Main Actors", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Role")
    table.add_column("Risk", justify="right", style="red")
    table.add_column("Influence", justify="right")
    table.add_column("Mentions", justify="right")
    for a in actors:
        table.add_row(a.name, a.role, f"{a.risk_level:g}", f"{a.influence:g}", str(a.mentions))
    console.print(table)
    return actors


def show_finance():
    """Show the financial flow summary"""
    records = _run(get_store().get_all_results())
    if records is None:
        return None

    summary = summarize_flows(records)
    console.print(
        f"[bold]{summary.transaction_count}[/bold] transactions, "
        f"volume [bold]{summary.total_volume:,.0f}[/bold], "
        f"[red]{summary.suspicious_count} suspicious[/red]"
    )
    table = Table(title="Top Counterparties", box=box.ROUNDED)
    table.add_column("Counterparty", style="cyan")
    table.add_column("Sent", justify="right")
    table.add_column("Received", justify="right")
    table.add_column("Transactions", justify="right")
    for flow in summary.top_counterparties:
        table.add_row(flow.name, f"{flow.sent:,.0f}", f"{flow.received:,.0f}", str(flow.count))
    console.print(table)
    return summary


def show_timeline(query: str = ""):
    """Show dated events, newest first"""
    records = _run(get_store().get_all_results())
    if records is None:
        return None

    events = timeline_events(records, query=query)
    if not events:
        console.print("[dim]No dated events found.[/dim]")
        return events

    table = Table(title="Timeline", box=box.ROUNDED)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Event")
    table.add_column("Source", style="dim")
    for e in events:
        table.add_row(e.date, e.kind.value, f"{e.title}: {e.description}"[:80], e.source_id)
    console.print(table)
    return events


def cli(argv=None):
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Cross-document correlation for forensic disclosure analyses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  forensic --list                 # List stored analyses
  forensic --import results.json  # Import records (json, jsonl, yaml)
  forensic --discover ANALYSE-1   # Records bridged to one analysis
  forensic --entities             # Cross-session entity correlations
  forensic --timeline 2005        # Dated events mentioning 2005
  forensic --web                  # Serve the JSON API
        """
    )
    parser.add_argument("--list", "-l", action="store_true", help="List analyses")
    parser.add_argument("--import", dest="import_file", metavar="FILE", help="Import records")
    parser.add_argument("--discover", metavar="ID", help="Show discoveries for a record")
    parser.add_argument("--entities", action="store_true", help="Cross-session entity correlations")
    parser.add_argument("--actors", action="store_true", help="Main actors rollup")
    parser.add_argument("--finance", action="store_true", help="Financial flow summary")
    parser.add_argument("--timeline", nargs="?", const="", metavar="TEXT", help="Dated events, optionally filtered")
    parser.add_argument("--web", action="store_true", help="Serve the JSON API")

    args = parser.parse_args(argv)

    if args.import_file:
        return 0 if import_records(args.import_file) is not None else 1
    elif args.discover:
        return 0 if show_discoveries(args.discover) is not None else 1
    elif args.entities:
        return 0 if show_entities() is not None else 1
    elif args.actors:
        return 0 if show_actors() is not None else 1
    elif args.finance:
        return 0 if show_finance() is not None else 1
    elif args.timeline is not None:
        return 0 if show_timeline(args.timeline) is not None else 1
    elif args.web:
        from app import app
        console.print(f"[dim]Serving API at {WEB_URL}...[/dim]")
        app.run(host="127.0.0.1", port=WEB_PORT, debug=False)
        return 0
    else:
        return 0 if list_records() is not None else 1


if __name__ == "__main__":
    sys.exit(cli())
