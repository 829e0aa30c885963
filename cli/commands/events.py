"""
Events command: list the events of a JSON-lines file
"""

import json
from collections import Counter

import typer
from rich.console import Console
from rich.table import Table

from cartfold.codec import encode_event, read_events
from cartfold.core import CartFoldError, EventDecodeError

console = Console()


def events_command(
    events_path: str = typer.Option(
        ...,
        "--events",
        "-e",
        envvar="CARTFOLD_EVENTS",
        help="Path to JSON-lines event file",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List decoded events in arrival order.

    Examples:
        cartfold events --events cart.jsonl
        cartfold events --events cart.jsonl --json
    """
    try:
        events = read_events(events_path)
    except FileNotFoundError:
        console.print(f"[red]Error: Event file not found:[/red] {events_path}")
        raise typer.Exit(2)
    except (EventDecodeError, CartFoldError) as e:
        console.print(f"[red]Error decoding events:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        records = [encode_event(ev) for ev in events]
        print(json.dumps({"events": records, "count": len(records)}, indent=2))
        return

    if not events:
        console.print("[yellow]Event file is empty[/yellow]")
        return

    table = Table(title=f"Events: {events_path}")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Type", style="green")
    table.add_column("Cart ID", style="yellow")
    table.add_column("Details")

    for index, ev in enumerate(events):
        record = encode_event(ev)
        details = {k: v for k, v in record.items() if k not in ("type", "cart_id")}
        table.add_row(str(index), ev.type, ev.cart_id, json.dumps(details, sort_keys=True))

    console.print(table)

    counts = Counter(ev.type for ev in events)
    summary = Table(title="Event Counts")
    summary.add_column("Event Type", style="green")
    summary.add_column("Count", style="cyan", justify="right")
    for event_type in sorted(counts):
        summary.add_row(event_type, str(counts[event_type]))
    console.print(summary)
