"""
Replay command: Replay an event file and show the reconstructed cart
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cartfold.codec import read_events
from cartfold.core import CartFoldError, DeterminismError, EventDecodeError, cart_fingerprint
from cartfold.replay import replay as replay_events
from cartfold.replay import verify_determinism

console = Console()


def _render_cart(cart) -> None:
    console.print(f"  Cart: [cyan]{cart.id}[/cyan]  Client: [cyan]{cart.client_id}[/cyan]")
    console.print(f"  Status: [bold]{cart.status.value}[/bold]")
    if cart.confirmed_at:
        console.print(f"  Confirmed at: {cart.confirmed_at.isoformat()}")
    if cart.canceled_at:
        console.print(f"  Canceled at: {cart.canceled_at.isoformat()}")

    table = Table(title="Lines")
    table.add_column("Product", style="green")
    table.add_column("Quantity", style="cyan", justify="right")
    table.add_column("Unit Price", justify="right")
    table.add_column("Total", style="yellow", justify="right")

    for line in cart.lines:
        table.add_row(line.product_id, str(line.quantity), str(line.unit_price), str(line.total_price))

    console.print(table)
    console.print(f"  Cart total: [yellow]{cart.total_price}[/yellow]")


def replay_command(
    events_path: str = typer.Option(
        ...,
        "--events",
        "-e",
        envvar="CARTFOLD_EVENTS",
        help="Path to JSON-lines event file",
    ),
    until: Optional[int] = typer.Option(None, "--until", "-u", min=0, help="Replay until event index (inclusive)"),
    verify: Optional[int] = typer.Option(None, "--verify", min=1, help="Replay N times and check determinism"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay an event file and show the reconstructed cart.

    Examples:
        cartfold replay --events cart.jsonl
        cartfold replay --events cart.jsonl --until 3
        cartfold replay --events cart.jsonl --verify 100
        cartfold replay --events cart.jsonl --json
    """
    try:
        events = read_events(events_path)
        if until is not None:
            events = events[: until + 1]

        if not json_output:
            console.print("[bold]Replaying cart events...[/bold]")

        result = replay_events(events)
        fingerprint = cart_fingerprint(result.cart)
        if verify is not None:
            fingerprint = verify_determinism(events, runs=verify)

    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Event file not found", "path": events_path}))
        else:
            console.print(f"[red]Error: Event file not found:[/red] {events_path}")
        raise typer.Exit(2)
    except EventDecodeError as e:
        if json_output:
            print(json.dumps({"error": str(e), "line": e.line}))
        else:
            console.print(f"[red]Error decoding events:[/red] {e}")
        raise typer.Exit(2)
    except (CartFoldError, DeterminismError) as e:
        if json_output:
            print(json.dumps({
                "error": str(e),
                "index": getattr(e, "index", None),
                "event_type": getattr(e, "event_type", None),
            }))
        else:
            console.print(f"[red]Replay failed:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        output = {
            "success": True,
            "events_replayed": result.applied,
            "cart_hash": fingerprint,
            "cart": result.cart.to_dict() if result.cart else None,
        }
        if verify is not None:
            output["verified_runs"] = verify
        print(json.dumps(output, indent=2))
        return

    console.print(f"[green]✓ Replayed {result.applied} events successfully[/green]")
    console.print(f"  Cart hash: [yellow]{fingerprint}[/yellow]")
    if verify is not None:
        console.print(f"  [green]✓ Deterministic across {verify} runs[/green]")
    if result.cart is None:
        console.print("[yellow]No cart opened in this history[/yellow]")
        return
    _render_cart(result.cart)
