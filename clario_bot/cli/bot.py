"""CLI commands for inspecting routes and running offline turns."""

from __future__ import annotations

import asyncio
import json

import typer
from rich.console import Console
from rich.table import Table

from clario_bot.adapters.turn_context import BufferedTurnContext
from clario_bot.bootstrap import build_default_service_container
from clario_bot.core.exceptions import TemplateUnavailable
from clario_bot.core.models import ConversationReference, MessageEvent, Participant
from clario_bot.services import ServiceContainer
from clario_bot.services.route_table import CardRule, RouteRule, TextRule
from clario_bot.services.turn_pipeline import run_turn

app = typer.Typer(name="bot", help="Inspect and exercise the turn router")
console = Console()

CLI_CONVERSATION_ID = "cli-conversation"
CLI_BOT = Participant(id="clario-bot", name="Clario")


def _get_services() -> ServiceContainer:
    """Get the service container wired to the configured adapters."""
    return build_default_service_container()


def _describe(rule: RouteRule) -> str:
    if isinstance(rule, TextRule):
        return " / ".join(rule.messages)
    if isinstance(rule, CardRule):
        return f"card: {rule.template}"
    return repr(rule)


@app.command("routes")
def list_routes() -> None:
    """Print the intent route table."""
    services = _get_services()
    router = services.turn_router
    if router is None:
        console.print("[red]Error:[/red] turn router is not configured")
        raise typer.Exit(1)

    table = Table(title="Intent routes")
    table.add_column("Intent", style="cyan", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Reply")
    for intent_name, rule in router.routes().items():
        table.add_row(intent_name, rule.kind, _describe(rule))
    table.add_row("[dim]<default>[/dim]", router.default_rule.kind, _describe(router.default_rule))
    console.print(table)


@app.command("chat")
def chat(
    text: str = typer.Argument(..., help="Message text to classify and route"),
    sender: str = typer.Option("cli-user", "--sender", "-s", help="Sender id"),
) -> None:
    """Run one message turn through the configured recognizer and print the replies."""
    services = _get_services()
    router = services.turn_router
    if router is None:
        console.print("[red]Error:[/red] turn router is not configured")
        raise typer.Exit(1)

    user = Participant(id=sender)
    reference = ConversationReference(conversation_id=CLI_CONVERSATION_ID, user=user, bot=CLI_BOT)
    event = MessageEvent(text=text, sender=user, recipient=CLI_BOT, reference=reference)
    turn_context = BufferedTurnContext(reference)
    asyncio.run(run_turn(router, event, turn_context))

    for activity in turn_context.activities:
        if "text" in activity:
            console.print(f"[bold cyan]{CLI_BOT.name}:[/bold cyan] {activity['text']}")
        for attachment in activity.get("attachments", []):
            console.print(f"[bold cyan]{CLI_BOT.name}:[/bold cyan] [dim]{attachment['contentType']}[/dim]")
            console.print_json(json.dumps(attachment["content"]))


@app.command("card")
def show_card(name: str = typer.Argument(..., help="Template name, e.g. welcomeCard")) -> None:
    """Print a card template's parsed JSON."""
    services = _get_services()
    store = services.template_store
    if store is None:
        console.print("[red]Error:[/red] template store is not configured")
        raise typer.Exit(1)
    try:
        payload = store.load(name)
    except TemplateUnavailable as e:
        console.print(f"[red]Error:[/red] {e}")
        available = ", ".join(store.names()) or "none"
        console.print(f"[dim]Available templates: {available}[/dim]")
        raise typer.Exit(1) from e
    console.print_json(json.dumps(payload))
