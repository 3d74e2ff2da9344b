"""
Offseason - CLI Entry Point.

Usage:
    offseason resume [USER_ID]   Show where a user would resume onboarding
    offseason steps              Print the backbone and item sub-flows
    offseason health             Check configuration and Supabase access
    offseason --help             Show help
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(
    name="offseason",
    help="Offseason - onboarding flow tools.",
    add_completion=False,
)
console = Console()


@app.command()
def resume(
    user_id: str = typer.Argument(None, help="User id (defaults to DEV_USER_ID)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Show the step a user would land on if they opened the app now."""
    from onboarding.errors import OnboardingError
    from onboarding.presenter import screen_for
    from onboarding.resolver import describe, onboarding_progress
    from offseason.config import settings
    from offseason.service import OnboardingService
    from offseason.store import ProfileStore

    logging.basicConfig(level="DEBUG" if verbose else settings.log_level)
    user_id = user_id or settings.dev_user_id
    service = OnboardingService(ProfileStore())

    try:
        record = asyncio.run(service.load(user_id))
        resolution = describe(record)
        progress = onboarding_progress(record)
    except OnboardingError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    item = f"{resolution.kind.value}: {resolution.item}" if resolution.item else "-"
    console.print(
        Panel.fit(
            f"[bold]User:[/bold] {user_id}\n"
            f"[bold]Stored step:[/bold] {record.current_step or '(none)'}\n"
            f"[bold]Next step:[/bold] [green]{resolution.step.value}[/green]\n"
            f"[bold]Screen:[/bold] {screen_for(resolution.step)}\n"
            f"[bold]Item:[/bold] {item}\n"
            f"[bold]Progress:[/bold] {progress}%\n"
            f"[dim]Activities: {', '.join(record.selected_activities) or '-'} "
            f"(done: {', '.join(record.completed_activities) or '-'})[/dim]\n"
            f"[dim]Goals: {', '.join(record.selected_goals) or '-'} "
            f"(done: {', '.join(record.completed_goals) or '-'})[/dim]",
            title="Onboarding",
            border_style="green",
        )
    )


@app.command()
def steps() -> None:
    """Print the backbone order and every item's detail screens."""
    from onboarding.catalog import ITEM_DETAILS
    from onboarding.presenter import SCREEN_ROUTES
    from onboarding.steps import BACKBONE_ORDER, Branch, branch_fallthrough, next_linear_step

    backbone = Table(title="Backbone")
    backbone.add_column("Step")
    backbone.add_column("Screen")
    backbone.add_column("Then")
    for step in BACKBONE_ORDER:
        following = next_linear_step(step)
        if isinstance(following, Branch) and following is not Branch.TERMINAL:
            then = f"{following.value} (else {branch_fallthrough(following).value})"
        else:
            then = following.value
        backbone.add_row(step.value, SCREEN_ROUTES.get(step, "-"), then)
    console.print(backbone)

    items = Table(title="Detail screens")
    items.add_column("Kind")
    items.add_column("Item")
    items.add_column("Screens")
    for kind, details in ITEM_DETAILS.items():
        for item, detail in details.items():
            screens = " -> ".join(
                f"{s.step.value}{'?' if s.when else ''}" for s in detail.flow.steps
            )
            items.add_row(kind.value, item, screens)
    console.print(items)
    console.print("[dim]? = only shown for some answers[/dim]")


@app.command()
def health() -> None:
    """Check configuration and Supabase access."""
    from offseason.config import get_settings

    console.print("\n[bold]Offseason Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.offseason_env}")
        console.print(f"   Log level: {settings.log_level}")

        if settings.supabase_url.startswith("https://"):
            console.print("[green]OK[/green] Supabase URL configured")
        else:
            console.print("[red]FAIL[/red] Supabase URL missing or invalid")
            raise typer.Exit(code=1)

        from offseason.db.client import get_service_client
        client = get_service_client()
        client.table(settings.profiles_table).select("id").limit(1).execute()
        console.print(f"[green]OK[/green] {settings.profiles_table} table reachable")

        console.print("\n[green]All checks passed![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]FAIL[/red] {e}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
