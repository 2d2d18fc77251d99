"""PitchScore terminal client using Typer.

Forms for registration, login and idea submission, plus the insights list of
your past ideas, rendered with Rich.
"""

from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pitchscore.client import ApiError, PitchScoreClient, TokenStore

app = typer.Typer(
    name="pitchscore",
    help="PitchScore - get a quick assessment of your startup idea",
    no_args_is_help=True,
)
console = Console()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _client(ctx: typer.Context) -> PitchScoreClient:
    return ctx.obj


def _fail(error: ApiError) -> NoReturn:
    console.print(f"[red]{escape(error.message)}[/red]")
    raise typer.Exit(code=1)


def _analysis_panel(analysis: Dict[str, Any], title: str = "Simulated analysis") -> Panel:
    lines = []
    if analysis.get("score") is not None:
        lines.append(f"[bold]Score:[/bold] {analysis['score']}")
    if analysis.get("summary"):
        lines.append(escape(analysis["summary"]))
    if analysis.get("strengths"):
        lines.append("[green]Strengths:[/green]")
        lines.extend(f"  • {escape(item)}" for item in analysis["strengths"])
    if analysis.get("weaknesses"):
        lines.append("[yellow]Weaknesses:[/yellow]")
        lines.extend(f"  • {escape(item)}" for item in analysis["weaknesses"])
    return Panel("\n".join(lines), title=title, expand=False)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Optional[str] = typer.Option(
        None, "--api-url", envvar="PITCHSCORE_API_URL", help="Base URL of the API."
    ),
    token_file: Optional[Path] = typer.Option(
        None, "--token-file", envvar="PITCHSCORE_TOKEN_FILE", help="Where the login token is cached."
    ),
) -> None:
    client = PitchScoreClient(base_url=api_url, token_store=TokenStore(token_file))
    ctx.obj = client
    ctx.call_on_close(client.close)


@app.command()
def health(ctx: typer.Context) -> None:
    """Check that the API is up."""
    try:
        data = _client(ctx).health()
    except ApiError as e:
        _fail(e)
    console.print(f"[green]{data.get('status', 'ok')}[/green]")


@app.command()
def register(
    ctx: typer.Context,
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Create an account; the returned token is cached."""
    try:
        data = _client(ctx).register(email, password)
    except ApiError as e:
        _fail(e)
    console.print(f"[green]Registered and logged in as {data['email']}.[/green]")


@app.command()
def login(
    ctx: typer.Context,
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Log in; the returned token is cached."""
    try:
        data = _client(ctx).login(email, password)
    except ApiError as e:
        _fail(e)
    console.print(f"[green]Logged in as {data['email']}.[/green]")


@app.command()
def logout(ctx: typer.Context) -> None:
    """Forget the cached token."""
    _client(ctx).logout()
    console.print("Logged out.")


@app.command()
def me(ctx: typer.Context) -> None:
    """Show your profile."""
    try:
        data = _client(ctx).me()
    except ApiError as e:
        _fail(e)
    table = Table(show_header=False)
    table.add_row("ID", str(data["id"]))
    table.add_row("Email", data["email"])
    table.add_row("Created", str(data["createdAt"]))
    table.add_row("Updated", str(data["updatedAt"]))
    console.print(table)


@app.command("update-me")
def update_me(
    ctx: typer.Context,
    email: Optional[str] = typer.Option(None, help="New e-mail address."),
    password: Optional[str] = typer.Option(None, help="New password (min. 8 characters)."),
) -> None:
    """Change your e-mail and/or password."""
    try:
        data = _client(ctx).update_me(email=email, password=password)
    except ApiError as e:
        _fail(e)
    console.print(f"[green]Profile updated ({data['email']}).[/green]")


@app.command()
def submit(
    ctx: typer.Context,
    title: str = typer.Option(..., prompt=True),
    content: str = typer.Option(..., prompt="Description"),
) -> None:
    """Submit an idea and show its analysis."""
    console.print("Submitting...")
    try:
        data = _client(ctx).submit_idea(title, content)
    except ApiError as e:
        _fail(e)
    console.print("[green]Idea submitted.[/green]")
    if data.get("analysis"):
        console.print(_analysis_panel(data["analysis"]))


@app.command()
def ideas(ctx: typer.Context) -> None:
    """List your ideas with their analyses, newest first."""
    try:
        items = _client(ctx).list_ideas()
    except ApiError as e:
        _fail(e)
    if not items:
        console.print("No ideas yet.")
        return
    for item in items:
        console.print(f"[bold]{escape(item['title'])}[/bold] [dim]({item['createdAt']})[/dim]")
        console.print(escape(item["content"]))
        if item.get("analysis"):
            console.print(_analysis_panel(item["analysis"], title=f"Analysis #{item['id']}"))
        console.print()


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
