"""
Bookshelf - CLI Entry Point.

Operator checks only; the editing workflows are driven by the host view.

Usage:
    bookshelf health         Check configuration and collection access
    bookshelf version        Show version
    bookshelf --help         Show help
"""

import logging

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="bookshelf",
    help="Bookshelf - author and book editing backend checks.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Configure logging before any command runs."""
    from bookshelf.config import get_editor_settings

    level = "DEBUG" if verbose else get_editor_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def health() -> None:
    """Check configuration and that both collections answer."""
    from bookshelf.config import get_settings
    from bookshelf.db.client import get_client

    console.print("\n[bold]Bookshelf Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("✅ Configuration loaded")
        console.print(f"   Environment: {settings.bookshelf_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Update group: {settings.update_group_id}")
        console.print(
            f"   Delete policy: authors={settings.author_delete_policy}, books={settings.book_delete_policy}"
        )
    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with SUPABASE_URL and SUPABASE_ANON_KEY.[/dim]")
        raise typer.Exit(1)

    client = get_client()
    table = Table(title="Collections")
    table.add_column("Collection")
    table.add_column("Table")
    table.add_column("Status")

    failed = False
    for collection, name in settings.collection_tables.items():
        try:
            result = client.table(name).select("*", count="exact").limit(0).execute()
            count = result.count if result.count is not None else "?"
            table.add_row(collection, name, f"✅ {count} rows")
        except Exception as e:
            failed = True
            table.add_row(collection, name, f"❌ {e}")

    console.print(table)

    if failed:
        console.print("\n[red]Some collections are unreachable.[/red]")
        raise typer.Exit(1)
    console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from bookshelf import __version__

    console.print(f"Bookshelf version {__version__}")


if __name__ == "__main__":
    app()
