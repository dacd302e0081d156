"""CLI tool for Helpbox"""

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import get_settings
from .errors import HelpboxError
from .observability import setup_logging

app = typer.Typer(
    name="helpbox",
    help="Helpbox - browse a folder of help documents as a threaded mailbox",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    doc_dir: Path | None = typer.Option(None, "--doc-dir", "-d", help="Help documents folder"),
):
    settings = get_settings()
    if doc_dir is not None:
        settings.help_doc_dir = doc_dir
    setup_logging(log_level="DEBUG" if verbose else settings.log_level)


@app.command()
def doctor():
    """Run environment self-checks"""
    from .catalog import DocumentCatalog

    settings = get_settings()
    docdir = settings.help_doc_dir

    console.print("\n[bold]Helpbox Doctor[/bold]\n")

    table = Table(show_header=True)
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    all_passed = True

    # 1. Help folder
    dir_ok = docdir.is_dir()
    table.add_row(
        "Help Folder",
        "[green]✓[/green]" if dir_ok else "[red]✗[/red]",
        str(docdir),
    )
    if not dir_ok:
        all_passed = False

    # 2. Readable
    read_ok = dir_ok and os.access(docdir, os.R_OK | os.X_OK)
    table.add_row(
        "Readable",
        "[green]✓[/green]" if read_ok else "[red]✗[/red]",
        "" if read_ok else "Permission denied",
    )
    if not read_ok:
        all_passed = False

    # 3. Documents
    count = 0
    if read_ok:
        try:
            count = len(DocumentCatalog(settings).ensure(os.path.realpath(docdir)))
        except HelpboxError as e:
            console.print(f"[red]{e}[/red]")
    table.add_row(
        "Help Documents",
        "[green]✓[/green]" if count else "[red]✗[/red]",
        f"{count} documents" if count else "None found",
    )
    if not count:
        all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed![/green]\n")
    else:
        console.print("\n[red]✗ Some checks failed.[/red]\n")
        raise typer.Exit(code=1)


@app.command()
def index():
    """Build the document catalog and show statistics"""
    from .catalog import DocumentCatalog

    settings = get_settings()
    catalog = DocumentCatalog(settings)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(f"Scanning {settings.help_doc_dir}...", total=None)
        try:
            catalog.ensure(os.path.realpath(settings.help_doc_dir))
        except HelpboxError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(code=1)

    stats = catalog.get_stats()

    console.print("\n[bold]Catalog Statistics[/bold]\n")

    table = Table(show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Total Documents", str(stats["total_documents"]))
    table.add_row("Threaded", str(stats["threaded"]))
    for role, count in sorted(stats["roles"].items()):
        table.add_row(f"  {role}", str(count))
    table.add_row("Fingerprint", stats["fingerprint"])

    console.print(table)


def _open_mailbox(path: str | None):
    from .mailbox import HelpMailbox

    mailbox = HelpMailbox(settings=get_settings())
    try:
        mailbox.open(path)
    except HelpboxError as e:
        console.print(f"[red]Error opening mailbox: {e}[/red]")
        raise typer.Exit(code=1)
    return mailbox


@app.command(name="list")
def list_cmd(
    path: str | None = typer.Argument(None, help="help:// address of the active document"),
):
    """Show the help documents as a threaded message index"""
    mailbox = _open_mailbox(path)

    table = Table(show_header=True)
    table.add_column("#", justify="right")
    table.add_column("", width=1)
    table.add_column("Subject")
    table.add_column("Path", style="dim")

    for msg, depth in mailbox.threads():
        marker = "[bold]N[/bold]" if not msg.read else ""
        tree = ("  " * (depth - 1) + "└─>") if depth else ""
        table.add_row(str(msg.index + 1), marker, f"{tree}{escape(msg.subject)}", escape(msg.relative_path))

    console.print(table)


@app.command()
def show(
    path: str = typer.Argument(..., help="help:// address of the document"),
    raw: bool = typer.Option(False, "--raw", help="Print the file including its header"),
):
    """Print a help document"""
    mailbox = _open_mailbox(path)
    active = mailbox.active

    try:
        message = mailbox.open_message(active.index)
    except HelpboxError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    finally:
        mailbox.close()

    console.print(f"[bold]{escape(message.document.subject)}[/bold]")
    console.print(f"[dim]{escape(message.document.relative_path)}[/dim]\n")
    if raw:
        console.print(message.text, markup=False, highlight=False)
    else:
        console.print(Markdown(message.body))


if __name__ == "__main__":
    app()
