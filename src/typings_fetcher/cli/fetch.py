import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from typings_fetcher.config import load_settings
from typings_fetcher.core.extract import download_dependency_typings
from typings_fetcher.core.installer import YarnInstaller
from typings_fetcher.core.packaging import drop_files_if_needed
from typings_fetcher.core.ports.installer import PackageInstaller
from typings_fetcher.errors import TypingsFetcherError
from typings_fetcher.models import PackagedFiles

console = Console()


def _get_installer() -> PackageInstaller:
    settings = load_settings()
    return YarnInstaller(
        executable=settings.installer,
        timeout=settings.install_timeout,
        max_buffer=settings.max_buffer,
    )


def _render_table(packaged: PackagedFiles) -> None:
    table = Table(show_lines=False)
    table.add_column("path")
    table.add_column("bytes", justify="right")
    for path, entry in packaged.files.items():
        table.add_row(path, str(len(entry["module"]["code"].encode("utf-8"))))
    console.print(table)

    declarations = sum(1 for path in packaged.files if path.endswith(".d.ts"))
    console.print(f"({len(packaged.files)} files, {declarations} declaration files)")
    if packaged.dropped_file_count:
        console.print(f"[yellow]Dropped {packaged.dropped_file_count} file(s) to fit the size limit[/yellow]")


def fetch(
    dep_query: Annotated[str, typer.Argument(help="Dependency query, e.g. lodash@4 or @types/node.")],
    output: Annotated[Path | None, typer.Option(help="Write the JSON envelope to this file.")] = None,
) -> None:
    """Install a dependency in a scratch directory and list its typings."""
    settings = load_settings()
    installer = _get_installer()

    async def _run() -> PackagedFiles:
        files = await download_dependency_typings(dep_query, installer, settings.staging_root)
        return drop_files_if_needed(files, settings.max_response_bytes)

    try:
        packaged = asyncio.run(_run())
    except TypingsFetcherError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    _render_table(packaged)
    if output is not None:
        output.write_text(json.dumps(packaged.as_envelope()), encoding="utf-8")
        console.print(f"[green]Wrote[/green] {output}")
