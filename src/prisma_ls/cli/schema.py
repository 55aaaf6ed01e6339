"""
Schema inspection commands.

Run the text scanner over a schema file and print what an editor would see.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from prisma_ls.core.blocks import get_blocks
from prisma_ls.core.document import (
    get_all_preview_features_from_generators,
    get_first_datasource_name,
    get_first_datasource_provider,
)
from prisma_ls.core.fields import get_fields_from_current_block
from prisma_ls.core.lines import convert_document_text_to_trimmed_line_array

console = Console()


def _read_lines(schema: Path) -> list[str]:
    if not schema.exists():
        console.print(f"[red]Schema file not found:[/red] {schema}")
        raise typer.Exit(code=1)
    return convert_document_text_to_trimmed_line_array(schema.read_text(encoding="utf-8"))


def outline_command(
    schema: Annotated[Path, typer.Argument(help="Path to a .prisma schema file")],
) -> None:
    """List the blocks found in a schema, including unclosed ones recovered by the scanner."""
    lines = _read_lines(schema)

    table = Table(title=str(schema))
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Lines", style="dim")
    table.add_column("Fields")

    count = 0
    for block in get_blocks(lines):
        count += 1
        table.add_row(
            block.type.value,
            block.name,
            f"{block.range.start.line + 1}-{block.range.end.line + 1}",
            ", ".join(get_fields_from_current_block(lines, block)),
        )

    console.print(table)
    console.print(f"\n[dim]{count} block(s) found[/dim]")


def info_command(
    schema: Annotated[Path, typer.Argument(help="Path to a .prisma schema file")],
) -> None:
    """Show the datasource and preview features declared in a schema."""
    lines = _read_lines(schema)

    preview_features = get_all_preview_features_from_generators(lines)
    console.print(f"Datasource:       {get_first_datasource_name(lines) or '-'}")
    console.print(f"Provider:         {get_first_datasource_provider(lines) or '-'}")
    console.print(f"Preview features: {', '.join(preview_features) if preview_features else '-'}")
