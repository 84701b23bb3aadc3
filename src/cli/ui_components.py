"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import BlobFile, ConversionFailure


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("filekit", style="bold cyan")
    subtitle = Text("base64 • hex • localización", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_artifact_table(artifact: BlobFile) -> Table:
    """Tabla con los metadatos de un `BlobFile` reconstruido."""

    table = Table(title="File")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("name", artifact.name)
    table.add_row("type", artifact.media_type)
    table.add_row("size", f"{artifact.size} bytes")
    table.add_row("lastModified", str(artifact.last_modified))
    return table


def build_failure_panel(failure: ConversionFailure) -> Panel:
    """Panel para un fallo de conversión directa."""

    body = Text()
    body.append(f"{failure.kind.value}\n", style="bold")
    if failure.message:
        body.append(failure.message)
    return Panel(body, title=Text("Conversion failed", style="bold red"), border_style="red")
