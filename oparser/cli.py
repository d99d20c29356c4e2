"""
CLI entry point for oparser.
"""

import json
import logging
from dataclasses import replace
from datetime import datetime
from functools import wraps
from pathlib import Path

import typer
from rich.console import Console

from oparser.artifacts import (
    CONFIG_ARTIFACTS,
    read_declaration_list,
    read_level1_list,
    write_configs,
    write_lists,
)
from oparser.document import Document
from oparser.exceptions import (
    EXIT_GENERIC,
    OparserError,
    WorkspaceNotFoundError,
    format_error_for_cli,
)
from oparser.extract import extract_from_entries, run_pipeline
from oparser.models import APPLY_ORDER, REMOVAL_ORDER, InterfaceSpec, ObjectKind
from oparser.util.config import load_settings
from oparser.util.files import ensure_dir, hostname_from_path, sha256_file, write_text
from oparser.util.logging import configure_logging
from oparser.util.progress import operation_status, print_stage_counts
from oparser.workspace import Workspace

app = typer.Typer(
    name="oparser",
    help="Extract the L3VPN overlay configuration of a Bundle-Ether interface "
    "from an IOS-XR formal configuration",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def handle_errors(func):
    """Decorator to handle exceptions in CLI commands with nice formatting."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except OparserError as e:
            console.print(format_error_for_cli(e))
            raise typer.Exit(e.exit_code)
        except Exception as e:
            console.print(f"[red]Unexpected error:[/red] {str(e)}")
            logger.exception("Unexpected error")
            raise typer.Exit(EXIT_GENERIC)

    return wrapper


def require_workspace() -> Workspace:
    workspace = Workspace(Path.cwd())
    if not workspace.config_file.exists():
        raise WorkspaceNotFoundError(str(workspace.root))
    return workspace


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-entry progress logs"),
):
    """Extract overlay configuration from MPLS-PE routers running IOS-XR."""
    configure_logging(verbose)


@app.command()
def init(workspace_dir: str = typer.Argument(..., help="Workspace directory to initialize")):
    """Initialize a new oparser workspace."""
    console.print(f"[bold blue]Initializing workspace:[/bold blue] {workspace_dir}")

    workspace = Workspace(Path(workspace_dir))
    workspace.initialize()

    console.print(f"[green]✓ Created directory structure in {workspace_dir}[/green]")
    console.print("[green]✓ Wrote configuration to oparser.yaml[/green]")

    console.print("\n[dim]Next steps:[/dim]")
    console.print(f"  cd {workspace_dir}")
    console.print("  oparser extract --file <router>.cfg --interface Bundle-Ether7")


@app.command()
@handle_errors
def extract(
    file: str = typer.Option(
        ..., "--file", "-f", help="MPLS-PE configuration file in 'formal' format"
    ),
    interface: str = typer.Option(
        ...,
        "--interface",
        "-i",
        help="Bundle-Ether7 for every sub-interface of bundle 7, "
        "Bundle-Ether7.100 for sub-interface 100 only",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Match VRF and interface names as whole tokens"
    ),
):
    """Extract the overlay configuration of a Bundle-Ether interface."""
    source_path = Path(file)
    document = Document.load(source_path)
    spec = InterfaceSpec.parse(interface)

    workspace = require_workspace()
    settings = load_settings(workspace.root)
    if strict:
        settings = replace(settings, strict=True)

    run = workspace.create_run(hostname_from_path(source_path))

    try:
        with operation_status(f"Extracting overlay configuration for {spec.name}", console):
            result = run_pipeline(document, spec, settings)
            write_lists(run.lst_dir, result.entries, result.resolution)
            write_configs(run.cfg_dir, result)

            metadata = {
                "timestamp": datetime.now().isoformat(),
                "run": run.name,
                "interface": spec.name,
                "variant": spec.variant.value,
                "original_file": str(source_path.absolute()),
                "sha256": sha256_file(source_path),
                "strict": settings.strict,
                "entries": len(result.entries),
            }
            write_text(run.meta_dir / "extract.json", json.dumps(metadata, indent=2))
    except (Exception, KeyboardInterrupt):
        for directory in workspace.remove_run(run):
            console.print(f"[dim]Deleting: {directory} ...[/dim]")
        raise

    if not result.has_entries:
        console.print(f"[yellow]⚠ No interface with a VRF matched {spec.name}[/yellow]")

    print_stage_counts(result.counts(), console)
    console.print(f"[green]✓ Lists written to lsts/{run.name}/[/green]")
    console.print(f"[green]✓ Configurations written to cfgs/{run.name}/[/green]")
    console.print(f"[green]✓ Metadata saved to runs/{run.name}/extract.json[/green]")


@app.command()
@handle_errors
def replay(
    run_name: str = typer.Option(..., "--run", help="Run directory name (<hostname>_<epoch>)"),
    file: str = typer.Option(..., "--file", "-f", help="MPLS-PE configuration file"),
):
    """Re-extract configurations from the lists of an earlier run."""
    document = Document.load(Path(file))
    workspace = require_workspace()
    run = workspace.find_run(run_name)
    settings = load_settings(workspace.root)

    entries = read_level1_list(run.lst_dir)
    declarations = {kind: read_declaration_list(run.lst_dir, kind) for kind in ObjectKind}

    with operation_status(f"Replaying run {run.name}", console):
        result = extract_from_entries(document, entries, declarations, settings)
        ensure_dir(run.cfg_dir)
        write_configs(run.cfg_dir, result)

    print_stage_counts(result.counts(), console)
    console.print(f"[green]✓ Configurations written to cfgs/{run.name}/[/green]")


@app.command()
def order(
    removal: bool = typer.Option(False, "--removal", help="Show the removal order instead"),
):
    """Show the order in which to apply (or remove) the extracted artifacts."""
    kinds = REMOVAL_ORDER if removal else APPLY_ORDER
    title = "Removal order" if removal else "Apply order"

    console.print(f"[bold]{title}:[/bold]")
    for position, kind in enumerate(kinds, start=1):
        console.print(f"  {position}. {kind.value:<14} {CONFIG_ARTIFACTS[kind]}")


if __name__ == "__main__":
    app()
