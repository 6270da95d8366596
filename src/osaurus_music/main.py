from __future__ import annotations

from pathlib import Path
import json
import typer
from rich.console import Console
from rich.table import Table

from .config.loader import load_plugin_config
from .config.models import PluginConfig
from .dispatcher import TOOL_CAPABILITY
from .plugin import PluginContext
from .tools.permissions import PermissionGate
from .util.log import setup_logging


app = typer.Typer(add_completion=False, help="osaurus-music: Apple Music tools for the Osaurus plugin host.")
console = Console()


def _resolve_cwd(cwd: Path | None) -> Path:
    cwd = Path(str(cwd or Path.cwd())).expanduser()
    if not cwd.is_absolute():
        cwd = (Path.cwd() / cwd).resolve()
    else:
        cwd = cwd.resolve()
    if not cwd.is_dir():
        raise typer.BadParameter(f"--cwd must be an existing directory, got: {cwd}")
    return cwd


def _load_config(config: Path | None, cwd: Path | None, log_level: str | None) -> PluginConfig:
    try:
        cfg = load_plugin_config(cwd=_resolve_cwd(cwd), explicit_path=config)
    except FileNotFoundError as e:
        raise typer.BadParameter(str(e))
    setup_logging(log_level or cfg.log_level)
    return cfg


@app.command()
def manifest(
    config: Path = typer.Option(None, "--config", help="Plugin config (JSON or YAML)."),
    cwd: Path = typer.Option(None, "--cwd", help="Directory searched for project config. Defaults to current directory."),
    log_level: str = typer.Option(None, "--log-level", help="Log level (DEBUG/INFO/WARNING/ERROR)."),
):
    """Print the capability manifest generated from the tool registry."""
    ctx = PluginContext.from_config(_load_config(config, cwd, log_level))
    typer.echo(ctx.manifest())


@app.command()
def tools(
    config: Path = typer.Option(None, "--config", help="Plugin config (JSON or YAML)."),
    cwd: Path = typer.Option(None, "--cwd", help="Directory searched for project config. Defaults to current directory."),
    log_level: str = typer.Option(None, "--log-level", help="Log level (DEBUG/INFO/WARNING/ERROR)."),
):
    """List registered tools with their permission policy."""
    ctx = PluginContext.from_config(_load_config(config, cwd, log_level))
    table = Table(title="Apple Music tools")
    table.add_column("id", style="bold", no_wrap=True)
    table.add_column("policy")
    table.add_column("needs Music")
    table.add_column("description")
    for spec in ctx.tools.list_specs():
        policy = ctx.permissions.decide(spec.name, spec.permission_policy)
        table.add_row(
            spec.name,
            f"[yellow]{policy}[/yellow]" if policy == "ask" else policy,
            "yes" if spec.requires_music_running else "no",
            spec.description,
        )
    console.print(table)


@app.command()
def invoke(
    tool_id: str = typer.Argument(..., help="Tool id, e.g. play or search_songs."),
    payload: str = typer.Option("{}", "--payload", "-p", help="JSON arguments for the tool."),
    capability_type: str = typer.Option(TOOL_CAPABILITY, "--type", help="Capability type (only 'tool' is supported)."),
    yes: bool = typer.Option(False, "--yes", help="Auto-approve tools whose policy is 'ask'."),
    config: Path = typer.Option(None, "--config", help="Plugin config (JSON or YAML)."),
    cwd: Path = typer.Option(None, "--cwd", help="Directory searched for project config. Defaults to current directory."),
    log_level: str = typer.Option(None, "--log-level", help="Log level (DEBUG/INFO/WARNING/ERROR)."),
):
    """Invoke one tool through the dispatcher and print its JSON result."""
    ctx = PluginContext.from_config(_load_config(config, cwd, log_level))
    try:
        tool = ctx.tools.get_optional(tool_id) if capability_type == TOOL_CAPABILITY else None
        if tool is not None:
            gate = PermissionGate(ctx.permissions, auto_approve=yes)
            if not gate.decide(tool.spec, payload):
                typer.echo(json.dumps({"error": f"Denied by user: {tool_id}"}))
                raise typer.Exit(code=1)
        typer.echo(ctx.invoke(capability_type, tool_id, payload))
    finally:
        ctx.close()


@app.command()
def status(
    config: Path = typer.Option(None, "--config", help="Plugin config (JSON or YAML)."),
    cwd: Path = typer.Option(None, "--cwd", help="Directory searched for project config. Defaults to current directory."),
    log_level: str = typer.Option(None, "--log-level", help="Log level (DEBUG/INFO/WARNING/ERROR)."),
):
    """Report whether the Music app is running."""
    cfg = _load_config(config, cwd, log_level)
    ctx = PluginContext.from_config(cfg)
    try:
        running = ctx.runner.is_music_running()
        typer.echo(json.dumps({"app": cfg.app_name, "running": running}))
    finally:
        ctx.close()


if __name__ == "__main__":
    app()
