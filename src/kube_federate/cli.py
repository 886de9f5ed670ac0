"""Command line entry point for kube-federate."""
from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer
import yaml
from rich import print as rich_print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import ClusterContext, load_validation
from .errors import FederateError
from .kube import DiscoveryAPI
from .operations.lookup import ResourceOperations
from .utils import group_qualified_name, resource_key

app = typer.Typer(help="Resolve cluster API resources and generate CustomResourceDefinitions for them.")


class OutputFormat(str, Enum):
    yaml = "yaml"
    json = "json"


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, log_time_format="%X")],
    )


def _create_api(context: ClusterContext) -> DiscoveryAPI:
    return DiscoveryAPI(context)


def _build_context(kube_context: Optional[str], kubeconfig: Optional[Path], insecure: bool) -> ClusterContext:
    return ClusterContext(
        context=kube_context,
        kubeconfig=str(kubeconfig) if kubeconfig else None,
        verify_ssl=not insecure,
    )


def _fail(exc: Exception) -> NoReturn:
    rich_print(f"[red]{exc}[/red]")
    raise typer.Exit(code=1)


def _serialize(body: Dict[str, Any], output_format: OutputFormat) -> str:
    if output_format is OutputFormat.json:
        return json.dumps(body, indent=2) + "\n"
    return yaml.safe_dump(body, sort_keys=False)


@app.command("lookup")
def lookup(
    key: str = typer.Argument(..., help="Plural, singular, kind or short name of the resource."),
    kube_context: Optional[str] = typer.Option(None, "--context", help="Override kubeconfig context."),
    kubeconfig: Optional[Path] = typer.Option(None, help="Path to kubeconfig file."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Show the API resource a name resolves to."""

    _configure_logging(verbose)
    context = _build_context(kube_context, kubeconfig, insecure)
    try:
        resource_ops = ResourceOperations(_create_api(context), context)
        resource = resource_ops.lookup(key)
    except FederateError as exc:
        _fail(exc)

    table = Table(title=f"API resource for {key!r}")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("Name", group_qualified_name(resource))
    table.add_row("Key", resource_key(resource))
    table.add_row("Kind", resource.kind)
    table.add_row("Group", resource.group)
    table.add_row("Version", resource.version)
    table.add_row("Namespaced", str(resource.namespaced).lower())
    table.add_row("Short names", ", ".join(resource.short_names))
    rich_print(table)


@app.command("api-resources")
def api_resources(
    kube_context: Optional[str] = typer.Option(None, "--context", help="Override kubeconfig context."),
    kubeconfig: Optional[Path] = typer.Option(None, help="Path to kubeconfig file."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """List the resources the cluster serves at their preferred versions."""

    _configure_logging(verbose)
    context = _build_context(kube_context, kubeconfig, insecure)
    try:
        resource_ops = ResourceOperations(_create_api(context), context)
        resources = resource_ops.list_resources()
    except FederateError as exc:
        _fail(exc)

    table = Table(title="Server preferred resources")
    table.add_column("Resource")
    table.add_column("Short names")
    table.add_column("Namespaced")
    table.add_column("Kind")
    for resource in resources:
        table.add_row(
            resource_key(resource),
            ",".join(resource.short_names),
            str(resource.namespaced).lower(),
            resource.kind,
        )
    rich_print(table)


@app.command("crd")
def crd(
    key: str = typer.Argument(..., help="Plural, singular, kind or short name of the resource."),
    validation_path: Optional[Path] = typer.Option(
        None, "--validation", help="YAML or JSON file holding the CRD validation block."
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.yaml, "--format", help="Serialization format."),
    output: Optional[Path] = typer.Option(None, "--output", help="Write the CRD to this file instead of stdout."),
    kube_context: Optional[str] = typer.Option(None, "--context", help="Override kubeconfig context."),
    kubeconfig: Optional[Path] = typer.Option(None, help="Path to kubeconfig file."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Generate a CustomResourceDefinition for the resource a name resolves to."""

    _configure_logging(verbose)
    context = _build_context(kube_context, kubeconfig, insecure)
    validation = load_validation(validation_path) if validation_path else None
    try:
        resource_ops = ResourceOperations(_create_api(context), context)
        definition = resource_ops.crd_for(key, validation)
    except FederateError as exc:
        _fail(exc)

    serialized = _serialize(definition.to_resource().to_dict(), output_format)
    if output is None:
        typer.echo(serialized, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(serialized)
    rich_print(f"[green]Saved CustomResourceDefinition {definition.name} to {output}.[/green]")
