"""Main CLI entry point for capability sync."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cluster_capabilities.exceptions import CapabilitiesError
from cluster_capabilities.logging_config import get_logger, setup_logging
from cluster_capabilities.models.capabilities import Capabilities

app = typer.Typer(
    name="cluster-caps",
    help="Derive and sync Kubernetes capabilities of managed clusters",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def print_error(error: CapabilitiesError, label: str = "Error") -> None:
    console.print(f"[red]{label}:[/red] {error.message}")
    if error.details:
        console.print(f"\n{error.details}")


def capabilities_table(title: str, capabilities: Capabilities) -> Table:
    """Render capabilities as a two-column table."""
    lb = capabilities.load_balancer
    table = Table(title=title)
    table.add_column("Capability", style="cyan")
    table.add_column("Value", style="magenta")

    if lb.enabled:
        protocols = ", ".join(lb.protocols_supported) or "-"
        health = "health check" if lb.health_check_supported else "no health check"
        table.add_row("Load balancer", f"{lb.provider} ({protocols}; {health})")
    else:
        table.add_row("Load balancer", "[dim]disabled[/dim]")

    if not capabilities.ingress_controllers:
        table.add_row("Ingress", "[dim]none[/dim]")
    for ingress in capabilities.ingress_controllers:
        if ingress.custom_default_backend_disabled is None:
            backend = "custom default backend unknown"
        elif ingress.custom_default_backend_disabled:
            backend = "custom default backend disabled"
        else:
            backend = "custom default backend allowed"
        table.add_row("Ingress", f"{ingress.provider or '-'} ({backend})")

    table.add_row("Node port range", capabilities.node_port_range or "[dim]unset[/dim]")
    table.add_row("Node pool scaling", "Yes" if capabilities.node_pool_scaling_supported else "No")
    taints = capabilities.taint_support
    table.add_row("Taint support", "unset" if taints is None else ("Yes" if taints else "No"))
    return table


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: str | None = typer.Option(None, "--log-file", help="Path to log file"),
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="Path to settings file"
    ),
):
    """Global options for all commands."""
    from cluster_capabilities.settings import SettingsManager, SyncSettings

    manager = SettingsManager(config_path)
    settings_error = None
    try:
        settings = manager.load()
    except CapabilitiesError as e:
        # config-set must still be able to repair the file
        settings_error = e
        settings = SyncSettings()

    log_target = log_file or settings.log_file
    setup_logging(
        level=settings.log_level,
        log_file=Path(log_target).expanduser() if log_target else None,
        verbose=verbose,
    )
    if settings_error:
        logger.warning(f"Ignoring invalid settings file {manager.path}: {settings_error.message}")
    else:
        logger.debug(f"Logging initialized, settings from {manager.path}")
    ctx.obj = {"settings": settings, "settings_error": settings_error, "settings_manager": manager}


def require_settings(ctx: typer.Context):
    """Return the loaded settings, exiting if the settings file is invalid."""
    error = ctx.obj["settings_error"]
    if error:
        print_error(error, "Configuration Error")
        console.print("\nFix it with: cluster-caps config-set <key> <value>")
        raise typer.Exit(code=1)
    return ctx.obj["settings"]


@app.command()
def version() -> None:
    """Show version information."""
    from cluster_capabilities import __version__

    typer.echo(f"cluster-caps version {__version__}")


@app.command()
def sync(
    ctx: typer.Context,
    cluster_name: str = typer.Argument(..., help="Name of the management cluster resource"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Resolve capabilities without updating the cluster"
    ),
    kubeconfig: str | None = typer.Option(
        None, "--kubeconfig", help="Kubeconfig of the management cluster"
    ),
) -> None:
    """
    Resolve a cluster's capabilities and write them to its status.

    The update is skipped when the stored capabilities already match.
    Deleting and imported clusters are left alone.

    Examples:
        # Sync one cluster
        cluster-caps sync c-m-abc123

        # Show what would be written
        cluster-caps sync c-m-abc123 --dry-run
    """
    from kubernetes.client.rest import ApiException

    from cluster_capabilities.engine import HttpEngineDriverService, UnconfiguredEngineDriverService
    from cluster_capabilities.handler import build_handler
    from cluster_capabilities.kube import (
        KubeClusterClient,
        KubeKontainerDriverLister,
        KubeNodeLister,
        load_kube_client,
    )

    settings = require_settings(ctx)

    try:
        api = load_kube_client(kubeconfig or settings.kubeconfig)
        cluster_client = KubeClusterClient(api)

        try:
            cluster = cluster_client.get(cluster_name)
        except ApiException as e:
            if e.status == 404:
                console.print(f"[red]Error:[/red] Cluster not found: {cluster_name}")
                raise typer.Exit(code=1)
            raise

        if settings.driver_service_url:
            engine_service = HttpEngineDriverService(settings.driver_service_url)
        else:
            engine_service = UnconfiguredEngineDriverService()

        handler = build_handler(
            cluster_client,
            KubeNodeLister(api),
            KubeKontainerDriverLister(api),
            engine_service,
            node_pool_detection=settings.node_pool_detection,
            dry_run=dry_run,
        )
        result = handler.reconcile(cluster_name, cluster)

    except CapabilitiesError as e:
        logger.error(f"Capability sync failed for {cluster_name}: {e.message}")
        print_error(e)
        raise typer.Exit(code=1)
    except ApiException as e:
        logger.error(f"Kubernetes API error for {cluster_name}: {e.status} {e.reason}")
        console.print(f"[red]Kubernetes API Error:[/red] {e.status} {e.reason}")
        if e.status == 409:
            console.print("\nThe cluster changed while syncing. Run the command again.")
        raise typer.Exit(code=1)

    if result.capabilities is None:
        console.print(
            f"[yellow]Cluster {cluster_name} was skipped[/yellow] (being deleted or imported)"
        )
        return

    console.print(capabilities_table(f"Capabilities: {cluster_name}", result.capabilities))
    if not result.updated:
        console.print("\n[green]✓[/green] Capabilities already up to date")
    elif dry_run:
        console.print("\n[yellow]Dry run:[/yellow] capabilities would be updated")
    else:
        console.print("\n[green]✓[/green] Capabilities updated")


@app.command()
def show(
    ctx: typer.Context,
    cluster_name: str = typer.Argument(..., help="Name of the management cluster resource"),
    output: str = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml"),
    kubeconfig: str | None = typer.Option(
        None, "--kubeconfig", help="Kubeconfig of the management cluster"
    ),
) -> None:
    """Show the capabilities stored in a cluster's status."""
    from kubernetes.client.rest import ApiException

    from cluster_capabilities.kube import KubeClusterClient, load_kube_client

    valid_outputs = ["table", "json", "yaml"]
    if output not in valid_outputs:
        console.print(
            f"[red]Error:[/red] Invalid output '{output}'. "
            f"Must be one of: {', '.join(valid_outputs)}"
        )
        raise typer.Exit(code=1)

    settings = require_settings(ctx)

    try:
        api = load_kube_client(kubeconfig or settings.kubeconfig)
        cluster = KubeClusterClient(api).get(cluster_name)
    except CapabilitiesError as e:
        print_error(e)
        raise typer.Exit(code=1)
    except ApiException as e:
        if e.status == 404:
            console.print(f"[red]Error:[/red] Cluster not found: {cluster_name}")
        else:
            console.print(f"[red]Kubernetes API Error:[/red] {e.status} {e.reason}")
        raise typer.Exit(code=1)

    capabilities = cluster.status.capabilities
    if output == "json":
        from rich.json import JSON

        console.print(JSON.from_data(capabilities.to_resource()))
    elif output == "yaml":
        import yaml

        typer.echo(yaml.safe_dump(capabilities.to_resource(), default_flow_style=False))
    else:
        console.print(capabilities_table(f"Capabilities: {cluster_name}", capabilities))


@app.command()
def config_get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Setting to retrieve"),
) -> None:
    """Show the effective value of a setting."""
    manager = ctx.obj["settings_manager"]

    try:
        value = manager.get(key)
    except CapabilitiesError as e:
        print_error(e)
        raise typer.Exit(code=1)

    console.print(f"[cyan]{key}[/cyan]: {value if value is not None else '(not set)'}")


@app.command()
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Setting to change"),
    value: str = typer.Argument(..., help="New value; 'null' clears the setting"),
) -> None:
    """
    Change a setting in the settings file.

    Examples:
        config-set driver_service_url http://driver-service:8080
        config-set node_pool_detection any
        config-set log_file null
    """
    manager = ctx.obj["settings_manager"]
    parsed_value = None if value.lower() in ["null", "none", "~"] else value

    try:
        settings = manager.set(key, parsed_value)
    except CapabilitiesError as e:
        print_error(e)
        raise typer.Exit(code=1)

    console.print(
        f"[green]✓[/green] Successfully set '{key}' = {getattr(settings, key)} ({manager.path})"
    )
