"""Click-based CLI for AgentSync - team registry sync for agent skills and rules."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from agentsync import __version__
from agentsync.config import (
    AgentSyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    migrate_scan_roots,
    save_config,
    update_registry_setting,
    validate_config_file,
)
from agentsync.exceptions import AgentSyncError
from agentsync.git import probe_remote_access, run_setup_check, suggest_auth_fix
from agentsync.logger import SyncLogger, null_logger
from agentsync.output import Console, create_console
from agentsync.sync import build_manifest, discover_teams, run_sync
from agentsync.sync.lock import sync_lock
from agentsync.utils.paths import expand_path


def _make_console(config: Optional[AgentSyncConfig] = None, verbose: bool = False) -> Console:
    if config is None:
        return create_console(verbose=verbose)
    return create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)


def _make_logger(console: Console, config: AgentSyncConfig) -> SyncLogger:
    log_file = expand_path(config.output.log_file) if config.output.log_file else None
    return SyncLogger(console.rich, verbose=console.verbose, log_file=log_file)


def _load_or_exit(console: Console) -> AgentSyncConfig:
    """Load the config file or exit with status 1."""
    try:
        return load_config()
    except FileNotFoundError as e:
        console.print_error(str(e))
    except ValidationError as e:
        console.print_error(f"Invalid configuration: {e.error_count()} error(s)")
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            console.print(f"  [red]•[/red] {loc}: {error['msg']}")
    sys.exit(1)


def _existing_checkout_or_exit(console: Console, config: AgentSyncConfig) -> Path:
    checkout = config.registry.checkout
    if not checkout.exists():
        console.print_error(f"No registry checkout at {checkout}. Run 'agentsync sync' first.")
        sys.exit(1)
    return checkout


@click.group()
@click.version_option(version=__version__, prog_name="agentsync")
def cli() -> None:
    """AgentSync - keep agent skills and rules in sync with a team registry.

    Pulls a GitHub registry repository and merges its skills/ and rules/
    folders into the agent directories under your home.

    \b
    Skills: ~/.agents/skills, ~/.claude/skills, ~/.cursor/skills, ~/.config/opencode/skills
    Rules:  ~/.claude/rules, ~/.cursor/rules
    """
    pass


@cli.command()
@click.option("--dry-run", "-n", is_flag=True, help="Fetch and plan without writing into home")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.option(
    "--probe-auth/--no-probe-auth",
    default=False,
    help="Check remote access before syncing and suggest a credentials fix",
)
def sync(dry_run: bool, verbose: bool, probe_auth: bool) -> None:
    """Pull the registry and merge its skills and rules into home."""
    console = _make_console(verbose=verbose)
    config = _load_or_exit(console)
    console = _make_console(config, verbose=verbose)

    if not config.registry.remote_url.strip():
        console.print_error("No remote configured. Run: agentsync config set remote_url <github-url>")
        sys.exit(1)

    settings, migrated = migrate_scan_roots(config.registry)
    if migrated:
        config = config.model_copy(update={"registry": settings})
        save_config(config)
        console.print_info(f"Updated scan roots to: {', '.join(settings.scan_roots)}")

    if probe_auth:
        probe = probe_remote_access(settings.remote_url)
        if probe.ok is False and probe.auth_error:
            console.print_error("Git credentials are missing or expired for this remote.")
            console.print(f"  Run: [cyan]{suggest_auth_fix()}[/cyan]")
            sys.exit(1)

    logger = _make_logger(console, config)
    try:
        with sync_lock(settings.checkout_path):
            summary = run_sync(settings, logger, dry_run=dry_run)
    except AgentSyncError as e:
        console.print_agentsync_error(e)
        sys.exit(1)

    console.print_sync_summary(summary)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the manifest as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def plan(as_json: bool, verbose: bool) -> None:
    """Show what a sync would map, using the existing checkout.

    Nothing is fetched and nothing is written.
    """
    console = _make_console(verbose=verbose)
    config = _load_or_exit(console)
    console = _make_console(config, verbose=verbose)
    checkout = _existing_checkout_or_exit(console, config)

    logger = null_logger if as_json else _make_logger(console, config)
    try:
        sync_plan, manifest, layout = build_manifest(config.registry, checkout, logger)
    except AgentSyncError as e:
        console.print_agentsync_error(e)
        sys.exit(1)

    if as_json:
        data = {
            "mode": sync_plan.mode.value,
            "layout": layout.value,
            "selected_roots": sync_plan.selected_roots,
            "missing_configured_roots": sync_plan.missing_configured_roots,
            "discovered_roots": sync_plan.discovered_roots,
            "manifest": manifest.to_dict(),
        }
        click.echo(json.dumps(data, indent=2))
        return

    console.print_plan(sync_plan)
    console.print_manifest(manifest)


@cli.command()
def teams() -> None:
    """List teams found in the registry checkout."""
    console = _make_console()
    config = _load_or_exit(console)
    console = _make_console(config)
    checkout = _existing_checkout_or_exit(console, config)

    console.print_teams(discover_teams(checkout))


@cli.command()
def check() -> None:
    """Diagnose remote, credentials and SSH setup."""
    console = _make_console()
    config = _load_or_exit(console)
    console = _make_console(config)

    result = run_setup_check(config.registry.remote_url)
    console.print_setup_check(result)
    if not result.passed:
        sys.exit(1)


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Manage the AgentSync configuration file.

    \b
    Location: ~/.config/agentsync/config.yaml
    Override with the AGENTSYNC_CONFIG environment variable.
    """
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
def config_init(force: bool) -> None:
    """Create a configuration file with defaults."""
    console = _make_console()
    config_path = get_config_path()

    if force and config_path.exists():
        config_path.unlink()

    path, created = ensure_config_exists(config_path)
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_warning(f"Configuration already exists: {path} (use --force to overwrite)")


@config.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    console = _make_console()
    cfg = _load_or_exit(console)
    console = _make_console(cfg)

    registry = cfg.registry
    console.print_config_summary(str(get_config_path()), registry.remote_url, str(registry.checkout))
    console.print(f"Scan mode: {registry.scan_mode.value}")
    console.print(f"Scan roots: {', '.join(registry.scan_roots) or '(none)'}")
    console.print(f"Strict scan roots: {registry.strict_scan_roots}")
    console.print(
        f"Auto sync: {'on' if registry.auto_sync_enabled else 'off'} "
        f"(every {registry.auto_sync_interval_minutes} min)"
    )


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a registry setting, e.g. remote_url or scan_roots (comma-separated)."""
    console = _make_console()
    try:
        update_registry_setting(key, value)
    except KeyError as e:
        console.print_error(str(e.args[0]))
        sys.exit(1)
    except FileNotFoundError as e:
        console.print_error(str(e))
        sys.exit(1)
    except ValidationError as e:
        for error in e.errors():
            console.print_error(f"{key}: {error['msg']}")
        sys.exit(1)

    console.print_success(f"Set registry.{key}")


@config.command("validate")
def config_validate() -> None:
    """Validate the configuration file."""
    console = _make_console()
    config_path = get_config_path()

    is_valid, errors = validate_config_file(config_path)
    if is_valid:
        console.print_success(f"Configuration is valid: {config_path}")
        return

    console.print_error(f"Configuration has problems: {config_path}")
    for error in errors:
        console.print(f"  [red]•[/red] {error}")
    sys.exit(1)


@config.command("path")
def config_path_cmd() -> None:
    """Print the configuration file path."""
    click.echo(str(get_config_path()))


if __name__ == "__main__":
    cli()
