# AgentSync Sync Engine
# One run: prepare checkout, plan, discover and apply

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from agentsync.config.schema import Settings
from agentsync.git.operations import prepare_registry
from agentsync.logger import LogCallback, null_logger
from agentsync.sync.apply import apply_manifest
from agentsync.sync.layout import RegistryLayout, detect_layout
from agentsync.sync.manifest import Manifest, discover_mappings
from agentsync.sync.planner import SyncPlan, plan_scan_roots


@dataclass
class SyncSummary:
    """Outcome of a successful run."""

    checkout_path: Path
    target_count: int
    mapping_count: int
    files_written: int = 0
    dry_run: bool = False
    layout: RegistryLayout = RegistryLayout.TEAM_BASED
    selected_roots: list[str] = field(default_factory=list)


def build_manifest(
    settings: Settings,
    checkout_root: Path,
    logger: LogCallback = null_logger,
) -> tuple[SyncPlan, Manifest, RegistryLayout]:
    """
    Plan scan roots and discover mappings against an existing checkout.

    Returns:
        Tuple of (plan, manifest, layout).
    """
    layout = detect_layout(checkout_root)
    plan = plan_scan_roots(settings, checkout_root, logger)
    manifest = discover_mappings(
        checkout_root,
        plan.selected_roots,
        logger,
        layout=layout,
        strict=settings.strict_scan_roots,
    )
    return plan, manifest, layout


def run_sync(
    settings: Settings,
    logger: Optional[LogCallback] = None,
    *,
    home_root: Optional[Path] = None,
    dry_run: bool = False,
) -> SyncSummary:
    """
    Run one full sync.

    Brings the checkout up to date, picks scan roots, discovers mappings and
    applies them into the home directory. Errors from any stage propagate
    unchanged and stop the run.

    Args:
        settings: Registry settings for this run.
        logger: Logging callback (defaults to discarding lines).
        home_root: Home directory override.
        dry_run: Fetch and plan, but do not write into home.

    Returns:
        SyncSummary of the run.
    """
    if logger is None:
        logger = null_logger

    checkout_root = prepare_registry(settings.remote_url, settings.checkout_path, logger)
    plan, manifest, layout = build_manifest(settings, checkout_root, logger)
    summary = apply_manifest(manifest, checkout_root, logger, home_root=home_root, dry_run=dry_run)

    return SyncSummary(
        checkout_path=checkout_root,
        target_count=summary.target_count,
        mapping_count=summary.mapping_count,
        files_written=summary.files_written,
        dry_run=dry_run,
        layout=layout,
        selected_roots=plan.selected_roots,
    )
