# AgentSync Scan-Root Planner
# Decide which top-level registry folders a run scans

import os
from dataclasses import dataclass, field
from pathlib import Path

from agentsync.config.schema import DEFAULT_SCAN_ROOTS, ScanMode, Settings
from agentsync.exceptions import AgentSyncError
from agentsync.logger import LogCallback, LogLevel
from agentsync.sync.layout import (
    CHECKOUT_ROOT,
    CONTENT_DIR_NAMES,
    RULES_DIR,
    SKILLS_DIR,
    normalize_roots,
    root_candidates,
)
from agentsync.sync.manifest import ScanRootMissingError
from agentsync.sync.teams import discover_teams
from agentsync.utils.paths import is_within


def _format_roots(roots: list[str]) -> str:
    return ", ".join(roots) if roots else "(none)"


class NoUsableScanRootsError(AgentSyncError):
    """Planning ended with nothing to scan."""

    def __init__(
        self,
        checkout_path: Path,
        mode: ScanMode,
        configured_roots: list[str],
        discovered_roots: list[str],
        missing_roots: list[str],
    ):
        self.checkout_path = checkout_path
        self.mode = mode
        self.configured_roots = configured_roots
        self.discovered_roots = discovered_roots
        self.missing_roots = missing_roots
        message = "\n".join(
            [
                "No usable team roots were found in the synced registry checkout.",
                f"Checkout: {checkout_path}",
                f"Mode: {ScanMode(mode).value}",
                f"Configured roots: {_format_roots(configured_roots)}",
                f"Discovered roots: {_format_roots(discovered_roots)}",
            ]
        )
        super().__init__(
            message,
            checkout_path=str(checkout_path),
            mode=ScanMode(mode).value,
            configured_roots=configured_roots,
            discovered_roots=discovered_roots,
            missing_roots=missing_roots,
        )


@dataclass
class SyncPlan:
    """Scan roots chosen for one run."""

    mode: ScanMode
    selected_roots: list[str]
    missing_configured_roots: list[str] = field(default_factory=list)
    discovered_roots: list[str] = field(default_factory=list)

    @property
    def uses_checkout_root(self) -> bool:
        return self.selected_roots == [CHECKOUT_ROOT]


def is_checkout_relative(root: str) -> bool:
    """Check that root names a folder inside the checkout (no absolute path, no "..")."""
    path = Path(root)
    return not path.is_absolute() and ".." not in path.parts


def resolve_root(root: str, checkout_root: Path) -> str | None:
    """Return the first existing folder name for root (aliases included), or None.

    Roots that point outside the checkout, directly or through a symlink, never resolve.
    """
    if not is_checkout_relative(root):
        return None
    base = checkout_root.resolve()
    for candidate in root_candidates(root):
        path = checkout_root / candidate
        if path.exists() and is_within(path.resolve(), base):
            return candidate
    return None


def has_top_level_content(checkout_root: Path) -> bool:
    """Check for skills/ or rules/ directly under the checkout."""
    return (checkout_root / SKILLS_DIR).exists() or (checkout_root / RULES_DIR).exists()


def has_content_recursively(checkout_root: Path) -> bool:
    """Check whether any visible directory in the checkout is a content directory."""
    for _dirpath, dirnames, _filenames in os.walk(checkout_root):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        if any(d in CONTENT_DIR_NAMES for d in dirnames):
            return True
    return False


def plan_scan_roots(settings: Settings, checkout_root: Path, logger: LogCallback) -> SyncPlan:
    """
    Choose the scan roots for a run.

    In auto mode discovered teams win over configured roots, which win over
    the default. Explicit mode ignores discovered teams. A requested root
    that exists only under its alias name is substituted with a warning.
    When auto mode resolves nothing, a flat checkout (top-level skills/ or
    rules/, or any content directory further down) is scanned as a whole.

    Args:
        settings: Registry settings for the run.
        checkout_root: Registry checkout directory.
        logger: Logging callback.

    Returns:
        SyncPlan with at least one selected root.

    Raises:
        NoUsableScanRootsError: If no root could be selected.
        ScanRootMissingError: If strict_scan_roots is set and a requested root is missing.
    """
    mode = ScanMode(settings.scan_mode)
    discovered_roots = [team.folder_name for team in discover_teams(checkout_root)]
    configured_roots = normalize_roots(settings.scan_roots)

    if mode == ScanMode.AUTO:
        requested = discovered_roots or configured_roots or list(DEFAULT_SCAN_ROOTS)
    else:
        requested = configured_roots or list(DEFAULT_SCAN_ROOTS)

    selected: list[str] = []
    missing: list[str] = []
    for root in requested:
        resolved = resolve_root(root, checkout_root)
        if resolved is None:
            missing.append(root)
            continue
        if resolved != root:
            logger(LogLevel.WARN, f"Using compatibility root alias '{root}' -> '{resolved}'")
        selected.append(resolved)
    selected = normalize_roots(selected)

    if missing and settings.strict_scan_roots:
        raise ScanRootMissingError(checkout_root / missing[0])

    if mode == ScanMode.AUTO and not selected:
        if has_top_level_content(checkout_root):
            selected = [CHECKOUT_ROOT]
        elif has_content_recursively(checkout_root):
            logger(
                LogLevel.WARN,
                "No team roots detected. Falling back to recursive root scan for legacy/non-standard registry layout.",
            )
            selected = [CHECKOUT_ROOT]

    if not selected:
        raise NoUsableScanRootsError(
            checkout_path=checkout_root,
            mode=mode,
            configured_roots=configured_roots,
            discovered_roots=discovered_roots,
            missing_roots=missing,
        )

    label = "Auto" if mode == ScanMode.AUTO else "Explicit"
    logger(LogLevel.INFO, f"{label} scan mode selected roots: {', '.join(selected)}")
    if missing:
        logger(LogLevel.WARN, f"Skipping missing scan roots: {', '.join(missing)}")

    return SyncPlan(
        mode=mode,
        selected_roots=selected,
        missing_configured_roots=missing,
        discovered_roots=discovered_roots,
    )
