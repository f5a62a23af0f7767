# AgentSync File Application
# Write manifest mappings into the user's home directory

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agentsync.exceptions import AgentSyncError
from agentsync.logger import LogCallback, LogLevel
from agentsync.sync.layout import ALLOWED_PREFIXES
from agentsync.sync.manifest import Manifest, MappingItem, MappingKind, MappingStrategy
from agentsync.utils.paths import copy_file, is_within, merge_directory, replace_path

# Applying always targets one home directory
TARGET_COUNT = 1


class SourceMissingError(AgentSyncError):
    """A mapping's source is not in the checkout."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Source path from manifest does not exist: {path}", path=str(path))


class DestinationEscapesHomeError(AgentSyncError):
    """A mapping's destination resolves outside the home directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Destination escapes home directory: {path}", path=str(path))


class DestinationOutsideAllowedScopesError(AgentSyncError):
    """A mapping's destination is in home but not under an agent directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"Destination must be under a supported agent directory. Invalid path: {path}",
            path=str(path),
        )


class UnsupportedStrategyError(AgentSyncError):
    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(f"Unsupported mapping strategy: {strategy}", strategy=strategy)


class UnsupportedKindError(AgentSyncError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported mapping kind: {kind}", kind=kind)


class ApplyFailedError(AgentSyncError):
    """A filesystem operation failed while applying a mapping."""

    def __init__(self, reason: str, *, source: str = "", destination: str = ""):
        self.reason = reason
        self.source = source
        self.destination = destination
        super().__init__(
            f"Failed applying mapping: {reason}",
            source=source,
            destination=destination,
        )


@dataclass
class ApplySummary:
    """Result of applying a manifest."""

    target_count: int
    mapping_count: int
    files_written: int = 0
    dry_run: bool = False


def ensure_destination_allowed(home_root: Path, destination: Path) -> Path:
    """
    Resolve destination and check it stays inside an allowed home folder.

    Symlinks and ".." components are resolved on both sides before comparing.

    Args:
        home_root: Home directory.
        destination: Candidate destination path.

    Returns:
        The resolved destination.

    Raises:
        DestinationEscapesHomeError: If destination is not below home_root.
        DestinationOutsideAllowedScopesError: If destination is not below an allowed prefix.
    """
    home = home_root.resolve()
    resolved = destination.resolve()

    if resolved == home or not is_within(resolved, home):
        raise DestinationEscapesHomeError(resolved)

    relative = resolved.relative_to(home).as_posix()
    if not any(relative == prefix or relative.startswith(f"{prefix}/") for prefix in ALLOWED_PREFIXES):
        raise DestinationOutsideAllowedScopesError(resolved)

    return resolved


def _coerce_strategy(mapping: MappingItem) -> MappingStrategy:
    try:
        return MappingStrategy(mapping.strategy)
    except ValueError:
        raise UnsupportedStrategyError(str(mapping.strategy)) from None


def _coerce_kind(mapping: MappingItem) -> MappingKind:
    try:
        return MappingKind(mapping.kind)
    except ValueError:
        raise UnsupportedKindError(str(mapping.kind)) from None


def apply_mapping(
    mapping: MappingItem,
    checkout_root: Path,
    home_root: Path,
    logger: LogCallback,
    dry_run: bool = False,
) -> int:
    """
    Apply a single mapping.

    Returns:
        Number of files written (0 in dry-run mode).
    """
    source = checkout_root / mapping.source
    if not source.exists():
        raise SourceMissingError(source)

    destination = ensure_destination_allowed(home_root, home_root / mapping.destination)
    strategy = _coerce_strategy(mapping)
    kind = _coerce_kind(mapping)
    label = f"{mapping.source} -> ~/{mapping.destination} [{strategy.value}]"

    if dry_run:
        logger(LogLevel.INFO, f"Would sync {label}")
        return 0

    written = 0
    try:
        if strategy == MappingStrategy.REPLACE:
            replace_path(source, destination)
            written = 1
        elif kind == MappingKind.FILE:
            copy_file(source, destination)
            written = 1
        else:
            written = merge_directory(
                source,
                destination,
                check_destination=lambda path: ensure_destination_allowed(home_root, path),
            )
    except OSError as e:
        raise ApplyFailedError(str(e), source=mapping.source, destination=mapping.destination) from e

    logger(LogLevel.INFO, f"Synced {label}")
    return written


def apply_manifest(
    manifest: Manifest,
    checkout_root: Path,
    logger: LogCallback,
    home_root: Optional[Path] = None,
    dry_run: bool = False,
) -> ApplySummary:
    """
    Apply every mapping of a manifest, in order.

    replace removes the destination and copies the source over it. merge
    overlays source files onto the destination and never deletes files that
    exist only in the destination. The first failing mapping stops the run.

    Args:
        manifest: Mappings to apply.
        checkout_root: Registry checkout directory (sources are relative to it).
        logger: Logging callback.
        home_root: Home directory (defaults to the current user's).
        dry_run: Validate mappings without writing anything.

    Returns:
        ApplySummary for the run.

    Raises:
        SourceMissingError, DestinationEscapesHomeError,
        DestinationOutsideAllowedScopesError, UnsupportedStrategyError,
        UnsupportedKindError, ApplyFailedError.
    """
    if home_root is None:
        home_root = Path.home()

    logger(LogLevel.INFO, f"Applying {len(manifest.mappings)} mappings into global user config")

    files_written = 0
    for mapping in manifest.mappings:
        files_written += apply_mapping(mapping, checkout_root, home_root, logger, dry_run=dry_run)

    return ApplySummary(
        target_count=TARGET_COUNT,
        mapping_count=len(manifest.mappings),
        files_written=files_written,
        dry_run=dry_run,
    )
